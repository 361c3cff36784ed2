from enum import Enum

# https://github.com/satoshilabs/slips/blob/master/slip-0010.md
# the curve decides the hmac key of the master node and the derivation rules


class Curve(Enum):
    BITCOIN = "Bitcoin seed"
    ED25519 = "ed25519 seed"

    @property
    def seed(self):
        return self.value


class KeyVersion(Enum):
    # (private version, public version)
    MAINNET = (bytes.fromhex("0488ade4"), bytes.fromhex("0488b21e"))
    TESTNET = (bytes.fromhex("04358394"), bytes.fromhex("043587cf"))

    @property
    def private_key_version(self):
        return self.value[0]

    @property
    def public_key_version(self):
        return self.value[1]


KEY_VERSIONS = {
    "mainnet": KeyVersion.MAINNET,
    "testnet": KeyVersion.TESTNET,
    "signet": KeyVersion.TESTNET,
}

ALL_PRIVATE_VERSIONS = {v.private_key_version for v in KeyVersion}
ALL_PUBLIC_VERSIONS = {v.public_key_version for v in KeyVersion}


class CoinType(Enum):
    # https://github.com/satoshilabs/slips/blob/master/slip-0044.md
    # (curve, coin index, every level hardened)
    BITCOIN = (Curve.BITCOIN, 0, False)
    SEMUX = (Curve.ED25519, 7562605, True)

    @property
    def curve(self):
        return self.value[0]

    @property
    def coin_type(self):
        return self.value[1]

    @property
    def always_hardened(self):
        return self.value[2]
