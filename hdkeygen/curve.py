import logging

from collections import namedtuple
from types import MappingProxyType

from hdkeygen.coin import Curve
from hdkeygen.ecc import N, parse, point_sec, tweak_add
from hdkeygen.ed25519 import keypair_from_seed
from hdkeygen.errors import InvalidDerivedKey, InvalidMasterKey, UnsupportedDerivation
from hdkeygen.helper import hash160, parse256, ser256


logger = logging.getLogger(__name__)

# key_data is the 33-byte record field, private_key/public_key the values
# the signature scheme itself consumes
NodeKeys = namedtuple(
    "NodeKeys", ["private_key_data", "private_key", "public_key_data", "public_key"]
)


class ScalarPathDerivation:
    """secp256k1: child keys are parent scalar + IL mod N, public-only
    derivation of unhardened children is supported."""

    curve = Curve.BITCOIN
    order = N

    def check_private_derivation(self, hardened):
        pass

    def check_public_derivation(self, hardened):
        if hardened:
            raise UnsupportedDerivation(
                "Cannot derive child public keys from hardened keys"
            )

    def node_keys(self, secret):
        private_key_data = b"\x00" + ser256(secret)
        public_key_data = point_sec(secret)
        return NodeKeys(
            private_key_data=private_key_data,
            private_key=private_key_data,
            public_key_data=public_key_data,
            public_key=public_key_data,
        )

    def master_keys(self, il):
        secret = parse256(il)
        # In case IL is 0 or >= N, the master key is invalid
        if secret == 0 or secret >= self.order:
            logger.debug("master secret out of range for %s", self.curve.name)
            raise InvalidMasterKey("The master key is invalid")
        return self.node_keys(secret)

    def child_keys(self, parent, il):
        # the child key is parse256(IL) + kpar (mod n)
        kpar = parse256(parent.private_key.key_data)
        secret = (parse256(il) + kpar) % self.order
        return self.node_keys(secret)

    def fingerprint(self, parent):
        """the private key data is turned back into the public point so both
        records of the child carry the same parent fingerprint"""
        kpar = parse256(parent.private_key.key_data)
        return hash160(point_sec(kpar))[:4]

    def child_public_key_data(self, parent_key_data, il):
        """Returns serP(point(IL) + Kpar)"""
        parent_point = parse(parent_key_data)
        try:
            return tweak_add(parent_point, il)
        except ValueError as e:
            # IL >= N, or the child is the point at infinity
            logger.debug("derived public key is invalid, should proceed to next key")
            raise InvalidDerivedKey(
                "This key is invalid, should proceed to next key"
            ) from e

    def public_fingerprint(self, parent_key_data):
        return hash160(parent_key_data)[:4]


class SeedPathDerivation:
    """ed25519: IL is used directly as the seed of the child keypair,
    only hardened derivation exists."""

    curve = Curve.ED25519

    def check_private_derivation(self, hardened):
        if not hardened:
            raise UnsupportedDerivation("ed25519 only supports hardened keys")

    def check_public_derivation(self, hardened):
        raise UnsupportedDerivation("Unable to derive ed25519 public key chaining")

    def node_keys(self, seed):
        private_key, public = keypair_from_seed(seed)
        # pad to 33 bytes so the layout matches the secp256k1 records
        public_key_data = b"\x00" + public
        return NodeKeys(
            private_key_data=b"\x00" + seed,
            private_key=private_key,
            public_key_data=public_key_data,
            public_key=public_key_data,
        )

    def master_keys(self, il):
        # any 32 bytes are a valid ed25519 seed
        return self.node_keys(il)

    def child_keys(self, parent, il):
        return self.node_keys(il)

    def fingerprint(self, parent):
        return hash160(parent.public_key.public_key)[:4]

    def child_public_key_data(self, parent_key_data, il):
        raise UnsupportedDerivation("Unable to derive ed25519 public key chaining")

    def public_fingerprint(self, parent_key_data):
        raise UnsupportedDerivation("Unable to derive ed25519 public key chaining")


# built once, passed by reference into every HDKeyGenerator
CURVES = MappingProxyType(
    {
        Curve.BITCOIN: ScalarPathDerivation(),
        Curve.ED25519: SeedPathDerivation(),
    }
)
