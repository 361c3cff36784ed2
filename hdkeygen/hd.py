import logging

from hdkeygen.coin import ALL_PRIVATE_VERSIONS, ALL_PUBLIC_VERSIONS, Curve
from hdkeygen.curve import CURVES
from hdkeygen.errors import EncodingFailure, UnsupportedDerivation
from hdkeygen.helper import (
    HARDENED,
    big_endian_to_int,
    byte_to_int,
    child_to_path,
    hash160,
    hmac_sha512,
    int_to_byte,
    is_intable,
    parse256,
    ser256,
    ser32,
)


logger = logging.getLogger(__name__)

MASTER_PATH = "m"
ZERO_FINGERPRINT = b"\x00\x00\x00\x00"


class _Frozen:
    """Fields are set once in __init__, never mutated afterwards."""

    _frozen = False

    def __setattr__(self, name, value):
        if self._frozen:
            raise AttributeError(f"{self.__class__.__name__} is immutable")
        super().__setattr__(name, value)


class _Record(_Frozen):
    def _check_fields(self, version, depth, parent_fingerprint, chain_code, key_data):
        if len(version) != 4:
            raise ValueError(f"version should be 4 bytes: {version.hex()}")
        if depth < 0 or depth > 255:
            raise ValueError(f"depth {depth} does not fit in a byte")
        if len(parent_fingerprint) != 4:
            raise ValueError("parent fingerprint should be 4 bytes")
        if len(chain_code) != 32:
            raise ValueError("chain code should be 32 bytes")
        if len(key_data) != 33:
            raise ValueError("key data should be 33 bytes")

    def raw_serialize(self):
        # version + depth + parent_fingerprint + child number + chain code + key data
        raw = self.version
        # add depth, which is 1 byte using int_to_byte
        raw += int_to_byte(self.depth)
        # add the parent_fingerprint
        raw += self.parent_fingerprint
        # add the child number 4 bytes big-endian
        raw += ser32(self.child_number)
        # add the chain code
        raw += self.chain_code
        # add the 33 bytes of key data
        raw += self.key_data
        return raw

    def is_hardened(self):
        return self.child_number >= HARDENED

    def __eq__(self, other):
        if not isinstance(other, self.__class__):
            return NotImplemented
        return self.raw_serialize() == other.raw_serialize()

    def __hash__(self):
        return hash(self.raw_serialize())

    def __repr__(self):
        return f"{self.__class__.__name__}({self.raw_serialize().hex()})"


def _read_exactly(s, length):
    field = s.read(length)
    if len(field) != length:
        raise ValueError("Not a proper extended key")
    return field


def _read_fields(s):
    """Reads depth, parent fingerprint, child number, chain code and key data"""
    # the next byte is depth
    depth = byte_to_int(_read_exactly(s, 1))
    # next 4 bytes are the parent_fingerprint
    parent_fingerprint = _read_exactly(s, 4)
    # next 4 bytes is the child number in big-endian
    child_number = big_endian_to_int(_read_exactly(s, 4))
    # next 32 bytes are the chain code
    chain_code = _read_exactly(s, 32)
    # last 33 bytes are the key data
    key_data = _read_exactly(s, 33)
    return depth, parent_fingerprint, child_number, chain_code, key_data


class HDPrivateKey(_Record):
    def __init__(
        self,
        version,
        depth,
        parent_fingerprint,
        child_number,
        chain_code,
        key_data,
        private_key,
    ):
        self._check_fields(version, depth, parent_fingerprint, chain_code, key_data)
        if key_data[0] != 0:
            raise ValueError("private key should be preceded by a zero byte")
        self.version = version
        # level the current key is at in the heirarchy
        self.depth = depth
        # fingerprint of the parent key
        self.parent_fingerprint = parent_fingerprint
        # what order child this is, hardened children have the top bit set
        self.child_number = child_number
        # the code to make derivation deterministic
        self.chain_code = chain_code
        # 0x00 followed by the 32-byte secret
        self.key_data = key_data
        # what the signature scheme consumes: key_data on secp256k1,
        # the 32-byte seed on ed25519
        self.private_key = private_key
        self._frozen = True

    def secret(self):
        return parse256(self.key_data)

    @classmethod
    def raw_parse(cls, s, curve=Curve.BITCOIN):
        """Returns a HDPrivateKey from a stream of the 78-byte record"""
        # first 4 bytes are the version
        version = s.read(4)
        if version not in ALL_PRIVATE_VERSIONS:
            raise ValueError(f"not a valid private key version: {version.hex()}")
        depth, parent_fingerprint, child_number, chain_code, key_data = _read_fields(s)
        if curve == Curve.ED25519:
            private_key = key_data[1:]
        else:
            private_key = key_data
        return cls(
            version=version,
            depth=depth,
            parent_fingerprint=parent_fingerprint,
            child_number=child_number,
            chain_code=chain_code,
            key_data=key_data,
            private_key=private_key,
        )


class HDPublicKey(_Record):
    def __init__(
        self,
        version,
        depth,
        parent_fingerprint,
        child_number,
        chain_code,
        key_data,
        public_key,
    ):
        self._check_fields(version, depth, parent_fingerprint, chain_code, key_data)
        self.version = version
        self.depth = depth
        self.parent_fingerprint = parent_fingerprint
        self.child_number = child_number
        self.chain_code = chain_code
        # compressed SEC on secp256k1, 0x00 followed by A on ed25519
        self.key_data = key_data
        self.public_key = public_key
        self._frozen = True

    def fingerprint(self):
        """Fingerprint is the hash160's first 4 bytes"""
        return hash160(self.public_key)[:4]

    @classmethod
    def raw_parse(cls, s):
        """Returns a HDPublicKey from a stream of the 78-byte record"""
        version = s.read(4)
        if version not in ALL_PUBLIC_VERSIONS:
            raise ValueError(f"not a valid public key version: {version.hex()}")
        depth, parent_fingerprint, child_number, chain_code, key_data = _read_fields(s)
        return cls(
            version=version,
            depth=depth,
            parent_fingerprint=parent_fingerprint,
            child_number=child_number,
            chain_code=chain_code,
            key_data=key_data,
            public_key=key_data,
        )


class HDKeyPair(_Frozen):
    def __init__(self, private_key, public_key, coin_type, path=None):
        if (
            private_key.depth != public_key.depth
            or private_key.parent_fingerprint != public_key.parent_fingerprint
            or private_key.chain_code != public_key.chain_code
        ):
            raise ValueError("private and public keys describe different nodes")
        self.private_key = private_key
        self.public_key = public_key
        self.coin_type = coin_type
        self.path = path
        self._frozen = True

    @property
    def curve(self):
        return self.coin_type.curve

    @property
    def depth(self):
        return self.private_key.depth

    def fingerprint(self):
        return self.public_key.fingerprint()

    def __eq__(self, other):
        if not isinstance(other, HDKeyPair):
            return NotImplemented
        return (
            self.private_key == other.private_key
            and self.public_key == other.public_key
            and self.coin_type == other.coin_type
            and self.path == other.path
        )

    def __hash__(self):
        return hash((self.private_key, self.public_key, self.coin_type, self.path))

    def __repr__(self):
        return f"HDKeyPair({self.coin_type.name}, {self.path})"


def get_path(parent_path, child, hardened):
    if parent_path is None:
        parent_path = MASTER_PATH
    return parent_path + child_to_path(child + HARDENED if hardened else child)


def parse_path(path):
    """Returns a list of (index, hardened) from a path like m/44'/0'/0'/0/1.
    h and H are accepted in place of '"""
    # accept path in uppercase and/or using h instead of '
    path = path.strip().lower().replace("h", "'")
    if path != MASTER_PATH and not path.startswith(MASTER_PATH + "/"):
        raise ValueError(f"Invalid Path: {path}")
    result = []
    for child in path.split("/")[1:]:
        hardened = child.endswith("'")
        if hardened:
            child = child[:-1]
        if not is_intable(child) or int(child) < 0 or int(child) >= HARDENED:
            raise ValueError(f"Invalid Path: {path}")
        result.append((int(child), hardened))
    return result


def is_valid_bip32_path(path):
    try:
        components = parse_path(path)
    except ValueError:
        return False
    # https://bitcoin.stackexchange.com/a/92057
    return len(components) < 256


def _child_index(child, hardened):
    if child < 0 or child >= HARDENED:
        raise EncodingFailure(f"child index {child} should be in [0, 2^31)")
    if hardened:
        return child + HARDENED
    return child


class HDKeyGenerator:
    """Derives BIP32/SLIP-0010 key trees.

    curves maps each Curve to the object implementing its derivation rules,
    see hdkeygen.curve.CURVES.
    """

    def __init__(self, curves=CURVES):
        self.curves = curves

    def derivation(self, curve):
        return self.curves[curve]

    def master_key_pair_from_seed(self, seed, key_version, coin_type):
        """Returns the master HDKeyPair of the tree grown from seed"""
        curve = coin_type.curve
        derivation = self.derivation(curve)
        if isinstance(seed, str):
            try:
                seed = bytes.fromhex(seed)
            except ValueError as e:
                raise EncodingFailure("Unable to decode seed.") from e
        if not isinstance(seed, (bytes, bytearray)):
            raise EncodingFailure("Unable to decode seed.")
        try:
            key = curve.seed.encode("utf-8")
        except UnicodeEncodeError as e:
            raise EncodingFailure("Unable to encode the curve seed.") from e
        # I = HMAC-SHA512(Key = curve seed, Data = seed)
        h = hmac_sha512(key, bytes(seed))
        # split into left/right
        il, ir = h[:32], h[32:]
        keys = derivation.master_keys(il)
        private_key = HDPrivateKey(
            version=key_version.private_key_version,
            depth=0,
            parent_fingerprint=ZERO_FINGERPRINT,
            child_number=0,
            chain_code=ir,
            key_data=keys.private_key_data,
            private_key=keys.private_key,
        )
        public_key = HDPublicKey(
            version=key_version.public_key_version,
            depth=0,
            parent_fingerprint=ZERO_FINGERPRINT,
            child_number=0,
            chain_code=ir,
            key_data=keys.public_key_data,
            public_key=keys.public_key,
        )
        logger.debug(
            "derived %s master key pair %s at depth 0", curve.name, MASTER_PATH
        )
        return HDKeyPair(private_key, public_key, coin_type, MASTER_PATH)

    def child_public_key(self, parent, child, hardened, curve):
        """Derive the child public key from the parent public key. This is
        typically used for calculating the public key (or address) without
        revealing the private key."""
        derivation = self.derivation(curve)
        derivation.check_public_derivation(hardened)
        index = _child_index(child, hardened)
        # I = HMAC-SHA512(Key = cpar, Data = serP(point(kpar)) || ser32(i))
        h = hmac_sha512(parent.chain_code, parent.key_data + ser32(index))
        il, ir = h[:32], h[32:]
        key_data = derivation.child_public_key_data(parent.key_data, il)
        fingerprint = derivation.public_fingerprint(parent.key_data)
        logger.debug(
            "derived public child %d at depth %d, parent %s",
            index,
            parent.depth + 1,
            fingerprint.hex(),
        )
        return HDPublicKey(
            version=parent.version,
            depth=parent.depth + 1,
            parent_fingerprint=fingerprint,
            child_number=index,
            chain_code=ir,
            key_data=key_data,
            public_key=key_data,
        )

    def child_key_pair(self, parent, child, hardened):
        """Derive the child key pair (public + private) from the parent key pair."""
        derivation = self.derivation(parent.curve)
        derivation.check_private_derivation(hardened)
        index = _child_index(child, hardened)
        chain_code = parent.private_key.chain_code
        if hardened:
            # I = HMAC-SHA512(Key = cpar, Data = 0x00 || ser256(kpar) || ser32(i))
            kpar = parse256(parent.private_key.key_data)
            data = b"\x00" + ser256(kpar) + ser32(index)
        else:
            # I = HMAC-SHA512(Key = cpar, Data = serP(point(kpar)) || ser32(i))
            data = parent.public_key.key_data + ser32(index)
        h = hmac_sha512(chain_code, data)
        il, ir = h[:32], h[32:]
        keys = derivation.child_keys(parent, il)
        fingerprint = derivation.fingerprint(parent)
        depth = parent.depth + 1
        path = get_path(parent.path, child, hardened)
        private_key = HDPrivateKey(
            version=parent.private_key.version,
            depth=depth,
            parent_fingerprint=fingerprint,
            child_number=index,
            chain_code=ir,
            key_data=keys.private_key_data,
            private_key=keys.private_key,
        )
        public_key = HDPublicKey(
            version=parent.public_key.version,
            depth=depth,
            parent_fingerprint=fingerprint,
            child_number=index,
            chain_code=ir,
            key_data=keys.public_key_data,
            public_key=keys.public_key,
        )
        logger.debug("derived %s key pair %s", parent.curve.name, path)
        return HDKeyPair(private_key, public_key, parent.coin_type, path)

    def derive_path(self, key_pair, path):
        """Returns the HDKeyPair at the path indicated, relative to key_pair.
        Path should be in the form of m/x/y/z where x' means hardened"""
        current = key_pair
        for child, hardened in parse_path(path):
            current = self.child_key_pair(current, child, hardened)
        return current

    def derive_public_path(self, public_key, path, curve):
        """Returns the HDPublicKey at the path indicated. Path should be in
        the form of m/x/y/z."""
        current = public_key
        for child, hardened in parse_path(path):
            if hardened:
                raise UnsupportedDerivation("HDPublicKey cannot get hardened child")
            current = self.child_public_key(current, child, False, curve)
        return current

    def bip44_key_pair(
        self, seed, key_version, coin_type, account=0, change=0, address_index=0
    ):
        """Returns the key pair at m/44'/coin'/account'/change/address_index.
        Coins that only allow hardened keys harden every level."""
        if coin_type.always_hardened:
            tail = "{}'/{}'".format(change, address_index)
        else:
            tail = "{}/{}".format(change, address_index)
        path = "m/44'/{}'/{}'/{}".format(coin_type.coin_type, account, tail)
        master = self.master_key_pair_from_seed(seed, key_version, coin_type)
        return self.derive_path(master, path)
