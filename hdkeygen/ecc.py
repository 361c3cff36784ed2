from coincurve import PublicKey

from hdkeygen.helper import ser256


# order of the secp256k1 group
N = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141


def point_sec(secret):
    """Returns serP(point(secret)), the 33-byte compressed SEC format"""
    if secret <= 0 or secret >= N:
        raise ValueError("secret should be in [1, N)")
    return PublicKey.from_valid_secret(ser256(secret)).format()


def parse(sec_bin):
    """Returns the point a SEC encoding describes, raises ValueError when
    the bytes are not a point on the curve"""
    return PublicKey(sec_bin)


def tweak_add(public_point, tweak):
    """Returns serP(point(tweak) + public_point).
    libsecp256k1 refuses tweaks >= N and sums that land on the point at
    infinity, both surface as ValueError"""
    return public_point.add(tweak).format()
