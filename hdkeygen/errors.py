class HDKeyError(Exception):
    pass


class InvalidMasterKey(HDKeyError):
    pass


class InvalidDerivedKey(HDKeyError):
    """Derived child is not a valid key, the caller should proceed to the next index"""


class UnsupportedDerivation(HDKeyError):
    pass


class EncodingFailure(HDKeyError):
    pass
