import hashlib
import hmac

from ripemd.ripemd160 import ripemd160


HARDENED = 0x80000000


def byte_to_int(b):
    """Returns an integer that corresponds to the byte"""
    return b[0]


def int_to_byte(n):
    """Returns a single byte that corresponds to the integer"""
    if n > 255 or n < 0:
        raise ValueError(
            "integer greater than 255 or lower than 0 cannot be converted into a byte"
        )
    return bytes([n])


def big_endian_to_int(b):
    """big_endian_to_int takes byte sequence as a big-endian number.
    Returns an integer"""
    # use the int.from_bytes(b, <endianness>) method
    return int.from_bytes(b, "big")


def int_to_big_endian(n, length):
    """int_to_big_endian takes an integer and returns the big-endian
    byte sequence of length"""
    # use the int.to_bytes(length, <endianness>) method
    return n.to_bytes(length, "big")


def ser32(i):
    """Serializes a 32-bit unsigned integer as 4 bytes, big-endian"""
    if i < 0 or i > 0xFFFFFFFF:
        raise ValueError(f"child number {i} does not fit in 32 bits")
    return int_to_big_endian(i, 4)


def ser256(p):
    """Serializes an integer as 32 bytes, big-endian"""
    return int_to_big_endian(p, 32)


def parse256(b):
    """Interprets a byte sequence as a big-endian number.
    A 33-byte key data field with its leading 0x00 parses to the scalar."""
    return big_endian_to_int(b)


def sha256(s):
    return hashlib.sha256(s).digest()


def hash160(s):
    return ripemd160(sha256(s))


def hmac_sha512(key, msg):
    return hmac.HMAC(key=key, msg=msg, digestmod=hashlib.sha512).digest()


def child_to_path(child_number):
    if child_number >= HARDENED:
        hardened = "'"
        index = child_number - HARDENED
    else:
        hardened = ""
        index = child_number
    return "/{}{}".format(index, hardened)


def is_intable(int_as_string):
    """True only for a plain run of ASCII digits, so "1_0" or " 1" are refused"""
    return int_as_string.isascii() and int_as_string.isdigit()
