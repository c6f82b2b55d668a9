"""Base58 encoding with a four-byte double-SHA256 checksum (Bitcoin alphabet)."""

import hashlib

_ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"
_INDEX = {char: position for position, char in enumerate(_ALPHABET)}
_CHECKSUM_LEN = 4


def _checksum(data: bytes) -> bytes:
    return hashlib.sha256(hashlib.sha256(data).digest()).digest()[:_CHECKSUM_LEN]


def _encode(data: bytes) -> str:
    number = int.from_bytes(data, "big")
    digits = []
    while number:
        number, remainder = divmod(number, 58)
        digits.append(_ALPHABET[remainder])
    leading_zeros = len(data) - len(data.lstrip(b"\0"))
    return "1" * leading_zeros + "".join(reversed(digits))


def _decode(text: str) -> bytes:
    number = 0
    for char in text:
        value = _INDEX.get(char)
        if value is None:
            raise ValueError(f"invalid base58 character {char!r}")
        number = number * 58 + value
    leading_ones = len(text) - len(text.lstrip("1"))
    body = number.to_bytes((number.bit_length() + 7) // 8, "big")
    return b"\0" * leading_ones + body


def b58check_encode(data: bytes) -> str:
    """Encode ``data`` followed by its checksum as a base58 string."""
    data = bytes(data)
    return _encode(data + _checksum(data))


def b58check_decode(text: str) -> bytes:
    """Decode a base58check string and return the payload without its checksum.

    Raises ValueError for invalid characters, a missing checksum or a
    checksum mismatch.
    """
    raw = _decode(text)
    if len(raw) < _CHECKSUM_LEN:
        raise ValueError("base58 data too short to hold a checksum")
    payload, checksum = raw[:-_CHECKSUM_LEN], raw[-_CHECKSUM_LEN:]
    if _checksum(payload) != checksum:
        raise ValueError("base58 checksum mismatch")
    return payload