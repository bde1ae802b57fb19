"""Hex encodings used at the boundary with signers and provers."""

from __future__ import annotations

import string

from .config import FIELD_ELEMENT_BYTES, PUBLIC_KEY_HEX_LENGTH, PUBLIC_KEY_PREFIX
from .curve import WeierstrassPoint
from .exceptions import InvalidEncodingError, InvalidPointError

_COORDINATE_HEX_LENGTH = 2 * FIELD_ELEMENT_BYTES


def hex_to_int(value: str) -> int:
    """
    Parse a big-endian hex string, with or without a ``0x`` prefix.

    Raises:
        InvalidEncodingError: If ``value`` is empty or not hex
    """
    if not isinstance(value, str):
        raise InvalidEncodingError(f"Expected hex string, got {type(value).__name__}")
    digits = value[2:] if value[:2].lower() == "0x" else value
    if not digits:
        raise InvalidEncodingError("Empty hex string")
    if any(char not in string.hexdigits for char in digits):
        raise InvalidEncodingError(f"Invalid hex string: {value!r}")
    return int(digits, 16)


def int_to_hex(value: int, length: int = FIELD_ELEMENT_BYTES) -> str:
    if value < 0:
        raise InvalidEncodingError("Cannot encode a negative integer")
    try:
        return value.to_bytes(length, byteorder="big").hex()
    except OverflowError as exc:
        raise InvalidEncodingError(
            f"Integer does not fit in {length} bytes"
        ) from exc


def public_key_from_hex(value: str) -> WeierstrassPoint:
    """
    Parse an uncompressed public key ``04 || x || y``.

    Args:
        value: 130 hex characters (65 bytes), optional ``0x`` prefix

    Returns:
        Weierstrass point of the public key

    Raises:
        InvalidEncodingError: On a bad prefix, length, digits or a point
            that is not on the curve
    """
    if not isinstance(value, str):
        raise InvalidEncodingError(f"Expected hex string, got {type(value).__name__}")
    digits = value[2:] if value[:2].lower() == "0x" else value
    if len(digits) != PUBLIC_KEY_HEX_LENGTH:
        raise InvalidEncodingError(
            f"Public key must be {PUBLIC_KEY_HEX_LENGTH} hex chars, got {len(digits)}"
        )
    if digits[:2] != PUBLIC_KEY_PREFIX:
        raise InvalidEncodingError(
            f"Public key must start with {PUBLIC_KEY_PREFIX!r}, got {digits[:2]!r}"
        )

    body = digits[2:]
    x = hex_to_int(body[:_COORDINATE_HEX_LENGTH])
    y = hex_to_int(body[_COORDINATE_HEX_LENGTH:])
    try:
        return WeierstrassPoint(x, y)
    except InvalidPointError as exc:
        raise InvalidEncodingError(f"Public key is not a curve point: {exc}") from exc


def public_key_to_hex(point: WeierstrassPoint) -> str:
    """Serialize a public key as uncompressed hex (no ``0x`` prefix)."""
    if point.is_identity:
        raise InvalidEncodingError("The point at infinity has no public key encoding")
    return PUBLIC_KEY_PREFIX + int_to_hex(point.x) + int_to_hex(point.y)
