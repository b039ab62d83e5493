"""Fixed-width integer and byte helpers shared by the hash and OTP code."""

import math
from typing import Union

from pure_otp.errors import InvariantError, RangeError


MASK32 = 0xFFFFFFFF

BytesLike = Union[bytes, bytearray, memoryview]
Number = Union[int, float]


def require_finite(value: Number, name: str) -> Number:
    """
    Check that value is a real, finite int or float.

    Raises:
        RangeError: If value is not a number, is a bool, or is NaN/infinite.
    """
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        raise RangeError(f"{name} must be a number, got {type(value).__name__}")
    if not math.isfinite(value):
        raise RangeError(f"{name} must be finite, got {value}")
    return value


def as_bytes(value: Union[BytesLike, str]) -> bytes:
    """
    Normalize a key or message to immutable bytes.

    Strings are UTF-8 encoded. Any other type raises TypeError.
    """
    if isinstance(value, str):
        return value.encode("utf-8")
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    raise TypeError(f"expected bytes or str, got {type(value).__name__}")


def rotl32(x: int, n: int) -> int:
    """Rotate a 32-bit word left by n bits."""
    x &= MASK32
    n %= 32
    return ((x << n) | (x >> (32 - n))) & MASK32


def pad_right(data: bytes, size: int) -> bytes:
    """
    Zero-pad data on the right to exactly size bytes.

    Raises:
        InvariantError: If data is already longer than size.
    """
    if len(data) > size:
        raise InvariantError(f"cannot pad {len(data)} bytes down to {size}")
    return bytes(data) + b"\x00" * (size - len(data))


def _check_width(value: int, width: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise RangeError(f"value must be an integer, got {type(value).__name__}")
    if value < 0 or value >> (8 * width):
        raise RangeError(f"value {value} does not fit in {width} unsigned bytes")


def to_be_bytes(value: int, width: int) -> bytes:
    """Pack an unsigned integer into width big-endian bytes."""
    _check_width(value, width)
    return value.to_bytes(width, byteorder="big")


def to_le_bytes(value: int, width: int) -> bytes:
    """Pack an unsigned integer into width little-endian bytes."""
    _check_width(value, width)
    return value.to_bytes(width, byteorder="little")


def from_be_bytes(data: bytes) -> int:
    """Unpack big-endian bytes into an unsigned integer."""
    return int.from_bytes(data, byteorder="big", signed=False)


def xor_bytes(a: bytes, b: bytes) -> bytes:
    """
    XOR two equal-length byte sequences.

    Raises:
        InvariantError: If the lengths differ.
    """
    if len(a) != len(b):
        raise InvariantError(f"xor length mismatch: {len(a)} != {len(b)}")
    return bytes(x ^ y for x, y in zip(a, b))
