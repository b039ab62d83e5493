"""RFC 4226 HOTP (HMAC-based One-Time Password) implementation."""

import logging
from typing import Union

from pure_otp.bits import BytesLike, to_be_bytes
from pure_otp.errors import InvariantError, RangeError
from pure_otp.hmac_sha1 import hmac_sha1
from pure_otp.sha1 import DIGEST_SIZE


log = logging.getLogger(__name__)

DEFAULT_DIGITS = 6
MIN_DIGITS = 6
MAX_DIGITS = 10
MAX_COUNTER = 2**64 - 1


def validate_digits(digits: int) -> int:
    """
    Check that digits is a supported code length.

    Raises:
        RangeError: If digits is not an integer in [6, 10].
    """
    if not isinstance(digits, int) or isinstance(digits, bool):
        raise RangeError(f"digits must be an integer, got {type(digits).__name__}")
    if not MIN_DIGITS <= digits <= MAX_DIGITS:
        raise RangeError(
            f"digits must be between {MIN_DIGITS} and {MAX_DIGITS}, got {digits}"
        )
    return digits


def counter_to_bytes(counter: int) -> bytes:
    """
    Encode the moving factor as an 8-byte big-endian unsigned integer.

    Raises:
        RangeError: If counter is negative, too large or not an integer.
    """
    if not isinstance(counter, int) or isinstance(counter, bool):
        raise RangeError(f"counter must be an integer, got {type(counter).__name__}")
    if not 0 <= counter <= MAX_COUNTER:
        raise RangeError(f"counter must be between 0 and {MAX_COUNTER}, got {counter}")
    return to_be_bytes(counter, 8)


def dynamic_truncate(digest: bytes) -> int:
    """
    Extract a 31-bit integer from an HMAC-SHA-1 digest (RFC 4226, Section 5.3).

    The low nibble of the last byte selects a 4-byte window; the top bit of
    the window is cleared.

    Args:
        digest: A 20-byte HMAC-SHA-1 value.

    Returns:
        An integer in [0, 2**31 - 1].

    Raises:
        InvariantError: If digest is not 20 bytes.
    """
    if len(digest) != DIGEST_SIZE:
        raise InvariantError(f"digest has {len(digest)} bytes, expected {DIGEST_SIZE}")

    offset = digest[19] & 0x0F
    binary = (
        ((digest[offset] & 0x7F) << 24)
        | ((digest[offset + 1] & 0xFF) << 16)
        | ((digest[offset + 2] & 0xFF) << 8)
        | (digest[offset + 3] & 0xFF)
    )
    return binary & 0x7FFFFFFF


def hotp(key: Union[BytesLike, str], counter: int, digits: int = DEFAULT_DIGITS) -> str:
    """
    Generate an HOTP code using RFC 4226.

    Args:
        key: Raw secret bytes (already Base32-decoded). May be empty.
        counter: The moving counter value, 0 <= counter < 2**64.
        digits: Number of digits in the output code, 6 to 10 (default: 6).

    Returns:
        A zero-padded decimal code string of exactly `digits` characters.

    Raises:
        RangeError: If counter or digits is out of range.
    """
    validate_digits(digits)
    counter_bytes = counter_to_bytes(counter)

    hmac_digest = hmac_sha1(key, counter_bytes)
    binary = dynamic_truncate(hmac_digest)
    log.debug(
        "hotp counter=%d offset=%d digits=%d",
        counter,
        hmac_digest[19] & 0x0F,
        digits,
    )

    code = binary % (10**digits)
    return f"{code:0{digits}d}"
