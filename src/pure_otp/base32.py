"""RFC 4648 Base32 encoding and decoding."""

import string
from typing import Union

from pure_otp.bits import BytesLike, as_bytes
from pure_otp.errors import FormatError


ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ234567"
PAD = "="

_VALUES = {char: index for index, char in enumerate(ALPHABET)}
_ASCII_UPPER = str.maketrans(string.ascii_lowercase, string.ascii_uppercase)

# Characters left in the final block -> number of "=" that complete it.
# Other residues (1, 3, 6) cannot come from a whole number of bytes.
_PADDING_FOR_RESIDUE = {0: 0, 2: 6, 4: 4, 5: 3, 7: 1}


def encode(data: Union[BytesLike, str]) -> str:
    """
    Encode bytes as padded Base32 text.

    Args:
        data: Bytes to encode. Strings are UTF-8 encoded first.

    Returns:
        Upper-case Base32 text whose length is a multiple of 8.
    """
    chars = []
    buffer = 0
    bits = 0

    for octet in as_bytes(data):
        buffer = (buffer << 8) | octet
        bits += 8
        while bits >= 5:
            bits -= 5
            chars.append(ALPHABET[(buffer >> bits) & 0x1F])
        buffer &= (1 << bits) - 1

    if bits:
        # Final partial quintet is zero-filled on the right
        chars.append(ALPHABET[(buffer << (5 - bits)) & 0x1F])

    chars.append(PAD * (-len(chars) % 8))
    return "".join(chars)


def decode(text: Union[str, bytes], casefold: bool = False) -> bytes:
    """
    Decode Base32 text into bytes.

    Trailing padding is optional, but when present it must complete the last
    8-character block exactly. Bits left over after the last whole byte are
    discarded without checking that they are zero, as RFC 4648 permits and
    as base64.b32decode does, so "MY" and "MZ" both decode to b"f".

    Args:
        text: Base32 text (str, or ASCII bytes).
        casefold: Accept lower-case ASCII letters when True. Only a-z are
            folded; other characters are left for validation.

    Returns:
        The decoded bytes.

    Raises:
        FormatError: If the text contains a character outside the alphabet,
            misplaced padding, or a length that cannot encode whole bytes.
    """
    if isinstance(text, (bytes, bytearray)):
        try:
            text = text.decode("ascii")
        except UnicodeDecodeError as e:
            raise FormatError(f"Base32 input is not ASCII: {e}") from e

    if casefold:
        text = text.translate(_ASCII_UPPER)

    body = text.rstrip(PAD)
    padding = len(text) - len(body)
    residue = len(body) % 8

    if residue not in _PADDING_FOR_RESIDUE:
        raise FormatError(
            f"Invalid Base32 length: {len(body)} characters "
            "cannot encode whole bytes"
        )
    expected_padding = _PADDING_FOR_RESIDUE[residue]
    if padding and padding != expected_padding:
        raise FormatError(
            f"Invalid Base32 padding: expected {expected_padding} '=', "
            f"got {padding}"
        )

    out = bytearray()
    buffer = 0
    bits = 0

    for position, char in enumerate(body):
        value = _VALUES.get(char)
        if value is None:
            raise FormatError(
                f"Invalid Base32 character {char!r} at position {position}"
            )
        buffer = (buffer << 5) | value
        bits += 5
        if bits >= 8:
            bits -= 8
            out.append((buffer >> bits) & 0xFF)
            buffer &= (1 << bits) - 1

    # Leftover bits (< 8) are quintet overhang, not data
    return bytes(out)
