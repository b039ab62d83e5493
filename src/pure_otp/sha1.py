"""SHA-1 message digest (RFC 3174) over a complete in-memory buffer."""

from typing import List, Tuple, Union

from pure_otp.bits import (
    MASK32,
    BytesLike,
    as_bytes,
    from_be_bytes,
    rotl32,
    to_be_bytes,
)
from pure_otp.errors import InvariantError


DIGEST_SIZE = 20
BLOCK_SIZE = 64

_INITIAL_STATE = (0x67452301, 0xEFCDAB89, 0x98BADCFE, 0x10325476, 0xC3D2E1F0)

# Round constants for rounds 0-19, 20-39, 40-59 and 60-79
_K = (0x5A827999, 0x6ED9EBA1, 0x8F1BBCDC, 0xCA62C1D6)


def _pad_message(data: bytes) -> bytes:
    # 0x80, zeros up to 56 mod 64, then the 64-bit bit length
    bit_length = (len(data) * 8) & 0xFFFFFFFFFFFFFFFF
    padded = data + b"\x80"
    padded += b"\x00" * ((56 - len(padded)) % BLOCK_SIZE)
    return padded + to_be_bytes(bit_length, 8)


def _expand_schedule(block: bytes) -> List[int]:
    w = [from_be_bytes(block[i : i + 4]) for i in range(0, BLOCK_SIZE, 4)]
    for i in range(16, 80):
        w.append(rotl32(w[i - 3] ^ w[i - 8] ^ w[i - 14] ^ w[i - 16], 1))
    return w


def _compress(state: Tuple[int, ...], block: bytes) -> Tuple[int, ...]:
    a, b, c, d, e = state

    for i, word in enumerate(_expand_schedule(block)):
        if i < 20:
            f = (b & c) | (~b & d)
            k = _K[0]
        elif i < 40:
            f = b ^ c ^ d
            k = _K[1]
        elif i < 60:
            f = (b & c) | (b & d) | (c & d)
            k = _K[2]
        else:
            f = b ^ c ^ d
            k = _K[3]

        temp = (rotl32(a, 5) + (f & MASK32) + e + k + word) & MASK32
        e = d
        d = c
        c = rotl32(b, 30)
        b = a
        a = temp

    return tuple((x + y) & MASK32 for x, y in zip(state, (a, b, c, d, e)))


def sha1(data: Union[BytesLike, str]) -> bytes:
    """
    Compute the SHA-1 digest of data.

    Args:
        data: Message of any length, including empty. Strings are UTF-8 encoded.

    Returns:
        The 20-byte digest.

    Raises:
        InvariantError: If the produced digest is not 20 bytes.
    """
    padded = _pad_message(as_bytes(data))

    state = _INITIAL_STATE
    for start in range(0, len(padded), BLOCK_SIZE):
        state = _compress(state, padded[start : start + BLOCK_SIZE])

    digest = b"".join(to_be_bytes(word, 4) for word in state)
    if len(digest) != DIGEST_SIZE:
        raise InvariantError(
            f"SHA-1 digest has {len(digest)} bytes, expected {DIGEST_SIZE}"
        )
    return digest


def sha1_hex(data: Union[BytesLike, str]) -> str:
    """Return the SHA-1 digest of data as a lowercase hex string."""
    return sha1(data).hex()
