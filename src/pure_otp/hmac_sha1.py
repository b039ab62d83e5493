"""HMAC-SHA-1 (RFC 2104) built on the local SHA-1 engine."""

from typing import Union

from pure_otp.bits import BytesLike, as_bytes, pad_right, xor_bytes
from pure_otp.errors import InvariantError
from pure_otp.sha1 import BLOCK_SIZE, DIGEST_SIZE, sha1


INNER_PAD = b"\x36" * BLOCK_SIZE
OUTER_PAD = b"\x5c" * BLOCK_SIZE


def prepare_key(key: Union[BytesLike, str]) -> bytes:
    """
    Normalize an HMAC key to exactly one SHA-1 block (64 bytes).

    Keys longer than a block are hashed first; shorter keys, including the
    empty key, are zero-padded on the right.

    Args:
        key: Raw key bytes of any length.

    Returns:
        The 64-byte prepared key.
    """
    key = as_bytes(key)
    if len(key) > BLOCK_SIZE:
        key = sha1(key)
    if len(key) < BLOCK_SIZE:
        key = pad_right(key, BLOCK_SIZE)

    if len(key) != BLOCK_SIZE:
        raise InvariantError(
            f"prepared key has {len(key)} bytes, expected {BLOCK_SIZE}"
        )
    return key


def hmac_sha1(key: Union[BytesLike, str], message: Union[BytesLike, str]) -> bytes:
    """
    Compute HMAC-SHA-1 of message under key.

    Args:
        key: Raw key bytes. An empty key behaves as 64 zero bytes.
        message: Message of any length.

    Returns:
        The 20-byte MAC.
    """
    prepared = prepare_key(key)
    inner = sha1(xor_bytes(prepared, INNER_PAD) + as_bytes(message))
    mac = sha1(xor_bytes(prepared, OUTER_PAD) + inner)

    if len(mac) != DIGEST_SIZE:
        raise InvariantError(
            f"HMAC-SHA-1 produced {len(mac)} bytes, expected {DIGEST_SIZE}"
        )
    return mac
