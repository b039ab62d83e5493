"""Tests for the Base32 codec."""

import base64

import pytest

from pure_otp import base32
from pure_otp.errors import FormatError


# RFC 4648 Section 10 test vectors
RFC4648_TEST_VECTORS = [
    (b"", ""),
    (b"f", "MY======"),
    (b"fo", "MZXQ===="),
    (b"foo", "MZXW6==="),
    (b"foob", "MZXW6YQ="),
    (b"fooba", "MZXW6YTB"),
    (b"foobar", "MZXW6YTBOI======"),
]


@pytest.mark.parametrize("raw,encoded", RFC4648_TEST_VECTORS)
def test_rfc4648_encode(raw, encoded):
    """Test encoding against the RFC 4648 vectors."""
    assert base32.encode(raw) == encoded


@pytest.mark.parametrize("raw,encoded", RFC4648_TEST_VECTORS)
def test_rfc4648_decode(raw, encoded):
    """Test decoding against the RFC 4648 vectors."""
    assert base32.decode(encoded) == raw


def test_otp_secret_decoding():
    """Test decoding the RFC 4226 secret in its usual Base32 form."""
    assert base32.decode("GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ") == b"12345678901234567890"
    assert base32.decode("JBSWY3DPEHPK3PXP") == b"Hello!\xde\xad\xbe\xef"


def test_round_trip_and_stdlib_agreement():
    """Test decode(encode(x)) == x and agreement with base64 for many lengths."""
    for length in range(0, 41):
        data = bytes((i * 37 + length) % 256 for i in range(length))
        encoded = base32.encode(data)
        assert encoded == base64.b32encode(data).decode("ascii")
        assert len(encoded) % 8 == 0
        assert set(encoded) <= set(base32.ALPHABET + base32.PAD)
        assert base32.decode(encoded) == data


def test_decode_without_padding():
    """Test that unpadded input with a valid length decodes."""
    assert base32.decode("MY") == b"f"
    assert base32.decode("MZXW6YQ") == b"foob"
    assert base32.decode(b"MZXW6===") == b"foo"


def test_decode_casefold():
    """Test that lower case is rejected unless casefold is requested."""
    with pytest.raises(FormatError, match="Invalid Base32 character"):
        base32.decode("mzxw6ytb")
    assert base32.decode("mzxw6ytb", casefold=True) == b"fooba"


@pytest.mark.parametrize(
    "text", ["MZXW6YT1", "MZXW6YT0", "MZXW 6YT", "MZ=W6YTB", "MZXW6YTé"]
)
def test_decode_rejects_invalid_characters(text):
    """Test that characters outside the alphabet raise FormatError."""
    with pytest.raises(FormatError):
        base32.decode(text)


@pytest.mark.parametrize(
    "text", ["M", "MZX", "MZXW6Y", "MZXW6YTBO", "M=======", "MZX====="]
)
def test_decode_rejects_impossible_lengths(text):
    """Test that lengths which cannot encode whole bytes raise FormatError."""
    with pytest.raises(FormatError, match="length"):
        base32.decode(text)


@pytest.mark.parametrize(
    "text", ["MY=", "MY=====", "MZXW6YTB========", "MZXW6YQ==", "MY======="]
)
def test_decode_rejects_wrong_padding(text):
    """Test that padding not completing an 8-character block raises FormatError."""
    with pytest.raises(FormatError, match="padding"):
        base32.decode(text)


def test_decode_rejects_non_ascii_bytes():
    """Test that non-ASCII bytes input raises FormatError."""
    with pytest.raises(FormatError, match="ASCII"):
        base32.decode(b"MZXW6\xffTB")


def test_format_error_is_value_error():
    """Test that FormatError can be caught as ValueError."""
    with pytest.raises(ValueError):
        base32.decode("1")


@pytest.mark.parametrize("text", ["MZXW6Yß", "MZXW6Yﬀ", "MZXW6Yı"])
def test_decode_casefold_only_folds_ascii(text):
    """Test that casefold does not turn non-ASCII letters into alphabet letters."""
    with pytest.raises(FormatError, match="Invalid Base32 character"):
        base32.decode(text, casefold=True)


def test_decode_discards_nonzero_trailing_bits():
    """Test that leftover bits after the last byte are ignored, like base64."""
    assert base32.decode("MZ") == b"f"
    assert base32.decode("MY") == b"f"
