import pytest
from hypothesis import given
from hypothesis import strategies as st

from ecjws.services import base64url
from ecjws.services.errors import DecodeError


@given(st.binary(max_size=256))
def test_decode_inverts_encode(data):
    assert base64url.decode(base64url.encode(data)) == data


@given(st.binary(max_size=256))
def test_encode_is_unpadded_and_url_safe(data):
    text = base64url.encode(data)
    assert "=" not in text
    assert "+" not in text and "/" not in text


def test_known_values():
    assert base64url.encode(b"\xfb\xff") == "-_8"
    assert base64url.decode("-_8") == b"\xfb\xff"
    assert base64url.decode("") == b""


@pytest.mark.parametrize("text", ["QQ==", "QQ=", "-_8="])
def test_padding_is_rejected(text):
    with pytest.raises(DecodeError):
        base64url.decode(text)


@pytest.mark.parametrize("text", ["+/8", "ab c", "ab.c", "é", "QQ\n"])
def test_characters_outside_alphabet_are_rejected(text):
    with pytest.raises(DecodeError):
        base64url.decode(text)


def test_impossible_length_is_rejected():
    with pytest.raises(DecodeError):
        base64url.decode("AAAAA")


def test_non_text_is_rejected():
    with pytest.raises(DecodeError):
        base64url.decode(b"QQ")


def test_uint_helpers_keep_fixed_length():
    text = base64url.uint_to_b64(1, 32)
    assert len(base64url.decode(text)) == 32
    assert base64url.b64_to_uint(text) == 1


@pytest.mark.parametrize("text", ["QR", "QUJ", "-_9"])
def test_non_canonical_trailing_bits_are_rejected(text):
    with pytest.raises(DecodeError):
        base64url.decode(text)
