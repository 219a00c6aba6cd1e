import base64
import binascii
import re

from ecjws.services.errors import DecodeError

_ALPHABET = re.compile(r"[A-Za-z0-9_-]*")


def encode(data: bytes) -> str:
    """Encodes bytes to unpadded Base64Url text."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def decode(text: str) -> bytes:
    """
    Decodes unpadded Base64Url text.

    Padding characters, characters outside the url-safe alphabet, lengths
    that no byte string can produce and non-canonical text are rejected with
    DecodeError.
    """
    if not isinstance(text, str):
        raise DecodeError(f"expected text, got {type(text).__name__}")
    if "=" in text:
        raise DecodeError("padding characters are not allowed")
    if not _ALPHABET.fullmatch(text):
        raise DecodeError("invalid base64url character")
    if len(text) % 4 == 1:
        raise DecodeError(f"invalid base64url length {len(text)}")

    padding = "=" * (-len(text) % 4)
    try:
        data = base64.urlsafe_b64decode(text + padding)
    except (binascii.Error, ValueError) as e:
        raise DecodeError(str(e)) from e

    # Unused low bits of the last character must be zero
    if encode(data) != text:
        raise DecodeError("non-canonical base64url")
    return data


def uint_to_b64(value: int, length: int) -> str:
    """Encodes an unsigned integer as fixed-length big-endian Base64Url."""
    return encode(value.to_bytes(length, byteorder="big"))


def b64_to_uint(text: str) -> int:
    return int.from_bytes(decode(text), byteorder="big")
