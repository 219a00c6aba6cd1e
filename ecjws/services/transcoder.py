"""
Conversion between ASN.1 DER ECDSA signatures and the JOSE R||S format.

JWS requires ECDSA signatures as R and S concatenated, each left-padded to the
curve's field size. Some identity providers (Keycloak among them) emit the DER
form that cryptography and OpenSSL produce instead:

    SEQUENCE { r INTEGER, s INTEGER }

These helpers move between the two so such tokens can still be verified.
"""

from cryptography.hazmat.primitives.asymmetric.utils import (
    decode_dss_signature,
    encode_dss_signature,
)

from ecjws.services.errors import InvalidDerSignatureError, InvalidSignatureLengthError


def der_to_concatenated(der: bytes, field_size: int) -> bytes:
    """
    Converts a DER ECDSA signature to fixed-length R||S.

    :param der: SEQUENCE of two INTEGERs.
    :param field_size: Curve field size in bytes (32, 48 or 66).
    :return: Exactly 2 * field_size bytes.
    :raises InvalidDerSignatureError: if the DER is malformed or R/S do not fit.
    """
    try:
        r, s = decode_dss_signature(bytes(der))
    except ValueError as e:
        raise InvalidDerSignatureError(f"Invalid DER signature: {e}") from e

    for name, value in (("R", r), ("S", s)):
        if value.bit_length() > field_size * 8:
            raise InvalidDerSignatureError(
                f"{name} is {(value.bit_length() + 7) // 8} bytes, field size is {field_size}"
            )

    return r.to_bytes(field_size, byteorder="big") + s.to_bytes(field_size, byteorder="big")


def concatenated_to_der(raw: bytes, field_size: int) -> bytes:
    """Converts fixed-length R||S to a DER ECDSA signature."""
    if len(raw) != 2 * field_size:
        raise InvalidSignatureLengthError(
            f"Signature is {len(raw)} bytes, expected {2 * field_size}"
        )
    r = int.from_bytes(raw[:field_size], byteorder="big")
    s = int.from_bytes(raw[field_size:], byteorder="big")
    return encode_dss_signature(r, s)
