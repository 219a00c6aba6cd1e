import json

import pytest

from ecjws.config import SignatureEncoding
from ecjws.services import base64url, compact
from ecjws.services.errors import AlgorithmMismatchError, UnsupportedAlgorithmError
from ecjws.services.signer import sign


def test_header_carries_alg_and_extra_members(private_keys):
    token = sign(b"payload", private_keys["ES384"], "ES384", headers={"typ": "JWT", "alg": "ES256"})
    header = json.loads(base64url.decode(compact.deserialize(token)[0]))
    assert header == {"typ": "JWT", "alg": "ES384"}


@pytest.mark.parametrize(
    "payload, expected",
    [
        (b"\x00\x01", b"\x00\x01"),
        ("text", b"text"),
        ({"iss": "did:web:example"}, b'{"iss":"did:web:example"}'),
    ],
)
def test_payload_encoding(private_keys, payload, expected):
    token = sign(payload, private_keys["ES256"])
    assert base64url.decode(compact.deserialize(token)[1]) == expected


def test_der_compat_emits_der(private_keys):
    token = sign({}, private_keys["ES256"], signature_encoding=SignatureEncoding.DER_COMPAT)
    signature = base64url.decode(compact.deserialize(token)[2])
    assert signature[0] == 0x30


def test_key_curve_must_match_algorithm(private_keys):
    with pytest.raises(AlgorithmMismatchError):
        sign({}, private_keys["ES256"], "ES512")


def test_unknown_algorithm(private_keys):
    with pytest.raises(UnsupportedAlgorithmError):
        sign({}, private_keys["ES256"], "HS256")
