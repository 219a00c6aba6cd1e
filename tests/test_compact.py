import pytest

from ecjws.services import compact
from ecjws.services.errors import MalformedTokenError
from tests.samples import KEYCLOAK_TOKEN


def test_deserialize_splits_three_segments():
    assert compact.deserialize("aGVhZA.cGF5.c2ln") == ["aGVhZA", "cGF5", "c2ln"]


def test_serialize_inverts_deserialize():
    assert compact.serialize(*compact.deserialize(KEYCLOAK_TOKEN)) == KEYCLOAK_TOKEN


def test_deserialize_inverts_serialize():
    parts = ["a", "b", "c"]
    assert compact.deserialize(compact.serialize(*parts)) == parts


@pytest.mark.parametrize("token", ["", "a", "a.b", "a.b.c.d", "a.b.c.d.e"])
def test_wrong_segment_count(token):
    with pytest.raises(MalformedTokenError):
        compact.deserialize(token)


@pytest.mark.parametrize("token", ["..", ".b.c", "a..c", "a.b."])
def test_empty_segment(token):
    with pytest.raises(MalformedTokenError):
        compact.deserialize(token)


def test_non_text_token():
    with pytest.raises(MalformedTokenError):
        compact.deserialize(None)


def test_signing_input_uses_encoded_segments():
    assert compact.signing_input("aGVhZA", "cGF5") == b"aGVhZA.cGF5"
