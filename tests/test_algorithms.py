import pytest
from cryptography.hazmat.primitives.asymmetric import ec

from ecjws.services.algorithms import algorithm_for_curve, algorithm_for_key, get_algorithm
from ecjws.services.errors import UnsupportedAlgorithmError, UnsupportedCurveError


@pytest.mark.parametrize(
    "name, crv, hash_name, signature_length",
    [
        ("ES256", "P-256", "sha256", 64),
        ("ES384", "P-384", "sha384", 96),
        ("ES512", "P-521", "sha512", 132),
    ],
)
def test_table(name, crv, hash_name, signature_length):
    alg = get_algorithm(name)
    assert alg.curve_name == crv
    assert alg.new_hash().name == hash_name
    assert alg.signature_length == signature_length
    assert algorithm_for_curve(crv) is alg


@pytest.mark.parametrize("name", ["none", "HS256", "RS256", "PS256", "EdDSA", "es256", None, ["ES256"]])
def test_unsupported_algorithm(name):
    with pytest.raises(UnsupportedAlgorithmError):
        get_algorithm(name)


def test_unsupported_curve():
    with pytest.raises(UnsupportedCurveError):
        algorithm_for_curve("P-224")


def test_algorithm_for_key(private_keys):
    assert algorithm_for_key(private_keys["ES512"]).name == "ES512"
    with pytest.raises(UnsupportedCurveError):
        algorithm_for_key(ec.generate_private_key(ec.SECP256K1()))
