from dataclasses import dataclass
from typing import Callable, Dict, Type

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec

from ecjws.services.errors import UnsupportedAlgorithmError, UnsupportedCurveError


@dataclass(frozen=True)
class Algorithm:
    """A JWA ECDSA algorithm: curve, hash and fixed field size in bytes."""

    name: str
    curve_name: str
    curve: Type[ec.EllipticCurve]
    hash_factory: Callable[[], hashes.HashAlgorithm]
    field_size: int

    @property
    def signature_length(self) -> int:
        return 2 * self.field_size

    def new_curve(self) -> ec.EllipticCurve:
        return self.curve()

    def new_hash(self) -> hashes.HashAlgorithm:
        return self.hash_factory()


ES256 = Algorithm("ES256", "P-256", ec.SECP256R1, hashes.SHA256, 32)
ES384 = Algorithm("ES384", "P-384", ec.SECP384R1, hashes.SHA384, 48)
ES512 = Algorithm("ES512", "P-521", ec.SECP521R1, hashes.SHA512, 66)

ALGORITHMS: Dict[str, Algorithm] = {alg.name: alg for alg in (ES256, ES384, ES512)}
_BY_CURVE: Dict[str, Algorithm] = {alg.curve_name: alg for alg in ALGORITHMS.values()}
# cryptography curve names, e.g. "secp256r1"
_BY_CRYPTOGRAPHY_NAME: Dict[str, Algorithm] = {
    alg.curve.name: alg for alg in ALGORITHMS.values()
}


def get_algorithm(name) -> Algorithm:
    try:
        return ALGORITHMS[name]
    except (KeyError, TypeError):
        raise UnsupportedAlgorithmError(f"Unsupported algorithm: {name!r}") from None


def algorithm_for_curve(crv) -> Algorithm:
    """Looks up the algorithm for a JWK "crv" value such as "P-256"."""
    try:
        return _BY_CURVE[crv]
    except (KeyError, TypeError):
        raise UnsupportedCurveError(f"Unsupported EC curve: {crv!r}") from None


def algorithm_for_key(key) -> Algorithm:
    """Looks up the algorithm for a cryptography EC public or private key."""
    try:
        return _BY_CRYPTOGRAPHY_NAME[key.curve.name]
    except KeyError:
        raise UnsupportedCurveError(f"Unsupported EC curve: {key.curve.name}") from None
