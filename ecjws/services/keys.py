import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Union

from cryptography.hazmat.primitives.asymmetric import ec

from ecjws.services import base64url
from ecjws.services.algorithms import Algorithm, algorithm_for_curve, algorithm_for_key
from ecjws.services.errors import (
    DecodeError,
    InvalidKeyMaterialError,
    UnsupportedKeyTypeError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EcPublicJwk:
    """An EC public key built from a JWK, with the JWK members policy checks need."""

    curve_name: str
    algorithm: Algorithm
    public_key: ec.EllipticCurvePublicKey
    kid: Optional[str] = None
    alg: Optional[str] = None


def _parse_jwk(jwk: Union[str, bytes, Mapping[str, Any]]) -> Mapping[str, Any]:
    if isinstance(jwk, Mapping):
        return jwk
    try:
        parsed = json.loads(jwk)
    except (TypeError, ValueError, RecursionError) as e:
        raise InvalidKeyMaterialError(f"JWK is not valid JSON: {e}") from e
    if not isinstance(parsed, dict):
        raise InvalidKeyMaterialError("JWK must be a JSON object")
    return parsed


def _coordinate(jwk: Mapping[str, Any], name: str, field_size: int) -> int:
    value = jwk.get(name)
    if not isinstance(value, str):
        raise InvalidKeyMaterialError(f"JWK member '{name}' is missing")
    try:
        raw = base64url.decode(value)
    except DecodeError as e:
        raise InvalidKeyMaterialError(f"JWK member '{name}' is not base64url: {e}") from e

    # Some issuers prepend a zero sign byte; anything else must be exactly field_size
    excess = len(raw) - field_size
    if excess < 0 or any(raw[:excess]):
        raise InvalidKeyMaterialError(
            f"JWK member '{name}' is {len(raw)} bytes, expected {field_size}"
        )
    return int.from_bytes(raw, byteorder="big")


def build_public_key(jwk: Union[str, bytes, Mapping[str, Any]]) -> EcPublicJwk:
    """
    Builds an EC public key from a JWK.

    :param jwk: The JWK as JSON text or an already parsed mapping.
    :return: EcPublicJwk wrapping a cryptography EllipticCurvePublicKey.
    :raises UnsupportedKeyTypeError: if kty is not "EC".
    :raises UnsupportedCurveError: if crv is not P-256, P-384 or P-521.
    :raises InvalidKeyMaterialError: if x/y are missing, malformed or off-curve.
    """
    data = _parse_jwk(jwk)

    kty = data.get("kty")
    if kty != "EC":
        raise UnsupportedKeyTypeError(f"Unsupported JWK key type: {kty!r}")

    algorithm = algorithm_for_curve(data.get("crv"))
    x = _coordinate(data, "x", algorithm.field_size)
    y = _coordinate(data, "y", algorithm.field_size)

    try:
        public_key = ec.EllipticCurvePublicNumbers(x, y, algorithm.new_curve()).public_key()
    except ValueError as e:
        raise InvalidKeyMaterialError(f"JWK point is not on {algorithm.curve_name}") from e

    logger.debug(f"Built {algorithm.curve_name} public key kid={data.get('kid')}")
    return EcPublicJwk(
        curve_name=algorithm.curve_name,
        algorithm=algorithm,
        public_key=public_key,
        kid=data.get("kid"),
        alg=data.get("alg"),
    )


def public_key_to_jwk(public_key: ec.EllipticCurvePublicKey, kid: Optional[str] = None) -> Dict[str, str]:
    """Exports an EC public key as a JWK with fixed-length coordinates."""
    algorithm = algorithm_for_key(public_key)
    public_numbers = public_key.public_numbers()

    jwk = {
        "kty": "EC",
        "crv": algorithm.curve_name,
        "x": base64url.uint_to_b64(public_numbers.x, algorithm.field_size),
        "y": base64url.uint_to_b64(public_numbers.y, algorithm.field_size),
        "alg": algorithm.name,
    }
    if kid is not None:
        jwk["kid"] = kid
    return jwk
