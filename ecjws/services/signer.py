import json
import logging
from typing import Any, Dict, Mapping, Optional, Union

from cryptography.hazmat.primitives.asymmetric import ec

from ecjws.config import SignatureEncoding
from ecjws.services import base64url, compact
from ecjws.services.algorithms import algorithm_for_key, get_algorithm
from ecjws.services.errors import AlgorithmMismatchError
from ecjws.services.transcoder import der_to_concatenated

logger = logging.getLogger(__name__)


def _payload_bytes(payload: Union[bytes, str, Mapping[str, Any]]) -> bytes:
    if isinstance(payload, bytes):
        return payload
    if isinstance(payload, str):
        return payload.encode("utf-8")
    return json.dumps(payload, separators=(",", ":")).encode("utf-8")


def sign(
    payload: Union[bytes, str, Mapping[str, Any]],
    private_key: ec.EllipticCurvePrivateKey,
    algorithm: str = "ES256",
    headers: Optional[Dict[str, Any]] = None,
    signature_encoding: SignatureEncoding = SignatureEncoding.STANDARD,
) -> str:
    """
    Creates a compact JWS.

    With SignatureEncoding.DER_COMPAT the DER signature from cryptography is put
    in the token as-is, which is what non-conformant issuers such as Keycloak do.
    """
    alg = get_algorithm(algorithm)
    if algorithm_for_key(private_key) != alg:
        raise AlgorithmMismatchError(
            f"{alg.name} requires {alg.curve_name}, key curve is {private_key.curve.name}"
        )

    header = {**(headers or {}), "alg": alg.name}

    # Encode header and payload
    encoded_header = base64url.encode(json.dumps(header, separators=(",", ":")).encode("utf-8"))
    encoded_payload = base64url.encode(_payload_bytes(payload))

    # Sign the JWT
    der_signature = private_key.sign(
        compact.signing_input(encoded_header, encoded_payload),
        ec.ECDSA(alg.new_hash()),
    )
    if SignatureEncoding(signature_encoding) == SignatureEncoding.DER_COMPAT:
        signature = der_signature
    else:
        signature = der_to_concatenated(der_signature, alg.field_size)

    logger.debug(f"Signed {alg.name} token kid={header.get('kid')}")
    return compact.serialize(encoded_header, encoded_payload, base64url.encode(signature))
