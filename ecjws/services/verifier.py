import json
import logging
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Mapping, Optional, Union

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.asymmetric.utils import encode_dss_signature

from ecjws.config import SignatureEncoding, VerifyOptions
from ecjws.services import base64url, compact
from ecjws.services.algorithms import Algorithm, get_algorithm
from ecjws.services.errors import (
    AlgorithmMismatchError,
    DecodeError,
    InvalidSignatureLengthError,
    MalformedTokenError,
    SignatureInvalidError,
    TokenTooLargeError,
)
from ecjws.services.keys import EcPublicJwk, build_public_key
from ecjws.services.transcoder import der_to_concatenated

logger = logging.getLogger(__name__)

JwkInput = Union[EcPublicJwk, str, bytes, Mapping[str, Any]]


@dataclass(frozen=True)
class VerifiedToken:
    algorithm: Algorithm
    header: Dict[str, Any] = field(hash=False)
    payload: bytes

    def claims(self) -> Any:
        """Decodes the payload as JSON. Claim validation is up to the caller."""
        return json.loads(self.payload)


def _decode_segment(segment: str, name: str) -> bytes:
    try:
        return base64url.decode(segment)
    except DecodeError as e:
        raise MalformedTokenError(f"{name} segment is not base64url: {e}") from e


def _decode_header(segment: str) -> Dict[str, Any]:
    raw = _decode_segment(segment, "header")
    try:
        header = json.loads(raw)
    except (ValueError, RecursionError) as e:
        raise MalformedTokenError(f"header is not valid JSON: {e}") from e
    if not isinstance(header, dict):
        raise MalformedTokenError("header must be a JSON object")
    if "crit" in header:
        raise MalformedTokenError(f"unsupported critical header parameters: {header['crit']!r}")
    return header


def _resolve_options(options, expected_algorithm, signature_encoding) -> VerifyOptions:
    options = options or VerifyOptions()
    if expected_algorithm is not None:
        options = replace(options, expected_algorithm=expected_algorithm)
    if signature_encoding is not None:
        options = replace(options, signature_encoding=SignatureEncoding(signature_encoding))
    return options


def _raw_signature(signature: bytes, algorithm: Algorithm, encoding: SignatureEncoding) -> bytes:
    if encoding == SignatureEncoding.DER_COMPAT:
        return der_to_concatenated(signature, algorithm.field_size)
    if len(signature) != algorithm.signature_length:
        raise InvalidSignatureLengthError(
            f"{algorithm.name} signature must be {algorithm.signature_length} bytes, "
            f"got {len(signature)}"
        )
    return signature


def verify(
    token: str,
    jwk: JwkInput,
    options: Optional[VerifyOptions] = None,
    *,
    expected_algorithm: Optional[str] = None,
    signature_encoding: Optional[Union[SignatureEncoding, str]] = None,
) -> VerifiedToken:
    """
    Verifies a compact JWS signed with ECDSA.

    :param token: The compact serialized JWS.
    :param jwk: The verification key as an EcPublicJwk, JWK JSON text or mapping.
    :param options: Verification policy; keyword arguments override its fields.
    :return: VerifiedToken with the decoded header and payload bytes.
    :raises SignatureInvalidError: if the signature does not match.
    :raises JoseError: any other subclass for malformed input or policy violations.
    """
    options = _resolve_options(options, expected_algorithm, signature_encoding)

    if isinstance(token, str) and len(token) > options.max_token_length:
        raise TokenTooLargeError(
            f"token is {len(token)} characters, limit is {options.max_token_length}"
        )

    header_segment, payload_segment, signature_segment = compact.deserialize(token)
    header = _decode_header(header_segment)

    algorithm = get_algorithm(header.get("alg"))
    if options.expected_algorithm is not None and algorithm.name != options.expected_algorithm:
        raise AlgorithmMismatchError(
            f"token uses {algorithm.name}, expected {options.expected_algorithm}"
        )

    key = jwk if isinstance(jwk, EcPublicJwk) else build_public_key(jwk)
    if key.algorithm != algorithm:
        raise AlgorithmMismatchError(
            f"{algorithm.name} requires {algorithm.curve_name}, key is {key.curve_name}"
        )
    if key.alg is not None and key.alg != algorithm.name:
        raise AlgorithmMismatchError(f"key is restricted to {key.alg}, token uses {algorithm.name}")

    payload = _decode_segment(payload_segment, "payload")
    signature = _decode_segment(signature_segment, "signature")
    raw = _raw_signature(signature, algorithm, options.signature_encoding)

    r = int.from_bytes(raw[:algorithm.field_size], byteorder="big")
    s = int.from_bytes(raw[algorithm.field_size:], byteorder="big")
    try:
        key.public_key.verify(
            encode_dss_signature(r, s),
            compact.signing_input(header_segment, payload_segment),
            ec.ECDSA(algorithm.new_hash()),
        )
    except InvalidSignature:
        logger.warning(f"Signature verification failed for {algorithm.name} token kid={header.get('kid')}")
        raise SignatureInvalidError("Signature verification failed") from None

    logger.debug(f"Verified {algorithm.name} token kid={header.get('kid')}")
    return VerifiedToken(algorithm=algorithm, header=header, payload=payload)


def is_valid(token: str, jwk: JwkInput, options: Optional[VerifyOptions] = None, **kwargs) -> bool:
    """
    Returns False when the signature does not verify.

    Structural and configuration errors are not an answer about the token and
    are raised unchanged.
    """
    try:
        verify(token, jwk, options, **kwargs)
    except SignatureInvalidError:
        return False
    return True
