from fastapi import APIRouter, HTTPException
from pydantic import BaseModel
from typing import Optional, Dict, Any, Union
import logging

from ecjws.config import SignatureEncoding, VerifyOptions
from ecjws.services import base64url, verifier
from ecjws.services.errors import JoseError, SignatureInvalidError

logger = logging.getLogger(__name__)

router = APIRouter()

# Resolved once so a misconfigured environment fails at startup
OPTIONS = VerifyOptions.from_env()

# Pydantic model for verification request
class VerifyRequest(BaseModel):
    token: str
    jwk: Union[Dict[str, Any], str]
    expected_algorithm: Optional[str] = None
    signature_encoding: Optional[SignatureEncoding] = None

@router.post("/verify")
def verify_token(request: VerifyRequest):
    """
    Verifies a compact JWS against the supplied JWK.

    A bad signature is an answer ("valid": false); every other failure means the
    request itself is unusable and is returned as a 400 naming the error kind.
    """
    try:
        verified = verifier.verify(
            request.token,
            request.jwk,
            OPTIONS,
            expected_algorithm=request.expected_algorithm,
            signature_encoding=request.signature_encoding,
        )
    except SignatureInvalidError:
        return {"valid": False, "error": SignatureInvalidError.__name__}
    except JoseError as e:
        logger.info(f"Rejected verification request: {type(e).__name__}: {e}")
        raise HTTPException(
            status_code=400,
            detail={"error": type(e).__name__, "message": str(e)},
        )

    try:
        claims = verified.claims()
    except ValueError:
        claims = None

    return {
        "valid": True,
        "algorithm": verified.algorithm.name,
        "header": verified.header,
        "payload": base64url.encode(verified.payload),
        "claims": claims,
    }
