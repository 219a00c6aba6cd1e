import os
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

DEFAULT_MAX_TOKEN_LENGTH = 16384


class SignatureEncoding(str, Enum):
    STANDARD = "standard"
    # The issuer puts an ASN.1 DER signature in the token instead of R||S
    DER_COMPAT = "der_compat"


@dataclass(frozen=True)
class VerifyOptions:
    expected_algorithm: Optional[str] = None
    signature_encoding: SignatureEncoding = SignatureEncoding.STANDARD
    max_token_length: int = DEFAULT_MAX_TOKEN_LENGTH

    @classmethod
    def from_env(cls) -> "VerifyOptions":
        """
        Builds options from JWS_EXPECTED_ALGORITHM, JWS_SIGNATURE_ENCODING and
        JWS_MAX_TOKEN_LENGTH. Raises ValueError for unusable values.
        """
        encoding = os.getenv("JWS_SIGNATURE_ENCODING", SignatureEncoding.STANDARD.value)
        max_length = os.getenv("JWS_MAX_TOKEN_LENGTH", str(DEFAULT_MAX_TOKEN_LENGTH))

        try:
            signature_encoding = SignatureEncoding(encoding.strip().lower())
        except ValueError:
            raise ValueError(f"Invalid JWS_SIGNATURE_ENCODING: {encoding!r}") from None
        try:
            max_token_length = int(max_length)
        except ValueError:
            raise ValueError(f"Invalid JWS_MAX_TOKEN_LENGTH: {max_length!r}") from None
        if max_token_length <= 0:
            raise ValueError("JWS_MAX_TOKEN_LENGTH must be positive")

        return cls(
            expected_algorithm=os.getenv("JWS_EXPECTED_ALGORITHM") or None,
            signature_encoding=signature_encoding,
            max_token_length=max_token_length,
        )


LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
