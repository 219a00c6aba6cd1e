from typing import List

from ecjws.services.errors import MalformedTokenError

JWS_SEGMENTS = 3


def deserialize(token: str) -> List[str]:
    """Splits a compact JWS into its header, payload and signature segments."""
    if not isinstance(token, str):
        raise MalformedTokenError(f"token must be text, got {type(token).__name__}")

    parts = token.split(".")
    if len(parts) != JWS_SEGMENTS:
        raise MalformedTokenError(
            f"expected {JWS_SEGMENTS} segments, found {len(parts)}"
        )
    for index, part in enumerate(parts):
        if not part:
            raise MalformedTokenError(f"segment {index} is empty")
    return parts


def serialize(*parts: str) -> str:
    return ".".join(parts)


def signing_input(header_segment: str, payload_segment: str) -> bytes:
    # JWS signs the encoded segments, not the decoded bytes
    return f"{header_segment}.{payload_segment}".encode("ascii")
