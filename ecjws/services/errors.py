class JoseError(Exception):
    """Base class for every error raised while handling a JWS or JWK."""


class DecodeError(JoseError):
    """Text is not strict, unpadded base64url."""


class MalformedTokenError(JoseError):
    """The compact token is structurally broken."""


class TokenTooLargeError(MalformedTokenError):
    """The token exceeds the configured size limit."""


class UnsupportedAlgorithmError(JoseError):
    pass


class AlgorithmMismatchError(JoseError):
    """The algorithm is valid but not the one the caller or key allows."""


class UnsupportedKeyTypeError(JoseError):
    pass


class UnsupportedCurveError(JoseError):
    pass


class InvalidKeyMaterialError(JoseError):
    """The JWK coordinates cannot form a point on the named curve."""


class InvalidDerSignatureError(JoseError):
    pass


class InvalidSignatureLengthError(JoseError):
    pass


class SignatureInvalidError(JoseError):
    """
    The signature does not verify.

    This is the only error that says something about the token's authenticity;
    every other error means the input or the configuration is wrong.
    """
