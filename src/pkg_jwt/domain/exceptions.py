from __future__ import annotations

from .constants import ErrorReason


class JWTError(Exception):
    """Base class for every error raised by pkg_jwt."""
    reason: ErrorReason = ErrorReason.INVALID_TOKEN


class AuthenticationError(JWTError):
    """Raised when a token cannot be accepted."""
    pass


class InvalidTokenError(AuthenticationError):
    """Raised when token is malformed or invalid."""
    reason = ErrorReason.INVALID_TOKEN


class InvalidSignatureError(AuthenticationError):
    """Raised when the signature does not verify."""
    reason = ErrorReason.INVALID_SIGNATURE


class TokenExpiredError(AuthenticationError):
    """Raised when token has expired."""
    reason = ErrorReason.EXPIRED


class KeyResolutionError(AuthenticationError):
    """Raised when no key can be selected from a JWKS for the token's kid."""
    reason = ErrorReason.KEY_NOT_FOUND

    def __init__(self, message: str = "", reason: ErrorReason = ErrorReason.KEY_NOT_FOUND) -> None:
        super().__init__(message)
        self.reason = reason


class AlgorithmNotSupportedError(JWTError):
    """Raised when no signing primitive is mapped for the requested algorithm."""
    reason = ErrorReason.ALGORITHM_NOT_SUPPORTED


class InvalidKeyError(JWTError):
    """Raised when key material cannot be loaded."""
    reason = ErrorReason.INVALID_KEY


_BY_REASON: dict[ErrorReason, type[JWTError]] = {
    ErrorReason.INVALID_TOKEN: InvalidTokenError,
    ErrorReason.INVALID_SIGNATURE: InvalidSignatureError,
    ErrorReason.EXPIRED: TokenExpiredError,
    ErrorReason.ALGORITHM_NOT_SUPPORTED: AlgorithmNotSupportedError,
    ErrorReason.INVALID_KEY: InvalidKeyError,
}


def error_for(reason: ErrorReason, message: str | None = None) -> JWTError:
    """Build the exception matching an error reason."""
    text = message or str(reason)
    if reason in (ErrorReason.KEY_NOT_FOUND, ErrorReason.INVALID_JWKS):
        return KeyResolutionError(text, reason)
    return _BY_REASON.get(reason, InvalidTokenError)(text)
