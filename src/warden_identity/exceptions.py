"""Identity and authentication exceptions.

These exceptions are raised by the warden_identity package and should be
caught and handled by the presentation layer. Every exception carries a
human-readable ``message`` and a machine-readable ``code``.
"""

from enum import Enum


class AuthError(Exception):
    """Base exception for all authentication errors."""

    code: str = "AUTH_ERROR"

    def __init__(self, message: str = "Authentication error"):
        self.message = message
        super().__init__(self.message)


class ValidationError(AuthError):
    """Raised when input cannot be accepted as given."""

    code = "VALIDATION_ERROR"

    def __init__(self, message: str = "Invalid input"):
        super().__init__(message)


class WeakPasswordError(ValidationError):
    """Raised when a password cannot be hashed as given."""

    code = "WEAK_PASSWORD"

    def __init__(self, message: str = "Password does not meet requirements"):
        super().__init__(message)


class ConflictError(AuthError):
    """Raised when a resource with the same identity already exists."""

    code = "CONFLICT"

    def __init__(self, message: str = "Resource already exists"):
        super().__init__(message)


class InvalidCredentialsError(AuthError):
    """Raised when email or password is incorrect during login.

    Unknown email, wrong password and accounts without a password all
    raise this same error so callers cannot enumerate users.
    """

    code = "INVALID_CREDENTIALS"

    def __init__(self, message: str = "Invalid email or password"):
        super().__init__(message)


class TokenErrorKind(str, Enum):
    """Why a token was rejected."""

    MALFORMED = "malformed"
    SIGNATURE_INVALID = "signature_invalid"
    EXPIRED = "expired"
    NOT_FOUND = "not_found"
    REVOKED = "revoked"


class InvalidTokenError(AuthError):
    """Raised when an access or refresh token is rejected."""

    kind: TokenErrorKind = TokenErrorKind.MALFORMED

    def __init__(
        self,
        message: str = "Invalid or expired token",
        kind: TokenErrorKind | None = None,
    ):
        if kind is not None:
            self.kind = kind
        self.code = f"TOKEN_{self.kind.name}"
        super().__init__(message)


class MalformedTokenError(InvalidTokenError):
    """Raised when an access token cannot be decoded."""

    kind = TokenErrorKind.MALFORMED

    def __init__(self, message: str = "Malformed token"):
        super().__init__(message)


class InvalidSignatureError(InvalidTokenError):
    """Raised when an access token signature does not verify."""

    kind = TokenErrorKind.SIGNATURE_INVALID

    def __init__(self, message: str = "Token signature is invalid"):
        super().__init__(message)


class TokenExpiredError(InvalidTokenError):
    """Raised when an access token is past its expiry."""

    kind = TokenErrorKind.EXPIRED

    def __init__(self, message: str = "Token has expired"):
        super().__init__(message)


class RefreshTokenNotFoundError(InvalidTokenError):
    """Raised when a refresh token is unknown."""

    kind = TokenErrorKind.NOT_FOUND

    def __init__(self, message: str = "Refresh token not found"):
        super().__init__(message)


class RefreshTokenRevokedError(InvalidTokenError):
    """Raised when a refresh token has been revoked."""

    kind = TokenErrorKind.REVOKED

    def __init__(self, message: str = "Refresh token has been revoked"):
        super().__init__(message)


class RefreshTokenExpiredError(InvalidTokenError):
    """Raised when a refresh token has expired."""

    kind = TokenErrorKind.EXPIRED

    def __init__(self, message: str = "Refresh token has expired"):
        super().__init__(message)


class UnsupportedProviderError(AuthError):
    """Raised when a federated identity provider is not registered."""

    code = "UNSUPPORTED_PROVIDER"

    def __init__(self, provider: str):
        self.provider = provider
        super().__init__(f"Unsupported identity provider: {provider}")
