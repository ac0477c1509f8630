"""Error taxonomy for the account service.

Every failure raised by the services carries an ``ErrorKind`` so callers can
branch on ``error.kind`` instead of matching message strings. The transport
layer maps kinds to HTTP statuses in ``src.api.responses``.
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Kinds of failure the account core can report."""

    VALIDATION_FAILED = "validation_failed"
    ALREADY_EXISTS = "already_exists"
    INVALID_CREDENTIALS = "invalid_credentials"
    NOT_FOUND = "not_found"
    UNAUTHORIZED = "unauthorized"
    MISSING_TOKEN = "missing_token"
    INVALID_SIGNATURE = "invalid_signature"
    EXPIRED = "expired"


class AccountError(Exception):
    """Base exception for all account service errors."""

    kind: ErrorKind
    default_message: str = "Account error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationFailedError(AccountError):
    """Raised when a user field is malformed."""

    kind = ErrorKind.VALIDATION_FAILED
    default_message = "Validation failed"


class AlreadyExistsError(AccountError):
    """Raised when an email is already registered."""

    kind = ErrorKind.ALREADY_EXISTS
    default_message = "User already exists"


class InvalidCredentialsError(AccountError):
    """Raised on login failure, whether the email or the password was wrong."""

    kind = ErrorKind.INVALID_CREDENTIALS
    default_message = "Invalid credentials"


class NotFoundError(AccountError):
    """Raised when a user id does not resolve."""

    kind = ErrorKind.NOT_FOUND
    default_message = "User not found"


class UnauthorizedError(AccountError):
    """Raised when a bearer token is rejected for any reason."""

    kind = ErrorKind.UNAUTHORIZED
    default_message = "Token is not valid"


class MissingTokenError(AccountError):
    """Raised when a protected route is called without a bearer token."""

    kind = ErrorKind.MISSING_TOKEN
    default_message = "No token, authorization denied"


class TokenError(AccountError):
    """Base for token verification failures. Never sent to clients as-is."""


class InvalidSignatureError(TokenError):
    """Raised when a token is malformed or its signature does not match."""

    kind = ErrorKind.INVALID_SIGNATURE
    default_message = "Invalid token signature"


class TokenExpiredError(TokenError):
    """Raised when a token is past its expiry."""

    kind = ErrorKind.EXPIRED
    default_message = "Token has expired"
