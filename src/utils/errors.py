"""
Error types raised by the registration services.

Each error carries a stable ``error_code`` and the HTTP status the API
answers with, so routes can let them propagate to the exception handler.
"""
from typing import Optional, Dict, Any


class RegistrationError(Exception):
    """Base class for all expected service failures."""

    error_code = "INTERNAL_ERROR"
    status_code = 500
    retryable = False

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class InvalidArgumentError(RegistrationError):
    """Request data is missing or malformed."""
    error_code = "INVALID_ARGUMENT"
    status_code = 400


class UnauthenticatedError(RegistrationError):
    """No valid admin credential was presented."""
    error_code = "UNAUTHENTICATED"
    status_code = 401


class PermissionDeniedError(RegistrationError):
    """Credential is valid but not allowed into the admin area."""
    error_code = "PERMISSION_DENIED"
    status_code = 403


class NotFoundError(RegistrationError):
    error_code = "NOT_FOUND"
    status_code = 404


class FailedPreconditionError(RegistrationError):
    """The target exists but is in a state that forbids the operation."""
    error_code = "FAILED_PRECONDITION"
    status_code = 409


class StoreUnavailable(RegistrationError):
    """Firestore or Storage could not be reached or returned an error."""
    error_code = "STORE_UNAVAILABLE"
    status_code = 503
    retryable = True


class TokenGenerationExhausted(RegistrationError):
    """Every candidate registration token collided with an existing booking."""
    error_code = "TOKEN_GENERATION_EXHAUSTED"
    status_code = 503
    retryable = True


class CorruptDocumentError(RegistrationError):
    """A stored document cannot be read back into its model."""
    error_code = "DATA_LOSS"
    status_code = 500
