"""
Utility modules for the guest registration service.
"""

from .models import (
    BookingStatus, Sex, DocumentType, Booking, Guest, Property, Country, BookingStats
)
from .errors import (
    RegistrationError, InvalidArgumentError, UnauthenticatedError, PermissionDeniedError,
    NotFoundError, FailedPreconditionError, StoreUnavailable, TokenGenerationExhausted,
    CorruptDocumentError
)
from .logger import setup_logger, get_logger

__all__ = [
    'BookingStatus', 'Sex', 'DocumentType', 'Booking', 'Guest', 'Property', 'Country',
    'BookingStats', 'RegistrationError', 'InvalidArgumentError', 'UnauthenticatedError',
    'PermissionDeniedError', 'NotFoundError', 'FailedPreconditionError', 'StoreUnavailable',
    'TokenGenerationExhausted', 'CorruptDocumentError', 'setup_logger', 'get_logger'
]
