"""
Dependency injection and service container for FastAPI application.
"""
from typing import Optional
from functools import lru_cache

from ..firebase_sync.firestore_client import FirestoreClient
from ..firebase_sync.storage_client import StorageClient
from ..registration_token.token_generator import TokenIssuer
from ..utils.logger import setup_logger
from .config import settings
from .services.booking_service import BookingService
from .services.country_service import CountryService
from .services.guest_service import GuestService
from .services.property_service import PropertyService
from config.settings import app_config


# Global service instances
_firestore_client: Optional[FirestoreClient] = None
_logger = None


def get_logger():
    """Get application logger instance."""
    global _logger
    if _logger is None:
        _logger = setup_logger("guest_registration", settings.log_level, app_config.log_file)
    return _logger


def get_firestore_client() -> FirestoreClient:
    """Get Firestore client instance."""
    global _firestore_client
    if _firestore_client is None:
        _firestore_client = FirestoreClient()
    return _firestore_client


@lru_cache(maxsize=1)
def get_storage_client() -> StorageClient:
    return StorageClient()


@lru_cache(maxsize=1)
def get_token_issuer() -> TokenIssuer:
    """Token issuer checking uniqueness against the bookings collection."""
    return TokenIssuer(get_firestore_client(), logger=get_logger())


@lru_cache(maxsize=1)
def get_booking_service() -> BookingService:
    """Get booking service instance with caching."""
    return BookingService(get_firestore_client(), get_token_issuer(), get_logger())


@lru_cache(maxsize=1)
def get_guest_service() -> GuestService:
    return GuestService(get_firestore_client(), get_storage_client(), get_logger())


@lru_cache(maxsize=1)
def get_property_service() -> PropertyService:
    return PropertyService(get_firestore_client(), get_logger())


@lru_cache(maxsize=1)
def get_country_service() -> CountryService:
    return CountryService(get_firestore_client(), get_logger())


def reset_services():
    """Drop cached clients and services (used on shutdown and in tests)."""
    global _firestore_client, _logger
    _firestore_client = None
    _logger = None
    for factory in (get_storage_client, get_token_issuer, get_booking_service,
                    get_guest_service, get_property_service, get_country_service):
        factory.cache_clear()
