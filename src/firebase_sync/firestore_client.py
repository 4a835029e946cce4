"""
Firebase Firestore client for bookings, guests and admin reference data.
"""
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Optional, Dict, Any, List, Iterator

from firebase_admin import firestore
from google.cloud.firestore_v1.base_query import FieldFilter

from .firebase_app import get_firebase_app
from ..utils.errors import CorruptDocumentError, RegistrationError, StoreUnavailable
from ..utils.logger import get_logger
from ..utils.models import Booking, BookingStats, Country, Guest, Property
from config.settings import app_config


class FirestoreClient:
    """Firebase Firestore client for registration data."""

    def __init__(self):
        self.logger = get_logger("guest_registration.firestore")
        self.db: Optional[firestore.Client] = None
        self.initialized = False

    def initialize(self) -> bool:
        """
        Initialize Firebase Admin SDK and Firestore client.

        Returns:
            True if initialization successful, False otherwise
        """
        if self.initialized:
            return True
        try:
            get_firebase_app()
            self.db = firestore.client()
            self.initialized = True
            self.logger.info("Firebase Firestore client initialized successfully")
            return True
        except Exception as e:
            self.logger.error("Failed to initialize Firebase Firestore", error=str(e))
            self.initialized = False
            return False

    @contextmanager
    def _store_call(self, action: str, **context) -> Iterator[None]:
        """Run a Firestore request, reporting any failure as StoreUnavailable."""
        if not self.initialized and not self.initialize():
            raise StoreUnavailable("Failed to initialize Firestore client", details=context)
        try:
            yield
        except RegistrationError:
            raise
        except Exception as e:
            self.logger.error(f"Error {action}", error=str(e), **context)
            raise StoreUnavailable(f"Firestore request failed while {action}.", details=context) from e

    def _collection(self, name: str):
        return self.db.collection(name)

    def _to_model(self, model, doc):
        """Map a document snapshot to ``model``; malformed data raises CorruptDocumentError."""
        try:
            return model.from_dict(doc.to_dict() or {}, doc.id)
        except (ValueError, TypeError) as e:
            self.logger.error("Malformed document", model=model.__name__, doc_id=doc.id, error=str(e))
            raise CorruptDocumentError(
                f"Stored {model.__name__.lower()} {doc.id} has invalid data.",
                details={"doc_id": doc.id, "error": str(e)}
            ) from e

    def _to_models(self, model, docs) -> list:
        """Map snapshots, skipping (and logging) malformed ones."""
        items = []
        for doc in docs:
            try:
                items.append(self._to_model(model, doc))
            except CorruptDocumentError:
                continue
        return items

    # --- registration tokens -------------------------------------------------

    def token_exists(self, token: str) -> bool:
        """
        Check whether any booking already uses a registration token.

        Args:
            token: Candidate token

        Returns:
            True if at least one booking has this token

        Raises:
            ValueError: If token is empty
            StoreUnavailable: If the query could not be performed
        """
        if not token:
            raise ValueError("token must be a non-empty string")
        with self._store_call("checking token uniqueness"):
            query = self._collection(app_config.bookings_collection).where(
                filter=FieldFilter('registrationToken', '==', token)
            ).limit(1)
            return any(True for _ in query.stream())

    # --- bookings ------------------------------------------------------------

    def create_booking(self, booking: Booking) -> Booking:
        """Persist a new booking and return it with its document id."""
        with self._store_call("creating booking", confirmation_code=booking.confirmation_code):
            doc_ref = self._collection(app_config.bookings_collection).document()
            doc_ref.set(booking.to_dict())
            booking.id = doc_ref.id

        self.logger.info("Booking created", booking_id=booking.id,
                         property_name=booking.property_name)
        return booking

    def get_booking(self, booking_id: str) -> Optional[Booking]:
        with self._store_call("getting booking", booking_id=booking_id):
            doc = self._collection(app_config.bookings_collection).document(booking_id).get()
        return self._to_model(Booking, doc) if doc.exists else None

    def get_booking_by_token(self, token: str) -> Optional[Booking]:
        """Find the booking that owns a registration token."""
        with self._store_call("getting booking by token"):
            query = self._collection(app_config.bookings_collection).where(
                filter=FieldFilter('registrationToken', '==', token)
            ).limit(1)
            docs = list(query.stream())
        return self._to_model(Booking, docs[0]) if docs else None

    def list_bookings(self, status: Optional[str] = None) -> List[Booking]:
        """List bookings newest first, optionally filtered by status."""
        with self._store_call("listing bookings", status=status):
            query = self._collection(app_config.bookings_collection)
            if status:
                query = query.where(filter=FieldFilter('status', '==', status))
            query = query.order_by('createdAt', direction=firestore.Query.DESCENDING)
            docs = list(query.stream())
        bookings = self._to_models(Booking, docs)

        self.logger.info("Retrieved bookings", status=status, count=len(bookings))
        return bookings

    def update_booking(self, booking_id: str, updates: Dict[str, Any]) -> bool:
        """
        Update an existing booking.

        Returns:
            True if updated, False if the booking does not exist
        """
        return self._update_document(app_config.bookings_collection, booking_id, updates)

    def delete_booking(self, booking_id: str) -> bool:
        """Delete a booking; returns False if it did not exist."""
        return self._delete_document(app_config.bookings_collection, booking_id)

    def get_booking_stats(self) -> BookingStats:
        """Count bookings per status."""
        stats = BookingStats()
        with self._store_call("getting booking statistics"):
            for doc in self._collection(app_config.bookings_collection).stream():
                stats.add((doc.to_dict() or {}).get('status', 'unknown'))

        self.logger.info("Retrieved booking statistics", total=stats.total)
        return stats

    # --- guests --------------------------------------------------------------

    def create_guest(self, guest_document: Dict[str, Any]) -> str:
        """Store a guest document with a server timestamp; returns its id."""
        document = dict(guest_document)
        document['timestamp'] = firestore.SERVER_TIMESTAMP
        with self._store_call("creating guest", booking_id=document.get('bookingId')):
            doc_ref = self._collection(app_config.guests_collection).document()
            doc_ref.set(document)
            return doc_ref.id

    def get_guest(self, guest_id: str) -> Optional[Guest]:
        with self._store_call("getting guest", guest_id=guest_id):
            doc = self._collection(app_config.guests_collection).document(guest_id).get()
        return self._to_model(Guest, doc) if doc.exists else None

    def list_guests(self) -> List[Guest]:
        """All registrations, newest first."""
        with self._store_call("listing guests"):
            query = self._collection(app_config.guests_collection).order_by(
                'timestamp', direction=firestore.Query.DESCENDING
            )
            docs = list(query.stream())
        return self._to_models(Guest, docs)

    def list_guests_by_confirmation_code(self, confirmation_code: str) -> List[Guest]:
        """Guests registered against a booking confirmation code, oldest first."""
        with self._store_call("listing guests by confirmation code",
                              confirmation_code=confirmation_code):
            query = self._collection(app_config.guests_collection).where(
                filter=FieldFilter('bookingConfirmationCode', '==', confirmation_code)
            ).order_by('timestamp', direction=firestore.Query.ASCENDING)
            docs = list(query.stream())
        return self._to_models(Guest, docs)

    def update_guest(self, guest_id: str, updates: Dict[str, Any]) -> bool:
        document = dict(updates)
        document['timestampUpdated'] = firestore.SERVER_TIMESTAMP
        return self._update_document(app_config.guests_collection, guest_id, document)

    def delete_guest(self, guest_id: str) -> bool:
        return self._delete_document(app_config.guests_collection, guest_id)

    # --- properties ----------------------------------------------------------

    def list_properties(self) -> List[Property]:
        with self._store_call("listing properties"):
            query = self._collection(app_config.properties_collection).order_by('name')
            docs = list(query.stream())
        return self._to_models(Property, docs)

    def create_property(self, prop: Property) -> Property:
        if prop.created_at is None:
            prop.created_at = datetime.now(timezone.utc)
        with self._store_call("creating property", name=prop.name):
            doc_ref = self._collection(app_config.properties_collection).document()
            doc_ref.set(prop.to_dict())
            prop.id = doc_ref.id
        return prop

    def update_property(self, property_id: str, updates: Dict[str, Any]) -> bool:
        return self._update_document(app_config.properties_collection, property_id, updates)

    def delete_property(self, property_id: str) -> bool:
        return self._delete_document(app_config.properties_collection, property_id)

    # --- countries -----------------------------------------------------------

    def list_countries(self) -> List[Country]:
        with self._store_call("listing countries"):
            query = self._collection(app_config.countries_collection).order_by('name')
            docs = list(query.stream())
        return self._to_models(Country, docs)

    def create_country(self, country: Country) -> Country:
        with self._store_call("creating country", code=country.code):
            doc_ref = self._collection(app_config.countries_collection).document()
            doc_ref.set(country.to_dict())
            country.id = doc_ref.id
        return country

    def update_country(self, country_id: str, updates: Dict[str, Any]) -> bool:
        return self._update_document(app_config.countries_collection, country_id, updates)

    def delete_country(self, country_id: str) -> bool:
        return self._delete_document(app_config.countries_collection, country_id)

    # --- shared document helpers ---------------------------------------------

    def _update_document(self, collection: str, doc_id: str, updates: Dict[str, Any]) -> bool:
        with self._store_call(f"updating {collection} document", doc_id=doc_id):
            doc_ref = self._collection(collection).document(doc_id)
            if not doc_ref.get().exists:
                return False
            doc_ref.update(updates)

        self.logger.info("Document updated", collection=collection, doc_id=doc_id)
        return True

    def _delete_document(self, collection: str, doc_id: str) -> bool:
        with self._store_call(f"deleting {collection} document", doc_id=doc_id):
            doc_ref = self._collection(collection).document(doc_id)
            existed = doc_ref.get().exists
            doc_ref.delete()

        self.logger.info("Document deleted", collection=collection, doc_id=doc_id, existed=existed)
        return existed

    def __enter__(self):
        """Context manager entry."""
        self.initialize()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        # Firestore client doesn't need explicit cleanup
        pass
