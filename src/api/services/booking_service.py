"""
Booking service for handling booking-related business logic.
"""
from typing import Optional, Dict, Any, List

from ...firebase_sync.firestore_client import FirestoreClient
from ...registration_token.token_generator import TokenIssuer
from ...utils.errors import FailedPreconditionError, InvalidArgumentError, NotFoundError
from ...utils.models import Booking, BookingStatus, Guest
from ..models import CreateBookingRequest, UpdateBookingRequest
from config.settings import app_config, api_config

# UpdateBookingRequest attribute -> Firestore field
BOOKING_UPDATE_FIELDS = {
    'property_name': 'propertyName',
    'check_in_date': 'checkInDate',
    'check_out_date': 'checkOutDate',
    'confirmation_code': 'confirmationCode',
    'status': 'status',
}


def registration_link(token: str) -> str:
    """Public URL a guest follows to register."""
    return f"{api_config.public_base_url.rstrip('/')}/register/{token}"


class BookingService:
    """Service for handling booking operations."""

    def __init__(self, firestore_client: FirestoreClient, token_issuer: TokenIssuer, logger):
        self.firestore_client = firestore_client
        self.token_issuer = token_issuer
        self.logger = logger

    def _booking_payload(self, booking: Booking) -> Dict[str, Any]:
        data = booking.to_api()
        data['registration_link'] = registration_link(booking.registration_token)
        return data

    def create_booking(self, request: CreateBookingRequest) -> Dict[str, Any]:
        """
        Create a booking with a freshly issued registration token.

        The token is issued before anything is written, so a failed issuance
        (StoreUnavailable or TokenGenerationExhausted) leaves no booking behind.

        Args:
            request: Booking creation request

        Returns:
            Created booking including its registration link
        """
        if request.check_out_date < request.check_in_date:
            raise InvalidArgumentError(
                "Check-out date cannot be before check-in date.",
                details={"check_in_date": request.check_in_date.isoformat(),
                         "check_out_date": request.check_out_date.isoformat()}
            )

        token = self.token_issuer.generate_unique_token(
            length=app_config.token_length,
            max_retries=app_config.token_max_retries
        )

        booking = Booking(
            property_name=request.property_name,
            check_in_date=request.check_in_date,
            check_out_date=request.check_out_date,
            confirmation_code=request.confirmation_code,
            registration_token=token,
            status=request.status,
        )
        booking = self.firestore_client.create_booking(booking)
        self.logger.info("Booking created", booking_id=booking.id,
                         confirmation_code=booking.confirmation_code)
        return self._booking_payload(booking)

    def get_booking(self, booking_id: str) -> Dict[str, Any]:
        booking = self.firestore_client.get_booking(booking_id)
        if booking is None:
            raise NotFoundError(f"Booking with ID {booking_id} not found.",
                                details={"booking_id": booking_id})
        return self._booking_payload(booking)

    def list_bookings(self, status: Optional[BookingStatus] = None) -> List[Dict[str, Any]]:
        bookings = self.firestore_client.list_bookings(status.value if status else None)
        return [self._booking_payload(booking) for booking in bookings]

    def update_booking(self, booking_id: str, request: UpdateBookingRequest) -> Dict[str, Any]:
        """
        Apply a partial update. The registration token is never part of it.
        """
        changes = request.model_dump(exclude_none=True)
        if not changes:
            raise InvalidArgumentError("No booking fields to update.")

        current = self.firestore_client.get_booking(booking_id)
        if current is None:
            raise NotFoundError(f"Booking with ID {booking_id} not found.",
                                details={"booking_id": booking_id})

        check_in = changes.get('check_in_date', current.check_in_date)
        check_out = changes.get('check_out_date', current.check_out_date)
        if check_in and check_out and check_out < check_in:
            raise InvalidArgumentError("Check-out date cannot be before check-in date.")

        updates = {}
        for name, value in changes.items():
            if isinstance(value, BookingStatus):
                value = value.value
            elif hasattr(value, 'isoformat'):
                value = value.isoformat()
            updates[BOOKING_UPDATE_FIELDS[name]] = value

        if not self.firestore_client.update_booking(booking_id, updates):
            raise NotFoundError(f"Booking with ID {booking_id} not found.",
                                details={"booking_id": booking_id})
        self.logger.info("Booking updated", booking_id=booking_id, fields=sorted(updates))
        return self.get_booking(booking_id)

    def delete_booking(self, booking_id: str) -> bool:
        existed = self.firestore_client.delete_booking(booking_id)
        if not existed:
            self.logger.warning("Delete request for non-existent booking", booking_id=booking_id)
        return existed

    def get_booking_guests(self, booking_id: str) -> List[Dict[str, Any]]:
        """Guests registered against the booking's confirmation code."""
        booking = self.firestore_client.get_booking(booking_id)
        if booking is None:
            raise NotFoundError(f"Booking with ID {booking_id} not found.",
                                details={"booking_id": booking_id})
        guests = self.firestore_client.list_guests_by_confirmation_code(booking.confirmation_code)
        return [guest.to_api() for guest in guests]

    def get_booking_statistics(self) -> Dict[str, Any]:
        stats = self.firestore_client.get_booking_stats()
        by_status = {status.value: stats.by_status.get(status.value, 0) for status in BookingStatus}
        return {"total_bookings": stats.total, "by_status": by_status}

    # --- guest-facing, token based -------------------------------------------

    def get_pending_booking_by_token(self, token: str) -> Booking:
        """
        Resolve a registration token to a booking that still accepts guests.

        Raises:
            NotFoundError: If no booking has this token
            FailedPreconditionError: If the booking is not pending
        """
        booking = self.firestore_client.get_booking_by_token(token) if token else None
        if booking is None:
            raise NotFoundError("Invalid or expired registration link.")
        if not booking.is_pending:
            raise FailedPreconditionError(
                "This registration link has already been used or expired.",
                details={"status": booking.status.value}
            )
        return booking

    def get_registration_by_token(self, token: str) -> Dict[str, Any]:
        """Booking summary and already registered guests for the guest page."""
        booking = self.get_pending_booking_by_token(token)
        guests: List[Guest] = []
        if booking.confirmation_code:
            guests = self.firestore_client.list_guests_by_confirmation_code(booking.confirmation_code)
        return {
            "booking": {
                "id": booking.id,
                "property_name": booking.property_name,
                "check_in_date": booking.check_in_date.isoformat() if booking.check_in_date else None,
                "check_out_date": booking.check_out_date.isoformat() if booking.check_out_date else None,
                "confirmation_code": booking.confirmation_code,
                "status": booking.status.value,
            },
            "guests": [guest.to_api() for guest in guests],
        }

    def complete_registration(self, token: str) -> Dict[str, Any]:
        """Mark a pending booking as completed once the guests are registered."""
        booking = self.get_pending_booking_by_token(token)
        self.firestore_client.update_booking(booking.id, {'status': BookingStatus.COMPLETED.value})
        self.logger.info("Registration completed", booking_id=booking.id)
        return {"booking_id": booking.id, "status": BookingStatus.COMPLETED.value}
