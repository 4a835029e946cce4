"""
Guest service: registration, correction and removal of guest records.
"""
from typing import Dict, Any, List

from ...firebase_sync.firestore_client import FirestoreClient
from ...firebase_sync.storage_client import StorageClient
from ...utils.errors import FailedPreconditionError, InvalidArgumentError, NotFoundError
from ...utils.models import Booking, guest_fields_to_firestore
from ..models import CreateGuestRequest, GuestFormData, UpdateGuestRequest
from config.settings import app_config


class GuestService:
    """Service for guest registrations."""

    def __init__(self, firestore_client: FirestoreClient, storage_client: StorageClient, logger):
        self.firestore_client = firestore_client
        self.storage_client = storage_client
        self.logger = logger

    def create_guest(self, guest_data: CreateGuestRequest) -> str:
        """
        Register a guest against a pending booking.

        The booking must exist, be pending and carry the confirmation code
        the guest presents.

        Returns:
            New guest document id
        """
        if not guest_data.booking_id or not guest_data.booking_confirmation_code:
            self.logger.error("Guest validation failed: missing booking reference")
            raise InvalidArgumentError(
                "Required data (guestData with bookingId and bookingConfirmationCode) is missing."
            )

        booking_id = guest_data.booking_id
        self.logger.info("Attempting to create guest", booking_id=booking_id)

        booking = self.firestore_client.get_booking(booking_id)
        if booking is None:
            self.logger.error("Booking not found", booking_id=booking_id)
            raise NotFoundError(f"Booking with ID {booking_id} not found.",
                                details={"booking_id": booking_id})

        if not booking.is_pending:
            self.logger.error("Booking status is not pending", booking_id=booking_id,
                              status=booking.status.value)
            raise FailedPreconditionError(
                "Guest registration is not allowed for this booking (status is not 'pending')."
            )

        if booking.confirmation_code != guest_data.booking_confirmation_code:
            self.logger.error("Confirmation code mismatch", booking_id=booking_id)
            raise FailedPreconditionError("Invalid confirmation code.")

        self._check_passport_scan_path(guest_data.passport_scan_path, booking_id)

        document = guest_fields_to_firestore(guest_data.model_dump(exclude_none=True))
        guest_id = self.firestore_client.create_guest(document)
        self.logger.info("Guest created", guest_id=guest_id, booking_id=booking_id)
        return guest_id

    def _check_passport_scan_path(self, path, booking_id: str):
        """Scans must come from this booking's own upload folder."""
        if not path:
            return
        prefix = f"{app_config.passport_folder}/{booking_id}/"
        if not path.startswith(prefix) or ".." in path.split("/"):
            self.logger.error("Passport scan path outside booking folder", booking_id=booking_id, path=path)
            raise InvalidArgumentError(
                "Passport scan does not belong to this booking.",
                details={"passport_scan_path": path}
            )

    def register_guest_for_booking(self, booking: Booking, form: GuestFormData) -> str:
        """Create a guest from the public form, linking it to ``booking``."""
        request = CreateGuestRequest(
            **form.model_dump(),
            booking_id=booking.id,
            booking_confirmation_code=booking.confirmation_code,
        )
        return self.create_guest(request)

    def update_guest(self, guest_id: str, guest_data: UpdateGuestRequest) -> bool:
        """
        Correct a guest record. The booking link cannot be changed.
        """
        changes = guest_data.model_dump(exclude_none=True) if guest_data else {}
        if not guest_id or not changes:
            self.logger.error("Guest update failed: missing guestId or guestData")
            raise InvalidArgumentError("Required data (guestId and guestData) is missing.")

        if 'booking_id' in changes or 'booking_confirmation_code' in changes:
            self.logger.error("Guest update tried to change booking link", guest_id=guest_id)
            raise InvalidArgumentError(
                "Updating bookingId or bookingConfirmationCode is not allowed."
            )

        if 'passport_scan_path' in changes:
            guest = self.firestore_client.get_guest(guest_id)
            if guest is None:
                raise NotFoundError(f"Guest with ID {guest_id} not found.",
                                    details={"guest_id": guest_id})
            self._check_passport_scan_path(changes['passport_scan_path'], guest.booking_id or "")

        if not self.firestore_client.update_guest(guest_id, guest_fields_to_firestore(changes)):
            self.logger.error("Guest update failed: guest not found", guest_id=guest_id)
            raise NotFoundError(f"Guest with ID {guest_id} not found.",
                                details={"guest_id": guest_id})

        self.logger.info("Guest updated", guest_id=guest_id, fields=sorted(changes))
        return True

    def delete_guest(self, guest_id: str) -> bool:
        if not guest_id:
            raise InvalidArgumentError("Required data (guestId) is missing.")
        if not self.firestore_client.delete_guest(guest_id):
            self.logger.warning("Delete request for non-existent guest", guest_id=guest_id)
        else:
            self.logger.info("Guest deleted", guest_id=guest_id)
        return True

    def get_guest(self, guest_id: str) -> Dict[str, Any]:
        """Guest record with a fresh download URL for the passport scan, if any."""
        guest = self.firestore_client.get_guest(guest_id)
        if guest is None:
            raise NotFoundError(f"Guest with ID {guest_id} not found.",
                                details={"guest_id": guest_id})
        data = guest.to_api()
        data['passport_scan_url'] = (
            self.storage_client.get_download_url(guest.passport_scan_path)
            if guest.passport_scan_path else None
        )
        return data

    def list_guests(self) -> List[Dict[str, Any]]:
        return [guest.to_api() for guest in self.firestore_client.list_guests()]

    def upload_passport_scan(self, booking: Booking, filename: str, content: bytes,
                             content_type: str) -> Dict[str, str]:
        return self.storage_client.upload_passport_scan(booking.id, filename, content, content_type)
