"""
Unit tests for the API services.
"""
import pytest
from unittest.mock import Mock
from datetime import date, timedelta

from src.api.models import (
    CreateBookingRequest, CreateGuestRequest, GuestFormData, UpdateBookingRequest,
    UpdateGuestRequest
)
from src.api.services.booking_service import BookingService, registration_link
from src.api.services.country_service import CountryService
from src.api.services.guest_service import GuestService
from src.api.services.property_service import PropertyService
from src.utils.errors import (
    FailedPreconditionError, InvalidArgumentError, NotFoundError, StoreUnavailable,
    TokenGenerationExhausted
)
from src.utils.models import Booking, BookingStatus, BookingStats, Country, Guest, Property


def make_booking(**overrides):
    values = dict(
        id="b1",
        property_name="Sea View Loft",
        check_in_date=date(2025, 7, 1),
        check_out_date=date(2025, 7, 8),
        confirmation_code="HMABC123",
        registration_token="tok123456789",
        status=BookingStatus.PENDING,
    )
    values.update(overrides)
    return Booking(**values)


def guest_form(**overrides):
    values = dict(
        first_name="Ana",
        last_name="Silva",
        birth_date=date(1990, 5, 17),
        nationality="Portugal",
        sex="Female",
        document_type="Passport",
        document_number="P1234567",
        phone="+351 912 345 678",
        email="ana@example.com",
        country_residence="Portugal",
        residence_address="Rua Augusta 1",
        city="Lisbon",
        postcode="1100-048",
        visit_date=date.today() + timedelta(days=3),
    )
    values.update(overrides)
    return values


class TestBookingService:
    """Test cases for BookingService class."""

    @pytest.fixture
    def firestore_client(self):
        client = Mock()
        client.create_booking.side_effect = lambda booking: setattr(booking, 'id', 'new-id') or booking
        return client

    @pytest.fixture
    def token_issuer(self):
        issuer = Mock()
        issuer.generate_unique_token.return_value = "fresh_token1"
        return issuer

    @pytest.fixture
    def service(self, firestore_client, token_issuer):
        return BookingService(firestore_client, token_issuer, Mock())

    @pytest.fixture
    def create_request(self):
        return CreateBookingRequest(
            property_name="Sea View Loft",
            check_in_date=date(2025, 7, 1),
            check_out_date=date(2025, 7, 8),
            confirmation_code="HMABC123",
        )

    def test_create_booking_issues_token(self, service, firestore_client, token_issuer, create_request):
        result = service.create_booking(create_request)

        token_issuer.generate_unique_token.assert_called_once_with(length=12, max_retries=5)
        stored = firestore_client.create_booking.call_args.args[0]
        assert stored.registration_token == "fresh_token1"
        assert stored.status is BookingStatus.PENDING
        assert result['id'] == 'new-id'
        assert result['registration_token'] == "fresh_token1"
        assert result['registration_link'].endswith("/register/fresh_token1")

    @pytest.mark.parametrize("error", [
        StoreUnavailable("down"),
        TokenGenerationExhausted("exhausted"),
    ])
    def test_create_booking_without_token_writes_nothing(self, service, firestore_client,
                                                         token_issuer, create_request, error):
        token_issuer.generate_unique_token.side_effect = error

        with pytest.raises(type(error)):
            service.create_booking(create_request)

        firestore_client.create_booking.assert_not_called()

    def test_create_booking_rejects_inverted_dates(self, service, token_issuer):
        request = CreateBookingRequest(
            property_name="Loft",
            check_in_date=date(2025, 7, 8),
            check_out_date=date(2025, 7, 1),
            confirmation_code="X1",
        )

        with pytest.raises(InvalidArgumentError):
            service.create_booking(request)

        token_issuer.generate_unique_token.assert_not_called()

    def test_get_booking_not_found(self, service, firestore_client):
        firestore_client.get_booking.return_value = None

        with pytest.raises(NotFoundError):
            service.get_booking("missing")

    def test_list_bookings_passes_status_value(self, service, firestore_client):
        firestore_client.list_bookings.return_value = [make_booking()]

        result = service.list_bookings(BookingStatus.PENDING)

        firestore_client.list_bookings.assert_called_once_with("pending")
        assert result[0]['registration_link'] == registration_link("tok123456789")

    def test_update_booking_maps_fields(self, service, firestore_client):
        firestore_client.get_booking.return_value = make_booking()
        firestore_client.update_booking.return_value = True

        service.update_booking("b1", UpdateBookingRequest(
            check_out_date=date(2025, 7, 10), status=BookingStatus.EXPIRED
        ))

        firestore_client.update_booking.assert_called_once_with(
            "b1", {'checkOutDate': '2025-07-10', 'status': 'expired'}
        )

    def test_update_booking_rejects_empty(self, service, firestore_client):
        with pytest.raises(InvalidArgumentError):
            service.update_booking("b1", UpdateBookingRequest())

        firestore_client.get_booking.assert_not_called()

    def test_update_booking_checks_dates_against_stored(self, service, firestore_client):
        firestore_client.get_booking.return_value = make_booking()

        with pytest.raises(InvalidArgumentError):
            service.update_booking("b1", UpdateBookingRequest(check_out_date=date(2025, 6, 30)))

        firestore_client.update_booking.assert_not_called()

    def test_update_booking_not_found(self, service, firestore_client):
        firestore_client.get_booking.return_value = None

        with pytest.raises(NotFoundError):
            service.update_booking("b1", UpdateBookingRequest(property_name="Other"))

    def test_booking_statistics_include_every_status(self, service, firestore_client):
        firestore_client.get_booking_stats.return_value = BookingStats(total=2, by_status={'pending': 2})

        result = service.get_booking_statistics()

        assert result == {
            "total_bookings": 2,
            "by_status": {"pending": 2, "completed": 0, "expired": 0},
        }

    def test_get_booking_guests(self, service, firestore_client):
        firestore_client.get_booking.return_value = make_booking()
        firestore_client.list_guests_by_confirmation_code.return_value = [
            Guest.from_dict({'firstName': 'Ana', 'lastName': 'Silva'}, "g1")
        ]

        guests = service.get_booking_guests("b1")

        firestore_client.list_guests_by_confirmation_code.assert_called_once_with("HMABC123")
        assert guests[0]['id'] == "g1"

    def test_unknown_token(self, service, firestore_client):
        firestore_client.get_booking_by_token.return_value = None

        with pytest.raises(NotFoundError) as exc_info:
            service.get_registration_by_token("nope")

        assert exc_info.value.message == "Invalid or expired registration link."

    def test_empty_token_does_not_query(self, service, firestore_client):
        with pytest.raises(NotFoundError):
            service.get_pending_booking_by_token("")

        firestore_client.get_booking_by_token.assert_not_called()

    @pytest.mark.parametrize("status", [BookingStatus.COMPLETED, BookingStatus.EXPIRED])
    def test_token_for_closed_booking(self, service, firestore_client, status):
        firestore_client.get_booking_by_token.return_value = make_booking(status=status)

        with pytest.raises(FailedPreconditionError):
            service.get_registration_by_token("tok123456789")

    def test_registration_by_token(self, service, firestore_client):
        firestore_client.get_booking_by_token.return_value = make_booking()
        firestore_client.list_guests_by_confirmation_code.return_value = []

        result = service.get_registration_by_token("tok123456789")

        assert result["booking"]["property_name"] == "Sea View Loft"
        assert result["booking"]["check_in_date"] == "2025-07-01"
        assert "registration_token" not in result["booking"]
        assert result["guests"] == []

    def test_complete_registration(self, service, firestore_client):
        firestore_client.get_booking_by_token.return_value = make_booking()

        result = service.complete_registration("tok123456789")

        firestore_client.update_booking.assert_called_once_with("b1", {'status': 'completed'})
        assert result == {"booking_id": "b1", "status": "completed"}


class TestGuestService:
    """Test cases for GuestService class."""

    @pytest.fixture
    def firestore_client(self):
        client = Mock()
        client.get_booking.return_value = make_booking()
        client.create_guest.return_value = "g1"
        return client

    @pytest.fixture
    def storage_client(self):
        return Mock()

    @pytest.fixture
    def service(self, firestore_client, storage_client):
        return GuestService(firestore_client, storage_client, Mock())

    def test_create_guest(self, service, firestore_client):
        request = CreateGuestRequest(**guest_form(), booking_id="b1", booking_confirmation_code="HMABC123")

        guest_id = service.create_guest(request)

        assert guest_id == "g1"
        document = firestore_client.create_guest.call_args.args[0]
        assert document['firstName'] == "Ana"
        assert document['birthDate'] == "1990-05-17"
        assert document['sex'] == "Female"
        assert document['bookingId'] == "b1"
        assert document['bookingConfirmationCode'] == "HMABC123"
        assert 'secondLastName' not in document

    def test_create_guest_requires_booking_reference(self, service, firestore_client):
        request = CreateGuestRequest(**guest_form(), booking_id="b1")

        with pytest.raises(InvalidArgumentError):
            service.create_guest(request)

        firestore_client.get_booking.assert_not_called()

    def test_create_guest_booking_not_found(self, service, firestore_client):
        firestore_client.get_booking.return_value = None
        request = CreateGuestRequest(**guest_form(), booking_id="b9", booking_confirmation_code="HMABC123")

        with pytest.raises(NotFoundError):
            service.create_guest(request)

    def test_create_guest_booking_not_pending(self, service, firestore_client):
        firestore_client.get_booking.return_value = make_booking(status=BookingStatus.COMPLETED)
        request = CreateGuestRequest(**guest_form(), booking_id="b1", booking_confirmation_code="HMABC123")

        with pytest.raises(FailedPreconditionError):
            service.create_guest(request)

        firestore_client.create_guest.assert_not_called()

    def test_create_guest_wrong_confirmation_code(self, service, firestore_client):
        request = CreateGuestRequest(**guest_form(), booking_id="b1", booking_confirmation_code="WRONG")

        with pytest.raises(FailedPreconditionError) as exc_info:
            service.create_guest(request)

        assert exc_info.value.message == "Invalid confirmation code."
        firestore_client.create_guest.assert_not_called()

    def test_register_guest_for_booking_links_booking(self, service, firestore_client):
        service.register_guest_for_booking(make_booking(), GuestFormData(**guest_form()))

        document = firestore_client.create_guest.call_args.args[0]
        assert document['bookingId'] == "b1"
        assert document['bookingConfirmationCode'] == "HMABC123"

    def test_register_guest_keeps_own_passport_scan(self, service, firestore_client):
        form = GuestFormData(**guest_form(passport_scan_path="passports/b1/abc.jpg"))

        service.register_guest_for_booking(make_booking(), form)

        document = firestore_client.create_guest.call_args.args[0]
        assert document['passportScanPath'] == "passports/b1/abc.jpg"

    @pytest.mark.parametrize("path", [
        "passports/OTHER_BOOKING/secret.pdf",
        "passports/b1/../OTHER_BOOKING/secret.pdf",
        "passports/b10/scan.jpg",
        "elsewhere/b1/scan.jpg",
    ])
    def test_register_guest_rejects_foreign_passport_scan(self, service, firestore_client, path):
        form = GuestFormData(**guest_form(passport_scan_path=path))

        with pytest.raises(InvalidArgumentError):
            service.register_guest_for_booking(make_booking(), form)

        firestore_client.create_guest.assert_not_called()

    def test_update_guest_rejects_foreign_passport_scan(self, service, firestore_client):
        firestore_client.get_guest.return_value = Guest.from_dict({'bookingId': 'b1'}, "g1")

        with pytest.raises(InvalidArgumentError):
            service.update_guest("g1", UpdateGuestRequest(passport_scan_path="passports/b2/x.pdf"))

        firestore_client.update_guest.assert_not_called()

    def test_update_guest(self, service, firestore_client):
        firestore_client.update_guest.return_value = True

        assert service.update_guest("g1", UpdateGuestRequest(city="Porto")) is True
        firestore_client.update_guest.assert_called_once_with("g1", {'city': 'Porto'})

    @pytest.mark.parametrize("field", ["booking_id", "booking_confirmation_code"])
    def test_update_guest_cannot_change_booking_link(self, service, firestore_client, field):
        with pytest.raises(InvalidArgumentError):
            service.update_guest("g1", UpdateGuestRequest(**{field: "other"}))

        firestore_client.update_guest.assert_not_called()

    def test_update_guest_requires_data(self, service):
        with pytest.raises(InvalidArgumentError):
            service.update_guest("g1", UpdateGuestRequest())

    def test_update_guest_not_found(self, service, firestore_client):
        firestore_client.update_guest.return_value = False

        with pytest.raises(NotFoundError):
            service.update_guest("g1", UpdateGuestRequest(city="Porto"))

    def test_delete_missing_guest_succeeds(self, service, firestore_client):
        firestore_client.delete_guest.return_value = False

        assert service.delete_guest("g404") is True
        service.logger.warning.assert_called_once()

    def test_get_guest_signs_passport_url(self, service, firestore_client, storage_client):
        firestore_client.get_guest.return_value = Guest.from_dict(
            {'firstName': 'Ana', 'passportScanPath': 'passports/b1/x.jpg'}, "g1"
        )
        storage_client.get_download_url.return_value = "https://signed"

        result = service.get_guest("g1")

        storage_client.get_download_url.assert_called_once_with('passports/b1/x.jpg')
        assert result['passport_scan_url'] == "https://signed"

    def test_get_guest_without_scan(self, service, firestore_client, storage_client):
        firestore_client.get_guest.return_value = Guest.from_dict({'firstName': 'Ana'}, "g1")

        assert service.get_guest("g1")['passport_scan_url'] is None
        storage_client.get_download_url.assert_not_called()

    def test_upload_passport_scan(self, service, storage_client):
        storage_client.upload_passport_scan.return_value = {"path": "p", "url": "u"}

        result = service.upload_passport_scan(make_booking(), "scan.png", b"img", "image/png")

        storage_client.upload_passport_scan.assert_called_once_with("b1", "scan.png", b"img", "image/png")
        assert result == {"path": "p", "url": "u"}


class TestReferenceDataServices:
    """Test cases for PropertyService and CountryService."""

    @pytest.fixture
    def firestore_client(self):
        return Mock()

    def test_create_property_strips_name(self, firestore_client):
        firestore_client.create_property.side_effect = lambda prop: Property(prop.name, id="p1")
        service = PropertyService(firestore_client, Mock())

        result = service.create_property("  Sea View Loft ")

        assert result == {"id": "p1", "name": "Sea View Loft", "created_at": None}

    def test_create_property_requires_name(self, firestore_client):
        with pytest.raises(InvalidArgumentError):
            PropertyService(firestore_client, Mock()).create_property("   ")

        firestore_client.create_property.assert_not_called()

    def test_rename_missing_property(self, firestore_client):
        firestore_client.update_property.return_value = False

        with pytest.raises(NotFoundError):
            PropertyService(firestore_client, Mock()).rename_property("p9", "Other")

    def test_create_country(self, firestore_client):
        firestore_client.create_country.side_effect = lambda c: Country(c.name, c.code, id="c1")
        service = CountryService(firestore_client, Mock())

        result = service.create_country(" Portugal", "pt ")

        assert result == {"id": "c1", "name": "Portugal", "code": "PT"}

    def test_update_country_upper_cases_code(self, firestore_client):
        firestore_client.update_country.return_value = True

        result = CountryService(firestore_client, Mock()).update_country("c1", code="es")

        firestore_client.update_country.assert_called_once_with("c1", {"code": "ES"})
        assert result == {"id": "c1", "code": "ES"}

    def test_delete_missing_country(self, firestore_client):
        firestore_client.delete_country.return_value = False
        logger = Mock()

        assert CountryService(firestore_client, logger).delete_country("c9") is False
        logger.warning.assert_called_once()
