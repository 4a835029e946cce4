"""
Data models for the Guest Registration service.

Firestore documents keep the camelCase field names used by the web client;
the dataclasses below expose them as snake_case attributes.
"""
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Optional, Dict, Any
from enum import Enum


class BookingStatus(Enum):
    """Lifecycle states of a booking."""
    PENDING = "pending"
    COMPLETED = "completed"
    EXPIRED = "expired"


class Sex(Enum):
    FEMALE = "Female"
    MALE = "Male"
    OTHER = "Other"


class DocumentType(Enum):
    PASSPORT = "Passport"
    ID_CARD = "ID Card"
    NIF = "NIF"
    OTHER = "Other"


def parse_date(value: Any) -> Optional[date]:
    """Accept a date, datetime or 'YYYY-MM-DD' string."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def parse_datetime(value: Any) -> Optional[datetime]:
    """Accept a datetime (Firestore timestamps are datetime subclasses) or ISO string."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value))


def _format_date(value: Optional[date]) -> Optional[str]:
    return value.isoformat() if value else None


@dataclass
class Booking:
    """A reservation eligible for guest self-registration."""
    property_name: str
    check_in_date: date
    check_out_date: date
    confirmation_code: str
    registration_token: str
    status: BookingStatus = BookingStatus.PENDING
    created_at: Optional[datetime] = None
    id: Optional[str] = None

    def __post_init__(self):
        if isinstance(self.status, str):
            self.status = BookingStatus(self.status.lower())
        self.check_in_date = parse_date(self.check_in_date)
        self.check_out_date = parse_date(self.check_out_date)
        if self.created_at is None:
            self.created_at = datetime.now(timezone.utc)

    @property
    def is_pending(self) -> bool:
        return self.status is BookingStatus.PENDING

    def to_dict(self) -> Dict[str, Any]:
        """Convert booking to a Firestore document (id excluded)."""
        return {
            'propertyName': self.property_name,
            'checkInDate': _format_date(self.check_in_date),
            'checkOutDate': _format_date(self.check_out_date),
            'confirmationCode': self.confirmation_code,
            'registrationToken': self.registration_token,
            'status': self.status.value,
            'createdAt': self.created_at,
        }

    def to_api(self) -> Dict[str, Any]:
        """Convert booking to the snake_case shape returned by the API."""
        return {
            'id': self.id,
            'property_name': self.property_name,
            'check_in_date': _format_date(self.check_in_date),
            'check_out_date': _format_date(self.check_out_date),
            'confirmation_code': self.confirmation_code,
            'registration_token': self.registration_token,
            'status': self.status.value,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], doc_id: Optional[str] = None) -> 'Booking':
        """Create Booking from a Firestore document."""
        return cls(
            id=doc_id or data.get('id'),
            property_name=data.get('propertyName', ''),
            check_in_date=data.get('checkInDate'),
            check_out_date=data.get('checkOutDate'),
            confirmation_code=data.get('confirmationCode', ''),
            registration_token=data.get('registrationToken', ''),
            status=data.get('status', BookingStatus.PENDING.value),
            created_at=parse_datetime(data.get('createdAt')),
        )

    def __str__(self) -> str:
        return (f"Booking(id='{self.id}', property='{self.property_name}', "
                f"check_in='{self.check_in_date}', status='{self.status.value}')")


# snake_case attribute -> Firestore field
GUEST_FIELDS = {
    'first_name': 'firstName',
    'last_name': 'lastName',
    'second_last_name': 'secondLastName',
    'birth_date': 'birthDate',
    'nationality': 'nationality',
    'sex': 'sex',
    'document_type': 'documentType',
    'document_number': 'documentNumber',
    'document_sup_num': 'documentSupNum',
    'phone': 'phone',
    'email': 'email',
    'country_residence': 'countryResidence',
    'residence_address': 'residenceAddress',
    'apartment_number': 'apartmentNumber',
    'city': 'city',
    'postcode': 'postcode',
    'visit_date': 'visitDate',
    'country_code': 'countryCode',
    'booking_confirmation_code': 'bookingConfirmationCode',
    'booking_id': 'bookingId',
    'passport_scan_path': 'passportScanPath',
}

GUEST_DATE_FIELDS = ('birth_date', 'visit_date')


def guest_fields_to_firestore(values: Dict[str, Any]) -> Dict[str, Any]:
    """Map snake_case guest attributes to Firestore fields, dropping unknown keys."""
    document = {}
    for key, value in values.items():
        if key not in GUEST_FIELDS:
            continue
        if key in GUEST_DATE_FIELDS and isinstance(value, date):
            value = value.isoformat()
        elif isinstance(value, Enum):
            value = value.value
        document[GUEST_FIELDS[key]] = value
    return document


@dataclass
class Guest:
    """A registered occupant linked to a booking by its confirmation code."""
    first_name: str
    last_name: str
    birth_date: Optional[date]
    nationality: str
    sex: str
    document_type: str
    document_number: str
    phone: str
    email: str
    country_residence: str
    residence_address: str
    city: str
    postcode: str
    visit_date: Optional[date]
    second_last_name: Optional[str] = None
    document_sup_num: Optional[str] = None
    apartment_number: Optional[str] = None
    country_code: Optional[str] = None
    booking_confirmation_code: Optional[str] = None
    booking_id: Optional[str] = None
    passport_scan_path: Optional[str] = None
    timestamp: Optional[datetime] = None
    timestamp_updated: Optional[datetime] = None
    id: Optional[str] = None

    def __post_init__(self):
        self.birth_date = parse_date(self.birth_date)
        self.visit_date = parse_date(self.visit_date)

    def to_dict(self) -> Dict[str, Any]:
        """Convert guest to a Firestore document (id and timestamps excluded)."""
        values = {name: getattr(self, name) for name in GUEST_FIELDS}
        return guest_fields_to_firestore(values)

    def to_api(self) -> Dict[str, Any]:
        data = {name: getattr(self, name) for name in GUEST_FIELDS}
        for name in GUEST_DATE_FIELDS:
            data[name] = _format_date(data[name])
        data['id'] = self.id
        data['timestamp'] = self.timestamp.isoformat() if self.timestamp else None
        data['timestamp_updated'] = (
            self.timestamp_updated.isoformat() if self.timestamp_updated else None
        )
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any], doc_id: Optional[str] = None) -> 'Guest':
        """Create Guest from a Firestore document, tolerating missing fields."""
        values = {}
        for name, firestore_name in GUEST_FIELDS.items():
            values[name] = data.get(firestore_name)
        for required in ('first_name', 'last_name', 'nationality', 'sex', 'document_type',
                         'document_number', 'phone', 'email', 'country_residence',
                         'residence_address', 'city', 'postcode'):
            values[required] = values[required] or ''
        return cls(
            id=doc_id or data.get('id'),
            timestamp=parse_datetime(data.get('timestamp')),
            timestamp_updated=parse_datetime(data.get('timestampUpdated')),
            **values
        )


@dataclass
class Property:
    """A rental property bookings can refer to."""
    name: str
    created_at: Optional[datetime] = None
    id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {'name': self.name, 'createdAt': self.created_at}

    def to_api(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], doc_id: Optional[str] = None) -> 'Property':
        return cls(
            id=doc_id or data.get('id'),
            name=data.get('name', ''),
            created_at=parse_datetime(data.get('createdAt')),
        )


@dataclass
class Country:
    """Country option offered on the guest form."""
    name: str
    code: str
    id: Optional[str] = None

    def __post_init__(self):
        self.name = (self.name or '').strip()
        self.code = (self.code or '').strip().upper()

    def to_dict(self) -> Dict[str, Any]:
        return {'name': self.name, 'code': self.code}

    def to_api(self) -> Dict[str, Any]:
        return {'id': self.id, 'name': self.name, 'code': self.code}

    @classmethod
    def from_dict(cls, data: Dict[str, Any], doc_id: Optional[str] = None) -> 'Country':
        return cls(id=doc_id or data.get('id'), name=data.get('name', ''), code=data.get('code', ''))


@dataclass
class BookingStats:
    """Booking counts per status."""
    total: int = 0
    by_status: Dict[str, int] = field(default_factory=dict)

    def add(self, status: str):
        self.total += 1
        self.by_status[status] = self.by_status.get(status, 0) + 1
