"""
Data models for API responses and requests.
"""
from typing import Optional, Dict, Any, List
from datetime import date, datetime, timezone
from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_serializer, field_validator, model_validator

from ..utils.models import BookingStatus, DocumentType, Sex
from ..utils.validators import validate_min_age, validate_phone, validate_visit_date
from config.settings import app_config


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class APIResponse(BaseModel):
    """Base API response model."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    success: bool = Field(..., description="Whether the request was successful")
    message: str = Field(..., description="Response message")
    timestamp: datetime = Field(default_factory=_utcnow, description="Response timestamp")

    @field_serializer('timestamp')
    def serialize_timestamp(self, timestamp: datetime) -> str:
        return timestamp.isoformat()


class ErrorResponse(APIResponse):
    """Error response model."""
    error_code: Optional[str] = Field(None, description="Error code for debugging")
    details: Optional[Dict[str, Any]] = Field(None, description="Additional error details")


class HealthResponse(BaseModel):
    """Health check response model."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    status: str = Field(..., description="Service status")
    timestamp: datetime = Field(default_factory=_utcnow, description="Health check timestamp")
    version: str = Field(..., description="API version")
    dependencies: Dict[str, str] = Field(default_factory=dict, description="Dependency statuses")

    @field_serializer('timestamp')
    def serialize_timestamp(self, timestamp: datetime) -> str:
        return timestamp.isoformat()


class DataResponse(APIResponse):
    """Response carrying a single object."""
    data: Dict[str, Any] = Field(..., description="Response payload")


class ListResponse(APIResponse):
    """Response carrying a list of objects."""
    data: List[Dict[str, Any]] = Field(..., description="Response payload")


# Booking Models

class CreateBookingRequest(BaseModel):
    """Request model for creating a booking."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    property_name: str = Field(..., min_length=1, description="Property the booking is for")
    check_in_date: date = Field(..., description="Check-in date (YYYY-MM-DD)")
    check_out_date: date = Field(..., description="Check-out date (YYYY-MM-DD)")
    confirmation_code: str = Field(..., min_length=1, description="Confirmation code shared with the guest")
    status: BookingStatus = Field(BookingStatus.PENDING, description="Initial booking status")


class UpdateBookingRequest(BaseModel):
    """Request model for updating a booking (partial update, token excluded)."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    property_name: Optional[str] = Field(None, min_length=1, description="Property the booking is for")
    check_in_date: Optional[date] = Field(None, description="Check-in date")
    check_out_date: Optional[date] = Field(None, description="Check-out date")
    confirmation_code: Optional[str] = Field(None, min_length=1, description="Confirmation code")
    status: Optional[BookingStatus] = Field(None, description="Booking status")


class BookingStatsResponse(APIResponse):
    """Response model for booking statistics."""
    data: Dict[str, Any] = Field(..., description="Total and per-status booking counts")


# Guest Models

class GuestFormData(BaseModel):
    """Fields a guest fills in on the registration form."""
    model_config = ConfigDict(frozen=True, extra="forbid", str_strip_whitespace=True)

    first_name: str = Field(..., min_length=2, description="First name")
    last_name: str = Field(..., min_length=2, description="Last name")
    second_last_name: Optional[str] = Field(None, description="Second last name")
    birth_date: date = Field(..., description="Birth date (YYYY-MM-DD)")
    nationality: str = Field(..., min_length=1, description="Nationality")
    sex: Sex = Field(..., description="Sex")
    document_type: DocumentType = Field(..., description="Identity document type")
    document_number: str = Field(..., min_length=5, max_length=20, description="Identity document number")
    document_sup_num: Optional[str] = Field(None, description="Document support number")
    phone: str = Field(..., description="Phone number in international format")
    email: EmailStr = Field(..., description="Email address")
    country_residence: str = Field(..., min_length=1, description="Country of residence")
    residence_address: str = Field(..., min_length=1, description="Residence address")
    apartment_number: Optional[str] = Field(None, description="Apartment number")
    city: str = Field(..., min_length=1, description="City")
    postcode: str = Field(..., min_length=1, description="Postcode")
    visit_date: date = Field(..., description="Visit date (YYYY-MM-DD)")
    country_code: Optional[str] = Field(None, description="Phone country code")
    passport_scan_path: Optional[str] = Field(None, description="Storage path returned by the passport upload")

    @field_validator('birth_date')
    @classmethod
    def check_min_age(cls, value: date) -> date:
        if not validate_min_age(value, app_config.min_guest_age):
            raise ValueError(f"guest must be at least {app_config.min_guest_age} years old")
        return value

    @field_validator('visit_date')
    @classmethod
    def check_visit_date(cls, value: date) -> date:
        if not validate_visit_date(value):
            raise ValueError("visit date cannot be in the past")
        return value

    @field_validator('phone')
    @classmethod
    def check_phone(cls, value: str) -> str:
        if not validate_phone(value):
            raise ValueError("invalid phone number")
        return value


class CreateGuestRequest(GuestFormData):
    """Guest data linked to a booking, as accepted by the guest service."""
    booking_id: Optional[str] = Field(None, description="Booking document id")
    booking_confirmation_code: Optional[str] = Field(None, description="Booking confirmation code")


class UpdateGuestRequest(BaseModel):
    """Partial guest update from the admin dashboard."""
    model_config = ConfigDict(frozen=True, extra="forbid", str_strip_whitespace=True)

    first_name: Optional[str] = Field(None, min_length=2)
    last_name: Optional[str] = Field(None, min_length=2)
    second_last_name: Optional[str] = None
    birth_date: Optional[date] = None
    nationality: Optional[str] = None
    sex: Optional[Sex] = None
    document_type: Optional[DocumentType] = None
    document_number: Optional[str] = Field(None, min_length=5, max_length=20)
    document_sup_num: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[EmailStr] = None
    country_residence: Optional[str] = None
    residence_address: Optional[str] = None
    apartment_number: Optional[str] = None
    city: Optional[str] = None
    postcode: Optional[str] = None
    visit_date: Optional[date] = None
    country_code: Optional[str] = None
    passport_scan_path: Optional[str] = None
    # Accepted only so the service can refuse them explicitly
    booking_id: Optional[str] = None
    booking_confirmation_code: Optional[str] = None

    @field_validator('phone')
    @classmethod
    def check_phone(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not validate_phone(value):
            raise ValueError("invalid phone number")
        return value


class PassportUploadResponse(APIResponse):
    data: Dict[str, str] = Field(..., description="Storage path and signed URL of the scan")


# Reference data Models

class PropertyRequest(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid", str_strip_whitespace=True)

    name: str = Field(..., min_length=1, description="Property name")


class CountryRequest(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid", str_strip_whitespace=True)

    name: str = Field(..., min_length=1, description="Country name")
    code: str = Field(..., min_length=1, max_length=3, description="Country code")


class UpdateCountryRequest(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid", str_strip_whitespace=True)

    name: Optional[str] = Field(None, min_length=1)
    code: Optional[str] = Field(None, min_length=1, max_length=3)

    @model_validator(mode='after')
    def check_not_empty(self):
        if self.name is None and self.code is None:
            raise ValueError("name or code is required")
        return self
