"""
Public guest self-registration endpoints, addressed by registration token.
"""
from fastapi import APIRouter, Depends, File, Path, UploadFile, status
from ..models import DataResponse, ErrorResponse, GuestFormData, PassportUploadResponse
from ..dependencies import get_booking_service, get_guest_service, get_logger
from ..services.booking_service import BookingService
from ..services.guest_service import GuestService
from config.settings import app_config


router = APIRouter(prefix="/register", tags=["register"])

TOKEN_ERRORS = {
    404: {"description": "Unknown registration link", "model": ErrorResponse},
    409: {"description": "Link already used or expired", "model": ErrorResponse},
}


@router.get(
    "/{token}",
    response_model=DataResponse,
    summary="Open a registration link",
    description="Booking summary and guests already registered for a pending booking",
    responses=TOKEN_ERRORS
)
def get_registration(
    token: str = Path(..., description="Registration token from the link"),
    booking_service: BookingService = Depends(get_booking_service)
):
    return {
        "success": True,
        "message": "Registration details retrieved",
        "data": booking_service.get_registration_by_token(token)
    }


@router.post(
    "/{token}/guests",
    response_model=DataResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a guest",
    responses=TOKEN_ERRORS
)
def register_guest(
    guest_data: GuestFormData,
    token: str = Path(..., description="Registration token from the link"),
    booking_service: BookingService = Depends(get_booking_service),
    guest_service: GuestService = Depends(get_guest_service)
):
    booking = booking_service.get_pending_booking_by_token(token)
    guest_id = guest_service.register_guest_for_booking(booking, guest_data)
    return {
        "success": True,
        "message": "Guest registered successfully",
        "data": {"guest_id": guest_id}
    }


@router.post(
    "/{token}/passport",
    response_model=PassportUploadResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Upload a passport scan",
    description="Accepts JPEG, PNG or PDF. Pass the returned path as passport_scan_path when registering the guest.",
    responses={**TOKEN_ERRORS, 400: {"description": "Invalid file", "model": ErrorResponse}}
)
async def upload_passport(
    token: str = Path(..., description="Registration token from the link"),
    file: UploadFile = File(..., description="Passport scan"),
    booking_service: BookingService = Depends(get_booking_service),
    guest_service: GuestService = Depends(get_guest_service)
):
    booking = booking_service.get_pending_booking_by_token(token)
    # Cap the read; one extra byte lets the size check reject oversize files
    content = await file.read(app_config.max_upload_bytes + 1)
    stored = guest_service.upload_passport_scan(
        booking, file.filename or "passport", content, file.content_type
    )
    get_logger().info("passport_uploaded", booking_id=booking.id, size=len(content))
    return {
        "success": True,
        "message": "Passport scan uploaded",
        "data": stored
    }


@router.post(
    "/{token}/complete",
    response_model=DataResponse,
    summary="Finish registration",
    description="Marks the booking as completed; the link stops working afterwards",
    responses=TOKEN_ERRORS
)
def complete_registration(
    token: str = Path(..., description="Registration token from the link"),
    booking_service: BookingService = Depends(get_booking_service)
):
    return {
        "success": True,
        "message": "Registration completed",
        "data": booking_service.complete_registration(token)
    }
