"""
Booking API endpoints (admin).
"""
from typing import Optional
from fastapi import APIRouter, Depends, Path, Query, status
from ..models import (
    BookingStatsResponse, CreateBookingRequest, DataResponse, ErrorResponse, ListResponse,
    UpdateBookingRequest
)
from ..dependencies import get_booking_service
from ..services.booking_service import BookingService
from ...utils.models import BookingStatus


router = APIRouter(prefix="/bookings", tags=["bookings"])


@router.post(
    "",
    response_model=DataResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new booking",
    description="Create a booking and issue its unique registration token",
    responses={
        201: {"description": "Booking created successfully"},
        400: {"description": "Invalid booking data", "model": ErrorResponse},
        503: {"description": "Token could not be issued, retry later", "model": ErrorResponse}
    }
)
def create_booking(
    request: CreateBookingRequest,
    booking_service: BookingService = Depends(get_booking_service)
):
    """
    Create a new booking.

    Args:
        request: Booking creation request
        booking_service: Injected booking service

    Returns:
        Created booking with its registration link
    """
    booking = booking_service.create_booking(request)
    return {
        "success": True,
        "message": "Booking created successfully",
        "data": booking
    }


@router.get(
    "",
    response_model=ListResponse,
    summary="List bookings",
    description="Retrieve bookings newest first, optionally filtered by status",
    responses={
        200: {"description": "Bookings retrieved successfully"},
        503: {"description": "Store unavailable", "model": ErrorResponse}
    }
)
def get_bookings(
    status_filter: Optional[BookingStatus] = Query(None, alias="status", description="Filter by booking status"),
    booking_service: BookingService = Depends(get_booking_service)
):
    bookings = booking_service.list_bookings(status_filter)
    return {
        "success": True,
        "message": f"Retrieved {len(bookings)} bookings",
        "data": bookings
    }


@router.get(
    "/stats",
    response_model=BookingStatsResponse,
    summary="Get booking statistics",
    description="Total bookings and counts per status"
)
def get_booking_stats(
    booking_service: BookingService = Depends(get_booking_service)
):
    return {
        "success": True,
        "message": "Booking statistics retrieved",
        "data": booking_service.get_booking_statistics()
    }


@router.get(
    "/{booking_id}",
    response_model=DataResponse,
    summary="Get a booking",
    responses={404: {"description": "Booking not found", "model": ErrorResponse}}
)
def get_booking(
    booking_id: str = Path(..., description="Booking document id"),
    booking_service: BookingService = Depends(get_booking_service)
):
    return {
        "success": True,
        "message": "Booking retrieved",
        "data": booking_service.get_booking(booking_id)
    }


@router.patch(
    "/{booking_id}",
    response_model=DataResponse,
    summary="Update a booking",
    description="Partially update property, dates, confirmation code or status. The registration token cannot change.",
    responses={
        400: {"description": "Invalid update", "model": ErrorResponse},
        404: {"description": "Booking not found", "model": ErrorResponse}
    }
)
def update_booking(
    request: UpdateBookingRequest,
    booking_id: str = Path(..., description="Booking document id"),
    booking_service: BookingService = Depends(get_booking_service)
):
    return {
        "success": True,
        "message": "Booking updated successfully",
        "data": booking_service.update_booking(booking_id, request)
    }


@router.delete(
    "/{booking_id}",
    response_model=DataResponse,
    summary="Delete a booking"
)
def delete_booking(
    booking_id: str = Path(..., description="Booking document id"),
    booking_service: BookingService = Depends(get_booking_service)
):
    existed = booking_service.delete_booking(booking_id)
    return {
        "success": True,
        "message": "Booking deleted successfully",
        "data": {"booking_id": booking_id, "deleted": existed}
    }


@router.get(
    "/{booking_id}/guests",
    response_model=ListResponse,
    summary="List guests registered for a booking",
    responses={404: {"description": "Booking not found", "model": ErrorResponse}}
)
def get_booking_guests(
    booking_id: str = Path(..., description="Booking document id"),
    booking_service: BookingService = Depends(get_booking_service)
):
    guests = booking_service.get_booking_guests(booking_id)
    return {
        "success": True,
        "message": f"Retrieved {len(guests)} guests",
        "data": guests
    }
