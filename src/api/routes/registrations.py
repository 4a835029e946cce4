"""
Guest registration management endpoints (admin).
"""
from fastapi import APIRouter, Depends, Path
from ..models import DataResponse, ErrorResponse, ListResponse, UpdateGuestRequest
from ..dependencies import get_guest_service
from ..services.guest_service import GuestService


router = APIRouter(prefix="/registrations", tags=["registrations"])


@router.get(
    "",
    response_model=ListResponse,
    summary="List guest registrations",
    description="All registered guests, newest first"
)
def get_registrations(guest_service: GuestService = Depends(get_guest_service)):
    guests = guest_service.list_guests()
    return {
        "success": True,
        "message": f"Retrieved {len(guests)} registrations",
        "data": guests
    }


@router.get(
    "/{guest_id}",
    response_model=DataResponse,
    summary="Get a guest registration",
    responses={404: {"description": "Guest not found", "model": ErrorResponse}}
)
def get_registration(
    guest_id: str = Path(..., description="Guest document id"),
    guest_service: GuestService = Depends(get_guest_service)
):
    return {
        "success": True,
        "message": "Registration retrieved",
        "data": guest_service.get_guest(guest_id)
    }


@router.patch(
    "/{guest_id}",
    response_model=DataResponse,
    summary="Correct a guest registration",
    responses={
        400: {"description": "Invalid update", "model": ErrorResponse},
        404: {"description": "Guest not found", "model": ErrorResponse}
    }
)
def update_registration(
    request: UpdateGuestRequest,
    guest_id: str = Path(..., description="Guest document id"),
    guest_service: GuestService = Depends(get_guest_service)
):
    guest_service.update_guest(guest_id, request)
    return {
        "success": True,
        "message": "Registration updated successfully",
        "data": {"guest_id": guest_id}
    }


@router.delete(
    "/{guest_id}",
    response_model=DataResponse,
    summary="Delete a guest registration"
)
def delete_registration(
    guest_id: str = Path(..., description="Guest document id"),
    guest_service: GuestService = Depends(get_guest_service)
):
    guest_service.delete_guest(guest_id)
    return {
        "success": True,
        "message": "Registration deleted successfully",
        "data": {"guest_id": guest_id}
    }
