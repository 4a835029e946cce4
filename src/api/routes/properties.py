"""
Property API endpoints (admin).
"""
from fastapi import APIRouter, Depends, Path, status
from ..models import DataResponse, ErrorResponse, ListResponse, PropertyRequest
from ..dependencies import get_property_service
from ..services.property_service import PropertyService


router = APIRouter(prefix="/properties", tags=["properties"])


@router.get("", response_model=ListResponse, summary="List properties")
def get_properties(property_service: PropertyService = Depends(get_property_service)):
    properties = property_service.list_properties()
    return {
        "success": True,
        "message": f"Retrieved {len(properties)} properties",
        "data": properties
    }


@router.post(
    "",
    response_model=DataResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a property"
)
def create_property(
    request: PropertyRequest,
    property_service: PropertyService = Depends(get_property_service)
):
    return {
        "success": True,
        "message": "Property created successfully",
        "data": property_service.create_property(request.name)
    }


@router.patch(
    "/{property_id}",
    response_model=DataResponse,
    summary="Rename a property",
    responses={404: {"description": "Property not found", "model": ErrorResponse}}
)
def update_property(
    request: PropertyRequest,
    property_id: str = Path(..., description="Property document id"),
    property_service: PropertyService = Depends(get_property_service)
):
    return {
        "success": True,
        "message": "Property updated successfully",
        "data": property_service.rename_property(property_id, request.name)
    }


@router.delete("/{property_id}", response_model=DataResponse, summary="Delete a property")
def delete_property(
    property_id: str = Path(..., description="Property document id"),
    property_service: PropertyService = Depends(get_property_service)
):
    existed = property_service.delete_property(property_id)
    return {
        "success": True,
        "message": "Property deleted successfully",
        "data": {"property_id": property_id, "deleted": existed}
    }
