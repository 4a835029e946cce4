"""
Country option endpoints. Listing is public, changes are admin only.
"""
from fastapi import APIRouter, Depends, Path, status
from ..models import CountryRequest, DataResponse, ErrorResponse, ListResponse, UpdateCountryRequest
from ..dependencies import get_country_service
from ..services.country_service import CountryService


router = APIRouter(prefix="/countries", tags=["countries"])


@router.get("", response_model=ListResponse, summary="List countries")
def get_countries(country_service: CountryService = Depends(get_country_service)):
    countries = country_service.list_countries()
    return {
        "success": True,
        "message": f"Retrieved {len(countries)} countries",
        "data": countries
    }


@router.post(
    "",
    response_model=DataResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a country"
)
def create_country(
    request: CountryRequest,
    country_service: CountryService = Depends(get_country_service)
):
    return {
        "success": True,
        "message": "Country added successfully",
        "data": country_service.create_country(request.name, request.code)
    }


@router.patch(
    "/{country_id}",
    response_model=DataResponse,
    summary="Update a country",
    responses={404: {"description": "Country not found", "model": ErrorResponse}}
)
def update_country(
    request: UpdateCountryRequest,
    country_id: str = Path(..., description="Country document id"),
    country_service: CountryService = Depends(get_country_service)
):
    return {
        "success": True,
        "message": "Country updated successfully",
        "data": country_service.update_country(country_id, request.name, request.code)
    }


@router.delete("/{country_id}", response_model=DataResponse, summary="Delete a country")
def delete_country(
    country_id: str = Path(..., description="Country document id"),
    country_service: CountryService = Depends(get_country_service)
):
    existed = country_service.delete_country(country_id)
    return {
        "success": True,
        "message": "Country deleted successfully",
        "data": {"country_id": country_id, "deleted": existed}
    }
