"""
Health check and monitoring endpoints.
"""
from fastapi import APIRouter
from ..config import settings
from ..dependencies import get_firestore_client
from ..models import HealthResponse
from config.settings import firebase_config


router = APIRouter(prefix="/health", tags=["health"])


@router.get(
    "",
    response_model=HealthResponse,
    summary="Health check endpoint",
    description="Check if the API is running, whether Firestore is initialised and a Storage bucket is configured",
    responses={
        200: {"description": "Service is healthy"}
    }
)
async def health_check() -> HealthResponse:
    """
    Health check endpoint for monitoring.

    Returns:
        Health status information
    """
    firestore_ready = get_firestore_client().initialized
    return HealthResponse(
        status="healthy",
        version=settings.app_version,
        dependencies={
            "firestore": "initialized" if firestore_ready else "not_initialized",
            "storage": "configured" if firebase_config.get_storage_bucket() else "not_configured",
        }
    )
