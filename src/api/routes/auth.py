from fastapi import APIRouter, Request
from ..models import DataResponse, ErrorResponse

router = APIRouter(prefix="/auth", tags=["auth"])


@router.get(
    "/me",
    response_model=DataResponse,
    summary="Current admin",
    responses={401: {"model": ErrorResponse}, 403: {"model": ErrorResponse}}
)
async def me(request: Request):
    """Identity of the admin whose Firebase ID token was accepted."""
    return {
        "success": True,
        "message": "Authenticated",
        "data": {
            "email": getattr(request.state, "user_email", None),
            "uid": getattr(request.state, "user_uid", None),
        }
    }
