from typing import Dict, Any

from firebase_admin import auth
from firebase_admin.exceptions import FirebaseError

from ...firebase_sync.firebase_app import get_firebase_app
from ...utils.errors import PermissionDeniedError, StoreUnavailable, UnauthenticatedError
from config.settings import auth_config


def verify_admin_token(id_token: str) -> Dict[str, Any]:
    """
    Verify a Firebase ID token and check the caller may use the admin API.

    Returns:
        Decoded token claims

    Raises:
        UnauthenticatedError: Token missing, malformed, expired or revoked
        PermissionDeniedError: Token valid but e-mail is not an admin address
        StoreUnavailable: Firebase credentials are missing
    """
    if not id_token:
        raise UnauthenticatedError("Missing ID token.")

    try:
        app = get_firebase_app()
    except ValueError as e:
        raise StoreUnavailable("Firebase is not configured.", details={"error": str(e)}) from e

    try:
        claims = auth.verify_id_token(id_token, app=app)
    except (ValueError, FirebaseError) as e:
        raise UnauthenticatedError("Invalid token", details={"error": str(e)}) from e

    email = claims.get("email")
    if not auth_config.is_admin_email(email):
        raise PermissionDeniedError(
            "Your account does not have permission to access this area.",
            details={"email": email}
        )
    return claims
