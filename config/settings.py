"""
Configuration settings for the Guest Registration service.
"""
import os
from typing import Dict, Any, Optional, Tuple
from dataclasses import dataclass, field
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def _split_env_list(name: str) -> Tuple[str, ...]:
    raw = os.getenv(name, "")
    return tuple(item.strip().lower() for item in raw.split(",") if item.strip())


@dataclass
class FirebaseConfig:
    """Firebase Admin SDK configuration settings."""
    project_id: str = os.getenv("FIREBASE_PROJECT_ID", "")
    client_email: str = os.getenv("FIREBASE_CLIENT_EMAIL", "")
    private_key: str = os.getenv("FIREBASE_PRIVATE_KEY", "")
    private_key_id: str = os.getenv("FIREBASE_PRIVATE_KEY_ID", "")
    client_id: str = os.getenv("FIREBASE_CLIENT_ID", "")
    credentials_file: Optional[str] = os.getenv("GOOGLE_APPLICATION_CREDENTIALS") or None
    storage_bucket: str = os.getenv("FIREBASE_STORAGE_BUCKET", "")

    def get_credentials_dict(self) -> Dict[str, Any]:
        """Build a service account dictionary from the environment."""
        return {
            "type": "service_account",
            "project_id": self.project_id,
            "private_key_id": self.private_key_id,
            # .env files keep the key on one line with escaped newlines
            "private_key": self.private_key.replace("\\n", "\n"),
            "client_email": self.client_email,
            "client_id": self.client_id,
            "token_uri": "https://oauth2.googleapis.com/token",
        }

    def get_storage_bucket(self) -> str:
        """Bucket name, defaulting to the project's appspot bucket."""
        if self.storage_bucket:
            return self.storage_bucket
        return f"{self.project_id}.appspot.com" if self.project_id else ""


@dataclass
class AppConfig:
    """Application configuration settings."""
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: Optional[str] = os.getenv("LOG_FILE") or None

    # Firestore collection names
    bookings_collection: str = "bookings"
    guests_collection: str = "guests"
    properties_collection: str = "properties"
    countries_collection: str = "countries"

    # Registration token issuance
    token_length: int = int(os.getenv("TOKEN_LENGTH", "12"))
    token_max_retries: int = int(os.getenv("TOKEN_MAX_RETRIES", "5"))

    # Guest form rules
    min_guest_age: int = int(os.getenv("MIN_GUEST_AGE", "14"))

    # Passport scan uploads
    passport_folder: str = "passports"
    max_upload_bytes: int = int(os.getenv("MAX_UPLOAD_BYTES", str(10 * 1024 * 1024)))
    signed_url_minutes: int = int(os.getenv("SIGNED_URL_MINUTES", "60"))
    allowed_upload_types: Dict[str, str] = field(default_factory=lambda: {
        "image/jpeg": ".jpg",
        "image/png": ".png",
        "application/pdf": ".pdf",
    })


@dataclass
class AuthConfig:
    """Admin access settings."""
    admin_email_domain: str = os.getenv("ADMIN_EMAIL_DOMAIN", "artbutton.com")
    admin_emails: Tuple[str, ...] = _split_env_list("ADMIN_EMAILS")

    def is_admin_email(self, email: Optional[str]) -> bool:
        if not email:
            return False
        email = email.strip().lower()
        if email in self.admin_emails:
            return True
        domain = email.rsplit("@", 1)[-1] if "@" in email else ""
        return bool(self.admin_email_domain) and domain == self.admin_email_domain.lower()


@dataclass
class APIConfig:
    """API and URL configuration settings."""
    # Origin of the guest-facing site that serves /register/<token>
    public_base_url: str = os.getenv("PUBLIC_BASE_URL", "http://localhost:5173")


firebase_config = FirebaseConfig()
app_config = AppConfig()
auth_config = AuthConfig()
api_config = APIConfig()
