"""
Firebase Storage client for guest passport scans.
"""
import os
import uuid
from datetime import timedelta
from typing import Dict, Optional

from firebase_admin import storage

from .firebase_app import get_firebase_app
from ..utils.errors import InvalidArgumentError, StoreUnavailable
from ..utils.logger import get_logger
from config.settings import app_config


class StorageClient:
    """Uploads passport scans and hands out signed download URLs."""

    def __init__(self):
        self.logger = get_logger("guest_registration.storage")
        self.bucket = None

    def _get_bucket(self):
        if self.bucket is None:
            try:
                get_firebase_app()
                self.bucket = storage.bucket()
            except Exception as e:
                self.logger.error("Failed to open storage bucket", error=str(e))
                raise StoreUnavailable("Storage bucket is not available.") from e
        return self.bucket

    def validate_upload(self, filename: str, content: bytes, content_type: Optional[str]) -> str:
        """
        Check an upload against the allowed types and size limit.

        Returns:
            File extension to store the blob under
        """
        if not content:
            raise InvalidArgumentError("Uploaded file is empty.", details={"filename": filename})
        if len(content) > app_config.max_upload_bytes:
            raise InvalidArgumentError(
                "Uploaded file is too large.",
                details={"filename": filename, "max_bytes": app_config.max_upload_bytes}
            )
        extension = app_config.allowed_upload_types.get((content_type or "").lower())
        if extension is None:
            raise InvalidArgumentError(
                "Unsupported file type.",
                details={"content_type": content_type,
                         "allowed": sorted(app_config.allowed_upload_types)}
            )
        return extension

    def upload_passport_scan(
        self,
        booking_id: str,
        filename: str,
        content: bytes,
        content_type: Optional[str]
    ) -> Dict[str, str]:
        """
        Store a passport scan under passports/<booking_id>/.

        Args:
            booking_id: Booking the scan belongs to
            filename: Original client filename (kept as metadata only)
            content: File bytes
            content_type: MIME type reported by the client

        Returns:
            Dictionary with the blob ``path`` and a signed ``url``
        """
        extension = self.validate_upload(filename, content, content_type)
        path = f"{app_config.passport_folder}/{booking_id}/{uuid.uuid4().hex}{extension}"

        bucket = self._get_bucket()
        try:
            blob = bucket.blob(path)
            blob.metadata = {"originalFilename": os.path.basename(filename or "")}
            blob.upload_from_string(content, content_type=content_type)
        except Exception as e:
            self.logger.error("Passport upload failed", booking_id=booking_id, error=str(e))
            raise StoreUnavailable("Failed to upload passport scan.") from e

        self.logger.info("Passport scan uploaded", booking_id=booking_id, path=path, size=len(content))
        return {"path": path, "url": self.get_download_url(path)}

    def get_download_url(self, path: str) -> str:
        """Signed, time-limited URL for reading a stored blob."""
        bucket = self._get_bucket()
        try:
            return bucket.blob(path).generate_signed_url(
                version="v4",
                expiration=timedelta(minutes=app_config.signed_url_minutes),
                method="GET",
            )
        except Exception as e:
            self.logger.error("Failed to sign download URL", path=path, error=str(e))
            raise StoreUnavailable("Failed to create download URL.") from e
