"""
Process-wide Firebase Admin app initialisation.
"""
import firebase_admin
from firebase_admin import credentials

from ..utils.logger import get_logger
from config.settings import firebase_config

logger = get_logger("guest_registration.firebase")


def get_firebase_app() -> firebase_admin.App:
    """
    Return the default Firebase app, initialising it on first use.

    Credentials come from GOOGLE_APPLICATION_CREDENTIALS when set, otherwise
    from the FIREBASE_* service account variables.

    Raises:
        ValueError: If neither source provides a project id
    """
    if firebase_admin._apps:
        return firebase_admin.get_app()

    if firebase_config.credentials_file:
        cred = credentials.Certificate(firebase_config.credentials_file)
    else:
        cred_dict = firebase_config.get_credentials_dict()
        if not cred_dict.get('project_id'):
            raise ValueError("Firebase project ID not configured")
        cred = credentials.Certificate(cred_dict)

    options = {}
    bucket = firebase_config.get_storage_bucket()
    if bucket:
        options['storageBucket'] = bucket

    app = firebase_admin.initialize_app(cred, options)
    logger.info("Firebase app initialized", project_id=app.project_id, storage_bucket=bucket or None)
    return app
