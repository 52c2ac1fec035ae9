"""
Firebase Application

Initializes the firebase-admin default app once per process. Both the
Firestore document store and the Firebase identity provider are built on it.

Credentials:
- FIREBASE_CREDENTIALS_PATH set: service account JSON file
- otherwise: Application Default Credentials (works locally and on Cloud Run)
"""

import logging

import firebase_admin
from firebase_admin import credentials

from bookclub.config import Settings

logger = logging.getLogger(__name__)


def get_firebase_app(settings: Settings) -> firebase_admin.App:
    """Return the default Firebase app, initializing it on first use."""
    try:
        return firebase_admin.get_app()
    except ValueError:
        pass  # not initialized yet

    if settings.firebase_credentials_path:
        cred = credentials.Certificate(settings.firebase_credentials_path)
    else:
        cred = credentials.ApplicationDefault()

    options = {"httpTimeout": settings.external_timeout_seconds}
    if settings.firebase_project_id:
        options["projectId"] = settings.firebase_project_id

    app = firebase_admin.initialize_app(cred, options)
    logger.info(f"Firebase initialized for project {app.project_id or '<inferred>'}")
    return app
