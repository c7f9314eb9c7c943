"""Firebase initialization and configuration.

This module handles Firebase Admin SDK initialization and provides the
singleton Firestore client used by the repositories.
"""

import os
from typing import Optional

import firebase_admin
from firebase_admin import (
    credentials,
    firestore,
)

from skillswap.core.config import (
    Environment,
    settings,
)
from skillswap.core.logging import logger


class FirebaseConfig:
    """Firebase configuration and service manager."""

    def __init__(self):
        """Initialize Firebase configuration."""
        self._app: Optional[firebase_admin.App] = None
        self._firestore_client: Optional[firestore.Client] = None

    def initialize(self) -> None:
        """Initialize Firebase Admin SDK."""
        if self._app is not None:
            return

        options = {"projectId": settings.FIREBASE_PROJECT_ID} if settings.FIREBASE_PROJECT_ID else None

        try:
            if settings.FIREBASE_CREDENTIALS_PATH and os.path.exists(
                settings.FIREBASE_CREDENTIALS_PATH
            ):
                cred = credentials.Certificate(settings.FIREBASE_CREDENTIALS_PATH)
                self._app = firebase_admin.initialize_app(cred, options)
            else:
                # Application Default Credentials (GCP runtime or emulator)
                self._app = firebase_admin.initialize_app(options=options)

            logger.info("firebase_initialized", project_id=settings.FIREBASE_PROJECT_ID)

        except Exception as e:
            if settings.APP_ENV == Environment.DEVELOPMENT:
                logger.warning("firebase_initialization_failed", error=str(e))
                return
            raise RuntimeError(f"Failed to initialize Firebase: {e}") from e

    @property
    def firestore(self) -> Optional[firestore.Client]:
        """Get Firestore client."""
        if self._firestore_client is None:
            self.initialize()
            if self._app is None:
                return None
            self._firestore_client = firestore.client(app=self._app)
        return self._firestore_client


firebase_config = FirebaseConfig()


def get_firestore() -> Optional[firestore.Client]:
    """Get Firestore client instance."""
    return firebase_config.firestore
