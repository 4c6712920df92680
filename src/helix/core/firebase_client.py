"""
Helix Core - Firebase Admin Client.

Initializes the Firebase Admin SDK and provides the Firestore client.
"""

import logging
from functools import lru_cache

import firebase_admin
from firebase_admin import credentials, firestore

from helix.config import get_settings

logger = logging.getLogger(__name__)


def initialize_firebase_admin() -> firebase_admin.App:
    """
    Initialize the default Firebase app once.

    Uses the FIREBASE_* service account fields when they are all present,
    otherwise Application Default Credentials.
    """
    if firebase_admin._apps:
        return firebase_admin.get_app()

    firebase_settings = get_settings().firebase
    missing_fields = firebase_settings.missing_fields()

    if missing_fields:
        logger.warning(f"Missing Firebase environment variables: {missing_fields}")
        app = firebase_admin.initialize_app()
        logger.info("Firebase Admin SDK initialized with default credentials")
        return app

    try:
        cred = credentials.Certificate(firebase_settings.service_account_info())
        app = firebase_admin.initialize_app(cred)
        logger.info("Firebase Admin SDK initialized with environment variables")
        return app
    except ValueError as e:
        logger.error(f"Failed to initialize Firebase Admin SDK from service account: {e}")
        app = firebase_admin.initialize_app()
        logger.info("Firebase Admin SDK initialized with default credentials (fallback)")
        return app


@lru_cache
def get_firestore_client():
    """
    Get configured Firestore client.

    Cached to reuse the same client instance.
    """
    return firestore.client(app=initialize_firebase_admin())
