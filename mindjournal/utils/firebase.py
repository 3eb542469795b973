# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the MindJournal project.
# Licensed under the MIT License - see the LICENSE file for details.

import json
import logging

import firebase_admin
from firebase_admin import auth, credentials, firestore, storage

from mindjournal import config

logger = logging.getLogger(__name__)


def get_firebase_app():
    """
    Initialize Firebase Admin only once.
    FIREBASE_ADMIN_JSON may hold the stringified service account (hosted envs)
    or a path to the JSON file (local dev). Falls back to application default
    credentials when unset.
    """
    if firebase_admin._apps:
        return firebase_admin.get_app()

    raw_json = config.FIREBASE_ADMIN_JSON
    try:
        if not raw_json:
            cred = credentials.ApplicationDefault()
        elif raw_json.strip().startswith("{"):
            cred = credentials.Certificate(json.loads(raw_json))
        else:
            cred = credentials.Certificate(raw_json)

        options = {}
        if config.FIREBASE_STORAGE_BUCKET:
            options["storageBucket"] = config.FIREBASE_STORAGE_BUCKET

        app = firebase_admin.initialize_app(cred, options)
        logger.info("✅ Firebase Admin initialized")
        return app

    except Exception as e:
        raise RuntimeError("❌ Failed to initialize Firebase Admin SDK") from e


# ---------------------- FastAPI dependencies ----------------------

def get_db():
    return firestore.client(get_firebase_app())


def get_bucket():
    return storage.bucket(app=get_firebase_app())


def verify_id_token(id_token: str) -> dict:
    """
    Decode a Firebase Auth ID token. Raises firebase_admin.auth errors on
    invalid, expired or revoked tokens.
    """
    return auth.verify_id_token(id_token, app=get_firebase_app())
