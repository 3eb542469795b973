# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the MindJournal project.
# Licensed under the MIT License - see the LICENSE file for details.

import logging
from typing import Optional

from fastapi import Header
from firebase_admin import auth as firebase_auth

from mindjournal.utils.errors import NotLoggedInError
from mindjournal.utils.firebase import verify_id_token

logger = logging.getLogger(__name__)


def extract_bearer_token(authorization: Optional[str]) -> str:
    if not authorization or not authorization.startswith("Bearer "):
        raise NotLoggedInError()
    token = authorization[len("Bearer "):].strip()
    if not token:
        raise NotLoggedInError()
    return token


# ✅ Dependency to extract the verified Firebase token payload
def require_token(authorization: Optional[str] = Header(None)) -> dict:
    token = extract_bearer_token(authorization)
    try:
        return verify_id_token(token)
    except (firebase_auth.InvalidIdTokenError, firebase_auth.ExpiredIdTokenError,
            firebase_auth.RevokedIdTokenError, firebase_auth.UserDisabledError, ValueError) as e:
        logger.warning("⚠️ Rejected ID token: %s", e)
        raise NotLoggedInError("Your session has expired. Please log in again.")
