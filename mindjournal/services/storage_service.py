# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the MindJournal project.
# Licensed under the MIT License - see the LICENSE file for details.

import logging
import os
import uuid
from typing import NamedTuple
from urllib.parse import quote

from google.api_core import exceptions as gcp_exceptions

from mindjournal.utils.errors import PersistenceError, ValidationError

logger = logging.getLogger(__name__)


class UploadedFile(NamedTuple):
    path: str
    url: str
    mime_type: str


def download_url(bucket_name: str, path: str, token: str) -> str:
    """Same URL shape the Firebase client SDK's getDownloadURL returns."""
    return (
        f"https://firebasestorage.googleapis.com/v0/b/{bucket_name}/o/"
        f"{quote(path, safe='')}?alt=media&token={token}"
    )


def upload_user_file(bucket, user_id: str, filename: str, data: bytes, mime_type: str) -> UploadedFile:
    """Stores the file under user_uploads/{uid}/{uuid}-{name} and returns its download URL."""
    if not data:
        raise ValidationError("The uploaded file is empty.")

    name = os.path.basename(filename or "").strip() or "upload"
    path = f"user_uploads/{user_id}/{uuid.uuid4()}-{name}"
    token = str(uuid.uuid4())
    mime_type = mime_type or "application/octet-stream"

    try:
        blob = bucket.blob(path)
        blob.metadata = {"firebaseStorageDownloadTokens": token}
        blob.upload_from_string(data, content_type=mime_type)
    except gcp_exceptions.GoogleAPIError as e:
        logger.exception("❌ File upload error")
        raise PersistenceError("File upload failed.") from e

    logger.info("📤 Uploaded %s (%s, %d bytes)", path, mime_type, len(data))
    return UploadedFile(path=path, url=download_url(bucket.name, path, token), mime_type=mime_type)
