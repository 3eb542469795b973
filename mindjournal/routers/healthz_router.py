# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the MindJournal project.
# Licensed under the MIT License - see the LICENSE file for details.

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from mindjournal.utils.firebase import get_db

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/healthz")
def health_check(db=Depends(get_db)):
    result = {"firestore": False}
    try:
        # ✅ Check Firestore read
        list(db.collection("users").limit(1).stream())
        result["firestore"] = True
        return {"status": "ok", "details": result}
    except Exception as e:
        logger.warning("⚠️ Health check failed: %s", e)
        return JSONResponse(
            status_code=503,
            content={"status": "error", "error": str(e), "details": result},
        )
