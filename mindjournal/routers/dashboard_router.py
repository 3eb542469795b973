# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the MindJournal project.
# Licensed under the MIT License - see the LICENSE file for details.

from fastapi import APIRouter, Depends

from mindjournal.auth import get_current_user
from mindjournal.models.user_model import User
from mindjournal.schemas.action_schemas import action_result, dump
from mindjournal.services.dashboard_service import dashboard_summary
from mindjournal.utils.firebase import get_db

router = APIRouter(tags=["Dashboard"])


@router.get("/dashboard")
def dashboard(db=Depends(get_db), user: User = Depends(get_current_user)):
    """
    Entry and session counts, the mood histogram for the chart and the most
    recent entries.
    """
    summary = dashboard_summary(db, user.id)
    summary["recent_entries"] = [dump(e) for e in summary["recent_entries"]]
    return action_result(**summary)
