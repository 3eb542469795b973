# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the MindJournal project.
# Licensed under the MIT License - see the LICENSE file for details.

from fastapi import APIRouter, Depends

from mindjournal.auth import get_current_user
from mindjournal.models.user_model import User
from mindjournal.schemas.action_schemas import action_result

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.get("/me")
def who_am_i(user: User = Depends(get_current_user)):
    """Profile of the signed-in Firebase user."""
    return action_result(user=user.model_dump())
