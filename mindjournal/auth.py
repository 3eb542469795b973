# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the MindJournal project.
# Licensed under the MIT License - see the LICENSE file for details.

from fastapi import Depends

from mindjournal.models.user_model import User
from mindjournal.utils.auth_utils import require_token
from mindjournal.utils.errors import NotLoggedInError


def get_current_user(user_data: dict = Depends(require_token)) -> User:
    if not user_data.get("uid"):
        raise NotLoggedInError()
    return User.from_token(user_data)
