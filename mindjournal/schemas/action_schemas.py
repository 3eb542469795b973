# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the MindJournal project.
# Licensed under the MIT License - see the LICENSE file for details.

from typing import Optional

from pydantic import BaseModel


class ActionResult(BaseModel):
    """Uniform result of every user action; payload fields ride alongside."""
    success: bool
    message: Optional[str] = None


def action_result(success: bool = True, message: Optional[str] = None, **payload) -> dict:
    result = ActionResult(success=success, message=message).model_dump(exclude_none=True)
    result.update(payload)
    return result


def dump(model) -> dict:
    # Documents go out with the same field names they are stored with
    return model.model_dump(mode="json", by_alias=True, exclude_none=True)
