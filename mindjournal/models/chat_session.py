# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the MindJournal project.
# Licensed under the MIT License - see the LICENSE file for details.

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ChatSession(BaseModel):
    """Stored at users/{uid}/sessions/{id}. Owns `messages` and `questions`."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str = ""
    created_at: Optional[datetime] = Field(None, alias="createdAt")

    @classmethod
    def from_snapshot(cls, snapshot):
        return cls.model_validate({**(snapshot.to_dict() or {}), "id": snapshot.id})
