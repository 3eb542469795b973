# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the MindJournal project.
# Licensed under the MIT License - see the LICENSE file for details.

import enum
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Mood(str, enum.Enum):
    happy = "Happy"
    calm = "Calm"
    neutral = "Neutral"
    sad = "Sad"
    anxious = "Anxious"


MOODS = [m.value for m in Mood]


class JournalEntry(BaseModel):
    """
    Stored at users/{uid}/journalEntries/{id}. The web client writes here too,
    so `mood` is read back as a plain string and `userId` may be missing.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str
    user_id: Optional[str] = Field(None, alias="userId")
    created_at: Optional[datetime] = Field(None, alias="createdAt")
    mood: Optional[str] = None
    content: str = ""
    summary: Optional[str] = None

    @classmethod
    def from_snapshot(cls, snapshot):
        return cls.model_validate({**(snapshot.to_dict() or {}), "id": snapshot.id})
