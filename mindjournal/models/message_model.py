# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the MindJournal project.
# Licensed under the MIT License - see the LICENSE file for details.

import enum
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class MessageRole(str, enum.Enum):
    user = "user"
    assistant = "assistant"


class Classification(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    ptsd_symptoms: List[str] = Field(default_factory=list, alias="ptsdSymptoms")
    gad_symptoms: List[str] = Field(default_factory=list, alias="gadSymptoms")
    mmd_symptoms: List[str] = Field(default_factory=list, alias="mmdSymptoms")
    summary: str = ""


class ChatMessage(BaseModel):
    """
    Stored at users/{uid}/sessions/{sid}/messages/{id}, ordered by `timestamp`.
    Messages are append-only.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str
    role: MessageRole
    text: Optional[str] = None
    media_url: Optional[str] = Field(None, alias="mediaUrl")
    media_mime_type: Optional[str] = Field(None, alias="mediaMimeType")
    classification: Optional[Classification] = None
    self_harm_warning: Optional[str] = Field(None, alias="selfHarmWarning")
    analysis: Optional[Dict[str, Any]] = None  # transcript / sentiment / emotion signals
    timestamp: Optional[datetime] = None
    user_id: Optional[str] = Field(None, alias="userId")

    @classmethod
    def from_snapshot(cls, snapshot):
        return cls.model_validate({**(snapshot.to_dict() or {}), "id": snapshot.id})
