# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the MindJournal project.
# Licensed under the MIT License - see the LICENSE file for details.

from typing import Optional

from pydantic import BaseModel


class ChatMessageRequest(BaseModel):
    text: Optional[str] = None
    media_url: Optional[str] = None
    media_mime_type: Optional[str] = None


class SessionRenameRequest(BaseModel):
    name: Optional[str] = None
