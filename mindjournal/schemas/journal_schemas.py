# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the MindJournal project.
# Licensed under the MIT License - see the LICENSE file for details.

from typing import Optional

from pydantic import BaseModel


# Validated by the journal service so bad input comes back as an ActionResult
class JournalEntryRequest(BaseModel):
    content: Optional[str] = None
    mood: Optional[str] = None
    summarize: bool = False
