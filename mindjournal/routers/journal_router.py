# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the MindJournal project.
# Licensed under the MIT License - see the LICENSE file for details.

from typing import Optional

from fastapi import APIRouter, Depends, Query

from mindjournal.auth import get_current_user
from mindjournal.models.user_model import User
from mindjournal.schemas.action_schemas import action_result, dump
from mindjournal.schemas.journal_schemas import JournalEntryRequest
from mindjournal.services.journal_service import (
    create_journal_entry,
    delete_journal_entry,
    list_journal_entries,
)
from mindjournal.services.prompt_flows import PromptFlowClient, get_prompt_flows
from mindjournal.utils.firebase import get_db

router = APIRouter(prefix="/journal", tags=["Journal"])


@router.post("")
def add_entry(
    payload: JournalEntryRequest,
    db=Depends(get_db),
    flows: PromptFlowClient = Depends(get_prompt_flows),
    user: User = Depends(get_current_user),
):
    entry = create_journal_entry(
        db, user.id, payload.content, payload.mood, summarize=payload.summarize, flows=flows
    )
    return action_result(message="📝 Journal entry created successfully.", entry=dump(entry))


@router.get("")
def list_entries(
    limit: Optional[int] = Query(None, ge=1, le=500),
    db=Depends(get_db),
    user: User = Depends(get_current_user),
):
    entries = list_journal_entries(db, user.id, limit=limit)
    return action_result(entries=[dump(e) for e in entries])


@router.delete("/{entry_id}")
def delete_entry(entry_id: str, db=Depends(get_db), user: User = Depends(get_current_user)):
    delete_journal_entry(db, user.id, entry_id)
    return action_result(message="🗑️ Journal entry deleted.")
