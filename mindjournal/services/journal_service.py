# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the MindJournal project.
# Licensed under the MIT License - see the LICENSE file for details.

import logging
from typing import List, Optional

import pydantic
from google.api_core import exceptions as gcp_exceptions
from google.cloud import firestore

from mindjournal.models.journal import JournalEntry, Mood, MOODS
from mindjournal.services.prompt_flows import PromptFlowClient
from mindjournal.utils.errors import PersistenceError, UpstreamAIError, ValidationError

logger = logging.getLogger(__name__)


def journal_collection(db, user_id: str):
    return db.collection(f"users/{user_id}/journalEntries")


def validate_entry(content: Optional[str], mood) -> Mood:
    if not content or not content.strip():
        raise ValidationError("Journal entry cannot be empty.")
    try:
        return Mood(mood)
    except ValueError:
        raise ValidationError(f"Mood must be one of: {', '.join(MOODS)}.")


def create_journal_entry(
    db,
    user_id: str,
    content: str,
    mood,
    summarize: bool = False,
    flows: Optional[PromptFlowClient] = None,
) -> JournalEntry:
    """
    Saves a mood-tagged entry with a server timestamp.
    With `summarize`, the summary flow runs first; if it fails the entry is
    still saved, just without a summary.
    """
    mood = validate_entry(content, mood)

    data = {
        "createdAt": firestore.SERVER_TIMESTAMP,
        "mood": mood.value,
        "content": content,
        "userId": user_id,
    }

    if summarize and flows is not None:
        try:
            data["summary"] = flows.summarize_journal_entry(content).summary
        except UpstreamAIError as e:
            logger.warning("⚠️ Saving entry without summary: %s", e.message)

    try:
        _, ref = journal_collection(db, user_id).add(data)
        return JournalEntry.from_snapshot(ref.get())
    except gcp_exceptions.GoogleAPIError as e:
        logger.exception("❌ Error creating journal entry")
        raise PersistenceError("Error saving to database.") from e


def list_journal_entries(db, user_id: str, limit: Optional[int] = None) -> List[JournalEntry]:
    query = journal_collection(db, user_id).order_by("createdAt", direction=firestore.Query.DESCENDING)
    if limit:
        query = query.limit(limit)
    try:
        snapshots = list(query.stream())
    except gcp_exceptions.GoogleAPIError as e:
        logger.exception("❌ Error listing journal entries")
        raise PersistenceError("Could not load journal entries.") from e

    entries = []
    for doc in snapshots:
        try:
            entries.append(JournalEntry.from_snapshot(doc))
        except pydantic.ValidationError as e:
            logger.warning("⚠️ Skipping unreadable journal entry %s: %s", doc.id, e)
    return entries


def delete_journal_entry(db, user_id: str, entry_id: str) -> None:
    # Deleting a missing document is a no-op in Firestore
    try:
        journal_collection(db, user_id).document(entry_id).delete()
    except gcp_exceptions.GoogleAPIError as e:
        logger.exception("❌ Error deleting journal entry")
        raise PersistenceError("Could not delete the journal entry.") from e
