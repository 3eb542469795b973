# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the MindJournal project.
# Licensed under the MIT License - see the LICENSE file for details.

from collections import Counter
from typing import List

from mindjournal import config
from mindjournal.models.journal import JournalEntry, MOODS
from mindjournal.services.journal_service import list_journal_entries
from mindjournal.services.session_service import list_sessions


def mood_histogram(entries: List[JournalEntry]) -> List[dict]:
    """Counts per mood in enum order, zero counts included. Unknown moods are left out."""
    counts = Counter(entry.mood for entry in entries if entry.mood in MOODS)
    return [{"mood": mood, "count": counts.get(mood, 0)} for mood in MOODS]


def dashboard_summary(db, user_id: str) -> dict:
    entries = list_journal_entries(db, user_id)
    sessions = list_sessions(db, user_id)

    return {
        "total_entries": len(entries),
        "total_sessions": len(sessions),
        "mood_data": mood_histogram(entries),
        "recent_entries": entries[:config.RECENT_ENTRIES_LIMIT],
    }
