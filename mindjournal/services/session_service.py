# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the MindJournal project.
# Licensed under the MIT License - see the LICENSE file for details.

import logging
import threading
import weakref
from typing import List, Optional, Tuple

from google.api_core import exceptions as gcp_exceptions
from google.cloud import firestore

from mindjournal import config
from mindjournal.models.chat_session import ChatSession
from mindjournal.models.message_model import ChatMessage
from mindjournal.services.questionnaire_service import questions_collection, seed_questionnaires
from mindjournal.utils.errors import NotFoundError, PersistenceError, ValidationError

logger = logging.getLogger(__name__)

BATCH_LIMIT = 500  # Firestore max writes per batch

# In-flight guard for auto-creation, one lock per user, dropped once nobody holds it
_creation_locks = weakref.WeakValueDictionary()
_creation_locks_guard = threading.Lock()


def _creation_lock(user_id: str) -> threading.Lock:
    with _creation_locks_guard:
        return _creation_locks.setdefault(user_id, threading.Lock())


def sessions_collection(db, user_id: str):
    return db.collection(f"users/{user_id}/sessions")


def session_ref(db, user_id: str, session_id: str):
    return sessions_collection(db, user_id).document(session_id)


def messages_collection(db, user_id: str, session_id: str):
    return session_ref(db, user_id, session_id).collection("messages")


def next_session_name(sessions: List[ChatSession]) -> str:
    """`Session N` with N = count + 1, bumped past names already in use."""
    taken = {s.name for s in sessions}
    n = len(sessions) + 1
    while f"Session {n}" in taken:
        n += 1
    return f"Session {n}"


# ---------------------- READ ----------------------

def list_sessions(db, user_id: str) -> List[ChatSession]:
    try:
        query = sessions_collection(db, user_id).order_by("createdAt", direction=firestore.Query.ASCENDING)
        return [ChatSession.from_snapshot(doc) for doc in query.stream()]
    except gcp_exceptions.GoogleAPIError as e:
        logger.exception("❌ Error listing chat sessions")
        raise PersistenceError("Could not load chat sessions.") from e


def get_session(db, user_id: str, session_id: str) -> ChatSession:
    try:
        snapshot = session_ref(db, user_id, session_id).get()
    except gcp_exceptions.GoogleAPIError as e:
        logger.exception("❌ Error loading chat session")
        raise PersistenceError("Could not load the chat session.") from e
    if not snapshot.exists:
        raise NotFoundError("Chat session not found.")
    return ChatSession.from_snapshot(snapshot)


def list_messages(db, user_id: str, session_id: str) -> List[ChatMessage]:
    try:
        query = messages_collection(db, user_id, session_id).order_by(
            "timestamp", direction=firestore.Query.ASCENDING
        )
        return [ChatMessage.from_snapshot(doc) for doc in query.stream()]
    except gcp_exceptions.GoogleAPIError as e:
        logger.exception("❌ Error listing chat messages")
        raise PersistenceError("Could not load messages.") from e


# ---------------------- WRITE ----------------------

def _create_session(db, user_id: str, existing: List[ChatSession]) -> ChatSession:
    ref = sessions_collection(db, user_id).document()
    try:
        batch = db.batch()
        batch.set(ref, {
            "createdAt": firestore.SERVER_TIMESTAMP,
            "name": next_session_name(existing),
        })
        seed_questionnaires(batch, ref)
        batch.commit()
        return ChatSession.from_snapshot(ref.get())
    except gcp_exceptions.GoogleAPIError as e:
        logger.exception("❌ Failed to create new session")
        raise PersistenceError("Could not create a new session.") from e


def create_session(db, user_id: str) -> ChatSession:
    """
    New session named `Session N`, seeded with blank questionnaires.
    The session and its questionnaires are written in one batch; the
    count-then-create runs under the user's creation guard.
    """
    with _creation_lock(user_id):
        return _create_session(db, user_id, list_sessions(db, user_id))


def load_sessions(db, user_id: str) -> Tuple[List[ChatSession], ChatSession]:
    """
    Sessions for the chat view plus the one to select: the most recently
    created. A user with no sessions gets exactly one, even if two loads race.
    """
    sessions = list_sessions(db, user_id)
    if not sessions:
        with _creation_lock(user_id):
            # Re-read under the guard, a concurrent load may have created it
            sessions = list_sessions(db, user_id)
            if not sessions:
                logger.info("🆕 No sessions for %s, creating the first one", user_id)
                sessions = [_create_session(db, user_id, [])]
    return sessions, sessions[-1]


def rename_session(db, user_id: str, session_id: str, new_name: Optional[str]) -> ChatSession:
    name = (new_name or "").strip()
    if not name:
        raise ValidationError("Name cannot be empty")
    if len(name) > config.SESSION_NAME_MAX_LENGTH:
        raise ValidationError("Name is too long")

    get_session(db, user_id, session_id)
    try:
        session_ref(db, user_id, session_id).update({"name": name})
    except gcp_exceptions.GoogleAPIError as e:
        logger.exception("❌ Error renaming chat session")
        raise PersistenceError("Could not rename the chat session.") from e
    return get_session(db, user_id, session_id)


def _cascade_delete(db, user_id: str, session_id: str) -> int:
    ref = session_ref(db, user_id, session_id)
    refs = [doc.reference for doc in messages_collection(db, user_id, session_id).stream()]
    refs += [doc.reference for doc in questions_collection(ref).stream()]
    refs.append(ref)  # session doc goes last

    for start in range(0, len(refs), BATCH_LIMIT):
        batch = db.batch()
        for doc_ref in refs[start:start + BATCH_LIMIT]:
            batch.delete(doc_ref)
        batch.commit()
    return len(refs)


def delete_session(db, user_id: str, session_id: str) -> None:
    """Deletes a session with its messages and questionnaires. The last session can't be deleted."""
    sessions = list_sessions(db, user_id)
    if not any(s.id == session_id for s in sessions):
        raise NotFoundError("Chat session not found.")
    if len(sessions) <= 1:
        raise ValidationError("You need at least one session.")

    try:
        deleted = _cascade_delete(db, user_id, session_id)
        logger.info("🗑️ Deleted session %s (%d documents)", session_id, deleted)
    except gcp_exceptions.GoogleAPIError as e:
        logger.exception("❌ Error deleting chat session")
        raise PersistenceError("Could not delete the chat session.") from e


def delete_all_sessions(db, user_id: str) -> int:
    sessions = list_sessions(db, user_id)
    try:
        for s in sessions:
            _cascade_delete(db, user_id, s.id)
    except gcp_exceptions.GoogleAPIError as e:
        logger.exception("❌ Error deleting chat sessions")
        raise PersistenceError("Could not delete chat sessions.") from e
    return len(sessions)
