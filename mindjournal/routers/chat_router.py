# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the MindJournal project.
# Licensed under the MIT License - see the LICENSE file for details.

from fastapi import APIRouter, Depends, File, Request, UploadFile

from mindjournal.auth import get_current_user
from mindjournal.models.user_model import User
from mindjournal.schemas.action_schemas import action_result, dump
from mindjournal.schemas.chat_schemas import ChatMessageRequest, SessionRenameRequest
from mindjournal.services import chat_service, session_service
from mindjournal.services.analysis_service import AnalysisClient, get_analysis_client
from mindjournal.services.prompt_flows import PromptFlowClient, get_prompt_flows
from mindjournal.services.questionnaire_service import list_questionnaires
from mindjournal.utils.firebase import get_bucket, get_db
from mindjournal.utils.rate_limit_utils import CHAT_RATE_LIMIT, limiter

router = APIRouter(prefix="/chat", tags=["Chat"])


def _turn_result(turn: chat_service.ChatTurn, **extra) -> dict:
    return action_result(
        user_message=dump(turn.user_message),
        assistant_message=dump(turn.assistant_message),
        **extra,
    )


# ---------------------- SESSIONS ----------------------

@router.get("/sessions")
def load_sessions(db=Depends(get_db), user: User = Depends(get_current_user)):
    """All sessions, oldest first, plus the one to open. Creates `Session 1` for new users."""
    sessions, active = session_service.load_sessions(db, user.id)
    return action_result(sessions=[dump(s) for s in sessions], active_session_id=active.id)


@router.post("/sessions")
def new_session(db=Depends(get_db), user: User = Depends(get_current_user)):
    session = session_service.create_session(db, user.id)
    return action_result(session=dump(session))


@router.patch("/sessions/{session_id}")
def rename_session(
    session_id: str,
    payload: SessionRenameRequest,
    db=Depends(get_db),
    user: User = Depends(get_current_user),
):
    session = session_service.rename_session(db, user.id, session_id, payload.name)
    return action_result(message="Session renamed", session=dump(session))


@router.delete("/sessions/{session_id}")
def delete_session(session_id: str, db=Depends(get_db), user: User = Depends(get_current_user)):
    session_service.delete_session(db, user.id, session_id)
    return action_result(message="The session has been removed.")


@router.delete("/sessions")
def delete_all_sessions(db=Depends(get_db), user: User = Depends(get_current_user)):
    deleted = session_service.delete_all_sessions(db, user.id)
    return action_result(message=f"🗑️ Deleted {deleted} sessions.", deleted=deleted)


# ---------------------- MESSAGES ----------------------

@router.get("/sessions/{session_id}/messages")
def get_messages(session_id: str, db=Depends(get_db), user: User = Depends(get_current_user)):
    session_service.get_session(db, user.id, session_id)
    messages = session_service.list_messages(db, user.id, session_id)
    return action_result(messages=[dump(m) for m in messages])


@router.post("/sessions/{session_id}/messages")
@limiter.limit(CHAT_RATE_LIMIT)
def post_message(
    request: Request,
    session_id: str,
    payload: ChatMessageRequest,
    db=Depends(get_db),
    flows: PromptFlowClient = Depends(get_prompt_flows),
    user: User = Depends(get_current_user),
):
    turn = chat_service.post_message(
        db, flows, user.id, session_id, payload.text,
        media_url=payload.media_url, media_mime_type=payload.media_mime_type,
    )
    return _turn_result(turn)


@router.post("/sessions/{session_id}/uploads")
@limiter.limit(CHAT_RATE_LIMIT)
def upload_media(
    request: Request,
    session_id: str,
    file: UploadFile = File(...),
    db=Depends(get_db),
    bucket=Depends(get_bucket),
    analysis: AnalysisClient = Depends(get_analysis_client),
    user: User = Depends(get_current_user),
):
    """Upload a file, run it through the analysis endpoint and store the resulting turn."""
    turn = chat_service.post_media(
        db, bucket, analysis, user.id, session_id,
        filename=file.filename, data=file.file.read(), mime_type=file.content_type,
    )
    return _turn_result(turn, scores_updated=turn.scores_updated)


# ---------------------- QUESTIONNAIRES ----------------------

@router.get("/sessions/{session_id}/questionnaires")
def get_questionnaires(session_id: str, db=Depends(get_db), user: User = Depends(get_current_user)):
    session_service.get_session(db, user.id, session_id)
    ref = session_service.session_ref(db, user.id, session_id)
    return action_result(questionnaires=[q.model_dump(mode="json") for q in list_questionnaires(ref)])
