# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the MindJournal project.
# Licensed under the MIT License - see the LICENSE file for details.

import logging
from typing import NamedTuple, Optional

from google.api_core import exceptions as gcp_exceptions
from google.cloud import firestore

from mindjournal.models.message_model import ChatMessage, Classification, MessageRole
from mindjournal.services.analysis_service import AnalysisClient
from mindjournal.services.prompt_flows import PromptFlowClient
from mindjournal.services.questionnaire_service import merge_diagnostic_scores, questionnaire_snapshot
from mindjournal.services.session_service import get_session, list_messages, messages_collection, session_ref
from mindjournal.services.storage_service import upload_user_file
from mindjournal.utils.errors import PersistenceError, ValidationError
from mindjournal.utils.prompt_templates import (
    AI_ERROR_REPLY,
    SELF_HARM_FALLBACK_GUIDANCE,
    SELF_HARM_PREAMBLE,
)

logger = logging.getLogger(__name__)


class ChatTurn(NamedTuple):
    user_message: ChatMessage
    assistant_message: ChatMessage
    scores_updated: int = 0


def save_message(db, user_id: str, session_id: str, data: dict) -> ChatMessage:
    """Appends a message with a server timestamp and returns it as stored."""
    data = {k: v for k, v in data.items() if v is not None}
    data.update({"timestamp": firestore.SERVER_TIMESTAMP, "userId": user_id})
    try:
        _, ref = messages_collection(db, user_id, session_id).add(data)
        return ChatMessage.from_snapshot(ref.get())
    except gcp_exceptions.GoogleAPIError as e:
        logger.exception("❌ Error saving chat message")
        raise PersistenceError("Failed to post chat message.") from e


def build_assistant_reply(
    flows: PromptFlowClient,
    text: str,
    media_url: Optional[str] = None,
    media_mime_type: Optional[str] = None,
) -> dict:
    """
    Self-harm check first; a positive result short-circuits with guidance and
    classification never runs. Otherwise classify mood disorders.
    """
    if text:
        detection = flows.detect_self_harm(text)
        if detection.self_harm_detected:
            logger.warning("🚨 Self-harm indicators detected, returning guidance")
            return {
                "role": MessageRole.assistant.value,
                "text": SELF_HARM_PREAMBLE,
                "selfHarmWarning": detection.guidance.strip() or SELF_HARM_FALLBACK_GUIDANCE,
            }

    result = flows.classify_mood_disorders(text, media_url=media_url, media_mime_type=media_mime_type)
    classification = Classification(
        ptsd_symptoms=result.ptsd_symptoms,
        gad_symptoms=result.gad_symptoms,
        mmd_symptoms=result.mmd_symptoms,
        summary=result.summary,
    )
    return {
        "role": MessageRole.assistant.value,
        "text": result.summary,
        "classification": classification.model_dump(by_alias=True),
    }


def post_message(
    db,
    flows: PromptFlowClient,
    user_id: str,
    session_id: str,
    text: Optional[str],
    media_url: Optional[str] = None,
    media_mime_type: Optional[str] = None,
) -> ChatTurn:
    # Stored as sent, trimmed only for the checks and the flows
    cleaned = (text or "").strip()
    if not cleaned and not media_url:
        raise ValidationError("Message cannot be empty.")
    get_session(db, user_id, session_id)

    user_message = save_message(db, user_id, session_id, {
        "role": MessageRole.user.value,
        "text": text if cleaned else None,
        "mediaUrl": media_url,
        "mediaMimeType": media_mime_type,
    })

    # The user message stays even if the AI side fails
    try:
        reply = build_assistant_reply(flows, cleaned, media_url, media_mime_type)
    except Exception:
        logger.exception("❌ Error processing chat message")
        reply = {"role": MessageRole.assistant.value, "text": AI_ERROR_REPLY}

    assistant_message = save_message(db, user_id, session_id, reply)
    return ChatTurn(user_message, assistant_message)


def post_media(
    db,
    bucket,
    analysis: AnalysisClient,
    user_id: str,
    session_id: str,
    filename: str,
    data: bytes,
    mime_type: str,
) -> ChatTurn:
    """
    Upload, analyze, persist. The file goes to Storage, its URL is sent with
    prior turns and the questionnaire snapshot to the analysis endpoint, the
    result is stored as a user/assistant pair and diagnostic scores are merged
    into the session's questionnaires.
    """
    get_session(db, user_id, session_id)

    uploaded = upload_user_file(bucket, user_id, filename, data, mime_type)

    ref = session_ref(db, user_id, session_id)
    prior_turns = [
        m.model_dump(mode="json", by_alias=True, exclude_none=True)
        for m in list_messages(db, user_id, session_id)
    ]
    result = analysis.analyze_turn(
        session_id=session_id,
        user_id=user_id,
        media_url=uploaded.url,
        prior_turns=prior_turns,
        questionnaire_snapshot=questionnaire_snapshot(ref),
    )

    user_message = save_message(db, user_id, session_id, {
        "role": MessageRole.user.value,
        "text": result.transcript,
        "mediaUrl": uploaded.url,
        "mediaMimeType": uploaded.mime_type,
    })
    assistant_message = save_message(db, user_id, session_id, {
        "role": MessageRole.assistant.value,
        "text": result.reply_text,
        "analysis": {
            "transcript": result.transcript,
            "sentiment": result.sentiment,
            "emotionSignals": result.emotion_signals,
        },
    })

    scores_updated = merge_diagnostic_scores(ref, result.diagnostic_score_mapping)
    return ChatTurn(user_message, assistant_message, scores_updated)
