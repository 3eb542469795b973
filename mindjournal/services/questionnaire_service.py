# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the MindJournal project.
# Licensed under the MIT License - see the LICENSE file for details.

import logging
from typing import Dict, List, Optional

from google.api_core import exceptions as gcp_exceptions
from google.cloud import firestore

from mindjournal.models.questionnaire import (
    QUESTIONNAIRE_ORDER,
    Questionnaire,
    build_questionnaire_items,
    get_bank,
)
from mindjournal.utils.errors import PersistenceError

logger = logging.getLogger(__name__)


def questions_collection(session_ref):
    return session_ref.collection("questions")


def seed_questionnaires(batch, session_ref) -> None:
    """Adds the PHQ-9 / GAD-7 / PCL-5 documents for a new session to `batch`."""
    for assessment, questions in build_questionnaire_items().items():
        batch.set(questions_collection(session_ref).document(assessment), {
            "createdAt": firestore.SERVER_TIMESTAMP,
            "questions": questions,
        })


def list_questionnaires(session_ref) -> List[Questionnaire]:
    try:
        docs = {doc.id: doc for doc in questions_collection(session_ref).stream()}
    except gcp_exceptions.GoogleAPIError as e:
        logger.exception("❌ Error loading questionnaires")
        raise PersistenceError("Could not load questionnaires.") from e

    # Fixed assessment order, anything unknown is ignored
    return [Questionnaire.from_snapshot(docs[k.value]) for k in QUESTIONNAIRE_ORDER if k.value in docs]


def questionnaire_snapshot(session_ref) -> Dict[str, dict]:
    """Plain {assessment: {question_key: {id, text, score}}} for the analysis endpoint."""
    return {
        q.assessment.value: {key: item.model_dump() for key, item in q.questions.items()}
        for q in list_questionnaires(session_ref)
    }


def _coerce_score(value, max_score: int) -> Optional[float]:
    if isinstance(value, bool):
        return None
    try:
        score = float(value)
    except (TypeError, ValueError):
        return None
    if not 0 <= score <= max_score:
        return None
    return int(score) if score.is_integer() else score


def merge_diagnostic_scores(session_ref, mapping: Optional[dict]) -> int:
    """
    Writes {assessment: {question_key: score}} into the session's questionnaires.
    Unknown assessments, unknown question keys and out-of-range scores are
    skipped. Returns the number of scores written.
    """
    if not mapping:
        return 0

    written = 0
    for assessment, scores in mapping.items():
        bank = get_bank(assessment)
        if bank is None or not isinstance(scores, dict):
            logger.warning("⚠️ Skipping unknown assessment in score mapping: %s", assessment)
            continue

        valid_keys = set(bank.keys())
        updates = {}
        for key, value in scores.items():
            score = _coerce_score(value, bank.max_score)
            if key not in valid_keys or score is None:
                logger.warning("⚠️ Skipping score %s=%r for %s", key, value, assessment)
                continue
            updates[f"questions.{key}.score"] = score

        if not updates:
            continue
        try:
            questions_collection(session_ref).document(bank.kind.value).update(updates)
            written += len(updates)
        except gcp_exceptions.NotFound:
            logger.warning("⚠️ Questionnaire %s missing for session %s", assessment, session_ref.id)
        except gcp_exceptions.GoogleAPIError as e:
            logger.exception("❌ Error updating questionnaire scores")
            raise PersistenceError("Could not update questionnaire scores.") from e

    return written
