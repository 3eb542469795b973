# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the MindJournal project.
# Licensed under the MIT License - see the LICENSE file for details.

import logging
from typing import Any, Dict, List, Optional

import pydantic
import requests
from pydantic import BaseModel, Field

from mindjournal import config
from mindjournal.utils.errors import SchemaValidationError, UpstreamError

logger = logging.getLogger(__name__)

HEADERS = {"Content-Type": "application/json"}


class AnalysisResult(BaseModel):
    transcript: Optional[str] = None
    sentiment: Optional[Any] = None
    reply_text: str
    emotion_signals: Optional[Any] = None
    diagnostic_score_mapping: Dict[str, Dict[str, Any]] = Field(default_factory=dict)


class AnalysisClient:
    """Client for the external media analysis endpoint (one POST per turn)."""

    def __init__(self, url: Optional[str] = None, timeout: Optional[float] = None, session=None):
        self.url = url or config.ANALYSIS_API_URL
        self.timeout = timeout or config.ANALYSIS_API_TIMEOUT
        self.session = session or requests.Session()

    def analyze_turn(
        self,
        session_id: str,
        user_id: str,
        media_url: str,
        prior_turns: List[dict],
        questionnaire_snapshot: Dict[str, dict],
    ) -> AnalysisResult:
        payload = {
            "session_id": session_id,
            "user_id": user_id,
            "media_url": media_url,
            "prior_turns": prior_turns,
            "questionnaire_snapshot": questionnaire_snapshot,
        }

        try:
            logger.info("🔁 Sending turn to analysis endpoint: %s", self.url)
            response = self.session.post(self.url, headers=HEADERS, json=payload, timeout=self.timeout)
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            logger.exception("❌ Analysis endpoint request failed")
            raise UpstreamError("The analysis service is currently unreachable.") from e

        try:
            body = response.json()
        except ValueError as e:
            raise SchemaValidationError("The analysis service returned invalid JSON.") from e

        try:
            return AnalysisResult.model_validate(body)
        except pydantic.ValidationError as e:
            logger.warning("⚠️ Unexpected analysis response format: %s", e)
            raise SchemaValidationError("The analysis service returned an unexpected response.") from e


_client = None


def get_analysis_client() -> AnalysisClient:
    global _client
    if _client is None:
        _client = AnalysisClient()
    return _client
