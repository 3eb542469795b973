# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the MindJournal project.
# Licensed under the MIT License - see the LICENSE file for details.

import logging
from typing import List, Optional, Type

import pydantic
import requests
from google.genai import types
from pydantic import BaseModel, Field

from mindjournal.utils.ai_engine import generate_structured_reply, get_genai_client
from mindjournal.utils.errors import SchemaValidationError, UpstreamError
from mindjournal.utils.prompt_templates import (
    classify_mood_disorders_prompt,
    detect_self_harm_prompt,
    summarize_journal_prompt,
)

logger = logging.getLogger(__name__)

MEDIA_FETCH_TIMEOUT = 30


# ---------------------------
# ✅ Flow schemas
# ---------------------------

class SummarizeJournalEntryInput(BaseModel):
    journal_entry: str = Field(..., min_length=1)


class SummarizeJournalEntryOutput(BaseModel):
    summary: str


class DetectSelfHarmInput(BaseModel):
    text: str


class DetectSelfHarmOutput(BaseModel):
    self_harm_detected: bool
    guidance: str = ""


class ClassifyMoodDisordersInput(BaseModel):
    message: str
    media_url: Optional[str] = None
    media_mime_type: Optional[str] = None


class ClassifyMoodDisordersOutput(BaseModel):
    ptsd_symptoms: List[str]
    gad_symptoms: List[str]
    mmd_symptoms: List[str]
    summary: str


# ---------------------------
# ✅ Client
# ---------------------------

class PromptFlowClient:
    """
    Stateless wrapper over the three hosted prompt flows.
    Each call is made exactly once: validate input, render the prompt, call the
    model, validate the output.
    """

    def __init__(self, client=None, model: Optional[str] = None):
        self._client = client
        self.model = model

    @property
    def client(self):
        if self._client is None:
            self._client = get_genai_client()
        return self._client

    def summarize_journal_entry(self, journal_entry: str) -> SummarizeJournalEntryOutput:
        payload = _validate_input(SummarizeJournalEntryInput, journal_entry=journal_entry)
        return self._run(
            "summarizeJournalEntry",
            summarize_journal_prompt(payload.journal_entry),
            SummarizeJournalEntryOutput,
        )

    def detect_self_harm(self, text: str) -> DetectSelfHarmOutput:
        payload = _validate_input(DetectSelfHarmInput, text=text)
        return self._run("detectSelfHarm", detect_self_harm_prompt(payload.text), DetectSelfHarmOutput)

    def classify_mood_disorders(
        self,
        message: str,
        media_url: Optional[str] = None,
        media_mime_type: Optional[str] = None,
    ) -> ClassifyMoodDisordersOutput:
        payload = _validate_input(
            ClassifyMoodDisordersInput,
            message=message,
            media_url=media_url,
            media_mime_type=media_mime_type,
        )
        media_parts = []
        if payload.media_url:
            media_parts.append(self._fetch_media(payload.media_url, payload.media_mime_type))

        return self._run(
            "classifyMoodDisorders",
            classify_mood_disorders_prompt(payload.message, has_media=bool(media_parts)),
            ClassifyMoodDisordersOutput,
            media_parts,
        )

    # ---------------------------

    def _run(self, flow_name: str, prompt: str, output_schema: Type[BaseModel], media_parts=None):
        try:
            raw = generate_structured_reply(
                self.client, prompt, output_schema, media_parts=media_parts, model=self.model
            )
        except Exception as e:
            logger.exception("❌ Prompt flow %s failed", flow_name)
            raise UpstreamError(f"The {flow_name} flow could not be reached.") from e

        if not raw:
            raise SchemaValidationError(f"The {flow_name} flow returned no output.")
        try:
            return output_schema.model_validate_json(raw)
        except pydantic.ValidationError as e:
            logger.warning("⚠️ Prompt flow %s returned an invalid payload: %s", flow_name, e)
            raise SchemaValidationError(f"The {flow_name} flow returned an unexpected response.") from e

    def _fetch_media(self, url: str, mime_type: Optional[str]) -> types.Part:
        # Inline the bytes, the hosted model cannot read storage download URLs itself
        try:
            response = requests.get(url, timeout=MEDIA_FETCH_TIMEOUT)
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            logger.warning("⚠️ Could not fetch media for classification: %s", e)
            raise UpstreamError("The attached media could not be loaded.") from e

        mime_type = mime_type or response.headers.get("Content-Type", "application/octet-stream")
        return types.Part.from_bytes(data=response.content, mime_type=mime_type)


def _validate_input(schema: Type[BaseModel], **fields):
    try:
        return schema(**fields)
    except pydantic.ValidationError as e:
        raise SchemaValidationError(f"Invalid input for {schema.__name__}.") from e


_flows = None


def get_prompt_flows() -> PromptFlowClient:
    global _flows
    if _flows is None:
        _flows = PromptFlowClient()
    return _flows
