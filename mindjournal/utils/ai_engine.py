# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the MindJournal project.
# Licensed under the MIT License - see the LICENSE file for details.

import logging
from typing import List, Optional, Type

from google import genai
from google.genai import types
from pydantic import BaseModel

from mindjournal import config

logger = logging.getLogger(__name__)

_client = None


def get_genai_client():
    """Gemini client, created on first use."""
    global _client
    if _client is None:
        _client = genai.Client(api_key=config.GEMINI_API_KEY)
    return _client


def generate_structured_reply(
    client,
    prompt: str,
    response_schema: Type[BaseModel],
    media_parts: Optional[List[types.Part]] = None,
    model: Optional[str] = None,
) -> Optional[str]:
    """
    Single generate_content call that asks the hosted model for JSON matching
    `response_schema`. Returns the raw JSON text, validation is up to the caller.
    """
    contents = [prompt, *(media_parts or [])]
    response = client.models.generate_content(
        model=model or config.GEMINI_MODEL,
        contents=contents,
        config=types.GenerateContentConfig(
            response_mime_type="application/json",
            response_schema=response_schema,
        ),
    )
    return response.text
