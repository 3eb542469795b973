# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the MindJournal project.
# Licensed under the MIT License - see the LICENSE file for details.


# -------------------------
# Journal
# -------------------------

def summarize_journal_prompt(journal_entry: str) -> str:
    return f"""
Summarize the following journal entry in a concise and informative way.

Respond ONLY in JSON:
{{ "summary": "..." }}

Journal entry:
{journal_entry}
"""

# -------------------------
# Safety
# -------------------------

def detect_self_harm_prompt(text: str) -> str:
    return f"""
You are a mental health expert. Analyze the following text for indicators of potential self-harm.

Text: {text}

Based on your analysis, determine if self-harm is detected and provide appropriate guidance and resources.
Set the self_harm_detected field appropriately. If self_harm_detected is true, the guidance field
should contain resources and advice for the user to seek professional help.

Respond ONLY in JSON:
{{ "self_harm_detected": false, "guidance": "..." }}
"""

# -------------------------
# Mood disorders
# -------------------------

def classify_mood_disorders_prompt(message: str, has_media: bool = False) -> str:
    media_line = "The user also attached the media included with this request.\n" if has_media else ""
    return f"""
You are an AI assistant designed to identify potential symptoms of PTSD, GAD, and MMD from user
messages, including text and multimedia content.

Analyze the following user message and media (if available) to identify potential symptoms related
to PTSD, GAD, and MMD. Provide a summary of the identified symptoms and potential mood disorders.

Message: {message}
{media_line}
Respond ONLY in JSON:
{{ "ptsd_symptoms": [], "gad_symptoms": [], "mmd_symptoms": [], "summary": "..." }}
"""

# -------------------------
# Fixed replies
# -------------------------

SELF_HARM_PREAMBLE = (
    "It sounds like you're carrying something really heavy right now, and I'm glad you told me. "
    "You don't have to go through this alone."
)

SELF_HARM_FALLBACK_GUIDANCE = (
    "If you are in immediate danger, please call your local emergency number. "
    "You can also reach a crisis line any time, for example by calling or texting 988 in the US, "
    "or find a helpline near you at https://findahelpline.com."
)

AI_ERROR_REPLY = (
    "I'm sorry, I'm having trouble responding right now. "
    "Please try again in a moment."
)
