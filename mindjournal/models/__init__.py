# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the MindJournal project.
# Licensed under the MIT License - see the LICENSE file for details.


from .user_model import User
from .journal import JournalEntry, Mood, MOODS
from .chat_session import ChatSession
from .message_model import ChatMessage, Classification, MessageRole
from .questionnaire import AssessmentKind, Questionnaire, QUESTIONNAIRE_ORDER
