# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the MindJournal project.
# Licensed under the MIT License - see the LICENSE file for details.

from slowapi import Limiter
from slowapi.util import get_remote_address

from mindjournal import config

limiter = Limiter(key_func=get_remote_address)

# Chat endpoints hit the hosted model on every call
CHAT_RATE_LIMIT = config.CHAT_RATE_LIMIT
