# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the MindJournal project.
# Licensed under the MIT License - see the LICENSE file for details.

import os

# ✅ Only load .env in local/dev
if os.environ.get("ENV") != "production":
    from dotenv import load_dotenv
    load_dotenv()

# 🔥 Firebase
FIREBASE_ADMIN_JSON = os.getenv("FIREBASE_ADMIN_JSON")  # JSON string or path; ADC when unset
FIREBASE_STORAGE_BUCKET = os.getenv("FIREBASE_STORAGE_BUCKET")

# 🧠 Hosted prompt flows
GEMINI_API_KEY = os.getenv("GEMINI_API_KEY")
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")

# 🎥 External media analysis endpoint
ANALYSIS_API_URL = os.getenv("ANALYSIS_API_URL", "http://localhost:8000/analyze_turn")
ANALYSIS_API_TIMEOUT = float(os.getenv("ANALYSIS_API_TIMEOUT", "60"))

# 🌐 HTTP surface
CHAT_RATE_LIMIT = os.getenv("CHAT_RATE_LIMIT", "20/minute")
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

SESSION_NAME_MAX_LENGTH = 50
RECENT_ENTRIES_LIMIT = 5
