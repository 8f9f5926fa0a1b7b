"""
Single place to:
- Load a local .env if present
- Read game limits and service settings from env
- Fail fast on values the game can't run with

Tests set env vars (ex. RANDOM_SOURCE=local) before importing the app.
"""

import os

from dotenv import load_dotenv

# dev convenience; in prod the platform injects env vars
load_dotenv()

APP_ENV = os.getenv("APP_ENV", "local")

# Codes are always 3 unique digits
CODE_LENGTH = 3
DIGITS = "0123456789"

# Turn/guess limits
MAX_TURNS = int(os.getenv("MAX_TURNS", "10"))
MAX_GUESSES = int(os.getenv("MAX_GUESSES", "10"))
if MAX_TURNS < 1 or MAX_GUESSES < 1:
    raise RuntimeError("MAX_TURNS and MAX_GUESSES must both be at least 1.")

# Where the opponent's secret comes from: "random_org" (with local fallback) or "local"
RANDOM_SOURCE = os.getenv("RANDOM_SOURCE", "random_org")
if RANDOM_SOURCE not in ("random_org", "local"):
    raise RuntimeError(
        f"RANDOM_SOURCE must be 'random_org' or 'local', got {RANDOM_SOURCE!r}."
    )
RANDOM_TIMEOUT_SECONDS = float(os.getenv("RANDOM_TIMEOUT_SECONDS", "3.0"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Allow everything by default so the docs and a local front-end work easily
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
