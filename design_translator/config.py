"""Configuration constants, reserved keywords, and .env loading.

WHY: Centralizes every configurable value so operators can change the
archive channel, model, or reserved keyword list without touching logic.
Secrets are loaded through explicit functions so a missing value fails
loudly at startup rather than on the first Slack event.

HOW: python-dotenv loads the .env file on import. Optional settings are
module-level constants read from the environment with defaults. Required
secrets are read by load_slack_credentials() and load_openai_api_key().

RULES:
- SLACK_BOT_TOKEN, SLACK_SIGNING_SECRET, OPENAI_API_KEY are required
- ARCHIVE_CHANNEL_ID is optional; empty disables archive mirroring
- RESERVED_KEYWORDS is a comma-separated list of exact-match literals
- ACK_REACTION is optional; empty disables the reaction on form messages
- Secrets are never hardcoded and never given placeholder defaults
"""

from __future__ import annotations

import os

from dotenv import load_dotenv

# Load .env from the project root (where the bot is started from)
load_dotenv()

# ---------------------------------------------------------------------------
# Server
# ---------------------------------------------------------------------------

PORT = int(os.getenv("PORT", "3000"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# ---------------------------------------------------------------------------
# Slack behaviour
# ---------------------------------------------------------------------------

ARCHIVE_CHANNEL_ID = os.getenv("ARCHIVE_CHANNEL_ID", "").strip()
"""Channel that receives a mirror of every posted card (optional)."""

ACK_REACTION = os.getenv("ACK_REACTION", "eyes").strip()
"""Emoji name added to a source message once its card is posted."""

DISPLAY_TIMEZONE = os.getenv("DISPLAY_TIMEZONE", "Asia/Seoul")
"""IANA zone used to render the request time on cards."""

# ---------------------------------------------------------------------------
# Translation backend
# ---------------------------------------------------------------------------

OPENAI_BASE_URL = os.getenv("OPENAI_BASE_URL", "https://api.openai.com/v1")
OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-4o")

DEFAULT_RESERVED_KEYWORDS = ("긴급", "URGENT")


def parse_keywords(raw: str) -> tuple[str, ...]:
    """Split a comma-separated keyword list, dropping blanks."""
    return tuple(k.strip() for k in raw.split(",") if k.strip())


_reserved_env = os.getenv("RESERVED_KEYWORDS")
RESERVED_KEYWORDS: tuple[str, ...] = (
    parse_keywords(_reserved_env) if _reserved_env is not None else DEFAULT_RESERVED_KEYWORDS
)
"""Literals that mark a line as untranslatable; such lines are emphasized."""


def load_slack_credentials() -> tuple[str, str]:
    """Load the Slack bot token and signing secret from the environment.

    RULES:
    - Returns (bot_token, signing_secret)
    - Raises ValueError naming every missing variable
    """
    bot_token = os.getenv("SLACK_BOT_TOKEN", "").strip()
    signing_secret = os.getenv("SLACK_SIGNING_SECRET", "").strip()

    missing = [
        name for name, value in (
            ("SLACK_BOT_TOKEN", bot_token),
            ("SLACK_SIGNING_SECRET", signing_secret),
        )
        if not value
    ]
    if missing:
        raise ValueError(
            "Slack credentials not configured. "
            "Add {} to the .env file.".format(", ".join(missing))
        )
    return bot_token, signing_secret


def load_openai_api_key() -> str:
    """Return OPENAI_API_KEY, the bearer token for the chat-completions backend.

    Checked once at startup by server.app.run() so a bot without a key
    fails before it joins Slack rather than on the first request.

    RULES:
    - Surrounding whitespace is stripped; an empty value counts as missing
    - Raises ValueError pointing at the .env entry to add
    """
    key = os.getenv("OPENAI_API_KEY", "").strip()
    if not key:
        raise ValueError(
            "Translation API key not configured. "
            "Add OPENAI_API_KEY to the .env file."
        )
    return key
