"""Translation direction detection from Hangul script ranges.

RULES:
- Any Hangul character (syllable, Jamo, or compatibility Jamo) means Korean
- Korean text is translated to English; everything else to Korean
- No mixed-language handling: one Hangul character decides the direction
"""

from __future__ import annotations

import re

ENGLISH = "English"
KOREAN = "Korean"

_HANGUL_RE = re.compile("[가-힣ᄀ-ᇿ㄰-㆏]")


def is_korean(text: str) -> bool:
    return _HANGUL_RE.search(text) is not None


def target_language(text: str) -> str:
    """Return the language a message should be translated into."""
    return ENGLISH if is_korean(text) else KOREAN
