"""Line-level selective translation with placeholder protection.

WHY: A form's request fields mix prose with sizes, quantities, and names.
Sending "95" or a player's name to the model invites creative rewrites, and
translating a whole multi-line field at once lets the model merge or reorder
lines. Each line is therefore decided on its own: skip it, or protect it,
translate it, and restore it.

HOW: translate_lines() drops blank lines, then runs one task per line with
asyncio.gather so results come back in input order regardless of which call
finishes first. Numeric-only lines and lines containing a reserved keyword
are returned as-is, the latter flagged as reserved. Everything else goes
through translate_text(), which wraps the backend call in protect()/restore().

RULES:
- Lines matching ^\\d+$ (after trimming) are never sent to the backend
- Reserved keyword matching is exact substring, case-sensitive
- Empty text never reaches the backend; EMPTY_TEXT_NOTICE is returned instead
- Backend failures propagate to the caller unchanged
"""

from __future__ import annotations

import asyncio
import re
from typing import Iterable, Protocol, Sequence

from design_translator.core.glossary import protect, restore
from design_translator.core.models import TranslatedLine

EMPTY_TEXT_NOTICE = "(번역할 내용이 없습니다 / nothing to translate)"

_NUMERIC_RE = re.compile(r"^\d+$")


class Translator(Protocol):
    async def translate(self, text: str, target_language: str) -> str: ...


def is_numeric_line(line: str) -> bool:
    return _NUMERIC_RE.match(line.strip()) is not None


def contains_reserved_keyword(line: str, reserved_keywords: Iterable[str]) -> bool:
    return any(keyword and keyword in line for keyword in reserved_keywords)


async def translate_text(text: str, target_language: str, translator: Translator) -> str:
    """Translate one unit of text with dictionary terms and literals protected."""
    if not text.strip():
        return EMPTY_TEXT_NOTICE

    masked, placeholders = protect(text, target_language)
    translated = await translator.translate(masked, target_language)
    return restore(translated, placeholders)


async def translate_lines(
    lines: Sequence[str],
    target_language: str,
    translator: Translator,
    reserved_keywords: Iterable[str] = (),
) -> list[TranslatedLine]:
    """Translate each non-blank line independently, preserving order.

    Lines kept because of a reserved keyword come back flagged so the
    renderer can emphasize them.
    """
    reserved = tuple(reserved_keywords)

    async def _one(line: str) -> TranslatedLine:
        if is_numeric_line(line):
            return TranslatedLine(line)
        if contains_reserved_keyword(line, reserved):
            return TranslatedLine(line, reserved=True)
        return TranslatedLine(await translate_text(line, target_language, translator))

    kept = [line for line in lines if line.strip()]
    return list(await asyncio.gather(*(_one(line) for line in kept)))
