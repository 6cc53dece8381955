"""Core pipeline: form parsing, placeholder protection, and line translation.

RULES:
- Nothing in core talks to Slack; the translator is passed in by the caller
- All types are defined in models.py
"""

from design_translator.core.models import (
    CardStatus,
    HeaderTag,
    ParsedForm,
    RawMessage,
    RenderedCard,
    TranslatedLine,
)
from design_translator.core.parser import parse_form

__all__ = [
    "CardStatus",
    "HeaderTag",
    "ParsedForm",
    "RawMessage",
    "RenderedCard",
    "TranslatedLine",
    "parse_form",
]
