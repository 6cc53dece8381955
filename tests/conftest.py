"""Shared test fixtures for the design_translator test suite.

WHY: Most tests need a translator that behaves like the backend without a
network call, plus realistic Slack payloads. Centralizing them keeps the
individual test modules short.

HOW: FakeTranslator answers from a phrase table (falling back to a tagged
echo) and records every text it was asked to translate. It doubles as its
own async context manager so it can be handed to handle_message() through
a translator factory.

RULES:
- No test talks to Slack or the translation backend
- FakeTranslator.calls records the masked text exactly as sent
"""

from __future__ import annotations

import asyncio
from typing import Any, Dict, List, Optional

import pytest

FORM_TEXT = "팀명: Falcons\n디자인 요청사항: 로고를 더 크게\n이미지 요청사항: 1"

PHRASES = {
    "로고를 더 크게": "Make the logo bigger",
    "hello, how are you": "안녕하세요, 잘 지내세요?",
}


class FakeTranslator:
    """In-memory stand-in for TranslationClient."""

    def __init__(
        self,
        phrases: Optional[Dict[str, str]] = None,
        error: Optional[Exception] = None,
        delays: Optional[Dict[str, float]] = None,
    ) -> None:
        self.phrases = dict(PHRASES if phrases is None else phrases)
        self.error = error
        self.delays = delays or {}
        self.calls: List[tuple] = []

    async def __aenter__(self) -> "FakeTranslator":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        return None

    async def translate(self, text: str, target_language: str) -> str:
        self.calls.append((text, target_language))
        if text in self.delays:
            await asyncio.sleep(self.delays[text])
        if self.error is not None:
            raise self.error
        return self.phrases.get(text, "<{}>{}".format(target_language, text))


@pytest.fixture
def translator():
    return FakeTranslator()


def make_event(text: str = FORM_TEXT, **overrides: Any) -> Dict[str, Any]:
    """Build a Slack ``message`` event payload."""
    event = {
        "type": "message",
        "text": text,
        "user": "U_AUTHOR",
        "channel": "C_REQUESTS",
        "ts": "1717200000.000100",
    }
    event.update(overrides)
    return event


@pytest.fixture
def message_event():
    return make_event()
