"""Tests for the translation backend client.

HOW: httpx.MockTransport stands in for the network so every request the
client builds can be inspected without contacting the real API.
"""

from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from design_translator.api.client import TranslationAPIError, TranslationClient


def _completion(content):
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


def _run_translate(handler, text="로고를 더 크게", language="English"):
    async def _run():
        client = TranslationClient(
            api_key="sk-test",
            base_url="https://llm.example/v1",
            model="test-model",
            transport=httpx.MockTransport(handler),
        )
        async with client:
            return await client.translate(text, language)

    return asyncio.run(_run())


class TestTranslate:
    def test_returns_stripped_content(self):
        result = _run_translate(lambda request: httpx.Response(200, json=_completion("  Make the logo bigger\n")))
        assert result == "Make the logo bigger"

    def test_request_shape(self):
        seen = {}

        def handler(request):
            seen["url"] = str(request.url)
            seen["auth"] = request.headers["Authorization"]
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json=_completion("ok"))

        _run_translate(handler, text="__TERM0__ 후드티", language="English")

        assert seen["url"] == "https://llm.example/v1/chat/completions"
        assert seen["auth"] == "Bearer sk-test"
        body = seen["body"]
        assert body["model"] == "test-model"
        system, user = body["messages"]
        assert system["role"] == "system"
        assert "English" in system["content"]
        assert "formatting" in system["content"]
        assert user == {"role": "user", "content": "__TERM0__ 후드티"}

    def test_error_status_raises(self):
        with pytest.raises(TranslationAPIError) as exc_info:
            _run_translate(lambda request: httpx.Response(429, text="rate limited"))
        assert exc_info.value.status_code == 429
        assert "rate limited" in exc_info.value.message

    def test_missing_choices_raises(self):
        with pytest.raises(TranslationAPIError) as exc_info:
            _run_translate(lambda request: httpx.Response(200, json={"choices": []}))
        assert exc_info.value.status_code == 502

    def test_non_json_body_raises(self):
        with pytest.raises(TranslationAPIError):
            _run_translate(lambda request: httpx.Response(200, text="<html>oops</html>"))

    def test_null_content_raises(self):
        with pytest.raises(TranslationAPIError):
            _run_translate(lambda request: httpx.Response(200, json=_completion(None)))

    def test_network_error_propagates(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(httpx.ConnectError):
            _run_translate(handler)


class TestClientLifecycle:
    def test_requires_context_manager(self):
        client = TranslationClient(api_key="sk-test")
        with pytest.raises(RuntimeError, match="async context manager"):
            asyncio.run(client.translate("x", "English"))

    def test_missing_api_key(self, monkeypatch):
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)
        with pytest.raises(ValueError, match="OPENAI_API_KEY"):
            TranslationClient()
