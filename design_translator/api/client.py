"""Async HTTP client for the chat-completions translation backend.

WHY: Every translated line is one model call. The bot needs a small,
typed wrapper that hides the request shape and auth, and that fails with
a clear exception type when the backend misbehaves, so the Slack handler's
catch boundary can log it and move on.

HOW: Uses httpx.AsyncClient for non-blocking HTTP. TranslationClient is an
async context manager: enter it to get an authenticated client, exit to
close the connection pool. translate() posts one system instruction plus
the text as the user message and returns the first choice's content.

RULES:
- Always use the async context manager (async with TranslationClient() as client:)
- Non-2xx responses raise TranslationAPIError with the status code
- A 2xx body without choices[0].message.content raises TranslationAPIError(502)
- Network errors propagate as httpx.HTTPError
- No retries, no backoff: a failed call aborts the caller's task
"""

from __future__ import annotations

import logging

import httpx

from design_translator.config import OPENAI_BASE_URL, OPENAI_MODEL, load_openai_api_key

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "Translate the following to {language}. Preserve formatting and line "
    "breaks. Keep every token of the form __TERM<number>__ exactly as it "
    "appears. Reply with the translation only."
)


class TranslationAPIError(Exception):
    """The chat-completions backend refused a request or sent back no usable text.

    RULES:
    - status_code is the HTTP status; 502 when a 2xx body has no message content
    - Propagates out of translate_lines() and fails the whole form
    """

    def __init__(self, status_code: int, message: str) -> None:
        self.status_code = status_code
        self.message = message
        super().__init__(f"Translation API error {status_code}: {message}")


class TranslationClient:
    """Async client for an OpenAI-compatible chat-completions endpoint.

    RULES:
    - Use as: async with TranslationClient() as client: ...
    - api_key defaults to load_openai_api_key() from .env
    - base_url / model default to OPENAI_BASE_URL / OPENAI_MODEL from config
    - transport is for tests (httpx.MockTransport)
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        model: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_key = api_key or load_openai_api_key()
        self._base_url = (base_url or OPENAI_BASE_URL).rstrip("/")
        self._model = model or OPENAI_MODEL
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> TranslationClient:
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            headers={"Authorization": f"Bearer {self._api_key}"},
            timeout=httpx.Timeout(120.0, connect=10.0),
            transport=self._transport,
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:  # noqa: ANN001
        if self._client:
            await self._client.aclose()
            self._client = None

    def _ensure_client(self) -> httpx.AsyncClient:
        """Return the active httpx client, raising if not in context manager."""
        if self._client is None:
            raise RuntimeError(
                "TranslationClient must be used as an async context manager: "
                "async with TranslationClient() as client: ..."
            )
        return self._client

    async def translate(self, text: str, target_language: str) -> str:
        """Translate text into target_language and return the model's reply.

        Args:
            text: Text to translate. Placeholder tokens must already be in place.
            target_language: Human-readable language name ("English", "Korean").

        Returns:
            The translated text, stripped of surrounding whitespace.
        """
        client = self._ensure_client()
        payload = {
            "model": self._model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT.format(language=target_language)},
                {"role": "user", "content": text},
            ],
        }

        resp = await client.post("/chat/completions", json=payload)
        if resp.status_code >= 400:
            raise TranslationAPIError(resp.status_code, resp.text)

        try:
            content = resp.json()["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as exc:
            raise TranslationAPIError(502, f"Malformed response body: {resp.text[:200]}") from exc

        if not isinstance(content, str):
            raise TranslationAPIError(502, "Response content is not a string")

        logger.debug("Translated %d chars to %s", len(text), target_language)
        return content.strip()
