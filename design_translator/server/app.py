"""FastAPI application exposing the Slack events endpoint.

WHY: Slack delivers message events and button clicks over HTTP. Before it
sends anything, it checks the endpoint with a url_verification handshake
that must echo a challenge token. Everything else is handed to slack-bolt,
which verifies the request signature and dispatches to bot.py.

HOW: create_server() builds a FastAPI app around an AsyncApp. POST
/slack/events answers the handshake itself and forwards all other payloads
to AsyncSlackRequestHandler. GET /health reports liveness for the host.

RULES:
- url_verification is answered with the challenge as plain text, status 200
- Interactive payloads (form-encoded) always go straight to slack-bolt
- Missing credentials fail at startup in run(), not on the first request
"""

from __future__ import annotations

import json
import logging

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse, Response
from slack_bolt.adapter.fastapi.async_handler import AsyncSlackRequestHandler
from slack_bolt.async_app import AsyncApp

from design_translator import __version__, config
from design_translator.server.models import HealthResponse, UrlVerificationRequest

logger = logging.getLogger(__name__)


def create_server(slack_app: AsyncApp) -> FastAPI:
    """Build the FastAPI app that fronts slack_app."""
    api = FastAPI(
        title="Design Request Translator",
        description="Slack bot that translates design request forms into tracked cards.",
        version=__version__,
    )
    slack_handler = AsyncSlackRequestHandler(slack_app)

    @api.get("/health", response_model=HealthResponse, tags=["health"])
    async def health() -> HealthResponse:
        return HealthResponse(
            status="ok",
            version=__version__,
            archive_enabled=bool(config.ARCHIVE_CHANNEL_ID),
        )

    @api.post("/slack/events", tags=["slack"])
    async def slack_events(req: Request) -> Response:
        verification = await _read_url_verification(req)
        if verification is not None:
            logger.info("Answered Slack url_verification handshake")
            return PlainTextResponse(verification.challenge, status_code=200)
        return await slack_handler.handle(req)

    return api


async def _read_url_verification(req: Request) -> UrlVerificationRequest | None:
    """Return the handshake payload if req is a url_verification request."""
    if not req.headers.get("content-type", "").startswith("application/json"):
        return None

    try:
        payload = json.loads(await req.body())
    except ValueError:
        return None

    if not isinstance(payload, dict) or payload.get("type") != "url_verification":
        return None
    return UrlVerificationRequest(**payload)


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def run() -> None:
    """Start the HTTP server with uvicorn.

    RULES:
    - Requires SLACK_BOT_TOKEN, SLACK_SIGNING_SECRET and OPENAI_API_KEY
    - Listens on PORT (default 3000)
    """
    import uvicorn

    from design_translator.slack.bot import create_app

    logging.basicConfig(
        level=config.LOG_LEVEL,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    bot_token, signing_secret = config.load_slack_credentials()
    config.load_openai_api_key()

    api = create_server(create_app(bot_token=bot_token, signing_secret=signing_secret))

    logger.info("Starting design request translator on port %d", config.PORT)
    if config.ARCHIVE_CHANNEL_ID:
        logger.info("Mirroring cards to archive channel %s", config.ARCHIVE_CHANNEL_ID)
    else:
        logger.info("Archive channel not configured; mirroring disabled")

    uvicorn.run(api, host="0.0.0.0", port=config.PORT)


if __name__ == "__main__":
    run()
