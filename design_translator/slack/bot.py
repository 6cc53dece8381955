"""Slack bot: message dispatch, card posting, and status-button handlers.

WHY: This module is the glue between Slack and the core pipeline. Every
channel message is checked for a design request form; forms become tracked
cards, anything else gets a plain translation reply. Clicking a status
button on a card rewrites that card in place.

HOW: Uses slack-bolt's AsyncApp. create_app() registers one ``message``
event handler and one action handler per CardStatus. Each handler runs as
its own asyncio task and rebuilds everything it needs from the payload;
the bot keeps no record of the cards it has posted.

RULES:
- Bot messages, edits, deletes, channel system notices and messages
  without text are ignored
- Each top-level handler has exactly one catch boundary that logs and stops
- Failures are never retried and never reported in the channel
- Status actions are ack()'d before any other work
- Archive mirroring and the acknowledgement reaction are best-effort
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Dict, Iterable, Optional

from slack_bolt.async_app import AsyncApp

from design_translator import config
from design_translator.api.client import TranslationClient
from design_translator.core.language import target_language
from design_translator.core.models import CardStatus, ParsedForm, RawMessage, RenderedCard
from design_translator.core.parser import parse_form
from design_translator.core.translate import Translator, translate_lines, translate_text
from design_translator.slack.card import apply_status
from design_translator.slack.messages import (
    build_fallback_text,
    build_form_card,
    build_status_fallback_text,
)

logger = logging.getLogger(__name__)

IGNORED_SUBTYPES = frozenset({
    "bot_message",
    "message_changed",
    "message_deleted",
    # System notices carry generated text ("<@U1> has joined the channel").
    "channel_join",
    "channel_leave",
    "channel_topic",
    "channel_purpose",
    "channel_name",
    "channel_archive",
    "channel_unarchive",
    "group_join",
    "group_leave",
    "group_topic",
    "group_purpose",
    "group_name",
    "pinned_item",
    "unpinned_item",
})

TranslatorFactory = Callable[[], Any]
"""Zero-arg callable returning an async context manager that yields a Translator."""


# ---------------------------------------------------------------------------
# App setup
# ---------------------------------------------------------------------------


def create_app(
    bot_token: Optional[str] = None,
    signing_secret: Optional[str] = None,
    translator_factory: Optional[TranslatorFactory] = None,
) -> AsyncApp:
    """Create and configure the Slack Bolt app with all handlers.

    WHY: Factory function allows tests and the server to inject
    credentials and a translator, and avoids module-level side effects.

    RULES:
    - If bot_token / signing_secret are None, they are loaded from the env
      (ValueError when missing)
    - translator_factory defaults to TranslationClient
    """
    if bot_token is None or signing_secret is None:
        env_token, env_secret = config.load_slack_credentials()
        bot_token = bot_token or env_token
        signing_secret = signing_secret or env_secret

    app = AsyncApp(token=bot_token, signing_secret=signing_secret)

    async def _on_message(event: Dict[str, Any], client: Any) -> None:
        await handle_message(event, client, translator_factory=translator_factory)

    async def _on_status(ack: Any, body: Dict[str, Any], client: Any) -> None:
        await handle_status_action(ack, body, client)

    app.event("message")(_on_message)
    for status in CardStatus:
        app.action(status.action_id)(_on_status)

    return app


# ---------------------------------------------------------------------------
# Message events
# ---------------------------------------------------------------------------


def should_ignore(event: Dict[str, Any]) -> bool:
    """True for events the bot must not answer (its own, edits, deletes, empty)."""
    if event.get("subtype") in IGNORED_SUBTYPES:
        return True
    if event.get("bot_id"):
        return True
    return not (event.get("text") or "").strip()


async def handle_message(
    event: Dict[str, Any],
    client: Any,
    translator_factory: Optional[TranslatorFactory] = None,
) -> None:
    """Route a channel message to the form-card flow or the plain translation flow.

    RULES:
    - One catch boundary: any failure is logged and the event is dropped
    - A posted card is not retracted if a later step fails
    """
    if should_ignore(event):
        return

    message = RawMessage.from_event(event)
    factory = translator_factory or TranslationClient

    try:
        form = parse_form(message.text)
        async with factory() as translator:
            if form.is_form:
                await run_form_flow(
                    message,
                    form,
                    client,
                    translator,
                    reserved_keywords=config.RESERVED_KEYWORDS,
                    archive_channel=config.ARCHIVE_CHANNEL_ID,
                    ack_reaction=config.ACK_REACTION,
                )
            else:
                await run_plain_flow(message, client, translator)
    except Exception:
        logger.exception(
            "Failed to handle message %s in channel %s",
            message.ts, message.channel_id,
        )


async def run_form_flow(
    message: RawMessage,
    form: ParsedForm,
    client: Any,
    translator: Translator,
    reserved_keywords: Iterable[str] = (),
    archive_channel: str = "",
    ack_reaction: str = "",
) -> RenderedCard:
    """Translate a form's request lines and post the card to the origin thread.

    HOW: Design and image lines are translated concurrently, the card is
    built and posted in the source message's thread, then the reaction and
    archive mirror are attempted.
    """
    reserved = tuple(reserved_keywords)
    language = target_language(message.text)

    design_lines, image_lines = await asyncio.gather(
        translate_lines(form.design_requests, language, translator, reserved),
        translate_lines(form.image_requests, language, translator, reserved),
    )

    blocks = build_form_card(
        form,
        design_lines,
        image_lines,
        message.attachments,
        message.author_id,
        message.ts,
    )
    text = build_fallback_text(form, design_lines, image_lines)

    resp = await client.chat_postMessage(
        channel=message.channel_id,
        thread_ts=message.thread_ts or message.ts,
        blocks=blocks,
        text=text,
    )
    card = RenderedCard(channel=message.channel_id, ts=resp.get("ts", ""), blocks=blocks)
    logger.info(
        "Posted card for team %r in %s (translated to %s)",
        form.team, message.channel_id, language,
    )

    if ack_reaction:
        await _add_reaction(client, message.channel_id, message.ts, ack_reaction)

    if archive_channel:
        card.archive_ts = await _mirror_to_archive(client, archive_channel, blocks, text)

    return card


async def run_plain_flow(message: RawMessage, client: Any, translator: Translator) -> str:
    """Translate the whole message and reply in its thread.

    A message already inside a thread gets its reply in that thread; a
    top-level message starts a new thread under itself.
    """
    language = target_language(message.text)
    translated = await translate_text(message.text, language, translator)

    thread_ts = message.thread_ts if message.in_thread else message.ts
    await client.chat_postMessage(
        channel=message.channel_id,
        thread_ts=thread_ts,
        text=translated,
    )
    return translated


async def _add_reaction(client: Any, channel: str, ts: str, name: str) -> None:
    try:
        await client.reactions_add(channel=channel, timestamp=ts, name=name)
    except Exception:
        logger.exception("Failed to add reaction %s to %s in %s", name, ts, channel)


async def _mirror_to_archive(
    client: Any,
    channel: str,
    blocks: list,
    text: str,
) -> Optional[str]:
    """Post a copy of the card to the archive channel; None on failure."""
    try:
        resp = await client.chat_postMessage(channel=channel, blocks=blocks, text=text)
    except Exception:
        logger.exception("Failed to mirror card to archive channel %s", channel)
        return None
    return resp.get("ts")


# ---------------------------------------------------------------------------
# Status actions
# ---------------------------------------------------------------------------


async def handle_status_action(ack: Any, body: Dict[str, Any], client: Any) -> None:
    """Apply a status button click to the card it came from.

    WHY: The card content in the action payload is the only copy of the
    card's state; it is mutated and written back over the same message.

    RULES:
    - ack() FIRST, before any processing
    - Only the status/assignee block changes
    - Update failures and malformed cards are logged, not retried
    """
    await ack()

    channel = (body.get("channel") or {}).get("id", "")
    message = body.get("message") or {}
    ts = message.get("ts", "")
    user_id = (body.get("user") or {}).get("id", "")

    try:
        action_id = body["actions"][0]["action_id"]
        status = CardStatus.from_action_id(action_id)
        blocks = apply_status(message.get("blocks") or [], status, user_id)
        await client.chat_update(
            channel=channel,
            ts=ts,
            blocks=blocks,
            text=build_status_fallback_text(status, user_id),
        )
        logger.info("Card %s in %s set to %s by %s", ts, channel, status.name, user_id)
    except Exception:
        logger.exception("Failed to update card status for %s in %s", ts, channel)
