"""Block Kit builders for design request cards.

WHY: A translated form is posted as a card that both language groups can
read at a glance, with buttons the design team uses to track progress.
Centralizing the builders keeps bot.py focused on event handling and
gives card.py one place to find the status block's shape.

HOW: build_form_card() assembles the blocks in a fixed order. Each helper
returns a Block Kit dict (or list of dicts) ready to be passed to
chat_postMessage(blocks=...) or chat_update(blocks=...).

RULES:
- Block order: [tag] header, fields, divider, design requests, divider,
  image requests, images, status buttons, status/assignee line
- The status line is the block with block_id STATUS_BLOCK_ID; card.py
  relies on that id, never on position
- Button action_ids are CardStatus values and must match bot.py registrations
- Lines passed through for a reserved keyword (TranslatedLine.reserved) are
  wrapped in *bold*; translated lines are never emphasized
- Python 3.9+ compatible (no match/case)
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from design_translator.config import DISPLAY_TIMEZONE
from design_translator.core.models import CardStatus, HeaderTag, ParsedForm, TranslatedLine

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

STATUS_BLOCK_ID = "card_status"
ACTIONS_BLOCK_ID = "card_actions"

EMPTY_REQUESTS_NOTE = "_No requests_"
_HEADER_MAX_CHARS = 150  # Slack limit for plain_text in header blocks

_BUTTON_STYLES = {
    CardStatus.COMPLETED: "primary",
    CardStatus.NEEDS_REVISION: "danger",
}


# ---------------------------------------------------------------------------
# Card builder
# ---------------------------------------------------------------------------


def build_form_card(
    form: ParsedForm,
    design_lines: Sequence[TranslatedLine],
    image_lines: Sequence[TranslatedLine],
    attachments: Sequence[str],
    author_id: str,
    ts: str,
    timezone: str = DISPLAY_TIMEZONE,
) -> List[Dict[str, Any]]:
    """Build the Block Kit card for a parsed (and translated) form.

    WHY: This is the message the requester and the design team both look
    at. It must carry the translated requests, any attached reference
    images, and a status line seeded to "pending review".

    Args:
        form: The parsed form (team and header come from here).
        design_lines: Translated design request lines, in order.
        image_lines: Translated image request lines, in order.
        attachments: Image URLs from the source message.
        author_id: Slack user id of the requester; initial assignee.
        ts: Source message timestamp, shown as the request time.
        timezone: IANA zone for the request time.

    Returns:
        List of Block Kit block dicts.
    """
    team = form.team or "-"

    blocks = []  # type: List[Dict[str, Any]]

    if form.header is not HeaderTag.NONE:
        blocks.append({
            "type": "section",
            "text": {"type": "mrkdwn", "text": "*{}*".format(form.header.value)},
        })

    blocks.extend([
        {
            "type": "header",
            "text": {
                "type": "plain_text",
                "text": _truncate("⚽ Team Name: {}".format(team.replace("\n", " ")), _HEADER_MAX_CHARS),
            },
        },
        {
            "type": "section",
            "fields": [
                {"type": "mrkdwn", "text": "*Team Name:*\n{}".format(team)},
                {"type": "mrkdwn", "text": "*Requested:*\n{}".format(format_request_time(ts, timezone))},
            ],
        },
        {"type": "divider"},
        build_request_section("Design Requests", design_lines),
        {"type": "divider"},
        build_request_section("Image Requests", image_lines),
    ])

    for url in attachments:
        blocks.append({
            "type": "image",
            "image_url": url,
            "alt_text": "Attached image",
        })

    blocks.append(build_status_buttons())
    blocks.append(build_status_block(CardStatus.PENDING_REVIEW, author_id))
    return blocks


def build_request_section(
    title: str,
    lines: Sequence[TranslatedLine],
) -> Dict[str, Any]:
    """Render a request list as one bulleted mrkdwn section."""
    bullets = [
        "• {}".format(_emphasize(line))
        for line in lines
        if line.text.strip()
    ]
    body = "\n".join(bullets) if bullets else EMPTY_REQUESTS_NOTE

    return {
        "type": "section",
        "text": {
            "type": "mrkdwn",
            "text": "*{}:*\n{}".format(title, body),
        },
    }


def build_status_buttons() -> Dict[str, Any]:
    """Build the actions block with one button per CardStatus."""
    elements = []
    for status in CardStatus:
        button = {
            "type": "button",
            "text": {"type": "plain_text", "text": status.button_text},
            "action_id": status.action_id,
            "value": status.value,
        }
        style = _BUTTON_STYLES.get(status)
        if style:
            button["style"] = style
        elements.append(button)

    return {
        "type": "actions",
        "block_id": ACTIONS_BLOCK_ID,
        "elements": elements,
    }


def build_status_block(status: CardStatus, assignee_id: str) -> Dict[str, Any]:
    """Build the status/assignee line that card.py rewrites in place."""
    assignee = "<@{}>".format(assignee_id) if assignee_id else "-"
    return {
        "type": "context",
        "block_id": STATUS_BLOCK_ID,
        "elements": [
            {"type": "mrkdwn", "text": "*Status:* {}".format(status.label)},
            {"type": "mrkdwn", "text": "*Assignee:* {}".format(assignee)},
        ],
    }


def build_fallback_text(
    form: ParsedForm,
    design_lines: Sequence[TranslatedLine],
    image_lines: Sequence[TranslatedLine],
) -> str:
    """Plain-text summary for clients and notifications without Block Kit."""
    prefix = "{} ".format(form.header.value) if form.header is not HeaderTag.NONE else ""
    return "{}Team Name: {} / {} / {}".format(
        prefix,
        form.team or "-",
        "; ".join(line.text for line in design_lines) or "-",
        "; ".join(line.text for line in image_lines) or "-",
    )


def build_status_fallback_text(status: CardStatus, assignee_id: str) -> str:
    return "Design request status: {} (<@{}>)".format(status.label, assignee_id)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def format_request_time(ts: str, timezone: str = DISPLAY_TIMEZONE) -> str:
    """Format a Slack ts ("1717200000.000100") as local date and time.

    RULES:
    - Unknown zones fall back to UTC with a warning
    - An unparseable ts renders as "-"
    """
    try:
        seconds = float(ts)
    except (TypeError, ValueError):
        return "-"

    try:
        tz = ZoneInfo(timezone)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("Unknown DISPLAY_TIMEZONE %r, using UTC", timezone)
        tz = ZoneInfo("UTC")

    return datetime.fromtimestamp(seconds, tz).strftime("%Y-%m-%d %H:%M %Z")


def _emphasize(line: TranslatedLine) -> str:
    if line.reserved:
        return "*{}*".format(line.text.strip())
    return line.text


def _truncate(text: str, limit: int) -> str:
    if len(text) <= limit:
        return text
    return text[: limit - 1] + "…"


def read_status_text(block: Optional[Dict[str, Any]]) -> Optional[str]:
    """Return the status label from a status block, or None if absent."""
    if not block:
        return None
    elements = block.get("elements") or []
    if not elements:
        return None
    text = elements[0].get("text", "")
    prefix = "*Status:* "
    return text[len(prefix):] if text.startswith(prefix) else None
