"""Dataclasses and enums shared by the parser, renderer, and card handlers.

WHY: The pipeline passes a handful of small values between stages: the
inbound message, the parsed form, the rendered card, and its review
status. Typed containers keep each stage's contract explicit and make
the stages testable in isolation.

HOW: Frozen dataclasses for values that never change after creation
(RawMessage, ParsedForm, TranslatedLine), a plain dataclass for the
rendered card, and str enums for closed sets (HeaderTag, CardStatus).

RULES:
- RawMessage and ParsedForm are immutable once built
- ParsedForm.is_form is true iff any one of the three fields is non-empty
- CardStatus members carry their Slack action_id and display label
- Every status is reachable from every other; there is no terminal status
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class RawMessage:
    """An inbound Slack message as the pipeline sees it.

    RULES:
    - attachments holds image URLs only (url_private, falling back to url)
    - thread_ts is None for top-level messages
    """

    text: str
    author_id: str
    channel_id: str
    ts: str
    thread_ts: str | None = None
    attachments: tuple[str, ...] = ()

    @property
    def in_thread(self) -> bool:
        return bool(self.thread_ts) and self.thread_ts != self.ts

    @classmethod
    def from_event(cls, event: dict[str, Any]) -> RawMessage:
        """Build a RawMessage from a Slack ``message`` event payload."""
        urls = []
        for f in event.get("files") or []:
            url = f.get("url_private") or f.get("url")
            if url:
                urls.append(url)

        return cls(
            text=event.get("text") or "",
            author_id=event.get("user", ""),
            channel_id=event.get("channel", ""),
            ts=event.get("ts", ""),
            thread_ts=event.get("thread_ts"),
            attachments=tuple(urls),
        )


class HeaderTag(str, enum.Enum):
    """Canonical display tag for the optional first line of a form."""

    NONE = ""
    NEW = "[NEW]"
    EDIT = "[EDIT]"


@dataclass(frozen=True)
class ParsedForm:
    """Structured view of a design request form.

    WHY: The dispatch router only needs one question answered (is this a
    form?) and the renderer needs the three fields split into lines.

    RULES:
    - team is a single trimmed string (may contain newlines)
    - design_requests / image_requests hold non-empty trimmed lines in order
    """

    header: HeaderTag = HeaderTag.NONE
    team: str = ""
    design_requests: tuple[str, ...] = ()
    image_requests: tuple[str, ...] = ()

    @property
    def is_form(self) -> bool:
        return bool(self.team or self.design_requests or self.image_requests)


@dataclass(frozen=True)
class TranslatedLine:
    """One request line after the translation step.

    RULES:
    - reserved is true only for lines passed through because they contain
      a reserved keyword; the renderer emphasizes exactly those lines
    """

    text: str
    reserved: bool = False


class CardStatus(str, enum.Enum):
    """Review status shown on a rendered card.

    HOW: Each member's value is the Slack action_id of the button that
    selects it, so an action payload maps straight back to a member.
    """

    PENDING_REVIEW = "status_pending"
    IN_PROGRESS = "status_in_progress"
    COMPLETED = "status_completed"
    NEEDS_REVISION = "status_needs_revision"

    @property
    def action_id(self) -> str:
        return self.value

    @property
    def label(self) -> str:
        return _STATUS_LABELS[self]

    @property
    def button_text(self) -> str:
        return _STATUS_BUTTON_TEXT[self]

    @classmethod
    def from_action_id(cls, action_id: str) -> CardStatus:
        """Resolve a button action_id, raising ValueError if unknown."""
        try:
            return cls(action_id)
        except ValueError:
            raise ValueError("Unknown status action: {!r}".format(action_id)) from None

    @classmethod
    def from_label(cls, label: str) -> CardStatus | None:
        for status, text in _STATUS_LABELS.items():
            if text == label:
                return status
        return None


_STATUS_LABELS = {
    CardStatus.PENDING_REVIEW: "⏳ Pending review",
    CardStatus.IN_PROGRESS: "🛠️ In progress",
    CardStatus.COMPLETED: "✅ Completed",
    CardStatus.NEEDS_REVISION: "🔁 Needs revision",
}

_STATUS_BUTTON_TEXT = {
    CardStatus.PENDING_REVIEW: "Pending",
    CardStatus.IN_PROGRESS: "In progress",
    CardStatus.COMPLETED: "Completed",
    CardStatus.NEEDS_REVISION: "Needs revision",
}


@dataclass
class RenderedCard:
    """A card as posted to Slack.

    RULES:
    - blocks is exactly what was sent to chat.postMessage
    - archive_ts is set only when the archive mirror succeeded
    - Never cached; status updates re-read blocks from the action payload
    """

    channel: str
    ts: str
    blocks: list[dict[str, Any]] = field(default_factory=list)
    archive_ts: str | None = None
