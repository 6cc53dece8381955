"""Status transitions for posted design request cards.

WHY: The design team moves a request through review by clicking the
buttons on its card. The bot keeps no record of posted cards, so each
click must be answered from the card content Slack sends along with the
action payload: rewrite the status line, put the clicker down as assignee,
and write the whole card back over the original message.

HOW: apply_status() deep-copies the incoming blocks, finds the block whose
block_id is STATUS_BLOCK_ID, and replaces it with a freshly built status
block. Every other block is left untouched.

RULES:
- Every status can follow every other status; there are no guards
- Applying the same status twice gives the same blocks as applying it once
- The input blocks are never mutated
- A card without a status block raises CardFormatError
"""

from __future__ import annotations

import copy
from typing import Any, Dict, List, Optional, Sequence

from design_translator.core.models import CardStatus
from design_translator.slack.messages import (
    STATUS_BLOCK_ID,
    build_status_block,
    read_status_text,
)


class CardFormatError(ValueError):
    """Raised when an action payload does not contain a recognisable card.

    Usually means the card was rendered by an older version of the bot.
    """


def find_status_index(blocks: Sequence[Dict[str, Any]]) -> int:
    for index, block in enumerate(blocks):
        if block.get("block_id") == STATUS_BLOCK_ID:
            return index
    raise CardFormatError("Card has no '{}' block".format(STATUS_BLOCK_ID))


def apply_status(
    blocks: Sequence[Dict[str, Any]],
    status: CardStatus,
    user_id: str,
) -> List[Dict[str, Any]]:
    """Return a copy of blocks with the status line set to status / user_id."""
    if not blocks:
        raise CardFormatError("Card has no blocks")

    updated = copy.deepcopy(list(blocks))
    index = find_status_index(updated)
    updated[index] = build_status_block(status, user_id)
    return updated


def read_status(blocks: Sequence[Dict[str, Any]]) -> Optional[CardStatus]:
    """Read the current status back from a card, or None if unrecognised."""
    try:
        index = find_status_index(blocks)
    except CardFormatError:
        return None
    label = read_status_text(blocks[index])
    return CardStatus.from_label(label) if label else None
