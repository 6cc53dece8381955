"""Header classification and section parsing for design request forms.

WHY: Requests arrive as free text typed into Slack. Authors follow a loose
template (an optional [신규]/[수정] tag line followed by labelled sections)
but put content either on the label line or on the lines below it, and
indent inconsistently. The bot has to recover the three fields reliably
before it can decide whether the message is a form at all.

HOW: classify_header() inspects only the first trimmed line. parse_sections()
is a small state machine: the cursor starts at Section.NONE, a label line
moves it (via _LABELS) and seeds the section with the remainder of the line,
and every other non-empty line is appended to whatever section the cursor
points at.

RULES:
- Only the first line can be a header; it is stripped with one trailing blank line
- Lines before the first label are discarded
- Label content on the same line becomes the first line of that field
- Fields are newline-joined and trimmed
- A form needs only one non-empty field (team OR design OR image)
"""

from __future__ import annotations

import enum
import re

from design_translator.core.models import HeaderTag, ParsedForm

# ---------------------------------------------------------------------------
# Header tags
# ---------------------------------------------------------------------------

_HEADER_MARKERS: dict[str, HeaderTag] = {
    "[신규]": HeaderTag.NEW,
    "【신규】": HeaderTag.NEW,
    "[NEW]": HeaderTag.NEW,
    "[수정]": HeaderTag.EDIT,
    "【수정】": HeaderTag.EDIT,
    "[EDIT]": HeaderTag.EDIT,
}


def classify_header(text: str) -> HeaderTag:
    """Map the first line of a message to a canonical header tag."""
    first_line = text.strip().split("\n", 1)[0].strip()
    return _HEADER_MARKERS.get(first_line.upper(), HeaderTag.NONE)


def strip_header(text: str) -> str:
    """Remove a recognised header line and the blank line after it.

    Text without a recognised header is returned unchanged.
    """
    if classify_header(text) is HeaderTag.NONE:
        return text

    lines = text.strip().split("\n")[1:]
    if lines and not lines[0].strip():
        lines = lines[1:]
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Sections
# ---------------------------------------------------------------------------


class Section(enum.Enum):
    NONE = "none"
    TEAM = "team"
    DESIGN = "design"
    IMAGE = "image"


# Label prefix -> section. 주요/세부 요청사항 are the labels used by the first
# version of the request template and are still typed by some teams.
_LABELS: dict[str, Section] = {
    "팀명": Section.TEAM,
    "디자인 요청사항": Section.DESIGN,
    "이미지 요청사항": Section.IMAGE,
    "주요 요청사항": Section.DESIGN,
    "세부 요청사항": Section.IMAGE,
    "team name": Section.TEAM,
    "design requests": Section.DESIGN,
    "image requests": Section.IMAGE,
}

_LABEL_RE = re.compile(
    r"^(?P<label>{})\s*[:：]\s*(?P<rest>.*)$".format(
        "|".join(re.escape(label) for label in sorted(_LABELS, key=len, reverse=True))
    ),
    re.IGNORECASE,
)


def _match_label(line: str) -> tuple[Section, str] | None:
    m = _LABEL_RE.match(line)
    if m is None:
        return None
    return _LABELS[m.group("label").lower()], m.group("rest").strip()


def parse_sections(body: str) -> tuple[str, str, str]:
    """Split a header-stripped body into (team, design, image) texts.

    HOW: Walks the lines once. A label line switches the cursor and seeds
    the section with any inline content; other non-empty lines are joined
    onto the current section with newlines.
    """
    fields: dict[Section, list[str]] = {
        Section.TEAM: [],
        Section.DESIGN: [],
        Section.IMAGE: [],
    }
    current = Section.NONE

    for raw_line in body.split("\n"):
        line = raw_line.strip()
        if not line:
            continue

        labelled = _match_label(line)
        if labelled is not None:
            current, rest = labelled
            if rest:
                fields[current].append(rest)
            continue

        if current is not Section.NONE:
            fields[current].append(line)

    return (
        "\n".join(fields[Section.TEAM]).strip(),
        "\n".join(fields[Section.DESIGN]).strip(),
        "\n".join(fields[Section.IMAGE]).strip(),
    )


def split_lines(text: str) -> tuple[str, ...]:
    """Split a field into non-empty trimmed lines."""
    return tuple(line.strip() for line in text.split("\n") if line.strip())


def parse_form(text: str) -> ParsedForm:
    """Classify the header and parse the sections of a raw message text."""
    header = classify_header(text)
    team, design, image = parse_sections(strip_header(text))
    return ParsedForm(
        header=header,
        team=team,
        design_requests=split_lines(design),
        image_requests=split_lines(image),
    )
