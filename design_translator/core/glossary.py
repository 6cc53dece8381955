"""Fixed garment-colour vocabulary and placeholder protection.

WHY: Language models translate colour names inconsistently ("챠콜" comes
back as "charcoal grey", "coal", or untouched), and the production team
matches orders against exact colour names. Authors also need a way to
pass arbitrary text through untouched, such as player names or slogans.
Both kinds of content are swapped for opaque tokens before the model sees
the text and swapped back afterwards.

HOW: protect() makes two regex passes. The first replaces every {literal}
span with a token that maps back to the span itself (braces included). The
second is a single alternation over the dictionary terms for the current
direction, sorted longest first, so a compound colour is always consumed
before any colour it contains. Each occurrence gets its own token, mapped
to the canonical term in the target language. restore() substitutes the
tokens back.

RULES:
- FIXED_TERMS pairs are (Korean, English)
- Longer source terms are matched before shorter ones
- English source terms match case-insensitively and on word boundaries
- Korean source terms never start mid-word; particles after them are fine
  (네이비로, 블랙과) but listed compounds (그레이드, 블루투스) are left alone
- Tokens look like __TERM<n>__ and never occur in the input text
- A PlaceholderMap lives for one protect/restore cycle only
"""

from __future__ import annotations

import functools
import re
from typing import Dict, Tuple

from design_translator.core.language import ENGLISH

PlaceholderMap = Dict[str, str]

TOKEN_TEMPLATE = "__TERM{}__"

# Spans the author wants passed through verbatim: {Falcons FC}
LITERAL_RE = re.compile(r"\{[^{}\n]+\}")

FIXED_TERMS: Tuple[Tuple[str, str], ...] = (
    ("딥챠콜", "Deep Charcoal"),
    ("딥차콜", "Deep Charcoal"),
    ("챠콜", "Charcoal"),
    ("차콜", "Charcoal"),
    ("멜란지 그레이", "Melange Grey"),
    ("멜란지", "Melange"),
    ("라이트 그레이", "Light Grey"),
    ("다크 그레이", "Dark Grey"),
    ("그레이", "Grey"),
    ("네이비", "Navy"),
    ("블랙", "Black"),
    ("화이트", "White"),
    ("아이보리", "Ivory"),
    ("베이지", "Beige"),
    ("오트밀", "Oatmeal"),
    ("카키", "Khaki"),
    ("올리브", "Olive"),
    ("버건디", "Burgundy"),
    ("와인", "Wine"),
    ("레드", "Red"),
    ("핑크", "Pink"),
    ("오렌지", "Orange"),
    ("머스타드", "Mustard"),
    ("옐로우", "Yellow"),
    ("민트", "Mint"),
    ("스카이블루", "Sky Blue"),
    ("로얄블루", "Royal Blue"),
    ("블루", "Blue"),
    ("라벤더", "Lavender"),
    ("퍼플", "Purple"),
    ("브라운", "Brown"),
    ("모카", "Mocha"),
)

# Hangul words that merely start with a colour term: 그레이드 (grade),
# 블루투스 (Bluetooth), 화이트보드 (whiteboard) and similar.
_COMPOUND_SUFFIXES: Dict[str, Tuple[str, ...]] = {
    "그레이": ("드", "스"),
    "블루": ("투스", "베리"),
    "블랙": ("리스트", "박스", "홀"),
    "화이트": ("보드", "리스트", "닝"),
    "와인": ("딩",),
}


def terms_for(target_language: str) -> Dict[str, str]:
    """Return source -> target terms for one direction, longest source first.

    When several Korean spellings share an English term, the first one
    listed in FIXED_TERMS is used for the English -> Korean direction.
    """
    mapping: Dict[str, str] = {}
    for korean, english in FIXED_TERMS:
        if target_language == ENGLISH:
            mapping.setdefault(korean, english)
        else:
            mapping.setdefault(english.lower(), korean)
    return dict(sorted(mapping.items(), key=lambda item: len(item[0]), reverse=True))


@functools.lru_cache(maxsize=4)
def _term_pattern(target_language: str) -> re.Pattern[str]:
    if target_language == ENGLISH:
        body = "|".join(_korean_alternative(term) for term in terms_for(ENGLISH))
        return re.compile(r"(?<![가-힣])(?:{})".format(body))
    body = "|".join(re.escape(term) for term in terms_for(target_language))
    return re.compile(r"(?<![A-Za-z])(?:{})(?![A-Za-z])".format(body), re.IGNORECASE)


def _korean_alternative(term: str) -> str:
    suffixes = [
        suffix
        for ending, candidates in _COMPOUND_SUFFIXES.items()
        if term.endswith(ending)
        for suffix in candidates
    ]
    if not suffixes:
        return re.escape(term)
    return "{}(?!{})".format(re.escape(term), "|".join(re.escape(s) for s in suffixes))


class _TokenFactory:
    """Hands out __TERM<n>__ tokens that do not occur in the source text."""

    def __init__(self, source: str) -> None:
        self._source = source
        self._next = 0

    def __call__(self) -> str:
        while True:
            token = TOKEN_TEMPLATE.format(self._next)
            self._next += 1
            if token not in self._source:
                return token


def protect(text: str, target_language: str) -> tuple[str, PlaceholderMap]:
    """Replace literal spans and dictionary terms with unique tokens.

    Returns the masked text and the token -> replacement map that
    restore() needs once the masked text has been translated.
    """
    placeholders: PlaceholderMap = {}
    new_token = _TokenFactory(text)

    def _register(value: str) -> str:
        token = new_token()
        placeholders[token] = value
        return token

    masked = LITERAL_RE.sub(lambda m: _register(m.group(0)), text)

    terms = terms_for(target_language)
    masked = _term_pattern(target_language).sub(
        lambda m: _register(terms[_lookup_key(m.group(0), target_language)]),
        masked,
    )
    return masked, placeholders


def restore(text: str, placeholders: PlaceholderMap) -> str:
    """Put every protected value back in place of its token."""
    for token, value in placeholders.items():
        text = text.replace(token, value)
    return text


def _lookup_key(matched: str, target_language: str) -> str:
    return matched if target_language == ENGLISH else matched.lower()
