"""Word counts and keyword density over article bodies.

Markdown is removed with a plain character strip, not a parser: only the
characters ``# _ * > -`` and backticks are dropped.  Link syntax, tables and
similar constructs survive into the word count.  Stored scores depend on
this exact behaviour, so keep it as is.
"""

from __future__ import annotations

import re
from decimal import ROUND_HALF_UP, Decimal

from analysis.models import LexicalStats

_MARKDOWN_CHARS = re.compile(r"[#_*>\-`]")
_WHITESPACE = re.compile(r"\s+")
_TWO_PLACES = Decimal("0.01")


def strip_markdown(text: str) -> str:
    return _MARKDOWN_CHARS.sub("", text)


def count_words(plain_text: str) -> int:
    return len(plain_text.split())


def keyword_pattern(keyword: str) -> re.Pattern[str] | None:
    """Compile the whole-word, case-insensitive matcher for *keyword*.

    The keyword goes through the same markdown strip as the body, is matched
    literally, may span any whitespace between its words, and must not touch
    a word character on either side.  Returns ``None`` when nothing is left
    to match.
    """
    normalized = strip_markdown(keyword).strip()
    if not normalized:
        return None
    parts = [re.escape(part) for part in _WHITESPACE.split(normalized)]
    return re.compile(r"(?<!\w)" + r"\s+".join(parts) + r"(?!\w)", re.IGNORECASE)


def count_keyword(plain_text: str, keyword: str) -> int:
    pattern = keyword_pattern(keyword)
    if pattern is None:
        return 0
    return len(pattern.findall(plain_text))


def keyword_density(count: int, word_count: int) -> float:
    """Occurrences as a percentage of *word_count*, two decimals.

    Halves round up (1 in 32 words is 3.13), computed in decimal so float
    representation never decides the last digit.
    """
    if word_count <= 0:
        return 0.0
    percent = Decimal(count) * 100 / Decimal(word_count)
    value = float(percent.quantize(_TWO_PLACES, rounding=ROUND_HALF_UP))
    # A punctuation-only keyword can match twice inside one token.
    return min(value, 100.0)


def analyze(body: str, keywords: list[str]) -> LexicalStats:
    """Compute word count and per-keyword density for *body*."""
    plain_text = strip_markdown(body or "")
    word_count = count_words(plain_text)

    density: dict[str, float] = {}
    for kw in keywords:
        density[kw] = keyword_density(count_keyword(plain_text, kw), word_count)

    return LexicalStats(word_count=word_count, keyword_density=density)
