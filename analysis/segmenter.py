"""Split raw generated text into title, meta description and body."""

from __future__ import annotations

import re

from analysis.models import ParsedArticle

DEFAULT_TITLE = "Untitled Blog"
META_MAX_LENGTH = 160

_HEADING_MARKER = re.compile(r"^#+\s*")


def fallback_meta_description(keywords: list[str]) -> str:
    return f"An article about {', '.join(keywords)}"


def segment(
    raw_text: str | None,
    keywords: list[str],
    fallback_title: str = DEFAULT_TITLE,
    meta_max_length: int = META_MAX_LENGTH,
) -> ParsedArticle:
    """Extract title, meta description and body from an LLM response.

    The model is asked to put a title on the first line and a meta
    description on the second, so parsing is positional::

        # A Catchy Title
        A short meta description.
        ## First heading
        Paragraph text...

    Blank lines are ignored.  Missing parts fall back to defaults, so this
    never raises.
    """
    lines = [line for line in (raw_text or "").splitlines() if line.strip()]

    title = ""
    if lines:
        title = _HEADING_MARKER.sub("", lines[0].strip()).strip()
    if not title:
        title = fallback_title

    if len(lines) > 1:
        meta_description = lines[1].strip()[:meta_max_length]
    else:
        meta_description = fallback_meta_description(keywords)[:meta_max_length]

    body = "\n\n".join(lines[2:])

    return ParsedArticle(title=title, meta_description=meta_description, body=body)
