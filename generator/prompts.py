"""Prompt text sent to the LLM backend.

The response layout requested here (title first, meta description second)
is what :func:`analysis.segmenter.segment` relies on.
"""

from __future__ import annotations

from analysis.models import GenerationRequest

SYSTEM_PROMPT = (
    "You are an expert SEO content writer who writes engaging and "
    "optimized blog posts."
)

_ARTICLE_TEMPLATE = """\
Generate an SEO-friendly blog post of about {target_words} words.
Tone: {tone}.
Keywords: {keywords}.
The blog must include:
1. A catchy title (first line)
2. A meta description (second line, under 160 characters)
3. Multiple headings and short paragraphs.
4. Use markdown or plain text only."""


def build_prompt(request: GenerationRequest, target_words: int) -> str:
    """Return the user prompt for *request*."""
    return _ARTICLE_TEMPLATE.format(
        target_words=target_words,
        tone=request.tone,
        keywords=", ".join(request.keywords),
    )
