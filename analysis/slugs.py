"""URL-safe identifiers derived from article titles."""

from __future__ import annotations

from slugify import slugify

from analysis.segmenter import DEFAULT_TITLE


def derive_slug(title: str, fallback_title: str = DEFAULT_TITLE) -> str:
    """Generate a lowercase, ASCII, hyphen-separated slug from *title*.

    Diacritics are transliterated (``"Café"`` -> ``"cafe"``).  A title with
    nothing sluggable in it gets the slug of *fallback_title*.  Uniqueness is
    not checked here; the store rejects duplicates.
    """
    slug = slugify(title or "")
    return slug or slugify(fallback_title or "") or slugify(DEFAULT_TITLE)
