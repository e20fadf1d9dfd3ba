"""Export stored articles as Markdown files with YAML front matter."""

from __future__ import annotations

import logging
from pathlib import Path

import aiofiles
import yaml

from analysis.models import Article

logger = logging.getLogger(__name__)


def build_frontmatter(article: Article) -> str:
    """Return the YAML front matter block for *article*."""
    meta = {
        "title": article.title,
        "slug": article.slug,
        "meta_description": article.meta_description,
        "keywords": list(article.keywords),
        "tone": article.tone,
        "length": article.length,
        "date": article.created_at.isoformat(),
        "word_count": article.word_count,
        "read_time": article.read_time,
        "keyword_density": dict(article.keyword_density),
        "seo_score": article.seo_score,
        "score_version": article.score_version,
    }
    dumped = yaml.safe_dump(meta, sort_keys=False, allow_unicode=True)
    return f"---\n{dumped}---\n"


def to_markdown(article: Article) -> str:
    body = f"# {article.title}\n\n{article.content}".rstrip()
    return build_frontmatter(article) + "\n" + body + "\n"


async def export_markdown(article: Article, out_dir: Path) -> Path:
    """Write ``<slug>.md`` under *out_dir* and return its path."""
    out_dir.mkdir(parents=True, exist_ok=True)
    out_path = out_dir / f"{article.slug}.md"
    async with aiofiles.open(out_path, "w", encoding="utf-8") as f:
        await f.write(to_markdown(article))
    logger.info("Exported %s to %s", article.slug, out_path)
    return out_path
