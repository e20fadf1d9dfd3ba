"""Turn raw generated text into a finished, scored article record."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from analysis.lexical import analyze
from analysis.metrics import compute_metrics
from analysis.models import Article, GenerationRequest
from analysis.segmenter import segment
from analysis.slugs import derive_slug

if TYPE_CHECKING:
    from config import GenerationSettings

logger = logging.getLogger(__name__)


class ArticleAssembler:
    """Runs segmentation, slug derivation, lexical analysis and scoring.

    Parameters
    ----------
    settings:
        Explicit generation settings (length table, reading speed, fallback
        title, meta cap, scoring policy).  The assembler never reads the
        environment itself.
    """

    def __init__(self, settings: GenerationSettings) -> None:
        self.settings = settings

    def assemble(
        self,
        raw_text: str | None,
        request: GenerationRequest,
        created_at: datetime | None = None,
    ) -> Article:
        """Build an :class:`Article` from *raw_text*.

        Always returns a record: empty or malformed text yields an article
        with the fallback title and a keyword-based meta description so the
        attempt is still auditable.
        """
        if not (raw_text or "").strip():
            logger.warning(
                "Empty generation for keywords %s, using fallback title",
                ", ".join(request.keywords) or "(none)",
            )

        parsed = segment(
            raw_text,
            request.keywords,
            fallback_title=self.settings.fallback_title,
            meta_max_length=self.settings.meta_max_length,
        )
        stats = analyze(parsed.body, request.keywords)
        metrics = compute_metrics(
            stats,
            meta_description=parsed.meta_description,
            tone=request.tone,
            policy=self.settings.policy,
            words_per_minute=self.settings.words_per_minute,
        )

        article = Article(
            title=parsed.title,
            slug=derive_slug(parsed.title, self.settings.fallback_title),
            meta_description=parsed.meta_description,
            keywords=list(request.keywords),
            tone=request.tone,
            content=parsed.body,
            length=request.length,
            word_count=stats.word_count,
            read_time=metrics.read_time,
            keyword_density=dict(stats.keyword_density),
            seo_score=metrics.seo_score,
            score_version=self.settings.policy.version,
            created_at=created_at or datetime.now(timezone.utc),
        )
        logger.info(
            "Assembled article %s (%d words, SEO %d)",
            article.slug,
            article.word_count,
            article.seo_score,
        )
        return article
