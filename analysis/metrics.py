"""Reading time and the derived SEO metrics."""

from __future__ import annotations

import math

from analysis.models import LexicalStats, SEOMetrics
from analysis.scoring import DEFAULT_POLICY, ScoringPolicy, score_article

WORDS_PER_MINUTE = 200


def reading_time(word_count: int, words_per_minute: int = WORDS_PER_MINUTE) -> int:
    """Minutes to read *word_count* words, rounded up.  Empty text reads in 0."""
    if word_count <= 0:
        return 0
    return math.ceil(word_count / words_per_minute)


def compute_metrics(
    stats: LexicalStats,
    meta_description: str,
    tone: str,
    policy: ScoringPolicy = DEFAULT_POLICY,
    words_per_minute: int = WORDS_PER_MINUTE,
) -> SEOMetrics:
    seo = score_article(
        word_count=stats.word_count,
        keyword_density=stats.keyword_density,
        meta_length=len(meta_description),
        tone=tone,
        policy=policy,
    )
    return SEOMetrics(
        read_time=reading_time(stats.word_count, words_per_minute),
        seo_score=seo.score,
    )
