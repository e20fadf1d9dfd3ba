"""Composite SEO score for generated articles."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ScoringPolicy:
    """All thresholds and weights of the SEO rubric in one place.

    Stored articles keep the ``version`` they were scored with and are never
    rescored.  Changing any default below changes what a score means, so
    bump ``version`` along with it.
    """

    version: str = "2024.1"

    min_word_count: int = 500  # strictly greater than
    word_count_points: int = 30
    word_count_fallback: int = 10

    density_low: float = 1.0  # exclusive
    density_high: float = 3.0  # exclusive
    density_points: int = 40
    density_fallback: int = 10

    meta_max_length: int = 160  # strictly less than
    meta_points: int = 20
    meta_fallback: int = 10

    tone_marker: str = "friendly"
    tone_points: int = 10
    tone_fallback: int = 0

    max_score: int = 100


DEFAULT_POLICY = ScoringPolicy()


@dataclass
class SEOScore:
    """Result of scoring an article."""

    score: int  # 0-100
    components: dict[str, int] = field(default_factory=dict)
    notes: list[str] = field(default_factory=list)

    def __str__(self) -> str:
        lines = [f"SEO score: {self.score}/100"]
        for name, points in self.components.items():
            lines.append(f"  {name}: +{points}")
        for note in self.notes:
            lines.append(f"  - {note}")
        return "\n".join(lines)


def density_in_band(keyword_density: dict[str, float], policy: ScoringPolicy) -> bool:
    return any(
        policy.density_low < value < policy.density_high
        for value in keyword_density.values()
    )


def score_article(
    word_count: int,
    keyword_density: dict[str, float],
    meta_length: int,
    tone: str,
    policy: ScoringPolicy = DEFAULT_POLICY,
) -> SEOScore:
    """Apply the additive rubric and cap the total at ``policy.max_score``.

    Parameters
    ----------
    word_count:
        Words in the article body.
    keyword_density:
        Keyword -> density percentage, as produced by
        :func:`analysis.lexical.analyze`.
    meta_length:
        Length of the meta description in characters.
    tone:
        Requested tone; matched case-insensitively against the tone marker.
    """
    components: dict[str, int] = {}
    notes: list[str] = []

    # --- Word count ---
    if word_count > policy.min_word_count:
        components["word_count"] = policy.word_count_points
    else:
        components["word_count"] = policy.word_count_fallback
        notes.append(
            f"Word count is {word_count} (needs more than {policy.min_word_count})"
        )

    # --- Keyword density ---
    if density_in_band(keyword_density, policy):
        components["keyword_density"] = policy.density_points
    else:
        components["keyword_density"] = policy.density_fallback
        notes.append(
            f"No keyword density between {policy.density_low:g}% "
            f"and {policy.density_high:g}%"
        )

    # --- Meta description ---
    if meta_length < policy.meta_max_length:
        components["meta_description"] = policy.meta_points
    else:
        components["meta_description"] = policy.meta_fallback
        notes.append(
            f"Meta description is {meta_length} chars "
            f"(should be under {policy.meta_max_length})"
        )

    # --- Tone ---
    if policy.tone_marker in (tone or "").lower():
        components["tone"] = policy.tone_points
    else:
        components["tone"] = policy.tone_fallback

    score = max(0, min(sum(components.values()), policy.max_score))
    return SEOScore(score=score, components=components, notes=notes)
