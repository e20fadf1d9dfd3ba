"""Data types shared by the analysis pipeline and the persistence layer."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any


@dataclass
class GenerationRequest:
    """What the caller asked for: keywords, tone and a length category."""

    keywords: list[str] = field(default_factory=list)
    tone: str = "neutral"
    length: str = "medium"

    def __post_init__(self) -> None:
        # Order and duplicates are kept; blank entries are not keywords.
        self.keywords = [kw.strip() for kw in self.keywords if kw and kw.strip()]


@dataclass(frozen=True)
class ParsedArticle:
    title: str
    meta_description: str
    body: str


@dataclass(frozen=True)
class LexicalStats:
    word_count: int
    keyword_density: dict[str, float]


@dataclass(frozen=True)
class SEOMetrics:
    read_time: int
    seo_score: int


@dataclass(frozen=True)
class Article:
    """A finished article record, immutable once assembled."""

    title: str
    slug: str
    meta_description: str
    keywords: list[str]
    tone: str
    content: str
    length: str
    word_count: int
    read_time: int
    keyword_density: dict[str, float]
    seo_score: int
    score_version: str
    created_at: datetime

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["created_at"] = self.created_at.isoformat()
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Article:
        return cls(
            title=data["title"],
            slug=data["slug"],
            meta_description=data.get("meta_description", ""),
            keywords=list(data.get("keywords", [])),
            tone=data.get("tone", ""),
            content=data.get("content", ""),
            length=data.get("length", ""),
            word_count=int(data.get("word_count", 0)),
            read_time=int(data.get("read_time", 0)),
            keyword_density={
                k: float(v) for k, v in data.get("keyword_density", {}).items()
            },
            seo_score=int(data.get("seo_score", 0)),
            score_version=data.get("score_version", ""),
            created_at=datetime.fromisoformat(data["created_at"]),
        )
