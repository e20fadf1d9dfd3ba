"""Persistence interface for finished articles."""

from __future__ import annotations

import abc
import math
from dataclasses import dataclass, field

from analysis.models import Article

SORT_ORDERS = ("asc", "desc")


class StorageError(Exception):
    """Base class for store failures surfaced to callers."""


class DuplicateSlugError(StorageError):
    def __init__(self, slug: str) -> None:
        super().__init__(f"An article with slug '{slug}' already exists")
        self.slug = slug


class ArticleNotFoundError(StorageError):
    def __init__(self, slug: str) -> None:
        super().__init__(f"Article not found: '{slug}'")
        self.slug = slug


@dataclass
class Page:
    """One page of articles plus the totals needed to paginate."""

    articles: list[Article] = field(default_factory=list)
    total: int = 0
    page: int = 1
    limit: int = 5

    @property
    def pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0


class ArticleStore(abc.ABC):
    """Abstract interface so we can swap storage backends later."""

    @abc.abstractmethod
    async def save(self, article: Article) -> Article:
        """Persist *article*; raise :class:`DuplicateSlugError` if the slug is taken."""

    @abc.abstractmethod
    async def get(self, slug: str) -> Article:
        """Return the article with *slug* or raise :class:`ArticleNotFoundError`."""

    @abc.abstractmethod
    async def list(self, page: int = 1, limit: int = 5, sort: str = "desc") -> Page:
        """Return one page of articles ordered by creation time."""

    @abc.abstractmethod
    async def delete(self, slug: str) -> Article:
        """Remove and return the article with *slug*."""

    @abc.abstractmethod
    async def top(self, limit: int = 5, min_score: int = 50) -> list[Article]:
        """Return the best-scoring articles at or above *min_score*."""


def validate_page_args(page: int, limit: int, sort: str) -> None:
    if page < 1:
        raise ValueError(f"page must be >= 1, got {page}")
    if limit < 1:
        raise ValueError(f"limit must be >= 1, got {limit}")
    if sort not in SORT_ORDERS:
        raise ValueError(f"sort must be one of: {', '.join(SORT_ORDERS)}")
