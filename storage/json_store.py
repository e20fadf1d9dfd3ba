"""Article store backed by a single JSON document on disk."""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any

import aiofiles

from analysis.models import Article
from storage.base import (
    ArticleNotFoundError,
    ArticleStore,
    DuplicateSlugError,
    Page,
    StorageError,
    validate_page_args,
)

logger = logging.getLogger(__name__)


class JsonArticleStore(ArticleStore):
    """Keeps every article in ``{"articles": [...]}`` at *path*.

    Each store instance serialises its own read-modify-write cycles with an
    :class:`asyncio.Lock`.  Two processes sharing a file are not coordinated.
    """

    def __init__(self, path: Path) -> None:
        self.path = path
        self._lock = asyncio.Lock()

    # -- File helpers --------------------------------------------------------

    async def _load(self) -> dict[str, Any]:
        if not self.path.exists():
            return {"articles": []}
        async with aiofiles.open(self.path, "r", encoding="utf-8") as f:
            raw = await f.read()
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            logger.error("Unreadable article store %s: %s", self.path, exc)
            raise StorageError(f"Corrupt article store {self.path}: {exc}") from exc
        if not isinstance(data, dict) or not isinstance(data.get("articles"), list):
            raise StorageError(f"Corrupt article store {self.path}: no articles list")
        return data

    async def _write(self, data: dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        async with aiofiles.open(self.path, "w", encoding="utf-8") as f:
            await f.write(json.dumps(data, indent=2, ensure_ascii=False))

    async def _all(self) -> list[Article]:
        data = await self._load()
        try:
            return [Article.from_dict(a) for a in data["articles"]]
        except (KeyError, TypeError, ValueError) as exc:
            raise StorageError(f"Malformed article in {self.path}: {exc!r}") from exc

    # -- ArticleStore implementation -----------------------------------------

    async def save(self, article: Article) -> Article:
        async with self._lock:
            data = await self._load()
            if any(a["slug"] == article.slug for a in data["articles"]):
                logger.warning("Rejected duplicate slug: %s", article.slug)
                raise DuplicateSlugError(article.slug)
            data["articles"].append(article.to_dict())
            await self._write(data)
        logger.info("Saved article %s to %s", article.slug, self.path)
        return article

    async def get(self, slug: str) -> Article:
        for article in await self._all():
            if article.slug == slug:
                return article
        raise ArticleNotFoundError(slug)

    async def list(self, page: int = 1, limit: int = 5, sort: str = "desc") -> Page:
        validate_page_args(page, limit, sort)
        articles = sorted(
            await self._all(),
            key=lambda a: a.created_at,
            reverse=(sort == "desc"),
        )
        start = (page - 1) * limit
        return Page(
            articles=articles[start:start + limit],
            total=len(articles),
            page=page,
            limit=limit,
        )

    async def delete(self, slug: str) -> Article:
        async with self._lock:
            data = await self._load()
            for idx, entry in enumerate(data["articles"]):
                if entry["slug"] == slug:
                    removed = data["articles"].pop(idx)
                    await self._write(data)
                    logger.info("Deleted article %s", slug)
                    return Article.from_dict(removed)
        raise ArticleNotFoundError(slug)

    async def top(self, limit: int = 5, min_score: int = 50) -> list[Article]:
        if limit < 1:
            raise ValueError(f"limit must be >= 1, got {limit}")
        ranked = sorted(
            (a for a in await self._all() if a.seo_score >= min_score),
            key=lambda a: (a.seo_score, a.created_at),
            reverse=True,
        )
        return ranked[:limit]
