"""Tests for the storage package: JSON article store and Markdown export."""

from __future__ import annotations

import asyncio
import json
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest
import yaml

from analysis.models import Article
from storage.base import ArticleNotFoundError, DuplicateSlugError, Page, StorageError
from storage.export import build_frontmatter, export_markdown, to_markdown
from storage.json_store import JsonArticleStore

BASE_TIME = datetime(2026, 2, 17, 12, 0, tzinfo=timezone.utc)


def make_article(
    slug: str = "test-article",
    seo_score: int = 70,
    minutes: int = 0,
    title: str = "Test Article",
) -> Article:
    return Article(
        title=title,
        slug=slug,
        meta_description="A test article about seo.",
        keywords=["seo", "tools"],
        tone="friendly",
        content="## Intro\n\nSome seo text.",
        length="short",
        word_count=4,
        read_time=1,
        keyword_density={"seo": 25.0, "tools": 0.0},
        seo_score=seo_score,
        score_version="2024.1",
        created_at=BASE_TIME + timedelta(minutes=minutes),
    )


@pytest.fixture()
def store(tmp_path: Path) -> JsonArticleStore:
    return JsonArticleStore(tmp_path / "data" / "articles.json")


# ---------------------------------------------------------------------------
# Article serialisation
# ---------------------------------------------------------------------------


class TestArticleDict:
    def test_round_trip(self):
        article = make_article()
        data = article.to_dict()
        assert data["created_at"] == "2026-02-17T12:00:00+00:00"
        assert Article.from_dict(data) == article


# ---------------------------------------------------------------------------
# JsonArticleStore
# ---------------------------------------------------------------------------


class TestJsonArticleStore:
    def test_save_and_get(self, store: JsonArticleStore):
        article = make_article()
        assert asyncio.run(store.save(article)) == article
        assert asyncio.run(store.get("test-article")) == article

    def test_file_written(self, store: JsonArticleStore):
        asyncio.run(store.save(make_article(title="Café")))
        data = json.loads(store.path.read_text(encoding="utf-8"))
        assert [a["slug"] for a in data["articles"]] == ["test-article"]
        assert data["articles"][0]["title"] == "Café"

    def test_persistence(self, store: JsonArticleStore):
        asyncio.run(store.save(make_article()))
        # Fresh instance reads the same file
        other = JsonArticleStore(store.path)
        assert asyncio.run(other.get("test-article")).title == "Test Article"

    def test_duplicate_slug_rejected(self, store: JsonArticleStore):
        asyncio.run(store.save(make_article()))
        with pytest.raises(DuplicateSlugError, match="test-article"):
            asyncio.run(store.save(make_article(title="Something else")))

        data = json.loads(store.path.read_text())
        assert len(data["articles"]) == 1

    def test_get_missing(self, store: JsonArticleStore):
        with pytest.raises(ArticleNotFoundError):
            asyncio.run(store.get("nope"))

    def test_delete(self, store: JsonArticleStore):
        asyncio.run(store.save(make_article("a")))
        asyncio.run(store.save(make_article("b")))

        deleted = asyncio.run(store.delete("a"))
        assert deleted.slug == "a"
        with pytest.raises(ArticleNotFoundError):
            asyncio.run(store.get("a"))
        assert asyncio.run(store.get("b")).slug == "b"

    def test_delete_missing(self, store: JsonArticleStore):
        with pytest.raises(ArticleNotFoundError):
            asyncio.run(store.delete("ghost"))

    def test_concurrent_saves(self, store: JsonArticleStore):
        async def save_all() -> None:
            await asyncio.gather(
                *(store.save(make_article(f"post-{i}", minutes=i)) for i in range(5))
            )

        asyncio.run(save_all())
        assert asyncio.run(store.list(limit=10)).total == 5

    def test_corrupt_file_raises_storage_error(self, store: JsonArticleStore):
        store.path.parent.mkdir(parents=True)
        store.path.write_text("{not json", encoding="utf-8")
        with pytest.raises(StorageError, match="Corrupt article store"):
            asyncio.run(store.list())
        with pytest.raises(StorageError):
            asyncio.run(store.get("test-article"))
        with pytest.raises(StorageError):
            asyncio.run(store.save(make_article()))

    @pytest.mark.parametrize(
        "content",
        ['[]', '{"posts": []}', '{"articles": [{"slug": "only-a-slug"}]}'],
    )
    def test_unexpected_shape_raises_storage_error(
        self, store: JsonArticleStore, content: str
    ):
        store.path.parent.mkdir(parents=True)
        store.path.write_text(content, encoding="utf-8")
        with pytest.raises(StorageError):
            asyncio.run(store.list())


class TestListAndTop:
    @pytest.fixture()
    def filled(self, store: JsonArticleStore) -> JsonArticleStore:
        scores = [40, 90, 60, 90, 75, 55, 20]
        for i, score in enumerate(scores):
            asyncio.run(store.save(make_article(f"post-{i}", seo_score=score, minutes=i)))
        return store

    def test_list_empty(self, store: JsonArticleStore):
        page = asyncio.run(store.list())
        assert page == Page(articles=[], total=0, page=1, limit=5)
        assert page.pages == 0

    def test_list_newest_first(self, filled: JsonArticleStore):
        page = asyncio.run(filled.list(page=1, limit=3))
        assert [a.slug for a in page.articles] == ["post-6", "post-5", "post-4"]
        assert page.total == 7
        assert page.pages == 3

    def test_list_oldest_first(self, filled: JsonArticleStore):
        page = asyncio.run(filled.list(page=1, limit=2, sort="asc"))
        assert [a.slug for a in page.articles] == ["post-0", "post-1"]

    def test_list_last_page(self, filled: JsonArticleStore):
        page = asyncio.run(filled.list(page=3, limit=3))
        assert [a.slug for a in page.articles] == ["post-0"]

    def test_list_past_end(self, filled: JsonArticleStore):
        assert asyncio.run(filled.list(page=10, limit=3)).articles == []

    @pytest.mark.parametrize(
        "kwargs",
        [{"page": 0}, {"limit": 0}, {"sort": "sideways"}],
    )
    def test_list_invalid_args(self, store: JsonArticleStore, kwargs):
        with pytest.raises(ValueError):
            asyncio.run(store.list(**kwargs))

    def test_top(self, filled: JsonArticleStore):
        top = asyncio.run(filled.top(limit=3, min_score=50))
        # Ties on score go to the newer article
        assert [a.slug for a in top] == ["post-3", "post-1", "post-4"]

    def test_top_threshold(self, filled: JsonArticleStore):
        top = asyncio.run(filled.top(limit=10, min_score=60))
        assert all(a.seo_score >= 60 for a in top)
        assert len(top) == 4

    def test_top_none_above_threshold(self, filled: JsonArticleStore):
        assert asyncio.run(filled.top(min_score=95)) == []


# ---------------------------------------------------------------------------
# Markdown export
# ---------------------------------------------------------------------------


class TestExport:
    def test_frontmatter(self):
        block = build_frontmatter(make_article())
        assert block.startswith("---\n")
        assert block.endswith("---\n")
        meta = yaml.safe_load(block.strip("-\n"))
        assert meta["slug"] == "test-article"
        assert meta["keywords"] == ["seo", "tools"]
        assert meta["seo_score"] == 70
        assert meta["keyword_density"] == {"seo": 25.0, "tools": 0.0}

    def test_to_markdown(self):
        md = to_markdown(make_article())
        assert "\n# Test Article\n\n## Intro" in md
        assert md.endswith("Some seo text.\n")

    def test_export_writes_file(self, tmp_path: Path):
        path = asyncio.run(export_markdown(make_article(), tmp_path / "out"))
        assert path == tmp_path / "out" / "test-article.md"
        assert path.read_text(encoding="utf-8").startswith("---\ntitle: Test Article\n")
