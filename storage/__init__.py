"""Article persistence: JSON file store and Markdown export."""

from storage.base import (
    ArticleNotFoundError,
    ArticleStore,
    DuplicateSlugError,
    Page,
    StorageError,
)
from storage.export import export_markdown, to_markdown
from storage.json_store import JsonArticleStore

__all__ = [
    "ArticleNotFoundError",
    "ArticleStore",
    "DuplicateSlugError",
    "JsonArticleStore",
    "Page",
    "StorageError",
    "export_markdown",
    "to_markdown",
]
