"""Blog generation service.

Builds the prompt, asks the LLM backend for text, assembles the scored
article and hands it to the store.  Also exposes the read/delete operations
of the store with logging.
"""

from __future__ import annotations

import logging

from analysis.assembler import ArticleAssembler
from analysis.models import Article, GenerationRequest
from generator.client import TextGenerator
from generator.prompts import build_prompt
from storage.base import ArticleStore, Page

logger = logging.getLogger(__name__)


class BlogService:
    """Orchestrates the generate -> assemble -> save flow.

    Parameters
    ----------
    generator:
        Text-generation backend.
    store:
        Where finished articles are persisted.
    assembler:
        Configured :class:`ArticleAssembler`; its settings also provide the
        length-to-word-count table used in the prompt.
    """

    def __init__(
        self,
        generator: TextGenerator,
        store: ArticleStore,
        assembler: ArticleAssembler,
    ) -> None:
        self.generator = generator
        self.store = store
        self.assembler = assembler

    async def generate(self, request: GenerationRequest) -> Article:
        """Generate, score and store one article.

        :class:`generator.client.GenerationError` and
        :class:`storage.base.DuplicateSlugError` propagate unchanged; the
        slug is never altered to dodge a collision.
        """
        target_words = self.assembler.settings.target_words(request.length)
        prompt = build_prompt(request, target_words)

        logger.info(
            "Generating %s article (~%d words) for keywords: %s",
            request.length,
            target_words,
            ", ".join(request.keywords) or "(none)",
        )
        raw_text = await self.generator.generate(prompt)

        article = self.assembler.assemble(raw_text, request)
        stored = await self.store.save(article)
        logger.info(
            "Article stored: %s (SEO score %d)", stored.slug, stored.seo_score
        )
        return stored

    async def list_articles(
        self, page: int = 1, limit: int = 5, sort: str = "desc"
    ) -> Page:
        result = await self.store.list(page=page, limit=limit, sort=sort)
        logger.debug(
            "Listed page %d/%d (%d total)", result.page, result.pages, result.total
        )
        return result

    async def get_article(self, slug: str) -> Article:
        logger.debug("Looking up article %s", slug)
        return await self.store.get(slug)

    async def delete_article(self, slug: str) -> Article:
        deleted = await self.store.delete(slug)
        logger.info("Article deleted: %s", slug)
        return deleted

    async def top_articles(self, limit: int = 5, min_score: int = 50) -> list[Article]:
        articles = await self.store.top(limit=limit, min_score=min_score)
        if not articles:
            logger.info("No articles with SEO score >= %d", min_score)
        return articles
