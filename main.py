#!/usr/bin/env python3
"""AI blog generator: command-line entry point.

Usage:
    python main.py generate -k "seo tools" -k "rank tracking" --tone friendly
    python main.py list --page 2 --limit 10 --sort asc
    python main.py show my-article-slug
    python main.py delete my-article-slug
    python main.py top --limit 5 --min-score 60
    python main.py export my-article-slug --out exported/
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any

from analysis.assembler import ArticleAssembler
from analysis.models import Article, GenerationRequest
from config import Config
from generator.client import GenerationError, build_generator
from pipeline.service import BlogService
from storage.base import (
    ArticleNotFoundError,
    DuplicateSlugError,
    SORT_ORDERS,
    StorageError,
)
from storage.export import export_markdown
from storage.json_store import JsonArticleStore

logger = logging.getLogger("blogsmith")


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

def _emit(payload: Any) -> None:
    print(json.dumps(payload, indent=2, ensure_ascii=False))


def build_service(cfg: Config) -> BlogService:
    settings = cfg.generation_settings()
    return BlogService(
        generator=build_generator(cfg, settings),
        store=JsonArticleStore(cfg.store_path),
        assembler=ArticleAssembler(settings),
    )


async def cmd_generate(service: BlogService, args: argparse.Namespace) -> dict[str, Any]:
    request = GenerationRequest(
        keywords=args.keyword or [],
        tone=args.tone,
        length=args.length,
    )
    article = await service.generate(request)
    return {"message": "Blog generated and saved", "article": article.to_dict()}


async def cmd_list(service: BlogService, args: argparse.Namespace) -> dict[str, Any]:
    page = await service.list_articles(page=args.page, limit=args.limit, sort=args.sort)
    return {
        "total": page.total,
        "page": page.page,
        "pages": page.pages,
        "articles": [a.to_dict() for a in page.articles],
    }


async def cmd_show(service: BlogService, args: argparse.Namespace) -> dict[str, Any]:
    article = await service.get_article(args.slug)
    return article.to_dict()


async def cmd_delete(service: BlogService, args: argparse.Namespace) -> dict[str, Any]:
    deleted = await service.delete_article(args.slug)
    return {"message": "Article deleted successfully", "slug": deleted.slug}


async def cmd_top(service: BlogService, args: argparse.Namespace) -> dict[str, Any]:
    articles: list[Article] = await service.top_articles(
        limit=args.limit, min_score=args.min_score
    )
    return {
        "count": len(articles),
        "min_score": args.min_score,
        "articles": [a.to_dict() for a in articles],
    }


async def cmd_export(service: BlogService, args: argparse.Namespace) -> dict[str, Any]:
    article = await service.get_article(args.slug)
    path = await export_markdown(article, args.out)
    return {"slug": article.slug, "path": str(path)}


_COMMANDS = {
    "generate": cmd_generate,
    "list": cmd_list,
    "show": cmd_show,
    "delete": cmd_delete,
    "top": cmd_top,
    "export": cmd_export,
}


async def run_command(service: BlogService, args: argparse.Namespace) -> int:
    """Run one subcommand and print its JSON result.  Returns an exit code."""
    handler = _COMMANDS[args.command]
    try:
        result = await handler(service, args)
    except GenerationError as exc:
        logger.error("Blog generation failed: %s", exc)
        return 1
    except DuplicateSlugError as exc:
        logger.error("Conflict: %s", exc)
        return 1
    except ArticleNotFoundError as exc:
        logger.error("%s", exc)
        return 1
    except StorageError as exc:
        logger.error("Storage error: %s", exc)
        return 1
    except ValueError as exc:
        logger.error("Invalid arguments: %s", exc)
        return 2
    except Exception:
        logger.exception("Unexpected error running %s", args.command)
        return 1
    finally:
        await service.generator.close()
    _emit(result)
    return 0


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------

def _setup_logging(cfg: Config) -> None:
    log_dir = cfg.log_dir
    log_dir.mkdir(parents=True, exist_ok=True)

    # Logs go to stderr so stdout stays valid JSON.
    handlers: list[logging.Handler] = [
        logging.StreamHandler(sys.stderr),
        logging.FileHandler(log_dir / "pipeline.log"),
    ]
    logging.basicConfig(
        level=getattr(logging, cfg.log_level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=handlers,
    )


def build_parser(cfg: Config | None = None) -> argparse.ArgumentParser:
    cfg = cfg or Config()
    parser = argparse.ArgumentParser(
        prog="blogsmith",
        description="Generate SEO-scored blog articles with an LLM",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    gen = sub.add_parser("generate", help="Generate, score and store an article")
    gen.add_argument(
        "-k", "--keyword", action="append",
        help="Target keyword (repeat for several; order is kept)",
    )
    gen.add_argument("--tone", default="neutral", help="Writing tone")
    gen.add_argument(
        "--length", default="medium",
        help="Length category: short, medium or long (others mean medium)",
    )

    lst = sub.add_parser("list", help="List stored articles")
    lst.add_argument("--page", type=int, default=1)
    lst.add_argument("--limit", type=int, default=5)
    lst.add_argument("--sort", choices=SORT_ORDERS, default="desc")

    show = sub.add_parser("show", help="Show one article")
    show.add_argument("slug")

    delete = sub.add_parser("delete", help="Delete one article")
    delete.add_argument("slug")

    top = sub.add_parser("top", help="Best articles by SEO score")
    top.add_argument("--limit", type=int, default=5)
    top.add_argument("--min-score", type=int, default=50)

    export = sub.add_parser("export", help="Write an article as Markdown")
    export.add_argument("slug")
    export.add_argument(
        "--out", type=Path, default=cfg.export_dir,
        help="Output directory (defaults to DATA_DIR/exported)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    cfg = Config.from_env()
    _setup_logging(cfg)

    args = build_parser(cfg).parse_args(argv)
    try:
        service = build_service(cfg)
    except ValueError as exc:
        logger.error("Invalid configuration: %s", exc)
        return 2
    return asyncio.run(run_command(service, args))


if __name__ == "__main__":
    sys.exit(main())
