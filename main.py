#!/usr/bin/env python
"""CLI for the NewsSphere proxy: run the server or a one-off query."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Literal

import uvicorn
from pydantic import BaseModel, field_validator

from newssphere.config import create_app_from_config, create_from_config, load_config
from newssphere.endpoints.schemas import ArticleSchema
from newssphere.errors import NewsSphereError

logger = logging.getLogger(__name__)


class CLIArgs(BaseModel):
    """Validated CLI arguments."""

    command: Literal["serve", "headlines", "search", "trending"]
    config: Path
    host: str | None = None
    port: int | None = None
    country: str = "us"
    category: str | None = None
    query: str | None = None
    page: str | None = None
    page_size: int = 20
    log: bool = False
    log_dir: str = "logs"

    @field_validator("config")
    @classmethod
    def config_must_exist(cls, v: Path) -> Path:
        if not v.exists():
            raise ValueError(f"Config file not found: {v}")
        return v


def serve(args: CLIArgs) -> None:
    """Run the HTTP server."""
    config = load_config(args.config)
    app = create_app_from_config(config)
    host = args.host or config.server.host
    port = args.port or config.server.port
    logger.info(f"NewsSphere server running at http://{host}:{port}")
    uvicorn.run(app, host=host, port=port)


async def run_query(args: CLIArgs) -> None:
    """Execute a single endpoint call and log the articles."""
    config = load_config(args.config)
    endpoints, _fetcher, run_logger = create_from_config(
        config,
        log_override=args.log if args.log else None,
        log_dir_override=args.log_dir if args.log_dir != "logs" else None,
    )

    articles: list[ArticleSchema]
    if args.command == "headlines":
        response = await endpoints.headlines(
            country=args.country,
            category=args.category,
            page=args.page,
            page_size=args.page_size,
        )
        articles = response.articles
        next_token = response.next_continuation_token
    elif args.command == "search":
        response = await endpoints.search(q=args.query, page=args.page, page_size=args.page_size)
        articles = response.articles
        next_token = response.next_continuation_token
    else:
        trending = await endpoints.trending()
        articles = trending.articles
        next_token = None

    logger.info(f"\nFound {len(articles)} articles:\n")
    for i, article in enumerate(articles, 1):
        logger.info(f"{i}. {article.title}")
        logger.info(f"   Source: {article.source_name}")
        logger.info(f"   URL: {article.url}")
        if article.published_at:
            logger.info(f"   Published: {article.published_at}")
    if next_token:
        logger.info(f"\nNext page: --page {next_token}")

    if run_logger and run_logger.last_log_path:
        logger.info(f"\nRun log written to: {run_logger.last_log_path}")


def main() -> None:
    """Entry point for the CLI."""
    parser = argparse.ArgumentParser(description="NewsSphere news proxy.")
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=Path("configs/default.yaml"),
        help="Path to YAML config file (default: configs/default.yaml)",
    )
    parser.add_argument(
        "--log",
        action="store_true",
        default=False,
        help="Write a JSON log of each aggregation's upstream pages",
    )
    parser.add_argument(
        "--log-dir",
        type=str,
        default="logs",
        help="Directory for log files (default: logs/)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    serve_parser = sub.add_parser("serve", help="Run the HTTP server")
    serve_parser.add_argument("--host", help="Bind address (default from config)")
    serve_parser.add_argument("--port", type=int, help="Port (default from config)")

    headlines_parser = sub.add_parser("headlines", help="Fetch latest headlines")
    headlines_parser.add_argument("--country", default="us", help="Country code (default: us)")
    headlines_parser.add_argument("--category", help="Category, e.g. business")
    headlines_parser.add_argument("--page", help="Continuation token from a previous call")
    headlines_parser.add_argument("--page-size", type=int, default=20, help="Articles wanted")

    search_parser = sub.add_parser("search", help="Search the latest articles")
    search_parser.add_argument("query", help="Search term")
    search_parser.add_argument("--page", help="Continuation token from a previous call")
    search_parser.add_argument("--page-size", type=int, default=20, help="Articles wanted")

    sub.add_parser("trending", help="Random trending sample")

    logging.basicConfig(level=logging.INFO, format="%(message)s")

    ns = parser.parse_args()

    try:
        args = CLIArgs(
            command=ns.command,
            config=ns.config,
            host=getattr(ns, "host", None),
            port=getattr(ns, "port", None),
            country=getattr(ns, "country", "us"),
            category=getattr(ns, "category", None),
            query=getattr(ns, "query", None),
            page=getattr(ns, "page", None),
            page_size=getattr(ns, "page_size", 20),
            log=ns.log,
            log_dir=ns.log_dir,
        )
    except Exception as e:
        logger.error(str(e))
        sys.exit(1)

    if args.command == "serve":
        serve(args)
        return

    try:
        asyncio.run(run_query(args))
    except NewsSphereError as e:
        logger.error(e.message)
        sys.exit(1)
    except KeyboardInterrupt:
        sys.exit(130)


if __name__ == "__main__":
    main()
