"""Factory functions to create components from configuration."""

import random
from pathlib import Path

from fastapi import FastAPI

from newssphere.aggregator import PageAggregator
from newssphere.config.models import LoggingConfig, NewsSphereConfig, UpstreamConfig
from newssphere.endpoints import NewsEndpoints
from newssphere.run_logger import RunLogger
from newssphere.server import create_app
from newssphere.upstream import NewsDataClient


def create_upstream_client(config: UpstreamConfig, *, api_key: str | None = None) -> NewsDataClient:
    """Create the NewsData.io client from config."""
    return NewsDataClient(
        api_key=api_key,
        base_url=config.base_url,
        timeout=config.timeout_seconds,
    )


def create_run_logger(
    config: LoggingConfig,
    *,
    log_override: bool | None = None,
    log_dir_override: str | None = None,
) -> RunLogger | None:
    """Create a RunLogger, or None when logging is disabled."""
    enabled = log_override if log_override is not None else config.enabled
    if not enabled:
        return None
    log_dir = Path(log_dir_override if log_dir_override is not None else config.log_dir)
    return RunLogger(log_dir=log_dir, enabled=True)


def create_endpoints(
    config: NewsSphereConfig,
    *,
    fetcher: NewsDataClient,
    run_logger: RunLogger | None = None,
    rng: random.Random | None = None,
) -> NewsEndpoints:
    """Wire the aggregator and query handlers around ``fetcher``."""
    aggregator = PageAggregator(
        fetcher,
        max_requests=config.aggregation.max_requests,
        run_logger=run_logger,
    )
    return NewsEndpoints(
        aggregator,
        fetcher,
        endpoint=config.upstream.endpoint,
        language=config.upstream.language,
        default_page_size=config.aggregation.default_page_size,
        max_page_size=config.aggregation.max_page_size,
        trending_categories=config.trending.categories,
        trending_countries=config.trending.countries,
        trending_limit=config.trending.limit,
        rng=rng,
    )


def create_from_config(
    config: NewsSphereConfig,
    *,
    api_key: str | None = None,
    log_override: bool | None = None,
    log_dir_override: str | None = None,
) -> tuple[NewsEndpoints, NewsDataClient, RunLogger | None]:
    """Create the query handlers from root config.

    Args:
        config: Root configuration.
        api_key: Explicit provider key; the environment is used otherwise.
        log_override: Override the config's logging.enabled setting.
        log_dir_override: Override the config's logging.log_dir setting.

    Returns:
        Tuple of (endpoints, upstream client, run_logger).
        run_logger is None if logging is disabled.
    """
    fetcher = create_upstream_client(config.upstream, api_key=api_key)
    run_logger = create_run_logger(
        config.logging,
        log_override=log_override,
        log_dir_override=log_dir_override,
    )
    endpoints = create_endpoints(config, fetcher=fetcher, run_logger=run_logger)
    return (endpoints, fetcher, run_logger)


def create_app_from_config(
    config: NewsSphereConfig,
    *,
    api_key: str | None = None,
) -> FastAPI:
    """Create the FastAPI application from root config."""
    endpoints, fetcher, _run_logger = create_from_config(config, api_key=api_key)
    return create_app(
        endpoints,
        static_dir=config.server.static_dir,
        has_credential=lambda: bool(fetcher.api_key),
    )
