"""Multi-page aggregation over a single-page fetcher."""

import logging
import time
from collections.abc import Iterable

from newssphere.data import AggregatedResult, Article
from newssphere.run_logger import RunLogger
from newssphere.upstream.base import PageFetcher

logger = logging.getLogger(__name__)

DEFAULT_MAX_REQUESTS = 5


class PageAggregator:
    """Stitch several upstream pages into one title-deduplicated batch.

    Upstream calls are made one at a time and capped at ``max_requests`` per
    ``collect`` to respect the provider's rate and size limits. The ceiling
    may leave the result short of ``requested_size`` while more pages exist;
    the returned continuation token lets the caller resume.

    Args:
        fetcher: Single-page upstream client.
        max_requests: Upstream calls allowed per ``collect``.
        run_logger: Optional RunLogger recording each page.
    """

    def __init__(
        self,
        fetcher: PageFetcher,
        *,
        max_requests: int = DEFAULT_MAX_REQUESTS,
        run_logger: RunLogger | None = None,
    ) -> None:
        if max_requests < 1:
            raise ValueError("max_requests must be at least 1")
        self._fetcher = fetcher
        self._max_requests = max_requests
        self._run_logger = run_logger

    async def collect(
        self,
        endpoint: str,
        params: dict[str, str | None],
        requested_size: int,
        *,
        cursor: str | None = None,
    ) -> AggregatedResult:
        """Fetch pages until ``requested_size`` unique titles are collected.

        Args:
            endpoint: Provider endpoint path.
            params: Filter parameters forwarded to every page request.
            requested_size: Maximum number of articles to return.
            cursor: Continuation token to start from, or None for page one.

        Returns:
            At most ``requested_size`` articles in provider order.

        Raises:
            UpstreamError: Any upstream failure aborts the whole aggregation.
        """
        record = (
            self._run_logger.start_run(endpoint, params, requested_size)
            if self._run_logger
            else None
        )

        collected: list[Article] = []
        page_token = cursor
        next_token: str | None = None
        requests_made = 0

        try:
            while requests_made < self._max_requests:
                page_params = {k: v for k, v in params.items() if k not in ("page", "size")}
                page_params["page"] = page_token

                t0 = time.monotonic()
                page = await self._fetcher.fetch_page(endpoint, page_params)
                duration = time.monotonic() - t0
                requests_made += 1

                unique = dedupe_by_title(a for a in page.articles if a.title)
                collected = dedupe_by_title([*collected, *unique])
                next_token = page.continuation_token

                if self._run_logger:
                    self._run_logger.log_page(
                        record,
                        cursor=page_token,
                        fetched=len(page.articles),
                        kept=len(unique),
                        collected=len(collected),
                        next_token=next_token,
                        duration_seconds=duration,
                    )

                if next_token is None or len(collected) >= requested_size:
                    break
                page_token = next_token
            else:
                logger.warning(
                    "Stopped %s after %d upstream calls with %d/%d articles",
                    endpoint,
                    requests_made,
                    len(collected),
                    requested_size,
                )
        except Exception as e:
            if self._run_logger:
                self._run_logger.finish_run(record, None, error=e)
            raise

        result = AggregatedResult(
            articles=collected[:requested_size],
            total_results_approx=len(collected),
            next_continuation_token=next_token,
        )
        if self._run_logger:
            self._run_logger.finish_run(record, result)
        return result


def dedupe_by_title(articles: Iterable[Article]) -> list[Article]:
    """Keep the first article for each title, preserving order."""
    seen: set[str] = set()
    unique: list[Article] = []
    for article in articles:
        if article.title in seen:
            continue
        seen.add(article.title)
        unique.append(article)
    return unique


def dedupe_by_url(articles: Iterable[Article]) -> list[Article]:
    """Keep the first article for each URL, preserving order."""
    seen: set[str] = set()
    unique: list[Article] = []
    for article in articles:
        if article.url in seen:
            continue
        seen.add(article.url)
        unique.append(article)
    return unique
