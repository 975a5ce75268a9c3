"""NewsData.io client: one paged request per call, normalized to ``Article``."""

import logging
import os
from typing import Any

import httpx

from newssphere.data import Article, PageFetchResult
from newssphere.errors import (
    UpstreamApiError,
    UpstreamConfigError,
    UpstreamConnectionError,
    UpstreamFormatError,
)

logger = logging.getLogger(__name__)

NEWSDATA_API_URL = "https://newsdata.io/api/1"
API_KEY_ENV_VAR = "NEWSDATA_API_KEY"


class NewsDataClient:
    """Fetch single pages from the NewsData.io API.

    The credential is resolved lazily so that a missing key surfaces as an
    ``UpstreamConfigError`` on the request that needs it rather than at
    startup.

    Args:
        api_key: NewsData.io API key (defaults to NEWSDATA_API_KEY env var).
        base_url: API root, without trailing slash.
        timeout: Per-request timeout in seconds.
    """

    def __init__(
        self,
        *,
        api_key: str | None = None,
        base_url: str = NEWSDATA_API_URL,
        timeout: float = 30.0,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout

    @property
    def api_key(self) -> str | None:
        """The configured key, falling back to the environment."""
        return self._api_key or os.environ.get(API_KEY_ENV_VAR)

    async def fetch_page(
        self,
        endpoint: str,
        params: dict[str, str | None],
    ) -> PageFetchResult:
        """Fetch one page of results.

        Args:
            endpoint: Provider endpoint path, e.g. "/latest".
            params: Filter parameters. ``None`` and empty values are dropped.
                A ``page`` of "1" is dropped too, since the provider treats
                any page parameter as a continuation token.

        Returns:
            The normalized articles and the provider's next-page token.

        Raises:
            UpstreamConfigError: No API key is configured.
            UpstreamConnectionError: The request failed at the transport level.
            UpstreamFormatError: The response is not a JSON result envelope.
            UpstreamApiError: The provider returned an error envelope.
        """
        api_key = self.api_key
        if not api_key:
            raise UpstreamConfigError(
                f"{API_KEY_ENV_VAR} is not configured. Add it to your environment."
            )

        query = build_query_params(params)
        query["apikey"] = api_key

        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.get(f"{self._base_url}{endpoint}", params=query)
        except httpx.HTTPError as e:
            logger.warning("Request to %s failed: %s", endpoint, e)
            raise UpstreamConnectionError(f"Could not reach NewsData.io: {e}") from e

        content_type = response.headers.get("content-type", "")
        if "application/json" not in content_type:
            raise UpstreamFormatError(
                f"NewsData.io returned a non-JSON response (HTTP {response.status_code}). "
                "Please check your API key."
            )
        try:
            data = response.json()
        except ValueError as e:
            raise UpstreamFormatError(f"NewsData.io returned malformed JSON: {e}") from e
        if not isinstance(data, dict):
            raise UpstreamFormatError("NewsData.io returned an unexpected response shape.")

        if data.get("status") == "error":
            raise _api_error(data)

        results = data.get("results") or []
        articles = [normalize_article(item) for item in results if isinstance(item, dict)]
        next_page = data.get("nextPage")
        logger.debug("Fetched %d articles from %s (next=%s)", len(articles), endpoint, next_page)
        return PageFetchResult(
            articles=articles,
            continuation_token=str(next_page) if next_page else None,
        )


def build_query_params(params: dict[str, str | None]) -> dict[str, str]:
    """Drop empty filters, the ``size`` override and a first-page ``page``."""
    query: dict[str, str] = {}
    for key, value in params.items():
        if value is None or value == "":
            continue
        if key == "size":
            continue
        if key == "page" and str(value) == "1":
            continue
        query[key] = str(value)
    return query


def normalize_article(item: dict[str, Any]) -> Article:
    """Map a NewsData.io result item to the canonical ``Article``."""
    return Article(
        url=item.get("link") or "",
        title=item.get("title") or "",
        description=item.get("description") or "",
        image_url=item.get("image_url") or "",
        published_at=item.get("pubDate") or "",
        source_name=item.get("source_name") or item.get("source_id") or "Unknown",
    )


def _api_error(data: dict[str, Any]) -> UpstreamApiError:
    results = data.get("results")
    details = results if isinstance(results, dict) else {}
    message = details.get("message") or data.get("message") or "NewsData API error"
    code = details.get("code")
    return UpstreamApiError(str(message), code=str(code) if code is not None else None)
