"""Async HTTP client for the NewsSphere proxy endpoints."""

import logging
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from newssphere.data import REMOVED_PLACEHOLDER, Article
from newssphere.endpoints.schemas import ArticleListResponse, TrendingResponse
from newssphere.errors import NewsSphereError

logger = logging.getLogger(__name__)

NON_RETRYABLE_STATUS = frozenset({400, 404, 503})

ModelT = TypeVar("ModelT", bound=BaseModel)


class ClientRequestError(NewsSphereError):
    """A proxy request failed at the transport or HTTP level.

    Args:
        message: Human-readable message, taken from the ``{error}`` body
            when the proxy sent one.
        status_code: HTTP status, or None for transport failures.
        retryable: Whether repeating the same request may succeed.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        retryable: bool = True,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.retryable = retryable


class NewsApiClient:
    """Client for ``/api/headlines``, ``/api/search`` and ``/api/trending``.

    Args:
        base_url: Proxy origin, e.g. "http://localhost:5000".
        client: Optional preconfigured ``httpx.AsyncClient``; a new one is
            opened per request otherwise.
        timeout: Request timeout when no client is supplied.
    """

    def __init__(
        self,
        base_url: str = "http://127.0.0.1:5000",
        *,
        client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._client = client
        self._timeout = timeout

    async def fetch_headlines(
        self,
        *,
        country: str,
        category: str | None = None,
        page: str | None = None,
        page_size: int = 50,
    ) -> ArticleListResponse:
        params: dict[str, Any] = {"country": country, "pageSize": page_size}
        if category:
            params["category"] = category
        if page:
            params["page"] = page
        data = await self._get("/api/headlines", params, fallback="Failed to fetch")
        return _validate(ArticleListResponse, data)

    async def fetch_search(
        self,
        *,
        q: str,
        page: str | None = None,
        page_size: int = 50,
    ) -> ArticleListResponse:
        params: dict[str, Any] = {"q": q, "pageSize": page_size}
        if page:
            params["page"] = page
        data = await self._get("/api/search", params, fallback="Search failed")
        return _validate(ArticleListResponse, data)

    async def fetch_trending(self) -> list[Article]:
        """Trending articles, minus untitled and removed-content entries."""
        data = await self._get(
            "/api/trending", {"pageSize": 15}, fallback="Failed to fetch trending"
        )
        response = _validate(TrendingResponse, data)
        return [
            a.to_article()
            for a in response.articles
            if a.title and a.title != REMOVED_PLACEHOLDER
        ]

    async def _get(self, path: str, params: dict[str, Any], *, fallback: str) -> Any:
        url = f"{self._base_url}{path}"
        try:
            if self._client is not None:
                response = await self._client.get(url, params=params)
            else:
                async with httpx.AsyncClient(timeout=self._timeout) as client:
                    response = await client.get(url, params=params)
        except httpx.HTTPError as e:
            logger.warning("Request to %s failed: %s", path, e)
            raise ClientRequestError(str(e) or fallback) from e

        if response.is_success:
            try:
                return response.json()
            except ValueError as e:
                raise ClientRequestError(f"{fallback}: invalid JSON response") from e

        message = _error_message(response) or response.reason_phrase or fallback
        raise ClientRequestError(
            message,
            status_code=response.status_code,
            retryable=response.status_code not in NON_RETRYABLE_STATUS,
        )


def _error_message(response: httpx.Response) -> str | None:
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict) and isinstance(body.get("error"), str):
        return body["error"]
    return None


def _validate(model: type[ModelT], data: Any) -> ModelT:
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise ClientRequestError(f"Unexpected response shape: {e.error_count()} errors") from e
