from typing import Protocol

from newssphere.data import PageFetchResult


class PageFetcher(Protocol):
    """Interface for fetching a single page from a news provider."""

    async def fetch_page(
        self,
        endpoint: str,
        params: dict[str, str | None],
    ) -> PageFetchResult:
        """Fetch one page of articles.

        Args:
            endpoint: Provider endpoint path.
            params: Filter parameters, including an optional ``page`` token.

        Returns:
            The page's articles and the provider's continuation token.
        """
        ...
