"""Shared fakes for NewsSphere tests."""

import itertools

from newssphere.data import Article, PageFetchResult


def make_article(
    n: int | str,
    *,
    title: str | None = None,
    url: str | None = None,
    published_at: str = "",
) -> Article:
    """Article with predictable fields derived from ``n``."""
    return Article(
        url=url if url is not None else f"https://example.com/{n}",
        title=title if title is not None else f"Article {n}",
        description=f"Description {n}",
        image_url="",
        published_at=published_at,
        source_name="Example News",
    )


class FakeFetcher:
    """Serves canned pages in order and records every request.

    Entries in ``pages`` may be exceptions, which are raised instead.
    With ``endless=True`` it never runs out: each call returns ``batch``
    fresh articles and a continuation token.
    """

    def __init__(
        self,
        pages: list[PageFetchResult | Exception] | None = None,
        *,
        endless: bool = False,
        batch: int = 10,
    ) -> None:
        self._pages = list(pages or [])
        self._endless = endless
        self._batch = batch
        self._counter = itertools.count()
        self.calls: list[tuple[str, dict[str, str | None]]] = []

    async def fetch_page(self, endpoint: str, params: dict[str, str | None]) -> PageFetchResult:
        self.calls.append((endpoint, dict(params)))
        if self._endless:
            call = len(self.calls)
            articles = [make_article(next(self._counter)) for _ in range(self._batch)]
            return PageFetchResult(articles=articles, continuation_token=f"token-{call}")
        page = self._pages[len(self.calls) - 1]
        if isinstance(page, Exception):
            raise page
        return page


def pages_of(
    sizes: list[int],
    *,
    final_token: str | None = None,
    start: int = 0,
) -> list[PageFetchResult]:
    """Pages of unique articles; every page but the last carries a token."""
    pages: list[PageFetchResult] = []
    n = start
    for i, size in enumerate(sizes):
        articles = [make_article(n + j) for j in range(size)]
        n += size
        last = i == len(sizes) - 1
        pages.append(
            PageFetchResult(
                articles=articles,
                continuation_token=final_token if last else f"token-{i + 1}",
            )
        )
    return pages
