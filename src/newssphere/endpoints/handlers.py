"""Request handlers for headlines, keyword search and the trending sample."""

import logging
import random

from newssphere.aggregator import PageAggregator, dedupe_by_url
from newssphere.data import HeadlinesQuery, KeywordQuery, QuerySpec, TrendingQuery, is_displayable
from newssphere.endpoints.schemas import ArticleListResponse, ArticleSchema, TrendingResponse
from newssphere.errors import RequestValidationError
from newssphere.upstream.base import PageFetcher

logger = logging.getLogger(__name__)

DEFAULT_CATEGORIES: tuple[str, ...] = (
    "top",
    "world",
    "business",
    "technology",
    "entertainment",
    "sports",
    "health",
    "science",
)


def clamp_page_size(raw: str | int | None, *, default: int = 20, maximum: int = 50) -> int:
    """Parse a page size leniently and clamp it to ``[1, maximum]``."""
    try:
        size = int(raw) if raw is not None else default
    except (TypeError, ValueError):
        size = default
    if size <= 0:
        size = default
    return min(size, maximum)


def upstream_params(query: QuerySpec, *, language: str) -> dict[str, str | None]:
    """Provider filter parameters for ``query``, without the page cursor."""
    if isinstance(query, HeadlinesQuery):
        return {"country": query.country, "language": language, "category": query.category}
    if isinstance(query, KeywordQuery):
        return {"q": query.term, "language": language}
    return {"country": query.countries, "language": language, "category": query.category}


def normalize_cursor(page: str | None) -> str | None:
    """Treat a missing or first-page cursor as "start from the beginning"."""
    if page is None:
        return None
    page = str(page).strip()
    if page in ("", "1"):
        return None
    return page


class NewsEndpoints:
    """Stateless handlers mapping validated inputs onto the aggregator.

    Args:
        aggregator: Multi-page aggregator for listings and searches.
        fetcher: Single-page client used by the trending sample.
        endpoint: Provider endpoint path shared by all three handlers.
        language: Language filter sent to the provider.
        default_page_size: Page size used when none (or garbage) is given.
        max_page_size: Upper bound on the requested page size.
        trending_categories: Categories the trending sample picks from.
        trending_countries: Comma-separated countries for the trending sample.
        trending_limit: Maximum number of trending articles returned.
        rng: Random source for the trending category pick and shuffle.
    """

    def __init__(
        self,
        aggregator: PageAggregator,
        fetcher: PageFetcher,
        *,
        endpoint: str = "/latest",
        language: str = "en",
        default_page_size: int = 20,
        max_page_size: int = 50,
        trending_categories: tuple[str, ...] = DEFAULT_CATEGORIES,
        trending_countries: str = "us,gb,in,ca,au",
        trending_limit: int = 10,
        rng: random.Random | None = None,
    ) -> None:
        if not trending_categories:
            raise ValueError("trending_categories must not be empty")
        self._aggregator = aggregator
        self._fetcher = fetcher
        self._endpoint = endpoint
        self._language = language
        self._default_page_size = default_page_size
        self._max_page_size = max_page_size
        self._trending_categories = trending_categories
        self._trending_countries = trending_countries
        self._trending_limit = trending_limit
        self._rng = rng or random.Random()

    async def headlines(
        self,
        *,
        country: str | None = "us",
        category: str | None = None,
        page: str | None = None,
        page_size: str | int | None = None,
    ) -> ArticleListResponse:
        """Latest headlines for a country and optional category."""
        query = HeadlinesQuery(
            country=(country or "us").strip().lower(),
            category=(category or "").strip() or None,
            page=normalize_cursor(page),
        )
        size = self._page_size(page_size)
        params = upstream_params(query, language=self._language)
        logger.info(
            "Headlines request: country=%s category=%s page=%s size=%d",
            query.country,
            query.category,
            query.page,
            size,
        )
        result = await self._aggregator.collect(self._endpoint, params, size, cursor=query.page)
        return ArticleListResponse.from_result(result)

    async def search(
        self,
        *,
        q: str | None,
        page: str | None = None,
        page_size: str | int | None = None,
        language: str | None = None,
    ) -> ArticleListResponse:
        """Keyword search over the latest articles.

        Raises:
            RequestValidationError: The search term is empty after trimming.
        """
        term = (q or "").strip()
        if not term:
            raise RequestValidationError('Search query "q" is required')
        query = KeywordQuery(term=term, page=normalize_cursor(page))
        size = self._page_size(page_size)
        params = upstream_params(query, language=(language or "").strip() or self._language)
        logger.info("Search request: q=%r page=%s size=%d", query.term, query.page, size)
        result = await self._aggregator.collect(self._endpoint, params, size, cursor=query.page)
        return ArticleListResponse.from_result(result)

    async def trending(self) -> TrendingResponse:
        """A shuffled, URL-unique sample from one randomly picked category.

        The category is re-drawn on every call, so repeated requests surface
        different stories without any server-side state.
        """
        query = TrendingQuery(
            category=self._rng.choice(self._trending_categories),
            countries=self._trending_countries,
        )
        logger.info("Trending request: category=%s", query.category)
        page = await self._fetcher.fetch_page(
            self._endpoint, upstream_params(query, language=self._language)
        )
        articles = [a for a in page.articles if is_displayable(a)]
        self._rng.shuffle(articles)
        unique = dedupe_by_url(articles)
        return TrendingResponse(
            articles=[ArticleSchema.from_article(a) for a in unique[: self._trending_limit]],
            total_results_approx=len(unique),
        )

    def _page_size(self, raw: str | int | None) -> int:
        return clamp_page_size(
            raw,
            default=min(self._default_page_size, self._max_page_size),
            maximum=self._max_page_size,
        )

