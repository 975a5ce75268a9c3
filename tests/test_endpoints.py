"""Tests for the query handlers."""

import random

import pytest
from conftest import FakeFetcher, make_article, pages_of

from newssphere.aggregator import PageAggregator
from newssphere.data import HeadlinesQuery, KeywordQuery, PageFetchResult, TrendingQuery
from newssphere.endpoints import (
    DEFAULT_CATEGORIES,
    ArticleListResponse,
    NewsEndpoints,
    TrendingResponse,
    clamp_page_size,
    normalize_cursor,
    upstream_params,
)
from newssphere.errors import RequestValidationError


def _endpoints(fetcher: FakeFetcher, **kwargs) -> NewsEndpoints:
    return NewsEndpoints(PageAggregator(fetcher), fetcher, **kwargs)


class TestClampPageSize:
    """Tests for clamp_page_size."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            (None, 20),
            ("10", 10),
            (10, 10),
            ("500", 50),
            ("0", 20),
            ("-3", 20),
            ("abc", 20),
            ("", 20),
        ],
    )
    def test_clamps(self, raw, expected) -> None:
        assert clamp_page_size(raw) == expected

    def test_custom_bounds(self) -> None:
        assert clamp_page_size(None, default=5, maximum=8) == 5
        assert clamp_page_size("9", default=5, maximum=8) == 8


@pytest.mark.parametrize("page", [None, "", "1", "  "])
def test_normalize_cursor_first_page(page) -> None:
    assert normalize_cursor(page) is None


def test_normalize_cursor_keeps_token() -> None:
    assert normalize_cursor("1738400000123") == "1738400000123"


@pytest.mark.parametrize(
    "query,expected",
    [
        (
            HeadlinesQuery(country="gb", category="sports", page="tok"),
            {"country": "gb", "language": "en", "category": "sports"},
        ),
        (KeywordQuery(term="climate", page="tok"), {"q": "climate", "language": "en"}),
        (
            TrendingQuery(category="health", countries="us,gb"),
            {"country": "us,gb", "language": "en", "category": "health"},
        ),
    ],
)
def test_upstream_params(query, expected) -> None:
    assert upstream_params(query, language="en") == expected


class TestHeadlines:
    """Tests for NewsEndpoints.headlines."""

    async def test_lowercases_country_and_forwards_filters(self) -> None:
        fetcher = FakeFetcher(pages_of([5], final_token=None))

        response = await _endpoints(fetcher).headlines(country="US", category="business")

        assert isinstance(response, ArticleListResponse)
        endpoint, params = fetcher.calls[0]
        assert endpoint == "/latest"
        assert params["country"] == "us"
        assert params["category"] == "business"
        assert params["language"] == "en"
        assert params["page"] is None

    async def test_defaults_country(self) -> None:
        fetcher = FakeFetcher(pages_of([5], final_token=None))

        await _endpoints(fetcher).headlines(country=None)

        assert fetcher.calls[0][1]["country"] == "us"

    async def test_blank_category_is_omitted(self) -> None:
        fetcher = FakeFetcher(pages_of([5], final_token=None))

        await _endpoints(fetcher).headlines(category="  ")

        assert fetcher.calls[0][1]["category"] is None

    async def test_page_size_caps_result(self) -> None:
        fetcher = FakeFetcher(pages_of([10, 10, 10], final_token=None))

        response = await _endpoints(fetcher).headlines(page_size="15")

        assert len(response.articles) == 15
        assert response.next_continuation_token == "token-2"
        assert response.status == "ok"

    async def test_oversized_page_size_is_clamped(self) -> None:
        fetcher = FakeFetcher(endless=True, batch=20)

        response = await _endpoints(fetcher).headlines(page_size="100")

        assert len(response.articles) == 50
        assert len(fetcher.calls) == 3

    async def test_forwards_cursor(self) -> None:
        fetcher = FakeFetcher(pages_of([5], final_token=None))

        await _endpoints(fetcher).headlines(page="abc123")

        assert fetcher.calls[0][1]["page"] == "abc123"

    async def test_first_page_cursor_is_dropped(self) -> None:
        fetcher = FakeFetcher(pages_of([5], final_token=None))

        await _endpoints(fetcher).headlines(page="1")

        assert fetcher.calls[0][1]["page"] is None


class TestSearch:
    """Tests for NewsEndpoints.search."""

    @pytest.mark.parametrize("q", [None, "", "   "])
    async def test_empty_query_rejected_without_upstream_call(self, q) -> None:
        fetcher = FakeFetcher()

        with pytest.raises(RequestValidationError, match='"q" is required'):
            await _endpoints(fetcher).search(q=q)
        assert fetcher.calls == []

    async def test_trims_term_and_uses_default_language(self) -> None:
        fetcher = FakeFetcher(pages_of([3], final_token=None))

        response = await _endpoints(fetcher).search(q="  climate  ")

        assert len(response.articles) == 3
        params = fetcher.calls[0][1]
        assert params["q"] == "climate"
        assert params["language"] == "en"
        assert "country" not in params

    async def test_language_override(self) -> None:
        fetcher = FakeFetcher(pages_of([3], final_token=None))

        await _endpoints(fetcher).search(q="wetter", language="de")

        assert fetcher.calls[0][1]["language"] == "de"


class TestTrending:
    """Tests for NewsEndpoints.trending."""

    @pytest.fixture
    def noisy_page(self) -> PageFetchResult:
        articles = [make_article(i) for i in range(14)]
        articles += [
            make_article(0, title="Same link, different title"),
            make_article(1),
            make_article("removed", title="[Removed]"),
            make_article("untitled", title=""),
        ]
        return PageFetchResult(articles=articles, continuation_token="next")

    async def test_sample_is_bounded_unique_and_clean(self, noisy_page: PageFetchResult) -> None:
        fetcher = FakeFetcher([noisy_page])

        response = await _endpoints(fetcher, rng=random.Random(7)).trending()

        assert isinstance(response, TrendingResponse)
        assert len(response.articles) == 10
        urls = [a.url for a in response.articles]
        assert len(urls) == len(set(urls))
        assert all(a.title and a.title != "[Removed]" for a in response.articles)
        assert response.total_results_approx == 14
        assert len(fetcher.calls) == 1

    async def test_queries_one_random_category(self) -> None:
        fetcher = FakeFetcher(pages_of([3], final_token=None))

        await _endpoints(fetcher, rng=random.Random(1)).trending()

        params = fetcher.calls[0][1]
        assert params["category"] in DEFAULT_CATEGORIES
        assert params["country"] == "us,gb,in,ca,au"
        assert params["language"] == "en"

    async def test_seeded_rng_is_deterministic(self, noisy_page: PageFetchResult) -> None:
        first = await _endpoints(FakeFetcher([noisy_page]), rng=random.Random(42)).trending()
        second = await _endpoints(FakeFetcher([noisy_page]), rng=random.Random(42)).trending()

        assert first == second

    async def test_custom_limit(self, noisy_page: PageFetchResult) -> None:
        fetcher = FakeFetcher([noisy_page])

        response = await _endpoints(fetcher, trending_limit=3).trending()

        assert len(response.articles) == 3

    def test_rejects_empty_categories(self) -> None:
        with pytest.raises(ValueError):
            _endpoints(FakeFetcher(), trending_categories=())
