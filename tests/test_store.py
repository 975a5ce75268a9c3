"""Tests for ResultStore and date sorting."""

from datetime import UTC, datetime

import pytest
from conftest import make_article

from newssphere.client import ResultStore, parse_published_at, sort_by_date


@pytest.fixture
def dated_articles():
    return [
        make_article(1, published_at="2026-02-01 10:00:00"),
        make_article(2, published_at="2026-02-03T08:00:00Z"),
        make_article(3, published_at="not a date"),
        make_article(4, published_at="2026-02-02 12:30:00"),
        make_article(5, published_at=""),
    ]


class TestParsePublishedAt:
    """Tests for parse_published_at."""

    def test_provider_format_is_utc(self) -> None:
        assert parse_published_at("2026-02-01 10:00:00") == datetime(2026, 2, 1, 10, tzinfo=UTC)

    def test_zulu_suffix(self) -> None:
        assert parse_published_at("2026-02-01T10:00:00Z") == datetime(2026, 2, 1, 10, tzinfo=UTC)

    @pytest.mark.parametrize("value", [None, "", "yesterday", "2026-13-45"])
    def test_unparseable(self, value) -> None:
        assert parse_published_at(value) is None


class TestResultStore:
    """Tests for ResultStore."""

    def test_append_preserves_arrival_order(self, dated_articles) -> None:
        store = ResultStore()
        store.append(dated_articles[:2])
        store.append(dated_articles[2:])

        assert len(store) == 5
        assert store.get_all() == dated_articles

    def test_reset_discards_everything(self, dated_articles) -> None:
        store = ResultStore()
        store.append(dated_articles)
        store.reset()

        assert len(store) == 0
        assert store.get_all() == []

    def test_latest_first(self, dated_articles) -> None:
        store = ResultStore()
        store.append(dated_articles)

        urls = [a.url.rsplit("/", 1)[-1] for a in store.sorted_by_date("latest")]

        assert urls == ["2", "4", "1", "3", "5"]

    def test_oldest_first(self, dated_articles) -> None:
        store = ResultStore()
        store.append(dated_articles)

        urls = [a.url.rsplit("/", 1)[-1] for a in store.sorted_by_date("oldest")]

        assert urls == ["3", "5", "1", "4", "2"]

    def test_sorting_does_not_mutate_store(self, dated_articles) -> None:
        store = ResultStore()
        store.append(dated_articles)

        store.sorted_by_date("latest")

        assert store.get_all() == dated_articles


def test_sort_directions_reverse_each_other_for_distinct_dates() -> None:
    articles = [
        make_article(i, published_at=f"2026-01-{day:02d} 00:00:00")
        for i, day in enumerate([5, 1, 9, 3])
    ]

    assert sort_by_date(articles, "latest") == list(reversed(sort_by_date(articles, "oldest")))


def test_sort_is_stable_for_equal_dates() -> None:
    articles = [make_article(i, published_at="2026-01-01 00:00:00") for i in range(4)]

    assert sort_by_date(articles, "latest") == articles
    assert sort_by_date(articles, "oldest") == articles
