"""Tests for card rendering and date formatting."""

from datetime import UTC, datetime, timedelta

import pytest
from conftest import make_article

from newssphere.client import (
    escape_text,
    format_relative_date,
    render_card,
    render_saved_card,
    render_trending_item,
)
from newssphere.client.render import format_absolute_date, results_label
from newssphere.data import Article, SavedArticle

NOW = datetime(2026, 3, 10, 12, 0, tzinfo=UTC)


def _ago(**kwargs) -> str:
    return (NOW - timedelta(**kwargs)).strftime("%Y-%m-%d %H:%M:%S")


def test_escape_text() -> None:
    assert escape_text('<b>"Tom" & \'Jerry\'</b>') == (
        "&lt;b&gt;&quot;Tom&quot; &amp; &#x27;Jerry&#x27;&lt;/b&gt;"
    )
    assert escape_text(None) == ""
    assert escape_text(3) == "3"


class TestRelativeDate:
    """Tests for format_relative_date."""

    @pytest.mark.parametrize(
        "delta,expected",
        [
            (timedelta(seconds=20), "Just now"),
            (timedelta(minutes=5), "5m ago"),
            (timedelta(minutes=59), "59m ago"),
            (timedelta(hours=3), "3h ago"),
            (timedelta(days=2), "2d ago"),
            (timedelta(days=29), "29d ago"),
        ],
    )
    def test_recent(self, delta: timedelta, expected: str) -> None:
        value = (NOW - delta).strftime("%Y-%m-%d %H:%M:%S")
        assert format_relative_date(value, now=NOW) == expected

    def test_old_dates_are_absolute(self) -> None:
        assert format_relative_date("2026-01-04 09:00:00", now=NOW) == "4 Jan 2026"

    def test_unparseable_is_blank(self) -> None:
        assert format_relative_date("soon", now=NOW) == ""
        assert format_absolute_date(None) == ""


class TestRenderCard:
    """Tests for render_card and Card.to_html."""

    def test_escapes_provider_strings(self) -> None:
        article = Article(
            url='https://evil.test/"onmouseover="x',
            title="<script>alert(1)</script>",
            description="<img src=x onerror=alert(1)>",
            source_name="<b>Src</b>",
        )

        card = render_card(article, saved=False, now=NOW)
        markup = card.to_html()

        assert "<script>" not in markup
        assert "<img src=x" not in markup
        assert "&lt;script&gt;alert(1)&lt;/script&gt;" in markup
        assert '"onmouseover="' not in markup
        assert card.source == "&lt;b&gt;Src&lt;/b&gt;"

    def test_fallbacks(self) -> None:
        card = render_card(Article(url="https://a.com", source_name=""), saved=False, now=NOW)

        assert card.title == "Untitled"
        assert card.source == "Unknown"
        assert card.description is None
        assert card.image_src is None
        assert card.date_label == ""
        assert 'aria-hidden="true"' in card.to_html()

    def test_save_button_reflects_state(self) -> None:
        article = make_article(1, published_at=_ago(hours=2))

        unsaved = render_card(article, saved=False, now=NOW)
        saved = render_card(article, saved=True, now=NOW)

        assert unsaved.action_label == "♡ Save"
        assert saved.action_label == "✓ Saved"
        assert saved.action_aria_label == "Unsave"
        assert 'class="btn-save saved"' in saved.to_html()
        assert unsaved.date_label == "2h ago"

    def test_links_open_safely(self) -> None:
        markup = render_card(make_article(1), saved=False, now=NOW).to_html()

        assert 'target="_blank" rel="noopener noreferrer"' in markup


def test_render_saved_card() -> None:
    record = SavedArticle(
        url="https://a.com", title="Kept <i>", published_at="2026-02-14 08:00:00"
    )

    card = render_saved_card(record)

    assert card.removable
    assert card.action_label == "Remove"
    assert card.title == "Kept &lt;i&gt;"
    assert card.date_label == "14 Feb 2026"
    assert "btn-remove" in card.to_html()


def test_render_trending_item() -> None:
    article = make_article(1, title="A & B", published_at=_ago(minutes=10))

    item = render_trending_item(article, now=NOW)

    assert item.title == "A &amp; B"
    assert item.meta == "Example News · 10m ago"
    assert 'class="trending-item"' in item.to_html()


@pytest.mark.parametrize(
    "query,category,total,expected",
    [
        ("climate", None, 12, '"climate": 12 results'),
        ("climate", None, 0, "Search results"),
        (None, "sports", 30, "Sports news (30)"),
        (None, None, 50, "Top headlines (50)"),
        (None, None, 0, "Top headlines"),
    ],
)
def test_results_label(query, category, total, expected) -> None:
    assert results_label(query=query, category=category, total=total) == expected
