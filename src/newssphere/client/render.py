"""Pure rendering of articles into escaped card structures.

Every provider-supplied string reaches markup through ``escape_text``; no
other function in this module builds markup from raw input.
"""

import html
from dataclasses import dataclass
from datetime import UTC, datetime

from newssphere.client.store import parse_published_at
from newssphere.data import Article, SavedArticle


def escape_text(value: object) -> str:
    """Escape ``value`` for use in HTML text and quoted attributes."""
    if value is None:
        return ""
    return html.escape(str(value), quote=True)


def format_relative_date(value: str | None, *, now: datetime | None = None) -> str:
    """Human-friendly age of a timestamp.

    "Just now", "5m ago", "3h ago" and "2d ago" up to 30 days, then an
    absolute "4 Mar 2026". Unparseable input renders as an empty string.
    """
    published = parse_published_at(value)
    if published is None:
        return ""
    now = now or datetime.now(tz=UTC)
    minutes = (now - published).total_seconds() / 60
    if minutes < 1:
        return "Just now"
    if minutes < 60:
        return f"{int(minutes)}m ago"
    if minutes < 1440:
        return f"{int(minutes // 60)}h ago"
    if minutes < 43200:
        return f"{int(minutes // 1440)}d ago"
    return format_absolute_date(value)


def format_absolute_date(value: str | None) -> str:
    published = parse_published_at(value)
    if published is None:
        return ""
    return f"{published.day} {published.strftime('%b %Y')}"


@dataclass(frozen=True)
class Card:
    """One article card; all string fields are already escaped."""

    url: str
    title: str
    description: str | None
    image_src: str | None
    source: str
    date_label: str
    saved: bool
    removable: bool = False

    @property
    def action_label(self) -> str:
        if self.removable:
            return "Remove"
        return "✓ Saved" if self.saved else "♡ Save"

    @property
    def action_aria_label(self) -> str:
        if self.removable:
            return "Remove from saved"
        return "Unsave" if self.saved else "Save"

    def to_html(self) -> str:
        image = (
            f'<img class="article-card-image" src="{self.image_src}" alt="" loading="lazy" />'
            if self.image_src
            else '<div class="article-card-image" aria-hidden="true"></div>'
        )
        description = (
            f'<p class="article-card-desc">{self.description}</p>' if self.description else ""
        )
        button_class = "btn-save"
        if self.saved:
            button_class += " saved"
        if self.removable:
            button_class += " btn-remove"
        link = f'href="{self.url}" target="_blank" rel="noopener noreferrer"'
        return (
            f'<article class="article-card" data-url="{self.url}">'
            f"{image}"
            '<div class="article-card-body">'
            f'<h3 class="article-card-title"><a {link}>{self.title}</a></h3>'
            f"{description}"
            '<div class="article-card-meta">'
            f'<span class="article-card-source">{self.source}</span>'
            f"<span>{self.date_label}</span>"
            "</div>"
            '<div class="article-card-actions">'
            f'<a class="btn-read-more" {link}>Read more</a>'
            f'<button type="button" class="{button_class}" data-url="{self.url}" '
            f'aria-label="{self.action_aria_label}">{self.action_label}</button>'
            "</div></div></article>"
        )


@dataclass(frozen=True)
class TrendingItem:
    """One sidebar entry; all string fields are already escaped."""

    url: str
    title: str
    meta: str

    def to_html(self) -> str:
        return (
            f'<a class="trending-item" href="{self.url}" target="_blank" '
            'rel="noopener noreferrer">'
            f'<div><span class="trending-item-title">{self.title}</span>'
            f'<span class="trending-item-meta">{self.meta}</span></div></a>'
        )


def render_card(article: Article, *, saved: bool, now: datetime | None = None) -> Card:
    return Card(
        url=escape_text(article.url),
        title=escape_text(article.title or "Untitled"),
        description=escape_text(article.description) if article.description else None,
        image_src=escape_text(article.image_url) if article.image_url else None,
        source=escape_text(article.source_name or "Unknown"),
        date_label=escape_text(format_relative_date(article.published_at, now=now)),
        saved=saved,
    )


def render_saved_card(record: SavedArticle) -> Card:
    """Card for the saved-articles page, with a Remove action and absolute dates."""
    return Card(
        url=escape_text(record.url),
        title=escape_text(record.title or "Untitled"),
        description=escape_text(record.description) if record.description else None,
        image_src=escape_text(record.image_url) if record.image_url else None,
        source=escape_text(record.source_name),
        date_label=escape_text(format_absolute_date(record.published_at)),
        saved=True,
        removable=True,
    )


def render_trending_item(article: Article, *, now: datetime | None = None) -> TrendingItem:
    meta = f"{article.source_name} · {format_relative_date(article.published_at, now=now)}"
    return TrendingItem(
        url=escape_text(article.url),
        title=escape_text(article.title),
        meta=escape_text(meta),
    )


def results_label(*, query: str | None, category: str | None, total: int) -> str:
    """Heading shown above the grid; escape before embedding in markup."""
    if query:
        return f'"{query}": {total} results' if total else "Search results"
    label = f"{category.capitalize()} news" if category else "Top headlines"
    return f"{label} ({total})" if total else label
