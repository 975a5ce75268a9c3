"""In-memory accumulation of every page fetched for the active query."""

from datetime import UTC, datetime
from typing import Literal

from newssphere.data import Article

SortOrder = Literal["latest", "oldest"]


def parse_published_at(value: str | None) -> datetime | None:
    """Parse a provider timestamp; naive values are taken as UTC.

    Returns None for missing or unparseable input.
    """
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def _sort_key(article: Article) -> float:
    parsed = parse_published_at(article.published_at)
    return parsed.timestamp() if parsed is not None else float("-inf")


class ResultStore:
    """All articles received for the current query, in arrival order.

    Lets the view re-sort what it already has without another round trip.
    A ``reset`` discards everything; the controller calls it on every query
    change.
    """

    def __init__(self) -> None:
        self._articles: list[Article] = []

    def __len__(self) -> int:
        return len(self._articles)

    def reset(self) -> None:
        self._articles = []

    def append(self, articles: list[Article]) -> None:
        self._articles.extend(articles)

    def get_all(self) -> list[Article]:
        return list(self._articles)

    def sorted_by_date(self, direction: SortOrder = "latest") -> list[Article]:
        """Return a stably sorted copy.

        Articles without a parseable timestamp count as the earliest, so they
        come last for ``latest`` and first for ``oldest``.
        """
        return sort_by_date(self._articles, direction)


def sort_by_date(articles: list[Article], direction: SortOrder = "latest") -> list[Article]:
    """Stable sort of ``articles`` by publish time in ``direction``."""
    if direction == "oldest":
        return sorted(articles, key=_sort_key)
    return sorted(articles, key=_sort_key, reverse=True)
