"""Headless ``FeedView`` that keeps the rendered page in memory."""

from dataclasses import dataclass, field

from newssphere.client.render import Card, TrendingItem


@dataclass
class MemoryFeedView:
    """Holds whatever the controller last displayed.

    Useful for scripting the controller without a UI, and in tests.
    """

    cards: list[Card] = field(default_factory=list)
    loading: bool = False
    error: str | None = None
    retry_visible: bool = False
    empty: bool = False
    load_more_visible: bool = False
    results_label: str = ""
    trending: list[TrendingItem] = field(default_factory=list)
    trending_unavailable: bool = False
    toasts: list[str] = field(default_factory=list)

    def clear(self) -> None:
        self.cards = []

    def append_cards(self, cards: list[Card]) -> None:
        self.cards.extend(cards)

    def show_loading(self, visible: bool) -> None:
        self.loading = visible

    def show_error(self, message: str | None, *, retry: bool) -> None:
        self.error = message
        self.retry_visible = bool(message) and retry

    def show_empty(self, visible: bool) -> None:
        self.empty = visible

    def set_load_more_visible(self, visible: bool) -> None:
        self.load_more_visible = visible

    def set_results_label(self, text: str) -> None:
        self.results_label = text

    def show_trending(self, items: list[TrendingItem]) -> None:
        self.trending = list(items)
        self.trending_unavailable = False

    def show_trending_unavailable(self) -> None:
        self.trending = []
        self.trending_unavailable = True

    def show_toast(self, message: str) -> None:
        self.toasts.append(message)

    def to_html(self) -> str:
        return "".join(card.to_html() for card in self.cards)
