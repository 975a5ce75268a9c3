"""Event-driven controller for the article grid.

The controller owns a single immutable ``SessionState`` that is replaced on
every transition. Each fetch carries the generation of the query that
started it; a completion whose generation is no longer current is dropped,
so a slow response for an abandoned query never reaches the store or view.

Transitions:

=====================  ==========================  =============================
Event                  Guard                       Effect
=====================  ==========================  =============================
query_changed          non-empty search term       new generation, reset, LOADING
                       (also while LOADING)        supersedes the in-flight fetch
load_more_requested    LOADED and has_more         page += 1, LOADING
retry                  ERROR                       same as query_changed
sort_changed           not LOADING                 re-render store, no fetch
fetch completed        generation is current       LOADED, EMPTY or ERROR
=====================  ==========================  =============================

Any guarded event whose guard fails is ignored. ``query_changed`` is the one
event accepted while LOADING: rather than waiting for the in-flight fetch, it
starts a new generation and the older completion is discarded as stale.
Every other event is ignored until the fetch completes.
"""

import logging
from dataclasses import dataclass, replace
from enum import StrEnum
from typing import Protocol

from newssphere.client.render import (
    Card,
    TrendingItem,
    render_card,
    render_trending_item,
    results_label,
)
from newssphere.client.saved import SavedArticles
from newssphere.client.store import ResultStore, SortOrder, sort_by_date
from newssphere.data import Article, is_displayable
from newssphere.endpoints.schemas import ArticleListResponse
from newssphere.errors import NewsSphereError

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 50
TRENDING_LIMIT = 15


class Status(StrEnum):
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    EMPTY = "empty"
    ERROR = "error"


class Mode(StrEnum):
    HEADLINES = "headlines"
    SEARCH = "search"


@dataclass(frozen=True)
class SessionState:
    """Everything the grid depends on, replaced atomically per transition."""

    status: Status = Status.IDLE
    mode: Mode = Mode.HEADLINES
    category: str = ""
    query: str = ""
    country: str = "us"
    page: int = 1
    next_token: str | None = None
    generation: int = 0
    sort_order: SortOrder = "latest"
    has_more: bool = False
    total_results: int = 0
    error_message: str | None = None
    retryable: bool = False


class ArticleSource(Protocol):
    """What the controller needs from the proxy client."""

    async def fetch_headlines(
        self,
        *,
        country: str,
        category: str | None = None,
        page: str | None = None,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> ArticleListResponse: ...

    async def fetch_search(
        self,
        *,
        q: str,
        page: str | None = None,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> ArticleListResponse: ...

    async def fetch_trending(self) -> list[Article]: ...


class FeedView(Protocol):
    """Presentation surface driven by the controller."""

    def clear(self) -> None: ...

    def append_cards(self, cards: list[Card]) -> None: ...

    def show_loading(self, visible: bool) -> None: ...

    def show_error(self, message: str | None, *, retry: bool) -> None: ...

    def show_empty(self, visible: bool) -> None: ...

    def set_load_more_visible(self, visible: bool) -> None: ...

    def set_results_label(self, text: str) -> None: ...

    def show_trending(self, items: list[TrendingItem]) -> None: ...

    def show_trending_unavailable(self) -> None: ...

    def show_toast(self, message: str) -> None: ...


class FeedController:
    """Coordinates queries, pagination, sorting and saving for one view.

    Args:
        source: Proxy client.
        view: Presentation surface.
        saved: Saved-articles list; toggling never touches network state.
        store: Accumulated results for the active query.
        page_size: Articles requested per page.
        country: Initial country filter.
    """

    def __init__(
        self,
        source: ArticleSource,
        view: FeedView,
        *,
        saved: SavedArticles,
        store: ResultStore | None = None,
        page_size: int = DEFAULT_PAGE_SIZE,
        country: str = "us",
    ) -> None:
        self._source = source
        self._view = view
        self._saved = saved
        self._store = store or ResultStore()
        self._page_size = page_size
        self._state = SessionState(country=country)

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def store(self) -> ResultStore:
        return self._store

    async def query_changed(
        self,
        *,
        category: str | None = None,
        query: str | None = None,
        country: str | None = None,
    ) -> None:
        """Start a new query; supersedes anything still in flight.

        A search term wins over a category. A blank search term is ignored.
        With no arguments the current query is reloaded from page one.
        """
        state = self._state
        if query is not None:
            term = query.strip()
            if not term:
                return
            state = replace(state, mode=Mode.SEARCH, query=term, category="")
        elif category is not None:
            state = replace(state, mode=Mode.HEADLINES, category=category, query="")
        if country is not None:
            state = replace(state, country=(country or "us").lower())
        await self._start(state)

    async def load_more_requested(self) -> None:
        """Fetch the next page for the current query, if one is known."""
        state = self._state
        if state.status is not Status.LOADED or not state.has_more:
            return
        self._state = replace(state, status=Status.LOADING, page=state.page + 1)
        self._view.show_loading(True)
        await self._fetch(self._state)

    async def retry(self) -> None:
        if self._state.status is not Status.ERROR:
            return
        await self._start(self._state)

    def sort_changed(self, order: SortOrder) -> None:
        """Re-render everything fetched so far in ``order``."""
        if self._state.status is Status.LOADING:
            return
        self._state = replace(self._state, sort_order=order)
        if len(self._store):
            self._view.clear()
            self._render(self._store.get_all())

    def toggle_save(self, article: Article) -> bool:
        """Save or unsave ``article``; returns True if it is now saved."""
        now_saved = self._saved.toggle(article)
        self._view.show_toast("Article saved!" if now_saved else "Article removed from saved")
        return now_saved

    async def refresh_trending(self) -> None:
        """Reload the sidebar; failures leave a notice instead of an error state."""
        try:
            articles = await self._source.fetch_trending()
        except NewsSphereError as e:
            logger.info("Trending unavailable: %s", e)
            self._view.show_trending_unavailable()
            return
        ordered = sort_by_date(articles, "latest")[:TRENDING_LIMIT]
        self._view.show_trending([render_trending_item(a) for a in ordered])

    async def _start(self, state: SessionState) -> None:
        self._state = replace(
            state,
            status=Status.LOADING,
            page=1,
            next_token=None,
            generation=self._state.generation + 1,
            has_more=False,
            total_results=0,
            error_message=None,
            retryable=False,
        )
        self._store.reset()
        self._view.clear()
        self._view.show_empty(False)
        self._view.show_error(None, retry=False)
        self._view.set_load_more_visible(False)
        self._view.show_loading(True)
        await self._fetch(self._state)

    async def _fetch(self, request: SessionState) -> None:
        try:
            if request.mode is Mode.SEARCH:
                response = await self._source.fetch_search(
                    q=request.query,
                    page=request.next_token,
                    page_size=self._page_size,
                )
            else:
                response = await self._source.fetch_headlines(
                    country=request.country,
                    category=request.category or None,
                    page=request.next_token,
                    page_size=self._page_size,
                )
        except NewsSphereError as e:
            self._on_failure(request, e)
            return
        self._on_success(request, response)

    def _is_stale(self, request: SessionState) -> bool:
        if request.generation != self._state.generation:
            logger.debug(
                "Discarding response for generation %d (current %d)",
                request.generation,
                self._state.generation,
            )
            return True
        return False

    def _on_success(self, request: SessionState, response: ArticleListResponse) -> None:
        if self._is_stale(request):
            return
        articles = [a.to_article() for a in response.articles]
        self._view.show_loading(False)
        label = results_label(
            query=request.query if request.mode is Mode.SEARCH else None,
            category=request.category or None,
            total=response.total_results_approx,
        )
        self._view.set_results_label(label)

        if request.page == 1 and not articles:
            self._state = replace(
                self._state,
                status=Status.EMPTY,
                has_more=False,
                total_results=response.total_results_approx,
            )
            self._view.show_empty(True)
            return

        self._store.append(articles)
        self._render(articles)
        has_more = (
            response.next_continuation_token is not None and len(articles) >= self._page_size
        )
        self._state = replace(
            self._state,
            status=Status.LOADED,
            next_token=response.next_continuation_token,
            has_more=has_more,
            total_results=response.total_results_approx,
        )
        self._view.set_load_more_visible(has_more)

    def _on_failure(self, request: SessionState, error: NewsSphereError) -> None:
        if self._is_stale(request):
            return
        retryable = error.retryable
        message = error.message or "Something went wrong. Please try again."
        logger.warning("Fetch for generation %d failed: %s", request.generation, message)
        self._state = replace(
            self._state,
            status=Status.ERROR,
            has_more=False,
            error_message=message,
            retryable=retryable,
        )
        self._view.show_loading(False)
        self._view.show_empty(False)
        self._view.set_load_more_visible(False)
        self._view.show_error(message, retry=retryable)

    def _render(self, articles: list[Article]) -> None:
        saved_urls = self._saved.saved_urls()
        ordered = sort_by_date(articles, self._state.sort_order)
        self._view.append_cards(
            [render_card(a, saved=a.url in saved_urls) for a in ordered if is_displayable(a)]
        )
