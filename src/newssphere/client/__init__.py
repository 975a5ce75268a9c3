"""Client-side state: result cache, saved articles and the feed controller."""

from newssphere.client.api import ClientRequestError, NewsApiClient
from newssphere.client.controller import (
    ArticleSource,
    FeedController,
    FeedView,
    Mode,
    SessionState,
    Status,
)
from newssphere.client.kvstore import InMemoryKeyValueStore, JsonFileKeyValueStore, KeyValueStore
from newssphere.client.preferences import Preferences
from newssphere.client.render import (
    Card,
    TrendingItem,
    escape_text,
    format_relative_date,
    render_card,
    render_saved_card,
    render_trending_item,
)
from newssphere.client.saved import SavedArticles
from newssphere.client.store import ResultStore, parse_published_at, sort_by_date
from newssphere.client.views import MemoryFeedView

__all__ = [
    "ArticleSource",
    "Card",
    "ClientRequestError",
    "FeedController",
    "FeedView",
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
    "KeyValueStore",
    "MemoryFeedView",
    "Mode",
    "NewsApiClient",
    "Preferences",
    "ResultStore",
    "SavedArticles",
    "SessionState",
    "Status",
    "TrendingItem",
    "escape_text",
    "format_relative_date",
    "parse_published_at",
    "render_card",
    "render_saved_card",
    "render_trending_item",
    "sort_by_date",
]
