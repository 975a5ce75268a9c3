"""NewsSphere: news aggregation proxy and client-side feed state."""

from newssphere.aggregator import PageAggregator, dedupe_by_title, dedupe_by_url
from newssphere.client import (
    FeedController,
    MemoryFeedView,
    NewsApiClient,
    ResultStore,
    SavedArticles,
)
from newssphere.config import NewsSphereConfig, create_app_from_config, create_from_config, load_config
from newssphere.data import (
    AggregatedResult,
    Article,
    HeadlinesQuery,
    KeywordQuery,
    PageFetchResult,
    SavedArticle,
    TrendingQuery,
)
from newssphere.endpoints import NewsEndpoints
from newssphere.errors import (
    NewsSphereError,
    RequestValidationError,
    UpstreamApiError,
    UpstreamConfigError,
    UpstreamConnectionError,
    UpstreamError,
    UpstreamFormatError,
)
from newssphere.run_logger import RunLogger
from newssphere.server import create_app
from newssphere.upstream import NewsDataClient, PageFetcher

__all__ = [
    # Models
    "AggregatedResult",
    "Article",
    "HeadlinesQuery",
    "KeywordQuery",
    "PageFetchResult",
    "SavedArticle",
    "TrendingQuery",
    # Errors
    "NewsSphereError",
    "RequestValidationError",
    "UpstreamApiError",
    "UpstreamConfigError",
    "UpstreamConnectionError",
    "UpstreamError",
    "UpstreamFormatError",
    # Protocols
    "PageFetcher",
    # Server side
    "NewsDataClient",
    "NewsEndpoints",
    "PageAggregator",
    "create_app",
    "dedupe_by_title",
    "dedupe_by_url",
    # Client side
    "FeedController",
    "MemoryFeedView",
    "NewsApiClient",
    "ResultStore",
    "SavedArticles",
    # Logging
    "RunLogger",
    # Config
    "NewsSphereConfig",
    "create_app_from_config",
    "create_from_config",
    "load_config",
]
