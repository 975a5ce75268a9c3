"""Data models for NewsSphere."""

from newssphere.data.models import (
    REMOVED_PLACEHOLDER,
    AggregatedResult,
    Article,
    HeadlinesQuery,
    KeywordQuery,
    PageFetchResult,
    QuerySpec,
    SavedArticle,
    TrendingQuery,
    is_displayable,
)

__all__ = [
    "REMOVED_PLACEHOLDER",
    "AggregatedResult",
    "Article",
    "HeadlinesQuery",
    "KeywordQuery",
    "PageFetchResult",
    "QuerySpec",
    "SavedArticle",
    "TrendingQuery",
    "is_displayable",
]
