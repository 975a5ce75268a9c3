from newssphere.endpoints.handlers import (
    DEFAULT_CATEGORIES,
    NewsEndpoints,
    clamp_page_size,
    normalize_cursor,
    upstream_params,
)
from newssphere.endpoints.schemas import (
    ArticleListResponse,
    ArticleSchema,
    ErrorResponse,
    HealthResponse,
    TrendingResponse,
)

__all__ = [
    "DEFAULT_CATEGORIES",
    "ArticleListResponse",
    "ArticleSchema",
    "ErrorResponse",
    "HealthResponse",
    "NewsEndpoints",
    "TrendingResponse",
    "clamp_page_size",
    "normalize_cursor",
    "upstream_params",
]
