from newssphere.aggregator.pagination import (
    DEFAULT_MAX_REQUESTS,
    PageAggregator,
    dedupe_by_title,
    dedupe_by_url,
)

__all__ = ["DEFAULT_MAX_REQUESTS", "PageAggregator", "dedupe_by_title", "dedupe_by_url"]
