from newssphere.upstream.base import PageFetcher
from newssphere.upstream.newsdata import NewsDataClient, build_query_params, normalize_article

__all__ = ["NewsDataClient", "PageFetcher", "build_query_params", "normalize_article"]
