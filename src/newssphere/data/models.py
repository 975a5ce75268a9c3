"""Core data models for NewsSphere."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Article:
    """A news article in the provider-independent shape served to clients."""

    url: str
    title: str = ""
    description: str = ""
    image_url: str = ""
    published_at: str = ""
    source_name: str = "Unknown"


@dataclass(frozen=True)
class HeadlinesQuery:
    """Latest headlines for a country, optionally narrowed to a category."""

    country: str = "us"
    category: str | None = None
    page: str | None = None


@dataclass(frozen=True)
class KeywordQuery:
    """Free-text search over the latest articles."""

    term: str
    page: str | None = None


@dataclass(frozen=True)
class TrendingQuery:
    """Randomized sample for the trending sidebar.

    ``countries`` is a comma-separated list sent to the provider as-is.
    """

    category: str = "top"
    countries: str = "us"


QuerySpec = HeadlinesQuery | KeywordQuery | TrendingQuery


@dataclass(frozen=True)
class PageFetchResult:
    """A single upstream page.

    ``continuation_token`` is opaque and provider-issued; ``None`` means the
    provider has no further pages.
    """

    articles: list[Article] = field(default_factory=list)
    continuation_token: str | None = None


@dataclass(frozen=True)
class AggregatedResult:
    """Articles stitched together from several upstream pages.

    ``total_results_approx`` is the number of deduplicated articles actually
    collected before truncation, not the provider's corpus size.
    """

    articles: list[Article] = field(default_factory=list)
    total_results_approx: int = 0
    next_continuation_token: str | None = None


@dataclass(frozen=True)
class SavedArticle:
    """Reduced article projection persisted by the client's Save feature."""

    url: str
    title: str = ""
    description: str = ""
    image_url: str = ""
    source_name: str = "Unknown"
    published_at: str = ""

    @classmethod
    def from_article(cls, article: Article) -> "SavedArticle":
        return cls(
            url=article.url,
            title=article.title,
            description=article.description or "",
            image_url=article.image_url or "",
            source_name=article.source_name or "Unknown",
            published_at=article.published_at or "",
        )

    def to_article(self) -> Article:
        return Article(
            url=self.url,
            title=self.title,
            description=self.description,
            image_url=self.image_url,
            published_at=self.published_at,
            source_name=self.source_name,
        )


REMOVED_PLACEHOLDER = "[Removed]"


def is_displayable(article: Article) -> bool:
    """False for untitled articles and the provider's removed-content placeholder."""
    return bool(article.title) and article.title != REMOVED_PLACEHOLDER
