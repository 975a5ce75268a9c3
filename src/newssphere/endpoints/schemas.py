"""Response envelopes served by the query endpoints."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from newssphere.data import AggregatedResult, Article


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class ArticleSchema(_CamelModel):
    """Article as exposed over HTTP."""

    url: str
    title: str = ""
    description: str = ""
    image_url: str = ""
    published_at: str = ""
    source_name: str = "Unknown"

    @classmethod
    def from_article(cls, article: Article) -> "ArticleSchema":
        return cls(
            url=article.url,
            title=article.title,
            description=article.description,
            image_url=article.image_url,
            published_at=article.published_at,
            source_name=article.source_name,
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


class ArticleListResponse(_CamelModel):
    """Envelope for headline listings and keyword searches."""

    status: Literal["ok"] = "ok"
    total_results_approx: int = 0
    articles: list[ArticleSchema] = Field(default_factory=list)
    next_continuation_token: str | None = None

    @classmethod
    def from_result(cls, result: AggregatedResult) -> "ArticleListResponse":
        return cls(
            total_results_approx=result.total_results_approx,
            articles=[ArticleSchema.from_article(a) for a in result.articles],
            next_continuation_token=result.next_continuation_token,
        )


class TrendingResponse(_CamelModel):
    """Envelope for the trending sample."""

    articles: list[ArticleSchema] = Field(default_factory=list)
    total_results_approx: int = 0


class ErrorResponse(BaseModel):
    """Uniform error body."""

    error: str


class HealthResponse(_CamelModel):
    """Health check body."""

    status: Literal["ok"] = "ok"
    api_key_configured: bool = False
