"""Pydantic configuration models for NewsSphere components."""

from pydantic import BaseModel, Field

from newssphere.endpoints.handlers import DEFAULT_CATEGORIES

# ============================================================
# Upstream Config
# ============================================================


class UpstreamConfig(BaseModel):
    """Configuration for the NewsData.io client."""

    base_url: str = "https://newsdata.io/api/1"
    endpoint: str = "/latest"
    language: str = "en"
    timeout_seconds: float = 30.0

    model_config = {"frozen": True}


# ============================================================
# Aggregation Config
# ============================================================


class AggregationConfig(BaseModel):
    """Limits applied by the page aggregator and the query endpoints."""

    max_requests: int = Field(default=5, ge=1)
    default_page_size: int = Field(default=20, ge=1)
    max_page_size: int = Field(default=50, ge=1)

    model_config = {"frozen": True}


# ============================================================
# Trending Config
# ============================================================


class TrendingConfig(BaseModel):
    """Configuration for the randomized trending sample."""

    categories: tuple[str, ...] = DEFAULT_CATEGORIES
    countries: str = "us,gb,in,ca,au"
    limit: int = Field(default=10, ge=1)

    model_config = {"frozen": True}


# ============================================================
# Server Config
# ============================================================


class ServerConfig(BaseModel):
    """HTTP server settings."""

    host: str = "127.0.0.1"
    port: int = 5000
    static_dir: str | None = "public"

    model_config = {"frozen": True}


# ============================================================
# Logging Config
# ============================================================


class LoggingConfig(BaseModel):
    """Configuration for per-aggregation run logging."""

    enabled: bool = False
    log_dir: str = "logs"

    model_config = {"frozen": True}


# ============================================================
# Root Config
# ============================================================


class NewsSphereConfig(BaseModel):
    """Root configuration for NewsSphere."""

    upstream: UpstreamConfig = Field(default_factory=UpstreamConfig)
    aggregation: AggregationConfig = Field(default_factory=AggregationConfig)
    trending: TrendingConfig = Field(default_factory=TrendingConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {"frozen": True}
