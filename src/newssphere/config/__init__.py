"""Configuration module for NewsSphere."""

from newssphere.config.factory import create_app_from_config, create_from_config
from newssphere.config.loader import get_default_config_path, load_config
from newssphere.config.models import (
    AggregationConfig,
    LoggingConfig,
    NewsSphereConfig,
    ServerConfig,
    TrendingConfig,
    UpstreamConfig,
)

__all__ = [
    "AggregationConfig",
    "LoggingConfig",
    "NewsSphereConfig",
    "ServerConfig",
    "TrendingConfig",
    "UpstreamConfig",
    "create_app_from_config",
    "create_from_config",
    "get_default_config_path",
    "load_config",
]
