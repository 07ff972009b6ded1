"""Core configuration components."""

from morning_dashboard.core.config import (
    ConfigError,
    ConfigResolver,
    DashboardConfig,
    deep_merge,
    get_config,
    resolve,
)

__all__ = [
    "ConfigError",
    "ConfigResolver",
    "DashboardConfig",
    "deep_merge",
    "get_config",
    "resolve",
]
