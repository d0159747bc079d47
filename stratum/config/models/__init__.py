"""Configuration model exports.

    from stratum.config.models import CookieProviderConfig, ProvidersConfig
"""

from stratum.config.models.api import APIConfig
from stratum.config.models.cookie import CookieProviderConfig
from stratum.config.models.observability import (
    LoggingConfig,
    MetricsConfig,
    ObservabilityConfig,
)
from stratum.config.models.providers import ProviderEntryConfig, ProvidersConfig

__all__ = [
    "APIConfig",
    "CookieProviderConfig",
    "LoggingConfig",
    "MetricsConfig",
    "ObservabilityConfig",
    "ProviderEntryConfig",
    "ProvidersConfig",
]
