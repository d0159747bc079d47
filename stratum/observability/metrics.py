"""Prometheus metrics for Stratum.

Counts setting writes, provider failures absorbed by the manager, and
cookie token outcomes.
"""

from prometheus_client import Counter

# Write metrics
SETTINGS_WRITES = Counter(
    "stratum_settings_writes_total",
    "Setting writes attempted through the settings manager",
    labelnames=["operation", "provider", "outcome"],
)

# Provider failures absorbed by broadcast and merge loops
PROVIDER_ERRORS = Counter(
    "stratum_provider_errors_total",
    "Provider failures skipped by the settings manager",
    labelnames=["provider", "operation"],
)

# Cookie token lifecycle
COOKIE_TOKENS = Counter(
    "stratum_cookie_tokens_total",
    "Cookie settings tokens by outcome",
    labelnames=["outcome"],
)
