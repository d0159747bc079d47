"""Stratum: layered settings resolution.

Stratum aggregates typed settings from an ordered chain of providers,
resolves conflicts by domain priority and provider affinity, and can cache
resolved settings client-side in an authenticated, expiring cookie token.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
