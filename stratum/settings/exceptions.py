"""Exception hierarchy for settings resolution.

Structural errors (unknown provider) propagate to callers. Provider-level
failures derive from ProviderError so broadcast loops can classify them
and move on to the next provider. Token errors never leave the cookie
provider's request hooks.
"""


class StratumError(Exception):
    """Base exception for all stratum errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ProviderNotFoundError(StratumError):
    """Raised when a provider name is not part of the chain."""

    def __init__(self, provider_name: str) -> None:
        super().__init__(f"Settings provider '{provider_name}' not found")
        self.provider_name = provider_name


class ProviderError(StratumError):
    """Raised by a provider when it fails to serve a request."""

    def __init__(self, message: str, provider_name: str | None = None) -> None:
        super().__init__(message)
        self.provider_name = provider_name


class ReadOnlyProviderError(ProviderError):
    """Raised when a read-only provider is asked to write."""

    def __init__(self, provider_name: str | None = None) -> None:
        label = provider_name or "provider"
        super().__init__(f"Settings {label} is read-only", provider_name)


class TokenError(StratumError):
    """Base for settings token failures."""


class TokenInvalidError(TokenError):
    """Token is malformed, tampered, expired, or has unexpected claims."""


class PayloadDeserializationError(TokenError):
    """Token payload could not be turned back into settings."""
