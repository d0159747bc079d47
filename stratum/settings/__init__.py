"""Settings resolution across an ordered chain of providers.

The manager lives in ``stratum.settings.manager``.
"""

from stratum.settings.events import EventDispatcher, InMemoryEventDispatcher, SettingsEvent
from stratum.settings.exceptions import (
    PayloadDeserializationError,
    ProviderError,
    ProviderNotFoundError,
    ReadOnlyProviderError,
    StratumError,
    TokenError,
    TokenInvalidError,
)
from stratum.settings.models import DomainModel, SettingModel, SettingsEventType, SettingType

__all__ = [
    "DomainModel",
    "EventDispatcher",
    "InMemoryEventDispatcher",
    "PayloadDeserializationError",
    "ProviderError",
    "ProviderNotFoundError",
    "ReadOnlyProviderError",
    "SettingModel",
    "SettingType",
    "SettingsEvent",
    "SettingsEventType",
    "StratumError",
    "TokenError",
    "TokenInvalidError",
]
