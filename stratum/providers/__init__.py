"""Settings providers.

Every backend in the settings manager's chain implements SettingsProvider.
"""

from stratum.providers.base import SettingsProvider
from stratum.providers.cookie import (
    CookieInstruction,
    CookieRequestState,
    CookieSettingsProvider,
)
from stratum.providers.simple import SimpleSettingsProvider
from stratum.providers.token import SettingsTokenCodec

__all__ = [
    "CookieInstruction",
    "CookieRequestState",
    "CookieSettingsProvider",
    "SettingsProvider",
    "SettingsTokenCodec",
    "SimpleSettingsProvider",
]
