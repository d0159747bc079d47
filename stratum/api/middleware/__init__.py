"""API middleware package."""

from stratum.api.middleware.settings_cookie import (
    SettingsCookieMiddleware,
    apply_cookie_instruction,
)

__all__ = [
    "SettingsCookieMiddleware",
    "apply_cookie_instruction",
]
