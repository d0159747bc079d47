"""Dependency injection for API routes.

The settings manager is created once from configuration and reused.
Tests and embedding applications can install their own manager with
set_settings_manager() or FastAPI dependency overrides.
"""

from typing import Annotated

from fastapi import Depends

from stratum.config import get_settings
from stratum.observability.logging import get_logger
from stratum.providers.factory import create_settings_manager
from stratum.settings.manager import SettingsManager

logger = get_logger(__name__)

_settings_manager: SettingsManager | None = None


def get_settings_manager() -> SettingsManager:
    """Get the shared settings manager, creating it on first access."""
    global _settings_manager
    if _settings_manager is None:
        _settings_manager = create_settings_manager(get_settings())
        logger.info(
            "settings_manager_initialized",
            providers=list(_settings_manager.providers),
        )
    return _settings_manager


def set_settings_manager(manager: SettingsManager | None) -> None:
    """Install a settings manager, or clear it with None."""
    global _settings_manager
    _settings_manager = manager


def reset_dependencies() -> None:
    """Drop cached instances so the next request rebuilds them."""
    set_settings_manager(None)


SettingsManagerDep = Annotated[SettingsManager, Depends(get_settings_manager)]
