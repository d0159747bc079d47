"""Factory for building the provider chain from configuration.

The cookie backend needs key material, which should come from the
STRATUM_COOKIE__SYMMETRIC_KEY_MATERIAL environment variable rather than
a TOML file.
"""

from pathlib import Path

from stratum.config.loader import resolve_config_path
from stratum.config.models.providers import ProviderEntryConfig
from stratum.config.settings import Settings
from stratum.observability.logging import get_logger
from stratum.providers.base import SettingsProvider
from stratum.providers.cookie import CookieSettingsProvider
from stratum.providers.simple import SimpleSettingsProvider
from stratum.settings.events import EventDispatcher
from stratum.settings.loader import load_settings_file
from stratum.settings.manager import SettingsManager

logger = get_logger(__name__)


def create_provider(
    entry: ProviderEntryConfig,
    settings: Settings,
    config_dir: Path | None = None,
) -> SettingsProvider:
    """Create a provider instance for one chain entry.

    Args:
        entry: Chain entry from settings.providers
        settings: Root settings (cookie configuration)
        config_dir: Base directory for relative settings files

    Returns:
        Configured provider

    Raises:
        ValueError: If the backend is unsupported or misconfigured
    """
    backend = entry.backend

    if backend == "simple":
        seed = []
        if entry.settings_file:
            seed = load_settings_file(resolve_config_path(entry.settings_file, config_dir))

        logger.info(
            "creating_settings_provider",
            provider_name=entry.name,
            backend="simple",
            read_only=entry.read_only,
            seed_count=len(seed),
        )
        return SimpleSettingsProvider(seed, read_only=entry.read_only)

    elif backend == "cookie":
        logger.info(
            "creating_settings_provider",
            provider_name=entry.name,
            backend="cookie",
            cookie_name=settings.cookie.cookie_name,
            ttl=settings.cookie.ttl,
        )
        return CookieSettingsProvider(settings.cookie)

    raise ValueError(f"Unsupported settings provider backend: {backend}")


def create_settings_manager(
    settings: Settings,
    event_dispatcher: EventDispatcher | None = None,
    config_dir: Path | None = None,
) -> SettingsManager:
    """Create a SettingsManager over the configured provider chain."""
    providers = {
        entry.name: create_provider(entry, settings, config_dir)
        for entry in settings.providers.chain
    }

    logger.info("settings_manager_created", providers=list(providers))
    return SettingsManager(providers, event_dispatcher)


def find_cookie_provider(manager: SettingsManager) -> CookieSettingsProvider | None:
    """Return the first cookie provider in the chain, if any."""
    for provider in manager.providers.values():
        if isinstance(provider, CookieSettingsProvider):
            return provider
    return None
