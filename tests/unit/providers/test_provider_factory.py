"""Tests for building the provider chain from configuration."""

from pathlib import Path

import pytest

from stratum.config.models.cookie import CookieProviderConfig
from stratum.config.models.providers import ProviderEntryConfig, ProvidersConfig
from stratum.config.settings import Settings
from stratum.providers.cookie import CookieSettingsProvider
from stratum.providers.factory import (
    create_provider,
    create_settings_manager,
    find_cookie_provider,
)
from stratum.providers.simple import SimpleSettingsProvider
from tests.factories import TEST_KEY_MATERIAL

SEED = """
[[settings]]
name = "dark_mode"
type = "bool"
value = true
"""


@pytest.fixture
def settings() -> Settings:
    return Settings(cookie=CookieProviderConfig(symmetric_key_material=TEST_KEY_MATERIAL))


class TestCreateProvider:
    """Tests for create_provider."""

    @pytest.mark.asyncio
    async def test_simple_seeded_from_file(self, settings, test_config_dir: Path, mock_toml_files):
        mock_toml_files({"settings/seed.toml": SEED})
        entry = ProviderEntryConfig(name="defaults", settings_file="settings/seed.toml")

        provider = create_provider(entry, settings, test_config_dir)

        assert isinstance(provider, SimpleSettingsProvider)
        assert provider.is_read_only() is True
        assert [s.name for s in await provider.get_settings(["default"])] == ["dark_mode"]

    def test_simple_writable(self, settings):
        entry = ProviderEntryConfig(name="memory", read_only=False)

        provider = create_provider(entry, settings)

        assert provider.is_read_only() is False

    def test_missing_seed_file_raises(self, settings, test_config_dir: Path):
        entry = ProviderEntryConfig(name="defaults", settings_file="missing.toml")

        with pytest.raises(FileNotFoundError):
            create_provider(entry, settings, test_config_dir)

    def test_cookie(self, settings):
        provider = create_provider(ProviderEntryConfig(name="c", backend="cookie"), settings)

        assert isinstance(provider, CookieSettingsProvider)
        assert provider.cookie_name == "stn"

    def test_cookie_without_key_material_raises(self):
        with pytest.raises(ValueError):
            create_provider(ProviderEntryConfig(name="c", backend="cookie"), Settings())

    def test_unsupported_backend_raises(self, settings):
        entry = ProviderEntryConfig.model_construct(
            name="x", backend="redis", read_only=True, settings_file=None
        )

        with pytest.raises(ValueError, match="Unsupported"):
            create_provider(entry, settings)


class TestCreateSettingsManager:
    """Tests for create_settings_manager."""

    def test_chain_follows_configuration(self, settings):
        settings = Settings(
            cookie=settings.cookie,
            providers=ProvidersConfig(
                chain=[
                    ProviderEntryConfig(name="defaults"),
                    ProviderEntryConfig(name="memory", read_only=False),
                    ProviderEntryConfig(name="cookie", backend="cookie"),
                ]
            ),
        )

        manager = create_settings_manager(settings)

        assert list(manager.providers) == ["defaults", "memory", "cookie"]
        assert find_cookie_provider(manager) is manager.providers["cookie"]

    def test_no_cookie_provider(self, settings):
        manager = create_settings_manager(settings)

        assert list(manager.providers) == ["memory"]
        assert find_cookie_provider(manager) is None
