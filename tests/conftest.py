"""Shared test fixtures for the Stratum test suite."""

from collections.abc import Callable, Generator
from pathlib import Path

import pytest

from stratum.config.models.cookie import CookieProviderConfig
from tests.factories import TEST_KEY_MATERIAL


@pytest.fixture
def test_config_dir(tmp_path: Path) -> Path:
    """Create a temporary config directory for testing."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    return config_dir


@pytest.fixture
def mock_toml_files(test_config_dir: Path) -> Callable[[dict[str, str]], None]:
    """Factory fixture to create TOML files in the test config directory.

    Usage:
        def test_something(mock_toml_files):
            mock_toml_files({
                "default.toml": "app_name = 'test'",
                "development.toml": "debug = true",
            })
    """

    def _create_toml_files(files: dict[str, str]) -> None:
        for filename, content in files.items():
            toml_file = test_config_dir / filename
            toml_file.parent.mkdir(parents=True, exist_ok=True)
            toml_file.write_text(content)

    return _create_toml_files


@pytest.fixture
def cookie_config() -> CookieProviderConfig:
    """Cookie provider configuration with test key material."""
    return CookieProviderConfig(symmetric_key_material=TEST_KEY_MATERIAL)


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Generator[None, None, None]:
    """Clear the settings cache and TOML source before and after each test."""
    from stratum.config import get_settings
    from stratum.config.settings import set_toml_config

    get_settings.cache_clear()
    set_toml_config({})
    yield
    get_settings.cache_clear()
    set_toml_config({})


@pytest.fixture(autouse=True)
def reset_api_dependencies() -> Generator[None, None, None]:
    """Drop the shared settings manager between tests."""
    from stratum.api.dependencies import reset_dependencies

    reset_dependencies()
    yield
    reset_dependencies()
