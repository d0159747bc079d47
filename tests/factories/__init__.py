"""Test factories for creating test data."""

from tests.factories.settings import (
    TEST_KEY_MATERIAL,
    DomainFactory,
    RecordingProvider,
    SettingFactory,
)

__all__ = [
    "TEST_KEY_MATERIAL",
    "DomainFactory",
    "RecordingProvider",
    "SettingFactory",
]
