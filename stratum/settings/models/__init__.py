"""Settings domain models."""

from stratum.settings.models.domain import DEFAULT_DOMAIN_NAME, DomainModel
from stratum.settings.models.enums import SettingsEventType, SettingType
from stratum.settings.models.setting import SettingModel

__all__ = [
    "DEFAULT_DOMAIN_NAME",
    "DomainModel",
    "SettingModel",
    "SettingType",
    "SettingsEventType",
]
