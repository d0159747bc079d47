"""Enums for the settings domain."""

from enum import Enum


class SettingType(str, Enum):
    """Tagged kind of a setting value.

    The kind tells consumers how to interpret ``data_value``; no schema
    validation is performed against it.
    """

    BOOL = "bool"
    INT = "int"
    FLOAT = "float"
    STRING = "string"
    JSON = "json"
    ARRAY = "array"
    CHOICE = "choice"


class SettingsEventType(str, Enum):
    """Change notifications emitted by the settings manager.

    Event types use category.name format:
    - setting: a single setting was registered, updated or deleted
    - domain: a whole domain was updated or deleted
    """

    SETTING_REGISTERED = "setting.registered"
    SETTING_UPDATED = "setting.updated"
    SETTING_DELETED = "setting.deleted"
    DOMAIN_UPDATED = "domain.updated"
    DOMAIN_DELETED = "domain.deleted"
