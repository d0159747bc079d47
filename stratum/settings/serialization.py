"""JSON codec for setting lists."""

from collections.abc import Sequence

from pydantic import TypeAdapter, ValidationError

from stratum.settings.exceptions import PayloadDeserializationError
from stratum.settings.models import SettingModel

_SETTING_LIST = TypeAdapter(list[SettingModel])


def serialize_settings(settings: Sequence[SettingModel]) -> str:
    """Serialize settings to a JSON array string."""
    return _SETTING_LIST.dump_json(list(settings)).decode("utf-8")


def deserialize_settings(payload: str | bytes) -> list[SettingModel]:
    """Parse a JSON array string produced by serialize_settings.

    Raises:
        PayloadDeserializationError: If the payload is not a valid setting list
    """
    try:
        return _SETTING_LIST.validate_json(payload)
    except ValidationError as e:
        raise PayloadDeserializationError(
            f"Invalid settings payload: {e.error_count()} error(s)"
        ) from e
