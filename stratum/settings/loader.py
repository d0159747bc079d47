"""Load seed settings from TOML files.

File layout:

    [[domains]]
    name = "default"
    enabled = true
    priority = 10

    [[settings]]
    name = "dark_mode"
    domain = "default"
    type = "bool"
    value = false
    tags = ["ui"]

Settings that name an undeclared domain get a default DomainModel.
"""

from pathlib import Path
from typing import Any

from stratum.config.loader import load_toml
from stratum.observability.logging import get_logger
from stratum.settings.models import DEFAULT_DOMAIN_NAME, DomainModel, SettingModel

logger = get_logger(__name__)


def parse_settings(document: dict[str, Any]) -> list[SettingModel]:
    """Build settings from a parsed seed document.

    Raises:
        pydantic.ValidationError: If a domain or setting entry is invalid
    """
    domains = {
        entry["name"]: DomainModel.model_validate(entry)
        for entry in document.get("domains", [])
        if "name" in entry
    }

    settings: list[SettingModel] = []
    for entry in document.get("settings", []):
        data = dict(entry)
        domain_name = data.pop("domain", DEFAULT_DOMAIN_NAME)
        if "value" in data:
            data["data_value"] = data.pop("value")

        domain = domains.get(domain_name)
        if domain is None:
            domain = DomainModel(name=domain_name)
            domains[domain_name] = domain

        settings.append(SettingModel.model_validate({**data, "domain": domain}))

    return settings


def load_settings_file(path: str | Path) -> list[SettingModel]:
    """Load seed settings from a TOML file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        pydantic.ValidationError: If an entry is invalid
    """
    file_path = Path(path)
    settings = parse_settings(load_toml(file_path))

    logger.info(
        "settings_file_loaded",
        path=str(file_path),
        setting_count=len(settings),
    )
    return settings
