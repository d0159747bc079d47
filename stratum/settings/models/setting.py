"""Setting model."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from stratum.settings.models.domain import DomainModel
from stratum.settings.models.enums import SettingType


class SettingModel(BaseModel):
    """A single typed setting within a domain.

    ``provider_name`` is stamped by the settings manager once the setting
    is known to come from a specific provider. A bound setting is written
    back through that provider (or one after it in the chain).
    """

    model_config = ConfigDict(
        frozen=False,
        validate_assignment=True,
        extra="ignore",
    )

    name: str = Field(..., min_length=1, description="Unique key within a domain")
    type: SettingType = Field(default=SettingType.STRING, description="Tagged value kind")
    data_value: Any = Field(default=None, description="Payload shaped by type")
    domain: DomainModel = Field(default_factory=DomainModel, description="Owning domain")
    provider_name: str | None = Field(default=None, description="Source provider")
    tags: set[str] = Field(default_factory=set, description="String labels")
    description: str | None = Field(default=None, description="Human readable description")
    choices: list[Any] = Field(default_factory=list, description="Allowed values for choice kind")

    def has_tag(self, tag_name: str) -> bool:
        """Check if the setting carries a tag."""
        return tag_name in self.tags
