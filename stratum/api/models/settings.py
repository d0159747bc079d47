"""Request and response models for the settings endpoints."""

from typing import Any

from pydantic import BaseModel, Field

from stratum.settings.models import DomainModel, SettingModel, SettingType


class DomainResponse(BaseModel):
    """A resolved domain."""

    name: str
    enabled: bool
    priority: int
    read_only: bool

    @classmethod
    def from_model(cls, domain: DomainModel) -> "DomainResponse":
        return cls(
            name=domain.name,
            enabled=domain.enabled,
            priority=domain.priority,
            read_only=domain.read_only,
        )


class DomainWrite(BaseModel):
    """Body for updating a domain."""

    enabled: bool = False
    priority: int = 0
    read_only: bool = False


class SettingResponse(BaseModel):
    """A resolved setting and the provider it came from."""

    name: str
    domain: str
    type: SettingType
    value: Any
    tags: list[str]
    description: str | None
    provider: str | None

    @classmethod
    def from_model(cls, setting: SettingModel) -> "SettingResponse":
        return cls(
            name=setting.name,
            domain=setting.domain.name,
            type=setting.type,
            value=setting.data_value,
            tags=sorted(setting.tags),
            description=setting.description,
            provider=setting.provider_name,
        )


class SettingWrite(BaseModel):
    """Body for writing a setting."""

    type: SettingType | None = Field(default=None, description="Kind; kept when omitted")
    value: Any = Field(default=None, description="New payload")
    tags: list[str] | None = Field(default=None, description="Labels; kept when omitted")
    description: str | None = None
    provider: str | None = Field(
        default=None,
        description="Bind the write to this provider (and the ones after it)",
    )
