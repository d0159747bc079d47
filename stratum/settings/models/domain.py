"""Domain model: a named, prioritized grouping of settings."""

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_DOMAIN_NAME = "default"


class DomainModel(BaseModel):
    """Grouping of settings.

    When several providers report a domain with the same name, the
    instance with the highest priority wins.
    """

    model_config = ConfigDict(
        frozen=False,
        validate_assignment=True,
        extra="ignore",
    )

    name: str = Field(default=DEFAULT_DOMAIN_NAME, min_length=1, description="Grouping key")
    enabled: bool = Field(default=False, description="Whether the domain is active")
    priority: int = Field(default=0, description="Higher priority overrides lower")
    read_only: bool = Field(default=False, description="Domain may not be modified")
