"""Provider chain configuration models."""

from typing import Literal

from pydantic import BaseModel, Field, field_validator

ProviderBackend = Literal["simple", "cookie"]


class ProviderEntryConfig(BaseModel):
    """A single provider in the chain."""

    name: str = Field(..., min_length=1, description="Unique provider name")
    backend: ProviderBackend = Field(default="simple", description="Provider implementation")
    read_only: bool = Field(
        default=True,
        description="Refuse writes (simple backend only)",
    )
    settings_file: str | None = Field(
        default=None,
        description="TOML file seeding a simple provider, relative to the config dir",
    )


class ProvidersConfig(BaseModel):
    """Ordered provider chain.

    Order matters: later providers override earlier ones when settings
    are merged by domain, and are consulted first when settings are
    looked up by name.
    """

    chain: list[ProviderEntryConfig] = Field(
        default_factory=lambda: [
            ProviderEntryConfig(name="memory", backend="simple", read_only=False),
        ],
        description="Providers in registration order",
    )

    @field_validator("chain")
    @classmethod
    def unique_names(cls, chain: list[ProviderEntryConfig]) -> list[ProviderEntryConfig]:
        """Reject duplicate provider names."""
        names = [entry.name for entry in chain]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise ValueError(f"Duplicate provider names: {', '.join(duplicates)}")
        return chain
