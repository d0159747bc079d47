"""SettingsProvider abstract interface."""

from abc import ABC, abstractmethod
from collections.abc import Sequence

from stratum.settings.models import DomainModel, SettingModel


class SettingsProvider(ABC):
    """Abstract interface for a settings backend.

    Every backend in the settings manager's chain implements this
    contract, including the cookie-backed cache provider. Read
    operations are side-effect free. Write operations must be idempotent
    for identical values and either return False or raise
    ReadOnlyProviderError when the write is refused. Backend failures are
    reported as ProviderError.
    """

    @abstractmethod
    async def get_domains(self, only_enabled: bool = False) -> list[DomainModel]:
        """Get domains known to this provider."""
        pass

    @abstractmethod
    async def get_settings(self, domain_names: Sequence[str]) -> list[SettingModel]:
        """Get all settings belonging to the given domains."""
        pass

    @abstractmethod
    async def get_settings_by_name(
        self,
        domain_names: Sequence[str],
        setting_names: Sequence[str],
    ) -> list[SettingModel | None]:
        """Get settings by name within the given domains.

        Backends that return placeholders for names they could not load
        may yield None entries; the settings manager skips them.
        """
        pass

    @abstractmethod
    async def save(self, setting: SettingModel) -> bool:
        """Persist a setting, returning whether the write was accepted."""
        pass

    @abstractmethod
    async def delete(self, setting: SettingModel) -> bool:
        """Delete a setting, returning whether anything was removed."""
        pass

    @abstractmethod
    async def update_domain(self, domain: DomainModel) -> bool:
        """Update the domain attached to this provider's settings."""
        pass

    @abstractmethod
    async def delete_domain(self, domain_name: str) -> bool:
        """Delete a domain and its settings."""
        pass

    @abstractmethod
    def is_read_only(self) -> bool:
        """Whether this provider refuses writes."""
        pass
