"""Test factories for settings domain models and providers."""

from collections.abc import Sequence
from typing import Any

from stratum.providers.simple import SimpleSettingsProvider
from stratum.settings.exceptions import ProviderError
from stratum.settings.models import DomainModel, SettingModel, SettingType

TEST_KEY_MATERIAL = "GuxH2igWOvGBSk3cpeL300Fzv9JiAtvC"


class DomainFactory:
    """Factory for creating DomainModel instances for testing."""

    @staticmethod
    def create(
        *,
        name: str = "default",
        enabled: bool = True,
        priority: int = 0,
        read_only: bool = False,
    ) -> DomainModel:
        return DomainModel(name=name, enabled=enabled, priority=priority, read_only=read_only)


class SettingFactory:
    """Factory for creating SettingModel instances for testing."""

    @staticmethod
    def create(
        *,
        name: str = "dark_mode",
        type: SettingType = SettingType.BOOL,
        data_value: Any = True,
        domain: DomainModel | None = None,
        domain_name: str = "default",
        provider_name: str | None = None,
        tags: set[str] | None = None,
    ) -> SettingModel:
        """Create a SettingModel with sensible defaults.

        Args:
            domain: Owning domain; an enabled domain named domain_name otherwise
        """
        return SettingModel(
            name=name,
            type=type,
            data_value=data_value,
            domain=domain or DomainFactory.create(name=domain_name),
            provider_name=provider_name,
            tags=tags or set(),
        )


class RecordingProvider(SimpleSettingsProvider):
    """In-memory provider that records every call it receives."""

    def __init__(
        self,
        settings: Sequence[SettingModel] | None = None,
        *,
        read_only: bool = False,
        accept_writes: bool = True,
        fail_with: ProviderError | None = None,
    ) -> None:
        super().__init__(settings, read_only=read_only)
        self.accept_writes = accept_writes
        self.fail_with = fail_with
        self.calls: list[str] = []
        self.requested_names: list[list[str]] = []

    def count(self, operation: str) -> int:
        return self.calls.count(operation)

    def _record(self, operation: str) -> None:
        self.calls.append(operation)
        if self.fail_with is not None:
            raise self.fail_with

    async def get_domains(self, only_enabled: bool = False) -> list[DomainModel]:
        self._record("get_domains")
        return await super().get_domains(only_enabled)

    async def get_settings(self, domain_names: Sequence[str]) -> list[SettingModel]:
        self._record("get_settings")
        return await super().get_settings(domain_names)

    async def get_settings_by_name(
        self, domain_names: Sequence[str], setting_names: Sequence[str]
    ) -> list[SettingModel | None]:
        self._record("get_settings_by_name")
        self.requested_names.append(list(setting_names))
        return await super().get_settings_by_name(domain_names, setting_names)

    async def save(self, setting: SettingModel) -> bool:
        self._record("save")
        if not self.accept_writes:
            return False
        return await super().save(setting)

    async def delete(self, setting: SettingModel) -> bool:
        self._record("delete")
        return await super().delete(setting)

    async def update_domain(self, domain: DomainModel) -> bool:
        self._record("update_domain")
        return await super().update_domain(domain)

    async def delete_domain(self, domain_name: str) -> bool:
        self._record("delete_domain")
        return await super().delete_domain(domain_name)
