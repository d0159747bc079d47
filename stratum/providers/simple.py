"""In-memory implementation of SettingsProvider."""

from collections.abc import Iterable, Sequence

from stratum.providers.base import SettingsProvider
from stratum.settings.exceptions import ReadOnlyProviderError
from stratum.settings.models import DomainModel, SettingModel


class SimpleSettingsProvider(SettingsProvider):
    """In-memory provider backed by a list of settings.

    Domains are derived from the held settings. Read-only by default,
    which suits providers seeded from static files; pass
    ``read_only=False`` for a writable in-memory store.
    """

    def __init__(
        self,
        settings: Iterable[SettingModel] | None = None,
        *,
        read_only: bool = True,
    ) -> None:
        """Initialize storage.

        Args:
            settings: Initial settings
            read_only: Refuse all writes when True
        """
        self._settings: list[SettingModel] = list(settings or [])
        self._read_only = read_only

    def _settings_list(self) -> list[SettingModel]:
        """Storage used by every operation.

        Subclasses may redirect storage; writes mutate the returned list
        in place.
        """
        return self._settings

    def _ensure_writable(self) -> None:
        if self.is_read_only():
            raise ReadOnlyProviderError(type(self).__name__)

    def is_read_only(self) -> bool:
        return self._read_only

    async def get_domains(self, only_enabled: bool = False) -> list[DomainModel]:
        """Get the distinct domains of the held settings."""
        domains: dict[str, DomainModel] = {}
        for setting in self._settings_list():
            if only_enabled and not setting.domain.enabled:
                continue
            domains[setting.domain.name] = setting.domain
        return list(domains.values())

    async def get_settings(self, domain_names: Sequence[str]) -> list[SettingModel]:
        """Get settings whose domain is in domain_names."""
        return [s for s in self._settings_list() if s.domain.name in domain_names]

    async def get_settings_by_name(
        self,
        domain_names: Sequence[str],
        setting_names: Sequence[str],
    ) -> list[SettingModel | None]:
        """Get settings matching both domain and setting names."""
        return [
            s
            for s in self._settings_list()
            if s.domain.name in domain_names and s.name in setting_names
        ]

    async def save(self, setting: SettingModel) -> bool:
        """Store a copy of the setting, replacing one with the same name and domain."""
        self._ensure_writable()

        setting = setting.model_copy(deep=True)
        settings = self._settings_list()
        for index, existing in enumerate(settings):
            if _same_setting(existing, setting):
                settings[index] = setting
                return True

        settings.append(setting)
        return True

    async def delete(self, setting: SettingModel) -> bool:
        """Remove the setting with the same name and domain."""
        self._ensure_writable()

        settings = self._settings_list()
        remaining = [s for s in settings if not _same_setting(s, setting)]
        if len(remaining) == len(settings):
            return False
        settings[:] = remaining
        return True

    async def update_domain(self, domain: DomainModel) -> bool:
        """Attach the given domain to every setting of that domain."""
        self._ensure_writable()

        settings = self._settings_list()
        updated = False
        for index, setting in enumerate(settings):
            if setting.domain.name == domain.name:
                settings[index] = setting.model_copy(update={"domain": domain.model_copy()})
                updated = True
        return updated

    async def delete_domain(self, domain_name: str) -> bool:
        """Remove every setting of the domain."""
        self._ensure_writable()

        settings = self._settings_list()
        remaining = [s for s in settings if s.domain.name != domain_name]
        if len(remaining) == len(settings):
            return False
        settings[:] = remaining
        return True


def _same_setting(a: SettingModel, b: SettingModel) -> bool:
    return a.name == b.name and a.domain.name == b.domain.name
