"""Settings manager: resolves settings across an ordered provider chain.

Reads merge results from every provider. Domains with the same name keep
the instance with the highest priority (ties go to the provider seen
last). Settings read by domain are merged in chain order, so later
providers override earlier ones. Settings read by name walk the chain
backwards and stop as soon as every name is found.

Writes go to the first provider that accepts them. A setting that is
already bound to a provider (``provider_name`` is set) skips every
provider before the bound one.

Inside broadcast and merge loops a read-only refusal moves on to the next
provider and any other ProviderError is logged and skipped, so one
failing backend never blocks the rest of the chain. Targeted operations
surface errors to the caller.
"""

import json
from collections.abc import Awaitable, Callable, Iterable, Mapping, Sequence
from types import MappingProxyType
from typing import TypeVar

from stratum.observability.logging import get_logger
from stratum.observability.metrics import PROVIDER_ERRORS, SETTINGS_WRITES
from stratum.providers.base import SettingsProvider
from stratum.settings.events import EventDispatcher, InMemoryEventDispatcher, SettingsEvent
from stratum.settings.exceptions import (
    ProviderError,
    ProviderNotFoundError,
    ReadOnlyProviderError,
)
from stratum.settings.models import DomainModel, SettingModel, SettingsEventType

logger = get_logger(__name__)

T = TypeVar("T")

# Marker for a provider call that was skipped
_SKIPPED = object()


class SettingsManager:
    """Aggregates settings from a chain of providers.

    The chain is fixed at construction. The manager holds no other state,
    so it is safe to share across concurrent requests as long as each
    provider is.
    """

    def __init__(
        self,
        providers: Mapping[str, SettingsProvider],
        event_dispatcher: EventDispatcher | None = None,
    ) -> None:
        """Initialize the manager.

        Args:
            providers: Ordered mapping of provider name to provider
            event_dispatcher: Receiver of change events
        """
        self._providers: Mapping[str, SettingsProvider] = MappingProxyType(dict(providers))
        self._event_dispatcher = event_dispatcher or InMemoryEventDispatcher()

    @property
    def providers(self) -> Mapping[str, SettingsProvider]:
        """Read-only view of the provider chain."""
        return self._providers

    @property
    def event_dispatcher(self) -> EventDispatcher:
        return self._event_dispatcher

    def get_provider(self, provider_name: str) -> SettingsProvider:
        """Get a provider by name.

        Raises:
            ProviderNotFoundError: If the name is not in the chain
        """
        provider = self._providers.get(provider_name)
        if provider is None:
            raise ProviderNotFoundError(provider_name)
        return provider

    # Reads

    async def get_domains(
        self,
        provider_name: str | None = None,
        only_enabled: bool = False,
    ) -> dict[str, DomainModel]:
        """Get domains keyed by name, keeping the highest priority instance.

        Args:
            provider_name: Resolve against this provider only
            only_enabled: Skip disabled domains

        Raises:
            ProviderNotFoundError: If provider_name is not in the chain
            ProviderError: If the named provider fails
        """
        domains: dict[str, DomainModel] = {}

        if provider_name is not None:
            provider = self.get_provider(provider_name)
            _keep_highest_priority(domains, await provider.get_domains(only_enabled))
            return domains

        for name, provider in self._providers.items():
            reported = await self._call(
                name, "get_domains", lambda p=provider: p.get_domains(only_enabled)
            )
            if reported is not _SKIPPED:
                _keep_highest_priority(domains, reported)

        return domains

    async def get_enabled_domains(self) -> dict[str, DomainModel]:
        """Get enabled domains from the whole chain."""
        return await self.get_domains(None, True)

    async def get_settings_by_name(
        self,
        domain_names: Sequence[str],
        setting_names: Sequence[str],
    ) -> list[SettingModel]:
        """Get settings by name, consulting the last-registered providers first.

        Each provider is only asked for names that are still missing, and
        the walk stops once every name has been found.
        """
        outstanding = list(setting_names)
        settings: list[SettingModel] = []

        for name, provider in reversed(self._providers.items()):
            found = await self._call(
                name,
                "get_settings_by_name",
                lambda p=provider, names=list(outstanding): p.get_settings_by_name(
                    domain_names, names
                ),
            )
            if found is not _SKIPPED:
                for setting in found:
                    if setting is None:
                        logger.warning(
                            "null_setting_received",
                            provider_name=name,
                            setting_names=list(outstanding),
                        )
                        continue
                    setting.provider_name = name
                    settings.append(setting)
                    if setting.name in outstanding:
                        outstanding.remove(setting.name)

            if not outstanding:
                break

        return settings

    async def get_settings_by_domain(
        self,
        domain_names: Sequence[str],
    ) -> dict[str, SettingModel]:
        """Get settings of the given domains keyed by name.

        Later providers in the chain override earlier ones.
        """
        return await self._merge_settings(domain_names, lambda _: True)

    async def get_enabled_settings_by_tag(
        self,
        domain_names: Sequence[str],
        tag_name: str,
    ) -> dict[str, SettingModel]:
        """Get settings carrying tag_name, merged like get_settings_by_domain."""
        return await self._merge_settings(domain_names, lambda s: s.has_tag(tag_name))

    async def _merge_settings(
        self,
        domain_names: Sequence[str],
        include: Callable[[SettingModel], bool],
    ) -> dict[str, SettingModel]:
        settings: dict[str, SettingModel] = {}

        for name, provider in self._providers.items():
            found = await self._call(
                name, "get_settings", lambda p=provider: p.get_settings(domain_names)
            )
            if found is _SKIPPED:
                continue
            for setting in found:
                if not include(setting):
                    continue
                setting.provider_name = name
                settings[setting.name] = setting

        return settings

    # Writes

    async def save(self, setting: SettingModel) -> bool:
        """Save a setting to the first provider that accepts it.

        A bound setting is only offered to its provider and the providers
        after it. Returns False when no provider accepted the write.
        """
        bound_to = setting.provider_name
        if bound_to is not None and bound_to not in self._providers:
            logger.warning(
                "bound_provider_missing",
                setting_name=setting.name,
                provider_name=bound_to,
            )
            return False

        closed = bound_to is not None
        for name, provider in self._providers.items():
            if closed:
                if name != bound_to:
                    continue
                closed = False

            if provider.is_read_only():
                continue

            accepted = await self._call(name, "save", lambda p=provider: p.save(setting))
            if accepted is _SKIPPED or not accepted:
                continue

            setting.provider_name = name
            self._log_write("setting_saved", setting)
            SETTINGS_WRITES.labels(operation="save", provider=name, outcome="accepted").inc()
            self._dispatch(SettingsEventType.SETTING_REGISTERED, setting=setting, provider_name=name)
            return True

        SETTINGS_WRITES.labels(operation="save", provider="", outcome="rejected").inc()
        return False

    async def update(self, setting: SettingModel) -> bool:
        """Write a setting back to its bound provider, falling back to save."""
        bound_to = setting.provider_name
        if bound_to:
            provider = self._providers.get(bound_to)
            result = False
            if provider is not None:
                try:
                    result = await provider.save(setting)
                except ReadOnlyProviderError:
                    result = False
                except ProviderError as e:
                    self._log_provider_error(bound_to, "update", e)

            if result is True:
                self._log_write("setting_updated", setting)
                SETTINGS_WRITES.labels(
                    operation="update", provider=bound_to, outcome="accepted"
                ).inc()
                self._dispatch(
                    SettingsEventType.SETTING_UPDATED, setting=setting, provider_name=bound_to
                )
                return True

        return await self.save(setting)

    async def delete(self, setting: SettingModel) -> bool:
        """Delete a setting from its bound provider, or from every provider.

        Returns whether any provider reported a deletion.
        """
        changed = False
        bound_to = setting.provider_name

        if bound_to:
            provider = self._providers.get(bound_to)
            if provider is None:
                logger.warning(
                    "bound_provider_missing",
                    setting_name=setting.name,
                    provider_name=bound_to,
                )
            else:
                try:
                    changed = await provider.delete(setting)
                except ReadOnlyProviderError:
                    changed = False
        else:
            for name, provider in self._providers.items():
                deleted = await self._call(name, "delete", lambda p=provider: p.delete(setting))
                if deleted is not _SKIPPED and deleted:
                    changed = True

        if changed:
            logger.info(
                "setting_deleted",
                setting_name=setting.name,
                domain_name=setting.domain.name,
                provider_name=bound_to,
            )
            self._dispatch(SettingsEventType.SETTING_DELETED, setting=setting, provider_name=bound_to)

        return changed

    async def copy_domain_to_provider(self, domain_name: str, provider_name: str) -> None:
        """Save every setting of a domain into one provider.

        Used to seed or migrate providers.

        Raises:
            ProviderNotFoundError: If provider_name is not in the chain
        """
        provider = self.get_provider(provider_name)

        settings = await self.get_settings_by_domain([domain_name])
        for setting in settings.values():
            await provider.save(setting)

        logger.info(
            "domain_copied",
            domain_name=domain_name,
            provider_name=provider_name,
            setting_count=len(settings),
        )

    async def update_domain(
        self,
        domain: DomainModel,
        provider_name: str | None = None,
    ) -> None:
        """Update a domain in one provider or in every writable provider.

        Raises:
            ProviderNotFoundError: If provider_name is not in the chain
        """
        if provider_name is not None:
            provider = self.get_provider(provider_name)
            try:
                await provider.update_domain(domain)
            except ReadOnlyProviderError as e:
                self._log_provider_error(provider_name, "update_domain", e)
        else:
            for name, provider in self._providers.items():
                if provider.is_read_only():
                    continue
                await self._call(name, "update_domain", lambda p=provider: p.update_domain(domain))

        logger.info(
            "domain_updated",
            provider_name=provider_name,
            domain_name=domain.name,
            domain_enabled=domain.enabled,
            domain_priority=domain.priority,
        )
        self._dispatch(SettingsEventType.DOMAIN_UPDATED, domain=domain, provider_name=provider_name)

    async def delete_domain(
        self,
        domain_name: str,
        provider_name: str | None = None,
    ) -> None:
        """Delete a domain from one provider or from every writable provider.

        Raises:
            ProviderNotFoundError: If provider_name is not in the chain
        """
        if provider_name is not None:
            provider = self.get_provider(provider_name)
            try:
                await provider.delete_domain(domain_name)
            except ReadOnlyProviderError as e:
                self._log_provider_error(provider_name, "delete_domain", e)
        else:
            for name, provider in self._providers.items():
                if provider.is_read_only():
                    continue
                await self._call(name, "delete_domain", lambda p=provider: p.delete_domain(domain_name))

        logger.info(
            "domain_deleted",
            provider_name=provider_name,
            domain_name=domain_name,
        )
        self._dispatch(
            SettingsEventType.DOMAIN_DELETED,
            domain=DomainModel(name=domain_name),
            provider_name=provider_name,
        )

    # Helpers

    async def _call(
        self,
        provider_name: str,
        operation: str,
        call: Callable[[], Awaitable[T]],
    ) -> T | object:
        """Run one provider call inside a broadcast or merge loop.

        Returns _SKIPPED when the provider refused or failed.
        """
        try:
            return await call()
        except ReadOnlyProviderError:
            return _SKIPPED
        except ProviderError as e:
            self._log_provider_error(provider_name, operation, e)
            return _SKIPPED

    def _log_provider_error(self, provider_name: str, operation: str, error: ProviderError) -> None:
        logger.warning(
            "provider_failed",
            provider_name=provider_name,
            operation=operation,
            error=error.message,
            error_type=type(error).__name__,
        )
        PROVIDER_ERRORS.labels(provider=provider_name, operation=operation).inc()

    def _log_write(self, event: str, setting: SettingModel) -> None:
        logger.info(
            event,
            setting_name=setting.name,
            setting_type=setting.type.value,
            setting_value=json.dumps(setting.data_value, default=str),
            domain_name=setting.domain.name,
            domain_enabled=setting.domain.enabled,
            provider_name=setting.provider_name,
        )

    def _dispatch(
        self,
        event_type: SettingsEventType,
        *,
        setting: SettingModel | None = None,
        domain: DomainModel | None = None,
        provider_name: str | None = None,
    ) -> None:
        self._event_dispatcher.dispatch(
            SettingsEvent(
                type=event_type,
                setting=setting,
                domain=domain,
                provider_name=provider_name,
            )
        )


def _keep_highest_priority(
    domains: dict[str, DomainModel],
    reported: Iterable[DomainModel],
) -> None:
    for domain in reported:
        current = domains.get(domain.name)
        if current is None or domain.priority >= current.priority:
            domains[domain.name] = domain
