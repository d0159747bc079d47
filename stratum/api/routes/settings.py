"""Domain and setting endpoints."""

from fastapi import APIRouter, Query, Response

from stratum.api.dependencies import SettingsManagerDep
from stratum.api.exceptions import SettingNotFoundError, SettingNotWritableError
from stratum.api.models.settings import (
    DomainResponse,
    DomainWrite,
    SettingResponse,
    SettingWrite,
)
from stratum.observability.logging import get_logger
from stratum.settings.manager import SettingsManager
from stratum.settings.models import DomainModel, SettingModel

logger = get_logger(__name__)

router = APIRouter(prefix="/domains")


async def _find_setting(
    manager: SettingsManager, domain: str, name: str
) -> SettingModel | None:
    """Resolve a single setting through the chain."""
    found = await manager.get_settings_by_name([domain], [name])
    return found[0] if found else None


@router.get("", response_model=dict[str, DomainResponse])
async def list_domains(
    manager: SettingsManagerDep,
    provider: str | None = Query(default=None, description="Resolve against one provider"),
    only_enabled: bool = Query(default=False),
) -> dict[str, DomainResponse]:
    """List domains, keeping the highest priority instance of each."""
    domains = await manager.get_domains(provider, only_enabled)
    return {name: DomainResponse.from_model(d) for name, d in domains.items()}


@router.put("/{domain}", response_model=DomainResponse)
async def update_domain(
    domain: str,
    request: DomainWrite,
    manager: SettingsManagerDep,
    provider: str | None = Query(default=None),
) -> DomainResponse:
    """Update a domain in one provider or every writable provider."""
    model = DomainModel(name=domain, **request.model_dump())
    await manager.update_domain(model, provider)
    return DomainResponse.from_model(model)


@router.delete("/{domain}", status_code=204)
async def delete_domain(
    domain: str,
    manager: SettingsManagerDep,
    provider: str | None = Query(default=None),
) -> Response:
    """Delete a domain from one provider or every writable provider."""
    await manager.delete_domain(domain, provider)
    return Response(status_code=204)


@router.get("/{domain}/settings", response_model=list[SettingResponse])
async def list_settings(
    domain: str,
    manager: SettingsManagerDep,
    tag: str | None = Query(default=None, description="Only settings carrying this tag"),
) -> list[SettingResponse]:
    """List the resolved settings of a domain."""
    if tag is None:
        settings = await manager.get_settings_by_domain([domain])
    else:
        settings = await manager.get_enabled_settings_by_tag([domain], tag)
    return [SettingResponse.from_model(s) for s in settings.values()]


@router.get("/{domain}/settings/{name}", response_model=SettingResponse)
async def get_setting(
    domain: str,
    name: str,
    manager: SettingsManagerDep,
) -> SettingResponse:
    """Resolve one setting."""
    setting = await _find_setting(manager, domain, name)
    if setting is None:
        raise SettingNotFoundError(f"Setting '{name}' not found in domain '{domain}'")
    return SettingResponse.from_model(setting)


@router.put("/{domain}/settings/{name}", response_model=SettingResponse)
async def put_setting(
    domain: str,
    name: str,
    request: SettingWrite,
    manager: SettingsManagerDep,
) -> SettingResponse:
    """Write a setting back to its provider, or to the first one that accepts it."""
    existing = await _find_setting(manager, domain, name)

    if existing is not None:
        # Providers hand out their own instances
        setting = existing.model_copy(deep=True)
    else:
        domains = await manager.get_domains()
        owner = domains.get(domain)
        setting = SettingModel(
            name=name,
            domain=owner.model_copy() if owner else DomainModel(name=domain),
        )

    setting.data_value = request.value
    if request.type is not None:
        setting.type = request.type
    if request.tags is not None:
        setting.tags = set(request.tags)
    if request.description is not None:
        setting.description = request.description
    if request.provider is not None:
        setting.provider_name = request.provider

    if not await manager.update(setting):
        raise SettingNotWritableError(f"No provider accepted setting '{name}'")

    logger.info(
        "setting_written",
        domain_name=domain,
        setting_name=name,
        provider_name=setting.provider_name,
    )
    return SettingResponse.from_model(setting)


@router.delete("/{domain}/settings/{name}", status_code=204)
async def delete_setting(
    domain: str,
    name: str,
    manager: SettingsManagerDep,
) -> Response:
    """Delete a setting from the provider it resolved from."""
    setting = await _find_setting(manager, domain, name)
    if setting is None:
        raise SettingNotFoundError(f"Setting '{name}' not found in domain '{domain}'")
    if not await manager.delete(setting):
        raise SettingNotWritableError(
            f"Provider '{setting.provider_name}' did not delete setting '{name}'"
        )
    return Response(status_code=204)
