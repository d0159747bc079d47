"""Cookie-backed settings provider.

Settings live in an authenticated, encrypted token that the client sends
back with every request. The provider keeps no server-side store: each
request hydrates a fresh state from the inbound cookie, the settings
manager reads and writes it like any other provider, and the response
gets a new cookie only if something changed.

The hosting pipeline drives the lifecycle explicitly:

    state = provider.begin_request(request.cookies)
    ...  # handle the request
    instruction = provider.end_request(state)

The state is bound to a context variable owned by the provider, so a
single provider instance can serve concurrent requests (threads or
asyncio tasks) without leaking settings between them.
"""

from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, field
from datetime import datetime
from typing import Literal

from stratum.config.models.cookie import CookieProviderConfig
from stratum.observability.logging import get_logger
from stratum.observability.metrics import COOKIE_TOKENS
from stratum.providers.simple import SimpleSettingsProvider
from stratum.providers.token import SettingsTokenCodec
from stratum.settings.exceptions import TokenError
from stratum.settings.models import DomainModel, SettingModel

logger = get_logger(__name__)


@dataclass
class CookieRequestState:
    """Settings cached for a single request."""

    settings: list[SettingModel] = field(default_factory=list)
    changed: bool = False
    had_cookie: bool = False
    main_request: bool = True
    nested: int = 0
    binding: Token["CookieRequestState | None"] | None = field(default=None, repr=False)


@dataclass(frozen=True)
class CookieInstruction:
    """What the response should do with the settings cookie."""

    action: Literal["set", "clear"]
    name: str
    value: str | None = None
    max_age: int | None = None
    path: str = "/"
    domain: str | None = None
    secure: bool = False
    http_only: bool = True
    same_site: str = "lax"


@dataclass
class CookieRequestScope:
    """Handle yielded by CookieSettingsProvider.request_scope."""

    state: CookieRequestState
    instruction: CookieInstruction | None = None


class CookieSettingsProvider(SimpleSettingsProvider):
    """Writable provider whose settings travel in a signed, encrypted cookie.

    Outside of a request scope the provider is empty and read-only, so
    the settings manager skips it for writes.
    """

    def __init__(
        self,
        config: CookieProviderConfig,
        *,
        codec: SettingsTokenCodec | None = None,
    ) -> None:
        """Initialize provider.

        Args:
            config: Cookie and token configuration
            codec: Token codec; built from config when omitted

        Raises:
            ValueError: If no codec is given and the key material is unset
        """
        super().__init__(read_only=False)

        if codec is None:
            if config.symmetric_key_material is None:
                raise ValueError(
                    "Cookie settings provider requires symmetric_key_material"
                )
            codec = SettingsTokenCodec(
                config.symmetric_key_material.get_secret_value(),
                issuer=config.issuer,
                subject=config.subject,
                ttl=config.ttl,
                footer=config.footer,
            )

        self._config = config
        self._codec = codec
        self._state: ContextVar[CookieRequestState | None] = ContextVar(
            f"cookie_settings_state_{id(self)}", default=None
        )

    @property
    def cookie_name(self) -> str:
        return self._config.cookie_name

    @property
    def current_state(self) -> CookieRequestState | None:
        """State bound to the current request, if any."""
        return self._state.get()

    def _settings_list(self) -> list[SettingModel]:
        state = self._state.get()
        if state is None:
            return []
        return state.settings

    def is_read_only(self) -> bool:
        return self._state.get() is None

    def _mark_changed(self, changed: bool) -> bool:
        state = self._state.get()
        if changed and state is not None:
            state.changed = True
        return changed

    async def save(self, setting: SettingModel) -> bool:
        return self._mark_changed(await super().save(setting))

    async def delete(self, setting: SettingModel) -> bool:
        return self._mark_changed(await super().delete(setting))

    async def update_domain(self, domain: DomainModel) -> bool:
        return self._mark_changed(await super().update_domain(domain))

    async def delete_domain(self, domain_name: str) -> bool:
        return self._mark_changed(await super().delete_domain(domain_name))

    def begin_request(
        self,
        cookies: Mapping[str, str],
        *,
        main_request: bool = True,
        now: datetime | None = None,
    ) -> CookieRequestState:
        """Start a request scope and hydrate settings from the inbound cookie.

        Sub-requests share the state of the request that is already active
        and never read the cookie themselves.

        Args:
            cookies: Inbound request cookies
            main_request: False for sub-requests
            now: Clock override for token validation

        Returns:
            The state bound for this request
        """
        if not main_request:
            active = self._state.get()
            if active is not None:
                active.nested += 1
                return active
            state = CookieRequestState(main_request=False)
            state.binding = self._state.set(state)
            return state

        raw_token = cookies.get(self._config.cookie_name)
        state = CookieRequestState(had_cookie=raw_token is not None)
        if raw_token is not None:
            state.settings = self._hydrate(raw_token, now)

        state.binding = self._state.set(state)
        return state

    def end_request(
        self,
        state: CookieRequestState,
        *,
        now: datetime | None = None,
    ) -> CookieInstruction | None:
        """Finish a request scope and decide what to do with the cookie.

        Returns:
            A set instruction carrying a fresh token, a clear instruction
            when the cache was emptied, or None when the cookie should be
            left untouched.
        """
        if state.nested:
            state.nested -= 1
            return None

        self._unbind(state)

        if not state.main_request or not state.changed:
            return None

        if not state.settings:
            if not state.had_cookie:
                return None
            logger.info(
                "cookie_cleared",
                cookie_name=self._config.cookie_name,
                path=self._config.path,
            )
            COOKIE_TOKENS.labels(outcome="cleared").inc()
            return self._instruction("clear")

        value = self._codec.encode(state.settings, now)
        logger.info(
            "cookie_written",
            cookie_name=self._config.cookie_name,
            setting_count=len(state.settings),
            ttl=self._config.ttl,
        )
        COOKIE_TOKENS.labels(outcome="issued").inc()
        return self._instruction("set", value=value, max_age=self._config.ttl)

    def discard_request(self, state: CookieRequestState) -> None:
        """Abandon a request scope without touching the cookie."""
        if state.nested:
            state.nested -= 1
            return
        self._unbind(state)

    @contextmanager
    def request_scope(
        self,
        cookies: Mapping[str, str],
        *,
        main_request: bool = True,
        now: datetime | None = None,
    ) -> Iterator[CookieRequestScope]:
        """Run a block inside a request scope.

        The cookie instruction is available on the yielded scope once the
        block exits normally.
        """
        scope = CookieRequestScope(
            state=self.begin_request(cookies, main_request=main_request, now=now)
        )
        try:
            yield scope
        except BaseException:
            self.discard_request(scope.state)
            raise
        scope.instruction = self.end_request(scope.state, now=now)

    def _hydrate(self, raw_token: str, now: datetime | None) -> list[SettingModel]:
        try:
            settings = self._codec.decode(raw_token, now)
        except TokenError as e:
            logger.warning(
                "cookie_token_rejected",
                cookie_name=self._config.cookie_name,
                error=e.message,
                error_type=type(e).__name__,
            )
            COOKIE_TOKENS.labels(outcome="rejected").inc()
            return []

        COOKIE_TOKENS.labels(outcome="accepted").inc()
        logger.debug(
            "cookie_token_accepted",
            cookie_name=self._config.cookie_name,
            setting_count=len(settings),
        )
        return settings

    def _unbind(self, state: CookieRequestState) -> None:
        if state.binding is not None:
            self._state.reset(state.binding)
            state.binding = None

    def _instruction(
        self,
        action: Literal["set", "clear"],
        *,
        value: str | None = None,
        max_age: int | None = None,
    ) -> CookieInstruction:
        return CookieInstruction(
            action=action,
            name=self._config.cookie_name,
            value=value,
            max_age=max_age,
            path=self._config.path,
            domain=self._config.domain,
            secure=self._config.secure,
            http_only=self._config.http_only,
            same_site=self._config.same_site,
        )
