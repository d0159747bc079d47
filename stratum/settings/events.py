"""Change notifications for settings and domains.

The settings manager hands every change to an EventDispatcher. The
in-memory dispatcher is enough for a single process; anything that needs
to fan out further (webhooks, message buses) implements the same
interface.
"""

from abc import ABC, abstractmethod
from collections import deque
from collections.abc import Callable
from datetime import UTC, datetime

from pydantic import BaseModel, Field

from stratum.observability.logging import get_logger
from stratum.settings.models import DomainModel, SettingModel, SettingsEventType

logger = get_logger(__name__)

EventHandler = Callable[["SettingsEvent"], None]


def utc_now() -> datetime:
    """Return current UTC time."""
    return datetime.now(UTC)


class SettingsEvent(BaseModel):
    """A single change notification.

    Setting events carry ``setting``; domain events carry ``domain``.
    """

    type: SettingsEventType = Field(..., description="Event type")
    setting: SettingModel | None = Field(default=None)
    domain: DomainModel | None = Field(default=None)
    provider_name: str | None = Field(default=None, description="Provider involved, if any")
    timestamp: datetime = Field(default_factory=utc_now)

    @property
    def category(self) -> str:
        """Extract category from event type. Example: 'setting.updated' → 'setting'"""
        return self.type.value.split(".")[0]

    def matches_pattern(self, pattern: str) -> bool:
        """Check if event matches pattern. Supports '*', 'category.*', 'category.name'"""
        if pattern == "*":
            return True
        if pattern.endswith(".*"):
            return self.category == pattern[:-2]
        return self.type.value == pattern


class EventDispatcher(ABC):
    """Receives change notifications from the settings manager."""

    @abstractmethod
    def dispatch(self, event: SettingsEvent) -> None:
        """Deliver an event to interested parties."""
        pass


class InMemoryEventDispatcher(EventDispatcher):
    """Synchronous in-process dispatcher.

    Handlers subscribe with a pattern ('*', 'setting.*', 'domain.deleted').
    Recently dispatched events are kept for inspection.
    """

    def __init__(self, history_size: int = 100) -> None:
        self._handlers: list[tuple[str, EventHandler]] = []
        self._history: deque[SettingsEvent] = deque(maxlen=history_size)

    def subscribe(self, pattern: str, handler: EventHandler) -> None:
        """Register a handler for events matching pattern."""
        self._handlers.append((pattern, handler))

    def unsubscribe(self, handler: EventHandler) -> None:
        """Remove every registration of handler."""
        self._handlers = [(p, h) for p, h in self._handlers if h is not handler]

    @property
    def history(self) -> list[SettingsEvent]:
        """Events dispatched so far, oldest first."""
        return list(self._history)

    def dispatch(self, event: SettingsEvent) -> None:
        self._history.append(event)

        for pattern, handler in list(self._handlers):
            if not event.matches_pattern(pattern):
                continue
            try:
                handler(event)
            except Exception as e:
                logger.warning(
                    "event_handler_failed",
                    event_type=event.type.value,
                    handler=getattr(handler, "__name__", repr(handler)),
                    error=str(e),
                    error_type=type(e).__name__,
                )
