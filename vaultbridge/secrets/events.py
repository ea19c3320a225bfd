"""Lifecycle events and publishers."""

from dataclasses import dataclass
from typing import Optional, Protocol

from vaultbridge.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class MetadataCreatedEvent:
    """Published when a factory produces metadata for a descriptor."""

    name: str
    path: str


@dataclass(frozen=True)
class RefreshEvent:
    """Published when rotated credentials require consumers to refresh."""

    name: str
    path: str
    reason: Optional[str] = None


class EventPublisher(Protocol):
    """Sink supplied by the host application."""

    def publish(self, event) -> None:
        ...


class NullEventPublisher:
    """Discards every event."""

    def publish(self, event) -> None:
        pass


class LoggingEventPublisher:
    """Writes every event to the log at INFO level."""

    def __init__(self, log=None):
        self.log = log or logger

    def publish(self, event) -> None:
        self.log.info(f"{type(event).__name__}: {event}")
