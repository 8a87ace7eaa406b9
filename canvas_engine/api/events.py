"""Public event bus API contracts."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol, TypeVar

TEvent = TypeVar("TEvent")


@dataclass(frozen=True, slots=True)
class Subscription:
    """Opaque subscription token."""

    id: int


@dataclass(frozen=True, slots=True)
class CameraChanged:
    """Published after every camera mutation."""

    scale: float
    translation_x: float
    translation_y: float
    width: float
    height: float
    reason: str


@dataclass(frozen=True, slots=True)
class LayerDrawn:
    """Published after a layer was drawn on the surface."""

    layer: str
    frame_index: int


class EventBus(Protocol):
    """Public in-process pub/sub contract."""

    def subscribe(
        self,
        event_type: type[TEvent],
        handler: Callable[[TEvent], None],
    ) -> Subscription:
        """Subscribe handler for event type."""

    def unsubscribe(self, subscription: Subscription) -> None:
        """Unsubscribe token."""

    def publish(self, event: object) -> int:
        """Publish event and return invocation count."""


def create_event_bus() -> EventBus:
    """Create default event bus implementation."""
    from canvas_engine.runtime.events import RuntimeEventBus

    return RuntimeEventBus()


__all__ = ["CameraChanged", "EventBus", "LayerDrawn", "Subscription", "create_event_bus"]
