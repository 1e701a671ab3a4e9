# src/choropleth/layers/events.py
"""
Explicit event channel between the engine, the layer registry and the UI.
"""

from enum import Enum
from typing import Any, Callable, Dict, List, Protocol

from loguru import logger


class Events(Enum):
    LAYER_REMOVED = "layer:removed"
    LAYER_STYLE_CHANGED = "layer:style-changed"
    LEGEND_UPDATED = "legend:updated"
    LEGEND_REMOVED = "legend:removed"


EventCallback = Callable[[Dict[str, Any]], None]


class EventSink(Protocol):
    def emit(self, event: Events, payload: Dict[str, Any]) -> None: ...


class NullEventSink:
    """Sink that drops every event."""

    def emit(self, event: Events, payload: Dict[str, Any]) -> None:
        pass


class EventBus:
    """Synchronous publish/subscribe, callbacks run in subscription order."""

    def __init__(self):
        self._subscribers: Dict[Events, List[EventCallback]] = {}

    def subscribe(self, event: Events, callback: EventCallback) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def unsubscribe(self, event: Events, callback: EventCallback) -> None:
        callbacks = self._subscribers.get(event, [])
        if callback in callbacks:
            callbacks.remove(callback)

    def emit(self, event: Events, payload: Dict[str, Any]) -> None:
        callbacks = list(self._subscribers.get(event, []))
        logger.debug(f"Event {event.value} -> {len(callbacks)} subscriber(s)")
        for callback in callbacks:
            callback(payload)
