"""Domain event dispatch."""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, DefaultDict, Iterable, Mapping

logger = logging.getLogger(__name__)

EventPayload = Mapping[str, Any]
EventListener = Callable[[EventPayload], None]

KINGDOM_RANDOMIZED = "kingdom.randomized"
KINGDOM_RANDOMIZE_FAILED = "kingdom.randomize_failed"
SELECTION_UPDATED = "selection.updated"


class RandomizeKind(str, Enum):
    FULL_KINGDOM = "full_kingdom"
    PARTIAL_SUPPLY = "partial_supply"
    ADDONS = "addons"
    LOAD_FULL_KINGDOM = "load_full_kingdom"
    LOAD_PARTIAL_KINGDOM = "load_partial_kingdom"


class FailureKind(str, Enum):
    UNSATISFIABLE = "unsatisfiable"
    INVALID_OPTIONS = "invalid_options"


@dataclass(slots=True)
class Event:
    name: str
    payload: EventPayload


class EventBus:
    """Fire-and-forget pub-sub; a failing listener never reaches the publisher."""

    def __init__(self) -> None:
        self._listeners: DefaultDict[str, list[EventListener]] = defaultdict(list)

    def subscribe(self, event_name: str, listener: EventListener) -> None:
        self._listeners[event_name].append(listener)

    def publish(self, event_name: str, payload: EventPayload) -> None:
        for listener in list(self._listeners.get(event_name, ())):
            try:
                listener(payload)
            except Exception:
                logger.exception("Listener for '%s' failed", event_name)

    def clear(self) -> None:
        self._listeners.clear()

    def listeners(self, event_name: str) -> Iterable[EventListener]:
        return tuple(self._listeners.get(event_name, ()))


class EventRecorder:
    """Listener that keeps every event it receives, handy for tests and diagnostics."""

    def __init__(self, bus: EventBus, *event_names: str) -> None:
        self.events: list[Event] = []
        for name in event_names or (KINGDOM_RANDOMIZED, KINGDOM_RANDOMIZE_FAILED, SELECTION_UPDATED):
            bus.subscribe(name, self._make_listener(name))

    def _make_listener(self, name: str) -> EventListener:
        def listener(payload: EventPayload) -> None:
            self.events.append(Event(name, payload))

        return listener

    def names(self) -> list[str]:
        return [event.name for event in self.events]
