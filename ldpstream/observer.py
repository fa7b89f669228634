"""Store change notifications and their coalescing into repository events.

The store reports low-level changes: a node added, a property changed, and
so on, each with its own path. A single client operation usually produces
several of them. ``coalesce`` folds the notifications that concern the same
resource into one ``RepositoryEvent``, keyed by the resource path (property
notifications are attributed to the node that owns the property).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable

from rdflib import URIRef

from .config import get_settings

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Store change codes."""
    NODE_ADDED = 1
    NODE_REMOVED = 2
    PROPERTY_ADDED = 4
    PROPERTY_REMOVED = 8
    PROPERTY_CHANGED = 16
    NODE_MOVED = 32
    PERSIST = 64

    @property
    def label(self) -> str:
        return self.name.lower().replace("_", " ")

    def uri(self, namespace: str | None = None) -> URIRef:
        return URIRef((namespace or get_settings().repository_namespace) + self.name)


PROPERTY_EVENT_TYPES = frozenset({
    EventType.PROPERTY_ADDED,
    EventType.PROPERTY_CHANGED,
    EventType.PROPERTY_REMOVED,
})


# ---------------------------------------------------------------------------
# Raw notifications
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class StoreEvent:
    """One change notification as the store emits it."""
    type: EventType
    path: str
    identifier: str = ""
    timestamp: int = 0  # milliseconds since the epoch
    user_id: str = ""
    user_data: str = ""
    info: dict[Any, Any] = field(default_factory=dict, hash=False, compare=False)

    @property
    def is_property_event(self) -> bool:
        return self.type in PROPERTY_EVENT_TYPES

    def __repr__(self) -> str:
        return f"StoreEvent({self.type.label} {self.path})"


def _parent_path(path: str) -> str:
    parent = path[:path.rfind("/")]
    return parent or "/"


# ---------------------------------------------------------------------------
# Coalesced events
# ---------------------------------------------------------------------------

@dataclass
class RepositoryEvent:
    """A semantic event built from one or more store notifications.

    Identity, timestamp and user come from the first notification; the
    change types and property names accumulate across all of them.
    """
    event: StoreEvent
    types: set[EventType] = field(default_factory=set)
    properties: set[str] = field(default_factory=set)

    def __post_init__(self) -> None:
        if self.event is None:
            raise ValueError("A RepositoryEvent needs a store event")
        self.types.add(self.event.type)

    @classmethod
    def from_event(cls, other: RepositoryEvent) -> RepositoryEvent:
        """Copy: same underlying notification and types, no properties."""
        return cls(event=other.event, types=set(other.types))

    def add_type(self, event_type: EventType) -> RepositoryEvent:
        self.types.add(event_type)
        return self

    def add_property(self, name: str) -> RepositoryEvent:
        self.properties.add(name)
        return self

    @property
    def path(self) -> str:
        """Path of the changed node; the owning node for property changes."""
        if self.event.is_property_event:
            return _parent_path(self.event.path)
        return self.event.path

    @property
    def identifier(self) -> str:
        return self.event.identifier

    @property
    def timestamp(self) -> int:
        return self.event.timestamp

    @property
    def user_id(self) -> str:
        return self.event.user_id

    @property
    def user_data(self) -> str:
        return self.event.user_data

    @property
    def info(self) -> dict[Any, Any]:
        return dict(self.event.info)

    def __repr__(self) -> str:
        types = ",".join(t.label for t in sorted(self.types, key=lambda t: t.value))
        props = ",".join(sorted(self.properties))
        return (f"RepositoryEvent(types=[{types}], properties=[{props}], "
                f"path={self.path}, date={self.timestamp})")


def coalesce(events: Iterable[StoreEvent]) -> list[RepositoryEvent]:
    """Fold notifications into one event per resource path.

    Notifications with different change types for the same path end up in
    one event with several types. Output follows first-seen order.
    """
    merged: dict[str, RepositoryEvent] = {}
    count = 0
    for raw in events:
        count += 1
        path = _parent_path(raw.path) if raw.is_property_event else raw.path
        current = merged.get(path)
        if current is None:
            current = merged[path] = RepositoryEvent(event=raw)
        else:
            current.add_type(raw.type)
        if raw.is_property_event:
            current.add_property(raw.path.rsplit("/", 1)[-1])
    logger.debug("Coalesced %d store notifications into %d events", count, len(merged))
    return list(merged.values())
