"""Message headers for publishing repository events.

Publication itself (the message bus) lives outside this package; it is
reached through an ``EventSink``.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable

from .config import get_settings
from .observer import RepositoryEvent, StoreEvent, coalesce

logger = logging.getLogger(__name__)

TIMESTAMP_HEADER = "timestamp"
IDENTIFIER_HEADER = "identifier"
EVENT_TYPE_HEADER = "eventType"


def header_name(local_name: str, namespace: str | None = None) -> str:
    return (namespace or get_settings().repository_namespace) + local_name


def message_headers(event: RepositoryEvent, namespace: str | None = None) -> dict[str, Any]:
    """Timestamp, identifier (the event path) and event-type URIs."""
    namespace = namespace or get_settings().repository_namespace
    event_types = sorted(event.types, key=lambda t: t.value)
    return {
        header_name(TIMESTAMP_HEADER, namespace): event.timestamp,
        header_name(IDENTIFIER_HEADER, namespace): event.path,
        header_name(EVENT_TYPE_HEADER, namespace): ",".join(str(t.uri(namespace)) for t in event_types),
    }


class EventSink:
    """Destination for events, e.g. a message-queue producer."""

    def publish(self, event: RepositoryEvent, headers: dict[str, Any]) -> None:
        raise NotImplementedError


def publish_events(events: Iterable[StoreEvent], sink: EventSink) -> list[RepositoryEvent]:
    """Coalesce store notifications and hand each event to ``sink``."""
    published = coalesce(events)
    for event in published:
        logger.debug("Publishing %r", event)
        sink.publish(event, message_headers(event))
    return published
