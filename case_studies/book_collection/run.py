"""Book Collection — end-to-end projection demonstration.

Projects the sample store through each generator set in turn and prints
Turtle, then shows schema triples for a node type and the events a batch of
store notifications coalesces into.

Run with:  python -m case_studies.book_collection.run
"""

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "../.."))

import logging

from ldpstream.config import get_settings
from ldpstream.containers import ldp_container_triples
from ldpstream.context import project
from ldpstream.definitions import node_type_triples
from ldpstream.generators import hash_triples, reference_triples
from ldpstream.logging_config import setup_logging
from ldpstream.messaging import EventSink, publish_events
from ldpstream.observer import EventType, StoreEvent
from ldpstream.projection import describe
from ldpstream.stream import TripleStream

from .domain import EX, book_node_type, build_repository

logger = logging.getLogger(__name__)


def print_header(title: str) -> None:
    print(f"\n{'=' * 60}")
    print(f"  {title}")
    print(f"{'=' * 60}")


def print_stream(stream: TripleStream, namespaces) -> None:
    turtle = stream.to_graph(namespaces).serialize(format="turtle")
    for line in turtle.strip().split("\n"):
        print(f"  {line}")


class PrintingSink(EventSink):
    def publish(self, event, headers):
        print(f"\n  {event!r}")
        for name, value in headers.items():
            print(f"    {name.rsplit('#', 1)[-1]:12} {value}")


def run_projection() -> None:
    repo, translator = build_repository()
    namespaces = {"ex": EX, "dc": repo.namespaces["dc"], "fedora": repo.namespaces["fedora"]}

    print_header("Full description of /collection/moby")
    moby = repo.get_node("/collection/moby")
    print_stream(describe(moby, translator), namespaces)

    print_header("Basic container membership of /collection")
    print_stream(project(repo.get_node("/collection"), translator, ldp_container_triples),
                 namespaces)

    print_header("Fragments of /collection/moby")
    print_stream(project(moby, translator, hash_triples), namespaces)

    print_header("Inbound references to /people/melville")
    print_stream(project(repo.get_node("/people/melville"), translator, reference_triples),
                 namespaces)

    print_header("Schema triples for ex:Book")
    print_stream(node_type_triples(book_node_type(), repo.namespaces), namespaces)


def run_events() -> None:
    print_header("Coalesced store notifications")
    notifications = [
        StoreEvent(EventType.NODE_ADDED, "/collection/dracula", "id-1", 1000, "ann"),
        StoreEvent(EventType.PROPERTY_ADDED, "/collection/dracula/dc:title", "id-1", 1000, "ann"),
        StoreEvent(EventType.PROPERTY_ADDED, "/collection/dracula/ex:pages", "id-1", 1000, "ann"),
        StoreEvent(EventType.PROPERTY_CHANGED, "/collection/moby/dc:title", "id-2", 1001, "bob"),
    ]
    published = publish_events(notifications, PrintingSink())
    logger.info("%d notifications became %d events", len(notifications), len(published))


if __name__ == "__main__":
    setup_logging(get_settings().log_level)
    run_projection()
    run_events()
