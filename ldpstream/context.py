"""Node Context — binds one store node to a lazily produced triple stream.

Projecting a node eagerly resolves its identity (the stream topic) and binds
the store session, then schedules each requested generator as a deferred
source. No node structure is read until the stream is iterated.

A generator is a plain function ``generator(ctx) -> Iterable[Triple]``.
Callers pick which generators to run; there is no subclass hierarchy.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import partial
from typing import Callable, Iterable, Iterator

from rdflib import URIRef

from .errors import store_access
from .store import ContentNode, ContentSession, IdentifierTranslator
from .stream import TripleStream
from .types import Triple

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NodeContext:
    """Everything a generator needs to describe one node."""
    node: ContentNode
    translator: IdentifierTranslator
    topic: URIRef
    session: ContentSession
    # identifiers of nodes already being described higher up this projection
    visited: frozenset[str] = frozenset()

    def __repr__(self) -> str:
        return f"NodeContext({self.topic.n3()})"


Generator = Callable[[NodeContext], Iterable[Triple]]


def _evaluate(generator: Generator, ctx: NodeContext) -> Iterator[Triple]:
    name = getattr(generator, "__name__", None) or repr(generator)
    with store_access(f"{name} for {ctx.topic}"):
        yield from generator(ctx)


def project(
    node: ContentNode | None,
    translator: IdentifierTranslator,
    *generators: Generator,
    visited: frozenset[str] = frozenset(),
) -> TripleStream:
    """Build the stream of triples the given generators produce for ``node``.

    Generators run in the order given, and only when the stream is consumed.
    A missing node yields an empty stream.
    """
    if node is None:
        return TripleStream.empty()

    with store_access("resolving identity"):
        topic = translator.translate(node)
        session = node.session

    ctx = NodeContext(node=node, translator=translator, topic=topic,
                      session=session, visited=visited)
    stream = TripleStream(topic=topic, session=session)
    for generator in generators:
        stream.concat(partial(_evaluate, generator, ctx))
    logger.debug("Scheduled %d generators for %s", len(generators), topic)
    return stream
