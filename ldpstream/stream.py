"""Triple Stream — a lazy, composable sequence of triples.

A stream carries a topic (the subject it primarily describes) and an ordered
list of sources. Sources are only evaluated when the stream is iterated, in
the order they were concatenated. Deferred sources (zero-argument callables)
are re-invoked on every iteration, so a stream built from them can be
consumed again to recompute its triples.

No deduplication is performed; duplicates across sources are preserved.
"""

from __future__ import annotations

from typing import Callable, Iterable, Iterator, Mapping, Union

from rdflib import Graph
from rdflib.term import Node

from .types import LDP, Triple

Source = Union["TripleStream", Iterable[Triple], Callable[[], Iterable[Triple]]]


class TripleStream:
    """An ordered, lazily evaluated sequence of triples about a topic."""

    def __init__(self, *sources: Source, topic: Node | None = None, session=None):
        self.topic = topic
        # store session the stream's generators read through, if any
        self.session = session
        self._sources: list[Source] = []
        for source in sources:
            self.concat(source)

    @classmethod
    def of(cls, *triples: Triple, topic: Node | None = None) -> TripleStream:
        return cls(tuple(triples), topic=topic)

    @classmethod
    def empty(cls, topic: Node | None = None) -> TripleStream:
        return cls(topic=topic)

    def concat(self, source: Source) -> TripleStream:
        """Append a source without evaluating it or anything already held."""
        if source is self:
            raise ValueError("Cannot concatenate a stream onto itself")
        self._sources.append(source)
        return self

    def __iter__(self) -> Iterator[Triple]:
        for source in self._sources:
            if callable(source) and not isinstance(source, TripleStream):
                source = source()
            yield from source

    def to_graph(self, namespaces: Mapping[str, str] | None = None) -> Graph:
        """Materialize into an rdflib Graph for serialization."""
        graph = Graph()
        graph.bind("ldp", LDP)
        for prefix, uri in (namespaces or {}).items():
            graph.bind(prefix, uri)
        for triple in self:
            graph.add(triple)
        return graph

    def __repr__(self) -> str:
        topic = self.topic.n3() if self.topic is not None else "-"
        return f"TripleStream(topic={topic}, {len(self._sources)} sources)"
