"""Tests for TripleStream: laziness, concatenation order, topic and reuse."""

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from rdflib import Graph, Literal, URIRef

from ldpstream.stream import TripleStream
from ldpstream.types import LDP, Triple

A = URIRef("http://example.org/a")
B = URIRef("http://example.org/b")
P = URIRef("http://example.org/p")


def _triple(obj: str) -> Triple:
    return Triple(A, P, Literal(obj))


class TestLaziness:
    def test_deferred_source_not_called_on_concat(self):
        calls = []

        def source():
            calls.append(1)
            return [_triple("x")]

        stream = TripleStream(topic=A)
        stream.concat(source)
        assert calls == []

        assert list(stream) == [_triple("x")]
        assert calls == [1]

    def test_later_sources_wait_for_earlier_ones(self):
        calls = []

        def first():
            calls.append("first")
            yield _triple("1")

        def second():
            calls.append("second")
            yield _triple("2")

        stream = TripleStream(first, second)
        it = iter(stream)
        next(it)
        assert calls == ["first"]
        next(it)
        assert calls == ["first", "second"]

    def test_deferred_sources_rerun_on_each_iteration(self):
        calls = []

        def source():
            calls.append(1)
            return [_triple("x")]

        stream = TripleStream(source)
        assert list(stream) == list(stream)
        assert len(calls) == 2


class TestConcat:
    def test_concatenation_order_preserved(self):
        stream = TripleStream.of(_triple("1"), topic=A)
        stream.concat([_triple("2"), _triple("3")])
        stream.concat(TripleStream.of(_triple("4")))
        assert [t.object for t in stream] == [Literal(str(i)) for i in range(1, 5)]

    def test_duplicates_are_kept(self):
        stream = TripleStream.of(_triple("x")).concat([_triple("x")])
        assert len(list(stream)) == 2

    def test_concat_returns_self(self):
        stream = TripleStream()
        assert stream.concat([]) is stream

    def test_self_concat_rejected(self):
        stream = TripleStream()
        with pytest.raises(ValueError, match="itself"):
            stream.concat(stream)

    def test_nested_stream_evaluated_lazily(self):
        calls = []

        def source():
            calls.append(1)
            return [_triple("i")]

        inner = TripleStream(source, topic=B)
        outer = TripleStream(topic=A).concat(inner)
        assert calls == []
        assert list(outer) == [_triple("i")]


class TestTopic:
    def test_topic_is_kept(self):
        assert TripleStream(topic=A).topic == A

    def test_topic_does_not_filter(self):
        stream = TripleStream.of(Triple(B, P, A), topic=A)
        assert list(stream) == [Triple(B, P, A)]

    def test_empty(self):
        stream = TripleStream.empty(topic=A)
        assert stream.topic == A
        assert list(stream) == []


class TestToGraph:
    def test_materializes_all_triples(self):
        stream = TripleStream.of(_triple("1"), _triple("2"), _triple("1"))
        graph = stream.to_graph()
        assert isinstance(graph, Graph)
        assert len(graph) == 2
        assert (A, P, Literal("1")) in graph

    def test_binds_prefixes(self):
        stream = TripleStream.of(Triple(A, LDP.member, B))
        graph = stream.to_graph({"ex": "http://example.org/"})
        turtle = graph.serialize(format="turtle")
        assert "ldp:member" in turtle
        assert "ex:a" in turtle
