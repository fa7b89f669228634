"""Tests for Node Context projection and the descriptive generators."""

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from collections import Counter
from functools import partial

import pytest
from rdflib import Literal, Namespace, RDF, URIRef

from ldpstream.context import project
from ldpstream.errors import RepositoryError, RepositoryRuntimeError
from ldpstream.generators import (
    blank_node_triples,
    child_triples,
    property_triples,
    type_triples,
)
from ldpstream.memory import MemoryRepository, PathTranslator
from ldpstream.projection import describe
from ldpstream.types import BLANK_NODE, LDP, REPOSITORY, PropertyType, Triple

BASE = "http://localhost/rest"
EX = Namespace("http://example.org/ns#")
DC = Namespace("http://purl.org/dc/elements/1.1/")


def _store():
    repo = MemoryRepository({"ex": str(EX)})
    return repo, PathTranslator(repo, BASE)


def _fail(*args, **kwargs):
    raise RepositoryError("store unavailable")


class TestProjection:
    def test_topic_is_translated_identity(self):
        repo, translator = _store()
        node = repo.add_node("/books", "fedora:Container")
        stream = project(node, translator, type_triples)
        assert stream.topic == translator.translate(node)
        assert stream.topic == URIRef(f"{BASE}/books")

    def test_session_bound_from_node(self):
        repo, translator = _store()
        node = repo.add_node("/books")
        assert project(node, translator).session is repo

    def test_absent_node_yields_empty_stream(self):
        _, translator = _store()
        stream = project(None, translator, type_triples, property_triples)
        assert stream.topic is None
        assert list(stream) == []

    def test_no_store_reads_before_consumption(self):
        repo, translator = _store()
        node = repo.add_node("/books")
        node.node_types = _fail
        node.properties = _fail
        stream = project(node, translator, type_triples, property_triples)
        assert stream.topic == URIRef(f"{BASE}/books")

    def test_store_failure_surfaces_on_iteration(self):
        repo, translator = _store()
        node = repo.add_node("/books")
        node.node_types = _fail
        stream = project(node, translator, type_triples)
        with pytest.raises(RepositoryRuntimeError, match="store unavailable") as info:
            list(stream)
        assert isinstance(info.value.__cause__, RepositoryError)

    def test_generators_run_in_given_order(self):
        repo, translator = _store()
        node = repo.add_node("/books", "ex:Shelf")
        node.set_property("ex:label", "Books")
        triples = list(project(node, translator, property_triples, type_triples))
        assert [t.predicate for t in triples] == [EX.label, RDF.type]

    def test_wrapped_and_callable_generators(self):
        repo, translator = _store()
        node = repo.add_node("/books", "ex:Shelf")

        class Failing:
            def __call__(self, ctx):
                raise RepositoryError("store unavailable")

        triples = list(project(node, translator, partial(type_triples)))
        assert triples == [Triple(URIRef(f"{BASE}/books"), RDF.type, EX.Shelf)]
        with pytest.raises(RepositoryRuntimeError, match="store unavailable"):
            list(project(node, translator, Failing()))

    def test_projection_is_repeatable(self):
        repo, translator = _store()
        node = repo.add_node("/books", "ldp:BasicContainer", "fedora:Container")
        node.set_property("dc:title", "Books", "Livres")
        node.add_child("a")
        node.add_child("b")
        first = Counter(describe(node, translator))
        second = Counter(describe(node, translator))
        assert first == second
        assert sum(first.values()) > 0


class TestTypeTriples:
    def test_namespaced_types(self):
        repo, translator = _store()
        node = repo.add_node("/books", "fedora:Container", "ldp:BasicContainer")
        triples = set(project(node, translator, type_triples))
        topic = translator.translate(node)
        assert triples == {
            Triple(topic, RDF.type, REPOSITORY.Container),
            Triple(topic, RDF.type, LDP.BasicContainer),
        }

    def test_internal_and_unregistered_types_skipped(self):
        repo, translator = _store()
        node = repo.add_node("/books", "nt:folder", "mix:referenceable", "zz:Unknown")
        assert list(project(node, translator, type_triples)) == []


class TestPropertyTriples:
    def test_one_triple_per_value(self):
        repo, translator = _store()
        node = repo.add_node("/books")
        node.set_property("dc:title", "Books", "Livres")
        node.set_property("ex:count", 3, type=PropertyType.LONG)
        triples = list(project(node, translator, property_triples))
        objects = {t.object for t in triples if t.predicate == DC.title}
        assert objects == {Literal("Books"), Literal("Livres")}
        assert len(triples) == 3

    def test_internal_properties_skipped(self):
        repo, translator = _store()
        node = repo.add_node("/books")
        node.set_property("jcr:createdBy", "admin")
        node.set_property("plainname", "x")
        assert list(project(node, translator, property_triples)) == []

    def test_reference_property_points_at_target_uri(self):
        repo, translator = _store()
        target = repo.add_node("/authors/ann")
        node = repo.add_node("/books/one")
        node.set_property("ex:author", target, type=PropertyType.REFERENCE)
        triples = list(project(node, translator, property_triples))
        assert triples == [Triple(translator.translate(node), EX.author,
                                  URIRef(f"{BASE}/authors/ann"))]


class TestChildTriples:
    def test_contains_visible_children(self):
        repo, translator = _store()
        node = repo.add_node("/books")
        node.add_child("a")
        node.add_child("b")
        node.add_child("#")
        node.add_child("jcr:content")
        triples = list(project(node, translator, child_triples))
        assert [t.object for t in triples] == [
            URIRef(f"{BASE}/books/a"),
            URIRef(f"{BASE}/books/b"),
        ]
        assert all(t.predicate == LDP.contains for t in triples)


class TestBlankNodeTriples:
    def _with_blank(self):
        repo, translator = _store()
        node = repo.add_node("/books/one")
        blank = repo.add_node("/.well-known/genid/b1", BLANK_NODE, "ex:Note")
        blank.set_property("dc:description", "first edition")
        node.set_property("ex:note", blank, type=PropertyType.REFERENCE)
        return repo, translator, node, blank

    def test_referenced_blank_node_described(self):
        repo, translator, node, blank = self._with_blank()
        triples = set(project(node, translator, blank_node_triples))
        blank_uri = translator.translate(blank)
        assert Triple(blank_uri, DC.description, Literal("first edition")) in triples
        assert Triple(blank_uri, RDF.type, EX.Note) in triples

    def test_non_blank_targets_ignored(self):
        repo, translator = _store()
        node = repo.add_node("/books/one")
        other = repo.add_node("/authors/ann", "ex:Person")
        node.set_property("ex:author", other, type=PropertyType.REFERENCE)
        assert list(project(node, translator, blank_node_triples)) == []

    def test_blank_node_cycle_terminates(self):
        repo, translator, node, blank = self._with_blank()
        second = repo.add_node("/.well-known/genid/b2", BLANK_NODE)
        blank.set_property("ex:next", second, type=PropertyType.REFERENCE)
        second.set_property("ex:next", blank, type=PropertyType.REFERENCE)
        triples = list(project(node, translator, blank_node_triples))
        subjects = Counter(t.subject for t in triples if t.predicate == EX.next)
        assert subjects[translator.translate(blank)] == 1
        assert subjects[translator.translate(second)] == 1
