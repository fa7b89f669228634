"""Tests for node type and property definition triples."""

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from rdflib import Literal, Namespace, RDF, RDFS, XSD

from ldpstream.definitions import (
    JCR_TYPE_TO_XSD,
    node_type_triples,
    property_definition_triples,
    range_for_type,
)
from ldpstream.memory import DEFAULT_NAMESPACES
from ldpstream.store import NodeTypeDefinition, PropertyDefinition
from ldpstream.types import PropertyType, Triple

EX = Namespace("http://example.org/ns#")
NAMESPACES = {**DEFAULT_NAMESPACES, "ex": str(EX)}


def _ranges(definition: PropertyDefinition) -> list[Triple]:
    triples = property_definition_triples(definition, EX.Book, NAMESPACES)
    return [t for t in triples if t.predicate == RDFS.range]


class TestTypeTable:
    @pytest.mark.parametrize("prop_type", sorted(JCR_TYPE_TO_XSD, key=lambda t: t.value))
    def test_mapped_types_get_exactly_one_range(self, prop_type):
        ranges = _ranges(PropertyDefinition("ex:field", prop_type))
        assert ranges == [Triple(EX.field, RDFS.range, JCR_TYPE_TO_XSD[prop_type])]

    @pytest.mark.parametrize("prop_type", [PropertyType.NAME, PropertyType.UNDEFINED])
    def test_unmapped_types_get_no_range(self, prop_type):
        assert range_for_type(prop_type) is None
        assert _ranges(PropertyDefinition("ex:field", prop_type)) == []

    def test_selected_mappings(self):
        assert range_for_type(PropertyType.DOUBLE) == XSD.decimal
        assert range_for_type(PropertyType.REFERENCE) == XSD.anyURI
        assert range_for_type(PropertyType.BINARY) == XSD.string
        assert range_for_type(PropertyType.DATE) == XSD.date


class TestPropertyDefinitionTriples:
    def test_range_comes_before_item_triples(self):
        triples = list(property_definition_triples(
            PropertyDefinition("ex:pages", PropertyType.LONG), EX.Book, NAMESPACES))
        assert triples == [
            Triple(EX.pages, RDFS.range, XSD.long),
            Triple(EX.pages, RDF.type, RDF.Property),
            Triple(EX.pages, RDFS.domain, EX.Book),
            Triple(EX.pages, RDFS.label, Literal("ex:pages")),
        ]

    def test_unmapped_type_keeps_item_triples(self):
        stream = property_definition_triples(
            PropertyDefinition("ex:kind", PropertyType.NAME), EX.Book, NAMESPACES)
        assert stream.topic == EX.kind
        assert {t.predicate for t in stream} == {RDF.type, RDFS.domain, RDFS.label}

    def test_unnamespaced_definition_discarded(self):
        stream = property_definition_triples(
            PropertyDefinition("internal", PropertyType.STRING), EX.Book, NAMESPACES)
        assert list(stream) == []

    def test_unregistered_prefix_produces_nothing(self):
        stream = property_definition_triples(
            PropertyDefinition("zz:thing", PropertyType.STRING), EX.Book, NAMESPACES)
        assert list(stream) == []


class TestNodeTypeTriples:
    def test_class_with_supertypes_and_properties(self):
        node_type = NodeTypeDefinition(
            name="ex:Book",
            supertypes=("fedora:Container", "zz:Unknown"),
            property_definitions=(
                PropertyDefinition("ex:pages", PropertyType.LONG),
                PropertyDefinition("hidden", PropertyType.STRING),
            ),
        )
        triples = set(node_type_triples(node_type, NAMESPACES))
        fedora = Namespace(NAMESPACES["fedora"])
        assert Triple(EX.Book, RDF.type, RDFS.Class) in triples
        assert Triple(EX.Book, RDFS.subClassOf, fedora.Container) in triples
        assert Triple(EX.pages, RDFS.domain, EX.Book) in triples
        assert Triple(EX.pages, RDFS.range, XSD.long) in triples
        assert len([t for t in triples if t.predicate == RDFS.subClassOf]) == 1
        assert not any("hidden" in str(t.subject) for t in triples)

    def test_unregistered_node_type(self):
        assert list(node_type_triples(NodeTypeDefinition("zz:Thing"), NAMESPACES)) == []
