"""Type definitions → RDFS triples.

Describes the store's schema rather than its content: node types become
rdfs:Class resources and their property definitions become rdf:Property
resources with an rdfs:domain and, where the store type has an XSD
equivalent, an rdfs:range.
"""

from __future__ import annotations

import logging
from typing import Mapping

from rdflib import Literal, RDF, RDFS, URIRef, XSD

from .store import NodeTypeDefinition, PropertyDefinition, predicate_for
from .stream import TripleStream
from .types import PropertyType, Triple, split_name

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Type mapping: store value types → XSD datatypes
# ---------------------------------------------------------------------------

JCR_TYPE_TO_XSD: dict[PropertyType, URIRef] = {
    PropertyType.BOOLEAN: XSD.boolean,
    PropertyType.DATE: XSD.date,
    PropertyType.DECIMAL: XSD.decimal,
    PropertyType.DOUBLE: XSD.decimal,
    PropertyType.LONG: XSD.long,
    PropertyType.URI: XSD.anyURI,
    PropertyType.REFERENCE: XSD.anyURI,
    PropertyType.WEAKREFERENCE: XSD.anyURI,
    PropertyType.PATH: XSD.anyURI,
    PropertyType.BINARY: XSD.string,
    PropertyType.STRING: XSD.string,
}


def range_for_type(required_type: PropertyType) -> URIRef | None:
    """XSD datatype for a store type, or None when there is no equivalent."""
    return JCR_TYPE_TO_XSD.get(required_type)


# ---------------------------------------------------------------------------
# Definitions → triples
# ---------------------------------------------------------------------------

def item_definition_triples(
    definition: PropertyDefinition,
    domain: URIRef,
    namespaces: Mapping[str, str],
) -> TripleStream:
    """Triples common to every item definition: type, domain and label."""
    subject = predicate_for(namespaces, definition.name)
    if subject is None:
        logger.debug("No registered namespace for %s", definition.name)
        return TripleStream.empty()
    return TripleStream.of(
        Triple(subject, RDF.type, RDF.Property),
        Triple(subject, RDFS.domain, domain),
        Triple(subject, RDFS.label, Literal(definition.name)),
        topic=subject,
    )


def property_definition_triples(
    definition: PropertyDefinition,
    domain: URIRef,
    namespaces: Mapping[str, str],
) -> TripleStream:
    """Describe a property definition, with an rdfs:range when one is known.

    Definitions without a namespace prefix can't be written out in most RDF
    syntaxes; they are treated as internal and produce nothing.
    """
    if split_name(definition.name) is None:
        logger.debug("Discarding property definition with no namespace: %s", definition.name)
        return TripleStream.empty()

    delegate = item_definition_triples(definition, domain, namespaces)
    rdf_range = range_for_type(definition.required_type)
    if rdf_range is None or delegate.topic is None:
        logger.debug("Skipping rdfs:range for %s with unmappable type %s",
                     definition.name, definition.required_type.label)
        return delegate

    logger.debug("Adding rdfs:range for %s with required type %s as %s",
                 definition.name, definition.required_type.label, rdf_range)
    stream = TripleStream.of(Triple(delegate.topic, RDFS.range, rdf_range),
                             topic=delegate.topic)
    return stream.concat(delegate)


def node_type_triples(
    node_type: NodeTypeDefinition,
    namespaces: Mapping[str, str],
) -> TripleStream:
    """Describe a node type as an rdfs:Class along with its property definitions."""
    subject = predicate_for(namespaces, node_type.name)
    if subject is None:
        logger.debug("No registered namespace for node type %s", node_type.name)
        return TripleStream.empty()

    class_triples = [
        Triple(subject, RDF.type, RDFS.Class),
        Triple(subject, RDFS.label, Literal(node_type.name)),
    ]
    for supertype in node_type.supertypes:
        parent = predicate_for(namespaces, supertype)
        if parent is not None:
            class_triples.append(Triple(subject, RDFS.subClassOf, parent))

    stream = TripleStream(class_triples, topic=subject)
    for definition in node_type.property_definitions:
        stream.concat(property_definition_triples(definition, subject, namespaces))
    return stream
