"""Conversion of store values and properties into RDF terms and triples."""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Iterator

from rdflib import Literal, URIRef, XSD
from rdflib.term import Node

from .store import ContentProperty, ContentSession, IdentifierTranslator, StoreValue, predicate_for
from .types import PropertyType, Triple

logger = logging.getLogger(__name__)


def value_to_term(
    value: StoreValue,
    translator: IdentifierTranslator,
    session: ContentSession,
) -> Node:
    """Convert one typed store value to an RDF term.

    Reference and path values resolve to the URI of the node they point at.
    """
    kind, raw = value.type, value.value

    if kind == PropertyType.BOOLEAN:
        if isinstance(raw, str):
            raw = raw.strip().lower() == "true"
        return Literal(bool(raw))
    if kind == PropertyType.LONG:
        return Literal(int(raw), datatype=XSD.long)
    if kind == PropertyType.DOUBLE:
        return Literal(float(raw), datatype=XSD.double)
    if kind == PropertyType.DECIMAL:
        return Literal(Decimal(str(raw)), datatype=XSD.decimal)
    if kind == PropertyType.DATE:
        return Literal(raw, datatype=XSD.dateTime)
    if kind == PropertyType.URI:
        return URIRef(str(raw))
    if kind in (PropertyType.REFERENCE, PropertyType.WEAKREFERENCE):
        return translator.translate(session.get_node_by_identifier(str(raw)))
    if kind == PropertyType.PATH:
        return translator.translate(session.get_node(str(raw)))
    if kind == PropertyType.NAME:
        expanded = predicate_for(session.namespaces, str(raw))
        if expanded is not None:
            return expanded
    return Literal(str(raw))


def property_to_triples(
    prop: ContentProperty,
    translator: IdentifierTranslator,
    session: ContentSession,
) -> Iterator[Triple]:
    """One triple per value: (owning node, expanded property name, value)."""
    predicate = predicate_for(session.namespaces, prop.name)
    if predicate is None:
        logger.debug("No registered namespace for property %s, skipping", prop.name)
        return
    subject = translator.translate(prop.parent)
    for value in prop.values():
        yield Triple(subject, predicate, value_to_term(value, translator, session))
