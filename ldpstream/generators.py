"""Triple generators for the descriptive parts of a node.

Each function takes a ``NodeContext`` and yields triples; ``project`` wraps
them with deferred evaluation and store-error translation.
"""

from __future__ import annotations

import logging
from typing import Iterator

from rdflib import RDF

from .config import get_settings
from .context import NodeContext, project
from .store import ContentNode, predicate_for
from .types import (
    BLANK_NODE,
    INTERNAL_PREFIXES,
    LDP,
    REFERENCE_TYPES,
    Triple,
    is_internal,
    split_name,
)
from .values import property_to_triples

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Node types and direct properties
# ---------------------------------------------------------------------------

def type_triples(ctx: NodeContext) -> Iterator[Triple]:
    """One rdf:type per namespaced node type."""
    for type_name in ctx.node.node_types():
        if is_internal(type_name):
            continue
        rdf_type = predicate_for(ctx.session.namespaces, type_name)
        if rdf_type is None:
            logger.debug("No registered namespace for type %s on %s", type_name, ctx.topic)
            continue
        yield Triple(ctx.topic, RDF.type, rdf_type)


def property_triples(ctx: NodeContext) -> Iterator[Triple]:
    """The node's own properties, one triple per value."""
    for prop in ctx.node.properties():
        if is_internal(prop.name):
            continue
        yield from property_to_triples(prop, ctx.translator, ctx.session)


def blank_node_triples(ctx: NodeContext) -> Iterator[Triple]:
    """Describe blank-node resources this node references.

    A blank node already being described further up the chain of references
    is skipped, which stops reference cycles between blank nodes.
    """
    seen = set(ctx.visited) | {ctx.node.identifier}
    for prop in ctx.node.properties():
        if prop.type not in REFERENCE_TYPES or is_internal(prop.name):
            continue
        for value in prop.values():
            target = ctx.session.get_node_by_identifier(str(value.value))
            if target.identifier in seen or not target.is_node_type(BLANK_NODE):
                continue
            seen.add(target.identifier)
            yield from project(target, ctx.translator, *BLANK_NODE_GENERATORS,
                               visited=frozenset(seen))


# ---------------------------------------------------------------------------
# Structure
# ---------------------------------------------------------------------------

def visible_children(node: ContentNode) -> Iterator[ContentNode]:
    """Children that are resources in their own right.

    The hash segment and store-internal children (e.g. ``jcr:content``) are
    left out.
    """
    hash_segment = get_settings().hash_segment
    for child in node.children():
        parts = split_name(child.name)
        if child.name == hash_segment or (parts and parts[0] in INTERNAL_PREFIXES):
            continue
        yield child


def child_triples(ctx: NodeContext) -> Iterator[Triple]:
    """ldp:contains for each visible child."""
    for child in visible_children(ctx.node):
        yield Triple(ctx.topic, LDP.contains, ctx.translator.translate(child))


def hash_triples(ctx: NodeContext) -> Iterator[Triple]:
    """Describe the fragment resources stored under the node's hash segment.

    Fragment children get only the restricted generator set, so their own
    hash segments, containment and references are never followed.
    """
    hash_segment = get_settings().hash_segment
    if not ctx.node.has_node(hash_segment):
        return
    for child in ctx.node.get_node(hash_segment).children():
        yield from project(child, ctx.translator, *HASH_GENERATORS)


def reference_triples(ctx: NodeContext) -> Iterator[Triple]:
    """Inbound references: all strong ones, then all weak ones."""
    for prop in ctx.node.references():
        yield from property_to_triples(prop, ctx.translator, ctx.session)
    for prop in ctx.node.weak_references():
        yield from property_to_triples(prop, ctx.translator, ctx.session)


HASH_GENERATORS = (type_triples, property_triples, blank_node_triples)
BLANK_NODE_GENERATORS = HASH_GENERATORS
