"""LDP membership — triples a container asserts about its membership resource.

LDP reference: Sections 5.3 (Basic), 5.4 (Direct) and 5.5 (Indirect Containers).

For a node C, every container whose ldp:membershipResource points at C
contributes membership triples (C, hasMemberRelation, member). C itself
contributes when it is a container that does not name some other
membership resource.

Branches per container K:
  - member relation: explicit ldp:hasMemberRelation, else ldp:member for a
    basic container, else nothing
  - inserted content: an indirect container needs ldp:insertedContentRelation
    (else nothing); the others use ldp:MemberSubject, the child itself
  - member object: the child's URI (or the described binary's URI for a
    binary description), or every value of the inserted-content property
    on the child (children without it contribute nothing)

All of these are configuration states, not faults: they are logged and
produce no triples.
"""

from __future__ import annotations

import logging
from itertools import chain
from typing import Iterator

from rdflib import URIRef

from .context import NodeContext
from .generators import visible_children
from .store import ContentNode, ContentProperty, StoreValue, property_name_for
from .types import (
    LDP,
    LDP_BASIC_CONTAINER,
    LDP_CONTAINER_TYPES,
    LDP_DIRECT_CONTAINER,
    LDP_HAS_MEMBER_RELATION,
    LDP_INDIRECT_CONTAINER,
    LDP_INSERTED_CONTENT_RELATION,
    LDP_MEMBER_RESOURCE,
    MEMBER_SUBJECT,
    NON_RDF_SOURCE_DESCRIPTION,
    PropertyType,
    Triple,
)
from .values import value_to_term

logger = logging.getLogger(__name__)


def ldp_container_triples(ctx: NodeContext) -> Iterator[Triple]:
    """Membership triples asserted about the context node."""
    for container in _containers(ctx):
        yield from _member_relations(ctx, container)


# ---------------------------------------------------------------------------
# Container discovery
# ---------------------------------------------------------------------------

def _containers(ctx: NodeContext) -> Iterator[ContentNode]:
    node = ctx.node
    seen: set[str] = set()

    if _is_self_container(ctx):
        seen.add(node.identifier)
        yield node

    inbound = chain(node.references(LDP_MEMBER_RESOURCE),
                    node.weak_references(LDP_MEMBER_RESOURCE))
    for prop in inbound:
        container = prop.parent
        if container.identifier in seen:
            continue
        if not (container.is_node_type(LDP_DIRECT_CONTAINER)
                or container.is_node_type(LDP_INDIRECT_CONTAINER)):
            continue
        seen.add(container.identifier)
        yield container


def _is_self_container(ctx: NodeContext) -> bool:
    node = ctx.node
    if not set(node.node_types()).intersection(LDP_CONTAINER_TYPES):
        return False
    if not node.has_property(LDP_MEMBER_RESOURCE):
        return True
    values = node.get_property(LDP_MEMBER_RESOURCE).values()
    return any(_names_node(ctx, v) for v in values)


def _names_node(ctx: NodeContext, value: StoreValue) -> bool:
    """Whether a membership resource value points back at the context node."""
    raw = str(value.value)
    if value.type == PropertyType.URI:
        return URIRef(raw) == ctx.topic
    if value.type == PropertyType.PATH:
        return raw == ctx.node.path
    return raw == ctx.node.identifier


def _first_value(prop: ContentProperty | None) -> str | None:
    if prop is None:
        return None
    value = next(iter(prop.values()), None)
    return None if value is None else str(value.value)


# ---------------------------------------------------------------------------
# Membership for one container
# ---------------------------------------------------------------------------

def _member_relations(ctx: NodeContext, container: ContentNode) -> Iterator[Triple]:
    relation = _first_value(container.get_property(LDP_HAS_MEMBER_RELATION))
    if relation is not None:
        member_relation = URIRef(relation)
    elif container.is_node_type(LDP_BASIC_CONTAINER):
        member_relation = LDP.member
    else:
        logger.debug("Container %s has no member relation", container.path)
        return

    if container.is_node_type(LDP_INDIRECT_CONTAINER):
        inserted_content = _first_value(container.get_property(LDP_INSERTED_CONTENT_RELATION))
        if inserted_content is None:
            logger.debug("Indirect container %s has no inserted content relation",
                         container.path)
            return
    else:
        inserted_content = str(MEMBER_SUBJECT)

    if inserted_content == str(MEMBER_SUBJECT):
        for child in visible_children(container):
            yield Triple(ctx.topic, member_relation, _member_uri(ctx, child))
        return

    property_name = property_name_for(ctx.session.namespaces, inserted_content)
    if property_name is None:
        logger.debug("Inserted content relation %s is not in a registered namespace",
                     inserted_content)
        return

    for child in visible_children(container):
        if not child.has_property(property_name):
            continue
        for value in child.get_property(property_name).values():
            yield Triple(ctx.topic, member_relation,
                         value_to_term(value, ctx.translator, ctx.session))


def _member_uri(ctx: NodeContext, child: ContentNode) -> URIRef:
    if child.is_node_type(NON_RDF_SOURCE_DESCRIPTION):
        described = child.described_resource()
        if described is not None:
            return ctx.translator.translate(described)
    return ctx.translator.translate(child)
