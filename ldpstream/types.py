"""Core types for ldpstream — triples, store value tags and vocabularies.

A Triple is an immutable (subject, predicate, object) statement built from
rdflib terms. Because it is a tuple, it can be handed to ``Graph.add``
unchanged.

The store tags every property value with a native type. ``PropertyType``
mirrors the numbering used by JCR-style content repositories so that codes
coming from an adapter can be passed straight through.
"""

from __future__ import annotations

from enum import Enum
from typing import NamedTuple

from rdflib import Namespace
from rdflib.term import Node, URIRef


# ---------------------------------------------------------------------------
# Vocabularies
# ---------------------------------------------------------------------------

LDP = Namespace("http://www.w3.org/ns/ldp#")
REPOSITORY = Namespace("http://fedora.info/definitions/v4/repository#")

# Store-side names (prefix:local) of the LDP node types and properties
LDP_BASIC_CONTAINER = "ldp:BasicContainer"
LDP_DIRECT_CONTAINER = "ldp:DirectContainer"
LDP_INDIRECT_CONTAINER = "ldp:IndirectContainer"
LDP_HAS_MEMBER_RELATION = "ldp:hasMemberRelation"
LDP_INSERTED_CONTENT_RELATION = "ldp:insertedContentRelation"
LDP_MEMBER_RESOURCE = "ldp:membershipResource"

LDP_CONTAINER_TYPES = (LDP_BASIC_CONTAINER, LDP_DIRECT_CONTAINER, LDP_INDIRECT_CONTAINER)

# Repository node types
NON_RDF_SOURCE_DESCRIPTION = "fedora:NonRdfSourceDescription"
BLANK_NODE = "fedora:Blanknode"

# Object of a direct/basic membership triple is the member itself
MEMBER_SUBJECT = LDP.MemberSubject

# Prefixes the store reserves for its own bookkeeping; never projected
INTERNAL_PREFIXES = frozenset({"jcr", "nt", "mix", "mode", "sv", "xml"})


# ---------------------------------------------------------------------------
# Triple
# ---------------------------------------------------------------------------

class Triple(NamedTuple):
    """An RDF statement. Subject and predicate are URIs; object is any term."""
    subject: Node
    predicate: URIRef
    object: Node

    def __repr__(self) -> str:
        return f"Triple({self.subject.n3()} {self.predicate.n3()} {self.object.n3()})"


# ---------------------------------------------------------------------------
# PropertyType — store-native value tags
# ---------------------------------------------------------------------------

class PropertyType(Enum):
    """Value type tag carried by every store property."""
    UNDEFINED = 0
    STRING = 1
    BINARY = 2
    LONG = 3
    DOUBLE = 4
    DATE = 5
    BOOLEAN = 6
    NAME = 7
    PATH = 8
    REFERENCE = 9
    WEAKREFERENCE = 10
    URI = 11
    DECIMAL = 12

    @property
    def label(self) -> str:
        return self.name.capitalize()


REFERENCE_TYPES = frozenset({PropertyType.REFERENCE, PropertyType.WEAKREFERENCE})


def split_name(name: str) -> tuple[str, str] | None:
    """Split ``prefix:local`` into its parts; None when there is no prefix."""
    if ":" not in name:
        return None
    prefix, local = name.split(":", 1)
    return prefix, local


def is_internal(name: str) -> bool:
    parts = split_name(name)
    return parts is None or parts[0] in INTERNAL_PREFIXES
