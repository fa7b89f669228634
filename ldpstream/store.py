"""Content store capability interface.

The projection engine never owns store state: it reads nodes, properties,
references and type metadata through the abstract classes below and
resolves identities through an ``IdentifierTranslator``. Concrete adapters
subclass these and raise ``RepositoryError`` on read failures.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping

from rdflib import URIRef

from .types import PropertyType, split_name


# ---------------------------------------------------------------------------
# Values and definitions
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class StoreValue:
    """A single typed value held by a property."""
    type: PropertyType
    value: Any

    def __repr__(self) -> str:
        return f"Value({self.type.label}: {self.value!r})"


@dataclass(frozen=True)
class PropertyDefinition:
    """Schema metadata for a property declared by a node type."""
    name: str
    required_type: PropertyType = PropertyType.UNDEFINED

    def __repr__(self) -> str:
        return f"PropertyDef({self.name}: {self.required_type.label})"


@dataclass(frozen=True)
class NodeTypeDefinition:
    """Schema metadata for a node type."""
    name: str
    supertypes: tuple[str, ...] = ()
    property_definitions: tuple[PropertyDefinition, ...] = field(default_factory=tuple)

    def __repr__(self) -> str:
        return f"NodeTypeDef({self.name})"


# ---------------------------------------------------------------------------
# Store handles
# ---------------------------------------------------------------------------

class ContentSession:
    """Scoped, read-only access to the store."""

    @property
    def namespaces(self) -> Mapping[str, str]:
        """Registered prefix → namespace URI map."""
        raise NotImplementedError

    def get_node(self, path: str) -> ContentNode:
        raise NotImplementedError

    def get_node_by_identifier(self, identifier: str) -> ContentNode:
        raise NotImplementedError


class ContentProperty:
    """A named property on a node holding one or more typed values."""

    @property
    def name(self) -> str:
        raise NotImplementedError

    @property
    def type(self) -> PropertyType:
        raise NotImplementedError

    @property
    def parent(self) -> ContentNode:
        raise NotImplementedError

    def values(self) -> Iterable[StoreValue]:
        raise NotImplementedError


class ContentNode:
    """Opaque handle to a node in the content store."""

    @property
    def path(self) -> str:
        raise NotImplementedError

    @property
    def identifier(self) -> str:
        raise NotImplementedError

    @property
    def name(self) -> str:
        return self.path.rstrip("/").rsplit("/", 1)[-1]

    @property
    def session(self) -> ContentSession:
        raise NotImplementedError

    def node_types(self) -> Iterable[str]:
        """Primary and mixin type names."""
        raise NotImplementedError

    def is_node_type(self, type_name: str) -> bool:
        return type_name in set(self.node_types())

    def has_property(self, name: str) -> bool:
        return self.get_property(name) is not None

    def get_property(self, name: str) -> ContentProperty | None:
        raise NotImplementedError

    def properties(self) -> Iterable[ContentProperty]:
        raise NotImplementedError

    def children(self) -> Iterable[ContentNode]:
        raise NotImplementedError

    def has_node(self, name: str) -> bool:
        raise NotImplementedError

    def get_node(self, name: str) -> ContentNode:
        raise NotImplementedError

    def references(self, name: str | None = None) -> Iterable[ContentProperty]:
        """Strong reference properties elsewhere in the store pointing here."""
        raise NotImplementedError

    def weak_references(self, name: str | None = None) -> Iterable[ContentProperty]:
        """Weak reference properties elsewhere in the store pointing here."""
        raise NotImplementedError

    def described_resource(self) -> ContentNode | None:
        """For a binary description node, the binary it describes."""
        return None


class IdentifierTranslator:
    """Bidirectional node ↔ external URI mapping.

    Implementations must round-trip: ``translate(reverse(uri)) == uri`` and
    ``reverse(translate(node))`` is the same node.
    """

    def translate(self, node: ContentNode) -> URIRef:
        raise NotImplementedError

    def reverse(self, uri: URIRef) -> ContentNode:
        raise NotImplementedError


# ---------------------------------------------------------------------------
# Name ↔ predicate mapping
# ---------------------------------------------------------------------------

def predicate_for(namespaces: Mapping[str, str], name: str) -> URIRef | None:
    """Expand ``prefix:local`` against the namespace registry."""
    parts = split_name(name)
    if parts is None:
        return None
    prefix, local = parts
    uri = namespaces.get(prefix)
    if uri is None:
        return None
    return URIRef(uri + local)


def property_name_for(namespaces: Mapping[str, str], predicate: str) -> str | None:
    """Inverse of predicate_for; the longest matching namespace wins."""
    best: tuple[str, str] | None = None
    for prefix, uri in namespaces.items():
        if predicate.startswith(uri) and (best is None or len(uri) > len(best[1])):
            best = (prefix, uri)
    if best is None:
        return None
    prefix, uri = best
    return f"{prefix}:{predicate[len(uri):]}"
