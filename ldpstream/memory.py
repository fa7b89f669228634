"""In-memory content store.

A small, dictionary-backed implementation of the store capability interface
with a path-based identifier translator. Used by the tests and the case
studies; also a template for real adapters.
"""

from __future__ import annotations

import uuid
from typing import Any, Iterable, Mapping

from rdflib import RDF, RDFS, URIRef, XSD

from .config import get_settings
from .errors import RepositoryError
from .store import ContentNode, ContentProperty, ContentSession, IdentifierTranslator, StoreValue
from .types import LDP, REPOSITORY, PropertyType

DEFAULT_NAMESPACES = {
    "ldp": str(LDP),
    "fedora": str(REPOSITORY),
    "rdf": str(RDF),
    "rdfs": str(RDFS),
    "xsd": str(XSD),
    "dc": "http://purl.org/dc/elements/1.1/",
    "jcr": "http://www.jcp.org/jcr/1.0",
    "nt": "http://www.jcp.org/jcr/nt/1.0",
    "mix": "http://www.jcp.org/jcr/mix/1.0",
}


def _join(parent: str, name: str) -> str:
    return f"/{name}" if parent == "/" else f"{parent}/{name}"


class MemoryRepository(ContentSession):
    """A whole store and the (single) session onto it."""

    def __init__(self, namespaces: Mapping[str, str] | None = None):
        self._namespaces = dict(DEFAULT_NAMESPACES)
        self._namespaces.update(namespaces or {})
        self._nodes: dict[str, MemoryNode] = {}
        self._by_identifier: dict[str, MemoryNode] = {}
        self.root = self._create("/", ("fedora:Container",))

    @property
    def namespaces(self) -> Mapping[str, str]:
        return self._namespaces

    def register_namespace(self, prefix: str, uri: str) -> None:
        self._namespaces[prefix] = uri

    def _create(self, path: str, node_types: Iterable[str]) -> MemoryNode:
        node = MemoryNode(self, path, str(uuid.uuid4()), node_types)
        self._nodes[path] = node
        self._by_identifier[node.identifier] = node
        return node

    def add_node(self, path: str, *node_types: str) -> MemoryNode:
        """Create a node, and any missing ancestors (untyped)."""
        if path in self._nodes:
            raise ValueError(f"Node '{path}' already exists")
        parent_path = path[:path.rfind("/")] or "/"
        parent = self._nodes.get(parent_path) or self.add_node(parent_path)
        node = self._create(path, node_types)
        parent._children.append(node)
        return node

    def get_node(self, path: str) -> MemoryNode:
        try:
            return self._nodes[path]
        except KeyError:
            raise RepositoryError(f"No node at path {path}") from None

    def get_node_by_identifier(self, identifier: str) -> MemoryNode:
        try:
            return self._by_identifier[identifier]
        except KeyError:
            raise RepositoryError(f"No node with identifier {identifier}") from None

    def nodes(self) -> Iterable[MemoryNode]:
        return list(self._nodes.values())

    def __repr__(self) -> str:
        return f"MemoryRepository({len(self._nodes)} nodes)"


class MemoryProperty(ContentProperty):
    def __init__(self, parent: MemoryNode, name: str, prop_type: PropertyType,
                 values: list[StoreValue]):
        self._parent = parent
        self._name = name
        self._type = prop_type
        self._values = values

    @property
    def name(self) -> str:
        return self._name

    @property
    def type(self) -> PropertyType:
        return self._type

    @property
    def parent(self) -> MemoryNode:
        return self._parent

    def values(self) -> list[StoreValue]:
        return list(self._values)

    def __repr__(self) -> str:
        return f"MemoryProperty({self._parent.path}/{self._name})"


class MemoryNode(ContentNode):
    def __init__(self, repository: MemoryRepository, path: str, identifier: str,
                 node_types: Iterable[str]):
        self._repository = repository
        self._path = path
        self._identifier = identifier
        self._types = list(node_types)
        self._properties: dict[str, MemoryProperty] = {}
        self._children: list[MemoryNode] = []
        self._described: MemoryNode | None = None

    @property
    def path(self) -> str:
        return self._path

    @property
    def identifier(self) -> str:
        return self._identifier

    @property
    def session(self) -> MemoryRepository:
        return self._repository

    def node_types(self) -> list[str]:
        return list(self._types)

    def add_type(self, type_name: str) -> MemoryNode:
        if type_name not in self._types:
            self._types.append(type_name)
        return self

    # -----------------------------------------------------------------------
    # Properties
    # -----------------------------------------------------------------------

    def set_property(self, name: str, *values: Any,
                     type: PropertyType = PropertyType.STRING) -> MemoryProperty:
        """Set a property; node values of reference types store the identifier."""
        stored = []
        for value in values:
            if isinstance(value, StoreValue):
                stored.append(value)
                continue
            if isinstance(value, MemoryNode):
                value = value.path if type == PropertyType.PATH else value.identifier
            stored.append(StoreValue(type, value))
        prop = MemoryProperty(self, name, type, stored)
        self._properties[name] = prop
        return prop

    def get_property(self, name: str) -> MemoryProperty | None:
        return self._properties.get(name)

    def properties(self) -> list[MemoryProperty]:
        return list(self._properties.values())

    # -----------------------------------------------------------------------
    # Structure
    # -----------------------------------------------------------------------

    def add_child(self, name: str, *node_types: str) -> MemoryNode:
        return self._repository.add_node(_join(self._path, name), *node_types)

    def children(self) -> list[MemoryNode]:
        return list(self._children)

    def has_node(self, name: str) -> bool:
        return any(child.name == name for child in self._children)

    def get_node(self, name: str) -> MemoryNode:
        for child in self._children:
            if child.name == name:
                return child
        raise RepositoryError(f"No child {name} under {self._path}")

    def _inbound(self, prop_type: PropertyType, name: str | None) -> list[MemoryProperty]:
        found = []
        for node in self._repository.nodes():
            for prop in node.properties():
                if prop.type != prop_type or (name is not None and prop.name != name):
                    continue
                if any(v.value == self._identifier for v in prop.values()):
                    found.append(prop)
        return found

    def references(self, name: str | None = None) -> list[MemoryProperty]:
        return self._inbound(PropertyType.REFERENCE, name)

    def weak_references(self, name: str | None = None) -> list[MemoryProperty]:
        return self._inbound(PropertyType.WEAKREFERENCE, name)

    def describes(self, binary: MemoryNode) -> MemoryNode:
        """Mark this node as the description of ``binary``."""
        self._described = binary
        return self

    def described_resource(self) -> MemoryNode | None:
        return self._described

    def __repr__(self) -> str:
        return f"MemoryNode({self._path})"


class PathTranslator(IdentifierTranslator):
    """Maps node paths under a base URI; hash-segment children become fragments.

    ``/a/b`` ↔ ``<base>/a/b`` and ``/a/#/frag`` ↔ ``<base>/a#frag``.
    """

    def __init__(self, repository: MemoryRepository, base_uri: str | None = None):
        self.repository = repository
        self.base_uri = (base_uri or get_settings().base_uri).rstrip("/")

    @property
    def hash_segment(self) -> str:
        return get_settings().hash_segment

    def translate(self, node: ContentNode) -> URIRef:
        path = node.path.replace(f"/{self.hash_segment}/", "#")
        return URIRef(self.base_uri + path)

    def reverse(self, uri: URIRef) -> MemoryNode:
        uri = str(uri)
        if not uri.startswith(self.base_uri):
            raise ValueError(f"{uri} is not under {self.base_uri}")
        path = uri[len(self.base_uri):].replace("#", f"/{self.hash_segment}/") or "/"
        return self.repository.get_node(path)
