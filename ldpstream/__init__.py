"""ldpstream — project a hierarchical content store as Linked Data triples.

A store node is described by composing triple generators into one lazy
``TripleStream`` whose topic is the node's external URI:

- Node Context (context.project): binds identity, defers every generator
- Descriptive generators (generators): node types, properties, blank nodes,
  ldp:contains, hash-segment fragments, inbound references
- LDP membership (containers): basic, direct and indirect containers
- Type definitions (definitions): node types and property definitions as
  RDFS, with XSD ranges for the store's value types

Alongside projection, ``observer`` coalesces low-level store change
notifications into repository events and ``messaging`` derives the headers
used to publish them.

The store itself is reached only through the abstract classes in
``ldpstream.store``; ``ldpstream.memory`` provides an in-memory store.
"""

from .containers import ldp_container_triples
from .context import NodeContext, project
from .errors import RepositoryError, RepositoryRuntimeError
from .generators import (
    HASH_GENERATORS,
    blank_node_triples,
    child_triples,
    hash_triples,
    property_triples,
    reference_triples,
    type_triples,
)
from .projection import DEFAULT_GENERATORS, describe
from .stream import TripleStream
from .types import PropertyType, Triple

__all__ = [
    "DEFAULT_GENERATORS",
    "HASH_GENERATORS",
    "NodeContext",
    "PropertyType",
    "RepositoryError",
    "RepositoryRuntimeError",
    "Triple",
    "TripleStream",
    "blank_node_triples",
    "child_triples",
    "describe",
    "hash_triples",
    "ldp_container_triples",
    "project",
    "property_triples",
    "reference_triples",
    "type_triples",
]
