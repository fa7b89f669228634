"""Full descriptions — the standard generator set composed in order."""

from __future__ import annotations

from .containers import ldp_container_triples
from .context import project
from .generators import (
    blank_node_triples,
    child_triples,
    hash_triples,
    property_triples,
    reference_triples,
    type_triples,
)
from .store import ContentNode, IdentifierTranslator
from .stream import TripleStream

DEFAULT_GENERATORS = (
    type_triples,
    property_triples,
    blank_node_triples,
    child_triples,
    ldp_container_triples,
    hash_triples,
    reference_triples,
)


def describe(node: ContentNode | None, translator: IdentifierTranslator) -> TripleStream:
    """Everything known about ``node``, as one lazy stream."""
    return project(node, translator, *DEFAULT_GENERATORS)
