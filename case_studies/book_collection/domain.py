"""Book Collection — an in-memory store exercising every container kind.

Layout:
  /collection                     ldp:BasicContainer, two books
  /collection/moby                a book with a fragment (#ch1) and a binary
  /collection/moby/pages          ldp:DirectContainer  → ex:hasPage on moby
  /collection/moby/files          ldp:DirectContainer  → binary description
  /collection/moby/authors        ldp:IndirectContainer → ex:creator via ex:proxyFor
  /people/melville                referenced by a proxy
"""

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "../.."))

from datetime import datetime

from ldpstream.memory import MemoryRepository, MemoryNode, PathTranslator
from ldpstream.store import NodeTypeDefinition, PropertyDefinition
from ldpstream.types import (
    LDP_BASIC_CONTAINER,
    LDP_DIRECT_CONTAINER,
    LDP_HAS_MEMBER_RELATION,
    LDP_INDIRECT_CONTAINER,
    LDP_INSERTED_CONTENT_RELATION,
    LDP_MEMBER_RESOURCE,
    NON_RDF_SOURCE_DESCRIPTION,
    PropertyType,
)

EX = "http://example.org/books#"


def _direct(parent: MemoryNode, name: str, member_resource: MemoryNode,
            relation: str) -> MemoryNode:
    container = parent.add_child(name, LDP_DIRECT_CONTAINER, "fedora:Container")
    container.set_property(LDP_MEMBER_RESOURCE, member_resource, type=PropertyType.REFERENCE)
    container.set_property(LDP_HAS_MEMBER_RELATION, relation, type=PropertyType.URI)
    return container


def build_repository() -> tuple[MemoryRepository, PathTranslator]:
    repo = MemoryRepository()
    repo.register_namespace("ex", EX)

    collection = repo.add_node("/collection", LDP_BASIC_CONTAINER, "fedora:Container")
    collection.set_property("dc:title", "Nineteenth-century novels")

    moby = collection.add_child("moby", "fedora:Container", "ex:Book")
    moby.set_property("dc:title", "Moby-Dick")
    moby.set_property("ex:published", datetime(1851, 10, 18), type=PropertyType.DATE)
    moby.set_property("ex:pages", 635, type=PropertyType.LONG)

    chapter = repo.add_node("/collection/moby/#/ch1", "ex:Chapter")
    chapter.set_property("dc:title", "Loomings")

    collection.add_child("scarlet", "fedora:Container", "ex:Book").set_property(
        "dc:title", "The Scarlet Letter")

    pages = _direct(moby, "pages", moby, EX + "hasPage")
    pages.add_child("p1", "fedora:Container")
    pages.add_child("p2", "fedora:Container")

    binary = repo.add_node("/binaries/moby.epub", "fedora:Binary")
    files = _direct(moby, "files", moby, EX + "hasFile")
    files.add_child("epub", NON_RDF_SOURCE_DESCRIPTION).describes(binary)

    melville = repo.add_node("/people/melville", "fedora:Container", "ex:Person")
    melville.set_property("dc:title", "Herman Melville")

    authors = moby.add_child("authors", LDP_INDIRECT_CONTAINER, "fedora:Container")
    authors.set_property(LDP_MEMBER_RESOURCE, moby, type=PropertyType.REFERENCE)
    authors.set_property(LDP_HAS_MEMBER_RELATION, EX + "creator", type=PropertyType.URI)
    authors.set_property(LDP_INSERTED_CONTENT_RELATION, EX + "proxyFor", type=PropertyType.URI)
    authors.add_child("melville-proxy").set_property(
        "ex:proxyFor", melville, type=PropertyType.WEAKREFERENCE)

    return repo, PathTranslator(repo)


def book_node_type() -> NodeTypeDefinition:
    return NodeTypeDefinition(
        name="ex:Book",
        supertypes=("fedora:Container",),
        property_definitions=(
            PropertyDefinition("dc:title", PropertyType.STRING),
            PropertyDefinition("ex:published", PropertyType.DATE),
            PropertyDefinition("ex:pages", PropertyType.LONG),
            PropertyDefinition("ex:shelfmark", PropertyType.NAME),
            PropertyDefinition("internalFlag", PropertyType.BOOLEAN),
        ),
    )
