"""
Read-only navigation over a triple store.

A :class:`Subject` is a view of one node within one graph of a store. It owns
nothing and is only valid while the store it points into is alive.
"""
from __future__ import annotations

import math
from collections.abc import Mapping
from urllib.parse import urlparse

from ..const import RDF_TYPE, SCHEMA_ORG, SCHEMA_ORG_HTTP
from .store import TripleStore
from .terms import (
    DEFAULT_GRAPH,
    GraphTerm,
    Literal,
    NamedNode,
    Term,
    is_literal,
    is_named_node,
)


class Subject:
    """A node of the graph, queried one predicate at a time."""

    def __init__(self, store: TripleStore, node: Term, graph: GraphTerm | None = None) -> None:
        self.store = store
        self.node = node
        self.graph = graph if graph is not None else DEFAULT_GRAPH

    def get(self, predicate: NamedNode, order: Mapping[str, int] | None = None) -> list[Subject]:
        """Return the objects of ``predicate`` from this node.

        Args:
            predicate: The property to follow
            order: Optional document order; when given, results are sorted by
                the position at which each object was first seen. Objects the
                order does not know sort after the known ones.

        Returns:
            The objects wrapped as subjects in this subject's graph; empty if
            the predicate is absent
        """
        objects = [
            Subject(self.store, obj, self.graph)
            for obj in self.store.objects(self.node, predicate, self.graph)
        ]
        if order is not None:
            objects.sort(key=lambda subject: order.get(subject.node.id, math.inf))
        return objects

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Subject):
            return NotImplemented
        return (self.store is other.store and self.node == other.node
                and self.graph == other.graph)

    def __hash__(self) -> int:
        return hash((id(self.store), self.node, self.graph))

    def __repr__(self) -> str:
        return f"Subject({self.node!r})"


class Namespace:
    """Builds IRIs under a fixed base, e.g. ``Namespace(SCHEMA_ORG)("Recipe")``."""

    def __init__(self, base: str) -> None:
        _check_iri(base)
        self.base = base

    def __call__(self, rest: str) -> NamedNode:
        iri = self.base + rest
        _check_iri(iri)
        return NamedNode(iri)


def _check_iri(iri: str) -> None:
    parsed = urlparse(iri)
    if not parsed.scheme or not (parsed.netloc or parsed.path):
        raise ValueError(f"Not an absolute IRI: {iri!r}")


schema = Namespace(SCHEMA_ORG)


def node_url(node: NamedNode) -> str:
    return node.id


def node_urls(subjects: list[Subject]) -> list[str]:
    return [s.node.id for s in subjects if is_named_node(s.node)]


def node_value(node: Literal) -> str:
    """Return the value of a literal."""
    return node.value


def node_value_or_none(subject: Subject | None) -> str | None:
    """Return the literal value of ``subject``, or None if it is absent or not a literal."""
    if subject is not None and is_literal(subject.node):
        return subject.node.value
    return None


def node_values(subjects: list[Subject]) -> list[str]:
    """Return the values of the literal subjects, skipping everything else."""
    return [s.node.value for s in subjects if is_literal(s.node)]


def all_of_type(store: TripleStore, type_: NamedNode, graph: GraphTerm | None = None) -> list[Subject]:
    """Return every node asserted to have ``type_``, scoped to the graph of the assertion."""
    return [
        Subject(store, triple.subject, triple.graph)
        for triple in store.match(predicate=NamedNode(RDF_TYPE), obj=type_, graph=graph)
    ]


def rewrite_schema(term: Term) -> Term:
    """Normalize the historical http schema.org prefix to https."""
    if isinstance(term, NamedNode) and SCHEMA_ORG_HTTP in term.value:
        return NamedNode(term.value.replace(SCHEMA_ORG_HTTP, SCHEMA_ORG, 1))
    return term
