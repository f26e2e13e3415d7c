"""
In-memory triple store.

Triples are held once each (set semantics) and indexed by
``(graph, subject, predicate)`` so that "all objects of a predicate" is a
single dictionary lookup. Objects come back in the order they were added.
"""
from __future__ import annotations

import logging
from collections.abc import Iterator

from .terms import DEFAULT_GRAPH, GraphTerm, NamedNode, Term, Triple

_LOGGER = logging.getLogger(__name__)


class TripleStore:
    """Read-mostly store of triples for one document."""

    def __init__(self) -> None:
        self._triples: dict[Triple, None] = {}
        self._objects: dict[tuple[str, str, str], list[Term]] = {}

    def add(self, triple: Triple) -> bool:
        """Add a triple. Returns False if it was already present."""
        if triple in self._triples:
            return False
        self._triples[triple] = None
        key = (triple.graph.id, triple.subject.id, triple.predicate.id)
        self._objects.setdefault(key, []).append(triple.object)
        return True

    def objects(
        self,
        subject: Term,
        predicate: NamedNode,
        graph: GraphTerm = DEFAULT_GRAPH,
    ) -> list[Term]:
        """Return every object of ``predicate`` from ``subject`` in ``graph``."""
        return list(self._objects.get((graph.id, subject.id, predicate.id), ()))

    def match(
        self,
        subject: Term | None = None,
        predicate: NamedNode | None = None,
        obj: Term | None = None,
        graph: GraphTerm | None = None,
    ) -> Iterator[Triple]:
        """Yield triples matching every non-None component, in insertion order."""
        for triple in self._triples:
            if subject is not None and triple.subject != subject:
                continue
            if predicate is not None and triple.predicate != predicate:
                continue
            if obj is not None and triple.object != obj:
                continue
            if graph is not None and triple.graph != graph:
                continue
            yield triple

    def to_ntriples(self) -> str:
        """Serialize the store as N-Triples (N-Quads for named graphs)."""
        return "".join(triple.n3() + "\n" for triple in self._triples)

    def __contains__(self, triple: object) -> bool:
        return triple in self._triples

    def __iter__(self) -> Iterator[Triple]:
        return iter(self._triples)

    def __len__(self) -> int:
        return len(self._triples)
