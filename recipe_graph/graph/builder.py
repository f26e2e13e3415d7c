"""
Builds a store and its document order from a stream of triples.

The builder is the only writer of a document's graph. Once :meth:`finish` is
called the document order is complete and the result may be queried.
"""
from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from .document_order import DocumentOrder
from .store import TripleStore
from .subject import rewrite_schema
from .terms import Triple

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoadedDocument:
    """Everything extraction needs from one fetched document."""

    store: TripleStore
    final_url: str
    document_order: DocumentOrder


class GraphBuilder:
    """Accumulates streamed triples for one document."""

    def __init__(self, final_url: str) -> None:
        self.final_url = final_url
        self.store = TripleStore()
        self.document_order = DocumentOrder()
        self._finished = False

    def add(self, triple: Triple) -> None:
        """Add one streamed triple, normalizing schema.org prefixes."""
        triple = Triple(
            triple.subject,
            rewrite_schema(triple.predicate),
            rewrite_schema(triple.object),
            triple.graph,
        )
        self.document_order.observe(triple)
        self.store.add(triple)

    def add_all(self, triples: Iterable[Triple]) -> None:
        for triple in triples:
            self.add(triple)

    def finish(self) -> LoadedDocument:
        """Signal the end of the stream and hand over the populated graph."""
        if not self._finished:
            self.document_order.complete()
            self._finished = True
            _LOGGER.debug("Loaded %d triples from %s", len(self.store), self.final_url)
        return LoadedDocument(self.store, self.final_url, self.document_order)


def build_document(triples: Iterable[Triple], final_url: str) -> LoadedDocument:
    """Stream ``triples`` into a fresh graph and complete it."""
    builder = GraphBuilder(final_url)
    builder.add_all(triples)
    return builder.finish()
