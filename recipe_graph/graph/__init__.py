"""Graph query layer: terms, store, document order and navigation helpers."""
from .builder import GraphBuilder, LoadedDocument, build_document
from .document_order import DocumentOrder
from .store import TripleStore
from .subject import (
    Namespace,
    Subject,
    all_of_type,
    node_url,
    node_urls,
    node_value,
    node_value_or_none,
    node_values,
    rewrite_schema,
    schema,
)
from .terms import (
    DEFAULT_GRAPH,
    BlankNode,
    DefaultGraph,
    Literal,
    NamedNode,
    Term,
    Triple,
    is_literal,
    is_named_node,
)

__all__ = [
    "DEFAULT_GRAPH",
    "BlankNode",
    "DefaultGraph",
    "DocumentOrder",
    "GraphBuilder",
    "Literal",
    "LoadedDocument",
    "NamedNode",
    "Namespace",
    "Subject",
    "Term",
    "Triple",
    "TripleStore",
    "all_of_type",
    "build_document",
    "is_literal",
    "is_named_node",
    "node_url",
    "node_urls",
    "node_value",
    "node_value_or_none",
    "node_values",
    "rewrite_schema",
    "schema",
]
