"""
RDF terms.

Terms are small immutable value objects. Every term has a string ``id`` that
is unique within a document; the id doubles as the key of the document order.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from ..const import RDF_LANG_STRING, XSD_STRING


def _escape(value: str) -> str:
    return (
        value.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n", "\\n")
        .replace("\r", "\\r")
    )


@dataclass(frozen=True)
class NamedNode:
    """A node identified by an IRI."""

    value: str

    @property
    def id(self) -> str:
        return self.value

    def n3(self) -> str:
        return f"<{self.value}>"


@dataclass(frozen=True)
class BlankNode:
    """An anonymous node, scoped to one document."""

    value: str

    @property
    def id(self) -> str:
        return f"_:{self.value}"

    def n3(self) -> str:
        return self.id


@dataclass(frozen=True)
class Literal:
    """A string value, optionally typed or language-tagged."""

    value: str
    datatype: str = XSD_STRING
    language: str | None = None

    @property
    def id(self) -> str:
        quoted = f'"{self.value}"'
        if self.language:
            return f"{quoted}@{self.language.lower()}"
        if self.datatype not in (XSD_STRING, RDF_LANG_STRING):
            return f"{quoted}^^{self.datatype}"
        return quoted

    def n3(self) -> str:
        quoted = f'"{_escape(self.value)}"'
        if self.language:
            return f"{quoted}@{self.language.lower()}"
        if self.datatype not in (XSD_STRING, RDF_LANG_STRING):
            return f"{quoted}^^<{self.datatype}>"
        return quoted


@dataclass(frozen=True)
class DefaultGraph:
    """The unnamed graph every triple belongs to unless stated otherwise."""

    @property
    def id(self) -> str:
        return ""

    def n3(self) -> str:
        return ""


DEFAULT_GRAPH = DefaultGraph()

Term = Union[NamedNode, BlankNode, Literal, DefaultGraph]
GraphTerm = Union[NamedNode, BlankNode, DefaultGraph]


@dataclass(frozen=True)
class Triple:
    """A (subject, predicate, object, graph) fact."""

    subject: NamedNode | BlankNode
    predicate: NamedNode
    object: NamedNode | BlankNode | Literal
    graph: GraphTerm = DEFAULT_GRAPH

    def n3(self) -> str:
        parts = [self.subject.n3(), self.predicate.n3(), self.object.n3()]
        if not isinstance(self.graph, DefaultGraph):
            parts.append(self.graph.n3())
        return " ".join(parts) + " ."


def is_literal(node: Term) -> bool:
    return isinstance(node, Literal)


def is_named_node(node: Term) -> bool:
    return isinstance(node, NamedNode)
