"""
Structured data to triples.

This module harvests the schema.org markup of a page with extruct, both
``<script type="application/ld+json">`` blocks and microdata items, and
flattens it into triples in the order the markup states them. JSON-LD comes
first, then microdata.

Keys are resolved against the vocabulary of the markup: schema.org unless a
JSON-LD ``@vocab`` or a microdata ``itemtype`` says otherwise. Remote
contexts are never fetched. Blank node labels are scoped to the block they
appear in, so two blocks reusing ``_:b0`` describe two different nodes.
"""
from __future__ import annotations

import json
import logging
from collections.abc import Iterator
from itertools import chain, count
from typing import Any
from urllib.parse import urljoin, urlparse

import extruct
from bs4 import BeautifulSoup
from extruct.jsonld import JsonLdExtractor

from ..const import (
    JSONLD_SCRIPT_TYPE,
    RDF_TYPE,
    SCHEMA_ORG,
    XSD_BOOLEAN,
    XSD_DOUBLE,
    XSD_INTEGER,
)
from ..graph import BlankNode, LoadedDocument, Literal, NamedNode, Triple, build_document

_LOGGER = logging.getLogger(__name__)

_TYPE = NamedNode(RDF_TYPE)


def _as_list(value: Any) -> list[Any]:
    return value if isinstance(value, list) else [value]


def _expand(term: str, vocab: str) -> str:
    """Resolve a bare term against ``vocab``; absolute IRIs are kept."""
    if "://" in term or term.startswith("urn:"):
        return term
    return vocab + term


def _context_vocab(context: Any, vocab: str) -> str:
    """Return the vocabulary a JSON-LD ``@context`` puts bare terms in."""
    for entry in _as_list(context):
        if isinstance(entry, str):
            parsed = urlparse(entry)
            if parsed.netloc.endswith("schema.org"):
                vocab = f"{parsed.scheme or 'https'}://schema.org/"
            else:
                _LOGGER.debug("Ignoring unsupported remote context %s", entry)
        elif isinstance(entry, dict) and isinstance(entry.get("@vocab"), str):
            vocab = entry["@vocab"]
    return vocab


def _canonical_double(value: float) -> str:
    mantissa, exponent = f"{value:E}".split("E")
    mantissa = mantissa.rstrip("0")
    if mantissa.endswith("."):
        mantissa += "0"
    return f"{mantissa}E{int(exponent)}"


def _literal(value: Any) -> Literal | None:
    if isinstance(value, bool):
        return Literal("true" if value else "false", datatype=XSD_BOOLEAN)
    if isinstance(value, int):
        return Literal(str(value), datatype=XSD_INTEGER)
    if isinstance(value, float):
        if value.is_integer() and abs(value) < 1e21:
            return Literal(str(int(value)), datatype=XSD_INTEGER)
        return Literal(_canonical_double(value), datatype=XSD_DOUBLE)
    if isinstance(value, str):
        return Literal(value)
    return None


class BlankNodeScope:
    """Blank node labels for one block of markup.

    Labels written in the markup and labels generated for anonymous nodes
    live in separate namespaces, so neither can collide with the other or
    with another block's labels.
    """

    def __init__(self, scope: str) -> None:
        self.scope = scope
        self._generated = count()

    def labelled(self, label: str) -> BlankNode:
        return BlankNode(f"{self.scope}-{label}")

    def fresh(self) -> BlankNode:
        return BlankNode(f"{self.scope}_g{next(self._generated)}")


class JsonLdFlattener:
    """Turns the parsed items of one JSON-LD block into triples."""

    def __init__(self, base_url: str, scope: str = "b0") -> None:
        self.base_url = base_url
        self.blank_nodes = BlankNodeScope(scope)

    def triples(self, data: Any, vocab: str = SCHEMA_ORG) -> Iterator[Triple]:
        """Yield the triples of one parsed JSON-LD document."""
        if isinstance(data, list):
            for item in data:
                yield from self.triples(item, vocab)
            return
        if not isinstance(data, dict):
            return
        if "@context" in data:
            vocab = _context_vocab(data["@context"], vocab)
        if "@graph" in data:
            for item in _as_list(data["@graph"]):
                yield from self.triples(item, vocab)
            if not any(not key.startswith("@") for key in data) and "@type" not in data:
                return
        yield from self._node(data, self._node_term(data), vocab)

    def _node_term(self, node: dict[str, Any]) -> NamedNode | BlankNode:
        identifier = node.get("@id")
        if isinstance(identifier, str) and identifier:
            if identifier.startswith("_:"):
                return self.blank_nodes.labelled(identifier[2:])
            return NamedNode(urljoin(self.base_url, identifier))
        return self.blank_nodes.fresh()

    def _node(self, node: dict[str, Any], subject: NamedNode | BlankNode,
              vocab: str) -> Iterator[Triple]:
        if "@context" in node:
            vocab = _context_vocab(node["@context"], vocab)

        for type_name in _as_list(node.get("@type", [])):
            if isinstance(type_name, str):
                yield Triple(subject, _TYPE, NamedNode(_expand(type_name, vocab)))

        for key, value in node.items():
            if key.startswith("@"):
                continue
            predicate = NamedNode(_expand(key, vocab))
            for item in self._values(value):
                yield from self._value(subject, predicate, item, vocab)

    def _values(self, value: Any) -> Iterator[Any]:
        for item in _as_list(value):
            if isinstance(item, dict) and ("@list" in item or "@set" in item):
                yield from self._values(item.get("@list", item.get("@set")))
            else:
                yield item

    def _value(self, subject: NamedNode | BlankNode, predicate: NamedNode, item: Any,
               vocab: str) -> Iterator[Triple]:
        if item is None:
            return
        if isinstance(item, dict):
            if "@value" in item:
                literal = self._value_object(item, vocab)
                if literal is not None:
                    yield Triple(subject, predicate, literal)
                return
            obj = self._node_term(item)
            yield Triple(subject, predicate, obj)
            if set(item) != {"@id"}:
                yield from self._node(item, obj, vocab)
            return
        literal = _literal(item)
        if literal is not None:
            yield Triple(subject, predicate, literal)

    @staticmethod
    def _value_object(item: dict[str, Any], vocab: str) -> Literal | None:
        value = item["@value"]
        if value is None:
            return None
        if isinstance(item.get("@language"), str):
            return Literal(str(value), language=item["@language"])
        if isinstance(item.get("@type"), str):
            return Literal(value if isinstance(value, str) else json.dumps(value),
                           datatype=_expand(item["@type"], vocab))
        return _literal(value)


class MicrodataFlattener:
    """Turns one top-level microdata item, as extruct reports it, into triples.

    Items look like ``{"type": ..., "id": ..., "properties": {...}}``;
    property values are strings, nested items, or lists of either.
    """

    def __init__(self, base_url: str, scope: str = "m0") -> None:
        self.base_url = base_url
        self.blank_nodes = BlankNodeScope(scope)

    def triples(self, item: dict[str, Any]) -> Iterator[Triple]:
        yield from self._item(item, self._item_term(item), SCHEMA_ORG)

    def _item_term(self, item: dict[str, Any]) -> NamedNode | BlankNode:
        itemid = item.get("id")
        if isinstance(itemid, str) and itemid:
            return NamedNode(urljoin(self.base_url, itemid))
        return self.blank_nodes.fresh()

    def _item(self, item: dict[str, Any], subject: NamedNode | BlankNode,
              vocab: str) -> Iterator[Triple]:
        types = [t for t in _as_list(item.get("type", [])) if isinstance(t, str) and t]
        for type_iri in types:
            yield Triple(subject, _TYPE, NamedNode(urljoin(self.base_url, type_iri)))
        if types:
            vocab = _item_vocab(types[0], vocab)

        for name, value in (item.get("properties") or {}).items():
            predicate = NamedNode(_expand(name, vocab))
            for entry in _as_list(value):
                if isinstance(entry, dict):
                    obj = self._item_term(entry)
                    yield Triple(subject, predicate, obj)
                    yield from self._item(entry, obj, vocab)
                elif isinstance(entry, str):
                    yield Triple(subject, predicate, Literal(entry))


def _item_vocab(type_iri: str, default: str) -> str:
    # http://schema.org/Recipe -> http://schema.org/
    cut = max(type_iri.rfind("/"), type_iri.rfind("#"))
    vocab = type_iri[:cut + 1]
    return vocab if "://" in vocab else default


def jsonld_triples(html: str | bytes, base_url: str) -> Iterator[Triple]:
    """Yield the triples of every JSON-LD block in a page, in document order.

    Args:
        html: The page markup
        base_url: URL relative ``@id`` values are resolved against

    Yields:
        Triples in the order the markup states them; malformed blocks are
        skipped
    """
    soup = BeautifulSoup(html, features="html.parser")
    scripts = soup.find_all("script", type=JSONLD_SCRIPT_TYPE)
    _LOGGER.debug("Found %d JSON-LD scripts in %s", len(scripts), base_url)

    extractor = JsonLdExtractor()
    for idx, script in enumerate(scripts):
        if not script.string or not script.string.strip():
            continue
        try:
            items = extractor.extract(str(script), base_url=base_url)
        except ValueError as e:
            _LOGGER.debug("Failed to parse JSON-LD script %d: %s", idx, e)
            continue
        flattener = JsonLdFlattener(base_url, scope=f"b{idx}")
        for item in items:
            yield from flattener.triples(item)


def microdata_triples(html: str | bytes, base_url: str) -> Iterator[Triple]:
    """Yield the triples of every top-level microdata item in a page."""
    if not html.strip():
        return
    data = extruct.extract(html, base_url=base_url, syntaxes=["microdata"], errors="log")
    items = data.get("microdata", [])
    _LOGGER.debug("Found %d microdata items in %s", len(items), base_url)
    for idx, item in enumerate(items):
        if isinstance(item, dict):
            yield from MicrodataFlattener(base_url, scope=f"m{idx}").triples(item)


def page_triples(html: str | bytes, base_url: str) -> Iterator[Triple]:
    """Yield the JSON-LD triples of a page, then its microdata triples."""
    return chain(jsonld_triples(html, base_url), microdata_triples(html, base_url))


def load_document(html: str | bytes, final_url: str) -> LoadedDocument:
    """Harvest a page's structured data into a completed document graph."""
    return build_document(page_triples(html, final_url), final_url)
