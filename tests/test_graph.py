"""Tests for the graph query layer and document order."""

import pytest

from recipe_graph.const import SCHEMA_ORG_HTTP
from recipe_graph.exceptions import DocumentOrderError
from recipe_graph.graph import (
    BlankNode,
    DocumentOrder,
    GraphBuilder,
    Literal,
    NamedNode,
    Namespace,
    Subject,
    Triple,
    TripleStore,
    all_of_type,
    node_url,
    node_urls,
    node_value_or_none,
    node_values,
    rewrite_schema,
)

from .conftest import RDF_TYPE_NODE, order_of, s, store_with


class TestTripleStore:
    """Tests for the in-memory store."""

    def test_duplicates_are_ignored(self):
        store = TripleStore()
        triple = Triple(BlankNode("a"), s("name"), Literal("x"))
        assert store.add(triple) is True
        assert store.add(triple) is False
        assert len(store) == 1

    def test_objects_in_insertion_order(self):
        node = BlankNode("a")
        store = store_with([
            Triple(node, s("recipeIngredient"), Literal("b")),
            Triple(node, s("recipeIngredient"), Literal("a")),
            Triple(node, s("name"), Literal("n")),
        ])
        assert store.objects(node, s("recipeIngredient")) == [Literal("b"), Literal("a")]
        assert store.objects(node, s("missing")) == []

    def test_objects_are_scoped_to_a_graph(self):
        node = BlankNode("a")
        named = NamedNode("https://example.com/graph")
        store = store_with([Triple(node, s("name"), Literal("n"), named)])
        assert store.objects(node, s("name")) == []
        assert store.objects(node, s("name"), named) == [Literal("n")]

    def test_match(self):
        a, b = BlankNode("a"), BlankNode("b")
        store = store_with([
            Triple(a, RDF_TYPE_NODE, s("Recipe")),
            Triple(b, RDF_TYPE_NODE, s("HowToStep")),
            Triple(a, s("name"), Literal("n")),
        ])
        assert [t.subject for t in store.match(predicate=RDF_TYPE_NODE)] == [a, b]
        assert [t.subject for t in store.match(obj=s("Recipe"))] == [a]

    def test_to_ntriples(self):
        store = store_with([
            Triple(NamedNode("https://example.com/r"), s("name"), Literal('Say "hi"\n')),
            Triple(BlankNode("b0"), s("position"), Literal("1", datatype="http://www.w3.org/2001/XMLSchema#integer")),
        ])
        assert store.to_ntriples().splitlines() == [
            '<https://example.com/r> <https://schema.org/name> "Say \\"hi\\"\\n" .',
            '_:b0 <https://schema.org/position> "1"^^<http://www.w3.org/2001/XMLSchema#integer> .',
        ]


class TestSubject:
    """Tests for Subject navigation."""

    def test_get_without_order_uses_store_order(self):
        node = BlankNode("a")
        store = store_with([
            Triple(node, s("recipeIngredient"), Literal("second")),
            Triple(node, s("recipeIngredient"), Literal("first")),
        ])
        values = node_values(Subject(store, node).get(s("recipeIngredient")))
        assert values == ["second", "first"]

    def test_get_with_order_sorts_by_first_seen(self):
        node = BlankNode("a")
        first, second = Literal("first"), Literal("second")
        store = store_with([
            Triple(node, s("recipeIngredient"), second),
            Triple(node, s("recipeIngredient"), first),
        ])
        order = order_of(node, first, second)
        values = node_values(Subject(store, node).get(s("recipeIngredient"), order))
        assert values == ["first", "second"]

    def test_unordered_nodes_sort_last(self):
        node = BlankNode("a")
        known, unknown = Literal("known"), Literal("unknown")
        store = store_with([
            Triple(node, s("recipeIngredient"), unknown),
            Triple(node, s("recipeIngredient"), known),
        ])
        values = node_values(Subject(store, node).get(s("recipeIngredient"), {known.id: 0}))
        assert values == ["known", "unknown"]

    def test_missing_predicate_is_empty(self):
        store = TripleStore()
        assert Subject(store, BlankNode("a")).get(s("name")) == []

    def test_node_helpers(self):
        node = BlankNode("a")
        page = NamedNode("https://example.com/page")
        store = store_with([
            Triple(node, s("url"), page),
            Triple(node, s("url"), Literal("text")),
        ])
        objects = Subject(store, node).get(s("url"))
        assert node_urls(objects) == ["https://example.com/page"]
        assert node_url(page) == "https://example.com/page"
        assert node_values(objects) == ["text"]
        assert node_value_or_none(objects[0]) is None
        assert node_value_or_none(objects[1]) == "text"
        assert node_value_or_none(None) is None

    def test_all_of_type(self):
        a, b = BlankNode("a"), BlankNode("b")
        store = store_with([
            Triple(a, RDF_TYPE_NODE, s("Recipe")),
            Triple(b, RDF_TYPE_NODE, s("Person")),
        ])
        assert [r.node for r in all_of_type(store, s("Recipe"))] == [a]
        assert all_of_type(store, s("HowToStep")) == []


class TestNamespace:
    """Tests for IRI prefixes."""

    def test_builds_named_nodes(self):
        ns = Namespace("https://schema.org/")
        assert ns("Recipe") == NamedNode("https://schema.org/Recipe")

    def test_rejects_relative_base(self):
        with pytest.raises(ValueError):
            Namespace("schema")

    def test_rewrite_schema(self):
        assert rewrite_schema(NamedNode(SCHEMA_ORG_HTTP + "Recipe")) == s("Recipe")
        assert rewrite_schema(s("Recipe")) == s("Recipe")
        assert rewrite_schema(Literal(SCHEMA_ORG_HTTP)) == Literal(SCHEMA_ORG_HTTP)


class TestDocumentOrder:
    """Tests for first-seen order tracking."""

    def test_first_sighting_wins(self):
        order = DocumentOrder()
        assert order.record("a") == 0
        assert order.record("b") == 1
        assert order.record("a") == 0
        assert dict(order) == {"a": 0, "b": 1}

    def test_observe_records_subject_then_object(self):
        order = DocumentOrder()
        order.observe(Triple(BlankNode("r"), s("name"), Literal("n")))
        assert order["_:r"] == 0
        assert order['"n"'] == 1

    def test_complete_freezes(self):
        order = DocumentOrder()
        order.record("a")
        order.complete()
        assert order.completed
        with pytest.raises(DocumentOrderError):
            order.record("b")


class TestGraphBuilder:
    """Tests for streaming triples into a document graph."""

    def test_rewrites_http_schema_and_records_order(self):
        builder = GraphBuilder("https://example.com/r")
        node = BlankNode("r")
        builder.add(Triple(node, RDF_TYPE_NODE, NamedNode(SCHEMA_ORG_HTTP + "Recipe")))
        builder.add(Triple(node, NamedNode(SCHEMA_ORG_HTTP + "name"), Literal("Soup")))
        loaded = builder.finish()

        assert loaded.final_url == "https://example.com/r"
        assert loaded.document_order.completed
        assert [r.node for r in all_of_type(loaded.store, s("Recipe"))] == [node]
        assert loaded.store.objects(node, s("name")) == [Literal("Soup")]
        assert loaded.document_order[node.id] == 0
        assert loaded.document_order[s("Recipe").id] == 1
