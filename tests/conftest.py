"""Shared fixtures for recipe graph tests."""
from __future__ import annotations

import pytest

from recipe_graph.const import RDF_TYPE, SCHEMA_ORG
from recipe_graph.graph import (
    BlankNode,
    DocumentOrder,
    Literal,
    NamedNode,
    Triple,
    TripleStore,
    build_document,
)

FINAL_URL = "https://example.com/recipes/pancakes"


def s(name: str) -> NamedNode:
    return NamedNode(SCHEMA_ORG + name)


RDF_TYPE_NODE = NamedNode(RDF_TYPE)


def store_with(triples: list[Triple]) -> TripleStore:
    store = TripleStore()
    for triple in triples:
        store.add(triple)
    return store


def order_of(*terms) -> DocumentOrder:
    """A completed document order that saw ``terms`` in the given order."""
    order = DocumentOrder()
    for term in terms:
        order.record(term.id)
    order.complete()
    return order


@pytest.fixture
def recipe_node() -> BlankNode:
    return BlankNode("recipe")


@pytest.fixture
def literal_recipe_document(recipe_node):
    """A document with one recipe using literal ingredients and steps."""
    triples = [
        Triple(recipe_node, RDF_TYPE_NODE, s("Recipe")),
        Triple(recipe_node, s("name"), Literal("Pancakes")),
        Triple(recipe_node, s("recipeYield"), Literal("4")),
        Triple(recipe_node, s("recipeCategory"), Literal(" Breakfast ")),
        Triple(recipe_node, s("recipeIngredient"), Literal("1 cup flour, sifted")),
        Triple(recipe_node, s("recipeIngredient"), Literal("2 eggs")),
        Triple(recipe_node, s("recipeInstructions"), Literal("Step 1")),
        Triple(recipe_node, s("recipeInstructions"), Literal("Step 2")),
        Triple(recipe_node, s("recipeInstructions"), Literal("Last step.")),
    ]
    return build_document(triples, FINAL_URL)
