"""
Recipe extraction from a document graph.

This module finds every schema.org Recipe in a populated graph and assembles
a canonical :class:`JsonRecipe` for each, delegating ingredient and
instruction nodes to their parsers.
"""
from __future__ import annotations

import logging
import re
from collections.abc import Mapping

from ..exceptions import DocumentOrderError
from ..graph import DocumentOrder, Subject, TripleStore, all_of_type, node_values, schema
from ..models.recipe import JsonRecipe, JsonRecipeIngredient
from ..parsers import parse_ingredient, parse_instructions

_LOGGER = logging.getLogger(__name__)

_NUMERIC_YIELD = re.compile(r"\s*[0-9]+\s*")


class RecipeExtractor:
    """Extracts canonical recipes from one document's graph.

    The graph and its document order must be fully populated before the
    extractor is created; sorting by document order is meaningless while the
    document is still streaming.
    """

    def __init__(self, store: TripleStore, final_url: str,
                 document_order: Mapping[str, int]) -> None:
        """Initialize the extractor.

        Args:
            store: The document's triples
            final_url: The URL the document was fetched from, after redirects
            document_order: Position at which each node was first seen

        Raises:
            DocumentOrderError: If the document order is still being recorded
        """
        if isinstance(document_order, DocumentOrder) and not document_order.completed:
            raise DocumentOrderError(
                "Document order must be complete before extracting recipes")
        self.store = store
        self.final_url = final_url
        self.document_order = document_order

    def extract_recipes(self) -> list[JsonRecipe]:
        """Assemble a record for every Recipe-typed node.

        Returns:
            One record per recipe; empty if the document has no recipe markup
        """
        recipes = [self._build_recipe(subject)
                   for subject in all_of_type(self.store, schema("Recipe"))]
        _LOGGER.info("Found %d recipe(s) in %s", len(recipes), self.final_url)
        return recipes

    def _build_recipe(self, recipe: Subject) -> JsonRecipe:
        names = node_values(recipe.get(schema("name")))
        return JsonRecipe(
            name=names[0] if names else None,
            recipe_yield=self._recipe_yield(recipe),
            recipe_ingredient=self._ingredients(recipe),
            recipe_instructions=parse_instructions(
                recipe.get(schema("recipeInstructions"), self.document_order)),
            recipe_category=[category.strip() for category in
                             node_values(recipe.get(schema("recipeCategory")))],
            source_url=self.final_url,
        )

    def _recipe_yield(self, recipe: Subject) -> str | None:
        # Only a bare number is a usable serving count; "4-6" or "Serves 4"
        # are dropped rather than guessed at.
        for servings in node_values(recipe.get(schema("recipeYield"))):
            if _NUMERIC_YIELD.fullmatch(servings):
                return servings
            _LOGGER.debug("Ignoring non-numeric recipeYield %r", servings)
        return None

    def _ingredients(self, recipe: Subject) -> list[JsonRecipeIngredient]:
        ingredients = []
        for node in recipe.get(schema("recipeIngredient"), self.document_order):
            ingredient = parse_ingredient(node)
            if ingredient is None:
                _LOGGER.debug("Dropping unparseable ingredient %s", node.node.id)
                continue
            ingredients.append(ingredient)
        return ingredients


def parse_recipes(store: TripleStore, final_url: str,
                  document_order: Mapping[str, int]) -> list[JsonRecipe]:
    """Extract every recipe from a populated document graph.

    Args:
        store: The document's triples
        final_url: The URL the document was fetched from, after redirects
        document_order: Position at which each node was first seen

    Returns:
        The recipes found; an empty list means the document has none
    """
    return RecipeExtractor(store, final_url, document_order).extract_recipes()
