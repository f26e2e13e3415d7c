"""
Recipe graph extraction engine.

Finds schema.org Recipe markup in the semantic graph of a web page, turns it
into canonical recipe records, and parses, rescales and formats ingredient
amounts across measurement systems.
"""
from __future__ import annotations

from .exceptions import DocumentOrderError, FetchCancelled, RecipeGraphError, UnitRenderError
from .extractors import parse_recipes
from .models import JsonRecipe, JsonRecipeIngredient
from .parsers import parse_ingredient
from .units import Amount, Unit, get_unit, render, scale

__version__ = "0.1.0"

__all__ = [
    "Amount",
    "DocumentOrderError",
    "FetchCancelled",
    "JsonRecipe",
    "JsonRecipeIngredient",
    "RecipeGraphError",
    "Unit",
    "UnitRenderError",
    "get_unit",
    "parse_ingredient",
    "parse_recipes",
    "render",
    "scale",
]
