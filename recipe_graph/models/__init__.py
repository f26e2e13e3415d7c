"""Data models for canonical recipe records."""
from .recipe import JsonRecipe, JsonRecipeIngredient

__all__ = ["JsonRecipe", "JsonRecipeIngredient"]
