"""Services built on the extraction core: end-to-end extraction and display formatting."""
from .ingredient_formatter import (
    format_quantity,
    parse_quantity,
    scale_ingredient,
    scale_recipe_ingredients,
)
from .recipe_service import (
    extract_document_from_url,
    parse_recipes_from_html,
    parse_recipes_from_url,
)

__all__ = [
    "extract_document_from_url",
    "format_quantity",
    "parse_quantity",
    "parse_recipes_from_html",
    "parse_recipes_from_url",
    "scale_ingredient",
    "scale_recipe_ingredients",
]
