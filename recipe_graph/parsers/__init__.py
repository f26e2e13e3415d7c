"""Per-entry parsers for ingredient and instruction nodes."""
from .base_parser import BaseSubjectParser
from .ingredient_parser import IngredientParser, parse_ingredient
from .instruction_parser import (
    ListItem,
    StepParser,
    order_list_items,
    parse_instructions,
    parse_int_or_none,
    parse_step,
)

__all__ = [
    "BaseSubjectParser",
    "IngredientParser",
    "ListItem",
    "StepParser",
    "order_list_items",
    "parse_ingredient",
    "parse_instructions",
    "parse_int_or_none",
    "parse_step",
]
