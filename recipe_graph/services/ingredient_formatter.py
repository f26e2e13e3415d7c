"""
Ingredient Formatter.

This module turns canonical ingredients back into display text, scaled by a
multiple. Amounts in a known unit go through the unit registry so they land
in a sensible unit; anything else keeps the unit text the recipe used.
"""
from __future__ import annotations

import logging
import math
import re

from ..const import LENGTH_ABBREV
from ..models.recipe import JsonRecipe, JsonRecipeIngredient
from ..units import Amount, RenderLength, get_unit, render, scale

_LOGGER = logging.getLogger(__name__)

# Map unicode fractions to their values
FRACTION_VALUES = {
    "½": 1 / 2,
    "⅓": 1 / 3,
    "⅔": 2 / 3,
    "¼": 1 / 4,
    "¾": 3 / 4,
    "⅕": 1 / 5,
    "⅛": 1 / 8,
    "⅜": 3 / 8,
    "⅝": 5 / 8,
    "⅞": 7 / 8,
}

_UNICODE_FRACTION = re.compile(
    r"(\d*)\s*([" + "".join(FRACTION_VALUES) + r"])")


def _parse_fraction(fraction_str: str) -> float:
    """Parse a number or a fraction string like '1/2' or '3/4'.

    Raises:
        ValueError: If the string is not a number or fraction
        ZeroDivisionError: If the denominator is zero
    """
    if "/" not in fraction_str:
        return float(fraction_str)

    parts = fraction_str.split("/")
    if len(parts) != 2:
        raise ValueError(f"Invalid fraction format: {fraction_str}")

    numerator = float(parts[0])
    denominator = float(parts[1])
    if denominator == 0:
        raise ZeroDivisionError(f"Fraction has zero denominator: {fraction_str}")
    return numerator / denominator


def _apply_unicode_fractions(text: str) -> str:
    """Replace unicode fractions with decimals, e.g. '2½' -> '2.5', '½' -> '0.5'."""
    def replace(match: re.Match) -> str:
        whole = int(match.group(1)) if match.group(1) else 0
        return f" {whole + FRACTION_VALUES[match.group(2)]!r} "

    return _UNICODE_FRACTION.sub(replace, text)


def parse_quantity(quantity_str: str | None) -> float | None:
    """Parse quantity text that may contain fractions.

    Args:
        quantity_str: Text like '2', '1/2', '1 1/2', '2.5', '2½'

    Returns:
        The value, or None if the text is not a plain quantity (e.g. '2-3')

    Examples:
        >>> parse_quantity('1 1/2')
        1.5
        >>> parse_quantity('¾')
        0.75
    """
    if not quantity_str or not quantity_str.strip():
        return None
    try:
        parts = _apply_unicode_fractions(quantity_str).split()
        quantity = sum(_parse_fraction(part) for part in parts)
    except (ValueError, ZeroDivisionError) as e:
        _LOGGER.debug("Failed to parse quantity '%s': %s", quantity_str, e)
        return None
    if not math.isfinite(quantity):
        _LOGGER.debug("Ignoring non-finite quantity '%s'", quantity_str)
        return None
    return quantity


def format_quantity(quantity: float | int | None) -> str:
    """
    Format quantity to remove unnecessary decimals.

    Args:
        quantity: The numeric quantity (can be int, float, or None)

    Returns:
        Formatted string (empty string if quantity is None)

    Examples:
        >>> format_quantity(2.0)
        '2'
        >>> format_quantity(2.5)
        '2.5'
        >>> format_quantity(2.333)
        '2.33'
    """
    if quantity is None:
        return ""

    if not math.isfinite(quantity):
        return str(quantity)

    if quantity == int(quantity):
        return str(int(quantity))

    return f"{quantity:.2f}".rstrip("0").rstrip(".")


def _format_amount(ingredient: JsonRecipeIngredient, multiple: float,
                   length: RenderLength) -> str:
    quantity = parse_quantity(ingredient.quantity)
    if quantity is None:
        # Nothing to scale; show what the recipe said.
        return " ".join(part for part in (ingredient.quantity, ingredient.unit) if part)

    unit = get_unit(ingredient.unit) if ingredient.unit else None
    if unit is None:
        if ingredient.unit:
            _LOGGER.debug("Unknown unit %r, keeping it as written", ingredient.unit)
        return " ".join(
            part for part in (format_quantity(quantity * multiple), ingredient.unit) if part)

    return render(scale(Amount(num=quantity, unit=unit), multiple), length)


def scale_ingredient(
    ingredient: JsonRecipeIngredient,
    multiple: float = 1,
    length: RenderLength = LENGTH_ABBREV,
) -> str:
    """Format one ingredient for display, scaled by ``multiple``.

    Args:
        ingredient: The ingredient to format
        multiple: Factor to scale the quantity by
        length: 'long' or 'abbrev' unit names for units the registry knows

    Returns:
        Text like '2 C flour, sifted'
    """
    text = " ".join(
        part for part in (_format_amount(ingredient, multiple, length), ingredient.name) if part)
    if ingredient.preparation:
        text = f"{text}, {ingredient.preparation}"
    return text


def scale_recipe_ingredients(
    recipe: JsonRecipe,
    target_yield: int | float | None = None,
    length: RenderLength = LENGTH_ABBREV,
) -> list[str]:
    """Format a recipe's ingredients, scaled to a target yield.

    Args:
        recipe: The recipe whose ingredients to format
        target_yield: Servings to scale to; None keeps the recipe's amounts
        length: 'long' or 'abbrev' unit names

    Returns:
        One display string per ingredient
    """
    multiple: float = 1
    if target_yield is not None:
        try:
            original_yield = int(recipe.recipe_yield) if recipe.recipe_yield else None
        except ValueError:
            original_yield = None
        if original_yield is None or original_yield <= 0:
            _LOGGER.warning(
                "Cannot scale recipe: original yield not available or invalid")
        elif target_yield <= 0:
            _LOGGER.warning("Cannot scale recipe: target yield must be positive")
        else:
            multiple = target_yield / original_yield
            _LOGGER.info("Scaling ingredients from %d to %s servings (factor: %.2f)",
                         original_yield, target_yield, multiple)

    return [scale_ingredient(ingredient, multiple, length)
            for ingredient in recipe.recipe_ingredient]
