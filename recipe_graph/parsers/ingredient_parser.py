"""
Ingredient Parser.

This module turns one ``recipeIngredient`` node into quantity, unit, name and
preparation fields. Pages publish ingredients either as free text
("1 cup flour, sifted") or as structured nodes with a ``name`` and an
optional ``requiredQuantity`` QuantitativeValue.
"""
from __future__ import annotations

import logging
import re

import regex

from ..graph import Subject, is_literal, node_value, node_value_or_none, schema
from ..models.recipe import JsonRecipeIngredient
from .base_parser import BaseSubjectParser

_LOGGER = logging.getLogger(__name__)

# Leading punctuation/symbols/numbers/spaces are the quantity ("1 1/2 ", "½ ",
# "2-3 "), then everything up to the first comma, then the preparation.
_LITERAL_INGREDIENT = regex.compile(
    r"(?P<quantity>(?:\p{P}|\p{S}|\p{N}|\p{Zs})+)?"
    r"(?P<unit_and_name>[^,]+)"
    r"(?:,(?P<preparation>.*))?"
)
_LEADING_WORD = regex.compile(r"(?P<unit>\P{Zs}+)\p{Zs}+")
_NAME_AND_PREPARATION = re.compile(r"(?P<name>[^,]+)(?:,(?P<preparation>.*))?")


def _strip(value: str | None) -> str | None:
    return value.strip() if value is not None else None


class IngredientParser(BaseSubjectParser[JsonRecipeIngredient]):
    """Parses literal and structured ingredient nodes."""

    def parse(self, subject: Subject) -> JsonRecipeIngredient | None:
        if is_literal(subject.node):
            return self._parse_literal(node_value(subject.node))
        return self._parse_structured(subject)

    def _parse_literal(self, full_ingredient: str) -> JsonRecipeIngredient | None:
        """Split free text like '1 cup flour, sifted'.

        The first word after the quantity is taken as the unit whenever more
        text follows it. It is not checked against the unit registry; callers
        that display the unit fall back to the raw text when it is unknown.
        """
        match = _LITERAL_INGREDIENT.fullmatch(full_ingredient)
        if match is None:
            _LOGGER.debug("Ingredient text did not match: %r", full_ingredient)
            return None

        unit_and_name = match.group("unit_and_name").strip()
        if not unit_and_name:
            _LOGGER.debug("Ingredient text has no name: %r", full_ingredient)
            return None

        unit = None
        name = unit_and_name
        unit_match = _LEADING_WORD.match(unit_and_name)
        if unit_match is not None:
            unit = unit_match.group("unit")
            name = unit_and_name[unit_match.end():]

        return JsonRecipeIngredient(
            quantity=_strip(match.group("quantity")),
            unit=unit,
            name=name,
            preparation=_strip(match.group("preparation")),
        )

    def _parse_structured(self, subject: Subject) -> JsonRecipeIngredient | None:
        names = subject.get(schema("name"))
        name_and_preparation = node_value_or_none(names[0] if names else None)
        if name_and_preparation is None:
            _LOGGER.debug("Structured ingredient %s has no name", subject.node.id)
            return None

        match = _NAME_AND_PREPARATION.fullmatch(name_and_preparation)
        if match is None:
            _LOGGER.debug("Structured ingredient name did not match: %r",
                          name_and_preparation)
            return None

        quantity = unit = None
        required = subject.get(schema("requiredQuantity"))
        if required:
            quantitative_value = required[0]
            values = quantitative_value.get(schema("value"))
            unit_texts = quantitative_value.get(schema("unitText"))
            quantity = _strip(node_value_or_none(values[0] if values else None))
            unit = _strip(node_value_or_none(unit_texts[0] if unit_texts else None))

        return JsonRecipeIngredient(
            quantity=quantity,
            unit=unit,
            name=match.group("name").strip(),
            preparation=_strip(match.group("preparation")),
        )


_PARSER = IngredientParser()


def parse_ingredient(subject: Subject) -> JsonRecipeIngredient | None:
    """Parse one ``recipeIngredient`` node.

    Args:
        subject: A literal holding the whole ingredient line, or a node with
            a ``name`` and an optional ``requiredQuantity``

    Returns:
        The parsed ingredient, or None if the node cannot be interpreted
    """
    return _PARSER.parse(subject)
