"""
Instruction Step Parser.

This module turns the ``recipeInstructions`` nodes of a recipe into an
ordered list of step texts. Steps are either plain text or HowToStep nodes
with a ``text`` and an optional integer ``position``.
"""
from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Generic, TypeVar

from ..graph import Subject, is_literal, node_value, node_value_or_none, schema
from .base_parser import BaseSubjectParser

_LOGGER = logging.getLogger(__name__)

T = TypeVar("T")

_LEADING_INT = re.compile(r"\s*([+-]?[0-9]+)")


@dataclass(frozen=True)
class ListItem(Generic[T]):
    """An entry of a list with an optional explicit position."""

    value: T
    position: int | None = None


def parse_int_or_none(value: str | None) -> int | None:
    """Parse the leading integer of ``value``, e.g. '3', ' 3 ', '3rd'.

    Returns:
        The integer, or None if the text does not start with one
    """
    if value is None:
        return None
    match = _LEADING_INT.match(value)
    return int(match.group(1)) if match else None


class StepParser(BaseSubjectParser[ListItem[str]]):
    """Parses one instruction node into its text and position.

    TODO: Handle HowToSection nodes whose itemListElement holds the steps.
    """

    def parse(self, subject: Subject) -> ListItem[str] | None:
        if is_literal(subject.node):
            return ListItem(node_value(subject.node))

        positions = subject.get(schema("position"))
        position = parse_int_or_none(node_value_or_none(positions[0] if positions else None))
        texts = subject.get(schema("text"))
        value = node_value_or_none(texts[0] if texts else None)
        if value is None:
            _LOGGER.debug("Dropping instruction step %s without text", subject.node.id)
            return None
        return ListItem(value, position)


def _list_item_key(item: ListItem) -> tuple[bool, int]:
    # Items without a position go first, keeping their relative order.
    if item.position is None:
        return (False, 0)
    return (True, item.position)


def order_list_items(items: Iterable[ListItem[T] | None]) -> list[T]:
    """Drop missing items and sort the rest by position.

    Items without a position come before every positioned item. The sort is
    stable, so items that compare equal keep their input order.
    """
    present = [item for item in items if item is not None]
    present.sort(key=_list_item_key)
    return [item.value for item in present]


_PARSER = StepParser()


def parse_step(subject: Subject) -> ListItem[str] | None:
    """Parse one ``recipeInstructions`` node."""
    return _PARSER.parse(subject)


def parse_instructions(steps: Iterable[Subject]) -> list[str]:
    """Parse document-ordered instruction nodes into ordered step texts."""
    return order_list_items(parse_step(step) for step in steps)
