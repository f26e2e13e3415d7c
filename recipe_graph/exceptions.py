"""Exceptions raised by the recipe graph engine."""
from __future__ import annotations

from typing import Any


class RecipeGraphError(Exception):
    """Base class for all errors raised by this package."""


class UnitRenderError(RecipeGraphError):
    """A unit's message template could not format an amount.

    This points at a malformed template in the unit table, not at user
    input, so it is never caught inside the package.
    """

    def __init__(self, message: str, *, num: float, unit: Any, length: str) -> None:
        super().__init__(message)
        self.num = num
        self.unit = unit
        self.length = length


class DocumentOrderError(RecipeGraphError):
    """The document order was used out of sequence."""


class FetchCancelled(RecipeGraphError):
    """The caller aborted an in-flight transfer."""
