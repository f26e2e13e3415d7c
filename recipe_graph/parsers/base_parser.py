"""
Base Subject Parser.

This module defines the base interface for parsers that turn one graph node
into one structured entry of a recipe.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from ..graph import Subject

T = TypeVar("T")


class BaseSubjectParser(ABC, Generic[T]):
    """Abstract base class for per-entry parsers.

    A parser returns None when the node cannot be interpreted; callers drop
    such entries and carry on with the rest of the document.
    """

    @abstractmethod
    def parse(self, subject: Subject) -> T | None:
        """Parse one node.

        Args:
            subject: The node holding the entry, either a literal or a
                structured node

        Returns:
            The parsed entry, or None if the node cannot be interpreted
        """
        pass
