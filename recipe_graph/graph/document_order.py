"""Document order: the position at which each node was first seen."""
from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping

from ..exceptions import DocumentOrderError
from .terms import Triple

_LOGGER = logging.getLogger(__name__)


class DocumentOrder(Mapping[str, int]):
    """Maps term ids to the order in which a document stream first mentioned them.

    Positions are assigned while triples stream in and are frozen by
    :meth:`complete`. Sorting by document order is only meaningful once every
    node of the document has been seen, so nothing may be recorded afterwards.
    """

    def __init__(self) -> None:
        self._positions: dict[str, int] = {}
        self._completed = False

    @property
    def completed(self) -> bool:
        return self._completed

    def record(self, term_id: str) -> int:
        """Assign ``term_id`` the next position unless it already has one."""
        if self._completed:
            raise DocumentOrderError(
                f"Document order is complete; cannot record {term_id!r}")
        position = self._positions.get(term_id)
        if position is None:
            position = len(self._positions)
            self._positions[term_id] = position
        return position

    def observe(self, triple: Triple) -> None:
        """Record the subject, then the object, of a streamed triple."""
        self.record(triple.subject.id)
        self.record(triple.object.id)

    def complete(self) -> None:
        """Mark the end of the document stream."""
        self._completed = True
        _LOGGER.debug("Document order complete with %d nodes", len(self._positions))

    def __getitem__(self, term_id: str) -> int:
        return self._positions[term_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._positions)

    def __len__(self) -> int:
        return len(self._positions)
