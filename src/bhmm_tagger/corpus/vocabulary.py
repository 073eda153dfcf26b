"""Bidirectional string <-> id mapping used for words and tags."""
from __future__ import annotations

from collections.abc import Iterator

from ..common.types import BOUNDARY


class Vocabulary:
    """Assign dense ids to strings, starting at 1.

    Id ``0`` is reserved for :data:`~bhmm_tagger.common.types.BOUNDARY`, so a
    sentence edge can never be mistaken for a real word or tag.
    """

    def __init__(self) -> None:
        self._ids: dict[str, int] = {}
        self._strings: list[str] = []

    def internalize(self, element: str) -> int:
        """Return the id of *element*, assigning the next free id if it is new."""

        identifier = self._ids.get(element)
        if identifier is None:
            self._strings.append(element)
            identifier = len(self._strings)
            self._ids[element] = identifier
        return identifier

    def lookup(self, element: str) -> int:
        """Return the id of a known *element*; raise ``KeyError`` otherwise."""

        return self._ids[element]

    def resolve(self, identifier: int) -> str:
        if identifier == BOUNDARY or not 0 < identifier <= len(self._strings):
            raise KeyError(identifier)
        return self._strings[identifier - 1]

    def items(self) -> Iterator[tuple[int, str]]:
        """Yield ``(id, string)`` pairs in id order."""

        for index, element in enumerate(self._strings, start=1):
            yield index, element

    def __contains__(self, element: object) -> bool:
        return element in self._ids

    def __len__(self) -> int:
        return len(self._strings)

    def __repr__(self) -> str:
        return f"Vocabulary(size={len(self)})"


__all__ = ["Vocabulary"]
