"""Ambiguity classes: which tags each word may take, and which words each tag may emit."""
from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

import numpy as np

from ..common.errors import PreconditionError
from ..common.types import BOUNDARY, IdArray


@dataclass(slots=True)
class Lexicon:
    """Read-only ambiguity classes in both directions.

    ``n_tags`` and ``n_words`` are matrix dimensions and therefore include the
    boundary id.
    """

    tags_for_word: dict[int, tuple[int, ...]]
    words_for_tag: dict[int, tuple[int, ...]]
    n_tags: int
    n_words: int
    _emittable: np.ndarray = field(init=False, repr=False)

    def __post_init__(self) -> None:
        emittable = np.ones(self.n_tags, dtype=np.int64)
        for tag, words in self.words_for_tag.items():
            emittable[tag] = len(words)
        self._emittable = emittable

    @classmethod
    def from_entries(
        cls,
        entries: Iterable[tuple[int, Sequence[int]]],
        *,
        n_tags: int,
        n_words: int,
    ) -> "Lexicon":
        """Build both directions from ``(word_id, tag_ids)`` pairs.

        A word listed more than once keeps the union of its tags in first-seen
        order.
        """

        tags_for_word: dict[int, dict[int, None]] = {}
        words_for_tag: dict[int, dict[int, None]] = {}
        for word, tags in entries:
            word_tags = tags_for_word.setdefault(word, {})
            for tag in tags:
                word_tags[tag] = None
                words_for_tag.setdefault(tag, {})[word] = None
        return cls(
            tags_for_word={word: tuple(tags) for word, tags in tags_for_word.items()},
            words_for_tag={tag: tuple(words) for tag, words in words_for_tag.items()},
            n_tags=n_tags,
            n_words=n_words,
        )

    def admissible(self, word: int) -> tuple[int, ...]:
        """Return the admissible tags of *word* in lexicon order."""

        if word == BOUNDARY:
            raise PreconditionError("The sentence boundary has no admissible tags")
        tags = self.tags_for_word.get(word)
        if not tags:
            raise PreconditionError(f"Word id {word} has no admissible tags in the lexicon")
        return tags

    def is_fixed(self, word: int) -> bool:
        return len(self.admissible(word)) == 1

    def is_ambiguous(self, word: int) -> bool:
        return word != BOUNDARY and len(self.tags_for_word.get(word, ())) > 1

    def emittable_count(self, tag: int) -> int:
        """Number of distinct words *tag* can emit; 1 for the boundary."""

        return int(self._emittable[tag])

    @property
    def emittable_counts(self) -> np.ndarray:
        return self._emittable

    def validate(self, words: IdArray) -> None:
        """Fail fast if any non-boundary token cannot be tagged."""

        for position, word in enumerate(words.tolist()):
            if word == BOUNDARY:
                continue
            if not 0 < word < self.n_words:
                raise PreconditionError(f"Word id {word} at position {position} is out of range")
            if not self.tags_for_word.get(word):
                raise PreconditionError(
                    f"Word id {word} at position {position} has no admissible tags in the lexicon"
                )


__all__ = ["Lexicon"]
