"""Mutable sampler state and the read-only view handed to the evaluator."""
from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from ..common.errors import PreconditionError
from ..common.types import CountMatrix, IdArray, is_boundary
from .lexicon import Lexicon


def _readonly(array: np.ndarray) -> np.ndarray:
    view = array.view()
    view.flags.writeable = False
    return view


@dataclass(frozen=True, slots=True)
class ModelView:
    """Read-only snapshot-free view over a :class:`TaggingState`.

    The arrays share memory with the state, so a view must only be read
    between sweeps.
    """

    words: IdArray
    tags: IdArray
    transitions: CountMatrix
    emissions: CountMatrix
    transition_totals: np.ndarray
    emission_totals: np.ndarray
    lexicon: Lexicon

    @property
    def n_tags(self) -> int:
        return self.transitions.shape[0]


class TaggingState:
    """Tag sequence plus the transition and emission counts it implies.

    Row totals are kept next to each count matrix and move with every
    ``+1``/``-1`` update, so they always equal ``matrix.sum(axis=1)``.
    """

    __slots__ = (
        "words",
        "tags",
        "lexicon",
        "transitions",
        "emissions",
        "transition_totals",
        "emission_totals",
    )

    def __init__(
        self,
        words: IdArray,
        tags: IdArray,
        lexicon: Lexicon,
        transitions: CountMatrix,
        emissions: CountMatrix,
    ) -> None:
        if len(words) != len(tags):
            raise ValueError(f"{len(words)} words but {len(tags)} tags")
        if len(words) < 2 or not is_boundary(words[0]) or not is_boundary(words[-1]):
            raise PreconditionError("The word sequence must start and end with a sentence boundary")
        self.words = words
        self.tags = tags
        self.lexicon = lexicon
        self.transitions = transitions
        self.emissions = emissions
        self.transition_totals = transitions.sum(axis=1)
        self.emission_totals = emissions.sum(axis=1)

    def change_count(self, position: int, delta: int) -> None:
        """Add *delta* to every count that position *position* contributes to."""

        previous = self.tags[position - 1]
        current = self.tags[position]
        following = self.tags[position + 1]
        self.transitions[previous, current] += delta
        self.transitions[current, following] += delta
        self.emissions[current, self.words[position]] += delta
        self.transition_totals[previous] += delta
        self.transition_totals[current] += delta
        self.emission_totals[current] += delta

    def retract(self, position: int) -> None:
        self.change_count(position, -1)

    def commit(self, position: int, tag: int) -> None:
        self.tags[position] = tag
        self.change_count(position, 1)

    def view(self) -> ModelView:
        return ModelView(
            words=_readonly(self.words),
            tags=_readonly(self.tags),
            transitions=_readonly(self.transitions),
            emissions=_readonly(self.emissions),
            transition_totals=_readonly(self.transition_totals),
            emission_totals=_readonly(self.emission_totals),
            lexicon=self.lexicon,
        )


__all__ = ["ModelView", "TaggingState"]
