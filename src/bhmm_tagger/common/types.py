"""Shared type definitions for the BHMM tagger.

Word and tag identifiers are plain integers stored in numpy arrays. The id
``BOUNDARY`` is reserved for sentence edges in both the word and the tag
sequence; :class:`~bhmm_tagger.corpus.vocabulary.Vocabulary` never assigns it
to a real string.
"""
from __future__ import annotations

from typing import Final, TypeAlias

import numpy as np
from numpy.typing import NDArray

BOUNDARY: Final[int] = 0

# Sequences of word or tag ids, one entry per corpus position.
IdArray: TypeAlias = NDArray[np.int64]

# Transition (tags x tags) and emission (tags x words) count tables.
CountMatrix: TypeAlias = NDArray[np.int64]

ID_DTYPE = np.int64


def is_boundary(identifier: int) -> bool:
    """Return ``True`` when *identifier* marks a sentence edge."""

    return int(identifier) == BOUNDARY


__all__ = [
    "BOUNDARY",
    "CountMatrix",
    "ID_DTYPE",
    "IdArray",
    "is_boundary",
]
