"""Initial tag assignment and sufficient statistics for the sampler."""
from __future__ import annotations

import logging

import numpy as np

from ..common.types import ID_DTYPE, CountMatrix, IdArray, is_boundary
from ..utils.logging_setup import VERBOSE
from .lexicon import Lexicon
from .state import TaggingState

logger = logging.getLogger(__name__)


def initialize_tags(words: IdArray, lexicon: Lexicon, rng: np.random.Generator) -> IdArray:
    """Draw a tag uniformly from each word's admissible set.

    Boundaries get ``BOUNDARY``; fixed words get their single tag without
    consuming randomness.
    """

    lexicon.validate(words)
    tags = np.zeros(len(words), dtype=ID_DTYPE)
    for position, word in enumerate(words.tolist()):
        if is_boundary(word):
            continue
        admissible = lexicon.admissible(word)
        if lexicon.is_fixed(word):
            tags[position] = admissible[0]
        else:
            tags[position] = admissible[int(rng.integers(len(admissible)))]
    return tags


def initialize_transitions(n_tags: int, tags: IdArray) -> CountMatrix:
    """Count ``(previous tag, tag)`` pairs over the whole sequence."""

    transitions = np.zeros((n_tags, n_tags), dtype=np.int64)
    np.add.at(transitions, (tags[:-1], tags[1:]), 1)
    return transitions


def initialize_emissions(n_tags: int, n_words: int, tags: IdArray, words: IdArray) -> CountMatrix:
    """Count ``(tag, word)`` pairs over the whole sequence."""

    emissions = np.zeros((n_tags, n_words), dtype=np.int64)
    np.add.at(emissions, (tags, words), 1)
    return emissions


def build_state(words: IdArray, tags: IdArray, lexicon: Lexicon) -> TaggingState:
    """Wrap *tags* and the counts it implies in a :class:`TaggingState`."""

    if len(words) != len(tags):
        raise ValueError(f"{len(words)} words but {len(tags)} tags")
    words = np.asarray(words, dtype=ID_DTYPE)
    tags = np.array(tags, dtype=ID_DTYPE)
    transitions = initialize_transitions(lexicon.n_tags, tags)
    emissions = initialize_emissions(lexicon.n_tags, lexicon.n_words, tags, words)
    return TaggingState(words, tags, lexicon, transitions, emissions)


def initialize_state(words: IdArray, lexicon: Lexicon, rng: np.random.Generator) -> TaggingState:
    logger.info("Initializing tag sequence")
    tags = initialize_tags(words, lexicon, rng)
    logger.info("Initializing transition and emission matrices")
    state = build_state(words, tags, lexicon)
    if logger.isEnabledFor(VERBOSE):
        logger.log(VERBOSE, "Tags: %s", tags.tolist())
        logger.log(VERBOSE, "Transitions: %s", state.transitions.tolist())
        logger.log(VERBOSE, "Emissions: %s", state.emissions.tolist())
    return state


__all__ = [
    "build_state",
    "initialize_emissions",
    "initialize_state",
    "initialize_tags",
    "initialize_transitions",
]
