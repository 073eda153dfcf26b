"""Convergence metrics for the sampler: likelihood, accuracy and VI.

Every function here only reads its inputs. The evaluator is called between
sweeps with a :class:`~bhmm_tagger.model.state.ModelView`.
"""
from __future__ import annotations

import logging
import math
from typing import Optional

import numpy as np

from ..common.types import BOUNDARY, IdArray
from ..model.lexicon import Lexicon
from ..model.sampler import Evaluation
from ..model.state import ModelView
from ..utils.stats import entropy_bits, mutual_information_bits, safe_div

logger = logging.getLogger(__name__)


def log_likelihood(view: ModelView, alpha: float, beta: float) -> float:
    """Natural-log likelihood of the current tag sequence.

    Sums ``ln(emission * backward transition)`` over non-boundary positions,
    using the counts as they stand, i.e. with each position's own
    contribution included.
    """

    tags = view.tags
    positions = np.flatnonzero(tags[1:] != BOUNDARY) + 1
    if positions.size == 0:
        return 0.0

    current = tags[positions]
    previous = tags[positions - 1]
    words = view.words[positions]
    emittable = view.lexicon.emittable_counts

    emission = (view.emissions[current, words] + beta) / (
        view.emission_totals[current] + beta * emittable[current]
    )
    transition = (view.transitions[previous, current] + alpha) / (
        view.transition_totals[previous] + alpha * view.n_tags
    )
    return float(np.log(emission * transition).sum())


def _ambiguous_mask(words: IdArray, lexicon: Lexicon) -> np.ndarray:
    ambiguous = np.zeros(lexicon.n_words, dtype=bool)
    for word in lexicon.tags_for_word:
        ambiguous[word] = lexicon.is_ambiguous(word)
    return (words != BOUNDARY) & ambiguous[words]


def accuracy(tags: IdArray, gold: Optional[IdArray], words: IdArray, lexicon: Lexicon) -> float:
    """Percentage of ambiguous tokens tagged as in *gold*.

    Unambiguous tokens are excluded. Returns NaN when there is no gold
    sequence or no ambiguous token.
    """

    if gold is None:
        return math.nan
    considered = _ambiguous_mask(words, lexicon)
    total = int(considered.sum())
    correct = int((tags[considered] == gold[considered]).sum())
    return safe_div(100.0 * correct, total, default=math.nan)


def contingency_table(gold: IdArray, tags: IdArray, n_tags: int) -> np.ndarray:
    """Cross tabulation ``C[gold_tag, predicted_tag]`` over all positions."""

    cross = np.zeros((n_tags, n_tags), dtype=np.int64)
    np.add.at(cross, (gold, tags), 1)
    return cross


def variation_of_information(gold: Optional[IdArray], tags: IdArray, n_tags: int) -> float:
    """Variation of Information between gold and predicted taggings (Meila 2003).

    ``H(gold) + H(predicted) - 2 I(gold; predicted)`` in bits. Boundary cells
    are tabulated but excluded from the marginals, and probabilities are
    normalised by the number of non-boundary predicted positions.
    """

    if gold is None:
        return math.nan
    cross = contingency_table(gold, tags, n_tags)
    n_tokens = float(np.count_nonzero(tags != BOUNDARY))
    if n_tokens == 0:
        return 0.0

    inner = cross[1:, 1:]
    gold_marginal = inner.sum(axis=1)
    predicted_marginal = inner.sum(axis=0)

    entropy = entropy_bits(gold_marginal, n_tokens) + entropy_bits(predicted_marginal, n_tokens)
    mutual_information = mutual_information_bits(inner, gold_marginal, predicted_marginal, n_tokens)
    return entropy - 2 * mutual_information


def evaluate(view: ModelView, gold: Optional[IdArray], alpha: float, beta: float) -> Evaluation:
    """Compute all three metrics for the current state."""

    result = Evaluation(
        accuracy=accuracy(view.tags, gold, view.words, view.lexicon),
        likelihood=log_likelihood(view, alpha, beta),
        vi=variation_of_information(gold, view.tags, view.n_tags),
    )
    logger.debug(
        "Evaluated state",
        extra={
            "accuracy": result.accuracy,
            "likelihood": round(result.likelihood, 3),
            "vi": result.vi,
            "positions": len(view.tags),
        },
    )
    return result


__all__ = [
    "accuracy",
    "contingency_table",
    "evaluate",
    "log_likelihood",
    "variation_of_information",
]
