"""Collapsed Gibbs sampler with simulated annealing for the bigram BHMM.

Each sweep visits the ambiguous positions left to right. A position first
removes its own contribution from the counts, then scores every admissible tag
with the Dirichlet-multinomial posterior predictive

    (E[c, w] + beta) / (sum E[c] + beta * |words(c)|)
    * (T[p, c] + alpha) / (sum T[p] + alpha * K)
    * (T[c, f] + [c == f] + alpha) / (sum T[c] + [c == p] + alpha * K)

where ``p`` and ``f`` are the current neighbouring tags and ``K`` is the number
of tag ids including the boundary. The two indicator terms account for the
candidate's own outgoing transition when it equals a neighbour. Scores are
tempered by ``1 / temperature`` and a tag is drawn by inverse-CDF sampling,
after which the counts are restored with the new tag.
"""
from __future__ import annotations

import logging
import math
from collections.abc import Callable
from dataclasses import dataclass
from typing import Optional

import numpy as np

from ..common.types import BOUNDARY, ID_DTYPE
from .schedule import AnnealingSchedule
from .state import ModelView, TaggingState

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Evaluation:
    accuracy: float
    likelihood: float
    vi: float


@dataclass(frozen=True, slots=True)
class ProgressRecord:
    """Metrics reported after a sweep; ``sweep`` counts from 1."""

    sweep: int
    accuracy: float
    likelihood: float
    vi: float
    temperature: float


Evaluator = Callable[[ModelView], Evaluation]


def sample_index(masses: np.ndarray, rng: np.random.Generator) -> int:
    """Draw an index with probability proportional to *masses*.

    The draw ``u`` is uniform on ``[0, total)`` and the first index whose
    cumulative mass is strictly greater than ``u`` wins.
    """

    cumulative = np.cumsum(masses)
    draw = rng.random() * cumulative[-1]
    index = int(np.searchsorted(cumulative, draw, side="right"))
    return min(index, len(masses) - 1)


class GibbsSampler:
    """Owns a :class:`TaggingState` and resamples it in place."""

    def __init__(
        self,
        state: TaggingState,
        *,
        alpha: float,
        beta: float,
        schedule: AnnealingSchedule,
        rng: np.random.Generator,
        evaluator: Optional[Evaluator] = None,
        dbg: int = 0,
    ) -> None:
        if alpha <= 0 or beta <= 0:
            raise ValueError(f"alpha and beta must be positive, got alpha={alpha}, beta={beta}")
        if dbg < 0:
            raise ValueError(f"dbg must be non-negative, got {dbg}")
        self._state = state
        self.alpha = alpha
        self.beta = beta
        self.schedule = schedule
        self.rng = rng
        self.evaluator = evaluator
        self.dbg = dbg

        lexicon = state.lexicon
        self._candidates: dict[int, np.ndarray] = {
            word: np.asarray(tags, dtype=ID_DTYPE)
            for word, tags in lexicon.tags_for_word.items()
            if len(tags) > 1
        }
        self._positions = [
            position
            for position, word in enumerate(state.words.tolist())
            if word != BOUNDARY and word in self._candidates
        ]
        self._emittable = lexicon.emittable_counts
        self._alpha_mass = alpha * lexicon.n_tags

    @property
    def positions(self) -> list[int]:
        """Positions resampled by every sweep, in visiting order."""

        return list(self._positions)

    def view(self) -> ModelView:
        return self._state.view()

    def conditional_masses(self, position: int) -> np.ndarray:
        """Unnormalized posterior of each admissible tag at *position*.

        Must be called while the position's own counts are retracted.
        """

        state = self._state
        tags = state.tags
        previous = tags[position - 1]
        following = tags[position + 1]
        word = state.words[position]
        candidates = self._candidates[int(word)]

        transitions = state.transitions
        totals = state.transition_totals
        emission = (state.emissions[candidates, word] + self.beta) / (
            state.emission_totals[candidates] + self.beta * self._emittable[candidates]
        )
        backward = (transitions[previous, candidates] + self.alpha) / (totals[previous] + self._alpha_mass)
        forward = (transitions[candidates, following] + (candidates == following) + self.alpha) / (
            totals[candidates] + (candidates == previous) + self._alpha_mass
        )
        return emission * backward * forward

    def tempered_masses(self, position: int, temperature: float) -> np.ndarray:
        """Masses raised to ``1 / temperature``, rescaled so the largest is 1."""

        log_mass = np.log(self.conditional_masses(position))
        return np.exp((log_mass - log_mass.max()) / temperature)

    def resample(self, position: int, temperature: float) -> int:
        state = self._state
        state.retract(position)
        masses = self.tempered_masses(position, temperature)
        candidates = self._candidates[int(state.words[position])]
        tag = int(candidates[sample_index(masses, self.rng)])
        state.commit(position, tag)
        return tag

    def sweep(self, temperature: float) -> int:
        """Resample every ambiguous position once; return how many tags changed."""

        tags = self._state.tags
        changed = 0
        for position in self._positions:
            before = tags[position]
            if self.resample(position, temperature) != before:
                changed += 1
        return changed

    def _should_report(self, sweep: int, iterations: int) -> bool:
        return (self.dbg != 0 and sweep % self.dbg == 0) or sweep == iterations - 1

    def run(self, iterations: int) -> list[ProgressRecord]:
        """Run *iterations* sweeps with annealing and return the progress history."""

        if iterations < 0:
            raise ValueError(f"iterations must be non-negative, got {iterations}")
        logger.info(
            "Starting Gibbs sampling with annealing",
            extra={
                "iterations": iterations,
                "positions": len(self._positions),
                "temperature": self.schedule.temperature,
            },
        )
        if self.dbg != 0 and self.evaluator is not None:
            logger.info("Format: Iteration\tAccuracy\tLikelihood\tVI\tTemperature")

        history: list[ProgressRecord] = []
        for sweep in range(iterations):
            changed = self.sweep(self.schedule.temperature)
            temperature = self.schedule.step(sweep)
            logger.debug("Sweep %d changed %d tags", sweep + 1, changed)

            if self.evaluator is None or not self._should_report(sweep, iterations):
                continue
            evaluation = self.evaluator(self.view())
            record = ProgressRecord(
                sweep=sweep + 1,
                accuracy=evaluation.accuracy,
                likelihood=evaluation.likelihood,
                vi=evaluation.vi,
                temperature=temperature,
            )
            history.append(record)
            logger.info(
                "#%d\t%s\t%f\t%s\t%f",
                record.sweep,
                _format_metric(record.accuracy),
                record.likelihood,
                _format_metric(record.vi),
                record.temperature,
            )
        return history


def _format_metric(value: float) -> str:
    return "NaN" if math.isnan(value) else f"{value:f}"


__all__ = ["Evaluation", "Evaluator", "GibbsSampler", "ProgressRecord", "sample_index"]
