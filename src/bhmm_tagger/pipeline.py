"""End-to-end tagging run: load, initialize, sample, write."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from functools import partial

import numpy as np

from .analysis.metrics import evaluate
from .common.config import TaggerConfig
from .common.types import IdArray
from .corpus.readers import Dataset, load_dataset
from .corpus.writer import write_sample
from .model.initialize import initialize_state
from .model.sampler import GibbsSampler, ProgressRecord
from .model.schedule import AnnealingSchedule

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class TaggingResult:
    """Outcome of :func:`run_tagger`."""

    dataset: Dataset
    initial_tags: IdArray
    tags: IdArray
    seed: int
    history: list[ProgressRecord] = field(default_factory=list)


def make_rng(seed: int | None) -> tuple[np.random.Generator, int]:
    """Return a generator and the seed that reproduces it.

    Without a configured seed a fresh one is drawn from OS entropy.
    """

    if seed is None:
        seed = int(np.random.SeedSequence().generate_state(1)[0])
    return np.random.default_rng(seed), seed


def run_tagger(config: TaggerConfig) -> TaggingResult:
    """Tag the configured corpus and write the result to ``config.out``."""

    logger.info(
        "Initializing parameters",
        extra={"alpha": config.alpha, "beta": config.beta, "iterations": config.iterations},
    )
    logger.debug(
        "Alpha: %f\tBeta: %f\tIter: %d", config.alpha, config.beta, config.iterations
    )
    logger.debug("Corpus: %s\tLexicon: %s\tGold: %s", config.corpus, config.lexicon, config.gold)

    dataset = load_dataset(config.corpus, config.lexicon, config.gold)
    rng, seed = make_rng(config.seed)
    logger.info("Random seed: %d", seed)

    state = initialize_state(dataset.words, dataset.lexicon, rng)
    initial_tags = state.tags.copy()

    schedule = AnnealingSchedule(
        maximum=config.max_temperature,
        minimum=config.min_temperature,
        rate=config.rate,
        decrease=config.decrease,
    )
    logger.debug(
        "Decrease: %d\tRate: %f\tTemperature: %f\tMinimum: %f",
        config.decrease,
        config.rate,
        config.max_temperature,
        config.min_temperature,
    )

    sampler = GibbsSampler(
        state,
        alpha=config.alpha,
        beta=config.beta,
        schedule=schedule,
        rng=rng,
        evaluator=partial(evaluate, gold=dataset.gold, alpha=config.alpha, beta=config.beta),
        dbg=config.dbg,
    )
    history = sampler.run(config.iterations)

    final_tags = sampler.view().tags.copy()
    write_sample(config.out, dataset.words, final_tags, dataset.word_vocab, dataset.tag_vocab)
    return TaggingResult(
        dataset=dataset,
        initial_tags=initial_tags,
        tags=final_tags,
        seed=seed,
        history=history,
    )


__all__ = ["TaggingResult", "make_rng", "run_tagger"]
