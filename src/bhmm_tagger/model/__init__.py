"""Bigram Bayesian HMM: lexicon, state, initialization and Gibbs sampling."""

from __future__ import annotations

from .initialize import build_state, initialize_state, initialize_tags
from .lexicon import Lexicon
from .sampler import Evaluation, GibbsSampler, ProgressRecord, sample_index
from .schedule import AnnealingSchedule
from .state import ModelView, TaggingState

__all__ = [
    "AnnealingSchedule",
    "Evaluation",
    "GibbsSampler",
    "Lexicon",
    "ModelView",
    "ProgressRecord",
    "TaggingState",
    "build_state",
    "initialize_state",
    "initialize_tags",
    "sample_index",
]
