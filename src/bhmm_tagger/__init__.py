"""Part-of-speech disambiguation with a Bayesian bigram HMM and annealed Gibbs sampling."""

from __future__ import annotations

from .common.config import TaggerConfig, load_config
from .pipeline import TaggingResult, run_tagger

__version__ = "0.1.0"

__all__ = ["TaggerConfig", "TaggingResult", "load_config", "run_tagger", "__version__"]
