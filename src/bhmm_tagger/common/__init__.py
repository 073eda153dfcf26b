"""Shared infrastructure for the BHMM tagger."""

from __future__ import annotations

from .config import TaggerConfig, load_config
from .errors import ConfigError, CorpusFormatError, PreconditionError, TaggerError
from .types import BOUNDARY, CountMatrix, IdArray, is_boundary

__all__ = [
    "BOUNDARY",
    "ConfigError",
    "CorpusFormatError",
    "CountMatrix",
    "IdArray",
    "PreconditionError",
    "TaggerConfig",
    "TaggerError",
    "is_boundary",
    "load_config",
]
