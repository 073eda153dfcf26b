"""Reading and writing tagger inputs and outputs."""

from __future__ import annotations

from .readers import Dataset, load_dataset, read_corpus, read_gold, read_lexicon
from .vocabulary import Vocabulary
from .writer import format_sample, write_sample

__all__ = [
    "Dataset",
    "Vocabulary",
    "format_sample",
    "load_dataset",
    "read_corpus",
    "read_gold",
    "read_lexicon",
    "write_sample",
]
