"""Readers for the corpus, lexicon and gold-standard files.

All three files are line oriented. Corpus and gold lines are sentences; the
decoded sequences carry a single ``BOUNDARY`` id before the first sentence,
between consecutive sentences and after the last one.
"""
from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import numpy as np

from ..common.errors import CorpusFormatError, PreconditionError
from ..common.types import BOUNDARY, ID_DTYPE, IdArray
from ..model.lexicon import Lexicon
from .vocabulary import Vocabulary

logger = logging.getLogger(__name__)

LEXICON_SEPARATOR = " - "


@dataclass(slots=True)
class Dataset:
    """Integer-encoded inputs for one tagging run."""

    words: IdArray
    gold: Optional[IdArray]
    lexicon: Lexicon
    word_vocab: Vocabulary
    tag_vocab: Vocabulary


def _iter_sentences(path: Path) -> Iterator[tuple[int, list[str]]]:
    with path.open("r", encoding="utf-8") as handle:
        for line_no, raw in enumerate(handle, start=1):
            tokens = raw.split()
            if tokens:
                yield line_no, tokens


def _with_boundaries(sentences: Iterator[list[int]]) -> IdArray:
    sequence: list[int] = [BOUNDARY]
    for ids in sentences:
        sequence.extend(ids)
        sequence.append(BOUNDARY)
    return np.asarray(sequence, dtype=ID_DTYPE)


def read_corpus(path: Path | str, word_vocab: Vocabulary) -> IdArray:
    """Read one whitespace-tokenized sentence per line into word ids."""

    corpus_path = Path(path)
    words = _with_boundaries(
        [word_vocab.internalize(token) for token in tokens]
        for _, tokens in _iter_sentences(corpus_path)
    )
    logger.debug("Read %d positions from %s", len(words), corpus_path)
    return words


def read_lexicon(
    path: Path | str, word_vocab: Vocabulary, tag_vocab: Vocabulary
) -> list[tuple[int, list[int]]]:
    """Read ``word - tag1 tag2 ...`` lines into ``(word_id, tag_ids)`` entries."""

    lexicon_path = Path(path)
    entries: list[tuple[int, list[int]]] = []
    with lexicon_path.open("r", encoding="utf-8") as handle:
        for line_no, raw in enumerate(handle, start=1):
            line = raw.strip()
            if not line:
                continue
            word, separator, tag_field = line.partition(LEXICON_SEPARATOR)
            tags = tag_field.split()
            if not separator or not word.strip():
                raise CorpusFormatError(
                    f"expected 'word{LEXICON_SEPARATOR}tag ...', got {line!r}",
                    path=str(lexicon_path),
                    line=line_no,
                )
            if not tags:
                raise CorpusFormatError(
                    f"no tags listed for {word.strip()!r}", path=str(lexicon_path), line=line_no
                )
            word_id = word_vocab.internalize(word.strip())
            entries.append((word_id, [tag_vocab.internalize(tag) for tag in tags]))
    logger.debug("Read %d lexicon entries from %s", len(entries), lexicon_path)
    return entries


def read_gold(path: Path | str, tag_vocab: Vocabulary) -> IdArray:
    """Read gold tags; tokens are ``word/tag`` or a bare ``tag``."""

    gold_path = Path(path)

    def decode(line_no: int, tokens: list[str]) -> list[int]:
        ids: list[int] = []
        for token in tokens:
            tag = token.rsplit("/", 1)[-1]
            try:
                ids.append(tag_vocab.lookup(tag))
            except KeyError:
                raise CorpusFormatError(
                    f"gold tag {tag!r} does not occur in the lexicon",
                    path=str(gold_path),
                    line=line_no,
                ) from None
        return ids

    gold = _with_boundaries(decode(line_no, tokens) for line_no, tokens in _iter_sentences(gold_path))
    logger.debug("Read %d gold positions from %s", len(gold), gold_path)
    return gold


def _check_alignment(words: IdArray, gold: IdArray) -> None:
    if len(words) != len(gold):
        raise CorpusFormatError(
            f"gold standard has {len(gold)} positions but the corpus has {len(words)}"
        )
    mismatched = np.flatnonzero((words == BOUNDARY) != (gold == BOUNDARY))
    if mismatched.size:
        raise CorpusFormatError(
            f"gold sentence boundaries do not match the corpus at position {int(mismatched[0])}"
        )


def load_dataset(
    corpus: Path | str,
    lexicon: Path | str,
    gold: Path | str | None = None,
) -> Dataset:
    """Read and encode every input of a run.

    Raises ``OSError`` for unreadable files, :class:`CorpusFormatError` for
    malformed content and :class:`PreconditionError` when a corpus word is
    missing from the lexicon.
    """

    word_vocab = Vocabulary()
    tag_vocab = Vocabulary()

    logger.info("Reading corpus from %s", corpus)
    words = read_corpus(corpus, word_vocab)

    logger.info("Reading lexicon from %s", lexicon)
    entries = read_lexicon(lexicon, word_vocab, tag_vocab)
    lex = Lexicon.from_entries(entries, n_tags=len(tag_vocab) + 1, n_words=len(word_vocab) + 1)

    corpus_ids = set(words.tolist())
    missing = [
        element
        for identifier, element in word_vocab.items()
        if identifier in corpus_ids and identifier not in lex.tags_for_word
    ]
    if missing:
        preview = ", ".join(repr(element) for element in missing[:5])
        raise PreconditionError(f"{len(missing)} corpus word(s) missing from the lexicon: {preview}")

    gold_ids: Optional[IdArray] = None
    if gold is not None:
        logger.info("Reading gold standard from %s", gold)
        gold_ids = read_gold(gold, tag_vocab)
        _check_alignment(words, gold_ids)

    logger.debug("N(words): %d  N(tags): %d", len(word_vocab), len(tag_vocab))
    return Dataset(words=words, gold=gold_ids, lexicon=lex, word_vocab=word_vocab, tag_vocab=tag_vocab)


__all__ = ["Dataset", "load_dataset", "read_corpus", "read_gold", "read_lexicon"]
