"""Serialize a tagged sequence as ``word/tag`` lines, one sentence per line."""
from __future__ import annotations

import logging
import os
from pathlib import Path
from tempfile import NamedTemporaryFile

from ..common.types import BOUNDARY, IdArray
from .vocabulary import Vocabulary

logger = logging.getLogger(__name__)


def format_sample(words: IdArray, tags: IdArray, word_vocab: Vocabulary, tag_vocab: Vocabulary) -> str:
    """Render the tagged corpus; every boundary between sentences ends a line."""

    lines: list[str] = []
    current: list[str] = []
    for word, tag in zip(words.tolist()[1:], tags.tolist()[1:]):
        if tag == BOUNDARY:
            lines.append(" ".join(current))
            current = []
            continue
        current.append(f"{word_vocab.resolve(word)}/{tag_vocab.resolve(tag)}")
    if current:
        lines.append(" ".join(current))
    return "".join(f"{line}\n" for line in lines)


def write_sample(
    path: Path | str,
    words: IdArray,
    tags: IdArray,
    word_vocab: Vocabulary,
    tag_vocab: Vocabulary,
) -> Path:
    """Atomically write the tagged corpus to *path*."""

    out_path = Path(path)
    payload = format_sample(words, tags, word_vocab, tag_vocab)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    with NamedTemporaryFile("w", delete=False, dir=str(out_path.parent), encoding="utf-8") as tmp:
        tmp.write(payload)
        tmp.flush()
        os.fsync(tmp.fileno())
    os.replace(tmp.name, out_path)
    logger.info("Wrote tagged output to %s", out_path)
    return out_path


__all__ = ["format_sample", "write_sample"]
