from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest

from bhmm_tagger.common.errors import CorpusFormatError, PreconditionError
from bhmm_tagger.corpus import (
    Vocabulary,
    format_sample,
    load_dataset,
    read_corpus,
    read_gold,
    read_lexicon,
    write_sample,
)


def _write(path: Path, text: str) -> Path:
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def inputs(tmp_path):
    corpus = _write(tmp_path / "corpus.txt", "the dog barks\n\nthe cat\n")
    lexicon = _write(
        tmp_path / "lexicon.txt",
        "the - DET\ndog - N V\nbarks - V N\ncat - N\n",
    )
    gold = _write(tmp_path / "gold.txt", "the/DET dog/N barks/V\nDET N\n")
    return corpus, lexicon, gold


def test_read_corpus_separates_sentences_with_single_boundaries(inputs):
    corpus, _, _ = inputs
    vocab = Vocabulary()

    words = read_corpus(corpus, vocab)

    assert words.tolist() == [0, 1, 2, 3, 0, 1, 4, 0]
    assert vocab.resolve(4) == "cat"


def test_read_lexicon_keeps_tag_order(inputs):
    _, lexicon, _ = inputs
    words = Vocabulary()
    tags = Vocabulary()

    entries = read_lexicon(lexicon, words, tags)

    assert [(words.resolve(w), [tags.resolve(t) for t in ts]) for w, ts in entries] == [
        ("the", ["DET"]),
        ("dog", ["N", "V"]),
        ("barks", ["V", "N"]),
        ("cat", ["N"]),
    ]


def test_read_lexicon_reports_malformed_line(tmp_path):
    lexicon = _write(tmp_path / "lexicon.txt", "the - DET\ndog N V\n")

    with pytest.raises(CorpusFormatError) as excinfo:
        read_lexicon(lexicon, Vocabulary(), Vocabulary())

    assert excinfo.value.line == 2
    assert "lexicon.txt:2" in str(excinfo.value)


def test_read_lexicon_rejects_word_without_tags(tmp_path):
    lexicon = _write(tmp_path / "lexicon.txt", "dog - \n")

    with pytest.raises(CorpusFormatError):
        read_lexicon(lexicon, Vocabulary(), Vocabulary())


def test_read_gold_uses_suffix_after_last_slash(tmp_path):
    tags = Vocabulary()
    noun = tags.internalize("N")
    verb = tags.internalize("V")
    gold = _write(tmp_path / "gold.txt", "a/b/N V\n")

    assert read_gold(gold, tags).tolist() == [0, noun, verb, 0]


def test_read_gold_rejects_unknown_tag(tmp_path):
    tags = Vocabulary()
    tags.internalize("N")
    gold = _write(tmp_path / "gold.txt", "dog/ADJ\n")

    with pytest.raises(CorpusFormatError, match="ADJ"):
        read_gold(gold, tags)


def test_load_dataset_builds_aligned_sequences(inputs):
    corpus, lexicon, gold = inputs

    dataset = load_dataset(corpus, lexicon, gold)

    assert len(dataset.words) == len(dataset.gold) == 8
    assert np.array_equal(dataset.words == 0, dataset.gold == 0)
    assert dataset.lexicon.n_tags == 4
    assert dataset.lexicon.n_words == 5
    dog = dataset.word_vocab.lookup("dog")
    assert [dataset.tag_vocab.resolve(t) for t in dataset.lexicon.admissible(dog)] == ["N", "V"]


def test_load_dataset_without_gold(inputs):
    corpus, lexicon, _ = inputs

    assert load_dataset(corpus, lexicon).gold is None


def test_load_dataset_rejects_misaligned_gold(inputs, tmp_path):
    corpus, lexicon, _ = inputs
    gold = _write(tmp_path / "short_gold.txt", "DET N V\nDET\n")

    with pytest.raises(CorpusFormatError, match="positions"):
        load_dataset(corpus, lexicon, gold)


def test_load_dataset_requires_every_corpus_word_in_lexicon(tmp_path):
    corpus = _write(tmp_path / "corpus.txt", "the unicorn\n")
    lexicon = _write(tmp_path / "lexicon.txt", "the - DET\n")

    with pytest.raises(PreconditionError, match="unicorn"):
        load_dataset(corpus, lexicon)


def test_load_dataset_fails_on_missing_file(inputs, tmp_path):
    _, lexicon, _ = inputs

    with pytest.raises(OSError):
        load_dataset(tmp_path / "absent.txt", lexicon)


def test_write_sample_formats_one_sentence_per_line(inputs, tmp_path):
    corpus, lexicon, gold = inputs
    dataset = load_dataset(corpus, lexicon, gold)

    out = write_sample(
        tmp_path / "out" / "tagged.txt",
        dataset.words,
        dataset.gold,
        dataset.word_vocab,
        dataset.tag_vocab,
    )

    assert out.read_text(encoding="utf-8") == "the/DET dog/N barks/V\nthe/DET cat/N\n"


def test_format_sample_of_empty_corpus_is_empty():
    words = np.array([0])

    assert format_sample(words, words.copy(), Vocabulary(), Vocabulary()) == ""
