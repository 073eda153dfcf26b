from __future__ import annotations

import math
from pathlib import Path

import numpy as np

from bhmm_tagger.common.config import TaggerConfig
from bhmm_tagger.model import initialize_tags
from bhmm_tagger.pipeline import make_rng, run_tagger


def _config(tmp_path: Path, corpus: str, lexicon: str, gold: str | None = None, **overrides) -> TaggerConfig:
    (tmp_path / "corpus.txt").write_text(corpus, encoding="utf-8")
    (tmp_path / "lexicon.txt").write_text(lexicon, encoding="utf-8")
    settings = {
        "alpha": 0.1,
        "beta": 0.1,
        "iterations": 5,
        "corpus": str(tmp_path / "corpus.txt"),
        "lexicon": str(tmp_path / "lexicon.txt"),
        "out": str(tmp_path / "out" / "tagged.txt"),
        "seed": 1234,
    }
    if gold is not None:
        (tmp_path / "gold.txt").write_text(gold, encoding="utf-8")
        settings["gold"] = str(tmp_path / "gold.txt")
    settings.update(overrides)
    return TaggerConfig.from_mapping(settings)


def test_single_tag_word_is_always_tagged_with_it(tmp_path):
    config = _config(tmp_path, "a\n", "a - N\n", iterations=20)

    run_tagger(config)

    assert config.out.read_text(encoding="utf-8") == "a/N\n"


def test_zero_iterations_reproduce_the_seeded_initial_assignment(tmp_path):
    config = _config(
        tmp_path,
        "the run stops\nrun the run\n",
        "the - DET\nrun - N V\nstops - V N\n",
        iterations=0,
        seed=99,
    )

    result = run_tagger(config)

    expected = initialize_tags(result.dataset.words, result.dataset.lexicon, np.random.default_rng(99))
    assert np.array_equal(result.tags, expected)
    assert np.array_equal(result.initial_tags, expected)
    assert result.history == []

    vocab = result.dataset.tag_vocab
    written = [
        [vocab.lookup(token.rsplit("/", 1)[1]) for token in line.split()]
        for line in config.out.read_text(encoding="utf-8").splitlines()
    ]
    flat = [tag for sentence in written for tag in sentence]
    assert flat == [int(tag) for tag in expected if tag != 0]


def test_same_seed_gives_the_same_run(tmp_path):
    corpus = "the run stops\nrun the run\nthe stops\n"
    lexicon = "the - DET\nrun - N V\nstops - V N\n"
    first = run_tagger(_config(tmp_path, corpus, lexicon, iterations=10, seed=5))
    second = run_tagger(_config(tmp_path, corpus, lexicon, iterations=10, seed=5))

    assert np.array_equal(first.tags, second.tags)


def test_history_follows_the_debug_interval(tmp_path):
    config = _config(
        tmp_path,
        "b b b\nb b\n",
        "b - N V\n",
        gold="N N N\nN N\n",
        iterations=7,
        dbg=3,
        max=2.0,
        min=0.5,
        rate=0.5,
    )

    result = run_tagger(config)

    assert [record.sweep for record in result.history] == [1, 4, 7]
    assert [record.temperature for record in result.history] == [1.0, 0.5, 0.5]
    for record in result.history:
        assert 0.0 <= record.accuracy <= 100.0
        assert record.vi >= 0.0
        assert record.likelihood < 0.0


def test_annealed_run_agrees_with_gold_on_every_token_or_none(tmp_path):
    config = _config(
        tmp_path,
        "b b b\n",
        "b - N V\n",
        gold="N N N\n",
        iterations=200,
        max=1.0,
        min=0.0625,
        rate=0.5,
    )

    result = run_tagger(config)

    final = result.history[-1]
    assert final.temperature == 0.0625
    assert len(set(result.tags[1:4].tolist())) == 1
    assert final.accuracy in (0.0, 100.0)


def test_unambiguous_corpus_reports_nan_accuracy(tmp_path):
    config = _config(tmp_path, "the dog\n", "the - DET\ndog - N\n", gold="DET N\n", iterations=3)

    result = run_tagger(config)

    assert np.array_equal(result.tags, result.initial_tags)
    assert math.isnan(result.history[-1].accuracy)
    assert config.out.read_text(encoding="utf-8") == "the/DET dog/N\n"


def test_make_rng_draws_a_seed_when_none_is_configured():
    _, first = make_rng(None)
    rng, seed = make_rng(17)

    assert seed == 17
    assert isinstance(first, int)
    assert rng.integers(1000) == np.random.default_rng(17).integers(1000)
