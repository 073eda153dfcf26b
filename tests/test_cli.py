import logging

import pytest

from bhmm_tagger import cli
from bhmm_tagger.utils.logging_setup import PACKAGE_LOGGER, VERBOSE, parse_level


@pytest.fixture(autouse=True)
def reset_package_logger():
    yield
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()
    package_logger.setLevel(logging.NOTSET)
    package_logger.propagate = True


def _write_run(tmp_path, **extra):
    (tmp_path / "corpus.txt").write_text("a b\nb a\n", encoding="utf-8")
    (tmp_path / "lexicon.txt").write_text("a - N\nb - N V\n", encoding="utf-8")
    (tmp_path / "gold.txt").write_text("N V\nV N\n", encoding="utf-8")
    lines = [
        "alpha: 0.1",
        "beta: 0.1",
        "iterations: 4",
        "dbg: 2",
        "seed: 3",
        f"corpus: {tmp_path / 'corpus.txt'}",
        f"lexicon: {tmp_path / 'lexicon.txt'}",
        f"gold: {tmp_path / 'gold.txt'}",
        f"out: {tmp_path / 'tagged.txt'}",
    ]
    lines.extend(f"{key}: {value}" for key, value in extra.items())
    config = tmp_path / "config.yaml"
    config.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return config


def test_main_runs_and_writes_output(tmp_path):
    config = _write_run(tmp_path, log=tmp_path / "logs" / "run.log")

    assert cli.main(["DEBUG", "--config", str(config)]) == 0

    output = (tmp_path / "tagged.txt").read_text(encoding="utf-8").splitlines()
    assert [token.split("/")[0] for token in output[0].split()] == ["a", "b"]
    log_text = (tmp_path / "logs" / "run.log").read_text(encoding="utf-8")
    assert "Random seed: 3" in log_text
    assert "#3\t" in log_text


def test_main_accepts_verbose_level(tmp_path):
    config = _write_run(tmp_path)

    assert cli.main(["VERBOSE", "--config", str(config)]) == 0
    assert logging.getLogger(PACKAGE_LOGGER).level == 5


def test_main_returns_two_for_invalid_config(tmp_path):
    config = _write_run(tmp_path, alpha=-1)

    assert cli.main(["--config", str(config)]) == 2
    assert not (tmp_path / "tagged.txt").exists()


def test_main_returns_two_for_missing_input(tmp_path):
    config = _write_run(tmp_path)
    (tmp_path / "corpus.txt").unlink()

    assert cli.main(["--config", str(config)]) == 2


def test_main_rejects_unknown_level(tmp_path):
    config = _write_run(tmp_path)

    with pytest.raises(SystemExit):
        cli.main(["LOUD", "--config", str(config)])


def test_parser_defaults():
    args = cli._build_parser().parse_args([])

    assert args.level == "INFO"
    assert str(args.config) == "config.yaml"


@pytest.mark.parametrize(
    "name, expected",
    [("FINE", logging.INFO), ("finer", logging.DEBUG), ("FINEST", VERBOSE), ("WARNING", logging.WARNING)],
)
def test_parse_level_accepts_fine_grained_aliases(name, expected):
    assert parse_level(name) == expected


def test_main_accepts_finest_level(tmp_path):
    config = _write_run(tmp_path)

    assert cli.main(["FINEST", "--config", str(config)]) == 0
    assert logging.getLogger(PACKAGE_LOGGER).level == VERBOSE
