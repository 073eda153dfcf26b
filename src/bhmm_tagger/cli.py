"""Command line entry point for the BHMM part-of-speech tagger."""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .common.config import DEFAULT_CONFIG_PATH, load_config
from .common.errors import TaggerError
from .pipeline import run_tagger
from .utils.logging_setup import configure_logging, parse_level

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bhmm-tag",
        description="Disambiguate part-of-speech tags with a Bayesian bigram HMM (BHMM1)",
    )
    parser.add_argument(
        "level",
        nargs="?",
        default="INFO",
        help="Log verbosity: INFO (default), DEBUG, VERBOSE, FINE, FINER, FINEST or any logging level name",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=DEFAULT_CONFIG_PATH,
        help="Path to the YAML run configuration (default: config.yaml)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        level = parse_level(args.level)
    except ValueError as error:
        parser.error(str(error))

    configure_logging(level)
    try:
        config = load_config(args.config)
        if config.log is not None:
            configure_logging(level, config.log)
        result = run_tagger(config)
    except (TaggerError, OSError, ValueError):
        logger.exception("Tagging run failed")
        return 2

    if result.history:
        last = result.history[-1]
        logger.info(
            "Finished after %d sweeps",
            last.sweep,
            extra={"accuracy": last.accuracy, "likelihood": last.likelihood, "vi": last.vi},
        )
    return 0


if __name__ == "__main__":
    sys.exit(main())
