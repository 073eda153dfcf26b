"""Exception hierarchy for the BHMM tagger."""
from __future__ import annotations


class TaggerError(Exception):
    """Base class for all tagger failures."""


class ConfigError(TaggerError):
    """Raised when the run configuration cannot be parsed or validated."""


class CorpusFormatError(TaggerError, ValueError):
    """Raised for malformed lexicon or gold lines and misaligned inputs."""

    def __init__(self, message: str, *, path: str | None = None, line: int | None = None) -> None:
        self.path = path
        self.line = line
        location = ""
        if path is not None:
            location = f"{path}:{line}: " if line is not None else f"{path}: "
        super().__init__(f"{location}{message}")


class PreconditionError(TaggerError, ValueError):
    """Raised when the model is handed input it cannot sample, such as a
    token without any admissible tag."""


__all__ = ["ConfigError", "CorpusFormatError", "PreconditionError", "TaggerError"]
