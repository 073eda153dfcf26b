"""Helper utilities for the BHMM tagger."""

from __future__ import annotations

__all__ = ["logging_setup", "stats"]
