"""Evaluation metrics for monitoring sampler convergence."""

from __future__ import annotations

from .metrics import accuracy, evaluate, log_likelihood, variation_of_information

__all__ = ["accuracy", "evaluate", "log_likelihood", "variation_of_information"]
