"""Statistical helpers for clustering comparison."""
from __future__ import annotations

import numpy as np


def safe_div(a: float, b: float, default: float = 0.0) -> float:
    """Return *a / b* guarding against division by zero."""

    return default if b == 0 else a / b


def entropy_bits(counts: np.ndarray, total: float) -> float:
    """Shannon entropy in bits of *counts* normalised by *total*.

    Zero counts are skipped, so *total* need not equal ``counts.sum()``.
    """

    if total <= 0:
        return 0.0
    probs = counts[counts != 0] / total
    return float(-(probs * np.log2(probs)).sum())


def mutual_information_bits(
    joint: np.ndarray, row_marginal: np.ndarray, col_marginal: np.ndarray, total: float
) -> float:
    """Mutual information in bits of a contingency table.

    Cells whose joint, row or column probability is zero contribute nothing.
    """

    if total <= 0:
        return 0.0
    p_joint = joint / total
    p_outer = np.outer(row_marginal / total, col_marginal / total)
    mask = (p_joint != 0) & (p_outer != 0)
    return float((p_joint[mask] * np.log2(p_joint[mask] / p_outer[mask])).sum())


__all__ = ["entropy_bits", "mutual_information_bits", "safe_div"]
