"""Statistics primitives used by the analyses.

All functions are pure. Where a statistic is undefined for the given input
(too few observations, zero variance, mismatched lengths) they return
``None`` rather than raising, and callers decide what that means.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np
from scipy import stats as sp_stats

# Below this expected count per bucket the chi-squared approximation is unreliable.
MIN_EXPECTED_PER_BUCKET = 5.0


# ═══════════════════════ CHI-SQUARED ═══════════════════════

def chi_squared_uniform(observations: Sequence[float]) -> float | None:
    """Chi-squared statistic of *observations* against a uniform distribution.

    Returns ``None`` when the expected count per bucket is below 5.

    >>> round(chi_squared_uniform([50, 60, 40, 47, 53]), 2)
    4.36
    """
    obs = np.asarray(observations, dtype=np.float64)
    if obs.size == 0:
        return None
    expected = obs.sum() / obs.size
    if expected < MIN_EXPECTED_PER_BUCKET:
        return None
    return float(np.sum((obs - expected) ** 2) / expected)


def goodness_of_fit(observations: Sequence[float]) -> float | None:
    """p-value for the null hypothesis that *observations* are uniform.

    Computed as the chi-squared survival function (``1 - CDF``) with
    ``len(observations) - 1`` degrees of freedom.
    """
    statistic = chi_squared_uniform(observations)
    if statistic is None:
        return None
    dof = len(observations) - 1
    if dof < 1:
        return None
    p = float(sp_stats.chi2.sf(statistic, dof))
    if np.isnan(p):
        return None
    return p


# ═══════════════════════ CORRELATION ═══════════════════════

def pearson(a: Sequence[float], b: Sequence[float]) -> float | None:
    """Pearson correlation coefficient of two equal-length samples.

    ``None`` when the inputs are empty, differ in length, or either has
    zero variance.
    """
    x = np.asarray(a, dtype=np.float64)
    y = np.asarray(b, dtype=np.float64)
    n = x.size
    if n == 0 or n != y.size:
        return None

    if np.ptp(x) == 0 or np.ptp(y) == 0:
        return None

    dx = x - x.mean()
    dy = y - y.mean()
    denominator = np.sqrt(np.dot(dx, dx) * np.dot(dy, dy))
    if not np.isfinite(denominator) or denominator <= 0:
        return None
    return float(np.clip(np.dot(dx, dy) / denominator, -1.0, 1.0))


def pearson_matrix(samples: np.ndarray) -> np.ndarray:
    """Pairwise Pearson correlation between the rows of *samples*.

    Parameters
    ----------
    samples:
        2-D array of shape ``(k, n)``: ``k`` variables with ``n``
        observations each.

    Returns
    -------
    numpy.ndarray
        ``(k, k)`` float array. Entries involving a zero-variance row are
        ``nan``. For integer-valued data such as 0/1 bits the sums are exact
        and the diagonal of every other row is exactly 1.0.
    """
    x = np.asarray(samples, dtype=np.float64)
    if x.ndim != 2:
        raise ValueError(f"expected a 2-D array, got shape {x.shape}")
    k, n = x.shape
    if n == 0:
        return np.full((k, k), np.nan)

    sums = x.sum(axis=1)
    cross = x @ x.T
    numerator = n * cross - np.outer(sums, sums)
    variance = n * np.diag(cross) - sums**2
    with np.errstate(divide="ignore", invalid="ignore"):
        denominator = np.sqrt(np.outer(variance, variance))
        matrix = numerator / denominator
    constant = np.ptp(x, axis=1) == 0
    matrix[~(denominator > 0)] = np.nan
    matrix[constant, :] = np.nan
    matrix[:, constant] = np.nan
    return matrix


def rank(values: Sequence[float]) -> np.ndarray:
    """Dense 1-based ranks: equal values share a rank, no gaps.

    >>> rank([20, 10, 40, 30]).tolist()
    [2, 1, 4, 3]
    """
    _, inverse = np.unique(np.asarray(values), return_inverse=True)
    return inverse.reshape(-1).astype(np.int64) + 1


def spearman(a: Sequence[float], b: Sequence[float]) -> float | None:
    """Spearman rank correlation, ``1 - 6 Σd² / (n (n² - 1))``."""
    n = len(a)
    if n == 0 or n != len(b):
        return None
    denominator = n * (n * n - 1)
    if denominator == 0:
        return None
    d = rank(a) - rank(b)
    return float(1.0 - 6.0 * np.sum(d * d) / denominator)
