"""Association statistics over reduced contingency tables.

All functions take a ``num_values x num_classes`` matrix with the missing
row and column already removed and return a single float. Degenerate
tables (no degrees of freedom, zero total) score 0.0 rather than raising.

- L2: squared distance between observed and expected cell probabilities
- Chi-squared: Pearson statistic (scipy)
- Information gain: class entropy minus class entropy given the value (scipy)
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Callable, NamedTuple

import numpy as np
from scipy.stats import chi2_contingency, entropy

from attrsel.ranking.contingency import reduce_matrix

if TYPE_CHECKING:
    from numpy.typing import NDArray

# Cells whose expected probability is below this contribute nothing to L2
L2_EXPECTED_EPSILON = 1e-15


class Marginals(NamedTuple):
    """Row sums, column sums and grand total of a matrix."""

    row_sums: NDArray[np.float64]
    col_sums: NDArray[np.float64]
    total: float


def marginals(matrix: NDArray[np.float64]) -> Marginals:
    """Compute row sums, column sums and the grand total."""
    matrix = np.asarray(matrix, dtype=np.float64)
    return Marginals(
        row_sums=matrix.sum(axis=1),
        col_sums=matrix.sum(axis=0),
        total=float(matrix.sum()),
    )


def degrees_of_freedom(matrix: NDArray[np.float64]) -> int:
    """``(rows - 1) * (columns - 1)``; 0 for empty matrices."""
    matrix = np.asarray(matrix)
    if matrix.ndim != 2 or matrix.size == 0:
        return 0
    nrows, ncols = matrix.shape
    return (nrows - 1) * (ncols - 1)


def l2_statistic(matrix: NDArray[np.float64]) -> float:
    """L2 ("least loss") distance between observed and expected probabilities.

    Both the observed count and the expected count are divided by the
    grand total ``n``, so each cell contributes
    ``(c[i, j] / n - r[i] * c[j] / n / n) ** 2``. Only cells whose row and
    column marginals are positive are visited, and cells with an expected
    probability under ``1e-15`` contribute 0.

    Args:
        matrix: Reduced contingency table.

    Returns:
        L2 score, 0.0 when degrees of freedom are not positive.

    Example:
        >>> l2_statistic(np.array([[2.0, 0.0], [1.0, 1.0]]))
        0.0625
    """
    matrix = np.asarray(matrix, dtype=np.float64)
    if degrees_of_freedom(matrix) <= 0:
        return 0.0

    row_sums, col_sums, n = marginals(matrix)
    if not n > 0:
        return 0.0

    rows = row_sums > 0
    cols = col_sums > 0
    expected = np.outer(row_sums[rows], col_sums[cols]) / n / n
    observed = matrix[np.ix_(rows, cols)] / n

    diff = np.abs(observed - expected)
    cells = np.where(expected < L2_EXPECTED_EPSILON, 0.0, diff * diff)
    return float(cells.sum())


def chi_squared(matrix: NDArray[np.float64]) -> float:
    """Pearson chi-squared statistic without continuity correction.

    Args:
        matrix: Contingency table. Empty rows and columns are dropped
            before the expected counts are formed.

    Returns:
        Chi-squared value, 0.0 when degrees of freedom are not positive.
    """
    matrix = reduce_matrix(matrix)
    if degrees_of_freedom(matrix) <= 0 or not matrix.sum() > 0:
        return 0.0
    chi2, _, _, _ = chi2_contingency(matrix, correction=False)
    return float(chi2)


def information_gain(matrix: NDArray[np.float64]) -> float:
    """Class entropy minus class entropy conditioned on the attribute value.

    Entropies are in bits. Rows with zero mass contribute nothing.

    Args:
        matrix: Reduced contingency table.

    Returns:
        Information gain, 0.0 for an empty table.
    """
    matrix = np.asarray(matrix, dtype=np.float64)
    if matrix.size == 0:
        return 0.0
    row_sums, col_sums, total = marginals(matrix)
    if not total > 0:
        return 0.0

    class_entropy = float(entropy(col_sums, base=2))
    conditional = 0.0
    for i, row_total in enumerate(row_sums):
        if row_total > 0:
            conditional += row_total / total * float(entropy(matrix[i], base=2))
    return class_entropy - conditional


class Statistic(str, Enum):
    """Statistics the engine can compute per attribute."""

    L2 = "l2"
    CHI_SQUARED = "chi_squared"
    INFO_GAIN = "info_gain"


STATISTIC_FUNCTIONS: dict[Statistic, Callable[[NDArray[np.float64]], float]] = {
    Statistic.L2: l2_statistic,
    Statistic.CHI_SQUARED: chi_squared,
    Statistic.INFO_GAIN: information_gain,
}


def compute_statistic(statistic: Statistic | str, matrix: NDArray[np.float64]) -> float:
    """Dispatch to the function for ``statistic``."""
    return STATISTIC_FUNCTIONS[Statistic(statistic)](matrix)
