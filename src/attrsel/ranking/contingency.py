"""Weighted contingency tables between each attribute and the class.

Every non-class attribute gets a ``(num_values + 1) x (num_classes + 1)``
table of summed instance weights. The last row collects instances whose
attribute value is missing and the last column collects instances whose
class is missing.

Tables are built in two passes:

1. Explicit sparse entries are placed directly in their row
   (value row or missing row) and column (class or missing class).
2. Row 0 is derived as ``class_totals - sum(rows 1..num_values)``, which
   accounts for both explicit zero values and attributes omitted from a
   sparse instance.

Example:
    >>> tables = build_contingency_tables(dataset)
    >>> tables[0].core  # observed value x class counts
    >>> tables[0].reduced()  # missing row/column and empty marginals dropped
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from attrsel.ranking.logging_config import get_logger, log_function_entry, log_function_exit

if TYPE_CHECKING:
    from numpy.typing import NDArray

    from attrsel.ranking.dataset import CategoricalDataset

logger = get_logger("contingency")

# Relative tolerance under which a derived default-row cell is float noise
SNAP_TOLERANCE = 1e-12


@dataclass(frozen=True)
class ContingencyTable:
    """Counts for one attribute, including the missing row and column.

    Attributes:
        attribute_index: Position of the attribute in the dataset.
        counts: Array of shape ``(num_values + 1, num_classes + 1)``.
    """

    attribute_index: int
    counts: NDArray[np.float64]

    @property
    def num_values(self) -> int:
        return self.counts.shape[0] - 1

    @property
    def num_classes(self) -> int:
        return self.counts.shape[1] - 1

    @property
    def core(self) -> NDArray[np.float64]:
        """Observed ``num_values x num_classes`` block."""
        return self.counts[:-1, :-1]

    @property
    def missing_value_row(self) -> NDArray[np.float64]:
        """Mass with a missing attribute value and a known class."""
        return self.counts[-1, :-1]

    @property
    def missing_class_column(self) -> NDArray[np.float64]:
        """Mass with a known attribute value and a missing class."""
        return self.counts[:-1, -1]

    @property
    def both_missing(self) -> float:
        """Mass with both the attribute value and the class missing."""
        return float(self.counts[-1, -1])

    def total(self) -> float:
        """Grand total over all cells, missing row and column included."""
        return float(self.counts.sum())

    def core_total(self) -> float:
        return float(self.core.sum())

    def reduced(self) -> NDArray[np.float64]:
        """Core block with empty rows and columns removed."""
        return reduce_matrix(self.core)


def reduce_matrix(matrix: NDArray[np.float64]) -> NDArray[np.float64]:
    """Drop rows and columns whose marginal is not strictly positive.

    Args:
        matrix: 2D count matrix.

    Returns:
        A new matrix containing only rows and columns with positive totals.
        The result may have zero rows or columns.
    """
    matrix = np.asarray(matrix, dtype=np.float64)
    if matrix.ndim != 2:
        raise ValueError(f"Expected a 2D matrix, got shape {matrix.shape}")
    keep_rows = matrix.sum(axis=1) > 0
    keep_cols = matrix.sum(axis=0) > 0
    return matrix[np.ix_(keep_rows, keep_cols)].copy()


def class_totals(dataset: CategoricalDataset) -> NDArray[np.float64]:
    """Sum instance weights per class, with a trailing missing-class slot.

    Args:
        dataset: Dataset with a class index assigned.

    Returns:
        Array of length ``num_classes + 1``.
    """
    num_classes = dataset.num_classes
    totals = np.zeros(num_classes + 1, dtype=np.float64)
    for inst in dataset.instances:
        slot = num_classes if inst.class_is_missing else inst.class_value
        totals[slot] += inst.weight
    return totals


def build_contingency_tables(dataset: CategoricalDataset) -> dict[int, ContingencyTable]:
    """Build one weighted contingency table per non-class attribute.

    Args:
        dataset: Categorical dataset with a class index. Every non-class
            attribute must be nominal.

    Returns:
        Mapping of attribute index to its table, in attribute order.
        The class attribute has no entry.

    Evaluators run ``check_capabilities`` before calling this, so the
    checks below only fire for direct callers that skip it.

    Raises:
        ValueError: If the dataset has no class index or contains a
            numeric non-class attribute.
    """
    log_function_entry(logger, "build_contingency_tables", dataset=dataset)

    class_index = dataset.class_index
    if class_index is None:
        raise ValueError("Dataset has no class index")
    numeric = dataset.numeric_attribute_indices()
    if numeric:
        raise ValueError(f"Numeric attributes must be discretized first: {numeric}")

    num_classes = dataset.num_classes
    totals = class_totals(dataset)

    # Pass 1: collect explicit placements per attribute
    rows: dict[int, list[int]] = {}
    cols: dict[int, list[int]] = {}
    weights: dict[int, list[float]] = {}
    for inst in dataset.instances:
        col = num_classes if inst.class_is_missing else inst.class_value
        for position in range(inst.num_values()):
            k = inst.index(position)
            if k == class_index:
                continue
            if inst.is_missing_sparse(position):
                row = dataset.attribute(k).num_values()
            else:
                row = int(inst.value_sparse(position))
            rows.setdefault(k, []).append(row)
            cols.setdefault(k, []).append(col)
            weights.setdefault(k, []).append(inst.weight)

    tables: dict[int, ContingencyTable] = {}
    scale = max(float(totals.sum()), 1.0)
    for k, attr in enumerate(dataset.attributes):
        if k == class_index:
            continue
        counts = np.zeros((attr.num_values() + 1, num_classes + 1), dtype=np.float64)
        if k in rows:
            np.add.at(
                counts,
                (np.asarray(rows[k], dtype=np.intp), np.asarray(cols[k], dtype=np.intp)),
                np.asarray(weights[k], dtype=np.float64),
            )
        # Pass 2: default row takes whatever class mass the other rows do not
        default_row = totals - counts[1:].sum(axis=0)
        default_row[np.abs(default_row) < SNAP_TOLERANCE * scale] = 0.0
        counts[0] = default_row
        tables[k] = ContingencyTable(attribute_index=k, counts=counts)

    log_function_exit(logger, "build_contingency_tables", f"{len(tables)} tables")
    return tables
