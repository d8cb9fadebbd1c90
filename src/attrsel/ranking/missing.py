"""Redistribution of missing-value mass into the observed table.

Mass recorded against a missing attribute value, a missing class, or
both is folded back into the ``num_values x num_classes`` core in
proportion to the observed marginals:

- value missing, class known: spread over values by row share
- value known, class missing: spread over classes by column share
- both missing: spread over every cell by its share of the total

The grand total is conserved up to floating-point rounding.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from attrsel.ranking.contingency import ContingencyTable
from attrsel.ranking.logging_config import get_logger, log_result

if TYPE_CHECKING:
    from numpy.typing import NDArray

logger = get_logger("missing")


@dataclass(frozen=True)
class MissingMass:
    """Weight recorded outside the observed core of one table.

    Attributes:
        value_missing: Mass with missing value and known class.
        class_missing: Mass with known value and missing class.
        both_missing: Mass with both missing.
    """

    value_missing: float
    class_missing: float
    both_missing: float

    @property
    def total(self) -> float:
        return self.value_missing + self.class_missing + self.both_missing

    def to_dict(self) -> dict[str, float]:
        """Convert to dictionary for JSON serialization."""
        return {
            "value_missing": self.value_missing,
            "class_missing": self.class_missing,
            "both_missing": self.both_missing,
            "total": self.total,
        }


def missing_mass(table: ContingencyTable) -> MissingMass:
    """Summarize how much of a table's weight sits in the missing row/column."""
    return MissingMass(
        value_missing=float(table.missing_value_row.sum()),
        class_missing=float(table.missing_class_column.sum()),
        both_missing=table.both_missing,
    )


def redistribution_additions(table: ContingencyTable) -> NDArray[np.float64] | None:
    """Compute what each core cell receives from the missing row and column.

    For core cell ``(i, j)`` with row sums ``r``, column sums ``c`` and
    core total ``n``::

        r[i] / n * missing_value_row[j]
        + c[j] / n * missing_class_column[i]
        + core[i, j] / n * both_missing

    Args:
        table: Table with its missing row and column.

    Returns:
        Array shaped like the core, or None when the core holds no
        positive mass to apportion against.
    """
    core = table.core
    row_sums = core.sum(axis=1)
    col_sums = core.sum(axis=0)
    total = float(row_sums.sum())

    if not total > 0:
        return None

    additions = np.outer(row_sums / total, table.missing_value_row)
    additions += np.outer(table.missing_class_column, col_sums / total)
    additions += (core / total) * table.both_missing
    return additions


def redistribute_missing(table: ContingencyTable) -> ContingencyTable:
    """Fold the missing row and column of a table into its core.

    Args:
        table: Table as produced by the contingency builder.

    Returns:
        A new table whose missing row and column are zero and whose core
        holds all the mass. If the core total is not positive the input
        table is returned unchanged, so its missing mass is later dropped
        by the reduce step.
    """
    additions = redistribution_additions(table)
    if additions is None:
        return table

    counts = np.zeros_like(table.counts)
    counts[:-1, :-1] = table.core + additions
    return ContingencyTable(attribute_index=table.attribute_index, counts=counts)


def merge_missing(tables: dict[int, ContingencyTable]) -> dict[int, ContingencyTable]:
    """Redistribute missing mass for every table.

    Args:
        tables: Mapping of attribute index to table.

    Returns:
        New mapping with redistributed tables; input tables are not modified.
    """
    merged: dict[int, ContingencyTable] = {}
    moved = 0.0
    skipped = 0
    for k, table in tables.items():
        result = redistribute_missing(table)
        if result is table:
            skipped += 1
        else:
            moved += missing_mass(table).total
        merged[k] = result

    log_result(
        logger,
        "Missing values redistributed",
        tables=len(tables),
        moved_weight=moved,
        skipped_empty=skipped,
    )
    return merged
