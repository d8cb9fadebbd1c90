"""Conversion of numeric attributes into nominal ones.

The contingency builder only understands nominal attributes. These
collaborators turn numeric attributes into category indices so a
dataset can be evaluated:

- ``NumericBinarizer``: zero vs non-zero (used for ``binarize_numeric``)
- ``KBinsAttributeDiscretizer``: bins fitted by scikit-learn's KBinsDiscretizer

Both leave nominal attributes, the class and missing values untouched.
"""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING, Callable, Literal

import numpy as np

from attrsel.ranking.dataset import Attribute, CategoricalDataset, nominal
from attrsel.ranking.logging_config import get_logger, log_function_entry, log_function_exit

if TYPE_CHECKING:
    from numpy.typing import NDArray

logger = get_logger("discretize")


def _map_entries(
    dataset: CategoricalDataset,
    attributes: list[Attribute],
    indices: list[int],
    fn: Callable[[float | None], float | None],
) -> CategoricalDataset:
    """Apply ``fn`` to every explicit entry of the given attributes."""
    targets = set(indices)
    instances = [
        replace(
            inst,
            entries=tuple((k, fn(v) if k in targets else v) for k, v in inst.entries),
        )
        for inst in dataset.instances
    ]
    return CategoricalDataset(
        attributes=attributes,
        instances=instances,
        class_index=dataset.class_index,
        name=dataset.name,
    )


def _with_columns(
    dataset: CategoricalDataset,
    attributes: list[Attribute],
    columns: dict[int, list[float | None]],
) -> CategoricalDataset:
    """Replace the given attributes with dense per-instance values."""
    instances = []
    for row, inst in enumerate(dataset.instances):
        entries = [(k, v) for k, v in inst.entries if k not in columns]
        entries.extend((k, values[row]) for k, values in columns.items())
        entries.sort(key=lambda entry: entry[0])
        instances.append(replace(inst, entries=tuple(entries)))
    return CategoricalDataset(
        attributes=attributes,
        instances=instances,
        class_index=dataset.class_index,
        name=dataset.name,
    )


class NumericBinarizer:
    """Map numeric values to ``0`` when equal to zero and ``1`` otherwise.

    Omitted sparse entries keep meaning zero, so the sparse layout is
    preserved.
    """

    def transform(self, dataset: CategoricalDataset) -> CategoricalDataset:
        numeric = dataset.numeric_attribute_indices()
        if not numeric:
            return dataset
        log_function_entry(logger, "NumericBinarizer.transform", attributes=numeric)

        attributes = list(dataset.attributes)
        for k in numeric:
            attributes[k] = nominal(attributes[k].name, ["0", "1"])

        def _binarize(value: float | None) -> float | None:
            if value is None or np.isnan(value):
                return None
            return 0.0 if value == 0 else 1.0

        result = _map_entries(dataset, attributes, numeric, _binarize)
        log_function_exit(logger, "NumericBinarizer.transform", f"{len(numeric)} binarized")
        return result


class KBinsAttributeDiscretizer:
    """Bin numeric attributes with scikit-learn's KBinsDiscretizer.

    Each numeric attribute is fitted independently on its non-missing
    values (omitted sparse entries count as 0.0). Bin labels are the
    interval edges, e.g. ``[0.5, 1.25)``.

    Args:
        n_bins: Number of bins requested per attribute.
        strategy: Bin-edge strategy passed to KBinsDiscretizer.
    """

    def __init__(
        self,
        n_bins: int = 5,
        strategy: Literal["uniform", "quantile", "kmeans"] = "quantile",
    ) -> None:
        if n_bins < 2:
            raise ValueError(f"n_bins must be at least 2, got {n_bins}")
        self.n_bins = n_bins
        self.strategy = strategy

    def transform(self, dataset: CategoricalDataset) -> CategoricalDataset:
        numeric = dataset.numeric_attribute_indices()
        if not numeric:
            return dataset
        log_function_entry(
            logger,
            "KBinsAttributeDiscretizer.transform",
            attributes=numeric,
            n_bins=self.n_bins,
            strategy=self.strategy,
        )

        attributes = list(dataset.attributes)
        replaced: dict[int, list[float | None]] = {}
        for k in numeric:
            column = _dense_column(dataset, k)
            labels, codes = self._fit_column(column)
            attributes[k] = nominal(attributes[k].name, labels)
            replaced[k] = codes

        result = _with_columns(dataset, attributes, replaced)
        log_function_exit(
            logger, "KBinsAttributeDiscretizer.transform", f"{len(numeric)} discretized"
        )
        return result

    def _fit_column(self, column: NDArray[np.float64]) -> tuple[list[str], list[float | None]]:
        from sklearn.preprocessing import KBinsDiscretizer

        observed = ~np.isnan(column)
        if not observed.any():
            return ["all"], [None] * len(column)

        values = column[observed]
        if np.unique(values).size < 2:
            labels = [f"[{values[0]:.6g}]"]
            codes: list[float | None] = [0.0 if ok else None for ok in observed]
            return labels, codes

        disc = KBinsDiscretizer(n_bins=self.n_bins, encode="ordinal", strategy=self.strategy)
        binned = disc.fit_transform(values.reshape(-1, 1))[:, 0]
        edges = disc.bin_edges_[0]
        labels = [f"[{lo:.6g}, {hi:.6g})" for lo, hi in zip(edges[:-1], edges[1:])]

        codes = [None] * len(column)
        for position, code in zip(np.flatnonzero(observed), binned):
            codes[position] = float(code)
        return labels, codes


def _dense_column(dataset: CategoricalDataset, k: int) -> NDArray[np.float64]:
    """Values of attribute ``k`` for every instance, NaN where missing."""
    column = np.zeros(dataset.num_instances(), dtype=np.float64)
    for row, inst in enumerate(dataset.instances):
        for index, value in inst.entries:
            if index == k:
                column[row] = np.nan if value is None else value
    return column
