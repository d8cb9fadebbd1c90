"""Categorical dataset representation consumed by the contingency builder.

A dataset is a list of attribute declarations plus a list of weighted
instances. Each instance stores its attribute values sparsely as
``(attribute_index, value)`` pairs: an attribute that is not listed is
taken to hold its zero/default value, and a listed value of ``None`` is
missing. The class value is stored separately on the instance.

Example:
    >>> from attrsel.ranking.dataset import CategoricalDataset, Instance, nominal
    >>> data = CategoricalDataset(
    ...     attributes=[nominal("outlook", ["sunny", "rain"]), nominal("play", ["no", "yes"])],
    ...     instances=[Instance.dense([0], class_value=1), Instance.dense([1], class_value=0)],
    ...     class_index=1,
    ... )
    >>> data.num_classes
    2
"""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass, field
from typing import Iterator, Sequence

import polars as pl

from attrsel.ranking.exceptions import CapabilityError

SparseEntry = tuple[int, "float | None"]


@dataclass(frozen=True)
class Attribute:
    """Declaration of one dataset column.

    Attributes:
        name: Column name.
        values: Category labels for a nominal attribute, ``None`` for numeric.
    """

    name: str
    values: tuple[str, ...] | None = None

    @property
    def is_nominal(self) -> bool:
        """True when the attribute holds category indices."""
        return self.values is not None

    @property
    def is_numeric(self) -> bool:
        """True when the attribute holds raw numbers."""
        return self.values is None

    def num_values(self) -> int:
        """Number of declared categories (0 for numeric attributes)."""
        return len(self.values) if self.values is not None else 0


def nominal(name: str, values: Sequence[str]) -> Attribute:
    """Declare a nominal attribute."""
    return Attribute(name=name, values=tuple(str(v) for v in values))


def numeric(name: str) -> Attribute:
    """Declare a numeric attribute."""
    return Attribute(name=name, values=None)


@dataclass(frozen=True)
class Instance:
    """One weighted row in sparse form.

    Attributes:
        entries: Explicit ``(attribute_index, value)`` pairs. For nominal
            attributes the value is the category index; ``None`` marks a
            missing value.
        class_value: Class category index, ``None`` when missing.
        weight: Instance weight.
    """

    entries: tuple[SparseEntry, ...] = ()
    class_value: int | None = None
    weight: float = 1.0

    @classmethod
    def dense(
        cls,
        values: Sequence[float | None],
        class_value: int | None = None,
        weight: float = 1.0,
        *,
        skip: int | None = None,
    ) -> Instance:
        """Build an instance listing every attribute explicitly.

        Args:
            values: One value per attribute position.
            class_value: Class category index or ``None``.
            weight: Instance weight.
            skip: Optional position to leave out (typically the class index).
        """
        entries = tuple((i, v) for i, v in enumerate(values) if i != skip)
        return cls(entries=entries, class_value=class_value, weight=weight)

    @property
    def class_is_missing(self) -> bool:
        return self.class_value is None

    def num_values(self) -> int:
        """Number of explicit entries."""
        return len(self.entries)

    def index(self, position: int) -> int:
        """Attribute index of the entry at ``position``."""
        return self.entries[position][0]

    def value_sparse(self, position: int) -> float | None:
        """Value of the entry at ``position``."""
        return self.entries[position][1]

    def is_missing_sparse(self, position: int) -> bool:
        """True when the entry at ``position`` holds a missing value."""
        return _is_missing(self.entries[position][1])


def _is_missing(value: float | None) -> bool:
    return value is None or (isinstance(value, float) and math.isnan(value))


@dataclass
class CategoricalDataset:
    """Attributes, weighted sparse instances and the class position.

    Attributes:
        attributes: Attribute declarations, class attribute included.
        instances: Weighted instances.
        class_index: Position of the class attribute, ``None`` if unset.
        name: Relation name used in logs and reports.
    """

    attributes: list[Attribute]
    instances: list[Instance] = field(default_factory=list)
    class_index: int | None = None
    name: str = "dataset"

    def __post_init__(self) -> None:
        if self.class_index is not None and not 0 <= self.class_index < len(self.attributes):
            raise ValueError(
                f"class_index {self.class_index} out of range for "
                f"{len(self.attributes)} attributes"
            )
        for row, inst in enumerate(self.instances):
            self._validate_instance(row, inst)

    def _validate_instance(self, row: int, inst: Instance) -> None:
        if inst.weight is None or not math.isfinite(inst.weight) or inst.weight < 0:
            raise ValueError(f"Instance {row} has invalid weight {inst.weight!r}")
        if inst.class_value is not None and self.class_index is not None:
            if not isinstance(inst.class_value, numbers.Integral):
                raise ValueError(
                    f"Instance {row} has non-integer class value {inst.class_value!r}"
                )
            class_attr = self.attributes[self.class_index]
            if class_attr.is_nominal and not 0 <= inst.class_value < class_attr.num_values():
                raise ValueError(
                    f"Instance {row} has class value {inst.class_value} outside "
                    f"[0, {class_attr.num_values()})"
                )
        seen: set[int] = set()
        for attr_index, value in inst.entries:
            if not 0 <= attr_index < len(self.attributes):
                raise ValueError(f"Instance {row} references unknown attribute {attr_index}")
            if attr_index in seen:
                raise ValueError(f"Instance {row} lists attribute {attr_index} more than once")
            seen.add(attr_index)
            attr = self.attributes[attr_index]
            if attr.is_nominal and not _is_missing(value):
                if value != int(value) or not 0 <= value < attr.num_values():
                    raise ValueError(
                        f"Instance {row} has value {value} for nominal attribute "
                        f"'{attr.name}' with {attr.num_values()} values"
                    )

    def num_instances(self) -> int:
        return len(self.instances)

    def num_attributes(self) -> int:
        return len(self.attributes)

    def attribute(self, index: int) -> Attribute:
        return self.attributes[index]

    @property
    def class_attribute(self) -> Attribute | None:
        if self.class_index is None:
            return None
        return self.attributes[self.class_index]

    @property
    def num_classes(self) -> int:
        class_attr = self.class_attribute
        return class_attr.num_values() if class_attr is not None else 0

    @property
    def attribute_names(self) -> list[str]:
        return [attr.name for attr in self.attributes]

    def total_weight(self) -> float:
        """Sum of all instance weights."""
        return float(sum(inst.weight for inst in self.instances))

    def numeric_attribute_indices(self) -> list[int]:
        """Indices of non-class numeric attributes."""
        return [
            k
            for k, attr in enumerate(self.attributes)
            if k != self.class_index and attr.is_numeric
        ]

    def __iter__(self) -> Iterator[Instance]:
        return iter(self.instances)

    def __len__(self) -> int:
        return len(self.instances)


def from_polars(
    df: pl.DataFrame,
    class_column: str,
    *,
    weight_column: str | None = None,
    sparse: bool = False,
    name: str = "dataset",
) -> CategoricalDataset:
    """Convert a Polars DataFrame into a categorical dataset.

    String, categorical, enum and boolean columns become nominal
    attributes whose categories are the sorted distinct non-null values
    (enum columns keep their declared order, booleans are ``false, true``).
    Numeric columns become numeric attributes and must be discretized
    before table construction. Nulls become missing values.

    Args:
        df: Input frame, one row per instance.
        class_column: Name of the class column (must be nominal).
        weight_column: Optional column of non-negative instance weights.
        sparse: If True, omit entries whose value is zero (category index
            0 or numeric 0.0).
        name: Relation name for the dataset.

    Returns:
        CategoricalDataset with the class attribute at its column position.

    Raises:
        ValueError: If a named column is absent or weights contain nulls.
        CapabilityError: If a column has an unsupported dtype.
    """
    if class_column not in df.columns:
        raise ValueError(f"Class column '{class_column}' not in frame")
    if weight_column is not None and weight_column not in df.columns:
        raise ValueError(f"Weight column '{weight_column}' not in frame")

    columns = [c for c in df.columns if c != weight_column]
    attributes: list[Attribute] = []
    encoded: list[list[float | None]] = []

    for col in columns:
        series = df[col]
        attr, values = _encode_column(series)
        attributes.append(attr)
        encoded.append(values)

    if weight_column is not None:
        weights_series = df[weight_column]
        if weights_series.null_count() > 0:
            raise ValueError(f"Weight column '{weight_column}' contains nulls")
        weights = [float(w) for w in weights_series.to_list()]
    else:
        weights = [1.0] * df.height

    class_index = columns.index(class_column)
    instances = []
    for row in range(df.height):
        class_raw = encoded[class_index][row]
        entries = []
        for k, values in enumerate(encoded):
            if k == class_index:
                continue
            value = values[row]
            if sparse and value == 0:
                continue
            entries.append((k, value))
        instances.append(
            Instance(
                entries=tuple(entries),
                class_value=None if class_raw is None else int(class_raw),
                weight=weights[row],
            )
        )

    return CategoricalDataset(
        attributes=attributes,
        instances=instances,
        class_index=class_index,
        name=name,
    )


def _encode_column(series: pl.Series) -> tuple[Attribute, list[float | None]]:
    """Map one column to an attribute declaration and per-row values."""
    dtype = series.dtype

    if dtype == pl.Boolean:
        labels = ["false", "true"]
        values = [None if v is None else float(int(v)) for v in series.to_list()]
        return nominal(series.name, labels), values

    if isinstance(dtype, pl.Enum):
        labels = list(dtype.categories.to_list())
    elif dtype in (pl.String, pl.Categorical):
        labels = sorted(str(v) for v in series.drop_nulls().unique().to_list())
    elif dtype.is_numeric():
        raw = series.cast(pl.Float64).to_list()
        values = [None if v is None or math.isnan(v) else float(v) for v in raw]
        return numeric(series.name), values
    else:
        raise CapabilityError(
            f"Unsupported column type for '{series.name}'",
            capability="column_dtype",
            context={"dtype": str(dtype)},
        )

    lookup = {label: float(i) for i, label in enumerate(labels)}
    values = [None if v is None else lookup[str(v)] for v in series.to_list()]
    return nominal(series.name, labels), values
