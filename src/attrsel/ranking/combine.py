"""Va composite score from information gain and chi-squared vectors.

Two conventions are supported, each a pure function of the two score
vectors:

- ``MAX_NORMALIZE``: divide each vector by its maximum, then take the
  per-attribute Euclidean norm of the two normalized values.
- ``EUCLIDEAN_NORMALIZE_TWICE``: divide each vector by its Euclidean
  norm, take the per-attribute Euclidean norm, then normalize the
  resulting composite vector by its Euclidean norm again.

A vector whose divisor is zero normalizes to all zeros (with a warning),
or raises ``DegenerateInputError`` when ``strict`` is set.

Example:
    >>> va = combine_va(ig_scores, chi_scores, VaFormula.MAX_NORMALIZE)
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Callable

import numpy as np

from attrsel.ranking.exceptions import (
    ConfigurationError,
    DegenerateInputError,
    InternalConsistencyError,
)
from attrsel.ranking.logging_config import get_logger, log_warning

if TYPE_CHECKING:
    from numpy.typing import ArrayLike, NDArray

logger = get_logger("combine")


class VaFormula(str, Enum):
    """Normalization/combination convention for the Va score."""

    MAX_NORMALIZE = "max_normalize"
    EUCLIDEAN_NORMALIZE_TWICE = "euclidean_normalize_twice"

    @classmethod
    def parse(cls, value: VaFormula | str) -> VaFormula:
        """Resolve a formula from its member, value, name or alias.

        ``"firuz"`` is an alias for ``MAX_NORMALIZE`` and ``"suhel"`` for
        ``EUCLIDEAN_NORMALIZE_TWICE``. Matching is case-insensitive.

        Raises:
            ConfigurationError: If the name is not recognized.
        """
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower().replace("-", "_")
        if key in _FORMULA_ALIASES:
            return _FORMULA_ALIASES[key]
        for member in cls:
            if key in (member.value, member.name.lower()):
                return member
        raise ConfigurationError(
            f"Unknown Va formula: {value}",
            parameter="formula",
            value=value,
            valid_range=", ".join([m.value for m in cls] + sorted(_FORMULA_ALIASES)),
        )


_FORMULA_ALIASES = {
    "firuz": VaFormula.MAX_NORMALIZE,
    "suhel": VaFormula.EUCLIDEAN_NORMALIZE_TWICE,
}


def _degenerate(name: str, divisor: float, size: int, strict: bool) -> NDArray[np.float64]:
    if strict:
        raise DegenerateInputError(
            "Cannot normalize a vector with zero divisor",
            statistic=name,
            context={"divisor": divisor},
        )
    log_warning(logger, "Zero normalization divisor, using zero vector", vector=name, size=size)
    return np.zeros(size, dtype=np.float64)


def max_normalize(
    values: ArrayLike, *, name: str = "vector", strict: bool = False
) -> NDArray[np.float64]:
    """Divide every entry by the vector maximum.

    Args:
        values: Score vector.
        name: Label used in warnings and errors.
        strict: Raise instead of returning zeros when the maximum is not positive.

    Returns:
        Normalized vector with maximum 1.0, or zeros for a degenerate input.
    """
    arr = np.asarray(values, dtype=np.float64)
    if arr.size == 0:
        return arr.copy()
    divisor = float(arr.max())
    if not divisor > 0:
        return _degenerate(name, divisor, arr.size, strict)
    return arr / divisor


def euclidean_normalize(
    values: ArrayLike, *, name: str = "vector", strict: bool = False
) -> NDArray[np.float64]:
    """Divide every entry by the Euclidean norm of the vector.

    Args:
        values: Score vector.
        name: Label used in warnings and errors.
        strict: Raise instead of returning zeros when the norm is 0.

    Returns:
        Unit-norm vector, or zeros for a degenerate input.
    """
    arr = np.asarray(values, dtype=np.float64)
    if arr.size == 0:
        return arr.copy()
    divisor = float(np.linalg.norm(arr))
    if divisor == 0:
        return _degenerate(name, divisor, arr.size, strict)
    return arr / divisor


def _check_lengths(**vectors: NDArray[np.float64]) -> None:
    lengths = {name: len(vec) for name, vec in vectors.items()}
    if len(set(lengths.values())) > 1:
        raise InternalConsistencyError("Score vector lengths differ", lengths=lengths)


def va_max_normalize(
    ig: ArrayLike, chi: ArrayLike, *, strict: bool = False
) -> NDArray[np.float64]:
    """Va with each vector scaled by its maximum."""
    ig_norm = max_normalize(ig, name="info_gain", strict=strict)
    chi_norm = max_normalize(chi, name="chi_squared", strict=strict)
    _check_lengths(info_gain=ig_norm, chi_squared=chi_norm)
    return np.hypot(ig_norm, chi_norm)


def va_euclidean_normalize_twice(
    ig: ArrayLike, chi: ArrayLike, *, strict: bool = False
) -> NDArray[np.float64]:
    """Va with unit-norm inputs and a unit-norm composite."""
    ig_norm = euclidean_normalize(ig, name="info_gain", strict=strict)
    chi_norm = euclidean_normalize(chi, name="chi_squared", strict=strict)
    _check_lengths(info_gain=ig_norm, chi_squared=chi_norm)
    return euclidean_normalize(np.hypot(ig_norm, chi_norm), name="va", strict=strict)


COMBINERS: dict[VaFormula, Callable[..., NDArray[np.float64]]] = {
    VaFormula.MAX_NORMALIZE: va_max_normalize,
    VaFormula.EUCLIDEAN_NORMALIZE_TWICE: va_euclidean_normalize_twice,
}


def combine_va(
    ig: ArrayLike,
    chi: ArrayLike,
    formula: VaFormula | str = VaFormula.MAX_NORMALIZE,
    *,
    strict: bool = False,
) -> NDArray[np.float64]:
    """Combine information gain and chi-squared vectors into Va scores.

    Args:
        ig: Information gain per attribute.
        chi: Chi-squared per attribute.
        formula: Combination convention (member, value or alias).
        strict: Raise ``DegenerateInputError`` on a zero divisor.

    Returns:
        Va score per attribute, same length and order as the inputs.

    Raises:
        InternalConsistencyError: If input or output lengths disagree.
    """
    ig_arr = np.asarray(ig, dtype=np.float64)
    chi_arr = np.asarray(chi, dtype=np.float64)
    _check_lengths(info_gain=ig_arr, chi_squared=chi_arr)

    combiner = COMBINERS[VaFormula.parse(formula)]
    va = combiner(ig_arr, chi_arr, strict=strict)

    _check_lengths(va=va, info_gain=ig_arr, chi_squared=chi_arr)
    return va
