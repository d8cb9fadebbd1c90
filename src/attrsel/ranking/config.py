"""Evaluator configuration model.

Provides a Pydantic model for the options shared by all contingency
evaluators, with validation of the Va formula name.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from attrsel.ranking.combine import VaFormula


class EvaluatorConfig(BaseModel):
    """Options controlling how an evaluator builds its scores.

    Attributes:
        merge_missing: Redistribute missing-value mass into observed cells.
            When False the missing row and column are dropped.
        binarize_numeric: Binarize numeric attributes (zero vs non-zero)
            instead of requiring them to be discretized by the caller.
        formula: Va combination convention; accepts member names, values
            and the aliases ``firuz`` / ``suhel``.
        strict_normalization: Raise on a zero normalization divisor
            instead of producing zeros.
    """

    model_config = ConfigDict(frozen=True)

    merge_missing: bool = True
    binarize_numeric: bool = False
    formula: VaFormula = VaFormula.MAX_NORMALIZE
    strict_normalization: bool = False

    @field_validator("formula", mode="before")
    @classmethod
    def validate_formula(cls, v: Any) -> VaFormula:
        """Resolve formula aliases before enum validation."""
        return VaFormula.parse(v)

    def describe(self) -> str:
        """Human-readable summary of the non-default behaviour."""
        lines = []
        if not self.merge_missing:
            lines.append("Missing values dropped, not redistributed")
        if self.binarize_numeric:
            lines.append("Numeric attributes are just binarized")
        if self.strict_normalization:
            lines.append("Zero normalization divisors raise")
        lines.append(f"Va formula: {self.formula.value}")
        return "\n".join(lines)
