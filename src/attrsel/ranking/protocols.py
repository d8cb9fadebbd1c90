"""Protocol interfaces for evaluators and discretizers.

Defines the contracts an attribute evaluator and a discretization
collaborator must implement so they can be swapped by name or injected.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from attrsel.ranking.config import EvaluatorConfig
    from attrsel.ranking.dataset import CategoricalDataset
    from attrsel.ranking.results import EvaluationResult


@runtime_checkable
class AttributeEvaluator(Protocol):
    """Protocol for single-attribute evaluators.

    An evaluator is built once over a dataset and then queried for the
    score of individual attributes.

    Example:
        >>> class ConstantEval:
        ...     def build(self, dataset, config=None) -> EvaluationResult: ...
        ...     def score(self, index: int) -> float:
        ...         return 1.0
    """

    def build(
        self,
        dataset: "CategoricalDataset",
        config: "EvaluatorConfig | None" = None,
    ) -> "EvaluationResult":
        """Compute scores for every attribute of ``dataset``.

        Args:
            dataset: Dataset with a nominal class.
            config: Optional configuration overriding the stored one.

        Returns:
            EvaluationResult holding one score per attribute.
        """
        ...

    def score(self, index: int) -> float:
        """Return the score of one non-class attribute from the last build."""
        ...


@runtime_checkable
class Discretizer(Protocol):
    """Protocol for converting numeric attributes to nominal ones.

    Example:
        >>> class Identity:
        ...     def transform(self, dataset: CategoricalDataset) -> CategoricalDataset:
        ...         return dataset
    """

    def transform(self, dataset: "CategoricalDataset") -> "CategoricalDataset":
        """Return a dataset whose non-class attributes are all nominal."""
        ...
