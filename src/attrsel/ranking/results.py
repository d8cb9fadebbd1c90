"""Result dataclass for a completed evaluator build.

Stores the per-attribute score vector an evaluator exposes, the
intermediate statistic vectors it was derived from, and enough
dataset metadata to report a ranking.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import polars as pl

from attrsel.ranking.exceptions import AttributeIndexError


@dataclass(frozen=True)
class EvaluationResult:
    """Scores produced by one evaluator build.

    Attributes:
        evaluator: Registry name of the evaluator that produced the result.
        attribute_names: Names of all attributes, class included.
        class_index: Position of the class attribute (its score slot is 0).
        scores: Final score per attribute.
        statistics: Every computed statistic vector, keyed by name.
        config: Configuration used for the build.
        total_weight: Sum of instance weights in the dataset.
        num_instances: Number of instances in the dataset.
    """

    evaluator: str
    attribute_names: tuple[str, ...]
    class_index: int
    scores: tuple[float, ...]
    statistics: dict[str, tuple[float, ...]] = field(default_factory=dict)
    config: dict[str, Any] = field(default_factory=dict)
    total_weight: float = 0.0
    num_instances: int = 0

    @property
    def num_attributes(self) -> int:
        return len(self.attribute_names)

    def score(self, index: int) -> float:
        """Score of a non-class attribute.

        Raises:
            AttributeIndexError: If ``index`` is the class index or out of range.
        """
        if not 0 <= index < self.num_attributes:
            raise AttributeIndexError(
                "Attribute index out of range",
                index=index,
                num_attributes=self.num_attributes,
            )
        if index == self.class_index:
            raise AttributeIndexError(
                "The class attribute is not scored",
                index=index,
                num_attributes=self.num_attributes,
            )
        return self.scores[index]

    def ranking(self) -> list[tuple[int, str, float]]:
        """Non-class attributes as ``(index, name, score)``, best first.

        Ties keep attribute order.
        """
        items = [
            (k, name, self.scores[k])
            for k, name in enumerate(self.attribute_names)
            if k != self.class_index
        ]
        return sorted(items, key=lambda item: -item[2])

    def top_k(self, k: int) -> list[str]:
        """Names of the ``k`` best-scoring attributes."""
        return [name for _, name, _ in self.ranking()[:k]]

    def to_frame(self) -> pl.DataFrame:
        """Ranking as a DataFrame with columns attribute, index, score, rank."""
        ranked = self.ranking()
        return pl.DataFrame(
            {
                "attribute": [name for _, name, _ in ranked],
                "index": [k for k, _, _ in ranked],
                "score": [score for _, _, score in ranked],
                "rank": list(range(1, len(ranked) + 1)),
            },
            schema={
                "attribute": pl.Utf8,
                "index": pl.Int64,
                "score": pl.Float64,
                "rank": pl.Int64,
            },
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "evaluator": self.evaluator,
            "attribute_names": list(self.attribute_names),
            "class_index": self.class_index,
            "scores": list(self.scores),
            "statistics": {k: list(v) for k, v in self.statistics.items()},
            "config": dict(self.config),
            "total_weight": self.total_weight,
            "num_instances": self.num_instances,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> EvaluationResult:
        """Create from dictionary."""
        return cls(
            evaluator=data["evaluator"],
            attribute_names=tuple(data["attribute_names"]),
            class_index=data["class_index"],
            scores=tuple(data["scores"]),
            statistics={k: tuple(v) for k, v in data.get("statistics", {}).items()},
            config=dict(data.get("config", {})),
            total_weight=data.get("total_weight", 0.0),
            num_instances=data.get("num_instances", 0),
        )
