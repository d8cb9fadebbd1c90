"""Attribute ranking for feature-selection pipelines.

Wraps an evaluator build into the ranked attribute list a selection
step consumes, as a Polars DataFrame sorted by score.

Example:
    >>> import polars as pl
    >>> from attrsel.ranking import rank_frame
    >>>
    >>> ranked = rank_frame(df, class_column="play", evaluator="va")
    >>> print(ranked)
    shape: (4, 4)
    ┌───────────┬───────┬───────┬──────┐
    │ attribute ┆ index ┆ score ┆ rank │
    ├───────────┼───────┼───────┼──────┤
    │ outlook   ┆ 0     ┆ 1.41  ┆ 1    │
    │ humidity  ┆ 2     ┆ 0.62  ┆ 2    │
    │ windy     ┆ 3     ┆ 0.35  ┆ 3    │
    │ temp      ┆ 1     ┆ 0.12  ┆ 4    │
    └───────────┴───────┴───────┴──────┘
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import polars as pl

from attrsel.ranking.config import EvaluatorConfig
from attrsel.ranking.dataset import CategoricalDataset, from_polars
from attrsel.ranking.evaluators import ContingencyAttributeEval, get_evaluator

if TYPE_CHECKING:
    from attrsel.ranking.protocols import Discretizer


def rank_attributes(
    dataset: CategoricalDataset,
    evaluator: str | ContingencyAttributeEval = "va",
    *,
    config: EvaluatorConfig | None = None,
    discretizer: Discretizer | None = None,
    top_k: int | None = None,
) -> pl.DataFrame:
    """Score every attribute and return them best first.

    Args:
        dataset: Dataset with a nominal class.
        evaluator: Registered evaluator name or an evaluator instance.
        config: Build options (ignored for instances unless given).
        discretizer: Collaborator for numeric attributes (name lookups only).
        top_k: Keep only the ``top_k`` best attributes.

    Returns:
        DataFrame with columns: attribute, index, score, rank.
        The class attribute is not included.
    """
    if isinstance(evaluator, str):
        evaluator = get_evaluator(evaluator, config=config, discretizer=discretizer)
        result = evaluator.build(dataset)
    else:
        result = evaluator.build(dataset, config)

    ranked = result.to_frame()
    if top_k is not None:
        ranked = ranked.head(top_k)
    return ranked


def rank_frame(
    df: pl.DataFrame,
    class_column: str,
    evaluator: str | ContingencyAttributeEval = "va",
    *,
    weight_column: str | None = None,
    config: EvaluatorConfig | None = None,
    discretizer: Discretizer | None = None,
    top_k: int | None = None,
) -> pl.DataFrame:
    """Rank the columns of a DataFrame against a categorical class column.

    Args:
        df: Input frame, one row per instance.
        class_column: Name of the class column.
        evaluator: Registered evaluator name or an evaluator instance.
        weight_column: Optional column of instance weights (not ranked).
        config: Build options.
        discretizer: Collaborator for numeric columns.
        top_k: Keep only the ``top_k`` best attributes.

    Returns:
        DataFrame with columns: attribute, index, score, rank.
    """
    dataset = from_polars(df, class_column, weight_column=weight_column)
    return rank_attributes(
        dataset,
        evaluator,
        config=config,
        discretizer=discretizer,
        top_k=top_k,
    )


def select_top_k(
    df: pl.DataFrame,
    class_column: str,
    k: int,
    evaluator: str | ContingencyAttributeEval = "va",
    *,
    weight_column: str | None = None,
    config: EvaluatorConfig | None = None,
    discretizer: Discretizer | None = None,
) -> list[str]:
    """Names of the ``k`` highest-ranked columns.

    Example:
        >>> select_top_k(df, "play", k=2)
        ['outlook', 'humidity']
    """
    ranked = rank_frame(
        df,
        class_column,
        evaluator,
        weight_column=weight_column,
        config=config,
        discretizer=discretizer,
        top_k=k,
    )
    return ranked["attribute"].to_list()
