"""Contingency-table attribute ranking against a categorical class.

This package provides:
- Weighted contingency tables with missing-value rows and columns
- Proportional redistribution of missing-value mass
- L2, chi-squared and information-gain statistics per attribute
- The Va composite of information gain and chi-squared
- Evaluators selectable by name and a Polars ranking interface

Example:
    >>> import polars as pl
    >>> from attrsel.ranking import EvaluatorConfig, from_polars, get_evaluator
    >>>
    >>> dataset = from_polars(df, class_column="play")
    >>> va = get_evaluator("va", config=EvaluatorConfig(formula="firuz"))
    >>> result = va.build(dataset)
    >>> result.to_frame()
"""

from attrsel.ranking.combine import (
    VaFormula,
    combine_va,
    euclidean_normalize,
    max_normalize,
    va_euclidean_normalize_twice,
    va_max_normalize,
)
from attrsel.ranking.config import EvaluatorConfig
from attrsel.ranking.contingency import (
    ContingencyTable,
    build_contingency_tables,
    class_totals,
    reduce_matrix,
)
from attrsel.ranking.dataset import (
    Attribute,
    CategoricalDataset,
    Instance,
    from_polars,
    nominal,
    numeric,
)
from attrsel.ranking.discretize import KBinsAttributeDiscretizer, NumericBinarizer
from attrsel.ranking.evaluators import (
    ContingencyAttributeEval,
    ScoringPlan,
    check_capabilities,
    compute_statistic_vectors,
    get_evaluator,
    list_evaluators,
    prepare_dataset,
    register_plan,
)
from attrsel.ranking.exceptions import (
    AttributeIndexError,
    CapabilityError,
    ConfigurationError,
    DegenerateInputError,
    InternalConsistencyError,
    NotBuiltError,
    RankingError,
)
from attrsel.ranking.missing import MissingMass, merge_missing, missing_mass, redistribute_missing
from attrsel.ranking.protocols import AttributeEvaluator, Discretizer
from attrsel.ranking.ranking import rank_attributes, rank_frame, select_top_k
from attrsel.ranking.results import EvaluationResult
from attrsel.ranking.statistics import (
    Statistic,
    chi_squared,
    degrees_of_freedom,
    information_gain,
    l2_statistic,
    marginals,
)

__all__ = [
    # Dataset
    "Attribute",
    "CategoricalDataset",
    "Instance",
    "from_polars",
    "nominal",
    "numeric",
    # Discretization
    "NumericBinarizer",
    "KBinsAttributeDiscretizer",
    # Contingency tables
    "ContingencyTable",
    "build_contingency_tables",
    "class_totals",
    "reduce_matrix",
    # Missing values
    "MissingMass",
    "missing_mass",
    "redistribute_missing",
    "merge_missing",
    # Statistics
    "Statistic",
    "l2_statistic",
    "chi_squared",
    "information_gain",
    "degrees_of_freedom",
    "marginals",
    # Va
    "VaFormula",
    "max_normalize",
    "euclidean_normalize",
    "va_max_normalize",
    "va_euclidean_normalize_twice",
    "combine_va",
    # Evaluators
    "ContingencyAttributeEval",
    "ScoringPlan",
    "check_capabilities",
    "compute_statistic_vectors",
    "get_evaluator",
    "list_evaluators",
    "prepare_dataset",
    "register_plan",
    # Ranking
    "rank_attributes",
    "rank_frame",
    "select_top_k",
    # Config, protocols and results
    "EvaluatorConfig",
    "AttributeEvaluator",
    "Discretizer",
    "EvaluationResult",
    # Exceptions
    "RankingError",
    "CapabilityError",
    "DegenerateInputError",
    "InternalConsistencyError",
    "NotBuiltError",
    "AttributeIndexError",
    "ConfigurationError",
]
