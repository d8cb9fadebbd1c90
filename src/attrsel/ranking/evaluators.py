"""Contingency-table attribute evaluators.

An evaluator is a ``ContingencyAttributeEval`` driven by a
``ScoringPlan``: the plan names the statistics to compute per attribute
and how to turn them into the final score vector. Four plans are
registered:

- ``l2``: L2 distance only
- ``va``: information gain and chi-squared combined into Va
- ``chi_squared``: Pearson chi-squared only
- ``info_gain``: information gain only

Example:
    >>> from attrsel.ranking.evaluators import get_evaluator
    >>> va = get_evaluator("va", config=EvaluatorConfig(formula="suhel"))
    >>> result = va.build(dataset)
    >>> va.score(0)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable

import numpy as np

from attrsel.ranking.combine import combine_va
from attrsel.ranking.config import EvaluatorConfig
from attrsel.ranking.contingency import build_contingency_tables
from attrsel.ranking.discretize import NumericBinarizer
from attrsel.ranking.exceptions import (
    CapabilityError,
    ConfigurationError,
    InternalConsistencyError,
    NotBuiltError,
)
from attrsel.ranking.logging_config import (
    get_logger,
    log_function_entry,
    log_function_exit,
    log_result,
)
from attrsel.ranking.missing import merge_missing
from attrsel.ranking.results import EvaluationResult
from attrsel.ranking.statistics import Statistic, compute_statistic

if TYPE_CHECKING:
    from numpy.typing import NDArray

    from attrsel.ranking.dataset import CategoricalDataset
    from attrsel.ranking.protocols import Discretizer

logger = get_logger("evaluators")

StatisticVectors = dict[Statistic, "NDArray[np.float64]"]


def check_capabilities(dataset: CategoricalDataset, *, numeric_allowed: bool = False) -> None:
    """Verify a dataset can be evaluated before any counting starts.

    Args:
        dataset: Dataset to check.
        numeric_allowed: Whether numeric non-class attributes are acceptable
            (they will be discretized first).

    Raises:
        CapabilityError: If the class is unset or not nominal, or numeric
            attributes remain when they are not allowed.
    """
    if dataset.class_index is None:
        raise CapabilityError(
            "Dataset has no class attribute assigned",
            capability="class_assigned",
            context={"dataset": dataset.name},
        )
    class_attr = dataset.attribute(dataset.class_index)
    if not class_attr.is_nominal:
        raise CapabilityError(
            "Class attribute must be nominal",
            capability="nominal_class",
            context={"dataset": dataset.name, "class": class_attr.name},
        )
    numeric = dataset.numeric_attribute_indices()
    if numeric and not numeric_allowed:
        raise CapabilityError(
            "Numeric attributes must be discretized or binarized",
            capability="nominal_attributes",
            context={
                "dataset": dataset.name,
                "numeric": [dataset.attribute(k).name for k in numeric],
            },
        )


def prepare_dataset(
    dataset: CategoricalDataset,
    config: EvaluatorConfig | None = None,
    discretizer: Discretizer | None = None,
) -> CategoricalDataset:
    """Check capabilities and convert numeric attributes to nominal ones.

    The returned dataset is the one that gets scored. A discretizer may
    add, drop or reorder attributes, so results must be reported against
    it rather than the input.

    Raises:
        CapabilityError: If the dataset cannot be evaluated.
    """
    config = config or EvaluatorConfig()
    check_capabilities(
        dataset,
        numeric_allowed=config.binarize_numeric or discretizer is not None,
    )
    if dataset.numeric_attribute_indices():
        if config.binarize_numeric:
            dataset = NumericBinarizer().transform(dataset)
        else:
            dataset = discretizer.transform(dataset)
        check_capabilities(dataset)
    return dataset


def compute_statistic_vectors(
    dataset: CategoricalDataset,
    statistics: tuple[Statistic, ...],
    config: EvaluatorConfig | None = None,
    discretizer: Discretizer | None = None,
) -> StatisticVectors:
    """Build contingency tables and compute statistics for every attribute.

    Args:
        dataset: Dataset with a nominal class.
        statistics: Statistics to compute.
        config: Build options; defaults to ``EvaluatorConfig()``.
        discretizer: Collaborator for numeric attributes, used when
            ``binarize_numeric`` is off.

    Returns:
        One vector per statistic, indexed by the attributes of the
        prepared dataset (see ``prepare_dataset``); the class slot is 0.

    Raises:
        CapabilityError: If the dataset cannot be evaluated.
    """
    config = config or EvaluatorConfig()
    log_function_entry(
        logger,
        "compute_statistic_vectors",
        dataset=dataset,
        statistics=list(statistics),
        merge_missing=config.merge_missing,
        binarize_numeric=config.binarize_numeric,
    )

    dataset = prepare_dataset(dataset, config, discretizer)
    tables = build_contingency_tables(dataset)
    if config.merge_missing:
        tables = merge_missing(tables)

    vectors: StatisticVectors = {
        s: np.zeros(dataset.num_attributes(), dtype=np.float64) for s in statistics
    }
    for k, table in tables.items():
        matrix = table.reduced()
        for s in statistics:
            vectors[s][k] = compute_statistic(s, matrix)

    log_function_exit(logger, "compute_statistic_vectors", f"{len(tables)} attributes scored")
    return vectors


@dataclass(frozen=True)
class ScoringPlan:
    """Which statistics an evaluator needs and how they become scores.

    Attributes:
        name: Registry name.
        title: Heading used when describing a built evaluator.
        statistics: Statistics computed per attribute.
        finalize: Maps the statistic vectors and config to the score vector.
    """

    name: str
    title: str
    statistics: tuple[Statistic, ...]
    finalize: Callable[[StatisticVectors, EvaluatorConfig], NDArray[np.float64]]


def _select(
    statistic: Statistic,
) -> Callable[[StatisticVectors, EvaluatorConfig], NDArray[np.float64]]:
    def finalize(vectors: StatisticVectors, config: EvaluatorConfig) -> NDArray[np.float64]:
        return vectors[statistic]

    return finalize


def _va(vectors: StatisticVectors, config: EvaluatorConfig) -> NDArray[np.float64]:
    return combine_va(
        vectors[Statistic.INFO_GAIN],
        vectors[Statistic.CHI_SQUARED],
        config.formula,
        strict=config.strict_normalization,
    )


L2_PLAN = ScoringPlan("l2", "L2 Ranking Filter", (Statistic.L2,), _select(Statistic.L2))
VA_PLAN = ScoringPlan(
    "va",
    "Va Ranking Filter",
    (Statistic.INFO_GAIN, Statistic.CHI_SQUARED),
    _va,
)
CHI_SQUARED_PLAN = ScoringPlan(
    "chi_squared",
    "Chi-squared Ranking Filter",
    (Statistic.CHI_SQUARED,),
    _select(Statistic.CHI_SQUARED),
)
INFO_GAIN_PLAN = ScoringPlan(
    "info_gain",
    "Information Gain Ranking Filter",
    (Statistic.INFO_GAIN,),
    _select(Statistic.INFO_GAIN),
)


class ContingencyAttributeEval:
    """Evaluate attributes by a contingency-table statistic against the class.

    Each ``build`` recomputes everything from the dataset. The previous
    result is replaced only when a build succeeds.

    Args:
        plan: Scoring plan to run.
        config: Default build options.
        discretizer: Optional collaborator for numeric attributes.
    """

    def __init__(
        self,
        plan: ScoringPlan,
        config: EvaluatorConfig | None = None,
        discretizer: Discretizer | None = None,
    ) -> None:
        self.plan = plan
        self.config = config or EvaluatorConfig()
        self.discretizer = discretizer
        self._result: EvaluationResult | None = None

    @property
    def name(self) -> str:
        return self.plan.name

    @property
    def is_built(self) -> bool:
        return self._result is not None

    @property
    def result(self) -> EvaluationResult:
        """Result of the last successful build."""
        if self._result is None:
            raise NotBuiltError(f"{self.name} evaluator has not been built")
        return self._result

    def build(
        self,
        dataset: CategoricalDataset,
        config: EvaluatorConfig | None = None,
    ) -> EvaluationResult:
        """Score every attribute of ``dataset``.

        Args:
            dataset: Dataset with a nominal class.
            config: Options for this build only; defaults to ``self.config``.

        Returns:
            The new EvaluationResult.

        Raises:
            CapabilityError: If the dataset cannot be evaluated.
            DegenerateInputError: Under strict normalization with a zero divisor.
            InternalConsistencyError: If score vector lengths disagree.
        """
        config = config or self.config
        dataset = prepare_dataset(dataset, config, self.discretizer)
        vectors = compute_statistic_vectors(dataset, self.plan.statistics, config)
        scores = self.plan.finalize(vectors, config)
        if len(scores) != dataset.num_attributes():
            raise InternalConsistencyError(
                "Score vector does not match the scored attributes",
                lengths={"scores": len(scores), "attributes": dataset.num_attributes()},
            )

        result = EvaluationResult(
            evaluator=self.name,
            attribute_names=tuple(dataset.attribute_names),
            class_index=dataset.class_index,
            scores=tuple(float(s) for s in scores),
            statistics={s.value: tuple(float(v) for v in vec) for s, vec in vectors.items()},
            config=config.model_dump(mode="json"),
            total_weight=dataset.total_weight(),
            num_instances=dataset.num_instances(),
        )
        self._result = result

        log_result(
            logger,
            f"{self.plan.title} built",
            dataset=dataset.name,
            attributes=dataset.num_attributes() - 1,
            instances=dataset.num_instances(),
        )
        return result

    def score(self, index: int) -> float:
        """Score of one non-class attribute from the last build.

        Raises:
            NotBuiltError: If no build has succeeded yet.
            AttributeIndexError: For the class index or an out-of-range index.
        """
        return self.result.score(index)

    def __str__(self) -> str:
        if self._result is None:
            return f"{self.name} attribute evaluator has not been built"
        details = EvaluatorConfig(**self._result.config).describe().replace("\n", "\n\t")
        return f"\t{self.plan.title}\n\t{details}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(plan={self.name!r}, config={self.config!r})"

    @classmethod
    def l2(
        cls,
        config: EvaluatorConfig | None = None,
        discretizer: Discretizer | None = None,
    ) -> ContingencyAttributeEval:
        """Evaluator scoring attributes by the L2 statistic."""
        return cls(L2_PLAN, config, discretizer)

    @classmethod
    def va(
        cls,
        config: EvaluatorConfig | None = None,
        discretizer: Discretizer | None = None,
    ) -> ContingencyAttributeEval:
        """Evaluator scoring attributes by the Va composite."""
        return cls(VA_PLAN, config, discretizer)

    @classmethod
    def chi_squared(
        cls,
        config: EvaluatorConfig | None = None,
        discretizer: Discretizer | None = None,
    ) -> ContingencyAttributeEval:
        """Evaluator scoring attributes by chi-squared."""
        return cls(CHI_SQUARED_PLAN, config, discretizer)

    @classmethod
    def info_gain(
        cls,
        config: EvaluatorConfig | None = None,
        discretizer: Discretizer | None = None,
    ) -> ContingencyAttributeEval:
        """Evaluator scoring attributes by information gain."""
        return cls(INFO_GAIN_PLAN, config, discretizer)


# Registry of scoring plans by name
_PLANS: dict[str, ScoringPlan] = {}


def register_plan(plan: ScoringPlan) -> ScoringPlan:
    """Register a scoring plan so it can be requested by name."""
    _PLANS[plan.name] = plan
    return plan


for _plan in (L2_PLAN, VA_PLAN, CHI_SQUARED_PLAN, INFO_GAIN_PLAN):
    register_plan(_plan)


def get_evaluator(
    name: str,
    config: EvaluatorConfig | None = None,
    discretizer: Discretizer | None = None,
) -> ContingencyAttributeEval:
    """Create an evaluator for a registered plan.

    Args:
        name: Plan name (case-insensitive).
        config: Default build options.
        discretizer: Optional collaborator for numeric attributes.

    Raises:
        ConfigurationError: If no plan has that name.
    """
    key = name.strip().lower().replace("-", "_")
    if key not in _PLANS:
        raise ConfigurationError(
            f"Unknown evaluator: {name}",
            parameter="evaluator",
            value=name,
            valid_range=", ".join(sorted(_PLANS)),
        )
    return ContingencyAttributeEval(_PLANS[key], config, discretizer)


def list_evaluators() -> list[dict[str, Any]]:
    """List registered plans with their statistics."""
    return [
        {
            "name": name,
            "title": plan.title,
            "statistics": [s.value for s in plan.statistics],
        }
        for name, plan in sorted(_PLANS.items())
    ]
