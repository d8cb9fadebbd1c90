"""Tests for numeric attribute discretization collaborators."""

import pytest

from attrsel.ranking.dataset import CategoricalDataset, Instance, nominal, numeric
from attrsel.ranking.discretize import KBinsAttributeDiscretizer, NumericBinarizer


def _numeric_dataset(values: list[float | None], sparse: bool = False) -> CategoricalDataset:
    instances = []
    for i, v in enumerate(values):
        entries = () if sparse and v == 0 else ((0, v),)
        instances.append(Instance(entries=entries, class_value=i % 2))
    return CategoricalDataset(
        attributes=[numeric("x"), nominal("c", ["p", "q"])],
        instances=instances,
        class_index=1,
    )


def _codes(dataset: CategoricalDataset) -> list[float | None]:
    return [dict(inst.entries).get(0, 0.0) for inst in dataset.instances]


class TestNumericBinarizer:
    """Tests for NumericBinarizer."""

    def test_binarizes(self) -> None:
        out = NumericBinarizer().transform(_numeric_dataset([0.0, 2.5, -1.0, None]))
        assert out.attribute(0).values == ("0", "1")
        assert _codes(out) == [0.0, 1.0, 1.0, None]
        assert out.numeric_attribute_indices() == []

    def test_keeps_sparse_layout(self) -> None:
        out = NumericBinarizer().transform(_numeric_dataset([0.0, 3.0], sparse=True))
        assert out.instances[0].entries == ()
        assert out.instances[1].entries == ((0, 1.0),)

    def test_nominal_untouched(self, independent_dataset: CategoricalDataset) -> None:
        assert NumericBinarizer().transform(independent_dataset) is independent_dataset

    def test_preserves_weights_and_class(self, mixed_dataset: CategoricalDataset) -> None:
        out = NumericBinarizer().transform(mixed_dataset)
        assert [i.weight for i in out.instances] == [i.weight for i in mixed_dataset.instances]
        assert out.class_index == 1
        assert out.attribute(0) == mixed_dataset.attribute(0)


class TestKBinsAttributeDiscretizer:
    """Tests for KBinsAttributeDiscretizer."""

    def test_uniform_bins(self) -> None:
        data = _numeric_dataset([1.0, 2.0, 3.0, 4.0, 5.0, 6.0, 7.0, 8.0])
        out = KBinsAttributeDiscretizer(n_bins=2, strategy="uniform").transform(data)
        assert out.attribute(0).values == ("[1, 4.5)", "[4.5, 8)")
        assert _codes(out) == [0.0, 0.0, 0.0, 0.0, 1.0, 1.0, 1.0, 1.0]

    def test_missing_stays_missing(self) -> None:
        data = _numeric_dataset([1.0, None, 3.0, 9.0])
        out = KBinsAttributeDiscretizer(n_bins=2, strategy="uniform").transform(data)
        assert _codes(out)[1] is None

    def test_omitted_entries_are_zero(self) -> None:
        data = _numeric_dataset([0.0, 10.0, 0.0, 10.0], sparse=True)
        out = KBinsAttributeDiscretizer(n_bins=2, strategy="uniform").transform(data)
        assert _codes(out) == [0.0, 1.0, 0.0, 1.0]
        assert all(inst.num_values() == 1 for inst in out.instances)

    def test_constant_column(self) -> None:
        out = KBinsAttributeDiscretizer().transform(_numeric_dataset([3.0, 3.0, 3.0]))
        assert out.attribute(0).values == ("[3]",)
        assert _codes(out) == [0.0, 0.0, 0.0]

    def test_all_missing(self) -> None:
        out = KBinsAttributeDiscretizer().transform(_numeric_dataset([None, None]))
        assert out.attribute(0).values == ("all",)
        assert _codes(out) == [None, None]

    def test_invalid_bins(self) -> None:
        with pytest.raises(ValueError, match="n_bins"):
            KBinsAttributeDiscretizer(n_bins=1)

    def test_nominal_untouched(self, independent_dataset: CategoricalDataset) -> None:
        assert KBinsAttributeDiscretizer().transform(independent_dataset) is independent_dataset
