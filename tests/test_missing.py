"""Tests for missing-value redistribution."""

import logging

import numpy as np
import pytest

from attrsel.ranking.contingency import ContingencyTable, build_contingency_tables
from attrsel.ranking.dataset import CategoricalDataset
from attrsel.ranking.missing import (
    MissingMass,
    merge_missing,
    missing_mass,
    redistribute_missing,
    redistribution_additions,
)


def _table(counts: list[list[float]]) -> ContingencyTable:
    return ContingencyTable(attribute_index=0, counts=np.array(counts, dtype=np.float64))


class TestMissingMass:
    """Tests for missing_mass summary."""

    def test_components(self) -> None:
        table = _table([[1.0, 0.0, 1.0], [0.0, 2.0, 0.5], [1.0, 0.5, 0.25]])
        mass = missing_mass(table)
        assert mass == MissingMass(value_missing=1.5, class_missing=1.5, both_missing=0.25)
        assert mass.total == pytest.approx(3.25)
        assert mass.to_dict()["total"] == pytest.approx(3.25)


class TestRedistributeMissing:
    """Tests for redistribute_missing."""

    def test_three_term_correction(self) -> None:
        table = _table([
            [1.0, 0.0, 1.0],
            [0.0, 0.0, 0.5],
            [0.0, 2.0, 0.0],
            [1.0, 0.0, 0.25],
        ])
        merged = redistribute_missing(table)
        expected_core = np.array([
            [1.0 + 1 / 3 + 1 / 3 + 1 / 12, 2 / 3],
            [1 / 6, 1 / 3],
            [2 / 3, 2.0 + 1 / 6],
        ])
        np.testing.assert_allclose(merged.core, expected_core)
        np.testing.assert_allclose(merged.missing_value_row, [0.0, 0.0])
        np.testing.assert_allclose(merged.missing_class_column, [0.0, 0.0, 0.0])
        assert merged.both_missing == 0.0

    def test_mass_conserved(self) -> None:
        table = _table([[2.0, 1.0, 0.3], [0.5, 4.0, 0.7], [1.1, 0.9, 0.4]])
        merged = redistribute_missing(table)
        assert merged.core_total() == pytest.approx(table.total(), rel=1e-9)

    def test_value_missing_follows_row_shares(self) -> None:
        table = _table([[3.0, 0.0, 0.0], [1.0, 0.0, 0.0], [4.0, 0.0, 0.0]])
        merged = redistribute_missing(table)
        np.testing.assert_allclose(merged.core[:, 0], [6.0, 2.0])

    def test_class_missing_follows_column_shares(self) -> None:
        table = _table([[1.0, 3.0, 4.0], [0.0, 0.0, 0.0]])
        merged = redistribute_missing(table)
        np.testing.assert_allclose(merged.core[0], [2.0, 6.0])

    def test_empty_core_is_skipped(self) -> None:
        table = _table([[0.0, 0.0, 1.0], [2.0, 0.0, 0.5]])
        assert redistribution_additions(table) is None
        assert redistribute_missing(table) is table

    def test_input_not_modified(self) -> None:
        table = _table([[1.0, 1.0, 1.0], [1.0, 1.0, 1.0]])
        before = table.counts.copy()
        redistribute_missing(table)
        np.testing.assert_array_equal(table.counts, before)


class TestMergeMissing:
    """Tests for merge_missing over all tables."""

    def test_merges_every_table(self, make_binary_dataset) -> None:
        data: CategoricalDataset = make_binary_dataset([0, 0, 1, None], [0, 1, 1, 1])
        tables = build_contingency_tables(data)
        merged = merge_missing(tables)
        assert merged[0].core_total() == pytest.approx(data.total_weight())
        assert tables[0].core_total() == pytest.approx(3.0)

    def test_logs_moved_weight(self, make_binary_dataset, caplog: pytest.LogCaptureFixture) -> None:
        data = make_binary_dataset([0, None], [0, 1])
        with caplog.at_level(logging.INFO, logger="attrsel.ranking"):
            merge_missing(build_contingency_tables(data))
        assert "moved_weight=1.0" in caplog.text
