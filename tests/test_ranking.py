"""Tests for ranking helpers over datasets and DataFrames."""

import polars as pl
import pytest

from attrsel.ranking.config import EvaluatorConfig
from attrsel.ranking.dataset import from_polars
from attrsel.ranking.evaluators import ContingencyAttributeEval
from attrsel.ranking.exceptions import CapabilityError, ConfigurationError
from attrsel.ranking.ranking import rank_attributes, rank_frame, select_top_k


class TestRankFrame:
    """Tests for rank_frame."""

    def test_sorted_descending(self, weather_df: pl.DataFrame) -> None:
        ranked = rank_frame(weather_df, "play")
        scores = ranked["score"].to_list()
        assert scores == sorted(scores, reverse=True)
        assert ranked["attribute"].to_list()[0] == "outlook"
        assert "play" not in ranked["attribute"].to_list()

    def test_top_k(self, weather_df: pl.DataFrame) -> None:
        ranked = rank_frame(weather_df, "play", "info_gain", top_k=2)
        assert ranked.height == 2
        assert ranked["rank"].to_list() == [1, 2]

    def test_weight_column_not_ranked(self, weather_df: pl.DataFrame) -> None:
        df = weather_df.with_columns(pl.lit(2.0).alias("w"))
        ranked = rank_frame(df, "play", weight_column="w")
        assert "w" not in ranked["attribute"].to_list()
        assert ranked.height == 4

    def test_numeric_needs_config(self) -> None:
        df = pl.DataFrame({"x": [0.0, 1.0, 2.0, 0.0], "y": ["a", "b", "b", "a"]})
        with pytest.raises(CapabilityError):
            rank_frame(df, "y", "l2")
        ranked = rank_frame(df, "y", "l2", config=EvaluatorConfig(binarize_numeric=True))
        assert ranked["score"][0] > 0

    def test_unknown_evaluator(self, weather_df: pl.DataFrame) -> None:
        with pytest.raises(ConfigurationError):
            rank_frame(weather_df, "play", "relief")


class TestRankAttributes:
    """Tests for rank_attributes."""

    def test_evaluator_instance(self, weather_df: pl.DataFrame) -> None:
        dataset = from_polars(weather_df, "play")
        evaluator = ContingencyAttributeEval.chi_squared()
        ranked = rank_attributes(dataset, evaluator)
        assert evaluator.is_built
        assert ranked["score"][0] == pytest.approx(3.5467, abs=1e-4)

    def test_config_overrides_instance(self, weather_df: pl.DataFrame) -> None:
        dataset = from_polars(weather_df, "play")
        evaluator = ContingencyAttributeEval.va()
        rank_attributes(dataset, evaluator, config=EvaluatorConfig(formula="suhel"))
        assert evaluator.result.config["formula"] == "euclidean_normalize_twice"


class TestSelectTopK:
    """Tests for select_top_k."""

    def test_names(self, weather_df: pl.DataFrame) -> None:
        assert select_top_k(weather_df, "play", k=2) == ["outlook", "humidity"]

    def test_l2_prefers_humidity(self, weather_df: pl.DataFrame) -> None:
        """L2 favours the balanced two-way split over the three-way one."""
        assert select_top_k(weather_df, "play", k=1, evaluator="l2") == ["humidity"]
