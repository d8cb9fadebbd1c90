"""Tests for the ranking exception hierarchy."""

import pytest

from attrsel.ranking.exceptions import (
    AttributeIndexError,
    CapabilityError,
    ConfigurationError,
    DegenerateInputError,
    InternalConsistencyError,
    NotBuiltError,
    RankingError,
)


class TestRankingError:
    """Tests for base RankingError."""

    def test_message_only(self) -> None:
        err = RankingError("Something failed")
        assert str(err) == "Something failed"
        assert err.context == {}

    def test_message_with_context(self) -> None:
        err = RankingError("Build failed", context={"dataset": "weather", "attributes": 4})
        assert str(err) == "Build failed (dataset=weather, attributes=4)"


class TestSubclasses:
    """Tests for typed exception attributes."""

    @pytest.mark.parametrize(
        "exc",
        [
            CapabilityError("x", capability="nominal_class"),
            DegenerateInputError("x"),
            InternalConsistencyError("x", lengths={"a": 1}),
            NotBuiltError("x"),
            AttributeIndexError("x", index=0, num_attributes=1),
            ConfigurationError("x", parameter="p", value=1),
        ],
    )
    def test_all_are_ranking_errors(self, exc: RankingError) -> None:
        assert isinstance(exc, RankingError)

    def test_capability(self) -> None:
        err = CapabilityError("No class", capability="class_assigned", context={"dataset": "d"})
        assert err.capability == "class_assigned"
        assert str(err) == "No class (capability=class_assigned, dataset=d)"

    def test_degenerate(self) -> None:
        err = DegenerateInputError("Zero divisor", statistic="va")
        assert err.statistic == "va"
        assert err.context == {"statistic": "va"}

    def test_internal_consistency(self) -> None:
        err = InternalConsistencyError("Mismatch", lengths={"info_gain": 3, "chi_squared": 4})
        assert err.lengths == {"info_gain": 3, "chi_squared": 4}
        assert "chi_squared=4" in str(err)

    def test_attribute_index_is_index_error(self) -> None:
        err = AttributeIndexError("Out of range", index=9, num_attributes=3)
        assert isinstance(err, IndexError)
        assert err.index == 9
        assert err.num_attributes == 3

    def test_configuration(self) -> None:
        err = ConfigurationError("Bad", parameter="formula", value="x", valid_range="a, b")
        assert err.parameter == "formula"
        assert err.value == "x"
        assert err.context["valid_range"] == "a, b"
