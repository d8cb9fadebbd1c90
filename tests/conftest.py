"""Pytest configuration and shared fixtures for attrsel-ranking tests."""

import polars as pl
import pytest

from attrsel.ranking.dataset import CategoricalDataset, Instance, nominal, numeric


def binary_dataset(
    values: list[int | None],
    classes: list[int | None],
    weights: list[float] | None = None,
) -> CategoricalDataset:
    """One binary attribute ``a`` against a binary class ``c`` (class last)."""
    weights = weights or [1.0] * len(values)
    return CategoricalDataset(
        attributes=[nominal("a", ["0", "1"]), nominal("c", ["no", "yes"])],
        instances=[
            Instance(entries=((0, None if v is None else float(v)),), class_value=c, weight=w)
            for v, c, w in zip(values, classes, weights)
        ],
        class_index=1,
        name="binary",
    )


@pytest.fixture
def make_binary_dataset():
    """Factory for single-attribute binary datasets."""
    return binary_dataset


@pytest.fixture
def independent_dataset() -> CategoricalDataset:
    """Attribute [0,0,1,1] against class [0,1,0,1]: no association."""
    return binary_dataset([0, 0, 1, 1], [0, 1, 0, 1])


@pytest.fixture
def associated_dataset() -> CategoricalDataset:
    """Attribute [0,0,0,1] against class [0,0,1,1]."""
    return binary_dataset([0, 0, 0, 1], [0, 0, 1, 1])


@pytest.fixture
def weather_df() -> pl.DataFrame:
    """Small nominal weather table with a ``play`` class."""
    return pl.DataFrame({
        "outlook": [
            "sunny", "sunny", "overcast", "rainy", "rainy", "rainy", "overcast",
            "sunny", "sunny", "rainy", "sunny", "overcast", "overcast", "rainy",
        ],
        "temperature": [
            "hot", "hot", "hot", "mild", "cool", "cool", "cool",
            "mild", "cool", "mild", "mild", "mild", "hot", "mild",
        ],
        "humidity": [
            "high", "high", "high", "high", "normal", "normal", "normal",
            "high", "normal", "normal", "normal", "high", "normal", "high",
        ],
        "windy": [
            False, True, False, False, False, True, True,
            False, False, False, True, True, False, True,
        ],
        "play": [
            "no", "no", "yes", "yes", "yes", "no", "yes",
            "no", "yes", "yes", "yes", "yes", "yes", "no",
        ],
    })


@pytest.fixture
def mixed_dataset() -> CategoricalDataset:
    """Nominal attribute, numeric attribute and class in the middle.

    The numeric attribute is stored sparsely: instances 0 and 2 omit it.
    """
    return CategoricalDataset(
        attributes=[
            nominal("color", ["red", "green", "blue"]),
            nominal("label", ["neg", "pos"]),
            numeric("amount"),
        ],
        instances=[
            Instance(entries=((0, 0.0),), class_value=0),
            Instance(entries=((0, 1.0), (2, 3.5)), class_value=1),
            Instance(entries=((0, 2.0),), class_value=0, weight=2.0),
            Instance(entries=((0, 1.0), (2, 7.0)), class_value=1),
            Instance(entries=((0, None), (2, None)), class_value=1),
        ],
        class_index=1,
        name="mixed",
    )
