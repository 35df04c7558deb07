from __future__ import annotations

import math

import pytest

from dialogix.ingest.normalize import normalize_rows
from dialogix.models import CategoricalSummary, MostCommon, NumericSummary
from dialogix.profile.classify import classify_columns
from dialogix.profile.summarize import categorical_summary, numeric_summary, summarize_table


def _summarize(rows: list[dict]) -> dict:
    table = normalize_rows(rows)
    return summarize_table(table, classify_columns(table))


def test_numeric_summary_example() -> None:
    summary = _summarize([{"age": 10}, {"age": 20}, {"age": ""}, {"age": 30}])["age"]

    assert isinstance(summary, NumericSummary)
    assert summary.count == 3
    assert summary.mean == pytest.approx(20.0)
    assert summary.median == pytest.approx(20.0)
    assert summary.min == 10
    assert summary.max == 30
    assert summary.std == pytest.approx(math.sqrt(200 / 3))
    assert summary.std == pytest.approx(8.16, abs=0.01)


def test_median_even_count_averages_middle_values() -> None:
    summary = numeric_summary(["4", "1", "3", "2"])
    assert summary.median == pytest.approx(2.5)


def test_std_is_population_not_sample() -> None:
    summary = numeric_summary([2, 4])
    assert summary.std == pytest.approx(1.0)


def test_mixed_column_counts_only_coercible_values() -> None:
    summary = _summarize([{"v": "1"}, {"v": "oops"}, {"v": "3"}, {"v": None}])["v"]

    assert isinstance(summary, NumericSummary)
    assert summary.count == 2
    assert summary.mean == pytest.approx(2.0)


def test_categorical_summary_example() -> None:
    summary = _summarize([{"city": "NY"}, {"city": "LA"}, {"city": "NY"}, {"city": None}])["city"]

    assert summary == CategoricalSummary(count=3, unique=2, most_common=MostCommon(value="NY", count=2))


def test_categorical_ties_go_to_first_encountered() -> None:
    summary = categorical_summary(["b", "a", "a", "b", "c"])
    assert summary.most_common == MostCommon(value="b", count=2)


def test_all_null_column_is_categorical_without_mode() -> None:
    summary = _summarize([{"x": None, "y": "1"}, {"x": "", "y": "2"}])["x"]
    assert summary == CategoricalSummary(count=0, unique=0, most_common=None)


def test_overflowing_statistics_are_none() -> None:
    summary = numeric_summary([1e308, 1e308])

    assert summary.count == 2
    assert summary.mean is None
    assert summary.max == 1e308


def test_empty_table_has_empty_summary() -> None:
    assert _summarize([]) == {}


def test_summary_follows_column_order() -> None:
    summary = _summarize([{"B": "1", "A": "x"}])
    assert list(summary) == ["b", "a"]
