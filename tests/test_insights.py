from __future__ import annotations

from dialogix.derive.insights import TOTAL_RECORDS, generate_insights
from dialogix.ingest.normalize import normalize_rows
from dialogix.models import Trend
from dialogix.profile.classify import classify_columns


def _insights(rows: list[dict]):
    table = normalize_rows(rows)
    return generate_insights(table, classify_columns(table))


def test_insight_order_and_values() -> None:
    insights = _insights(
        [
            {"price": "1.5", "qty": "2", "region": "W"},
            {"price": "2.5", "qty": "3", "region": "E"},
            {"price": "3", "qty": "x", "region": "W"},
        ]
    )

    assert [i.title for i in insights] == [
        "Average price",
        "Total price",
        "Average qty",
        "Total qty",
        "Total Records",
    ]
    assert [i.value for i in insights] == ["2.33", "7.00", "2.50", "5.00", 3]


def test_total_records_is_last_even_without_numeric_columns() -> None:
    insights = _insights([{"city": "NY"}, {"city": "LA"}])

    assert len(insights) == 1
    assert insights[0].title == TOTAL_RECORDS
    assert insights[0].value == 2


def test_empty_dataset_has_no_insights() -> None:
    assert _insights([]) == []


def test_trend_and_change_reserved() -> None:
    for insight in _insights([{"n": "1"}]):
        assert insight.trend == Trend.NEUTRAL
        assert insight.change is None


def test_overflowing_totals_render_as_na() -> None:
    insights = _insights([{"big": "1e308"}, {"big": "1e308"}])

    assert insights[0].value == "n/a"
    assert insights[1].value == "n/a"
    assert insights[-1].value == 2
