from __future__ import annotations

from typing import List, Mapping

from ..ingest.normalize import NormalizedTable
from ..models import CategoryCount, ChartData, ChartKind, ChartPoint, ChartSeries, ChartSpec, ColumnKind
from ..profile.coerce import Numeric, as_text, coerce_number

UNKNOWN_CATEGORY = "Unknown"


def trend_chart_id(column: str) -> str:
    return f"{column}-trend"


def distribution_chart_id(column: str) -> str:
    return f"{column}-distribution"


def line_chart(table: NormalizedTable, column: str) -> ChartSpec:
    # x is the original row position; skipped rows leave gaps, not shifts.
    points: List[ChartPoint] = []
    for i, v in enumerate(table.values(column)):
        c = coerce_number(v)
        if isinstance(c, Numeric):
            points.append(ChartPoint(x=i, y=c.value))

    return ChartSpec(
        id=trend_chart_id(column),
        kind=ChartKind.LINE,
        title=f"{column} Trend",
        data=ChartData(series=[ChartSeries(label=column, points=points)]),
        options={"x_axis": "row_index", "y_axis": column},
    )


def pie_chart(table: NormalizedTable, column: str) -> ChartSpec:
    counts: dict[str, int] = {}
    for v in table.values(column):
        label = UNKNOWN_CATEGORY if v is None else as_text(v)
        counts[label] = counts.get(label, 0) + 1

    return ChartSpec(
        id=distribution_chart_id(column),
        kind=ChartKind.PIE,
        title=f"{column} Distribution",
        data=ChartData(categories=[CategoryCount(label=k, count=n) for k, n in counts.items()]),
        options={"category_axis": column},
    )


def generate_charts(table: NormalizedTable, kinds: Mapping[str, ColumnKind]) -> List[ChartSpec]:
    """
    One line chart per numeric column, then one pie chart per categorical column.

    Within each group charts follow column order. Empty tables yield [].
    """
    if table.row_count == 0:
        return []

    numeric = [c for c in table.columns if kinds.get(c) == ColumnKind.NUMERIC]
    categorical = [c for c in table.columns if kinds.get(c) != ColumnKind.NUMERIC]

    charts = [line_chart(table, c) for c in numeric]
    charts.extend(pie_chart(table, c) for c in categorical)
    return charts
