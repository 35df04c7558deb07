from __future__ import annotations

import math
from typing import List, Mapping

from ..ingest.normalize import NormalizedTable
from ..models import ColumnKind, Insight, Trend
from ..profile.summarize import numeric_values

TOTAL_RECORDS = "Total Records"


def _fmt2(x: float) -> str:
    return f"{x:.2f}" if math.isfinite(x) else "n/a"


def generate_insights(table: NormalizedTable, kinds: Mapping[str, ColumnKind]) -> List[Insight]:
    """
    Average and Total per numeric column (column order), then Total Records.

    An empty table yields no insights at all, not even Total Records.
    """
    if table.row_count == 0:
        return []

    insights: List[Insight] = []
    for col in table.columns:
        if kinds.get(col) != ColumnKind.NUMERIC:
            continue
        values = numeric_values(table.values(col))
        if not values:
            continue
        total = sum(values)
        avg = total / len(values)
        insights.append(Insight(title=f"Average {col}", value=_fmt2(avg), trend=Trend.NEUTRAL))
        insights.append(Insight(title=f"Total {col}", value=_fmt2(total), trend=Trend.NEUTRAL))

    insights.append(Insight(title=TOTAL_RECORDS, value=table.row_count, trend=Trend.NEUTRAL))
    return insights
