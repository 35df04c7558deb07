from __future__ import annotations

from typing import Any, Dict, Sequence

from ..ingest.normalize import NormalizedTable
from ..models import ColumnKind
from .coerce import is_numeric


def classify_values(values: Sequence[Any]) -> ColumnKind:
    """
    NUMERIC if any non-null value coerces to a finite number, else CATEGORICAL.

    Mixed columns are NUMERIC as soon as one value coerces; the text values are
    then ignored by the numeric statistics.
    """
    for v in values:
        if v is not None and is_numeric(v):
            return ColumnKind.NUMERIC
    return ColumnKind.CATEGORICAL


def classify_column(rows: Sequence[Dict[str, Any]], key: str) -> ColumnKind:
    return classify_values([r.get(key) for r in rows])


def classify_columns(table: NormalizedTable) -> Dict[str, ColumnKind]:
    return {c: classify_values(table.values(c)) for c in table.columns}
