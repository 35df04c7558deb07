from __future__ import annotations

import logging
import math
from collections import Counter
from typing import Any, Dict, List, Mapping, Optional, Sequence

import pandas as pd

from ..ingest.normalize import NormalizedTable
from ..models import CategoricalSummary, ColumnKind, ColumnSummary, MostCommon, NumericSummary
from .coerce import Numeric, as_text, coerce_number

logger = logging.getLogger(__name__)


def numeric_values(values: Sequence[Any]) -> List[float]:
    """Coercible values of a column, in row order; everything else is dropped."""
    out: List[float] = []
    for v in values:
        c = coerce_number(v)
        if isinstance(c, Numeric):
            out.append(c.value)
    return out


def numeric_summary(values: Sequence[Any]) -> NumericSummary:
    s = pd.Series(numeric_values(values), dtype="float64")
    if s.empty:
        return NumericSummary(count=0, mean=None, median=None, min=None, max=None, std=None)

    return NumericSummary(
        count=int(s.shape[0]),
        mean=_finite(s.mean()),
        median=_finite(s.median()),
        min=_finite(s.min()),
        max=_finite(s.max()),
        std=_finite(s.std(ddof=0)),
    )


def categorical_summary(values: Sequence[Any]) -> CategoricalSummary:
    present = [as_text(v) for v in values if v is not None]
    if not present:
        return CategoricalSummary(count=0, unique=0, most_common=None)

    # Counter keeps first-encountered order among equal counts.
    counts = Counter(present)
    value, count = counts.most_common(1)[0]
    return CategoricalSummary(
        count=len(present),
        unique=len(counts),
        most_common=MostCommon(value=value, count=count),
    )


def summarize_table(
    table: NormalizedTable,
    kinds: Mapping[str, ColumnKind],
) -> Dict[str, ColumnSummary]:
    """Per-column statistics in column order. An empty table yields {}."""
    if table.row_count == 0:
        return {}

    summary: Dict[str, ColumnSummary] = {}
    for col in table.columns:
        values = table.values(col)
        if kinds.get(col) == ColumnKind.NUMERIC:
            summary[col] = numeric_summary(values)
        else:
            summary[col] = categorical_summary(values)

    logger.debug(
        "Summarized %d columns (%d numeric)",
        len(summary),
        sum(1 for k in kinds.values() if k == ColumnKind.NUMERIC),
    )
    return summary


def _finite(x: Any) -> Optional[float]:
    if x is None:
        return None
    f = float(x)
    return f if math.isfinite(f) else None
