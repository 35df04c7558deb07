from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence

logger = logging.getLogger(__name__)

NormalizedRow = Dict[str, Any]

_WHITESPACE_RE = re.compile(r"\s+")


def canonical_key(header: Any) -> str:
    """
    Lower-case the header and replace each whitespace run with one underscore.

    "Total Sales" -> "total_sales", "Region  ID" -> "region_id".
    Leading/trailing runs are not stripped: " Region" -> "_region".
    """
    return _WHITESPACE_RE.sub("_", str(header).lower())


def is_null(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str) and value == "":
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    return False


def canonicalize_row(raw: Dict[str, Any]) -> NormalizedRow:
    """
    Canonicalize one row's own headers and collapse null-like values to None.

    If two headers collapse to the same key, the later value wins (the key keeps
    its first position).
    """
    out: NormalizedRow = {}
    for header, value in raw.items():
        out[canonical_key(header)] = None if is_null(value) else value
    return out


class SchemaPolicy:
    """Decides the dataset's column key list from canonicalized rows."""

    name = "base"

    def columns(self, rows: Sequence[NormalizedRow]) -> List[str]:  # pragma: no cover - interface
        raise NotImplementedError


class FirstRowSchema(SchemaPolicy):
    """
    Columns are the first row's keys. Keys absent from a later row read as None;
    keys that only appear in later rows are dropped.
    """

    name = "first_row"

    def columns(self, rows: Sequence[NormalizedRow]) -> List[str]:
        if not rows:
            return []
        return list(rows[0].keys())


class UnionSchema(SchemaPolicy):
    """Columns are the union of every row's keys, in first-seen order."""

    name = "union"

    def columns(self, rows: Sequence[NormalizedRow]) -> List[str]:
        seen: dict[str, None] = {}
        for r in rows:
            for k in r:
                seen.setdefault(k, None)
        return list(seen)


_POLICIES: dict[str, type[SchemaPolicy]] = {
    FirstRowSchema.name: FirstRowSchema,
    UnionSchema.name: UnionSchema,
}


def get_schema_policy(name: str) -> SchemaPolicy:
    cls = _POLICIES.get(name.strip().lower())
    if cls is None:
        raise ValueError(f"Unknown schema policy: {name!r}. Choose one of {sorted(_POLICIES)}.")
    return cls()


@dataclass(frozen=True)
class NormalizedTable:
    """Rectangular dataset: every row has exactly `columns` as its keys, in order."""

    columns: List[str] = field(default_factory=list)
    rows: List[NormalizedRow] = field(default_factory=list)

    @property
    def row_count(self) -> int:
        return len(self.rows)

    def values(self, column: str) -> List[Any]:
        return [r.get(column) for r in self.rows]


def normalize_rows(
    raw_rows: Iterable[Dict[str, Any]],
    policy: Optional[SchemaPolicy] = None,
) -> NormalizedTable:
    policy = policy or FirstRowSchema()
    canonical = [canonicalize_row(r) for r in raw_rows]
    if not canonical:
        return NormalizedTable()

    columns = policy.columns(canonical)
    rows = [{c: r.get(c) for c in columns} for r in canonical]

    dropped = {k for r in canonical for k in r} - set(columns)
    if dropped:
        logger.info("Schema policy %r dropped keys not in column list: %s", policy.name, sorted(dropped))
    logger.debug("Normalized %d rows x %d columns", len(rows), len(columns))
    return NormalizedTable(columns=columns, rows=rows)
