"""Ingest stage: file bytes to a rectangular, canonically-keyed table."""

from .normalize import (
    FirstRowSchema,
    NormalizedTable,
    SchemaPolicy,
    UnionSchema,
    canonical_key,
    get_schema_policy,
    normalize_rows,
)
from .reader import CSV, SPREADSHEET, detect_format, read_table

__all__ = [
    "CSV",
    "SPREADSHEET",
    "FirstRowSchema",
    "NormalizedTable",
    "SchemaPolicy",
    "UnionSchema",
    "canonical_key",
    "detect_format",
    "get_schema_policy",
    "normalize_rows",
    "read_table",
]
