from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from ..config import Settings
from ..derive import generate_charts, generate_insights
from ..ingest import NormalizedTable, SchemaPolicy, detect_format, get_schema_policy, normalize_rows, read_table
from ..models import ColumnKind, DatasetDescriptor, PipelineResult
from ..profile import classify_columns, summarize_table

logger = logging.getLogger(__name__)


def build_descriptor(
    name: str,
    table: NormalizedTable,
    kinds: Mapping[str, ColumnKind],
    *,
    preview_rows: int = 5,
) -> DatasetDescriptor:
    data: List[Dict[str, Any]] = [dict(r) for r in table.rows]
    return DatasetDescriptor(
        name=name,
        row_count=table.row_count,
        column_count=len(table.columns),
        columns=list(table.columns),
        preview=data[:preview_rows],
        data=data,
        summary=summarize_table(table, kinds),
    )


def process_upload(
    name: str,
    data: bytes,
    *,
    policy: Optional[SchemaPolicy] = None,
    settings: Optional[Settings] = None,
) -> PipelineResult:
    """
    Run the whole pipeline over one uploaded file.

    Stages:
      detect format (by name) -> read -> normalize -> classify -> summarize,
      insights, charts

    Raises FormatError / ParseError from the reader; every later stage is total.
    The result owns fresh copies of all rows and shares nothing with other calls.
    """
    settings = settings or Settings()
    policy = policy or get_schema_policy(settings.schema_policy)

    fmt = detect_format(name)
    raw_rows = read_table(data, fmt)
    table = normalize_rows(raw_rows, policy)
    kinds = classify_columns(table)

    descriptor = build_descriptor(name, table, kinds, preview_rows=settings.preview_rows)
    insights = generate_insights(table, kinds)
    charts = generate_charts(table, kinds)

    logger.info(
        "Processed %s: %d rows, %d columns, %d insights, %d charts",
        name,
        descriptor.row_count,
        descriptor.column_count,
        len(insights),
        len(charts),
    )
    return PipelineResult(descriptor=descriptor, insights=insights, charts=charts)


def process_file(
    path: Path,
    *,
    policy: Optional[SchemaPolicy] = None,
    settings: Optional[Settings] = None,
) -> PipelineResult:
    """Read `path` from disk and run process_upload over its bytes."""
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")
    # Reject unsupported extensions before touching the file contents.
    detect_format(path.name)
    return process_upload(path.name, path.read_bytes(), policy=policy, settings=settings)
