"""Dialogix: turn an uploaded CSV or spreadsheet into a dataset summary,
insights and renderer-agnostic chart specs."""

from .errors import DatasetError, FormatError, ParseError
from .models import ChartSpec, DatasetDescriptor, Insight, PipelineResult
from .pipeline import process_file, process_upload

__version__ = "0.1.0"

__all__ = [
    "ChartSpec",
    "DatasetDescriptor",
    "DatasetError",
    "FormatError",
    "Insight",
    "ParseError",
    "PipelineResult",
    "process_file",
    "process_upload",
]
