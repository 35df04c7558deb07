"""Profile stage: numeric coercion, column classification and summary statistics."""

from .classify import classify_column, classify_columns
from .coerce import NOT_NUMERIC, Numeric, as_text, coerce_number
from .summarize import summarize_table

__all__ = [
    "NOT_NUMERIC",
    "Numeric",
    "as_text",
    "classify_column",
    "classify_columns",
    "coerce_number",
    "summarize_table",
]
