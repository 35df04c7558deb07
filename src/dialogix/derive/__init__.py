"""Derived artifacts: insights and renderer-agnostic chart specs."""

from .charts import generate_charts
from .insights import generate_insights

__all__ = ["generate_charts", "generate_insights"]
