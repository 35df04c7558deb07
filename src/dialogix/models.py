from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from .utils import now_utc


class ColumnKind(str, Enum):
    """
    Column classification.

    - NUMERIC: at least one non-null value coerces to a finite number
    - CATEGORICAL: everything else, including all-null columns
    """
    NUMERIC = "numeric"
    CATEGORICAL = "categorical"


class Trend(str, Enum):
    UP = "up"
    DOWN = "down"
    NEUTRAL = "neutral"


class ChartKind(str, Enum):
    BAR = "bar"
    LINE = "line"
    PIE = "pie"
    SCATTER = "scatter"
    HISTOGRAM = "histogram"


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class NumericSummary(_Frozen):
    """
    Descriptive statistics over the coercible values of a numeric column.

    count may be smaller than the column's non-null count: values that fail
    coercion are dropped. std is the population standard deviation (ddof=0).
    Statistics that overflow to a non-finite value are stored as None.
    """
    kind: Literal["numeric"] = "numeric"
    count: int
    mean: Optional[float]
    median: Optional[float]
    min: Optional[float]
    max: Optional[float]
    std: Optional[float]


class MostCommon(_Frozen):
    value: str
    count: int


class CategoricalSummary(_Frozen):
    """
    count: non-null values
    unique: distinct text representations
    most_common: None when the column has no non-null values
    """
    kind: Literal["categorical"] = "categorical"
    count: int
    unique: int
    most_common: Optional[MostCommon] = None


ColumnSummary = Annotated[Union[NumericSummary, CategoricalSummary], Field(discriminator="kind")]


class DatasetDescriptor(_Frozen):
    """
    Result of reading, normalizing and summarizing one uploaded file.

    name: source file name
    columns: canonical column keys, in column order
    preview: first few normalized rows
    data: every normalized row, in source order
    summary: one ColumnSummary per column key
    """
    name: str
    row_count: int = 0
    column_count: int = 0
    columns: List[str] = Field(default_factory=list)
    preview: List[Dict[str, Any]] = Field(default_factory=list)
    data: List[Dict[str, Any]] = Field(default_factory=list)
    summary: Dict[str, ColumnSummary] = Field(default_factory=dict)


class Insight(_Frozen):
    """
    A single human-readable fact.

    change and trend are reserved for period-over-period comparisons; the
    current generator always leaves change unset and trend neutral.
    """
    title: str
    value: Union[int, float, str]
    change: Optional[float] = None
    trend: Trend = Trend.NEUTRAL


class ChartPoint(_Frozen):
    x: int
    y: float


class ChartSeries(_Frozen):
    label: str
    points: List[ChartPoint] = Field(default_factory=list)


class CategoryCount(_Frozen):
    label: str
    count: int


class ChartData(_Frozen):
    series: List[ChartSeries] = Field(default_factory=list)
    categories: List[CategoryCount] = Field(default_factory=list)


class ChartSpec(_Frozen):
    """
    Renderer-agnostic chart description.

    options holds descriptive metadata (axis names) only. Colors, legends and
    other presentation settings belong to whatever renders the chart.
    """
    id: str
    kind: ChartKind
    title: str
    data: ChartData
    options: Optional[Dict[str, str]] = None


class PipelineResult(_Frozen):
    descriptor: DatasetDescriptor
    insights: List[Insight] = Field(default_factory=list)
    charts: List[ChartSpec] = Field(default_factory=list)


class ChatMessage(_Frozen):
    """
    One chat transcript entry.

    timestamp is timezone-aware UTC; it is written to disk as ISO-8601 text.
    """
    id: str
    role: Literal["user", "assistant", "system"]
    content: str
    timestamp: datetime = Field(default_factory=now_utc)


class ChatHistory(_Frozen):
    messages: List[ChatMessage] = Field(default_factory=list)
    current_dataset: Optional[DatasetDescriptor] = None
