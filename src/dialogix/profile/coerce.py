from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Any, Union

import numpy as np

# Plain decimal with optional exponent. Hex, inf/nan and "1_000" are rejected.
_DECIMAL_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


@dataclass(frozen=True)
class Numeric:
    value: float


class NotNumeric:
    _instance: "NotNumeric | None" = None

    def __new__(cls) -> "NotNumeric":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NOT_NUMERIC"

    def __bool__(self) -> bool:
        return False


NOT_NUMERIC = NotNumeric()

Coerced = Union[Numeric, NotNumeric]


def coerce_number(value: Any) -> Coerced:
    """
    Interpret a raw cell as a finite number.

    Total: never raises. None, booleans, non-finite numbers and strings that are
    not plain decimals (after trimming) are NOT_NUMERIC.
    """
    if value is None or isinstance(value, (bool, np.bool_)):
        return NOT_NUMERIC
    if isinstance(value, (int, float, np.integer, np.floating)):
        f = float(value)
        return Numeric(f) if math.isfinite(f) else NOT_NUMERIC
    if isinstance(value, str):
        s = value.strip()
        if not s or _DECIMAL_RE.fullmatch(s) is None:
            return NOT_NUMERIC
        f = float(s)
        return Numeric(f) if math.isfinite(f) else NOT_NUMERIC
    return NOT_NUMERIC


def is_numeric(value: Any) -> bool:
    return isinstance(coerce_number(value), Numeric)


def as_text(value: Any) -> str:
    """
    Text form of a raw cell, used to group categorical values and label charts.

    Booleans render as "true"/"false" and integral floats drop the ".0" so that
    spreadsheet 3.0 and CSV "3" group together.
    """
    if isinstance(value, np.generic):
        value = value.item()
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer() and abs(value) < 1e16:
        return str(int(value))
    return str(value)
