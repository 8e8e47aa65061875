from __future__ import annotations
from typing import Any, Iterable, Optional
from datetime import datetime
import math
import numpy as np
import pandas as pd

from ..utils.fp import try_or
from ..utils.time import DEFAULT_FORMATS, parse_any_datetime


def is_missing(v: Any) -> bool:
    """None, the empty string, NaN and NaT count as missing."""
    if v is None or v is pd.NaT:
        return True
    if isinstance(v, str):
        return v == ""
    if isinstance(v, float):
        return math.isnan(v)
    return False


@try_or(None)
def _parse_float(text: str) -> float:
    return float(text)


def to_number(v: Any) -> Optional[float]:
    """Finite float for number-like scalars, else None."""
    if is_missing(v) or isinstance(v, (bool, np.bool_)):
        return None
    if isinstance(v, (int, float, np.integer, np.floating)):
        x = float(v)
    elif isinstance(v, str):
        text = v.strip()
        # float() accepts "1_000"; plain numeric text does not
        if not text or "_" in text:
            return None
        x = _parse_float(text)
        if x is None:
            return None
    else:
        return None
    return x if math.isfinite(x) else None


def coerce_number(v: Any) -> float:
    # unparseable -> 0, never dropped
    x = to_number(v)
    return 0.0 if x is None else x


def to_datetime(v: Any, formats: Iterable[str] = DEFAULT_FORMATS) -> Optional[datetime]:
    if is_missing(v):
        return None
    return parse_any_datetime(v, formats)


def as_label(v: Any) -> str:
    """String form used for grouping and searching; missing -> ''."""
    if is_missing(v):
        return ""
    if isinstance(v, (float, np.floating)) and float(v).is_integer():
        return str(int(v))
    return str(v)
