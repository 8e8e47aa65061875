from __future__ import annotations
from itertools import islice
from typing import Any, Iterable, List, Sequence

from ..utils.time import DEFAULT_FORMATS
from .schema import ColumnDescriptor, ColumnKind, Row
from .values import is_missing, to_datetime, to_number

DEFAULT_SAMPLE_SIZE = 10


def sample_values(rows: Iterable[Row], header: str, n: int = DEFAULT_SAMPLE_SIZE) -> List[Any]:
    """First `n` non-missing values of a column, in row order."""
    values = (row.get(header) for row in rows)
    return list(islice((v for v in values if not is_missing(v)), n))


def infer_kind(sample: Sequence[Any], datetime_formats: Iterable[str] = DEFAULT_FORMATS) -> ColumnKind:
    if not sample:
        return ColumnKind.CATEGORICAL
    # numeric wins over temporal: "2024" is a number first
    if all(to_number(v) is not None for v in sample):
        return ColumnKind.NUMERIC
    fmts = tuple(datetime_formats)
    if all(to_datetime(v, fmts) is not None for v in sample):
        return ColumnKind.TEMPORAL
    return ColumnKind.CATEGORICAL


def infer_columns(
    rows: Sequence[Row],
    headers: Sequence[str],
    *,
    sample_size: int = DEFAULT_SAMPLE_SIZE,
    datetime_formats: Iterable[str] = DEFAULT_FORMATS,
) -> List[ColumnDescriptor]:
    """Classify every header as numeric, categorical or temporal from a sample of its values."""
    fmts = tuple(datetime_formats)
    return [
        ColumnDescriptor(name=h, kind=infer_kind(sample_values(rows, h, sample_size), fmts), position=i)
        for i, h in enumerate(headers)
    ]
