from __future__ import annotations
from typing import Any, Callable, List, Literal, Sequence, Tuple

from ..utils.time import sort_instant
from .schema import ColumnDescriptor, ColumnKind, Row, Table
from .values import is_missing, to_datetime, to_number

Direction = Literal["asc", "desc"]

# (bucket, value): parseable values sort in bucket 0, unparseable ones after them
SortKey = Tuple[int, Any]


def _numeric_key(v: Any) -> SortKey:
    x = to_number(v)
    return (0, x) if x is not None else (1, 0.0)


def _temporal_key(v: Any) -> SortKey:
    d = to_datetime(v)
    return (0, sort_instant(d)) if d is not None else (1, 0.0)


def _categorical_key(v: Any) -> SortKey:
    return (0, str(v).lower())


def key_for(kind: ColumnKind) -> Callable[[Any], SortKey]:
    if kind is ColumnKind.NUMERIC:
        return _numeric_key
    if kind is ColumnKind.TEMPORAL:
        return _temporal_key
    return _categorical_key


def sort_rows(rows: Sequence[Row], column: ColumnDescriptor, direction: Direction = "asc") -> Tuple[Row, ...]:
    """
    Stable, type-aware sort on one column. Missing values keep their relative
    order and go first when ascending, last when descending.
    """
    descending = direction == "desc"
    name = column.name
    missing: List[Row] = []
    present: List[Row] = []
    for row in rows:
        (missing if is_missing(row.get(name)) else present).append(row)

    key = key_for(column.kind)
    ordered = sorted(present, key=lambda r: key(r.get(name)), reverse=descending)
    if descending:
        return tuple(ordered + missing)
    return tuple(missing + ordered)


def sort_table(table: Table, column_name: str, direction: Direction = "asc") -> Table:
    column = table.column(column_name)
    if column is None:
        return table
    return table.with_rows(sort_rows(table.rows, column, direction))
