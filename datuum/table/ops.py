from __future__ import annotations
from typing import Any, Dict

from .schema import Table
from .values import as_label, to_number


def edit_cell(table: Table, row_index: int, column: str, value: Any) -> Table:
    """Set one cell. Numeric columns keep a number when the text parses, else the raw text."""
    if not 0 <= row_index < len(table.rows) or column not in table.headers:
        return table
    desc = table.column(column)
    stored = value
    if desc is not None and desc.is_numeric:
        x = to_number(value)
        if x is not None:
            stored = int(x) if x.is_integer() and not isinstance(value, float) else x
    rows = list(table.rows)
    updated: Dict[str, Any] = dict(rows[row_index])
    updated[column] = stored
    rows[row_index] = updated
    return table.with_rows(rows)


def add_row(table: Table) -> Table:
    blank = {h: "" for h in table.headers}
    return table.with_rows(list(table.rows) + [blank])


def delete_row(table: Table, row_index: int) -> Table:
    if not 0 <= row_index < len(table.rows):
        return table
    return table.with_rows(r for i, r in enumerate(table.rows) if i != row_index)


def filter_rows(table: Table, term: str, column: str = "all") -> Table:
    """Case-insensitive substring search over every value, or over one column."""
    needle = (term or "").strip().lower()
    if not needle:
        return table
    if column == "all":
        def _hit(row) -> bool:
            return any(needle in as_label(v).lower() for v in row.values())
    else:
        def _hit(row) -> bool:
            return needle in as_label(row.get(column)).lower()
    return table.with_rows(r for r in table.rows if _hit(r))
