from __future__ import annotations

# Public API re-exports (keep small & stable)
from .schema import ColumnKind, ColumnDescriptor, Table, Row, find_column
from .inference import infer_columns, infer_kind
from .sorting import sort_rows, sort_table
from .ops import edit_cell, add_row, delete_row, filter_rows
