from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

Row = Mapping[str, Any]


class ColumnKind(str, Enum):
    NUMERIC = "numeric"
    CATEGORICAL = "categorical"
    TEMPORAL = "date"


@dataclass(frozen=True)
class ColumnDescriptor:
    name: str
    kind: ColumnKind
    position: int

    @property
    def is_numeric(self) -> bool:
        return self.kind is ColumnKind.NUMERIC

    @property
    def is_category_like(self) -> bool:
        return self.kind in (ColumnKind.CATEGORICAL, ColumnKind.TEMPORAL)

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "type": self.kind.value, "index": self.position}


def find_column(columns: Iterable[ColumnDescriptor], name: str) -> Optional[ColumnDescriptor]:
    if not name:
        return None
    for c in columns:
        if c.name == name:
            return c
    return None


@dataclass(frozen=True)
class Table:
    """Rows plus the derived column schema. Replace rows with `with_rows`; never mutate."""
    rows: Tuple[Row, ...]
    columns: Tuple[ColumnDescriptor, ...]
    headers: Tuple[str, ...] = field(default=())

    def __post_init__(self):
        object.__setattr__(self, "rows", tuple(self.rows))
        object.__setattr__(self, "columns", tuple(self.columns))
        headers = tuple(self.headers) or tuple(c.name for c in self.columns)
        object.__setattr__(self, "headers", headers)
        names = [c.name for c in self.columns]
        if len(set(names)) != len(names):
            raise ValueError(f"duplicate column names: {names}")

    def column(self, name: str) -> Optional[ColumnDescriptor]:
        return find_column(self.columns, name)

    def with_rows(self, rows: Iterable[Row]) -> "Table":
        return Table(rows=tuple(rows), columns=self.columns, headers=self.headers)

    def columns_of(self, *kinds: ColumnKind) -> List[ColumnDescriptor]:
        return [c for c in self.columns if c.kind in kinds]

    def __len__(self) -> int:
        return len(self.rows)
