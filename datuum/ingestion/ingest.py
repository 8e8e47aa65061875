from __future__ import annotations
from dataclasses import dataclass, field
from io import BytesIO, StringIO
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence
import os
import pandas as pd

from ..table.inference import DEFAULT_SAMPLE_SIZE, infer_columns
from ..table.schema import Row, Table
from ..table.values import is_missing
from ..utils.log import get_logger
from ..utils.time import DEFAULT_FORMATS

log = get_logger("datuum.ingestion")

SAMPLE_ROWS: List[Dict[str, Any]] = [
    {"Month": "January", "Sales": 12000, "Profit": 3000, "Region": "North"},
    {"Month": "February", "Sales": 15000, "Profit": 4000, "Region": "North"},
    {"Month": "March", "Sales": 18000, "Profit": 5000, "Region": "North"},
    {"Month": "April", "Sales": 16000, "Profit": 4200, "Region": "South"},
    {"Month": "May", "Sales": 20000, "Profit": 5500, "Region": "South"},
    {"Month": "June", "Sales": 22000, "Profit": 6000, "Region": "South"},
    {"Month": "July", "Sales": 19000, "Profit": 4800, "Region": "East"},
    {"Month": "August", "Sales": 21000, "Profit": 5200, "Region": "East"},
    {"Month": "September", "Sales": 23000, "Profit": 6500, "Region": "East"},
    {"Month": "October", "Sales": 25000, "Profit": 7000, "Region": "West"},
    {"Month": "November", "Sales": 24000, "Profit": 6800, "Region": "West"},
    {"Month": "December", "Sales": 28000, "Profit": 8000, "Region": "West"},
]
SAMPLE_HEADERS = ["Month", "Sales", "Profit", "Region"]


@dataclass(frozen=True)
class IngestResult:
    table: Optional[Table]
    errors: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.table is not None and not self.errors


def validate_table(rows: Sequence[Row], headers: Sequence[str]) -> List[str]:
    errors: List[str] = []
    if not rows:
        errors.append("CSV file is empty or contains no valid data")
    if not headers:
        errors.append("CSV file has no headers")
    empty = [h for h in headers if all(is_missing(r.get(h)) for r in rows)]
    if rows and empty:
        errors.append(f"Empty columns detected: {', '.join(empty)}")
    return errors


def build_table(
    rows: Sequence[Row],
    headers: Sequence[str],
    *,
    sample_size: int = DEFAULT_SAMPLE_SIZE,
    datetime_formats: Iterable[str] = DEFAULT_FORMATS,
) -> IngestResult:
    """Validate delimiter-parsed rows and attach inferred column kinds. Errors abort."""
    errors = validate_table(rows, headers)
    if errors:
        log.warning("ingestion rejected", extra={"errors": errors})
        return IngestResult(table=None, errors=errors)
    columns = infer_columns(rows, headers, sample_size=sample_size, datetime_formats=datetime_formats)
    table = Table(rows=tuple(dict(r) for r in rows), columns=tuple(columns), headers=tuple(headers))
    log.info(
        "table loaded",
        extra={"n_rows": len(table.rows), "columns": {c.name: c.kind.value for c in columns}},
    )
    return IngestResult(table=table)


def parse_csv(
    data: bytes | str,
    *,
    sample_size: int = DEFAULT_SAMPLE_SIZE,
    datetime_formats: Iterable[str] = DEFAULT_FORMATS,
    csv_options: Optional[Dict[str, Any]] = None,
) -> IngestResult:
    """
    Parse CSV text or bytes: first row is the header, blank lines are skipped,
    every cell is kept as text. Parser failures collapse into one message.
    """
    opts: Dict[str, Any] = {"dtype": str, "keep_default_na": False, "skip_blank_lines": True}
    opts.update(csv_options or {})
    buf = BytesIO(data) if isinstance(data, bytes) else StringIO(data)
    try:
        df = pd.read_csv(buf, **opts)
    except pd.errors.EmptyDataError:
        return IngestResult(table=None, errors=["CSV file is empty or contains no valid data", "CSV file has no headers"])
    except (pd.errors.ParserError, UnicodeDecodeError, ValueError) as e:
        msg = f"CSV parsing error: {e}"
        log.warning("csv parse failed", extra={"error": str(e)})
        return IngestResult(table=None, errors=[msg])

    headers = [str(c) for c in df.columns]
    df.columns = headers
    rows = df.to_dict(orient="records")
    return build_table(rows, headers, sample_size=sample_size, datetime_formats=datetime_formats)


def read_csv_file(path: str | os.PathLike[str], **kwargs: Any) -> IngestResult:
    p = Path(path)
    try:
        data = p.read_bytes()
    except OSError as e:
        return IngestResult(table=None, errors=[f"CSV parsing failed: {e}"])
    return parse_csv(data, **kwargs)


def sample_table() -> Table:
    result = build_table(SAMPLE_ROWS, SAMPLE_HEADERS)
    if result.table is None:
        raise RuntimeError(f"built-in sample data rejected: {result.errors}")
    return result.table
