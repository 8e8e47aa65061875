from datuum.ingestion.ingest import (
    parse_csv, read_csv_file, sample_table, build_table, SAMPLE_HEADERS,
)
from datuum.table.schema import ColumnKind

CSV = "Month,Sales,Day\nJan,10,2024-01-01\n\nFeb,20,2024-02-01\nMar,x,2024-03-01\n"

def test_parse_csv_infers_kinds_and_skips_blank_lines():
    res = parse_csv(CSV)
    assert res.ok
    t = res.table
    assert len(t) == 3
    assert t.headers == ("Month", "Sales", "Day")
    kinds = {c.name: c.kind for c in t.columns}
    assert kinds == {"Month": ColumnKind.CATEGORICAL, "Sales": ColumnKind.CATEGORICAL, "Day": ColumnKind.TEMPORAL}
    # values stay text
    assert t.rows[0]["Sales"] == "10"

def test_parse_csv_bytes_and_numeric():
    res = parse_csv(b"a,b\n1,2\n3,4\n")
    assert res.ok
    assert all(c.kind is ColumnKind.NUMERIC for c in res.table.columns)

def test_empty_input_reports_errors():
    res = parse_csv("")
    assert not res.ok
    assert res.table is None
    assert "CSV file is empty or contains no valid data" in res.errors

def test_header_only_is_empty():
    res = parse_csv("a,b\n")
    assert res.errors == ["CSV file is empty or contains no valid data"]

def test_empty_column_detected():
    res = parse_csv("a,b,c\n1,,\n2,,\n")
    assert res.errors == ["Empty columns detected: b, c"]

def test_parser_error_is_reported():
    res = parse_csv('a,b\n"1,2\n')
    assert res.table is None
    assert res.errors and res.errors[0].startswith("CSV parsing error:")

def test_read_csv_file(tmp_path):
    p = tmp_path / "d.csv"
    p.write_text(CSV, encoding="utf-8")
    assert read_csv_file(p).ok
    missing = read_csv_file(tmp_path / "nope.csv")
    assert not missing.ok

def test_sample_table_kinds():
    t = sample_table()
    assert list(t.headers) == SAMPLE_HEADERS
    assert len(t) == 12
    kinds = {c.name: c.kind for c in t.columns}
    assert kinds["Month"] is ColumnKind.CATEGORICAL
    assert kinds["Sales"] is ColumnKind.NUMERIC
    assert kinds["Region"] is ColumnKind.CATEGORICAL

def test_build_table_rejects_no_rows():
    res = build_table([], ["a"])
    assert res.errors == ["CSV file is empty or contains no valid data"]

def test_ordinal_column_is_categorical():
    res = parse_csv("Place,Score\n1st,10\n2nd,7\n3rd,4\n")
    kinds = {c.name: c.kind for c in res.table.columns}
    assert kinds == {"Place": ColumnKind.CATEGORICAL, "Score": ColumnKind.NUMERIC}
