from datuum.table.schema import ColumnDescriptor, ColumnKind, Table
from datuum.table.sorting import sort_rows, sort_table

NUM = ColumnDescriptor("v", ColumnKind.NUMERIC, 0)

def _vals(rows, key="v"):
    return [r[key] for r in rows]

def test_numeric_sort_is_numeric_not_lexical():
    rows = [{"v": "10"}, {"v": "9"}, {"v": "100"}]
    assert _vals(sort_rows(rows, NUM, "asc")) == ["9", "10", "100"]
    assert _vals(sort_rows(rows, NUM, "desc")) == ["100", "10", "9"]

def test_missing_first_ascending_last_descending():
    rows = [{"v": "3"}, {"v": ""}, {"v": "1"}, {"v": None}]
    asc = sort_rows(rows, NUM, "asc")
    desc = sort_rows(rows, NUM, "desc")
    assert _vals(asc) == ["", None, "1", "3"]
    assert _vals(desc) == ["3", "1", "", None]

def test_unparseable_after_parseable_ascending():
    rows = [{"v": "x"}, {"v": "2"}, {"v": "1"}]
    assert _vals(sort_rows(rows, NUM, "asc")) == ["1", "2", "x"]

def test_stable_for_equal_keys_and_directions_mirror():
    rows = [{"v": 1, "id": "a"}, {"v": 2, "id": "b"}, {"v": 1, "id": "c"}, {"v": 2, "id": "d"}]
    asc = sort_rows(rows, NUM, "asc")
    assert [r["id"] for r in asc] == ["a", "c", "b", "d"]
    desc = sort_rows(rows, NUM, "desc")
    assert [r["id"] for r in desc] == ["b", "d", "a", "c"]
    # distinct keys: desc is the exact reverse of asc
    distinct = [{"v": i} for i in (5, 3, 8, 1)]
    assert list(sort_rows(distinct, NUM, "desc")) == list(reversed(sort_rows(distinct, NUM, "asc")))

def test_categorical_case_insensitive_and_temporal_chronological():
    cat = ColumnDescriptor("c", ColumnKind.CATEGORICAL, 0)
    rows = [{"c": "banana"}, {"c": "Apple"}, {"c": "cherry"}]
    assert _vals(sort_rows(rows, cat), "c") == ["Apple", "banana", "cherry"]
    day = ColumnDescriptor("d", ColumnKind.TEMPORAL, 0)
    rows = [{"d": "03/01/2024"}, {"d": "2024-01-15"}, {"d": "2023-12-31"}]
    assert _vals(sort_rows(rows, day), "d") == ["2023-12-31", "2024-01-15", "03/01/2024"]

def test_sort_table_unknown_column_is_noop(sales_table):
    assert sort_table(sales_table, "Nope") is sales_table
    by_sales = sort_table(sales_table, "Sales", "desc")
    assert [r["Sales"] for r in by_sales.rows] == ["150", "100", "50", ""]
    assert by_sales.columns == sales_table.columns
