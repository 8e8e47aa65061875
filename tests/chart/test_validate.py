from dataclasses import replace
from datuum.chart.types import Archetype, Axis, ChartConfig, Dataset, LegacyBinding, MultiAxisBinding, ScaleKind
from datuum.chart.builder import build_default
from datuum.chart.validate import validate_config, is_valid

def _multi(x_col, y_col, archetype="bar", ds_col=None, y_id="y1"):
    return ChartConfig(
        archetype=archetype,
        title="t",
        binding=MultiAxisBinding(
            x_axes=(Axis("x1", x_col, x_col),),
            y_axes=(Axis("y1", y_col, y_col, scale_kind=ScaleKind.LINEAR),),
            datasets=(Dataset(ds_col or y_col, ds_col or y_col, y_id, "x1", "#000"),),
        ),
        palette=("#000",),
    )

def test_scatter_with_categorical_x_has_exactly_one_issue(sales_table):
    issues = validate_config(_multi("Region", "Sales", "scatter"), sales_table.columns)
    assert len(issues) == 1
    assert "Scatter chart requires numeric columns" in issues[0]
    assert "'Region'" in issues[0]

def test_bar_with_numeric_x_is_reported(sales_table):
    issues = validate_config(_multi("Units", "Sales"), sales_table.columns)
    assert len(issues) == 1
    assert "categorical or date" in issues[0]

def test_temporal_x_is_fine_for_line(sales_table):
    assert is_valid(_multi("Day", "Sales", "line"), sales_table.columns)

def test_missing_axes_and_unknown_columns(sales_table):
    bare = ChartConfig(Archetype.BAR, "t", MultiAxisBinding(), ("#000",))
    assert validate_config(bare, sales_table.columns) == [
        "At least one X-axis is required",
        "At least one Y-axis is required",
    ]
    issues = validate_config(_multi("Nope", "Sales"), sales_table.columns)
    assert issues == ["X-axis 'x1' references unknown column 'Nope'"]

def test_non_numeric_y_and_dataset(sales_table):
    issues = validate_config(_multi("Region", "Day"), sales_table.columns)
    assert any(i.startswith("Y-axis 'y1' requires a numeric column") for i in issues)
    assert any(i.startswith("Dataset 1 'Day' requires a numeric column") for i in issues)

def test_dangling_dataset_reference(sales_table):
    issues = validate_config(_multi("Region", "Sales", y_id="y9"), sales_table.columns)
    assert issues == ["Dataset 1 'Sales' references missing Y-axis 'y9'"]

def test_empty_palette_reported(sales_table):
    config = replace(build_default(sales_table.rows, sales_table.columns, "bar"), palette=())
    assert validate_config(config, sales_table.columns) == ["Palette must contain at least one color"]

def test_legacy_form_rules(sales_table):
    cols = sales_table.columns
    ok = ChartConfig(Archetype.BAR, "t", LegacyBinding("Region", "Sales"), ("#000",))
    assert is_valid(ok, cols)
    same = ChartConfig(Archetype.SCATTER, "t", LegacyBinding("Sales", "Sales"), ("#000",))
    assert validate_config(same, cols) == ["X-axis and Y-axis must use different columns"]
    empty = ChartConfig(Archetype.PIE, "t", LegacyBinding(), ("#000",))
    assert validate_config(empty, cols) == ["X-axis column is required", "Y-axis column is required"]
    wrong = ChartConfig(Archetype.BAR, "t", LegacyBinding("Region", "Region"), ("#000",))
    issues = validate_config(wrong, cols)
    assert any("numeric column for the Y-axis" in i for i in issues)
