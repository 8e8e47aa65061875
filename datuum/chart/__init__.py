from .types import (
    Archetype,
    Axis,
    ChartConfig,
    Dataset,
    LegacyBinding,
    MultiAxisBinding,
    Placement,
    RenderKind,
    ScaleKind,
)
from .builder import DEFAULT_PALETTE, build_default, color_at, upgrade_legacy
from .validate import validate_config, is_valid
from .mutate import (
    add_value_axis,
    add_category_axis,
    remove_axis,
    update_axis,
    add_dataset,
    remove_dataset,
    update_dataset,
    change_archetype,
)
from .projection import ChartData, Series, Point, project, axis_layout
from .export import ExportError, export_chart, export_html, generate_filename

# render and session pull in plotly; import them as submodules
__all__ = [
    "Archetype", "Axis", "ChartConfig", "Dataset", "LegacyBinding", "MultiAxisBinding",
    "Placement", "RenderKind", "ScaleKind",
    "DEFAULT_PALETTE", "build_default", "color_at", "upgrade_legacy",
    "validate_config", "is_valid",
    "add_value_axis", "add_category_axis", "remove_axis", "update_axis",
    "add_dataset", "remove_dataset", "update_dataset", "change_archetype",
    "ChartData", "Series", "Point", "project", "axis_layout",
    "ExportError", "export_chart", "export_html", "generate_filename",
]
