from __future__ import annotations
from typing import Optional, Sequence, Tuple

from ..config_model.model import DEFAULT_PALETTE as _PALETTE
from ..table.schema import ColumnDescriptor, ColumnKind, Row, find_column
from .types import (
    Archetype,
    Axis,
    ChartConfig,
    Dataset,
    LegacyBinding,
    MultiAxisBinding,
    Placement,
    POINT_FAMILY,
    RenderKind,
    ScaleKind,
)

DEFAULT_PALETTE: Tuple[str, ...] = tuple(_PALETTE)


def color_at(palette: Sequence[str], index: int) -> str:
    """Palette colour for position `index`, cycling when the palette is shorter."""
    colors = palette or DEFAULT_PALETTE
    return colors[index % len(colors)]


def default_title(archetype: Archetype | str) -> str:
    return f"{Archetype.parse(archetype).display_name} Chart"


def placement_for(existing: int) -> Placement:
    return Placement.START if existing % 2 == 0 else Placement.END


def render_kind_for(archetype: Archetype) -> RenderKind:
    if archetype in (Archetype.LINE, Archetype.RADAR):
        return RenderKind.LINE
    if archetype in POINT_FAMILY:
        return RenderKind.SCATTER
    return RenderKind.BAR


def select_columns(columns: Sequence[ColumnDescriptor], archetype: Archetype) -> Tuple[str, str]:
    """(category column, value column) defaults; '' where no candidate exists."""
    numeric = [c.name for c in columns if c.kind is ColumnKind.NUMERIC]
    category_like = [c.name for c in columns if c.is_category_like]
    if archetype in POINT_FAMILY:
        x = numeric[0] if numeric else ""
        y = numeric[1] if len(numeric) > 1 else x
        return x, y
    return (category_like[0] if category_like else ""), (numeric[0] if numeric else "")


def category_scale(archetype: Archetype, column: Optional[ColumnDescriptor]) -> ScaleKind:
    if archetype in POINT_FAMILY:
        return ScaleKind.LINEAR
    if column is not None and column.kind is ColumnKind.TEMPORAL:
        return ScaleKind.TEMPORAL
    return ScaleKind.CATEGORICAL


def make_category_axis(
    axis_id: str,
    column: str,
    columns: Sequence[ColumnDescriptor],
    archetype: Archetype,
    placement: Placement = Placement.START,
) -> Axis:
    return Axis(
        id=axis_id,
        label=column or "X Axis",
        bound_column=column,
        placement=placement,
        scale_kind=category_scale(archetype, find_column(columns, column)),
    )


def make_value_axis(axis_id: str, column: str, placement: Placement = Placement.START) -> Axis:
    return Axis(
        id=axis_id,
        label=column or "Y Axis",
        bound_column=column,
        placement=placement,
        scale_kind=ScaleKind.LINEAR,
    )


def make_dataset(
    column: str,
    value_axis_id: str,
    category_axis_id: str,
    color: str,
    archetype: Archetype,
) -> Dataset:
    return Dataset(
        label=column or "Data",
        source_column=column,
        value_axis_id=value_axis_id,
        category_axis_id=category_axis_id,
        color=color,
        render_kind=render_kind_for(archetype),
    )


def _single_axis_binding(
    x: str,
    y: str,
    columns: Sequence[ColumnDescriptor],
    archetype: Archetype,
    palette: Sequence[str],
) -> MultiAxisBinding:
    return MultiAxisBinding(
        x_axes=(make_category_axis("x1", x, columns, archetype),),
        y_axes=(make_value_axis("y1", y),),
        datasets=(make_dataset(y, "y1", "x1", color_at(palette, 0), archetype),),
    )


def build_default(
    rows: Sequence[Row],
    columns: Sequence[ColumnDescriptor],
    archetype: Archetype | str,
    palette: Optional[Sequence[str]] = None,
) -> ChartConfig:
    """
    Default configuration for an archetype: one X axis, one Y axis and one
    dataset bound to the preferred columns. Never raises; when no suitable
    column exists the axis is left unbound and validation reports it.
    Defaults depend on column kinds only, `rows` is not consulted.
    """
    kind = Archetype.parse(archetype)
    colors = tuple(palette) if palette else DEFAULT_PALETTE
    x, y = select_columns(columns, kind)
    return ChartConfig(
        archetype=kind,
        title=default_title(kind),
        binding=_single_axis_binding(x, y, columns, kind, colors),
        palette=colors,
    )


def upgrade_legacy(config: ChartConfig, columns: Sequence[ColumnDescriptor]) -> ChartConfig:
    """Rewrite a single-X/single-Y config into the multi-axis form; others pass through."""
    b = config.binding
    if not isinstance(b, LegacyBinding):
        return config
    binding = _single_axis_binding(b.x_column, b.y_column, columns, config.archetype, config.palette)
    return ChartConfig(archetype=config.archetype, title=config.title, binding=binding, palette=config.palette)
