"""
Pure edits on a ChartConfig. Every function returns a new config and never
raises: an edit that cannot apply returns the input unchanged, and the
validator is what reports whether the result is usable.

Axis and dataset edits act on the multi-axis form; a legacy config is
upgraded first.
"""
from __future__ import annotations
from dataclasses import fields, replace
from typing import Any, Callable, Dict, Literal, Sequence, Set

from ..table.schema import ColumnDescriptor, Row, find_column
from .builder import (
    DEFAULT_PALETTE,
    build_default,
    category_scale,
    color_at,
    default_title,
    make_category_axis,
    make_dataset,
    make_value_axis,
    placement_for,
    render_kind_for,
    upgrade_legacy,
)
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
from .validate import validate_config

_AXIS_FIELDS = {f.name for f in fields(Axis)} - {"id"}
_DATASET_FIELDS = {f.name for f in fields(Dataset)}

_TRUE_TOKENS = frozenset({"true", "t", "y", "yes", "1", "on"})
_FALSE_TOKENS = frozenset({"false", "f", "n", "no", "0", "off"})


def _as_bool(v: Any) -> bool:
    if isinstance(v, str):
        token = v.strip().casefold()
        if token in _TRUE_TOKENS:
            return True
        if token in _FALSE_TOKENS:
            return False
        raise ValueError(f"not a boolean token: {v!r}")
    if isinstance(v, (bool, int, float)):
        return bool(v)
    raise TypeError(f"not a boolean: {v!r}")


_COERCE: Dict[str, Callable[[Any], Any]] = {
    "placement": Placement,
    "scale_kind": ScaleKind,
    "render_kind": RenderKind,
    "visible": _as_bool,
    "fill_area": _as_bool,
    "line_tension": lambda v: min(1.0, max(0.0, float(v))),
}


def _clean_patch(patch: Dict[str, Any], allowed: Set[str]) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for k, v in patch.items():
        if k not in allowed:
            continue
        conv = _COERCE.get(k)
        try:
            out[k] = conv(v) if conv else v
        except (TypeError, ValueError):
            continue  # bad value for this field: leave it as it was
    return out


def _next_id(prefix: str, axes: Sequence[Axis]) -> str:
    taken = {a.id for a in axes}
    n = len(axes) + 1
    while f"{prefix}{n}" in taken:
        n += 1
    return f"{prefix}{n}"


def _with(config: ChartConfig, binding: MultiAxisBinding) -> ChartConfig:
    return replace(config, binding=binding)


# ---------- axes ----------

def add_value_axis(config: ChartConfig, column: str, columns: Sequence[ColumnDescriptor]) -> ChartConfig:
    desc = find_column(columns, column)
    if desc is None or not desc.is_numeric:
        return config
    config = upgrade_legacy(config, columns)
    b = config.binding
    n = len(b.y_axes)
    axis = make_value_axis(_next_id("y", b.y_axes), column, placement_for(n))
    return _with(config, replace(b, y_axes=b.y_axes + (axis,)))


def add_category_axis(config: ChartConfig, column: str, columns: Sequence[ColumnDescriptor]) -> ChartConfig:
    if find_column(columns, column) is None:
        return config
    config = upgrade_legacy(config, columns)
    b = config.binding
    n = len(b.x_axes)
    axis = make_category_axis(_next_id("x", b.x_axes), column, columns, config.archetype, placement_for(n))
    return _with(config, replace(b, x_axes=b.x_axes + (axis,)))


def remove_axis(config: ChartConfig, axis_id: str) -> ChartConfig:
    """
    Drop the axis with `axis_id` and cascade-delete every dataset bound to it,
    so no dataset is left pointing at a missing axis. Unknown ids are a no-op.
    """
    b = config.binding
    if not isinstance(b, MultiAxisBinding):
        return config
    if b.x_axis(axis_id) is None and b.y_axis(axis_id) is None:
        return config
    return _with(config, MultiAxisBinding(
        x_axes=tuple(a for a in b.x_axes if a.id != axis_id),
        y_axes=tuple(a for a in b.y_axes if a.id != axis_id),
        datasets=tuple(
            d for d in b.datasets
            if d.value_axis_id != axis_id and d.category_axis_id != axis_id
        ),
    ))


def update_axis(config: ChartConfig, axis_id: str, **patch: Any) -> ChartConfig:
    b = config.binding
    if not isinstance(b, MultiAxisBinding):
        return config
    changes = _clean_patch(patch, _AXIS_FIELDS)
    if not changes:
        return config

    def _patch(axes):
        return tuple(replace(a, **changes) if a.id == axis_id else a for a in axes)

    return _with(config, replace(b, x_axes=_patch(b.x_axes), y_axes=_patch(b.y_axes)))


# ---------- datasets ----------

def add_dataset(config: ChartConfig, column: str, columns: Sequence[ColumnDescriptor]) -> ChartConfig:
    desc = find_column(columns, column)
    if desc is None or not desc.is_numeric:
        return config
    upgraded = upgrade_legacy(config, columns)
    b = upgraded.binding
    y, x = b.first_visible_y(), b.first_visible_x()
    if y is None or x is None:
        return config
    ds = make_dataset(column, y.id, x.id, color_at(upgraded.palette, len(b.datasets)), upgraded.archetype)
    return _with(upgraded, replace(b, datasets=b.datasets + (ds,)))


def remove_dataset(config: ChartConfig, index: int) -> ChartConfig:
    b = config.binding
    if not isinstance(b, MultiAxisBinding) or not 0 <= index < len(b.datasets):
        return config
    return _with(config, replace(b, datasets=b.datasets[:index] + b.datasets[index + 1:]))


def update_dataset(config: ChartConfig, index: int, **patch: Any) -> ChartConfig:
    b = config.binding
    if not isinstance(b, MultiAxisBinding) or not 0 <= index < len(b.datasets):
        return config
    changes = _clean_patch(patch, _DATASET_FIELDS)
    if not changes:
        return config
    datasets = list(b.datasets)
    datasets[index] = replace(datasets[index], **changes)
    return _with(config, replace(b, datasets=tuple(datasets)))


# ---------- title / palette ----------

def set_title(config: ChartConfig, title: str) -> ChartConfig:
    return replace(config, title=str(title))


def set_palette_color(config: ChartConfig, index: int, color: str) -> ChartConfig:
    if not 0 <= index < len(config.palette):
        return config
    palette = list(config.palette)
    palette[index] = color
    return replace(config, palette=tuple(palette))


def add_palette_color(config: ChartConfig) -> ChartConfig:
    nxt = color_at(DEFAULT_PALETTE, len(config.palette))
    return replace(config, palette=config.palette + (nxt,))


def remove_palette_color(config: ChartConfig, index: int) -> ChartConfig:
    # the last colour stays
    if len(config.palette) <= 1 or not 0 <= index < len(config.palette):
        return config
    return replace(config, palette=config.palette[:index] + config.palette[index + 1:])


# ---------- legacy form / archetype ----------

def set_legacy_column(config: ChartConfig, axis: Literal["x", "y"], column: str) -> ChartConfig:
    """Bind one side of a legacy config; picking the other side's column clears that side."""
    b = config.binding
    if not isinstance(b, LegacyBinding) or axis not in ("x", "y"):
        return config
    if axis == "x":
        other = "" if column == b.y_column else b.y_column
        return replace(config, binding=LegacyBinding(x_column=column, y_column=other))
    other = "" if column == b.x_column else b.x_column
    return replace(config, binding=LegacyBinding(x_column=other, y_column=column))


def _retarget(config: ChartConfig, archetype: Archetype, columns: Sequence[ColumnDescriptor]) -> ChartConfig:
    b = config.binding
    if isinstance(b, MultiAxisBinding):
        b = MultiAxisBinding(
            x_axes=tuple(
                replace(a, scale_kind=category_scale(archetype, find_column(columns, a.bound_column)))
                for a in b.x_axes
            ),
            y_axes=b.y_axes,
            datasets=tuple(replace(d, render_kind=render_kind_for(archetype)) for d in b.datasets),
        )
    return ChartConfig(
        archetype=archetype,
        title=default_title(archetype),
        binding=b,
        palette=config.palette,
    )


def change_archetype(
    config: ChartConfig,
    archetype: Archetype | str,
    rows: Sequence[Row],
    columns: Sequence[ColumnDescriptor],
) -> ChartConfig:
    """
    Switch chart family. Current bindings survive when they validate under the
    new archetype; otherwise the new archetype's defaults are used.
    """
    try:
        kind = Archetype.parse(archetype)
    except ValueError:
        return config
    kept = _retarget(config, kind, columns)
    if not validate_config(kept, columns):
        return kept
    return build_default(rows, columns, kind, palette=config.palette)
