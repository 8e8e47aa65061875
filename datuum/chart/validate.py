from __future__ import annotations
from typing import List, Sequence

from ..table.schema import ColumnDescriptor, find_column
from .types import (
    Archetype,
    ChartConfig,
    LegacyBinding,
    MultiAxisBinding,
    POINT_FAMILY,
)


def _category_issue(archetype: Archetype, where: str, col: ColumnDescriptor) -> List[str]:
    name = archetype.display_name
    if archetype in POINT_FAMILY:
        if not col.is_numeric:
            return [f"{name} chart requires numeric columns for both axes; {where} is bound to '{col.name}' ({col.kind.value})"]
        return []
    if not col.is_category_like:
        return [f"{name} chart requires a categorical or date column for {where}; '{col.name}' is {col.kind.value}"]
    return []


def _resolve(where: str, column: str, columns: Sequence[ColumnDescriptor], issues: List[str]):
    if not column:
        issues.append(f"{where} has no column selected")
        return None
    desc = find_column(columns, column)
    if desc is None:
        issues.append(f"{where} references unknown column '{column}'")
    return desc


def _validate_multi(config: ChartConfig, b: MultiAxisBinding, columns: Sequence[ColumnDescriptor]) -> List[str]:
    issues: List[str] = []
    if not b.x_axes:
        issues.append("At least one X-axis is required")
    if not b.y_axes:
        issues.append("At least one Y-axis is required")

    for axis in b.x_axes:
        where = f"X-axis '{axis.id}'"
        desc = _resolve(where, axis.bound_column, columns, issues)
        if desc is not None:
            issues.extend(_category_issue(config.archetype, where, desc))

    for axis in b.y_axes:
        where = f"Y-axis '{axis.id}'"
        desc = _resolve(where, axis.bound_column, columns, issues)
        if desc is not None and not desc.is_numeric:
            issues.append(f"{where} requires a numeric column; '{desc.name}' is {desc.kind.value}")

    x_ids = {a.id for a in b.x_axes}
    y_ids = {a.id for a in b.y_axes}
    for i, ds in enumerate(b.datasets):
        where = f"Dataset {i + 1} '{ds.label}'"
        desc = _resolve(where, ds.source_column, columns, issues)
        if desc is not None and not desc.is_numeric:
            issues.append(f"{where} requires a numeric column; '{desc.name}' is {desc.kind.value}")
        if ds.value_axis_id not in y_ids:
            issues.append(f"{where} references missing Y-axis '{ds.value_axis_id}'")
        if ds.category_axis_id not in x_ids:
            issues.append(f"{where} references missing X-axis '{ds.category_axis_id}'")
    return issues


def _validate_legacy(config: ChartConfig, b: LegacyBinding, columns: Sequence[ColumnDescriptor]) -> List[str]:
    issues: List[str] = []
    if not b.x_column:
        issues.append("X-axis column is required")
    if not b.y_column:
        issues.append("Y-axis column is required")

    x = find_column(columns, b.x_column)
    y = find_column(columns, b.y_column)
    if b.x_column and x is None:
        issues.append(f"X-axis references unknown column '{b.x_column}'")
    if b.y_column and y is None:
        issues.append(f"Y-axis references unknown column '{b.y_column}'")
    if x is not None:
        issues.extend(_category_issue(config.archetype, "the X-axis", x))
    if y is not None and not y.is_numeric:
        issues.append(f"{config.archetype.display_name} chart requires a numeric column for the Y-axis; '{y.name}' is {y.kind.value}")
    if b.x_column and b.x_column == b.y_column:
        issues.append("X-axis and Y-axis must use different columns")
    return issues


def validate_config(config: ChartConfig, columns: Sequence[ColumnDescriptor]) -> List[str]:
    """Every structural or semantic problem with `config`, as readable strings. Empty means valid."""
    b = config.binding
    if isinstance(b, LegacyBinding):
        issues = _validate_legacy(config, b, columns)
    else:
        issues = _validate_multi(config, b, columns)
    if not config.palette:
        issues.append("Palette must contain at least one color")
    return issues


def is_valid(config: ChartConfig, columns: Sequence[ColumnDescriptor]) -> bool:
    return not validate_config(config, columns)
