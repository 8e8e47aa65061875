from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union
import pandas as pd

from ..table.schema import Row
from ..table.values import as_label, coerce_number, to_number
from ..utils.fp import pipe
from .builder import color_at
from .types import (
    Archetype,
    Axis,
    ChartConfig,
    Dataset,
    LegacyBinding,
    MultiAxisBinding,
    PIE_FAMILY,
    POINT_FAMILY,
    Placement,
    RenderKind,
    ScaleKind,
)

DEFAULT_BUBBLE_RADIUS = 6.0


@dataclass(frozen=True)
class Point:
    x: float
    y: float
    r: Optional[float] = None

    def to_dict(self) -> Dict[str, float]:
        d = {"x": self.x, "y": self.y}
        if self.r is not None:
            d["r"] = self.r
        return d


@dataclass(frozen=True)
class SeriesStyle:
    colors: Tuple[str, ...]
    render_kind: Optional[RenderKind] = None
    fill_area: bool = False
    line_tension: float = 0.0
    value_axis_id: Optional[str] = None
    category_axis_id: Optional[str] = None


@dataclass(frozen=True)
class Series:
    name: str
    points: Tuple[Union[float, Point], ...]
    style: SeriesStyle

    def total(self) -> float:
        return sum(p.y if isinstance(p, Point) else p for p in self.points)


@dataclass(frozen=True)
class ChartData:
    labels: Tuple[str, ...]
    series: Tuple[Series, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "labels": list(self.labels),
            "series": [
                {
                    "name": s.name,
                    "points": [p.to_dict() if isinstance(p, Point) else p for p in s.points],
                    "colors": list(s.style.colors),
                }
                for s in self.series
            ],
        }


EMPTY = ChartData(labels=(), series=())


@dataclass(frozen=True)
class AxisLayout:
    """What a renderer needs to draw one axis."""
    id: str
    orientation: str  # "x" | "y"
    scale_kind: ScaleKind
    side: str  # left/right for y, bottom/top for x
    visible: bool
    title: str


# ---------- row helpers ----------

def _value(row: Row, column: str, strict: bool) -> Optional[float]:
    v = row.get(column)
    return to_number(v) if strict else coerce_number(v)


def _resolvable(rows: Sequence[Row], column: str) -> bool:
    if not column:
        return False
    return not rows or any(column in r for r in rows)


def _column(rows: Sequence[Row], column: str) -> pd.Series:
    return pd.Series([r.get(column) for r in rows], dtype=object)


def _frame(rows: Sequence[Row], category: str, value: str, strict: bool) -> pd.DataFrame:
    """label / value frame; unparseable values are 0, or NaN when strict."""
    to_value = to_number if strict else coerce_number
    return pd.DataFrame({
        "label": _column(rows, category).map(as_label),
        "value": _column(rows, value).map(to_value).astype(float),
    })


def _sums(rows: Sequence[Row], category: str, value: str, strict: bool) -> pd.Series:
    return pipe(
        _frame(rows, category, value, strict),
        lambda df: df.dropna(subset=["value"]),
        lambda df: df.groupby("label", sort=False)["value"].sum(),
    )


def _floats(s: pd.Series) -> Tuple[float, ...]:
    return tuple(float(v) for v in s)


def group_sums(rows: Sequence[Row], category: str, value: str, *, strict: bool = False) -> Dict[str, float]:
    """Sum `value` per string value of `category`, groups in first-seen order."""
    return {label: float(v) for label, v in _sums(rows, category, value, strict).items()}


def category_labels(rows: Sequence[Row], category: str) -> Tuple[str, ...]:
    return tuple(_column(rows, category).map(as_label).unique())


def _aligned(rows: Sequence[Row], category: str, value: str, labels: Tuple[str, ...], strict: bool) -> Tuple[float, ...]:
    # groups absent from `labels` are dropped, labels without rows get 0
    return _floats(_sums(rows, category, value, strict).reindex(list(labels), fill_value=0.0))


def _points(rows: Sequence[Row], x_col: str, y_col: str, strict: bool, radius: Optional[float]) -> Tuple[Point, ...]:
    out: List[Point] = []
    for row in rows:
        x, y = _value(row, x_col, strict), _value(row, y_col, strict)
        if x is None or y is None:
            continue
        out.append(Point(x=x, y=y, r=radius))
    return tuple(out)


def _pie(rows, category: str, value: str, name: str, palette: Sequence[str], strict: bool) -> ChartData:
    sums = _sums(rows, category, value, strict)
    labels = tuple(sums.index)
    style = SeriesStyle(colors=tuple(color_at(palette, i) for i in range(len(labels))))
    return ChartData(labels=labels, series=(Series(name=name, points=_floats(sums), style=style),))


def _dataset_style(ds: Dataset) -> SeriesStyle:
    return SeriesStyle(
        colors=(ds.color,),
        render_kind=ds.render_kind,
        fill_area=ds.fill_area,
        line_tension=ds.line_tension,
        value_axis_id=ds.value_axis_id,
        category_axis_id=ds.category_axis_id,
    )


# ---------- per-form projection ----------

def _bound(b: MultiAxisBinding, ds: Dataset, rows: Sequence[Row]) -> Optional[Tuple[Axis, Axis]]:
    x, y = b.x_axis(ds.category_axis_id), b.y_axis(ds.value_axis_id)
    if x is None or y is None:
        return None
    if not _resolvable(rows, x.bound_column) or not _resolvable(rows, ds.source_column):
        return None
    return x, y


def _project_multi(rows, config: ChartConfig, b: MultiAxisBinding, strict: bool, radius: float) -> ChartData:
    kind = config.archetype

    if kind in PIE_FAMILY:
        for ds in b.datasets:
            axes = _bound(b, ds, rows)
            if axes is not None:
                return _pie(rows, axes[0].bound_column, ds.source_column, ds.label, config.palette, strict)
        # no usable dataset: fall back to the first axis pair
        if b.x_axes and b.y_axes:
            x, y = b.x_axes[0].bound_column, b.y_axes[0].bound_column
            if _resolvable(rows, x) and _resolvable(rows, y):
                return _pie(rows, x, y, y, config.palette, strict)
        return EMPTY

    if kind in POINT_FAMILY:
        r = radius if kind is Archetype.BUBBLE else None
        series = []
        for ds in b.datasets:
            axes = _bound(b, ds, rows)
            if axes is None:
                continue
            pts = _points(rows, axes[0].bound_column, ds.source_column, strict, r)
            series.append(Series(name=ds.label, points=pts, style=_dataset_style(ds)))
        return ChartData(labels=(), series=tuple(series))

    # bar / line / radar share one aggregation over the first X axis' categories
    label_axis = next((a for a in b.x_axes if _resolvable(rows, a.bound_column)), None)
    if label_axis is None:
        return EMPTY
    labels = category_labels(rows, label_axis.bound_column)
    series = []
    for ds in b.datasets:
        axes = _bound(b, ds, rows)
        if axes is None:
            continue
        points = _aligned(rows, axes[0].bound_column, ds.source_column, labels, strict)
        series.append(Series(name=ds.label, points=points, style=_dataset_style(ds)))
    return ChartData(labels=labels, series=tuple(series))


def _project_legacy(rows, config: ChartConfig, b: LegacyBinding, strict: bool, radius: float) -> ChartData:
    x, y = b.x_column, b.y_column
    if not _resolvable(rows, x) or not _resolvable(rows, y):
        return EMPTY
    kind = config.archetype
    first = color_at(config.palette, 0)

    if kind in PIE_FAMILY:
        return _pie(rows, x, y, y, config.palette, strict)
    if kind in POINT_FAMILY:
        r = radius if kind is Archetype.BUBBLE else None
        style = SeriesStyle(colors=(first,), render_kind=RenderKind.SCATTER)
        return ChartData(labels=(), series=(Series(name=f"{x} vs {y}", points=_points(rows, x, y, strict, r), style=style),))

    labels = category_labels(rows, x)
    render = RenderKind.LINE if kind in (Archetype.LINE, Archetype.RADAR) else RenderKind.BAR
    style = SeriesStyle(colors=(first,), render_kind=render)
    return ChartData(labels=labels, series=(Series(name=y, points=_aligned(rows, x, y, labels, strict), style=style),))


def project(
    rows: Sequence[Row],
    config: ChartConfig,
    *,
    strict_numeric: bool = False,
    bubble_radius: float = DEFAULT_BUBBLE_RADIUS,
) -> ChartData:
    """
    Turn rows into renderer-ready labels and series for `config`.

    Values that do not parse as numbers count as 0 unless `strict_numeric`,
    in which case those rows are left out. Datasets whose axes or columns
    cannot be resolved are skipped; the rest still project.
    """
    b = config.binding
    if isinstance(b, LegacyBinding):
        return _project_legacy(rows, config, b, strict_numeric, bubble_radius)
    return _project_multi(rows, config, b, strict_numeric, bubble_radius)


# ---------- axis metadata ----------

_X_SIDES = {Placement.START: "bottom", Placement.END: "top"}
_Y_SIDES = {Placement.START: "left", Placement.END: "right"}


def axis_layout(config: ChartConfig) -> Tuple[AxisLayout, ...]:
    if config.archetype in PIE_FAMILY:
        return ()
    b = config.binding
    if isinstance(b, LegacyBinding):
        x_scale = ScaleKind.LINEAR if config.archetype in POINT_FAMILY else ScaleKind.CATEGORICAL
        return (
            AxisLayout("x", "x", x_scale, "bottom", True, b.x_column),
            AxisLayout("y", "y", ScaleKind.LINEAR, "left", True, b.y_column),
        )
    xs = [AxisLayout(a.id, "x", a.scale_kind, _X_SIDES[a.placement], a.visible, a.label) for a in b.x_axes]
    ys = [AxisLayout(a.id, "y", a.scale_kind, _Y_SIDES[a.placement], a.visible, a.label) for a in b.y_axes]
    return tuple(xs + ys)
