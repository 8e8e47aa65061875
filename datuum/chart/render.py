from __future__ import annotations
from typing import Any, Dict, List, Optional, Sequence, Tuple
import plotly.graph_objects as go

from .projection import AxisLayout, ChartData, Point, Series, axis_layout
from .types import Archetype, ChartConfig, PIE_FAMILY, POINT_FAMILY, RenderKind, ScaleKind

_PLOTLY_SCALE = {
    ScaleKind.LINEAR: "linear",
    ScaleKind.LOGARITHMIC: "log",
    ScaleKind.CATEGORICAL: "category",
    ScaleKind.TEMPORAL: "date",
}


def _axis_refs(layout: Sequence[AxisLayout]) -> Dict[str, Tuple[str, str]]:
    """axis id -> (trace ref, layout key): first x is ('x', 'xaxis'), second ('x2', 'xaxis2')..."""
    refs: Dict[str, Tuple[str, str]] = {}
    counts = {"x": 0, "y": 0}
    for a in layout:
        counts[a.orientation] += 1
        n = counts[a.orientation]
        suffix = "" if n == 1 else str(n)
        refs[a.id] = (f"{a.orientation}{suffix}", f"{a.orientation}axis{suffix}")
    return refs


def _layout_axes(layout: Sequence[AxisLayout], refs: Dict[str, Tuple[str, str]]) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for a in layout:
        ref, key = refs[a.id]
        spec: Dict[str, Any] = {
            "title": {"text": a.title},
            "side": a.side,
            "visible": a.visible,
            "type": _PLOTLY_SCALE[a.scale_kind],
        }
        if ref not in ("x", "y"):
            spec["overlaying"] = a.orientation
        out[key] = spec
    return out


def _trace_axes(s: Series, refs: Dict[str, Tuple[str, str]]) -> Dict[str, str]:
    kw: Dict[str, str] = {}
    if s.style.category_axis_id in refs:
        kw["xaxis"] = refs[s.style.category_axis_id][0]
    if s.style.value_axis_id in refs:
        kw["yaxis"] = refs[s.style.value_axis_id][0]
    return kw


def _color(s: Series) -> Optional[str]:
    return s.style.colors[0] if s.style.colors else None


def _pie_traces(data: ChartData, kind: Archetype) -> List[Any]:
    if not data.series:
        return []
    s = data.series[0]
    values = list(s.points)
    if kind is Archetype.POLAR_AREA:
        return [go.Barpolar(r=values, theta=list(data.labels), marker_color=list(s.style.colors), name=s.name)]
    hole = 0.5 if kind is Archetype.DOUGHNUT else 0.0
    return [go.Pie(labels=list(data.labels), values=values, hole=hole, marker={"colors": list(s.style.colors)}, name=s.name)]


def _radar_traces(data: ChartData) -> List[Any]:
    theta = list(data.labels)
    traces = []
    for s in data.series:
        r = list(s.points)
        # close the polygon
        traces.append(go.Scatterpolar(
            r=r + r[:1], theta=theta + theta[:1], name=s.name,
            fill="toself" if s.style.fill_area else "none",
            line={"color": _color(s)},
        ))
    return traces


def _point_traces(data: ChartData, refs) -> List[Any]:
    traces = []
    for s in data.series:
        pts = [p for p in s.points if isinstance(p, Point)]
        marker: Dict[str, Any] = {"color": _color(s)}
        if pts and pts[0].r is not None:
            marker["size"] = [p.r * 2 for p in pts]
        traces.append(go.Scatter(
            x=[p.x for p in pts], y=[p.y for p in pts], mode="markers",
            name=s.name, marker=marker, **_trace_axes(s, refs),
        ))
    return traces


def _cartesian_traces(data: ChartData, refs) -> List[Any]:
    x = list(data.labels)
    traces = []
    for s in data.series:
        y = list(s.points)
        if s.style.render_kind is RenderKind.LINE:
            line: Dict[str, Any] = {"color": _color(s)}
            if s.style.line_tension > 0:
                line.update(shape="spline", smoothing=round(1.3 * s.style.line_tension, 3))
            traces.append(go.Scatter(
                x=x, y=y, mode="lines+markers", name=s.name, line=line,
                fill="tozeroy" if s.style.fill_area else None, **_trace_axes(s, refs),
            ))
        elif s.style.render_kind is RenderKind.SCATTER:
            traces.append(go.Scatter(x=x, y=y, mode="markers", name=s.name,
                                     marker={"color": _color(s)}, **_trace_axes(s, refs)))
        else:
            traces.append(go.Bar(x=x, y=y, name=s.name, marker_color=_color(s), **_trace_axes(s, refs)))
    return traces


def to_figure(data: ChartData, config: ChartConfig, *, template: str = "plotly_white") -> go.Figure:
    """Plotly figure for projected chart data; the config supplies title and axis metadata."""
    kind = config.archetype
    layout = axis_layout(config)
    refs = _axis_refs(layout)

    if kind in PIE_FAMILY:
        traces = _pie_traces(data, kind)
    elif kind is Archetype.RADAR:
        traces = _radar_traces(data)
    elif kind in POINT_FAMILY:
        traces = _point_traces(data, refs)
    else:
        traces = _cartesian_traces(data, refs)

    fig = go.Figure(data=traces)
    fig.update_layout(
        title=config.title,
        template=template,
        showlegend=kind is not Archetype.SCATTER,
        barmode="group",
    )
    if kind not in PIE_FAMILY and kind is not Archetype.RADAR:
        fig.update_layout(**_layout_axes(layout, refs))
    return fig
