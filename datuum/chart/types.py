from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple, Union


class Archetype(str, Enum):
    BAR = "bar"
    LINE = "line"
    PIE = "pie"
    SCATTER = "scatter"
    DOUGHNUT = "doughnut"
    POLAR_AREA = "polarArea"
    RADAR = "radar"
    BUBBLE = "bubble"

    @property
    def display_name(self) -> str:
        # "polarArea" -> "PolarArea"
        return self.value[0].upper() + self.value[1:]

    @classmethod
    def parse(cls, value: "Archetype | str") -> "Archetype":
        if isinstance(value, cls):
            return value
        wanted = str(value).strip().lower()
        for a in cls:
            if a.value.lower() == wanted or a.name.lower() == wanted:
                return a
        raise ValueError(f"unknown chart archetype {value!r}")


# archetypes drawn without cartesian axes
PIE_FAMILY = frozenset({Archetype.PIE, Archetype.DOUGHNUT, Archetype.POLAR_AREA})
# archetypes whose category axis is numeric
POINT_FAMILY = frozenset({Archetype.SCATTER, Archetype.BUBBLE})


class Placement(str, Enum):
    START = "start"  # left for value axes, bottom for category axes
    END = "end"


class ScaleKind(str, Enum):
    LINEAR = "linear"
    LOGARITHMIC = "logarithmic"
    CATEGORICAL = "category"
    TEMPORAL = "time"


class RenderKind(str, Enum):
    BAR = "bar"
    LINE = "line"
    SCATTER = "scatter"


@dataclass(frozen=True)
class Axis:
    id: str
    label: str
    bound_column: str
    placement: Placement = Placement.START
    scale_kind: ScaleKind = ScaleKind.CATEGORICAL
    visible: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "label": self.label,
            "column": self.bound_column,
            "placement": self.placement.value,
            "scale": self.scale_kind.value,
            "visible": self.visible,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Axis":
        return cls(
            id=str(d["id"]),
            label=str(d.get("label", "")),
            bound_column=str(d.get("column", "")),
            placement=Placement(d.get("placement", Placement.START.value)),
            scale_kind=ScaleKind(d.get("scale", ScaleKind.CATEGORICAL.value)),
            visible=bool(d.get("visible", True)),
        )


@dataclass(frozen=True)
class Dataset:
    label: str
    source_column: str
    value_axis_id: str
    category_axis_id: str
    color: str
    render_kind: RenderKind = RenderKind.BAR
    fill_area: bool = False
    line_tension: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "label": self.label,
            "column": self.source_column,
            "y_axis_id": self.value_axis_id,
            "x_axis_id": self.category_axis_id,
            "color": self.color,
            "render": self.render_kind.value,
            "fill": self.fill_area,
            "tension": self.line_tension,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Dataset":
        return cls(
            label=str(d.get("label", "")),
            source_column=str(d.get("column", "")),
            value_axis_id=str(d.get("y_axis_id", "")),
            category_axis_id=str(d.get("x_axis_id", "")),
            color=str(d.get("color", "")),
            render_kind=RenderKind(d.get("render", RenderKind.BAR.value)),
            fill_area=bool(d.get("fill", False)),
            line_tension=float(d.get("tension", 0.0)),
        )


@dataclass(frozen=True)
class LegacyBinding:
    """Single X column / single Y column form."""
    x_column: str = ""
    y_column: str = ""


@dataclass(frozen=True)
class MultiAxisBinding:
    x_axes: Tuple[Axis, ...] = ()
    y_axes: Tuple[Axis, ...] = ()
    datasets: Tuple[Dataset, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "x_axes", tuple(self.x_axes))
        object.__setattr__(self, "y_axes", tuple(self.y_axes))
        object.__setattr__(self, "datasets", tuple(self.datasets))

    def x_axis(self, axis_id: str) -> Optional[Axis]:
        return next((a for a in self.x_axes if a.id == axis_id), None)

    def y_axis(self, axis_id: str) -> Optional[Axis]:
        return next((a for a in self.y_axes if a.id == axis_id), None)

    def first_visible_x(self) -> Optional[Axis]:
        return next((a for a in self.x_axes if a.visible), None)

    def first_visible_y(self) -> Optional[Axis]:
        return next((a for a in self.y_axes if a.visible), None)


Binding = Union[LegacyBinding, MultiAxisBinding]


@dataclass(frozen=True)
class ChartConfig:
    archetype: Archetype
    title: str
    binding: Binding
    palette: Tuple[str, ...] = field(default=())

    def __post_init__(self):
        object.__setattr__(self, "archetype", Archetype.parse(self.archetype))
        object.__setattr__(self, "palette", tuple(self.palette))

    @property
    def is_legacy(self) -> bool:
        return isinstance(self.binding, LegacyBinding)

    def legacy_view(self) -> LegacyBinding:
        """Single-axis reading of either form: first X / first Y bound columns."""
        b = self.binding
        if isinstance(b, LegacyBinding):
            return b
        x = b.x_axes[0].bound_column if b.x_axes else ""
        y = b.y_axes[0].bound_column if b.y_axes else ""
        return LegacyBinding(x_column=x, y_column=y)

    def to_dict(self) -> Dict[str, Any]:
        legacy = self.legacy_view()
        out: Dict[str, Any] = {
            "archetype": self.archetype.value,
            "title": self.title,
            "palette": list(self.palette),
            "x_column": legacy.x_column,
            "y_column": legacy.y_column,
            "x_axes": [],
            "y_axes": [],
            "datasets": [],
        }
        if isinstance(self.binding, MultiAxisBinding):
            out["x_axes"] = [a.to_dict() for a in self.binding.x_axes]
            out["y_axes"] = [a.to_dict() for a in self.binding.y_axes]
            out["datasets"] = [d.to_dict() for d in self.binding.datasets]
        return out

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "ChartConfig":
        x_axes = d.get("x_axes") or []
        y_axes = d.get("y_axes") or []
        x_col = str(d.get("x_column") or "")
        y_col = str(d.get("y_column") or "")
        binding: Binding
        # legacy only when the single-axis fields carry data and no axes exist
        if (x_col or y_col) and not x_axes and not y_axes:
            binding = LegacyBinding(x_column=x_col, y_column=y_col)
        else:
            binding = MultiAxisBinding(
                x_axes=tuple(Axis.from_dict(a) for a in x_axes),
                y_axes=tuple(Axis.from_dict(a) for a in y_axes),
                datasets=tuple(Dataset.from_dict(ds) for ds in d.get("datasets") or []),
            )
        return cls(
            archetype=Archetype.parse(d["archetype"]),
            title=str(d.get("title", "")),
            binding=binding,
            palette=tuple(d.get("palette") or ()),
        )
