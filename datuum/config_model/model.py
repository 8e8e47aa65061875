from __future__ import annotations
from typing import List, Literal, Optional
from pathlib import Path
import os
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PrivateAttr,
    field_validator,
    model_validator,
)

DEFAULT_PALETTE: List[str] = [
    "#3B82F6",  # blue
    "#EF4444",  # red
    "#10B981",  # green
    "#F59E0B",  # yellow
    "#8B5CF6",  # purple
    "#F97316",  # orange
    "#06B6D4",  # cyan
    "#84CC16",  # lime
]


# ---------- Leaf models ----------

class EnvCfg(BaseModel):
    project_name: str = "datuum"
    timezone: Optional[str] = None  # None -> host local time


class InferenceCfg(BaseModel):
    sample_size: int = 10
    datetime_formats: List[str] = ["%Y-%m-%d", "%m/%d/%Y", "%Y-%m-%d %H:%M:%S", "%Y-%m-%dT%H:%M:%S"]

    @field_validator("sample_size")
    @classmethod
    def _positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("sample_size must be >= 1")
        return v


class ChartsCfg(BaseModel):
    default_archetype: Literal[
        "bar", "line", "pie", "scatter", "doughnut", "polarArea", "radar", "bubble"
    ] = "bar"
    palette: List[str] = Field(default_factory=lambda: list(DEFAULT_PALETTE))
    template: str = "plotly_white"
    bubble_radius: float = 6.0

    @model_validator(mode="after")
    def _palette_not_empty(self):
        # an empty palette in TOML falls back to the defaults
        if not self.palette:
            object.__setattr__(self, "palette", list(DEFAULT_PALETTE))
        return self


class ProjectionCfg(BaseModel):
    # True: rows whose value fails numeric parsing are excluded instead of counted as 0
    strict_numeric: bool = False


class ExportCfg(BaseModel):
    out_dir: str = "exports"
    engine: Literal["kaleido", "playwright"] = "kaleido"
    png_width: int = 1200
    png_height: int = 700
    png_scale: float = 2.0


class LoggingCfg(BaseModel):
    level: str = "INFO"
    structured_json: bool = True


# ---------- Root ----------

class RootCfg(BaseModel):
    model_config = ConfigDict(extra="ignore")

    env: EnvCfg = EnvCfg()
    inference: InferenceCfg = InferenceCfg()
    charts: ChartsCfg = ChartsCfg()
    projection: ProjectionCfg = ProjectionCfg()
    export: ExportCfg = ExportCfg()
    logging: LoggingCfg = LoggingCfg()

    # Private attribute (not a field); used only to resolve relative paths
    _config_dir: Optional[Path] = PrivateAttr(default=None)

    def _normalize_paths(self) -> "RootCfg":
        if self._config_dir:
            # config/ folder -> paths are relative to the project root
            base_dir = self._config_dir.parent if self._config_dir.name.lower() == "config" else self._config_dir
            out = Path(self.export.out_dir)
            if not out.is_absolute():
                self.export.out_dir = str((base_dir / out).resolve())
        return self

    @classmethod
    def from_toml(cls, path: str | os.PathLike[str]) -> "RootCfg":
        try:
            import tomllib  # py>=3.11
        except ImportError:
            import tomli as tomllib

        p = Path(path)
        text = p.read_text(encoding="utf-8-sig")
        try:
            raw = tomllib.loads(text)
        except tomllib.TOMLDecodeError as e:
            snippet = text.strip()[:80].replace("\n", "\\n")
            raise RuntimeError(f"Failed to parse TOML at {p}. First chars: {snippet!r}") from e

        cfg = cls(**raw)
        cfg._config_dir = p.parent.resolve()
        return cfg._normalize_paths()

    @classmethod
    def load(cls, path: str | None = None) -> "RootCfg":
        final = Path(path or os.environ.get("DATUUM_CFG", "config/config.toml")).resolve()
        if not final.exists():
            if path is not None:
                raise FileNotFoundError(final)
            return cls()
        return cls.from_toml(final)


def load_config(path: str | None = None) -> RootCfg:
    return RootCfg.load(path)
