from __future__ import annotations
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, List, Optional, Sequence

from ..config_model.model import RootCfg
from ..ingestion.ingest import parse_csv, sample_table
from ..table.schema import ColumnDescriptor, Row, Table
from ..table.sorting import Direction, sort_table
from ..utils.ids import short_id, stable_hash
from ..utils.log import logger_from_cfg
from ..utils.time import local_now
from .builder import build_default
from .export import ExportError, ExportKind, export_chart, generate_filename
from .mutate import change_archetype
from .projection import ChartData, project
from .render import to_figure
from .types import Archetype, ChartConfig
from .validate import validate_config


class ChartSession:
    """
    Owns the current table and two configurations: `pending` receives every
    edit, `committed` drives rendering and only changes on `apply()` when the
    pending config validates.
    """

    def __init__(self, cfg: Optional[RootCfg] = None):
        self.cfg = cfg or RootCfg()
        self.log = logger_from_cfg("datuum.session", self.cfg)
        self.table: Optional[Table] = None
        self.committed: Optional[ChartConfig] = None
        self.pending: Optional[ChartConfig] = None
        self.last_error: Optional[str] = None

    # ---------- loading ----------

    def load(self, table: Table, archetype: Archetype | str | None = None) -> ChartConfig:
        kind = archetype or self.cfg.charts.default_archetype
        config = build_default(table.rows, table.columns, kind, palette=self.cfg.charts.palette)
        self.table = table
        self.committed = self.pending = config
        self.last_error = None
        self.log.info("table loaded into session", extra={"n_rows": len(table.rows), "archetype": config.archetype.value})
        return config

    def load_csv(self, data: bytes | str) -> List[str]:
        """Ingest CSV text/bytes. On errors the current table and configs are kept."""
        result = parse_csv(
            data,
            sample_size=self.cfg.inference.sample_size,
            datetime_formats=self.cfg.inference.datetime_formats,
        )
        if result.table is None:
            self.last_error = "; ".join(result.errors)
            return list(result.errors)
        self.load(result.table)
        return []

    def load_sample(self) -> ChartConfig:
        return self.load(sample_table())

    def _require(self) -> Table:
        if self.table is None or self.pending is None or self.committed is None:
            raise RuntimeError("no table loaded; call load(), load_csv() or load_sample() first")
        return self.table

    @property
    def columns(self) -> Sequence[ColumnDescriptor]:
        return self.table.columns if self.table is not None else ()

    # ---------- staged edits ----------

    def edit(self, fn: Callable[..., ChartConfig], *args: Any, **kwargs: Any) -> ChartConfig:
        """Apply a pure config transform to the pending config, e.g. edit(add_dataset, "Profit", session.columns)."""
        self._require()
        self.pending = fn(self.pending, *args, **kwargs)
        return self.pending

    def change_archetype(self, archetype: Archetype | str) -> ChartConfig:
        table = self._require()
        self.pending = change_archetype(self.pending, archetype, table.rows, table.columns)
        return self.pending

    @property
    def issues(self) -> List[str]:
        if self.pending is None:
            return []
        return validate_config(self.pending, self.columns)

    @property
    def can_apply(self) -> bool:
        return self.pending is not None and not self.issues

    @property
    def has_changes(self) -> bool:
        if self.pending is None or self.committed is None:
            return False
        return stable_hash(self.pending) != stable_hash(self.committed)

    def apply(self) -> List[str]:
        """Commit the pending config if it validates; returns the blocking issues otherwise."""
        self._require()
        issues = self.issues
        if issues:
            self.log.info("apply blocked", extra={"issues": issues})
            return issues
        self.committed = self.pending
        self.log.info(
            "configuration applied",
            extra={"archetype": self.committed.archetype.value, "config_id": short_id(self.committed)},
        )
        return []

    def discard(self) -> None:
        self._require()
        self.pending = self.committed

    # ---------- rows ----------

    def replace_rows(self, rows: Sequence[Row]) -> Table:
        """
        Swap in edited / sorted / filtered rows. Column kinds are kept; both
        configs are rebuilt as the current archetype's defaults, discarding
        unapplied edits.
        """
        table = self._require()
        self.table = table.with_rows(rows)
        config = build_default(self.table.rows, self.table.columns, self.committed.archetype, palette=self.cfg.charts.palette)
        self.committed = self.pending = config
        return self.table

    def sort_by(self, column: str, direction: Direction = "asc") -> Table:
        table = self._require()
        return self.replace_rows(sort_table(table, column, direction).rows)

    # ---------- output ----------

    def chart_data(self) -> ChartData:
        table = self._require()
        return project(
            table.rows,
            self.committed,
            strict_numeric=self.cfg.projection.strict_numeric,
            bubble_radius=self.cfg.charts.bubble_radius,
        )

    def figure(self):
        self._require()
        return to_figure(self.chart_data(), self.committed, template=self.cfg.charts.template)

    def export(
        self,
        kind: ExportKind,
        out_dir: Optional[str] = None,
        timestamp: Optional[datetime] = None,
    ) -> Optional[Path]:
        """Export the committed chart. Failures are logged and kept on `last_error`; returns None then."""
        self._require()
        exp = self.cfg.export
        when = timestamp or local_now(self.cfg.env.timezone)
        filename = generate_filename(self.committed.archetype, when)
        try:
            path = export_chart(
                self.figure(), kind, out_dir or exp.out_dir, filename,
                width=exp.png_width, height=exp.png_height, scale=exp.png_scale, engine=exp.engine,
            )
        except ExportError as e:
            self.last_error = f"Export failed, please try again: {e}"
            self.log.warning("export failed", extra={"kind": kind, "error": str(e)})
            return None
        self.last_error = None
        self.log.info("chart exported", extra={"kind": kind, "path": str(path)})
        return path
