from __future__ import annotations

import argparse
from pathlib import Path

from datuum.chart.export import ExportError, export_chart, export_html
from datuum.chart.session import ChartSession
from datuum.chart.types import Archetype
from datuum.config_model.model import load_config
from datuum.ingestion.ingest import read_csv_file


def _save(session: ChartSession, outdir: Path, name: str, png: bool):
    fig = session.figure()
    export_html(fig, str(outdir / f"{name}.html"))
    if png:
        exp = session.cfg.export
        try:
            export_chart(fig, "png", str(outdir), name, width=exp.png_width, height=exp.png_height,
                         scale=exp.png_scale, engine=exp.engine)
        except ExportError as e:
            print(f"[WARN] PNG export failed: {e}")


def main():
    ap = argparse.ArgumentParser(description="Render every chart archetype for a CSV (or the built-in sample)")
    ap.add_argument("-o", "--outdir", type=Path, required=True)
    ap.add_argument("--csv", type=Path, default=None, help="CSV file; defaults to the 12-month sample")
    ap.add_argument("--png", action="store_true", help="Also export PNG with the configured engine")
    args = ap.parse_args()

    session = ChartSession(load_config())
    if args.csv:
        result = read_csv_file(args.csv)
        if result.table is None:
            for err in result.errors:
                print(f"[ERROR] {err}")
            raise SystemExit(1)
        session.load(result.table)
    else:
        session.load_sample()

    outdir = args.outdir
    outdir.mkdir(parents=True, exist_ok=True)

    for kind in Archetype:
        session.change_archetype(kind)
        issues = session.apply()
        if issues:
            print(f"[SKIP] {kind.value}: {'; '.join(issues)}")
            continue
        _save(session, outdir, kind.value, args.png)

    print(f"Wrote charts to: {outdir.resolve()}")


if __name__ == "__main__":
    main()
