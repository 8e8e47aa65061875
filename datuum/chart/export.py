from __future__ import annotations
from datetime import datetime
from pathlib import Path
from typing import Literal, Optional
import tempfile

from ..utils.time import to_timezone
from .types import Archetype

ExportKind = Literal["png", "svg", "pdf"]
EXPORT_KINDS = ("png", "svg", "pdf")


class ExportError(RuntimeError):
    """Rendering a figure to a file failed; state is untouched and the call can be retried."""


def generate_filename(archetype: Archetype | str, timestamp: Optional[datetime] = None) -> str:
    """
    chart-{archetype}-{YYYY-MM-DD}-{HH-MM-SS}. The date is the UTC calendar
    date, the time is the timestamp's own wall-clock time; naive timestamps
    are read as host local time. Near midnight the two can disagree.
    """
    kind = archetype.value if isinstance(archetype, Archetype) else str(archetype)
    now = timestamp or datetime.now()
    utc_date = to_timezone(now.astimezone(), "UTC").date()
    return f"chart-{kind}-{utc_date.isoformat()}-{now.strftime('%H:%M:%S').replace(':', '-')}"


def _ensure_parent(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)


def export_html(fig, out_html: Optional[str] = None) -> Path:
    """Write a self-contained HTML file for a Plotly figure and return its path."""
    from plotly.io import to_html
    html = to_html(fig, full_html=True, include_plotlyjs="cdn")
    if out_html is None:
        tmp = tempfile.NamedTemporaryFile(delete=False, suffix=".html")
        tmp.write(html.encode("utf-8"))
        tmp.flush()
        tmp.close()
        return Path(tmp.name)
    out = Path(out_html)
    _ensure_parent(out)
    out.write_text(html, encoding="utf-8")
    return out


def _screenshot_png(fig, out: Path, *, width: int, height: int, scale: float, timeout_ms: int) -> None:
    try:
        from playwright.sync_api import sync_playwright
    except ImportError as e:
        raise ExportError(
            "Playwright not available. Install it and run 'playwright install chromium'."
        ) from e

    html_path = export_html(fig)
    try:
        with sync_playwright() as p:
            browser = p.chromium.launch(headless=True, args=["--allow-file-access-from-files"])
            context = browser.new_context(
                viewport={"width": width, "height": height},
                device_scale_factor=scale,
            )
            page = context.new_page()
            page.goto(html_path.resolve().as_uri(), wait_until="networkidle", timeout=timeout_ms)
            page.screenshot(path=str(out))
            context.close()
            browser.close()
    except Exception as e:
        raise ExportError(f"PNG screenshot failed: {e}") from e
    finally:
        html_path.unlink(missing_ok=True)


def export_chart(
    fig,
    kind: ExportKind,
    out_dir: str,
    filename: str,
    *,
    width: int = 1200,
    height: int = 700,
    scale: float = 2.0,
    engine: str = "kaleido",
    timeout_ms: int = 10_000,
) -> Path:
    """
    Write `fig` as <out_dir>/<filename>.<kind>.
    - png: engine="kaleido" (fig.write_image) or "playwright" (headless Chromium screenshot)
    - svg / pdf: kaleido only
    Raises ValueError for an unknown kind or engine, ExportError when rendering fails.
    """
    if kind not in EXPORT_KINDS:
        raise ValueError(f"Unknown export kind '{kind}'. Use one of {', '.join(EXPORT_KINDS)}.")
    if engine not in ("kaleido", "playwright"):
        raise ValueError(f"Unknown engine '{engine}'. Use 'playwright' or 'kaleido'.")

    out = (Path(out_dir) / f"{filename}.{kind}").resolve()
    try:
        _ensure_parent(out)
    except OSError as e:
        raise ExportError(f"Cannot create export directory {out.parent}: {e}") from e

    if kind == "png" and engine == "playwright":
        _screenshot_png(fig, out, width=width, height=height, scale=scale, timeout_ms=timeout_ms)
        return out

    try:
        fig.write_image(str(out), format=kind, width=width, height=height, scale=scale)
    except Exception as e:
        raise ExportError(
            f"{kind.upper()} export failed ({e}). Install kaleido, or use engine='playwright' for PNG."
        ) from e
    return out
