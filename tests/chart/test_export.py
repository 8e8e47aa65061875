from datetime import datetime
from pathlib import Path
import pytest
import plotly.graph_objects as go
import pytz

from datuum.chart.export import ExportError, export_chart, export_html, generate_filename

def _fig():
    return go.Figure(data=[go.Bar(x=["A", "B", "C"], y=[1, 3, 2])])

def test_generate_filename_format():
    when = pytz.utc.localize(datetime(2024, 3, 9, 7, 5, 1))
    assert generate_filename("bar", when) == "chart-bar-2024-03-09-07-05-01"
    assert generate_filename("polarArea", when).startswith("chart-polarArea-")

def test_generate_filename_date_is_utc_time_is_wall_clock():
    # 23:30 in Chicago is already the next day in UTC
    late = pytz.timezone("America/Chicago").localize(datetime(2024, 3, 9, 23, 30, 0))
    assert generate_filename("line", late) == "chart-line-2024-03-10-23-30-00"

def test_uncreatable_directory_becomes_export_error(tmp_out):
    blocker = tmp_out / "file.txt"
    blocker.write_text("x", encoding="utf-8")
    with pytest.raises(ExportError):
        export_chart(_fig(), "svg", str(blocker / "sub"), "c")

def test_export_html_writes_file(tmp_out):
    out = export_html(_fig(), str(tmp_out / "nested" / "c.html"))
    assert out.exists()
    assert "plotly" in out.read_text(encoding="utf-8").lower()

def test_rejects_unknown_kind_and_engine(tmp_out):
    with pytest.raises(ValueError):
        export_chart(_fig(), "gif", str(tmp_out), "c")
    with pytest.raises(ValueError):
        export_chart(_fig(), "png", str(tmp_out), "c", engine="unknown")

@pytest.mark.parametrize("kind", ["png", "svg", "pdf"])
def test_export_kaleido_smoke(tmp_out, kind):
    pytest.importorskip("kaleido")
    try:
        out = export_chart(_fig(), kind, str(tmp_out / "deep"), "chart", width=320, height=200, scale=1.0)
    except ExportError as e:
        pytest.skip(f"kaleido cannot render here: {e}")
    assert out == (tmp_out / "deep" / f"chart.{kind}").resolve()
    assert Path(out).stat().st_size > 0

def test_export_playwright_smoke(tmp_out):
    pytest.importorskip("playwright")
    try:
        out = export_chart(_fig(), "png", str(tmp_out), "shot", width=320, height=200, scale=1.0, engine="playwright")
    except ExportError as e:
        pytest.skip(f"chromium not available: {e}")
    assert Path(out).stat().st_size > 0

def test_write_failure_becomes_export_error(tmp_out):
    class Broken:
        def write_image(self, *a, **k):
            raise OSError("disk full")
    with pytest.raises(ExportError):
        export_chart(Broken(), "svg", str(tmp_out), "c")
