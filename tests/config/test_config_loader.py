from pathlib import Path
import pytest
from pydantic import ValidationError

from datuum.config_model.model import RootCfg, load_config, DEFAULT_PALETTE

def test_config_loads(cfg):
    # sanity top-level
    assert cfg.env.project_name == "datuum"
    assert cfg.inference.sample_size == 10
    assert cfg.charts.default_archetype == "bar"
    assert cfg.charts.palette == DEFAULT_PALETTE
    assert cfg.projection.strict_numeric is False
    assert cfg.export.engine == "kaleido"

def test_export_dir_resolved_against_project_root(cfg, project_root):
    out = Path(cfg.export.out_dir)
    assert out.is_absolute()
    assert out == (project_root / "exports").resolve()

def test_missing_default_file_falls_back_to_defaults(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("DATUUM_CFG", raising=False)
    cfg = load_config()
    assert cfg.charts.bubble_radius == 6.0
    assert cfg.export.out_dir == "exports"

def test_missing_explicit_path_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(str(tmp_path / "nope.toml"))

def test_env_var_points_at_config(tmp_path, monkeypatch):
    p = tmp_path / "alt.toml"
    p.write_text('[charts]\ndefault_archetype = "radar"\npalette = []\n[export]\nout_dir = "o"\n', encoding="utf-8")
    monkeypatch.setenv("DATUUM_CFG", str(p))
    cfg = load_config()
    assert cfg.charts.default_archetype == "radar"
    # empty palette falls back to defaults
    assert cfg.charts.palette == DEFAULT_PALETTE
    # not inside a config/ folder -> relative to the file's own directory
    assert Path(cfg.export.out_dir) == (tmp_path / "o").resolve()

def test_bad_toml_and_bad_values(tmp_path):
    bad = tmp_path / "bad.toml"
    bad.write_text("[charts\n", encoding="utf-8")
    with pytest.raises(RuntimeError):
        RootCfg.from_toml(bad)
    with pytest.raises(ValidationError):
        RootCfg(inference={"sample_size": 0})
    with pytest.raises(ValidationError):
        RootCfg(charts={"default_archetype": "area"})
