from datuum.config_model.model import load_config
cfg = load_config()  # reads config/config.toml by default
print("Project:", cfg.env.project_name)
print("Default archetype:", cfg.charts.default_archetype)
print("Palette:", ", ".join(cfg.charts.palette))
print("Strict numeric:", cfg.projection.strict_numeric)
print("Export dir:", cfg.export.out_dir, f"({cfg.export.engine})")
