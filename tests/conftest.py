from pathlib import Path
import pytest

from datuum.table.schema import ColumnDescriptor, ColumnKind, Table

@pytest.fixture(scope="session")
def project_root() -> Path:
    return Path(__file__).resolve().parents[1]

@pytest.fixture(scope="session")
def cfg_path(project_root: Path) -> Path:
    return project_root / "config" / "config.toml"

@pytest.fixture(scope="session")
def cfg(cfg_path: Path):
    from datuum.config_model.model import load_config
    return load_config(str(cfg_path))

@pytest.fixture
def tmp_out(tmp_path: Path) -> Path:
    d = tmp_path / "out"
    d.mkdir(parents=True, exist_ok=True)
    return d

@pytest.fixture
def months_table() -> Table:
    # the Jan/Feb scenario: M categorical, S numeric
    rows = [{"M": "Jan", "S": 10}, {"M": "Feb", "S": 20}, {"M": "Jan", "S": 5}]
    cols = [
        ColumnDescriptor("M", ColumnKind.CATEGORICAL, 0),
        ColumnDescriptor("S", ColumnKind.NUMERIC, 1),
    ]
    return Table(rows=rows, columns=cols)

@pytest.fixture
def sales_table() -> Table:
    rows = [
        {"Region": "North", "Day": "2024-01-01", "Sales": "100", "Profit": "30", "Units": "4"},
        {"Region": "South", "Day": "2024-01-02", "Sales": "150", "Profit": "x", "Units": "6"},
        {"Region": "North", "Day": "2024-01-03", "Sales": "", "Profit": "20", "Units": "2"},
        {"Region": "East", "Day": "2024-01-04", "Sales": "50", "Profit": "10", "Units": "1"},
    ]
    cols = [
        ColumnDescriptor("Region", ColumnKind.CATEGORICAL, 0),
        ColumnDescriptor("Day", ColumnKind.TEMPORAL, 1),
        ColumnDescriptor("Sales", ColumnKind.NUMERIC, 2),
        ColumnDescriptor("Profit", ColumnKind.NUMERIC, 3),
        ColumnDescriptor("Units", ColumnKind.NUMERIC, 4),
    ]
    return Table(rows=rows, columns=cols)
