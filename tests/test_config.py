import os
from pathlib import Path

import pytest
from config import ConfigurationSet

from swing_analytics.config import create_config, load_settings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove all SWING__ env vars so tests are isolated from the shell."""
    for key in list(os.environ):
        if key.startswith("SWING__"):
            monkeypatch.delenv(key)


def test_create_config_returns_defaults() -> None:
    cfg = create_config(yaml_path="/nonexistent/swing.yaml")
    assert isinstance(cfg, ConfigurationSet)
    assert cfg["db.path"] == "~/.local/share/swing/swing.db"
    assert cfg["benchmarks.path"] == ""
    assert cfg["benchmarks.default_level"] == "High School"


def test_yaml_overrides_defaults(tmp_path: Path) -> None:
    yaml_file = tmp_path / "swing.yaml"
    yaml_file.write_text("db:\n  path: /data/swing.db\nbenchmarks:\n  default_level: College\n")
    cfg = create_config(yaml_path=str(yaml_file))
    assert cfg["db.path"] == "/data/swing.db"
    assert cfg["benchmarks.default_level"] == "College"
    assert cfg["benchmarks.path"] == ""


def test_env_overrides_yaml(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    yaml_file = tmp_path / "swing.yaml"
    yaml_file.write_text("db:\n  path: /data/swing.db\n")
    monkeypatch.setenv("SWING__DB__PATH", "/env/swing.db")

    cfg = create_config(yaml_path=str(yaml_file))
    assert cfg["db.path"] == "/env/swing.db"


def test_custom_defaults() -> None:
    cfg = create_config(
        yaml_path="/nonexistent/swing.yaml",
        defaults={"db": {"path": "x.db"}, "benchmarks": {"path": "", "default_level": "Indy"}},
    )
    assert cfg["benchmarks.default_level"] == "Indy"


class TestLoadSettings:
    def test_defaults(self) -> None:
        settings = load_settings(create_config(yaml_path="/nonexistent/swing.yaml"))
        assert settings.db_path == Path("~/.local/share/swing/swing.db").expanduser()
        assert settings.benchmarks_path is None
        assert settings.default_level == "High School"

    def test_benchmarks_path(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SWING__BENCHMARKS__PATH", str(tmp_path / "bench.yaml"))
        settings = load_settings(create_config(yaml_path="/nonexistent/swing.yaml"))
        assert settings.benchmarks_path == tmp_path / "bench.yaml"
