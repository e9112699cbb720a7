from dataclasses import dataclass
from pathlib import Path

from config import ConfigurationSet, config_from_dict, config_from_env, config_from_yaml

_DEFAULTS: dict[str, object] = {
    "db": {
        "path": "~/.local/share/swing/swing.db",
    },
    "benchmarks": {
        "path": "",
        "default_level": "High School",
    },
}


@dataclass(frozen=True)
class AppSettings:
    db_path: Path
    benchmarks_path: Path | None
    default_level: str


def create_config(
    yaml_path: str = "swing.yaml",
    env_prefix: str = "SWING",
    defaults: dict[str, object] | None = None,
) -> ConfigurationSet:
    """Create a layered configuration.

    Priority (highest to lowest): env vars > YAML file > defaults dict.

    Args:
        yaml_path: Path to the YAML config file; a missing file is ignored.
        env_prefix: Prefix for environment variables, e.g. ``SWING__DB__PATH``.
        defaults: Default configuration values.
    """
    if defaults is None:
        defaults = _DEFAULTS

    return ConfigurationSet(
        config_from_env(env_prefix, separator="__", lowercase_keys=True),
        config_from_yaml(yaml_path, read_from_file=True, ignore_missing_paths=True),
        config_from_dict(defaults),
    )


def load_settings(cfg: ConfigurationSet | None = None) -> AppSettings:
    if cfg is None:
        cfg = create_config()
    benchmarks_path = str(cfg["benchmarks.path"]).strip()
    return AppSettings(
        db_path=Path(str(cfg["db.path"])).expanduser(),
        benchmarks_path=Path(benchmarks_path).expanduser() if benchmarks_path else None,
        default_level=str(cfg["benchmarks.default_level"]),
    )
