import functools
import logging
from pathlib import Path
from typing import Any

import yaml

from swing_analytics.domain.benchmark import BenchmarkEntry
from swing_analytics.exceptions import BenchmarkConfigError

logger = logging.getLogger(__name__)

BUNDLED_BENCHMARKS_PATH = Path(__file__).parent / "benchmarks.yaml"

_BENCHMARK_FIELDS = (
    "avg_exit_velocity",
    "top_8th_exit_velocity",
    "avg_launch_angle",
    "hard_hit_launch_angle",
    "avg_bat_speed",
    "bat_speed_90th",
    "avg_time_to_contact",
    "avg_attack_angle",
)


class BenchmarkTable:
    """Read-only lookup of per-level reference values."""

    def __init__(
        self,
        entries: dict[str, BenchmarkEntry],
        *,
        default_level: str = "High School",
        aliases: dict[str, str] | None = None,
    ) -> None:
        if default_level not in entries:
            raise BenchmarkConfigError(f"default level '{default_level}' has no benchmark entry")
        for alias, target in (aliases or {}).items():
            if target not in entries:
                raise BenchmarkConfigError(f"alias '{alias}' points to unknown level '{target}'")
        self._entries = dict(entries)
        self._aliases = dict(aliases or {})
        self._default_level = default_level

    @property
    def default_level(self) -> str:
        return self._default_level

    def levels(self) -> list[str]:
        return list(self._entries)

    def is_valid_level(self, level: str) -> bool:
        return level in self._entries or level in self._aliases

    def resolve_level(self, level: str | None) -> str:
        if level is None:
            return self._default_level
        if level in self._entries:
            return level
        if level in self._aliases:
            return self._aliases[level]
        logger.debug("Unknown level %r, falling back to %s", level, self._default_level)
        return self._default_level

    def get(self, level: str | None) -> BenchmarkEntry:
        return self._entries[self.resolve_level(level)]

    def with_default_level(self, level: str) -> "BenchmarkTable":
        if level == self._default_level:
            return self
        return BenchmarkTable(self._entries, default_level=level, aliases=self._aliases)


def _parse_value(raw: Any, level: str, field: str) -> float | None:
    if raw is None:
        return None
    if isinstance(raw, bool) or not isinstance(raw, int | float):
        raise BenchmarkConfigError(f"Level '{level}': '{field}' must be a number, got {raw!r}")
    return float(raw)


def parse_benchmark_table(data: dict[str, Any]) -> BenchmarkTable:
    levels_raw = data.get("levels")
    if not isinstance(levels_raw, dict) or not levels_raw:
        raise BenchmarkConfigError("benchmark table requires a non-empty 'levels' mapping")

    entries: dict[str, BenchmarkEntry] = {}
    for level, values in levels_raw.items():
        level_name = str(level)
        if not isinstance(values, dict):
            raise BenchmarkConfigError(f"Level '{level_name}': expected a mapping of benchmark values")
        unknown = set(values) - set(_BENCHMARK_FIELDS)
        if unknown:
            raise BenchmarkConfigError(f"Level '{level_name}': unrecognized keys {sorted(unknown)}")
        parsed = {f: _parse_value(values.get(f), level_name, f) for f in _BENCHMARK_FIELDS}
        entries[level_name] = BenchmarkEntry(level=level_name, **parsed)

    aliases = {str(k): str(v) for k, v in (data.get("aliases") or {}).items()}
    default_level = str(data.get("default_level", "High School"))
    return BenchmarkTable(entries, default_level=default_level, aliases=aliases)


def load_benchmark_table(path: str | Path) -> BenchmarkTable:
    path = Path(path)
    try:
        data = yaml.safe_load(path.read_text())
    except OSError as exc:
        raise BenchmarkConfigError(f"Cannot read benchmark file {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise BenchmarkConfigError(f"Invalid benchmark YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise BenchmarkConfigError(f"Benchmark file {path} must contain a mapping")
    logger.debug("Loaded benchmark table from %s", path)
    return parse_benchmark_table(data)


@functools.cache
def default_table() -> BenchmarkTable:
    return load_benchmark_table(BUNDLED_BENCHMARKS_PATH)


def get_benchmarks_for_level(level: str | None, table: BenchmarkTable | None = None) -> BenchmarkEntry:
    """Return the benchmark entry for ``level``; unknown levels fall back to the table default."""
    return (table or default_table()).get(level)


def available_levels(table: BenchmarkTable | None = None) -> list[str]:
    return (table or default_table()).levels()


def is_valid_level(level: str, table: BenchmarkTable | None = None) -> bool:
    return (table or default_table()).is_valid_level(level)
