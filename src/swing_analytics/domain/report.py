from dataclasses import dataclass, field
from typing import Any

from swing_analytics.domain.instrument import SwingInstrumentType
from swing_analytics.domain.metrics import BatSpeedMetrics, ExitVelocityMetrics


@dataclass(frozen=True)
class MetricSnapshot:
    avg_bat_speed: float | None = None
    top_bat_speed: float | None = None
    avg_exit_velocity: float | None = None
    top_exit_velocity: float | None = None

    def to_dict(self) -> dict[str, float | None]:
        return {
            "avg_bat_speed": self.avg_bat_speed,
            "top_bat_speed": self.top_bat_speed,
            "avg_exit_velocity": self.avg_exit_velocity,
            "top_exit_velocity": self.top_exit_velocity,
        }


@dataclass(frozen=True)
class SessionHistoryEntry:
    session_id: int
    session_date: str
    session_type: SwingInstrumentType
    metrics: MetricSnapshot

    def to_dict(self) -> dict[str, Any]:
        return {
            "session_id": self.session_id,
            "session_date": self.session_date,
            "session_type": str(self.session_type),
            "metrics": self.metrics.to_dict(),
        }


@dataclass(frozen=True)
class SessionTrend:
    session_id: int
    session_date: str
    deltas: MetricSnapshot

    def to_dict(self) -> dict[str, Any]:
        return {
            "session_id": self.session_id,
            "session_date": self.session_date,
            "trends": self.deltas.to_dict(),
        }


@dataclass(frozen=True)
class SessionReport:
    session_id: int
    session_date: str
    session_type: SwingInstrumentType
    player_id: int
    player_name: str
    level: str
    summary: str
    bat_speed: BatSpeedMetrics | None = None
    exit_velocity: ExitVelocityMetrics | None = None
    history: tuple[SessionHistoryEntry, ...] = field(default_factory=tuple)
    trends: tuple[SessionTrend, ...] = field(default_factory=tuple)

    @property
    def has_metrics(self) -> bool:
        return self.bat_speed is not None or self.exit_velocity is not None

    def to_dict(self) -> dict[str, Any]:
        return {
            "session": {"id": self.session_id, "date": self.session_date, "type": str(self.session_type)},
            "player": {"id": self.player_id, "name": self.player_name, "level": self.level},
            "metrics": {
                "bat_speed": self.bat_speed.to_dict() if self.bat_speed is not None else None,
                "exit_velocity": self.exit_velocity.to_dict() if self.exit_velocity is not None else None,
            },
            "history": [entry.to_dict() for entry in self.history],
            "trends": [trend.to_dict() for trend in self.trends],
            "summary": self.summary,
        }
