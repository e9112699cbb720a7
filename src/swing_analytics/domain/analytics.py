from dataclasses import dataclass, field
from enum import StrEnum


class TrendDirection(StrEnum):
    IMPROVING = "improving"
    DECLINING = "declining"
    STABLE = "stable"


@dataclass(frozen=True)
class SwingFilter:
    min_exit_velocity: float | None = None
    max_exit_velocity: float | None = None
    min_launch_angle: float | None = None
    max_launch_angle: float | None = None
    min_pitch_speed: float | None = None
    max_pitch_speed: float | None = None
    strike_zone: int | None = None


@dataclass(frozen=True)
class PlayerSwingSummary:
    player_id: int
    total_swings: int
    average_exit_velocity: float
    average_launch_angle: float
    average_distance: float
    best_exit_velocity: float
    sweet_spot_swings: int
    sessions_count: int


@dataclass(frozen=True)
class SessionComparison:
    session_id: int
    total_swings: int
    average_exit_velocity: float
    average_launch_angle: float
    average_distance: float
    best_exit_velocity: float
    sweet_spot_swings: int


@dataclass(frozen=True)
class SessionTrendPoint:
    session_id: int
    session_date: str
    average: float
    best: float
    count: int


@dataclass(frozen=True)
class PlayerTrend:
    player_id: int
    metric: str
    days: int
    direction: TrendDirection
    percentage_change: float
    sessions_analyzed: int
    points: tuple[SessionTrendPoint, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class ProgressPrediction:
    current_average: float
    goal_value: float
    sessions_to_goal: int
    estimated_date: str
    weekly_improvement_rate: float


@dataclass(frozen=True)
class PlayerProgress:
    player_id: int
    metric: str
    goal_value: float
    points: tuple[SessionTrendPoint, ...] = field(default_factory=tuple)
    prediction: ProgressPrediction | None = None
