from dataclasses import dataclass, field
from typing import Any

from swing_analytics.domain.grade import LetterGrade


def _round(value: float | None, digits: int) -> float | None:
    if value is None:
        return None
    return round(value, digits)


@dataclass(frozen=True)
class BatSpeedMetrics:
    level: str
    avg_bat_speed: float
    top_10_percent_bat_speed: float
    max_bat_speed: float
    avg_attack_angle: float
    avg_attack_angle_top_10: float
    avg_time_to_contact: float
    data_points: int
    grades: dict[str, LetterGrade] = field(default_factory=dict)
    scouting_grades: dict[str, int] = field(default_factory=dict)
    benchmark: dict[str, float | None] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "level": self.level,
            "avg_bat_speed": _round(self.avg_bat_speed, 2),
            "top_10_percent_bat_speed": _round(self.top_10_percent_bat_speed, 2),
            "max_bat_speed": _round(self.max_bat_speed, 2),
            "avg_attack_angle": _round(self.avg_attack_angle, 2),
            "avg_attack_angle_top_10": _round(self.avg_attack_angle_top_10, 2),
            "avg_time_to_contact": _round(self.avg_time_to_contact, 3),
            "grades": {k: str(v) for k, v in self.grades.items()},
            "scouting_grades": dict(self.scouting_grades),
            "benchmark": dict(self.benchmark),
            "data_points": self.data_points,
        }


@dataclass(frozen=True)
class ExitVelocityMetrics:
    level: str
    avg_exit_velocity: float
    max_exit_velocity: float
    top_8_percent_exit_velocity: float
    barrel_threshold: float
    barrel_count: int
    barrel_percentage: float
    avg_launch_angle_top_8: float
    avg_distance_top_8: float
    total_avg_launch_angle: float
    avg_distance: float
    avg_pitch_speed: float
    top_8_count: int
    data_points: int
    strike_zone_counts: dict[int, int] = field(default_factory=dict)
    hot_zone_exit_velocities: dict[int, float] = field(default_factory=dict)
    grades: dict[str, LetterGrade] = field(default_factory=dict)
    scouting_grades: dict[str, int] = field(default_factory=dict)
    benchmark: dict[str, float | None] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "level": self.level,
            "avg_exit_velocity": _round(self.avg_exit_velocity, 2),
            "max_exit_velocity": _round(self.max_exit_velocity, 2),
            "top_8_percent_exit_velocity": _round(self.top_8_percent_exit_velocity, 2),
            "barrel_threshold": _round(self.barrel_threshold, 2),
            "barrel_count": self.barrel_count,
            "barrel_percentage": _round(self.barrel_percentage, 1),
            "avg_launch_angle_top_8": _round(self.avg_launch_angle_top_8, 2),
            "avg_distance_top_8": _round(self.avg_distance_top_8, 1),
            "total_avg_launch_angle": _round(self.total_avg_launch_angle, 2),
            "avg_distance": _round(self.avg_distance, 1),
            "avg_pitch_speed": _round(self.avg_pitch_speed, 2),
            "top_8_count": self.top_8_count,
            "strike_zone_counts": dict(self.strike_zone_counts),
            "hot_zone_exit_velocities": {k: _round(v, 1) for k, v in self.hot_zone_exit_velocities.items()},
            "grades": {k: str(v) for k, v in self.grades.items()},
            "scouting_grades": dict(self.scouting_grades),
            "benchmark": dict(self.benchmark),
            "data_points": self.data_points,
        }


type SessionMetrics = BatSpeedMetrics | ExitVelocityMetrics
