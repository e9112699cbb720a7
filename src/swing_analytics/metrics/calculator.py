"""Per-session derived metrics for each instrument family.

Every function here takes an already-materialized set of records for one
session and returns a fresh result; nothing is cached or shared between calls.
"""

from collections.abc import Sequence

from swing_analytics.benchmarks import BenchmarkTable, get_benchmarks_for_level
from swing_analytics.domain.instrument import SwingInstrumentType
from swing_analytics.domain.metrics import BatSpeedMetrics, ExitVelocityMetrics
from swing_analytics.domain.report import MetricSnapshot
from swing_analytics.domain.swing import BallSwingRecord, BatSwingRecord
from swing_analytics.exceptions import NoDataError
from swing_analytics.metrics.grading import grade
from swing_analytics.metrics.scouting import calculate_grade
from swing_analytics.metrics.stats import mean, percentile

TOP_BAT_SPEED_FRACTION = 0.90
TOP_EXIT_VELOCITY_FRACTION = 0.92
BARREL_EV_FRACTION = 0.90
BARREL_MIN_LAUNCH_ANGLE = 8.0
BARREL_MAX_LAUNCH_ANGLE = 25.0
STRIKE_ZONES = range(1, 14)


def calculate_bat_speed_metrics(
    records: Sequence[BatSwingRecord],
    level: str | None,
    *,
    table: BenchmarkTable | None = None,
    session_id: int | None = None,
) -> BatSpeedMetrics:
    if not records:
        raise NoDataError(SwingInstrumentType.BAT_TRACKER, session_id)

    bench = get_benchmarks_for_level(level, table)
    bat_speeds = [r.bat_speed for r in records]

    avg_bat_speed = mean(bat_speeds)
    top_10 = percentile(bat_speeds, TOP_BAT_SPEED_FRACTION)
    avg_attack_angle_top_10 = mean(r.attack_angle for r in records if r.bat_speed >= top_10)
    avg_time_to_contact = mean(r.time_to_contact for r in records)

    bs_range = bench.bat_speed_range
    bs_average = bs_range.average if bs_range else None
    bs_upper = bs_range.upper if bs_range else None

    return BatSpeedMetrics(
        level=bench.level,
        avg_bat_speed=avg_bat_speed,
        top_10_percent_bat_speed=top_10,
        max_bat_speed=max(bat_speeds),
        avg_attack_angle=mean(r.attack_angle for r in records),
        avg_attack_angle_top_10=avg_attack_angle_top_10,
        avg_time_to_contact=avg_time_to_contact,
        data_points=len(records),
        grades={
            "avg_bat_speed": grade(avg_bat_speed, bench.avg_bat_speed),
            "top_10_percent_bat_speed": grade(top_10, bench.bat_speed_90th),
            "attack_angle": grade(avg_attack_angle_top_10, bench.avg_attack_angle),
            "time_to_contact": grade(avg_time_to_contact, bench.avg_time_to_contact, lower_is_better=True),
        },
        scouting_grades={
            "avg_bat_speed": calculate_grade(avg_bat_speed, bs_average, bs_upper),
            "top_10_percent_bat_speed": calculate_grade(top_10, bs_average, bs_upper),
        },
        benchmark={
            "avg_bat_speed": bench.avg_bat_speed,
            "bat_speed_90th": bench.bat_speed_90th,
            "avg_attack_angle": bench.avg_attack_angle,
            "avg_time_to_contact": bench.avg_time_to_contact,
        },
    )


def barrel_threshold(records: Sequence[BallSwingRecord]) -> float:
    """90% of the session's hardest-hit ball; 0.0 when there are no records."""
    if not records:
        return 0.0
    return BARREL_EV_FRACTION * max(r.exit_velocity for r in records)


def is_barrel(record: BallSwingRecord, threshold: float) -> bool:
    if record.launch_angle is None:
        return False
    return (
        record.exit_velocity >= threshold
        and BARREL_MIN_LAUNCH_ANGLE <= record.launch_angle <= BARREL_MAX_LAUNCH_ANGLE
    )


def _strike_zone_counts(records: Sequence[BallSwingRecord]) -> dict[int, int]:
    counts: dict[int, int] = {}
    for r in records:
        if r.strike_zone is not None and r.strike_zone in STRIKE_ZONES:
            counts[r.strike_zone] = counts.get(r.strike_zone, 0) + 1
    return {zone: counts[zone] for zone in sorted(counts) if counts[zone] > 0}


def _hot_zone_exit_velocities(records: Sequence[BallSwingRecord]) -> dict[int, float]:
    by_zone: dict[int, list[float]] = {}
    for r in records:
        if r.strike_zone is not None and r.strike_zone in STRIKE_ZONES:
            by_zone.setdefault(r.strike_zone, []).append(r.exit_velocity)
    return {zone: mean(by_zone[zone]) for zone in sorted(by_zone)}


def calculate_exit_velocity_metrics(
    records: Sequence[BallSwingRecord],
    level: str | None,
    *,
    table: BenchmarkTable | None = None,
    session_id: int | None = None,
) -> ExitVelocityMetrics:
    valid = [r for r in records if r.exit_velocity > 0]
    if not valid:
        raise NoDataError(SwingInstrumentType.BALL_TRACKER, session_id)

    bench = get_benchmarks_for_level(level, table)
    exit_velocities = [r.exit_velocity for r in valid]

    avg_ev = mean(exit_velocities)
    top_8 = percentile(exit_velocities, TOP_EXIT_VELOCITY_FRACTION)
    top_8_records = [r for r in valid if r.exit_velocity >= top_8]

    threshold = barrel_threshold(valid)
    barrel_count = sum(1 for r in valid if is_barrel(r, threshold))
    barrel_percentage = round(100 * barrel_count / len(valid), 1)

    avg_la_top_8 = mean(r.launch_angle for r in top_8_records if r.launch_angle is not None)
    avg_distance_top_8 = mean(r.distance for r in top_8_records if r.distance is not None)
    # Non-positive angles are excluded here only; the top-8% subset keeps them.
    total_avg_la = mean(r.launch_angle for r in valid if r.launch_angle is not None and r.launch_angle > 0)

    ev_range = bench.exit_velocity_range
    ev_average = ev_range.average if ev_range else None
    ev_upper = ev_range.upper if ev_range else None

    return ExitVelocityMetrics(
        level=bench.level,
        avg_exit_velocity=avg_ev,
        max_exit_velocity=max(exit_velocities),
        top_8_percent_exit_velocity=top_8,
        barrel_threshold=threshold,
        barrel_count=barrel_count,
        barrel_percentage=barrel_percentage,
        avg_launch_angle_top_8=avg_la_top_8,
        avg_distance_top_8=avg_distance_top_8,
        total_avg_launch_angle=total_avg_la,
        avg_distance=mean(r.distance for r in valid if r.distance is not None),
        avg_pitch_speed=mean(r.pitch_speed for r in valid if r.pitch_speed is not None),
        top_8_count=len(top_8_records),
        data_points=len(valid),
        strike_zone_counts=_strike_zone_counts(top_8_records),
        hot_zone_exit_velocities=_hot_zone_exit_velocities(valid),
        grades={
            "avg_exit_velocity": grade(avg_ev, bench.avg_exit_velocity, special_ev=True),
            "top_8_percent_exit_velocity": grade(top_8, bench.top_8th_exit_velocity, special_ev=True),
            "launch_angle_top_8": grade(avg_la_top_8, bench.hard_hit_launch_angle),
            "total_avg_launch_angle": grade(total_avg_la, bench.avg_launch_angle),
        },
        scouting_grades={
            "avg_exit_velocity": calculate_grade(avg_ev, ev_average, ev_upper),
            "top_8_percent_exit_velocity": calculate_grade(top_8, ev_average, ev_upper),
        },
        benchmark={
            "avg_exit_velocity": bench.avg_exit_velocity,
            "top_8th_exit_velocity": bench.top_8th_exit_velocity,
            "avg_launch_angle": bench.avg_launch_angle,
            "hard_hit_launch_angle": bench.hard_hit_launch_angle,
        },
    )


def snapshot_bat_speeds(records: Sequence[BatSwingRecord]) -> MetricSnapshot:
    if not records:
        return MetricSnapshot()
    speeds = [r.bat_speed for r in records]
    return MetricSnapshot(avg_bat_speed=mean(speeds), top_bat_speed=max(speeds))


def snapshot_exit_velocities(records: Sequence[BallSwingRecord]) -> MetricSnapshot:
    velocities = [r.exit_velocity for r in records if r.exit_velocity > 0]
    if not velocities:
        return MetricSnapshot()
    return MetricSnapshot(avg_exit_velocity=mean(velocities), top_exit_velocity=max(velocities))
