"""Assemble the full per-session report: metrics, history and session-to-session trends."""

import logging
from collections.abc import Sequence

from swing_analytics.benchmarks import BenchmarkTable, default_table
from swing_analytics.domain.instrument import SwingInstrumentType
from swing_analytics.domain.metrics import BatSpeedMetrics, ExitVelocityMetrics
from swing_analytics.domain.report import MetricSnapshot, SessionHistoryEntry, SessionReport, SessionTrend
from swing_analytics.domain.session import Session
from swing_analytics.exceptions import NoDataError, SessionNotFoundError
from swing_analytics.metrics.calculator import snapshot_bat_speeds, snapshot_exit_velocities
from swing_analytics.repos.protocols import BallSwingRepo, BatSwingRepo, PlayerRepo, SessionRepo
from swing_analytics.services.session_metrics import SessionMetricsService

logger = logging.getLogger(__name__)

_SNAPSHOT_FIELDS = ("avg_bat_speed", "top_bat_speed", "avg_exit_velocity", "top_exit_velocity")


def _delta(current: float | None, previous: float | None) -> float | None:
    if current is None or previous is None:
        return None
    return round(current - previous, 2)


def calculate_session_trends(history: Sequence[SessionHistoryEntry]) -> list[SessionTrend]:
    """One entry per consecutive pair of sessions, keyed by the later session."""
    trends: list[SessionTrend] = []
    for previous, current in zip(history, history[1:]):
        deltas = {
            name: _delta(getattr(current.metrics, name), getattr(previous.metrics, name)) for name in _SNAPSHOT_FIELDS
        }
        trends.append(
            SessionTrend(
                session_id=current.session_id,
                session_date=current.session_date,
                deltas=MetricSnapshot(**deltas),
            )
        )
    return trends


def _bat_summary(metrics: BatSpeedMetrics) -> str:
    return (
        f"Average bat speed {metrics.avg_bat_speed:.1f} mph (grade {metrics.grades['avg_bat_speed']}), "
        f"top 10% {metrics.top_10_percent_bat_speed:.1f} mph over {metrics.data_points} swings."
    )


def _ball_summary(metrics: ExitVelocityMetrics) -> str:
    return (
        f"Average exit velocity {metrics.avg_exit_velocity:.1f} mph "
        f"(grade {metrics.grades['avg_exit_velocity']}), max {metrics.max_exit_velocity:.1f} mph, "
        f"{metrics.barrel_percentage:.1f}% barrels over {metrics.data_points} swings."
    )


class ReportAggregator:
    def __init__(
        self,
        session_repo: SessionRepo,
        player_repo: PlayerRepo,
        bat_swing_repo: BatSwingRepo,
        ball_swing_repo: BallSwingRepo,
        *,
        table: BenchmarkTable | None = None,
    ) -> None:
        self._session_repo = session_repo
        self._player_repo = player_repo
        self._bat_swing_repo = bat_swing_repo
        self._ball_swing_repo = ball_swing_repo
        self._table = table
        self._metrics = SessionMetricsService(
            session_repo, player_repo, bat_swing_repo, ball_swing_repo, table=table
        )

    def aggregate(self, session_id: int) -> SessionReport:
        session = self._session_repo.get_by_id(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        player = self._player_repo.get_by_id(session.player_id)
        table = self._table or default_table()
        level = table.resolve_level(self._metrics.level_for(session))

        bat_speed: BatSpeedMetrics | None = None
        exit_velocity: ExitVelocityMetrics | None = None
        try:
            metrics = self._metrics.compute_for(session)
        except NoDataError as exc:
            logger.warning("Report for session %d has no metrics: %s", session_id, exc)
            summary = f"No {session.instrument.metric_label} data available for this session."
        else:
            if isinstance(metrics, BatSpeedMetrics):
                bat_speed = metrics
                summary = _bat_summary(metrics)
            else:
                exit_velocity = metrics
                summary = _ball_summary(metrics)

        history = self._history(session.player_id)
        return SessionReport(
            session_id=session_id,
            session_date=session.session_date,
            session_type=session.instrument,
            player_id=session.player_id,
            player_name=player.name if player is not None else "Unknown",
            level=level,
            summary=summary,
            bat_speed=bat_speed,
            exit_velocity=exit_velocity,
            history=tuple(history),
            trends=tuple(calculate_session_trends(history)),
        )

    def _history(self, player_id: int) -> list[SessionHistoryEntry]:
        return [self._history_entry(s) for s in self._session_repo.get_by_player(player_id)]

    def _history_entry(self, session: Session) -> SessionHistoryEntry:
        assert session.id is not None
        if session.instrument is SwingInstrumentType.BAT_TRACKER:
            snapshot = snapshot_bat_speeds(self._bat_swing_repo.get_by_session(session.id))
        else:
            snapshot = snapshot_exit_velocities(self._ball_swing_repo.get_by_session(session.id))
        return SessionHistoryEntry(
            session_id=session.id,
            session_date=session.session_date,
            session_type=session.instrument,
            metrics=snapshot,
        )
