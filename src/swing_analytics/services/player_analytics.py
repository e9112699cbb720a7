import datetime
import logging
import math
from collections.abc import Sequence
from itertools import pairwise

from swing_analytics.domain.analytics import (
    PlayerProgress,
    PlayerSwingSummary,
    PlayerTrend,
    ProgressPrediction,
    SessionComparison,
    SessionTrendPoint,
    SwingFilter,
    TrendDirection,
)
from swing_analytics.domain.instrument import SwingInstrumentType
from swing_analytics.domain.session import Session
from swing_analytics.domain.swing import BallSwingRecord
from swing_analytics.metrics.stats import mean
from swing_analytics.repos.protocols import BallSwingRepo, SessionRepo

logger = logging.getLogger(__name__)

SWEET_SPOT_MIN_LAUNCH_ANGLE = 25.0
SWEET_SPOT_MAX_LAUNCH_ANGLE = 35.0
SWEET_SPOT_MIN_EXIT_VELOCITY = 90.0

TREND_METRICS = ("exit_velocity", "launch_angle", "distance")

PROGRESS_RECENT_SESSIONS = 3
DAYS_PER_SESSION = 7


def is_sweet_spot(record: BallSwingRecord) -> bool:
    if record.launch_angle is None:
        return False
    return (
        SWEET_SPOT_MIN_LAUNCH_ANGLE <= record.launch_angle <= SWEET_SPOT_MAX_LAUNCH_ANGLE
        and record.exit_velocity >= SWEET_SPOT_MIN_EXIT_VELOCITY
    )


def _check_metric(metric: str) -> None:
    if metric not in TREND_METRICS:
        raise ValueError(f"Unknown trend metric '{metric}', expected one of {', '.join(TREND_METRICS)}")


def _present(values: Sequence[float | None]) -> list[float]:
    return [v for v in values if v is not None]


class PlayerAnalyticsService:
    """Cross-session views over a player's ball-tracker swings."""

    def __init__(self, session_repo: SessionRepo, ball_swing_repo: BallSwingRepo) -> None:
        self._session_repo = session_repo
        self._ball_swing_repo = ball_swing_repo

    def summarize(self, player_id: int) -> PlayerSwingSummary:
        swings = self._ball_swing_repo.get_by_player(player_id)
        return PlayerSwingSummary(
            player_id=player_id,
            total_swings=len(swings),
            average_exit_velocity=mean(s.exit_velocity for s in swings),
            average_launch_angle=mean(_present([s.launch_angle for s in swings])),
            average_distance=mean(_present([s.distance for s in swings])),
            best_exit_velocity=max((s.exit_velocity for s in swings), default=0.0),
            sweet_spot_swings=sum(1 for s in swings if is_sweet_spot(s)),
            sessions_count=len({s.session_id for s in swings}),
        )

    def compare_sessions(
        self,
        session_ids: Sequence[int],
        swing_filter: SwingFilter | None = None,
    ) -> dict[int, SessionComparison]:
        comparisons: dict[int, SessionComparison] = {}
        for session in self._session_repo.get_by_ids(session_ids):
            assert session.id is not None
            swings = self._ball_swing_repo.get_by_session(session.id, swing_filter)
            comparisons[session.id] = SessionComparison(
                session_id=session.id,
                total_swings=len(swings),
                average_exit_velocity=mean(s.exit_velocity for s in swings),
                average_launch_angle=mean(_present([s.launch_angle for s in swings])),
                average_distance=mean(_present([s.distance for s in swings])),
                best_exit_velocity=max((s.exit_velocity for s in swings), default=0.0),
                sweet_spot_swings=sum(1 for s in swings if is_sweet_spot(s)),
            )
        return comparisons

    def _session_points(self, sessions: Sequence[Session], metric: str) -> list[SessionTrendPoint]:
        points: list[SessionTrendPoint] = []
        for session in sessions:
            assert session.id is not None
            swings = self._ball_swing_repo.get_by_session(session.id)
            values = _present([getattr(s, metric) for s in swings])
            points.append(
                SessionTrendPoint(
                    session_id=session.id,
                    session_date=session.session_date,
                    average=round(mean(values), 2),
                    best=round(max(values, default=0.0), 2),
                    count=len(values),
                )
            )
        return points

    def trend(
        self,
        player_id: int,
        metric: str = "exit_velocity",
        days: int = 30,
        *,
        today: datetime.date | None = None,
    ) -> PlayerTrend:
        _check_metric(metric)

        start = (today or datetime.date.today()) - datetime.timedelta(days=days)
        sessions = self._session_repo.get_by_player(
            player_id,
            instrument=SwingInstrumentType.BALL_TRACKER,
            since=start.isoformat(),
        )

        points = self._session_points(sessions, metric)
        with_data = [p for p in points if p.count > 0]
        direction = TrendDirection.STABLE
        change = 0.0
        if len(with_data) >= 2 and with_data[0].average != 0:
            first, last = with_data[0].average, with_data[-1].average
            change = round((last - first) / first * 100, 2)
            if change > 0:
                direction = TrendDirection.IMPROVING
            elif change < 0:
                direction = TrendDirection.DECLINING
        logger.debug("Trend for player %d on %s: %s (%.2f%%)", player_id, metric, direction, change)

        return PlayerTrend(
            player_id=player_id,
            metric=metric,
            days=days,
            direction=direction,
            percentage_change=change,
            sessions_analyzed=len(with_data),
            points=tuple(points),
        )

    def progress(
        self,
        player_id: int,
        metric: str = "exit_velocity",
        goal_value: float = 90.0,
        *,
        today: datetime.date | None = None,
    ) -> PlayerProgress:
        """Per-session progress on ``metric`` plus a projection toward ``goal_value``.

        The projection averages the session-to-session improvement across the most
        recent sessions and assumes one session per week. It is omitted with fewer
        than three sessions of data or when the metric is not improving.
        """
        _check_metric(metric)
        sessions = self._session_repo.get_by_player(player_id, instrument=SwingInstrumentType.BALL_TRACKER)
        points = [p for p in self._session_points(sessions, metric) if p.count > 0]

        prediction = None
        if len(points) >= PROGRESS_RECENT_SESSIONS:
            recent = points[-PROGRESS_RECENT_SESSIONS:]
            improvement = sum(b.average - a.average for a, b in pairwise(recent)) / (len(recent) - 1)
            current = points[-1].average
            if improvement > 0:
                # Already at or past the goal projects to zero sessions.
                sessions_to_goal = max(0, math.ceil((goal_value - current) / improvement))
                estimated = (today or datetime.date.today()) + datetime.timedelta(
                    days=sessions_to_goal * DAYS_PER_SESSION
                )
                prediction = ProgressPrediction(
                    current_average=current,
                    goal_value=goal_value,
                    sessions_to_goal=sessions_to_goal,
                    estimated_date=estimated.isoformat(),
                    weekly_improvement_rate=round(improvement, 2),
                )
        logger.debug("Progress for player %d on %s over %d sessions: %s", player_id, metric, len(points), prediction)

        return PlayerProgress(
            player_id=player_id,
            metric=metric,
            goal_value=goal_value,
            points=tuple(points),
            prediction=prediction,
        )
