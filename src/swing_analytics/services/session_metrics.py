import logging

from swing_analytics.benchmarks import BenchmarkTable
from swing_analytics.domain.instrument import SwingInstrumentType
from swing_analytics.domain.metrics import SessionMetrics
from swing_analytics.domain.session import Session
from swing_analytics.exceptions import SessionNotFoundError
from swing_analytics.metrics.calculator import calculate_bat_speed_metrics, calculate_exit_velocity_metrics
from swing_analytics.repos.protocols import BallSwingRepo, BatSwingRepo, PlayerRepo, SessionRepo

logger = logging.getLogger(__name__)


class SessionMetricsService:
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

    def level_for(self, session: Session) -> str | None:
        """Session level, then the player's level; None leaves the choice to the benchmark table."""
        if session.player_level:
            return session.player_level
        player = self._player_repo.get_by_id(session.player_id)
        return player.level if player is not None else None

    def compute(self, session_id: int) -> SessionMetrics:
        session = self._session_repo.get_by_id(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        return self.compute_for(session)

    def compute_for(self, session: Session) -> SessionMetrics:
        assert session.id is not None
        level = self.level_for(session)
        logger.debug("Computing %s metrics for session %d at level %s", session.instrument, session.id, level)
        if session.instrument is SwingInstrumentType.BAT_TRACKER:
            return calculate_bat_speed_metrics(
                self._bat_swing_repo.get_by_session(session.id), level, table=self._table, session_id=session.id
            )
        return calculate_exit_velocity_metrics(
            self._ball_swing_repo.get_by_session(session.id), level, table=self._table, session_id=session.id
        )
