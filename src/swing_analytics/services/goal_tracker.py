import datetime
import logging
from collections.abc import Sequence
from dataclasses import replace

from swing_analytics.domain.goal import GoalStatus, GoalType, PlayerGoal
from swing_analytics.domain.session import Session
from swing_analytics.domain.swing import BallSwingRecord, BatSwingRecord, SwingRecord
from swing_analytics.exceptions import GoalNotFoundError, GoalValidationError
from swing_analytics.metrics.stats import mean
from swing_analytics.repos.protocols import PlayerGoalRepo

logger = logging.getLogger(__name__)


def _parse_date(value: str, label: str) -> datetime.date:
    try:
        return datetime.date.fromisoformat(value)
    except ValueError:
        raise GoalValidationError(f"invalid {label} '{value}', expected YYYY-MM-DD") from None


def session_goal_values(records: Sequence[SwingRecord]) -> dict[GoalType, float]:
    """Goal-comparable values for one session; only the session's own instrument is present."""
    exit_velocities = [r.exit_velocity for r in records if isinstance(r, BallSwingRecord)]
    bat_speeds = [r.bat_speed for r in records if isinstance(r, BatSwingRecord)]
    values: dict[GoalType, float] = {}
    if exit_velocities:
        values[GoalType.AVG_EXIT_VELOCITY] = mean(exit_velocities)
        values[GoalType.MAX_EXIT_VELOCITY] = max(exit_velocities)
    if bat_speeds:
        values[GoalType.AVG_BAT_SPEED] = mean(bat_speeds)
        values[GoalType.MAX_BAT_SPEED] = max(bat_speeds)
    return values


class GoalTracker:
    """Stores player goals and marks them achieved as sessions come in."""

    def __init__(self, goal_repo: PlayerGoalRepo) -> None:
        self._goal_repo = goal_repo

    def create(
        self,
        player_id: int,
        goal_type: GoalType,
        target_value: float,
        start_date: str,
        end_date: str,
        notes: str | None = None,
    ) -> PlayerGoal:
        if target_value <= 0:
            raise GoalValidationError(f"target value must be positive, got {target_value}")
        if _parse_date(start_date, "start date") >= _parse_date(end_date, "end date"):
            raise GoalValidationError("end date must be after start date")
        goal = PlayerGoal(
            player_id=player_id,
            goal_type=goal_type,
            target_value=target_value,
            start_date=start_date,
            end_date=end_date,
            notes=notes,
        )
        goal_id = self._goal_repo.insert(goal)
        logger.info("Created %s goal %d for player %d (target %.2f)", goal_type, goal_id, player_id, target_value)
        return replace(goal, id=goal_id)

    def goals_for(self, player_id: int, status: GoalStatus | None = None) -> list[PlayerGoal]:
        return self._goal_repo.get_by_player(player_id, status=status)

    def cancel(self, goal_id: int) -> None:
        if not self._goal_repo.update_status(goal_id, GoalStatus.CANCELLED):
            raise GoalNotFoundError(goal_id)

    def check_session(self, session: Session, records: Sequence[SwingRecord]) -> list[PlayerGoal]:
        """Mark every active goal the session reaches as achieved and return those goals."""
        assert session.id is not None
        active = self._goal_repo.get_by_player(session.player_id, status=GoalStatus.ACTIVE)
        if not active:
            return []

        values = session_goal_values(records)
        achieved: list[PlayerGoal] = []
        for goal in active:
            assert goal.id is not None
            current = values.get(goal.goal_type)
            if current is None or current < goal.target_value:
                continue
            self._goal_repo.mark_achieved(goal.id, session.session_date, session.id)
            logger.info(
                "Goal %d achieved: player %d reached %.2f %s (actual %.2f)",
                goal.id,
                session.player_id,
                goal.target_value,
                goal.goal_type,
                current,
            )
            achieved.append(
                replace(
                    goal,
                    status=GoalStatus.ACHIEVED,
                    achieved_date=session.session_date,
                    achieved_session_id=session.id,
                )
            )
        return achieved
