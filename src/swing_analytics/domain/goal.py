from dataclasses import dataclass
from enum import StrEnum

from swing_analytics.domain.instrument import SwingInstrumentType


class GoalType(StrEnum):
    AVG_EXIT_VELOCITY = "avg_ev"
    MAX_EXIT_VELOCITY = "max_ev"
    AVG_BAT_SPEED = "avg_bs"
    MAX_BAT_SPEED = "max_bs"

    @property
    def instrument(self) -> SwingInstrumentType:
        if self in (GoalType.AVG_BAT_SPEED, GoalType.MAX_BAT_SPEED):
            return SwingInstrumentType.BAT_TRACKER
        return SwingInstrumentType.BALL_TRACKER


class GoalStatus(StrEnum):
    ACTIVE = "active"
    ACHIEVED = "achieved"
    MISSED = "missed"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class PlayerGoal:
    player_id: int
    goal_type: GoalType
    target_value: float
    start_date: str
    end_date: str
    status: GoalStatus = GoalStatus.ACTIVE
    achieved_date: str | None = None
    achieved_session_id: int | None = None
    notes: str | None = None
    id: int | None = None
    created_at: str | None = None
