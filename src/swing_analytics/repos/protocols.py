from collections.abc import Sequence
from typing import Protocol

from swing_analytics.domain.analytics import SwingFilter
from swing_analytics.domain.goal import GoalStatus, PlayerGoal
from swing_analytics.domain.instrument import SwingInstrumentType
from swing_analytics.domain.load_log import LoadLog
from swing_analytics.domain.player import Player
from swing_analytics.domain.session import Session
from swing_analytics.domain.swing import BallSwingRecord, BatSwingRecord


class PlayerRepo(Protocol):
    def insert(self, player: Player) -> int: ...

    def get_by_id(self, player_id: int) -> Player | None: ...

    def all(self) -> list[Player]: ...


class SessionRepo(Protocol):
    def insert(self, session: Session) -> int: ...

    def get_by_id(self, session_id: int) -> Session | None: ...

    def get_by_ids(self, session_ids: Sequence[int]) -> list[Session]: ...

    def get_by_player(
        self,
        player_id: int,
        *,
        instrument: SwingInstrumentType | None = None,
        since: str | None = None,
    ) -> list[Session]: ...


class BatSwingRepo(Protocol):
    def insert_many(self, session_id: int, records: Sequence[BatSwingRecord]) -> int: ...

    def get_by_session(self, session_id: int) -> list[BatSwingRecord]: ...


class BallSwingRepo(Protocol):
    def insert_many(self, session_id: int, records: Sequence[BallSwingRecord]) -> int: ...

    def get_by_session(self, session_id: int, swing_filter: SwingFilter | None = None) -> list[BallSwingRecord]: ...

    def get_by_player(self, player_id: int) -> list[BallSwingRecord]: ...


class LoadLogRepo(Protocol):
    def insert(self, log: LoadLog) -> int: ...

    def get_recent(self, limit: int = 20) -> list[LoadLog]: ...


class PlayerGoalRepo(Protocol):
    def insert(self, goal: PlayerGoal) -> int: ...

    def get_by_id(self, goal_id: int) -> PlayerGoal | None: ...

    def get_by_player(self, player_id: int, *, status: GoalStatus | None = None) -> list[PlayerGoal]: ...

    def mark_achieved(self, goal_id: int, achieved_date: str, session_id: int) -> None: ...

    def update_status(self, goal_id: int, status: GoalStatus) -> bool: ...
