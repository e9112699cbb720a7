import sqlite3
from collections.abc import Sequence
from dataclasses import dataclass

import pytest

from swing_analytics.domain.instrument import SwingInstrumentType
from swing_analytics.domain.player import Player
from swing_analytics.domain.session import Session
from swing_analytics.domain.swing import BallSwingRecord, BatSwingRecord
from swing_analytics.repos.ball_swing_repo import SqliteBallSwingRepo
from swing_analytics.repos.bat_swing_repo import SqliteBatSwingRepo
from swing_analytics.repos.player_repo import SqlitePlayerRepo
from swing_analytics.repos.session_repo import SqliteSessionRepo


@dataclass
class Repos:
    conn: sqlite3.Connection
    players: SqlitePlayerRepo
    sessions: SqliteSessionRepo
    bat_swings: SqliteBatSwingRepo
    ball_swings: SqliteBallSwingRepo

    def player(self, name: str = "Test Hitter", level: str | None = None) -> int:
        return self.players.insert(Player(name=name, level=level))

    def bat_session(
        self,
        player_id: int,
        date: str,
        swings: Sequence[tuple[float, float, float]],
        level: str | None = None,
    ) -> int:
        session_id = self.sessions.insert(
            Session(
                player_id=player_id, session_date=date, instrument=SwingInstrumentType.BAT_TRACKER, player_level=level
            )
        )
        self.bat_swings.insert_many(
            session_id, [BatSwingRecord(bat_speed=b, attack_angle=a, time_to_contact=t) for b, a, t in swings]
        )
        return session_id

    def ball_session(
        self,
        player_id: int,
        date: str,
        swings: Sequence[BallSwingRecord],
        level: str | None = None,
    ) -> int:
        session_id = self.sessions.insert(
            Session(
                player_id=player_id, session_date=date, instrument=SwingInstrumentType.BALL_TRACKER, player_level=level
            )
        )
        self.ball_swings.insert_many(session_id, swings)
        return session_id


@pytest.fixture
def repos(conn: sqlite3.Connection) -> Repos:
    return Repos(
        conn=conn,
        players=SqlitePlayerRepo(conn),
        sessions=SqliteSessionRepo(conn),
        bat_swings=SqliteBatSwingRepo(conn),
        ball_swings=SqliteBallSwingRepo(conn),
    )
