import sqlite3
from collections.abc import Sequence

from swing_analytics.domain.analytics import SwingFilter
from swing_analytics.domain.swing import BallSwingRecord

_FILTER_BOUNDS = (
    ("min_exit_velocity", "exit_velocity >= ?"),
    ("max_exit_velocity", "exit_velocity <= ?"),
    ("min_launch_angle", "launch_angle >= ?"),
    ("max_launch_angle", "launch_angle <= ?"),
    ("min_pitch_speed", "pitch_speed >= ?"),
    ("max_pitch_speed", "pitch_speed <= ?"),
    ("strike_zone", "strike_zone = ?"),
)


def _filter_clause(swing_filter: SwingFilter | None) -> tuple[str, list[object]]:
    if swing_filter is None:
        return "", []
    clauses: list[str] = []
    params: list[object] = []
    for attr, clause in _FILTER_BOUNDS:
        value = getattr(swing_filter, attr)
        if value is not None:
            clauses.append(clause)
            params.append(value)
    if not clauses:
        return "", []
    return " AND " + " AND ".join(clauses), params


class SqliteBallSwingRepo:
    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    def insert_many(self, session_id: int, records: Sequence[BallSwingRecord]) -> int:
        self._conn.executemany(
            """INSERT INTO ball_swing
                   (session_id, strike_zone, exit_velocity, launch_angle, distance,
                    pitch_speed, spray_chart_x, spray_chart_z)
               VALUES (?, ?, ?, ?, ?, ?, ?, ?)""",
            [
                (
                    session_id,
                    r.strike_zone,
                    r.exit_velocity,
                    r.launch_angle,
                    r.distance,
                    r.pitch_speed,
                    r.spray_chart_x,
                    r.spray_chart_z,
                )
                for r in records
            ],
        )
        return len(records)

    def get_by_session(self, session_id: int, swing_filter: SwingFilter | None = None) -> list[BallSwingRecord]:
        where, params = _filter_clause(swing_filter)
        rows = self._conn.execute(
            f"SELECT * FROM ball_swing WHERE session_id = ?{where} ORDER BY id",
            [session_id, *params],
        ).fetchall()
        return [self._row_to_record(row) for row in rows]

    def get_by_player(self, player_id: int) -> list[BallSwingRecord]:
        rows = self._conn.execute(
            """SELECT b.* FROM ball_swing b
               JOIN session s ON s.id = b.session_id
               WHERE s.player_id = ?
               ORDER BY s.session_date, b.id""",
            (player_id,),
        ).fetchall()
        return [self._row_to_record(row) for row in rows]

    @staticmethod
    def _row_to_record(row: sqlite3.Row) -> BallSwingRecord:
        return BallSwingRecord(
            id=row["id"],
            session_id=row["session_id"],
            strike_zone=row["strike_zone"],
            exit_velocity=row["exit_velocity"],
            launch_angle=row["launch_angle"],
            distance=row["distance"],
            pitch_speed=row["pitch_speed"],
            spray_chart_x=row["spray_chart_x"],
            spray_chart_z=row["spray_chart_z"],
        )
