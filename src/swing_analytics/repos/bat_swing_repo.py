import sqlite3
from collections.abc import Sequence

from swing_analytics.domain.swing import BatSwingRecord


class SqliteBatSwingRepo:
    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    def insert_many(self, session_id: int, records: Sequence[BatSwingRecord]) -> int:
        self._conn.executemany(
            """INSERT INTO bat_swing (session_id, bat_speed, attack_angle, time_to_contact)
               VALUES (?, ?, ?, ?)""",
            [(session_id, r.bat_speed, r.attack_angle, r.time_to_contact) for r in records],
        )
        return len(records)

    def get_by_session(self, session_id: int) -> list[BatSwingRecord]:
        rows = self._conn.execute("SELECT * FROM bat_swing WHERE session_id = ? ORDER BY id", (session_id,)).fetchall()
        return [self._row_to_record(row) for row in rows]

    @staticmethod
    def _row_to_record(row: sqlite3.Row) -> BatSwingRecord:
        return BatSwingRecord(
            id=row["id"],
            session_id=row["session_id"],
            bat_speed=row["bat_speed"],
            attack_angle=row["attack_angle"],
            time_to_contact=row["time_to_contact"],
        )
