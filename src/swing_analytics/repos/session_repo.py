import sqlite3
from collections.abc import Sequence

from swing_analytics.domain.instrument import SwingInstrumentType
from swing_analytics.domain.session import Session


class SqliteSessionRepo:
    """Sessions are immutable once written; there is no update path."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    def insert(self, session: Session) -> int:
        cursor = self._conn.execute(
            """INSERT INTO session (player_id, session_date, instrument, player_level)
               VALUES (?, ?, ?, ?)""",
            (session.player_id, session.session_date, session.instrument.value, session.player_level),
        )
        return cursor.lastrowid  # type: ignore[return-value]

    def get_by_id(self, session_id: int) -> Session | None:
        row = self._conn.execute("SELECT * FROM session WHERE id = ?", (session_id,)).fetchone()
        return self._row_to_session(row) if row else None

    def get_by_ids(self, session_ids: Sequence[int]) -> list[Session]:
        if not session_ids:
            return []
        placeholders = ",".join("?" * len(session_ids))
        rows = self._conn.execute(
            f"SELECT * FROM session WHERE id IN ({placeholders}) ORDER BY session_date, id",
            tuple(session_ids),
        ).fetchall()
        return [self._row_to_session(row) for row in rows]

    def get_by_player(
        self,
        player_id: int,
        *,
        instrument: SwingInstrumentType | None = None,
        since: str | None = None,
    ) -> list[Session]:
        """Sessions for a player, oldest first."""
        sql = "SELECT * FROM session WHERE player_id = ?"
        params: list[object] = [player_id]
        if instrument is not None:
            sql += " AND instrument = ?"
            params.append(instrument.value)
        if since is not None:
            sql += " AND session_date >= ?"
            params.append(since)
        sql += " ORDER BY session_date, id"
        rows = self._conn.execute(sql, params).fetchall()
        return [self._row_to_session(row) for row in rows]

    @staticmethod
    def _row_to_session(row: sqlite3.Row) -> Session:
        return Session(
            id=row["id"],
            player_id=row["player_id"],
            session_date=row["session_date"],
            instrument=SwingInstrumentType(row["instrument"]),
            player_level=row["player_level"],
            created_at=row["created_at"],
        )
