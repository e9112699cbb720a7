import sqlite3

from swing_analytics.domain.player import Player


class SqlitePlayerRepo:
    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    def insert(self, player: Player) -> int:
        cursor = self._conn.execute(
            "INSERT INTO player (name, level) VALUES (?, ?)",
            (player.name, player.level),
        )
        return cursor.lastrowid  # type: ignore[return-value]

    def get_by_id(self, player_id: int) -> Player | None:
        row = self._conn.execute("SELECT * FROM player WHERE id = ?", (player_id,)).fetchone()
        return self._row_to_player(row) if row else None

    def all(self) -> list[Player]:
        rows = self._conn.execute("SELECT * FROM player ORDER BY name, id").fetchall()
        return [self._row_to_player(row) for row in rows]

    @staticmethod
    def _row_to_player(row: sqlite3.Row) -> Player:
        return Player(
            id=row["id"],
            name=row["name"],
            level=row["level"],
            created_at=row["created_at"],
        )
