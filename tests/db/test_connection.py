import sqlite3
from pathlib import Path

import pytest

from swing_analytics.db.connection import create_connection, get_schema_version


class TestCreateConnection:
    def test_applies_migrations(self, conn: sqlite3.Connection) -> None:
        tables = {r[0] for r in conn.execute("SELECT name FROM sqlite_master WHERE type='table'").fetchall()}
        assert {"player", "session", "bat_swing", "ball_swing", "load_log", "player_goal", "schema_version"} <= tables
        assert get_schema_version(conn) == 2

    def test_foreign_keys_enabled(self, conn: sqlite3.Connection) -> None:
        assert conn.execute("PRAGMA foreign_keys").fetchone()[0] == 1

    def test_instrument_is_constrained(self, conn: sqlite3.Connection) -> None:
        conn.execute("INSERT INTO player (name) VALUES ('A')")
        with pytest.raises(sqlite3.IntegrityError):
            conn.execute(
                "INSERT INTO session (player_id, session_date, instrument) VALUES (1, '2024-01-01', 'radar')"
            )

    def test_file_database_is_reopened_without_remigrating(self, tmp_path: Path) -> None:
        path = tmp_path / "nested" / "swing.db"
        first = create_connection(path)
        first.execute("INSERT INTO player (name) VALUES ('A')")
        first.commit()
        first.close()

        second = create_connection(path)
        assert get_schema_version(second) == 2
        assert second.execute("SELECT COUNT(*) FROM player").fetchone()[0] == 1
        assert second.execute("PRAGMA journal_mode").fetchone()[0] == "wal"
        second.close()

    def test_schema_version_without_table(self) -> None:
        raw = sqlite3.connect(":memory:")
        assert get_schema_version(raw) == 0
        raw.close()
