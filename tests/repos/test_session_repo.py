import sqlite3

from swing_analytics.domain.instrument import SwingInstrumentType
from swing_analytics.domain.player import Player
from swing_analytics.domain.session import Session
from swing_analytics.repos.player_repo import SqlitePlayerRepo
from swing_analytics.repos.session_repo import SqliteSessionRepo

BAT = SwingInstrumentType.BAT_TRACKER
BALL = SwingInstrumentType.BALL_TRACKER


def _seed(conn: sqlite3.Connection) -> tuple[int, SqliteSessionRepo]:
    player_id = SqlitePlayerRepo(conn).insert(Player(name="A"))
    repo = SqliteSessionRepo(conn)
    repo.insert(Session(player_id=player_id, session_date="2024-03-05", instrument=BALL))
    repo.insert(Session(player_id=player_id, session_date="2024-03-01", instrument=BAT, player_level="Indy"))
    repo.insert(Session(player_id=player_id, session_date="2024-03-05", instrument=BAT))
    return player_id, repo


class TestSqliteSessionRepo:
    def test_insert_and_get(self, conn: sqlite3.Connection) -> None:
        player_id, repo = _seed(conn)
        session = repo.get_by_id(2)
        assert session is not None
        assert session.player_id == player_id
        assert session.instrument is BAT
        assert session.player_level == "Indy"

    def test_missing(self, conn: sqlite3.Connection) -> None:
        assert SqliteSessionRepo(conn).get_by_id(1) is None

    def test_by_player_ordered_by_date_then_id(self, conn: sqlite3.Connection) -> None:
        player_id, repo = _seed(conn)
        assert [s.id for s in repo.get_by_player(player_id)] == [2, 1, 3]

    def test_by_player_filters(self, conn: sqlite3.Connection) -> None:
        player_id, repo = _seed(conn)
        assert [s.id for s in repo.get_by_player(player_id, instrument=BAT)] == [2, 3]
        assert [s.id for s in repo.get_by_player(player_id, since="2024-03-02")] == [1, 3]

    def test_get_by_ids(self, conn: sqlite3.Connection) -> None:
        _, repo = _seed(conn)
        assert [s.id for s in repo.get_by_ids([3, 2])] == [2, 3]
        assert repo.get_by_ids([]) == []

    def test_deleting_player_cascades(self, conn: sqlite3.Connection) -> None:
        player_id, repo = _seed(conn)
        conn.execute("DELETE FROM player WHERE id = ?", (player_id,))
        assert repo.get_by_player(player_id) == []
