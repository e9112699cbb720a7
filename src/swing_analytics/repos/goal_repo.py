import sqlite3

from swing_analytics.domain.goal import GoalStatus, GoalType, PlayerGoal


class SqlitePlayerGoalRepo:
    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    def insert(self, goal: PlayerGoal) -> int:
        cursor = self._conn.execute(
            """INSERT INTO player_goal
                   (player_id, goal_type, target_value, start_date, end_date,
                    status, achieved_date, achieved_session_id, notes)
               VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)""",
            (
                goal.player_id,
                goal.goal_type.value,
                goal.target_value,
                goal.start_date,
                goal.end_date,
                goal.status.value,
                goal.achieved_date,
                goal.achieved_session_id,
                goal.notes,
            ),
        )
        return cursor.lastrowid  # type: ignore[return-value]

    def get_by_id(self, goal_id: int) -> PlayerGoal | None:
        row = self._conn.execute("SELECT * FROM player_goal WHERE id = ?", (goal_id,)).fetchone()
        return self._row_to_goal(row) if row else None

    def get_by_player(self, player_id: int, *, status: GoalStatus | None = None) -> list[PlayerGoal]:
        query = "SELECT * FROM player_goal WHERE player_id = ?"
        params: list[object] = [player_id]
        if status is not None:
            query += " AND status = ?"
            params.append(status.value)
        rows = self._conn.execute(query + " ORDER BY created_at DESC, id DESC", params).fetchall()
        return [self._row_to_goal(row) for row in rows]

    def mark_achieved(self, goal_id: int, achieved_date: str, session_id: int) -> None:
        self._conn.execute(
            """UPDATE player_goal
               SET status = ?, achieved_date = ?, achieved_session_id = ?
               WHERE id = ?""",
            (GoalStatus.ACHIEVED.value, achieved_date, session_id, goal_id),
        )

    def update_status(self, goal_id: int, status: GoalStatus) -> bool:
        cursor = self._conn.execute("UPDATE player_goal SET status = ? WHERE id = ?", (status.value, goal_id))
        return cursor.rowcount > 0

    @staticmethod
    def _row_to_goal(row: sqlite3.Row) -> PlayerGoal:
        return PlayerGoal(
            id=row["id"],
            player_id=row["player_id"],
            goal_type=GoalType(row["goal_type"]),
            target_value=row["target_value"],
            start_date=row["start_date"],
            end_date=row["end_date"],
            status=GoalStatus(row["status"]),
            achieved_date=row["achieved_date"],
            achieved_session_id=row["achieved_session_id"],
            notes=row["notes"],
            created_at=row["created_at"],
        )
