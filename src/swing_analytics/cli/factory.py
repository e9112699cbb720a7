import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass

from swing_analytics.benchmarks import BenchmarkTable, default_table, load_benchmark_table
from swing_analytics.config import AppSettings
from swing_analytics.db.connection import create_connection
from swing_analytics.ingest.loader import SessionLoader
from swing_analytics.ingest.protocols import LineSource
from swing_analytics.repos.ball_swing_repo import SqliteBallSwingRepo
from swing_analytics.repos.bat_swing_repo import SqliteBatSwingRepo
from swing_analytics.repos.goal_repo import SqlitePlayerGoalRepo
from swing_analytics.repos.load_log_repo import SqliteLoadLogRepo
from swing_analytics.repos.player_repo import SqlitePlayerRepo
from swing_analytics.repos.session_repo import SqliteSessionRepo
from swing_analytics.services.goal_tracker import GoalTracker
from swing_analytics.services.player_analytics import PlayerAnalyticsService
from swing_analytics.services.report_aggregator import ReportAggregator
from swing_analytics.services.session_metrics import SessionMetricsService


def build_benchmark_table(settings: AppSettings) -> BenchmarkTable:
    table = load_benchmark_table(settings.benchmarks_path) if settings.benchmarks_path else default_table()
    return table.with_default_level(settings.default_level)


@dataclass(frozen=True)
class SwingContext:
    conn: sqlite3.Connection
    table: BenchmarkTable
    player_repo: SqlitePlayerRepo
    session_repo: SqliteSessionRepo
    bat_swing_repo: SqliteBatSwingRepo
    ball_swing_repo: SqliteBallSwingRepo
    load_log_repo: SqliteLoadLogRepo
    goal_tracker: GoalTracker
    metrics_service: SessionMetricsService
    report_aggregator: ReportAggregator
    analytics_service: PlayerAnalyticsService

    def session_loader(self, source: LineSource) -> SessionLoader:
        return SessionLoader(
            source,
            self.session_repo,
            self.bat_swing_repo,
            self.ball_swing_repo,
            self.load_log_repo,
            conn=self.conn,
            goal_tracker=self.goal_tracker,
        )


@contextmanager
def build_swing_context(settings: AppSettings) -> Iterator[SwingContext]:
    """Composition-root context manager: opens DB, wires repos and services, yields context, closes DB."""
    table = build_benchmark_table(settings)
    conn = create_connection(settings.db_path)
    try:
        player_repo = SqlitePlayerRepo(conn)
        session_repo = SqliteSessionRepo(conn)
        bat_swing_repo = SqliteBatSwingRepo(conn)
        ball_swing_repo = SqliteBallSwingRepo(conn)
        yield SwingContext(
            conn=conn,
            table=table,
            player_repo=player_repo,
            session_repo=session_repo,
            bat_swing_repo=bat_swing_repo,
            ball_swing_repo=ball_swing_repo,
            load_log_repo=SqliteLoadLogRepo(conn),
            goal_tracker=GoalTracker(SqlitePlayerGoalRepo(conn)),
            metrics_service=SessionMetricsService(
                session_repo, player_repo, bat_swing_repo, ball_swing_repo, table=table
            ),
            report_aggregator=ReportAggregator(session_repo, player_repo, bat_swing_repo, ball_swing_repo, table=table),
            analytics_service=PlayerAnalyticsService(session_repo, ball_swing_repo),
        )
    finally:
        conn.close()
