import datetime
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Annotated

import typer

from swing_analytics.cli._logging import configure_logging
from swing_analytics.cli._output import (
    console,
    print_bat_speed_metrics,
    print_benchmark_entry,
    print_benchmark_levels,
    print_error,
    print_exit_velocity_metrics,
    print_goal_added,
    print_goal_list,
    print_import_result,
    print_json,
    print_player_added,
    print_player_list,
    print_player_progress,
    print_player_summary,
    print_player_trend,
    print_scouting_grade,
    print_session_comparisons,
    print_session_report,
)
from swing_analytics.cli.factory import build_benchmark_table, build_swing_context
from swing_analytics.config import AppSettings, create_config, load_settings
from swing_analytics.domain.analytics import SwingFilter
from swing_analytics.domain.goal import GoalStatus, GoalType
from swing_analytics.domain.instrument import SwingInstrumentType
from swing_analytics.domain.metrics import BatSpeedMetrics
from swing_analytics.domain.player import Player
from swing_analytics.domain.result import Err, Ok
from swing_analytics.exceptions import SwingAnalyticsError
from swing_analytics.ingest.csv_source import SwingCsvSource
from swing_analytics.metrics.scouting import calculate_grade, grade_info, milestones
from swing_analytics.services.player_analytics import TREND_METRICS

app = typer.Typer(name="swing", help="Swing analytics: sensor imports, session metrics and grading")


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable DEBUG logging")] = False,
    config: Annotated[Path | None, typer.Option("--config", help="Path to a YAML config file")] = None,
) -> None:
    """Swing analytics: sensor imports, session metrics and grading."""
    configure_logging(verbose=verbose)
    ctx.obj = load_settings(create_config(yaml_path=str(config) if config else "swing.yaml"))
    if ctx.invoked_subcommand is None:
        raise typer.Exit()


@contextmanager
def _handle_errors() -> Iterator[None]:
    try:
        yield
    except SwingAnalyticsError as exc:
        print_error(str(exc))
        raise typer.Exit(code=1) from exc


def _settings(ctx: typer.Context) -> AppSettings:
    settings = ctx.find_root().obj
    assert isinstance(settings, AppSettings)
    return settings


# --- player subcommand group ---

player_app = typer.Typer(name="player", help="Manage players")
app.add_typer(player_app, name="player")


@player_app.command("add")
def player_add(
    ctx: typer.Context,
    name: Annotated[str, typer.Argument(help="Player name")],
    level: Annotated[str | None, typer.Option("--level", help="Competition level, e.g. 'High School'")] = None,
) -> None:
    """Add a player."""
    with _handle_errors(), build_swing_context(_settings(ctx)) as sc:
        if level is not None and not sc.table.is_valid_level(level):
            print_error(f"unknown level '{level}', expected one of: {', '.join(sc.table.levels())}")
            raise typer.Exit(code=1)
        player_id = sc.player_repo.insert(Player(name=name, level=level))
        sc.conn.commit()
    print_player_added(player_id, name)


@player_app.command("list")
def player_list(ctx: typer.Context) -> None:
    """List players."""
    with _handle_errors(), build_swing_context(_settings(ctx)) as sc:
        players = sc.player_repo.all()
    print_player_list(players)


# --- goal subcommand group ---

goal_app = typer.Typer(name="goal", help="Track player goals")
app.add_typer(goal_app, name="goal")


@goal_app.command("add")
def goal_add(
    ctx: typer.Context,
    player_id: Annotated[int, typer.Argument(help="Player ID")],
    goal_type: Annotated[GoalType, typer.Option("--type", help="avg_ev, max_ev, avg_bs or max_bs")],
    target: Annotated[float, typer.Option("--target", help="Target value, e.g. 85.5")],
    start_date: Annotated[str, typer.Option("--start", help="Start date (YYYY-MM-DD)")],
    end_date: Annotated[str, typer.Option("--end", help="End date (YYYY-MM-DD)")],
    notes: Annotated[str | None, typer.Option("--notes", help="Free-form notes")] = None,
) -> None:
    """Add a goal; it is checked against every session imported afterwards."""
    with _handle_errors(), build_swing_context(_settings(ctx)) as sc:
        if sc.player_repo.get_by_id(player_id) is None:
            print_error(f"player {player_id} not found")
            raise typer.Exit(code=1)
        goal = sc.goal_tracker.create(player_id, goal_type, target, start_date, end_date, notes)
        sc.conn.commit()
    print_goal_added(goal)


@goal_app.command("list")
def goal_list(
    ctx: typer.Context,
    player_id: Annotated[int, typer.Argument(help="Player ID")],
    status: Annotated[GoalStatus | None, typer.Option("--status", help="Only goals with this status")] = None,
) -> None:
    """List a player's goals, newest first."""
    with _handle_errors(), build_swing_context(_settings(ctx)) as sc:
        goals = sc.goal_tracker.goals_for(player_id, status)
    print_goal_list(goals)


@goal_app.command("cancel")
def goal_cancel(
    ctx: typer.Context,
    goal_id: Annotated[int, typer.Argument(help="Goal ID")],
) -> None:
    """Cancel a goal."""
    with _handle_errors(), build_swing_context(_settings(ctx)) as sc:
        sc.goal_tracker.cancel(goal_id)
        sc.conn.commit()
    console.print(f"Cancelled goal {goal_id}")


@app.command("import")
def import_cmd(
    ctx: typer.Context,
    csv_path: Annotated[Path, typer.Argument(help="Path to the vendor CSV export")],
    player_id: Annotated[int, typer.Option("--player-id", help="Player the session belongs to")],
    instrument: Annotated[SwingInstrumentType, typer.Option("--instrument", help="Sensor that produced the file")],
    session_date: Annotated[str | None, typer.Option("--date", help="Session date (YYYY-MM-DD), default today")] = None,
    level: Annotated[str | None, typer.Option("--level", help="Level override for this session")] = None,
) -> None:
    """Import a bat-tracker or ball-tracker CSV export as a new session."""
    if not csv_path.exists():
        print_error(f"file not found: {csv_path}")
        raise typer.Exit(code=1)
    if session_date is None:
        session_date = datetime.date.today().isoformat()
    else:
        try:
            datetime.date.fromisoformat(session_date)
        except ValueError:
            print_error(f"invalid date '{session_date}', expected YYYY-MM-DD")
            raise typer.Exit(code=1) from None

    with _handle_errors(), build_swing_context(_settings(ctx)) as sc:
        if sc.player_repo.get_by_id(player_id) is None:
            print_error(f"player {player_id} not found")
            raise typer.Exit(code=1)
        loader = sc.session_loader(SwingCsvSource(csv_path))
        match loader.load(player_id, instrument, session_date, level):
            case Ok(result):
                print_import_result(result)
            case Err(e):
                print_error(e.message)
                raise typer.Exit(code=1)


@app.command("metrics")
def metrics_cmd(
    ctx: typer.Context,
    session_id: Annotated[int, typer.Argument(help="Session ID")],
    as_json: Annotated[bool, typer.Option("--json", help="Emit JSON")] = False,
) -> None:
    """Compute metrics for one session."""
    with _handle_errors(), build_swing_context(_settings(ctx)) as sc:
        metrics = sc.metrics_service.compute(session_id)
    if as_json:
        print_json(metrics.to_dict())
    elif isinstance(metrics, BatSpeedMetrics):
        print_bat_speed_metrics(metrics)
    else:
        print_exit_velocity_metrics(metrics)


@app.command("report")
def report_cmd(
    ctx: typer.Context,
    session_id: Annotated[int, typer.Argument(help="Session ID")],
    as_json: Annotated[bool, typer.Option("--json", help="Emit the report payload as JSON")] = False,
) -> None:
    """Build the full report for a session, including history and trends."""
    with _handle_errors(), build_swing_context(_settings(ctx)) as sc:
        report = sc.report_aggregator.aggregate(session_id)
    if as_json:
        print_json(report.to_dict())
    else:
        print_session_report(report)


@app.command("benchmarks")
def benchmarks_cmd(
    ctx: typer.Context,
    level: Annotated[str | None, typer.Argument(help="Level to show; all levels when omitted")] = None,
) -> None:
    """Show benchmark reference values."""
    with _handle_errors():
        table = build_benchmark_table(_settings(ctx))
    if level is None:
        print_benchmark_levels([table.get(name) for name in table.levels()], table.default_level)
        return
    if not table.is_valid_level(level):
        console.print(f"[yellow]Unknown level '{level}', showing {table.default_level}[/yellow]")
    print_benchmark_entry(table.get(level))


@app.command("grade")
def grade_cmd(
    value: Annotated[float, typer.Argument(help="Measured value")],
    average: Annotated[float, typer.Option("--average", help="Benchmark average (grade 50)")],
    upper: Annotated[float, typer.Option("--upper", help="Benchmark upper bound (grade 80)")],
) -> None:
    """Convert a value to the 20-80 scouting scale."""
    grade = calculate_grade(value, average, upper)
    print_scouting_grade(grade, grade_info(grade), milestones(average, upper))


@app.command("analytics")
def analytics_cmd(
    ctx: typer.Context,
    player_id: Annotated[int, typer.Argument(help="Player ID")],
) -> None:
    """Summarize a player's ball-tracker swings across all sessions."""
    with _handle_errors(), build_swing_context(_settings(ctx)) as sc:
        summary = sc.analytics_service.summarize(player_id)
    print_player_summary(summary)


@app.command("trend")
def trend_cmd(
    ctx: typer.Context,
    player_id: Annotated[int, typer.Argument(help="Player ID")],
    metric: Annotated[str, typer.Option("--metric", help="exit_velocity, launch_angle or distance")] = "exit_velocity",
    days: Annotated[int, typer.Option("--days", help="Window size in days")] = 30,
) -> None:
    """Show a player's per-session trend for one ball-tracker metric."""
    if metric not in TREND_METRICS:
        print_error(f"invalid metric '{metric}', expected one of: {', '.join(TREND_METRICS)}")
        raise typer.Exit(code=1)
    with _handle_errors(), build_swing_context(_settings(ctx)) as sc:
        trend = sc.analytics_service.trend(player_id, metric, days)
    print_player_trend(trend)


@app.command("progress")
def progress_cmd(
    ctx: typer.Context,
    player_id: Annotated[int, typer.Argument(help="Player ID")],
    metric: Annotated[str, typer.Option("--metric", help="exit_velocity, launch_angle or distance")] = "exit_velocity",
    goal: Annotated[float, typer.Option("--goal", help="Target average for the metric")] = 90.0,
) -> None:
    """Show per-session progress and project when the goal average will be reached."""
    if metric not in TREND_METRICS:
        print_error(f"invalid metric '{metric}', expected one of: {', '.join(TREND_METRICS)}")
        raise typer.Exit(code=1)
    with _handle_errors(), build_swing_context(_settings(ctx)) as sc:
        progress = sc.analytics_service.progress(player_id, metric, goal)
    print_player_progress(progress)


@app.command("compare")
def compare_cmd(
    ctx: typer.Context,
    session_ids: Annotated[list[int], typer.Argument(help="Session IDs to compare")],
    min_ev: Annotated[float | None, typer.Option("--min-ev", help="Minimum exit velocity")] = None,
    max_ev: Annotated[float | None, typer.Option("--max-ev", help="Maximum exit velocity")] = None,
    min_la: Annotated[float | None, typer.Option("--min-la", help="Minimum launch angle")] = None,
    max_la: Annotated[float | None, typer.Option("--max-la", help="Maximum launch angle")] = None,
    zone: Annotated[int | None, typer.Option("--zone", help="Strike zone (1-13)")] = None,
) -> None:
    """Compare ball-tracker sessions side by side, optionally filtering swings."""
    swing_filter = SwingFilter(
        min_exit_velocity=min_ev,
        max_exit_velocity=max_ev,
        min_launch_angle=min_la,
        max_launch_angle=max_la,
        strike_zone=zone,
    )
    with _handle_errors(), build_swing_context(_settings(ctx)) as sc:
        comparisons = sc.analytics_service.compare_sessions(session_ids, swing_filter)
    print_session_comparisons(comparisons)
