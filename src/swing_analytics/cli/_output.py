import json
from typing import Any

from rich.console import Console
from rich.table import Table

from swing_analytics.domain.analytics import PlayerProgress, PlayerSwingSummary, PlayerTrend, SessionComparison
from swing_analytics.domain.benchmark import BenchmarkEntry
from swing_analytics.domain.goal import PlayerGoal
from swing_analytics.domain.grade import GradeBand, Milestone
from swing_analytics.domain.metrics import BatSpeedMetrics, ExitVelocityMetrics
from swing_analytics.domain.player import Player
from swing_analytics.domain.report import SessionReport
from swing_analytics.ingest.loader import ImportResult

console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False)


def _fmt(value: float | None, digits: int = 1) -> str:
    return "—" if value is None else f"{value:.{digits}f}"


def print_error(message: str) -> None:
    err_console.print(f"[red bold]Error:[/red bold] {message}")


def print_json(payload: dict[str, Any]) -> None:
    console.print(json.dumps(payload, indent=2), markup=False, soft_wrap=True)


def print_player_added(player_id: int, name: str) -> None:
    console.print(f"[bold green]Added player[/bold green] {name} (id {player_id})")


def print_player_list(players: list[Player]) -> None:
    if not players:
        console.print("No players found.")
        return
    table = Table(show_edge=False, pad_edge=False)
    table.add_column("ID", justify="right")
    table.add_column("Name")
    table.add_column("Level")
    for p in players:
        table.add_row(str(p.id), p.name, p.level or "—")
    console.print(table)


def print_import_result(result: ImportResult) -> None:
    summary = result.summary
    console.print(
        f"[bold green]Import complete:[/bold green] {summary.parsed_rows} swings loaded "
        f"into session {result.session_id}"
    )
    console.print(f"  Source: {result.log.source_detail}")
    console.print(f"  Rows: {summary.total_rows} total, {summary.skipped_rows} skipped, {summary.error_count} errors")
    for goal in result.achieved_goals:
        console.print(
            f"  [bold green]Goal achieved:[/bold green] {goal.goal_type} {goal.target_value:.1f} (goal {goal.id})"
        )


def print_bat_speed_metrics(metrics: BatSpeedMetrics) -> None:
    console.print(f"Bat speed metrics [dim]({metrics.level}, {metrics.data_points} swings)[/dim]")
    table = Table(show_edge=False, pad_edge=False)
    table.add_column("Metric")
    table.add_column("Value", justify="right")
    table.add_column("Grade", justify="right")
    table.add_column("20-80", justify="right")
    table.add_row(
        "Avg bat speed",
        _fmt(metrics.avg_bat_speed),
        str(metrics.grades["avg_bat_speed"]),
        str(metrics.scouting_grades["avg_bat_speed"]),
    )
    table.add_row(
        "Top 10% bat speed",
        _fmt(metrics.top_10_percent_bat_speed),
        str(metrics.grades["top_10_percent_bat_speed"]),
        str(metrics.scouting_grades["top_10_percent_bat_speed"]),
    )
    table.add_row("Max bat speed", _fmt(metrics.max_bat_speed), "", "")
    table.add_row(
        "Attack angle (top 10%)", _fmt(metrics.avg_attack_angle_top_10), str(metrics.grades["attack_angle"]), ""
    )
    table.add_row(
        "Time to contact", _fmt(metrics.avg_time_to_contact, 3), str(metrics.grades["time_to_contact"]), ""
    )
    console.print(table)


def print_exit_velocity_metrics(metrics: ExitVelocityMetrics) -> None:
    console.print(f"Exit velocity metrics [dim]({metrics.level}, {metrics.data_points} swings)[/dim]")
    table = Table(show_edge=False, pad_edge=False)
    table.add_column("Metric")
    table.add_column("Value", justify="right")
    table.add_column("Grade", justify="right")
    table.add_column("20-80", justify="right")
    table.add_row(
        "Avg exit velocity",
        _fmt(metrics.avg_exit_velocity),
        str(metrics.grades["avg_exit_velocity"]),
        str(metrics.scouting_grades["avg_exit_velocity"]),
    )
    table.add_row(
        "Top 8% exit velocity",
        _fmt(metrics.top_8_percent_exit_velocity),
        str(metrics.grades["top_8_percent_exit_velocity"]),
        str(metrics.scouting_grades["top_8_percent_exit_velocity"]),
    )
    table.add_row("Max exit velocity", _fmt(metrics.max_exit_velocity), "", "")
    table.add_row(
        "Launch angle (top 8%)", _fmt(metrics.avg_launch_angle_top_8), str(metrics.grades["launch_angle_top_8"]), ""
    )
    table.add_row(
        "Launch angle (all)", _fmt(metrics.total_avg_launch_angle), str(metrics.grades["total_avg_launch_angle"]), ""
    )
    table.add_row("Barrels", f"{metrics.barrel_count} ({metrics.barrel_percentage:.1f}%)", "", "")
    table.add_row("Avg distance", _fmt(metrics.avg_distance), "", "")
    console.print(table)
    if metrics.strike_zone_counts:
        zones = ", ".join(f"{zone}: {count}" for zone, count in metrics.strike_zone_counts.items())
        console.print(f"  Top 8% by zone: {zones}")


def print_session_report(report: SessionReport) -> None:
    console.print(
        f"Session [bold]{report.session_id}[/bold] {report.session_date} "
        f"[dim]({report.session_type})[/dim] for [bold]{report.player_name}[/bold] at {report.level}"
    )
    console.print(f"  {report.summary}")
    if report.bat_speed is not None:
        print_bat_speed_metrics(report.bat_speed)
    if report.exit_velocity is not None:
        print_exit_velocity_metrics(report.exit_velocity)
    if len(report.history) < 2:
        return
    table = Table(show_edge=False, pad_edge=False, title="History")
    table.add_column("Session", justify="right")
    table.add_column("Date")
    table.add_column("Type")
    table.add_column("Avg BS", justify="right")
    table.add_column("Top BS", justify="right")
    table.add_column("Avg EV", justify="right")
    table.add_column("Top EV", justify="right")
    for entry in report.history:
        m = entry.metrics
        table.add_row(
            str(entry.session_id),
            entry.session_date,
            str(entry.session_type),
            _fmt(m.avg_bat_speed),
            _fmt(m.top_bat_speed),
            _fmt(m.avg_exit_velocity),
            _fmt(m.top_exit_velocity),
        )
    console.print(table)


def print_benchmark_levels(entries: list[BenchmarkEntry], default_level: str) -> None:
    table = Table(show_edge=False, pad_edge=False)
    table.add_column("Level")
    table.add_column("Avg EV", justify="right")
    table.add_column("Top 8% EV", justify="right")
    table.add_column("Avg BS", justify="right")
    table.add_column("90th BS", justify="right")
    for e in entries:
        label = f"{e.level} [dim](default)[/dim]" if e.level == default_level else e.level
        table.add_row(
            label,
            _fmt(e.avg_exit_velocity, 2),
            _fmt(e.top_8th_exit_velocity, 2),
            _fmt(e.avg_bat_speed, 2),
            _fmt(e.bat_speed_90th, 2),
        )
    console.print(table)


def print_benchmark_entry(entry: BenchmarkEntry) -> None:
    console.print(f"Benchmarks for [bold]{entry.level}[/bold]")
    for name in (
        "avg_exit_velocity",
        "top_8th_exit_velocity",
        "avg_launch_angle",
        "hard_hit_launch_angle",
        "avg_bat_speed",
        "bat_speed_90th",
        "avg_time_to_contact",
        "avg_attack_angle",
    ):
        value = getattr(entry, name)
        console.print(f"  {name}: {'—' if value is None else value}")


def print_scouting_grade(grade: int, band: GradeBand, milestones: list[Milestone]) -> None:
    console.print(f"Grade: [bold]{grade}[/bold] ({band.label}) {band.description}")
    for m in milestones:
        console.print(f"  {m.grade} {m.label}: {m.value:.1f}")


def print_player_summary(summary: PlayerSwingSummary) -> None:
    console.print(f"Player [bold]{summary.player_id}[/bold] across {summary.sessions_count} sessions")
    console.print(f"  Swings: {summary.total_swings}")
    console.print(f"  Avg exit velocity: {summary.average_exit_velocity:.1f}")
    console.print(f"  Best exit velocity: {summary.best_exit_velocity:.1f}")
    console.print(f"  Avg launch angle: {summary.average_launch_angle:.1f}")
    console.print(f"  Avg distance: {summary.average_distance:.1f}")
    console.print(f"  Sweet-spot swings: {summary.sweet_spot_swings}")


def print_player_trend(trend: PlayerTrend) -> None:
    color = {"improving": "green", "declining": "red"}.get(trend.direction, "white")
    console.print(
        f"{trend.metric} over the last {trend.days} days: "
        f"[{color}]{trend.direction}[/{color}] ({trend.percentage_change:+.2f}%, "
        f"{trend.sessions_analyzed} sessions)"
    )
    if not trend.points:
        return
    table = Table(show_edge=False, pad_edge=False)
    table.add_column("Session", justify="right")
    table.add_column("Date")
    table.add_column("Average", justify="right")
    table.add_column("Best", justify="right")
    table.add_column("Count", justify="right")
    for p in trend.points:
        table.add_row(str(p.session_id), p.session_date, f"{p.average:.2f}", f"{p.best:.2f}", str(p.count))
    console.print(table)


def print_session_comparisons(comparisons: dict[int, SessionComparison]) -> None:
    if not comparisons:
        console.print("No sessions found.")
        return
    table = Table(show_edge=False, pad_edge=False)
    table.add_column("Session", justify="right")
    table.add_column("Swings", justify="right")
    table.add_column("Avg EV", justify="right")
    table.add_column("Best EV", justify="right")
    table.add_column("Avg LA", justify="right")
    table.add_column("Avg Dist", justify="right")
    table.add_column("Sweet spot", justify="right")
    for c in comparisons.values():
        table.add_row(
            str(c.session_id),
            str(c.total_swings),
            f"{c.average_exit_velocity:.1f}",
            f"{c.best_exit_velocity:.1f}",
            f"{c.average_launch_angle:.1f}",
            f"{c.average_distance:.1f}",
            str(c.sweet_spot_swings),
        )
    console.print(table)


def print_goal_added(goal: PlayerGoal) -> None:
    console.print(
        f"[bold green]Added goal[/bold green] {goal.id}: {goal.goal_type} {goal.target_value:.1f} "
        f"for player {goal.player_id} ({goal.start_date} to {goal.end_date})"
    )


def print_goal_list(goals: list[PlayerGoal]) -> None:
    if not goals:
        console.print("No goals found.")
        return
    table = Table(show_edge=False, pad_edge=False)
    table.add_column("ID", justify="right")
    table.add_column("Type")
    table.add_column("Target", justify="right")
    table.add_column("Window")
    table.add_column("Status")
    table.add_column("Achieved")
    table.add_column("Notes")
    for g in goals:
        achieved = f"{g.achieved_date} (session {g.achieved_session_id})" if g.achieved_date else "—"
        table.add_row(
            str(g.id),
            g.goal_type,
            f"{g.target_value:.1f}",
            f"{g.start_date} to {g.end_date}",
            g.status,
            achieved,
            g.notes or "",
        )
    console.print(table)


def print_player_progress(progress: PlayerProgress) -> None:
    console.print(f"{progress.metric} progress toward {progress.goal_value:.1f} ({len(progress.points)} sessions)")
    if progress.points:
        table = Table(show_edge=False, pad_edge=False)
        table.add_column("Session", justify="right")
        table.add_column("Date")
        table.add_column("Average", justify="right")
        table.add_column("Best", justify="right")
        table.add_column("Count", justify="right")
        for p in progress.points:
            table.add_row(str(p.session_id), p.session_date, f"{p.average:.2f}", f"{p.best:.2f}", str(p.count))
        console.print(table)
    prediction = progress.prediction
    if prediction is None:
        console.print("No projection: needs three sessions with data and an improving average.")
        return
    console.print(
        f"Improving {prediction.weekly_improvement_rate:.2f} per week; "
        f"{prediction.sessions_to_goal} sessions to goal (est. {prediction.estimated_date})"
    )
