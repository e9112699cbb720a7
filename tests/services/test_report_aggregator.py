import logging

import pytest

from swing_analytics.domain.instrument import SwingInstrumentType
from swing_analytics.domain.report import MetricSnapshot, SessionHistoryEntry
from swing_analytics.domain.swing import BallSwingRecord
from swing_analytics.exceptions import SessionNotFoundError
from swing_analytics.services.report_aggregator import ReportAggregator, calculate_session_trends
from tests.services.conftest import Repos

_BAT_SWINGS = [(65.2, 12.5, 0.165), (67.8, 11.2, 0.158), (64.1, 13.8, 0.172)]


def _aggregator(repos: Repos) -> ReportAggregator:
    return ReportAggregator(repos.sessions, repos.players, repos.bat_swings, repos.ball_swings)


def _entry(session_id: int, date: str, **metrics: float) -> SessionHistoryEntry:
    return SessionHistoryEntry(
        session_id=session_id,
        session_date=date,
        session_type=SwingInstrumentType.BALL_TRACKER,
        metrics=MetricSnapshot(**metrics),
    )


class TestCalculateSessionTrends:
    def test_single_session_has_no_trends(self) -> None:
        assert calculate_session_trends([_entry(1, "2024-03-01", avg_exit_velocity=80.0)]) == []

    def test_consecutive_deltas_rounded(self) -> None:
        history = [
            _entry(1, "2024-03-01", avg_exit_velocity=80.0, top_exit_velocity=90.0),
            _entry(2, "2024-03-08", avg_exit_velocity=82.456, top_exit_velocity=88.0),
            _entry(3, "2024-03-15", avg_exit_velocity=81.0, top_exit_velocity=93.0),
        ]
        trends = calculate_session_trends(history)
        assert [t.session_id for t in trends] == [2, 3]
        assert trends[0].deltas.avg_exit_velocity == 2.46
        assert trends[0].deltas.top_exit_velocity == -2.0
        assert trends[1].deltas.avg_exit_velocity == pytest.approx(-1.46)
        assert trends[0].deltas.avg_bat_speed is None

    def test_missing_side_gives_none(self) -> None:
        history = [_entry(1, "2024-03-01"), _entry(2, "2024-03-02", avg_exit_velocity=80.0)]
        assert calculate_session_trends(history)[0].deltas.avg_exit_velocity is None


class TestReportAggregator:
    def test_missing_session(self, repos: Repos) -> None:
        with pytest.raises(SessionNotFoundError):
            _aggregator(repos).aggregate(1)

    def test_bat_report(self, repos: Repos) -> None:
        player_id = repos.player(name="Jordan Vega", level="College")
        session_id = repos.bat_session(player_id, "2024-03-01", _BAT_SWINGS)

        report = _aggregator(repos).aggregate(session_id)

        assert report.has_metrics
        assert report.bat_speed is not None
        assert report.exit_velocity is None
        assert report.level == "College"
        assert report.player_name == "Jordan Vega"
        assert "65.7" in report.summary
        assert len(report.history) == 1
        assert report.trends == ()

    def test_degraded_report_for_empty_session(self, repos: Repos, caplog: pytest.LogCaptureFixture) -> None:
        session_id = repos.ball_session(repos.player(), "2024-03-01", [])

        with caplog.at_level(logging.WARNING):
            report = _aggregator(repos).aggregate(session_id)

        assert not report.has_metrics
        assert report.summary == "No exit velocity data available for this session."
        payload = report.to_dict()
        assert payload["metrics"] == {"bat_speed": None, "exit_velocity": None}
        assert payload["history"][0]["metrics"]["avg_exit_velocity"] is None
        assert "has no metrics" in caplog.text

    def test_unknown_player_level_falls_back(self, repos: Repos) -> None:
        session_id = repos.bat_session(repos.player(level="Pro"), "2024-03-01", _BAT_SWINGS)
        report = _aggregator(repos).aggregate(session_id)
        assert report.level == "High School"
        assert report.bat_speed is not None
        assert report.bat_speed.level == "High School"

    def test_history_and_trends(self, repos: Repos) -> None:
        player_id = repos.player()
        later = repos.ball_session(
            player_id,
            "2024-03-10",
            [BallSwingRecord(exit_velocity=85.0), BallSwingRecord(exit_velocity=80.0)],
        )
        earlier = repos.ball_session(player_id, "2024-03-01", [BallSwingRecord(exit_velocity=80.0)])
        repos.bat_session(player_id, "2024-03-05", _BAT_SWINGS)

        report = _aggregator(repos).aggregate(later)

        assert [h.session_id for h in report.history] == [earlier, 3, later]
        bat_entry = report.history[1]
        assert bat_entry.metrics.top_bat_speed == 67.8
        assert bat_entry.metrics.avg_exit_velocity is None
        assert len(report.trends) == 2
        # Trends across instruments have no comparable side
        assert report.trends[0].deltas == MetricSnapshot()

    def test_payload_shape(self, repos: Repos) -> None:
        player_id = repos.player(name="A", level="Indy")
        first = repos.ball_session(player_id, "2024-03-01", [BallSwingRecord(exit_velocity=80.0)])
        second = repos.ball_session(player_id, "2024-03-08", [BallSwingRecord(exit_velocity=84.0, launch_angle=15.0)])

        payload = _aggregator(repos).aggregate(second).to_dict()

        assert payload["session"] == {"id": second, "date": "2024-03-08", "type": "ball_tracker"}
        assert payload["player"] == {"id": player_id, "name": "A", "level": "Indy"}
        assert payload["metrics"]["bat_speed"] is None
        assert payload["metrics"]["exit_velocity"]["avg_exit_velocity"] == 84.0
        assert [h["session_id"] for h in payload["history"]] == [first, second]
        assert payload["trends"] == [
            {
                "session_id": second,
                "session_date": "2024-03-08",
                "trends": {
                    "avg_bat_speed": None,
                    "top_bat_speed": None,
                    "avg_exit_velocity": 4.0,
                    "top_exit_velocity": 4.0,
                },
            }
        ]
        assert isinstance(payload["summary"], str)
