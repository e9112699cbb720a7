import datetime

import pytest

from swing_analytics.domain.analytics import SwingFilter, TrendDirection
from swing_analytics.domain.swing import BallSwingRecord
from swing_analytics.services.player_analytics import PlayerAnalyticsService, is_sweet_spot
from tests.services.conftest import Repos

TODAY = datetime.date(2024, 3, 31)


def _service(repos: Repos) -> PlayerAnalyticsService:
    return PlayerAnalyticsService(repos.sessions, repos.ball_swings)


def _swing(ev: float, la: float | None = None, distance: float | None = None, **kwargs: float) -> BallSwingRecord:
    return BallSwingRecord(exit_velocity=ev, launch_angle=la, distance=distance, **kwargs)  # type: ignore[arg-type]


class TestSweetSpot:
    @pytest.mark.parametrize(
        ("record", "expected"),
        [
            (_swing(90.0, 25.0), True),
            (_swing(95.0, 35.0), True),
            (_swing(89.9, 30.0), False),
            (_swing(95.0, 36.0), False),
            (_swing(95.0), False),
        ],
    )
    def test_window(self, record: BallSwingRecord, expected: bool) -> None:
        assert is_sweet_spot(record) is expected


class TestSummarize:
    def test_aggregates_all_sessions(self, repos: Repos) -> None:
        player_id = repos.player()
        repos.ball_session(player_id, "2024-03-01", [_swing(80.0, 10.0, 200.0), _swing(92.0, 30.0, 380.0)])
        repos.ball_session(player_id, "2024-03-08", [_swing(88.0, None, 300.0)])
        repos.bat_session(player_id, "2024-03-09", [(65.0, 10.0, 0.15)])

        summary = _service(repos).summarize(player_id)

        assert summary.total_swings == 3
        assert summary.average_exit_velocity == pytest.approx(86.666666, rel=1e-5)
        assert summary.average_launch_angle == pytest.approx(20.0)
        assert summary.average_distance == pytest.approx(293.333333, rel=1e-5)
        assert summary.best_exit_velocity == 92.0
        assert summary.sweet_spot_swings == 1
        assert summary.sessions_count == 2

    def test_no_swings(self, repos: Repos) -> None:
        summary = _service(repos).summarize(repos.player())
        assert summary.total_swings == 0
        assert summary.average_exit_velocity == 0.0
        assert summary.best_exit_velocity == 0.0
        assert summary.sessions_count == 0

    def test_bat_only_player_counts_no_sessions(self, repos: Repos) -> None:
        player_id = repos.player()
        repos.bat_session(player_id, "2024-03-09", [(65.0, 10.0, 0.15)])
        repos.ball_session(player_id, "2024-03-10", [])

        summary = _service(repos).summarize(player_id)

        assert summary.total_swings == 0
        assert summary.sessions_count == 0


class TestCompareSessions:
    def test_per_session_stats(self, repos: Repos) -> None:
        player_id = repos.player()
        first = repos.ball_session(player_id, "2024-03-01", [_swing(80.0, 10.0), _swing(90.0, 28.0)])
        second = repos.ball_session(player_id, "2024-03-08", [_swing(95.0, 30.0, 400.0)])

        result = _service(repos).compare_sessions([second, first])

        assert list(result) == [first, second]
        assert result[first].total_swings == 2
        assert result[first].average_exit_velocity == pytest.approx(85.0)
        assert result[first].sweet_spot_swings == 1
        assert result[second].best_exit_velocity == 95.0

    def test_filter_applies_to_each_session(self, repos: Repos) -> None:
        player_id = repos.player()
        first = repos.ball_session(
            player_id, "2024-03-01", [_swing(80.0, 10.0, strike_zone=5), _swing(90.0, 28.0, strike_zone=2)]
        )
        result = _service(repos).compare_sessions([first], SwingFilter(strike_zone=5))
        assert result[first].total_swings == 1
        assert result[first].best_exit_velocity == 80.0

    def test_unknown_sessions_are_skipped(self, repos: Repos) -> None:
        assert _service(repos).compare_sessions([99]) == {}


class TestTrend:
    def test_improving(self, repos: Repos) -> None:
        player_id = repos.player()
        repos.ball_session(player_id, "2024-03-05", [_swing(80.0), _swing(82.0)])
        repos.ball_session(player_id, "2024-03-12", [])
        repos.ball_session(player_id, "2024-03-20", [_swing(86.0), _swing(90.0)])

        trend = _service(repos).trend(player_id, today=TODAY)

        assert trend.direction is TrendDirection.IMPROVING
        assert trend.percentage_change == pytest.approx(8.64)
        assert trend.sessions_analyzed == 2
        assert [p.count for p in trend.points] == [2, 0, 2]
        assert trend.points[2].best == 90.0

    def test_declining_launch_angle(self, repos: Repos) -> None:
        player_id = repos.player()
        repos.ball_session(player_id, "2024-03-05", [_swing(80.0, 20.0)])
        repos.ball_session(player_id, "2024-03-20", [_swing(80.0, 15.0)])

        trend = _service(repos).trend(player_id, "launch_angle", today=TODAY)

        assert trend.direction is TrendDirection.DECLINING
        assert trend.percentage_change == -25.0

    def test_window_excludes_old_sessions(self, repos: Repos) -> None:
        player_id = repos.player()
        repos.ball_session(player_id, "2024-01-01", [_swing(60.0)])
        repos.ball_session(player_id, "2024-03-20", [_swing(80.0)])

        trend = _service(repos).trend(player_id, days=30, today=TODAY)

        assert trend.sessions_analyzed == 1
        assert trend.direction is TrendDirection.STABLE
        assert trend.percentage_change == 0.0

    def test_ignores_bat_sessions(self, repos: Repos) -> None:
        player_id = repos.player()
        repos.bat_session(player_id, "2024-03-20", [(65.0, 10.0, 0.15)])
        assert _service(repos).trend(player_id, today=TODAY).points == ()

    def test_invalid_metric(self, repos: Repos) -> None:
        with pytest.raises(ValueError, match="Unknown trend metric"):
            _service(repos).trend(1, "bat_speed")


class TestProgress:
    def test_projection_from_recent_improvement(self, repos: Repos) -> None:
        player_id = repos.player()
        repos.ball_session(player_id, "2024-01-10", [_swing(79.0), _swing(81.0)])
        repos.ball_session(player_id, "2024-02-01", [])
        repos.ball_session(player_id, "2024-02-15", [_swing(82.0)])
        repos.ball_session(player_id, "2024-03-01", [_swing(84.0), _swing(88.0)])

        progress = _service(repos).progress(player_id, goal_value=90.0, today=TODAY)

        assert [p.average for p in progress.points] == [80.0, 82.0, 86.0]
        prediction = progress.prediction
        assert prediction is not None
        assert prediction.current_average == 86.0
        assert prediction.weekly_improvement_rate == 3.0
        assert prediction.sessions_to_goal == 2
        assert prediction.estimated_date == "2024-04-14"

    def test_needs_three_sessions(self, repos: Repos) -> None:
        player_id = repos.player()
        repos.ball_session(player_id, "2024-03-01", [_swing(80.0)])
        repos.ball_session(player_id, "2024-03-08", [_swing(85.0)])

        progress = _service(repos).progress(player_id, today=TODAY)

        assert len(progress.points) == 2
        assert progress.prediction is None

    def test_only_recent_sessions_drive_projection(self, repos: Repos) -> None:
        player_id = repos.player()
        for date, ev in [("2024-03-01", 70.0), ("2024-03-08", 90.0), ("2024-03-15", 85.0), ("2024-03-22", 88.0)]:
            repos.ball_session(player_id, date, [_swing(ev)])

        assert _service(repos).progress(player_id, today=TODAY).prediction is None

    def test_goal_already_reached(self, repos: Repos) -> None:
        player_id = repos.player()
        for date, ev in [("2024-03-01", 90.0), ("2024-03-08", 92.0), ("2024-03-15", 94.0)]:
            repos.ball_session(player_id, date, [_swing(ev)])

        prediction = _service(repos).progress(player_id, goal_value=90.0, today=TODAY).prediction

        assert prediction is not None
        assert prediction.sessions_to_goal == 0
        assert prediction.estimated_date == TODAY.isoformat()

    def test_other_metric(self, repos: Repos) -> None:
        player_id = repos.player()
        for date, distance in [("2024-03-01", 250.0), ("2024-03-08", 260.0), ("2024-03-15", 270.0)]:
            repos.ball_session(player_id, date, [_swing(85.0, 15.0, distance)])

        progress = _service(repos).progress(player_id, "distance", 300.0, today=TODAY)

        assert progress.metric == "distance"
        assert progress.prediction is not None
        assert progress.prediction.sessions_to_goal == 3

    def test_invalid_metric(self, repos: Repos) -> None:
        with pytest.raises(ValueError, match="Unknown trend metric"):
            _service(repos).progress(1, "bat_speed")
