from swing_analytics.domain.instrument import SwingInstrumentType


class SwingAnalyticsError(Exception):
    """Base class for errors raised by swing_analytics."""


class MalformedInputError(SwingAnalyticsError):
    """Raised when a vendor export cannot be read as swing data at all."""


class DecodeError(MalformedInputError):
    """Raised when no data rows can be located inside the look-ahead window."""


class NoDataError(SwingAnalyticsError):
    def __init__(self, instrument: SwingInstrumentType, session_id: int | None = None) -> None:
        self.instrument = instrument
        self.session_id = session_id
        where = f" for session {session_id}" if session_id is not None else ""
        super().__init__(f"No valid {instrument.metric_label} data found{where}")


class SessionNotFoundError(SwingAnalyticsError):
    def __init__(self, session_id: int) -> None:
        self.session_id = session_id
        super().__init__(f"Session {session_id} not found")


class BenchmarkConfigError(SwingAnalyticsError):
    """Raised when a benchmark table file is missing or invalid."""


class GoalValidationError(SwingAnalyticsError):
    """Raised when a goal definition is rejected before it is stored."""


class GoalNotFoundError(SwingAnalyticsError):
    def __init__(self, goal_id: int) -> None:
        self.goal_id = goal_id
        super().__init__(f"Goal {goal_id} not found")
