from enum import StrEnum


class SwingInstrumentType(StrEnum):
    BAT_TRACKER = "bat_tracker"
    BALL_TRACKER = "ball_tracker"

    @property
    def metric_label(self) -> str:
        if self is SwingInstrumentType.BAT_TRACKER:
            return "bat speed"
        return "exit velocity"
