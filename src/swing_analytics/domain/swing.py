from dataclasses import dataclass


@dataclass(frozen=True)
class BatSwingRecord:
    bat_speed: float
    attack_angle: float
    time_to_contact: float
    session_id: int | None = None
    id: int | None = None


@dataclass(frozen=True)
class BallSwingRecord:
    exit_velocity: float
    launch_angle: float | None = None
    distance: float | None = None
    strike_zone: int | None = None
    pitch_speed: float | None = None
    spray_chart_x: float | None = None
    spray_chart_z: float | None = None
    session_id: int | None = None
    id: int | None = None


type SwingRecord = BatSwingRecord | BallSwingRecord
