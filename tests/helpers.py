"""Builders for vendor-shaped CSV exports used across the test suite."""

BAT_PREAMBLE = ("Blast Connect Export", "Player: Test Hitter")
BAT_HEADER = (
    "Date,Time,Equipment,Handedness,Swing Details,Plane Score,Connection Score,Bat Speed (mph),"
    "Rotational Acceleration (g),On Plane Efficiency (%),Attack Angle (deg),Early Connection (deg),"
    "Connection at Impact (deg),Vertical Bat Angle (deg),Power (kW),Time to Contact (sec)"
)

BALL_HEADER = (
    "No,Date,Time,Pitch Type,Pitch,Strike Zone,Result,Velo,LA,Dist,Res,Type,Horiz. Angle,"
    "Pts,Batting,Level,Pitcher,Note,Session,User,Contact,Hand,POI X,POI Z"
)
BALL_COLUMNS = 24


def _fmt(value: float | str | None) -> str:
    return "" if value is None else str(value)


type Cell = float | str | None


def bat_line(bat_speed: Cell, attack_angle: Cell, time_to_contact: Cell) -> str:
    fields = ["2024-03-01", "10:00:00", "Bat", "R", "", "50", "60", "", "12", "80", "", "10", "85", "-30", "2.5", ""]
    fields[7] = _fmt(bat_speed)
    fields[10] = _fmt(attack_angle)
    fields[15] = _fmt(time_to_contact)
    return ",".join(fields)


def bat_csv(*swings: tuple[Cell, Cell, Cell], preamble: tuple[str, ...] = BAT_PREAMBLE) -> str:
    lines = [*preamble, BAT_HEADER, *(bat_line(*s) for s in swings)]
    return "\n".join(lines) + "\n"


def ball_line(
    exit_velocity: float | str | None,
    launch_angle: float | None = None,
    distance: float | None = None,
    strike_zone: int | None = None,
    pitch_speed: float | None = None,
    spray_x: float | None = None,
    spray_z: float | None = None,
) -> str:
    fields = [""] * BALL_COLUMNS
    fields[0] = "1"
    fields[1] = "2024-03-01"
    fields[4] = _fmt(pitch_speed)
    fields[5] = _fmt(strike_zone)
    fields[7] = _fmt(exit_velocity)
    fields[8] = _fmt(launch_angle)
    fields[9] = _fmt(distance)
    fields[22] = _fmt(spray_x)
    fields[23] = _fmt(spray_z)
    return ",".join(fields)


def ball_csv(*lines: str) -> str:
    return "\n".join([BALL_HEADER, *lines]) + "\n"
