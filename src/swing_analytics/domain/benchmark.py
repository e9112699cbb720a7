from dataclasses import dataclass


@dataclass(frozen=True)
class BenchmarkRange:
    """Average and upper-percentile reference pair used by the 20-80 scale."""

    average: float
    upper: float


@dataclass(frozen=True)
class BenchmarkEntry:
    level: str
    avg_exit_velocity: float | None = None
    top_8th_exit_velocity: float | None = None
    avg_launch_angle: float | None = None
    hard_hit_launch_angle: float | None = None
    avg_bat_speed: float | None = None
    bat_speed_90th: float | None = None
    avg_time_to_contact: float | None = None
    avg_attack_angle: float | None = None

    @property
    def exit_velocity_range(self) -> BenchmarkRange | None:
        if self.avg_exit_velocity is None or self.top_8th_exit_velocity is None:
            return None
        return BenchmarkRange(average=self.avg_exit_velocity, upper=self.top_8th_exit_velocity)

    @property
    def bat_speed_range(self) -> BenchmarkRange | None:
        if self.avg_bat_speed is None or self.bat_speed_90th is None:
            return None
        return BenchmarkRange(average=self.avg_bat_speed, upper=self.bat_speed_90th)
