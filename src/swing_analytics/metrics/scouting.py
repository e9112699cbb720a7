"""20-80 scouting scale.

A level's average maps to 50 and its upper-percentile benchmark to 80; the gap
between them is split into three equal increments of ten grade points each.
"""

import math

from swing_analytics.domain.grade import GradeBand, GradeChange, GradeDirection, Milestone

DEFAULT_GRADE = 50
MIN_GRADE = 20
MAX_GRADE = 80

_BANDS: tuple[tuple[int, GradeBand], ...] = (
    (30, GradeBand("Well Below Average", "Significantly below level standard")),
    (40, GradeBand("Below Average", "Below level standard")),
    (50, GradeBand("Average", "At level standard")),
    (60, GradeBand("Above Average", "Above level standard")),
    (70, GradeBand("Well Above Average", "Significantly above level standard")),
)
_ELITE = GradeBand("Elite", "Elite level performance")

_MILESTONE_GRADES = (40, 50, 60, 70, 80)


def _round_half_up(x: float) -> int:
    return math.floor(x + 0.5)


def _increment(average: float | None, upper: float | None) -> float | None:
    if average is None or upper is None or upper <= average:
        return None
    return (upper - average) / 3


def calculate_grade(value: float | None, average: float | None, upper: float | None) -> int:
    increment = _increment(average, upper)
    if value is None or increment is None:
        return DEFAULT_GRADE
    assert average is not None
    step = _round_half_up((value - average) / increment)
    return max(MIN_GRADE, min(MAX_GRADE, DEFAULT_GRADE + 10 * step))


def grade_info(grade: int) -> GradeBand:
    for ceiling, band in _BANDS:
        if grade <= ceiling:
            return band
    return _ELITE


def calculate_grade_change(
    old_value: float | None,
    new_value: float | None,
    average: float | None,
    upper: float | None,
) -> GradeChange:
    old_grade = calculate_grade(old_value, average, upper)
    new_grade = calculate_grade(new_value, average, upper)
    change = new_grade - old_grade
    if change > 0:
        direction = GradeDirection.UP
    elif change < 0:
        direction = GradeDirection.DOWN
    else:
        direction = GradeDirection.STABLE
    return GradeChange(
        old_grade=old_grade,
        new_grade=new_grade,
        change=change,
        direction=direction,
        magnitude=abs(change),
    )


def milestones(average: float | None, upper: float | None) -> list[Milestone]:
    """Raw values needed to reach each grade from 40 to 80."""
    increment = _increment(average, upper)
    if increment is None:
        return []
    assert average is not None
    return [
        Milestone(
            grade=g,
            label=grade_info(g).label,
            value=round(average + (g - DEFAULT_GRADE) / 10 * increment, 1),
        )
        for g in _MILESTONE_GRADES
    ]
