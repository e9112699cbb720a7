"""Ratio-to-benchmark letter grades.

Each curve maps ``value / benchmark`` onto nine bands plus a ``D`` floor.
Exit-velocity metrics go through their own curve so its thresholds can move
independently of the general higher-is-better curve.
"""

from collections.abc import Sequence

from swing_analytics.domain.grade import LetterGrade

_BANDS: tuple[LetterGrade, ...] = (
    LetterGrade.A_PLUS,
    LetterGrade.A,
    LetterGrade.A_MINUS,
    LetterGrade.B_PLUS,
    LetterGrade.B,
    LetterGrade.B_MINUS,
    LetterGrade.C_PLUS,
    LetterGrade.C,
    LetterGrade.C_MINUS,
)

_HIGHER_IS_BETTER_THRESHOLDS = (1.10, 1.05, 1.00, 0.95, 0.90, 0.85, 0.80, 0.75, 0.70)
_EXIT_VELOCITY_THRESHOLDS = (1.10, 1.05, 1.00, 0.95, 0.90, 0.85, 0.80, 0.75, 0.70)
_LOWER_IS_BETTER_THRESHOLDS = (0.90, 0.95, 1.00, 1.05, 1.10, 1.15, 1.20, 1.25, 1.30)


def _at_least(ratio: float, thresholds: Sequence[float]) -> LetterGrade:
    for band, threshold in zip(_BANDS, thresholds, strict=True):
        if ratio >= threshold:
            return band
    return LetterGrade.D


def _higher_is_better_curve(ratio: float) -> LetterGrade:
    return _at_least(ratio, _HIGHER_IS_BETTER_THRESHOLDS)


def _exit_velocity_curve(ratio: float) -> LetterGrade:
    return _at_least(ratio, _EXIT_VELOCITY_THRESHOLDS)


def _lower_is_better_curve(ratio: float) -> LetterGrade:
    for band, threshold in zip(_BANDS, _LOWER_IS_BETTER_THRESHOLDS, strict=True):
        if ratio <= threshold:
            return band
    return LetterGrade.D


def grade(
    value: float | None,
    benchmark: float | None,
    *,
    lower_is_better: bool = False,
    special_ev: bool = False,
) -> LetterGrade:
    """Grade ``value`` against ``benchmark``; ``N/A`` when either side is missing or zero."""
    if value is None or benchmark is None or value == 0 or benchmark == 0:
        return LetterGrade.NOT_AVAILABLE

    ratio = value / benchmark
    if special_ev:
        return _exit_velocity_curve(ratio)
    if lower_is_better:
        return _lower_is_better_curve(ratio)
    return _higher_is_better_curve(ratio)
