from dataclasses import dataclass
from enum import StrEnum


class LetterGrade(StrEnum):
    A_PLUS = "A+"
    A = "A"
    A_MINUS = "A-"
    B_PLUS = "B+"
    B = "B"
    B_MINUS = "B-"
    C_PLUS = "C+"
    C = "C"
    C_MINUS = "C-"
    D = "D"
    NOT_AVAILABLE = "N/A"


class GradeDirection(StrEnum):
    UP = "up"
    DOWN = "down"
    STABLE = "stable"


@dataclass(frozen=True)
class GradeBand:
    label: str
    description: str


@dataclass(frozen=True)
class GradeChange:
    old_grade: int
    new_grade: int
    change: int
    direction: GradeDirection
    magnitude: int


@dataclass(frozen=True)
class Milestone:
    grade: int
    label: str
    value: float
