"""
Grade rules: numeric marks to letter grade, GPA points and pass/fail.

This is the only place the thresholds live. Records, form previews,
statistics and exports all go through these functions.

Marks outside [0, 100] must be rejected before calling in here
(see queries.validation).
"""

from typing import List, NamedTuple


class GradeBand(NamedTuple):
    min_marks: float
    grade: str
    gpa: float
    passed: bool


# Highest threshold first; first match wins
GRADE_TABLE: List[GradeBand] = [
    GradeBand(90.0, 'A+', 4.0, True),
    GradeBand(80.0, 'A', 3.5, True),
    GradeBand(70.0, 'B', 3.0, True),
    GradeBand(60.0, 'C', 2.5, True),
    GradeBand(50.0, 'D', 2.0, True),
    GradeBand(float('-inf'), 'F', 0.0, False),
]

GRADE_ORDER = tuple(band.grade for band in GRADE_TABLE)
PASS_MARK = 50.0


def band_for(marks: float) -> GradeBand:
    for band in GRADE_TABLE:
        if marks >= band.min_marks:
            return band
    return GRADE_TABLE[-1]


def grade_of(marks: float) -> str:
    """
    >>> grade_of(89.999)
    'A'
    >>> grade_of(90)
    'A+'
    """
    return band_for(marks).grade


def gpa_of(marks: float) -> float:
    return band_for(marks).gpa


def passed(marks: float) -> bool:
    return band_for(marks).passed


def status_of(marks: float) -> str:
    return "Pass" if passed(marks) else "Fail"
