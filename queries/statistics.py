"""
Statistics over a snapshot of student records.

compute_statistics() is the single place counts, percentages and
distributions are worked out; every screen and export calls it rather
than recomputing its own numbers.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Tuple

from .grading import GRADE_ORDER, grade_of, passed
from .records import StudentRecord


@dataclass(frozen=True)
class StatisticsSnapshot:
    total_count: int = 0
    passed_count: int = 0
    failed_count: int = 0
    pass_percentage: float = 0.0
    fail_percentage: float = 0.0
    average_marks: float = 0.0
    highest_marks: float = 0.0
    lowest_marks: float = 0.0
    department_counts: Mapping[str, int] = field(default_factory=lambda: MappingProxyType({}))
    grade_counts: Mapping[str, int] = field(default_factory=lambda: MappingProxyType({}))


def share(count: int, total: int) -> float:
    """Percentage of total, 0.0 when there is nothing to divide by."""
    return count / total * 100 if total > 0 else 0.0


def compute_statistics(records: Iterable[StudentRecord]) -> StatisticsSnapshot:
    """
    Aggregate a snapshot of records.

    Args:
        records: Any finite iterable of StudentRecord (may be empty)

    Returns:
        StatisticsSnapshot with counts, pass/fail percentages, marks
        extrema and the per-department and per-grade distributions.

    Example:
        >>> stats = compute_statistics(store.get_all())
        >>> print(f"Passing: {stats.pass_percentage:.1f}%")
    """
    records = list(records)
    total = len(records)

    if not records:
        return StatisticsSnapshot()

    marks = [r.marks for r in records]
    passed_count = sum(1 for m in marks if passed(m))
    failed_count = total - passed_count

    # dicts keep insertion order, so departments stay in first-seen order
    department_counts: Dict[str, int] = {}
    grade_counts: Dict[str, int] = {}
    for record in records:
        department_counts[record.department] = department_counts.get(record.department, 0) + 1
        grade = grade_of(record.marks)
        grade_counts[grade] = grade_counts.get(grade, 0) + 1

    return StatisticsSnapshot(
        total_count=total,
        passed_count=passed_count,
        failed_count=failed_count,
        pass_percentage=share(passed_count, total),
        fail_percentage=share(failed_count, total),
        average_marks=sum(marks) / total,
        highest_marks=max(marks),
        lowest_marks=min(marks),
        department_counts=MappingProxyType(department_counts),
        grade_counts=MappingProxyType(grade_counts),
    )


def ordered_grade_counts(grade_counts: Mapping[str, int]) -> List[Tuple[str, int]]:
    """Grade counts in A+ .. F order, with absent grades as zero."""
    return [(grade, grade_counts.get(grade, 0)) for grade in GRADE_ORDER]
