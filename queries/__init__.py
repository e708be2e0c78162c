"""
Query modules for the student records engine.

This package provides a clean interface for storing, searching and
summarising student records without coupling to any specific UI.
"""

from .errors import (
    RecordsError, DuplicateKeyError, NotFoundError, InvalidRangeError,
    MalformedRangeError, OutOfDomainError, InvalidFieldError, StoreUnavailableError,
)
from .grading import GRADE_ORDER, grade_of, gpa_of, passed
from .records import StudentRecord, UserAccount
from .statistics import StatisticsSnapshot, compute_statistics, ordered_grade_counts
from .student_queries import StudentQueries
from .user_queries import UserQueries
from .search import SearchRouter, parse_marks_range
from .validation import build_student_record, parse_marks
from .formatting import GradeFormatter

__all__ = [
    'RecordsError',
    'DuplicateKeyError',
    'NotFoundError',
    'InvalidRangeError',
    'MalformedRangeError',
    'OutOfDomainError',
    'InvalidFieldError',
    'StoreUnavailableError',
    'GRADE_ORDER',
    'grade_of',
    'gpa_of',
    'passed',
    'StudentRecord',
    'UserAccount',
    'StatisticsSnapshot',
    'compute_statistics',
    'ordered_grade_counts',
    'StudentQueries',
    'UserQueries',
    'SearchRouter',
    'parse_marks_range',
    'build_student_record',
    'parse_marks',
    'GradeFormatter',
]
