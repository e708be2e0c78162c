"""
Input validation for student forms.

Turns raw text from the front end into a StudentRecord, raising a typed
error for the first field that is wrong. Nothing here touches the store.
"""

import math
import re
from typing import Tuple, Union

from .errors import InvalidFieldError, OutOfDomainError
from .grading import grade_of, status_of
from .records import StudentRecord

MIN_MARKS = 0.0
MAX_MARKS = 100.0

EMAIL_PATTERN = re.compile(r'^[A-Za-z0-9+_.-]+@(.+)$')
PHONE_PATTERN = re.compile(r'^[0-9]{10,15}$')


def parse_marks(value: Union[str, float, int]) -> float:
    """
    Parse and range-check a marks value.

    Raises:
        InvalidFieldError: value is not a number
        OutOfDomainError: value is outside [0, 100] (or not finite)
    """
    if isinstance(value, str):
        value = value.strip()
        if not value:
            raise InvalidFieldError('marks', "Please enter marks")
    try:
        marks = float(value)
    except (TypeError, ValueError):
        raise InvalidFieldError('marks', "Please enter valid marks") from None

    if not math.isfinite(marks) or marks < MIN_MARKS or marks > MAX_MARKS:
        raise OutOfDomainError(marks, MIN_MARKS, MAX_MARKS)
    return marks


def is_valid_email(email: str) -> bool:
    return EMAIL_PATTERN.match(email) is not None


def is_valid_phone(phone: str) -> bool:
    return PHONE_PATTERN.match(phone) is not None


def build_student_record(name: str, roll_no: str, department: str, email: str = '',
                         phone: str = '', marks: Union[str, float, int] = '') -> StudentRecord:
    """
    Validate form fields and build a new (unsaved) StudentRecord.

    Name, roll number, department and marks are required. Email and phone
    may be blank, but must be well formed when given.
    """
    name = (name or '').strip()
    roll_no = (roll_no or '').strip()
    department = (department or '').strip()
    email = (email or '').strip()
    phone = (phone or '').strip()

    if not name:
        raise InvalidFieldError('name', "Please enter student name")
    if not roll_no:
        raise InvalidFieldError('roll_no', "Please enter roll number")
    if not department:
        raise InvalidFieldError('department', "Please select a department")
    if email and not is_valid_email(email):
        raise InvalidFieldError('email', "Please enter a valid email address")
    if phone and not is_valid_phone(phone):
        raise InvalidFieldError('phone', "Please enter a valid phone number")

    return StudentRecord.new(name, roll_no, department, email, phone, parse_marks(marks))


def preview_grade(marks_text: str) -> Tuple[str, str]:
    """Grade and status shown next to the marks field while typing."""
    if not (marks_text or '').strip():
        return '-', '-'
    try:
        marks = parse_marks(marks_text)
    except (InvalidFieldError, OutOfDomainError):
        return 'Invalid', 'Invalid'
    return grade_of(marks), status_of(marks)
