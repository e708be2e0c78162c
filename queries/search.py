"""
Routes a (mode, text) search from the front end to the right StudentQueries call.

Modes:
- all          -> every student (also used for blank text or an unknown mode)
- name         -> substring of name, case-insensitive
- roll_no      -> substring of roll number
- department   -> substring of department, case-insensitive
- marks_range  -> "min-max", inclusive, e.g. "70-90"

Mode labels are matched loosely, so "Roll No", "rollNo" and "roll_no"
all mean the same thing.
"""

import math
import re
from typing import List, Tuple

from .errors import MalformedRangeError
from .records import StudentRecord
from .student_queries import StudentQueries

ALL = 'all'
NAME = 'name'
ROLL_NO = 'roll_no'
DEPARTMENT = 'department'
MARKS_RANGE = 'marks_range'

SEARCH_MODES = (ALL, NAME, ROLL_NO, DEPARTMENT, MARKS_RANGE)

# Display labels, in menu order
MODE_LABELS = {
    ALL: 'All',
    NAME: 'Name',
    ROLL_NO: 'Roll No',
    DEPARTMENT: 'Department',
    MARKS_RANGE: 'Marks Range',
}

_MODE_KEYS = {re.sub(r'[^a-z]', '', mode): mode for mode in SEARCH_MODES}


def normalize_mode(mode: str) -> str:
    """Map a mode label to one of SEARCH_MODES (unknown labels become 'all')."""
    key = re.sub(r'[^a-z]', '', (mode or '').lower())
    return _MODE_KEYS.get(key, ALL)


def parse_marks_range(text: str) -> Tuple[float, float]:
    """
    Parse "min-max" into a (min, max) pair.

    The bounds are not reordered; "90-70" parses to (90.0, 70.0) and the
    store rejects it with InvalidRangeError.

    Raises:
        MalformedRangeError: not exactly two tokens, or a token is not a finite number
    """
    parts = (text or '').split('-')
    if len(parts) != 2:
        raise MalformedRangeError(text)
    try:
        low, high = (float(part.strip()) for part in parts)
    except ValueError:
        raise MalformedRangeError(text) from None
    if not (math.isfinite(low) and math.isfinite(high)):
        raise MalformedRangeError(text)
    return low, high


class SearchRouter:
    """Dispatches searches to a StudentQueries instance."""

    def __init__(self, store: StudentQueries):
        self.store = store

    def search(self, mode: str, text: str) -> List[StudentRecord]:
        """
        Run a search.

        A malformed marks range raises before any query is issued, so the
        caller can keep showing its previous results.
        """
        mode = normalize_mode(mode)
        text = (text or '').strip()

        if mode == ALL or not text:
            return self.store.get_all()
        if mode == NAME:
            return self.store.search_by_name(text)
        if mode == ROLL_NO:
            return self.store.search_by_roll_no(text)
        if mode == DEPARTMENT:
            return self.store.search_by_department(text)

        low, high = parse_marks_range(text)
        return self.store.search_by_marks_range(low, high)
