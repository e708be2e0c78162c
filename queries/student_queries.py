"""
Student record queries: the only code that reads or writes the students table.

This module provides:
- Create / update / delete keyed by roll number (unique business key)
- Lookups by roll number and full listing
- Substring searches on name, department and roll number
- Inclusive marks range search
- Department list, top performers and statistics over the whole roster

Results are returned as immutable StudentRecord snapshots, never as
live ORM objects.
"""

import logging
from contextlib import contextmanager
from typing import List, Optional

from sqlalchemy.exc import IntegrityError, InterfaceError, OperationalError

from database import Database, Student
from .errors import (
    DuplicateKeyError, InvalidRangeError, NotFoundError, OutOfDomainError,
    StoreUnavailableError,
)
from .records import StudentRecord
from .statistics import StatisticsSnapshot, compute_statistics

logger = logging.getLogger(__name__)


@contextmanager
def store_errors(action: str):
    """Re-raise connectivity failures from SQLAlchemy as StoreUnavailableError."""
    try:
        yield
    except (OperationalError, InterfaceError) as e:
        logger.error(f"Store unavailable while trying to {action}: {e}")
        raise StoreUnavailableError(f"Could not {action}: {e.orig or e}") from e


class StudentQueries:
    """CRUD and search over student records."""

    def __init__(self, database: Database):
        self.database = database

    # =========================================================================
    # WRITES
    # =========================================================================

    def insert(self, record: StudentRecord) -> StudentRecord:
        """
        Store a new student.

        Marks are expected to be validated already (see
        queries.validation.build_student_record).

        Args:
            record: Unsaved record (its id, if any, is ignored)

        Returns:
            The record with the id assigned by the store

        Raises:
            DuplicateKeyError: roll number already taken
            StoreUnavailableError: the store could not be reached
        """
        if self.exists_by_roll_no(record.roll_no):
            raise DuplicateKeyError(record.roll_no)

        row = Student(
            name=record.name,
            roll_no=record.roll_no,
            department=record.department,
            email=record.email,
            phone=record.phone,
            marks=record.marks,
        )
        try:
            with store_errors("add student"), self.database.session_scope() as db:
                db.add(row)
                db.flush()
                saved = self._to_record(row)
        except IntegrityError as e:
            # Lost a race on the unique key, or the CHECK on marks fired
            if self.exists_by_roll_no(record.roll_no):
                raise DuplicateKeyError(record.roll_no) from e
            raise OutOfDomainError(record.marks) from e

        logger.info(f"Added student {saved.roll_no} (id={saved.id})")
        return saved

    def update(self, roll_no: str, record: StudentRecord) -> StudentRecord:
        """
        Replace every field of the student with this roll number.

        The roll number itself never changes; record.roll_no is ignored.

        Raises:
            NotFoundError: no student has this roll number
        """
        try:
            with store_errors("update student"), self.database.session_scope() as db:
                row = db.query(Student).filter_by(roll_no=roll_no).first()
                if not row:
                    raise NotFoundError(roll_no)

                row.name = record.name
                row.department = record.department
                row.email = record.email
                row.phone = record.phone
                row.marks = record.marks
                db.flush()
                saved = self._to_record(row)
        except IntegrityError as e:
            raise OutOfDomainError(record.marks) from e

        logger.info(f"Updated student {roll_no}")
        return saved

    def delete(self, roll_no: str) -> None:
        """
        Remove the student with this roll number.

        Raises:
            NotFoundError: no student has this roll number
        """
        with store_errors("delete student"), self.database.session_scope() as db:
            deleted = db.query(Student).filter_by(roll_no=roll_no).delete()
            if not deleted:
                raise NotFoundError(roll_no)

        logger.info(f"Deleted student {roll_no}")

    # =========================================================================
    # READS
    # =========================================================================

    def get_all(self) -> List[StudentRecord]:
        """All students in insertion order."""
        return self._fetch("list students", lambda q: q.order_by(Student.id))

    def get_by_roll_no(self, roll_no: str) -> Optional[StudentRecord]:
        db = self.database.get_session()
        try:
            with store_errors("look up student"):
                row = db.query(Student).filter_by(roll_no=roll_no).first()
                return self._to_record(row) if row else None
        finally:
            db.close()

    def exists_by_roll_no(self, roll_no: str) -> bool:
        db = self.database.get_session()
        try:
            with store_errors("check roll number"):
                return db.query(Student.id).filter_by(roll_no=roll_no).first() is not None
        finally:
            db.close()

    def count(self) -> int:
        db = self.database.get_session()
        try:
            with store_errors("count students"):
                return db.query(Student).count()
        finally:
            db.close()

    def search_by_name(self, text: str) -> List[StudentRecord]:
        """
        Case-insensitive substring search on name.

        Example:
            >>> store.search_by_name('smi')   # matches 'Smith', 'Osmium', ...
        """
        return self._fetch(
            "search by name",
            lambda q: q.filter(Student.name.icontains(text, autoescape=True)).order_by(Student.id)
        )

    def search_by_department(self, text: str) -> List[StudentRecord]:
        """Case-insensitive substring search on department."""
        return self._fetch(
            "search by department",
            lambda q: q.filter(Student.department.icontains(text, autoescape=True)).order_by(Student.id)
        )

    def search_by_roll_no(self, text: str) -> List[StudentRecord]:
        """
        Case-sensitive substring search on roll number.

        LIKE narrows the rows in SQL but ignores case on SQLite and MySQL,
        so the exact match is checked again on the fetched records.
        """
        rows = self._fetch(
            "search by roll number",
            lambda q: q.filter(Student.roll_no.contains(text, autoescape=True)).order_by(Student.id)
        )
        return [record for record in rows if text in record.roll_no]

    def search_by_marks_range(self, low: float, high: float) -> List[StudentRecord]:
        """
        Students with low <= marks <= high.

        Raises:
            InvalidRangeError: low is greater than high
        """
        if low > high:
            raise InvalidRangeError(low, high)
        return self._fetch(
            "search by marks range",
            lambda q: q.filter(Student.marks.between(low, high)).order_by(Student.marks.desc(), Student.id)
        )

    def list_distinct_departments(self) -> List[str]:
        """Departments currently in use, sorted, for selection lists."""
        db = self.database.get_session()
        try:
            with store_errors("list departments"):
                rows = db.query(Student.department).distinct().order_by(Student.department).all()
                return [department for (department,) in rows]
        finally:
            db.close()

    def get_top_performers(self, limit: int = 10) -> List[StudentRecord]:
        """Highest marks first; ties keep insertion order."""
        return self._fetch(
            "list top performers",
            lambda q: q.order_by(Student.marks.desc(), Student.id).limit(limit)
        )

    def get_statistics(self) -> StatisticsSnapshot:
        """Statistics over the whole roster as it is right now."""
        return compute_statistics(self.get_all())

    # =========================================================================
    # HELPERS
    # =========================================================================

    def _fetch(self, action: str, build_query) -> List[StudentRecord]:
        db = self.database.get_session()
        try:
            with store_errors(action):
                rows = build_query(db.query(Student)).all()
                return [self._to_record(row) for row in rows]
        finally:
            db.close()

    @staticmethod
    def _to_record(row: Student) -> StudentRecord:
        return StudentRecord(
            id=row.id,
            name=row.name,
            roll_no=row.roll_no,
            department=row.department,
            email=row.email or '',
            phone=row.phone or '',
            marks=row.marks,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )
