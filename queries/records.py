"""
Immutable value types handed out by the query classes.

A StudentRecord is either new (id is None, not yet stored) or persisted
(id assigned by the store). Changing a record means building a new one.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Optional

from .grading import grade_of, gpa_of, passed, status_of


@dataclass(frozen=True)
class StudentRecord:
    name: str
    roll_no: str
    department: str
    email: str = ''
    phone: str = ''
    marks: float = 0.0
    id: Optional[int] = None
    created_at: Optional[datetime] = field(default=None, compare=False)
    updated_at: Optional[datetime] = field(default=None, compare=False)

    @classmethod
    def new(cls, name: str, roll_no: str, department: str, email: str = '',
            phone: str = '', marks: float = 0.0) -> 'StudentRecord':
        """A record that has not been stored yet."""
        return cls(name=name, roll_no=roll_no, department=department,
                   email=email, phone=phone, marks=float(marks))

    def persisted(self, id: int, created_at: Optional[datetime] = None,
                  updated_at: Optional[datetime] = None) -> 'StudentRecord':
        """Copy of this record carrying the id the store assigned."""
        return replace(self, id=id, created_at=created_at, updated_at=updated_at)

    def unsaved(self) -> 'StudentRecord':
        """Copy of this record without store identity."""
        return replace(self, id=None, created_at=None, updated_at=None)

    @property
    def is_persisted(self) -> bool:
        return self.id is not None

    @property
    def grade(self) -> str:
        return grade_of(self.marks)

    @property
    def gpa(self) -> float:
        return gpa_of(self.marks)

    @property
    def passed(self) -> bool:
        return passed(self.marks)

    @property
    def status(self) -> str:
        return status_of(self.marks)

    def __str__(self):
        return (f"Student(id={self.id}, name='{self.name}', roll_no='{self.roll_no}', "
                f"department='{self.department}', marks={self.marks:.2f})")


@dataclass(frozen=True)
class UserAccount:
    username: str
    password: str = field(repr=False)
    role: str = 'admin'
    id: Optional[int] = None
    created_at: Optional[datetime] = field(default=None, compare=False)
