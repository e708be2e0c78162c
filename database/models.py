from sqlalchemy import (
    Column, Integer, String, Float, DateTime, CheckConstraint, Index
)
from datetime import datetime
from .connection import Base


class Student(Base):
    __tablename__ = 'students'

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    roll_no = Column(String(20), nullable=False, unique=True, index=True)
    department = Column(String(100), nullable=False, index=True)
    email = Column(String(255), nullable=False, default='')
    phone = Column(String(20), nullable=False, default='')
    marks = Column(Float, nullable=False)

    created_at = Column(DateTime, nullable=False, default=datetime.now)
    updated_at = Column(DateTime, nullable=False, default=datetime.now, onupdate=datetime.now)

    __table_args__ = (
        CheckConstraint('marks >= 0 AND marks <= 100', name='check_marks_range'),
        Index('idx_student_marks', 'marks'),
    )

    def __repr__(self):
        return f"<Student {self.name} ({self.roll_no}) - {self.marks:.2f}>"


class User(Base):
    __tablename__ = 'users'

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(50), nullable=False, unique=True, index=True)
    password = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, default='admin')
    created_at = Column(DateTime, nullable=False, default=datetime.now)

    def __repr__(self):
        return f"<User {self.username} ({self.role})>"
