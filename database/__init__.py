from .connection import Base, Database, DatabaseConfig
from .models import Student, User

__all__ = [
    'Base',
    'Database',
    'DatabaseConfig',
    'Student',
    'User',
]
