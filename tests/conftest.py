import pytest

from database import Database, DatabaseConfig
from queries import StudentQueries, StudentRecord, UserQueries


@pytest.fixture
def db():
    database = Database(DatabaseConfig.in_memory())
    database.create_all()
    yield database
    database.dispose()


@pytest.fixture
def store(db):
    return StudentQueries(db)


@pytest.fixture
def users(db):
    return UserQueries(db)


def make_record(roll_no, marks, name=None, department='Computer Science',
                email='', phone=''):
    return StudentRecord.new(
        name=name or f"Student {roll_no}",
        roll_no=roll_no,
        department=department,
        email=email,
        phone=phone,
        marks=marks,
    )


@pytest.fixture
def new_record():
    return make_record


@pytest.fixture
def roster(store):
    """A small stored roster across three departments."""
    records = [
        make_record('CS001', 95, name='Alice Smith', department='Computer Science',
                    email='alice@example.com', phone='5551234567'),
        make_record('ME002', 55, name='Bob Jones', department='Mechanical Engineering'),
        make_record('CS003', 40, name='Carol Smithers', department='Computer Science'),
        make_record('MA004', 72.5, name='Dan Brown', department='Mathematics'),
        make_record('MA005', 88, name='Eve Adams', department='Mathematics'),
    ]
    return [store.insert(r) for r in records]
