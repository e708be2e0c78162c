import dataclasses
from datetime import datetime

import pytest

from queries import StudentRecord, UserAccount


def test_new_record_has_no_id():
    record = StudentRecord.new('Jane', 'R1', 'Physics', marks=80)
    assert record.id is None
    assert not record.is_persisted
    assert record.marks == 80.0


def test_persisted_returns_a_copy():
    record = StudentRecord.new('Jane', 'R1', 'Physics', marks=80)
    stored = record.persisted(12, created_at=datetime(2025, 1, 1))

    assert stored.id == 12 and stored.is_persisted
    assert record.id is None
    assert stored.unsaved() == record


def test_records_are_immutable():
    record = StudentRecord.new('Jane', 'R1', 'Physics', marks=80)
    with pytest.raises(dataclasses.FrozenInstanceError):
        record.marks = 100


def test_timestamps_do_not_affect_equality():
    a = StudentRecord.new('Jane', 'R1', 'Physics', marks=80).persisted(1, created_at=datetime(2025, 1, 1))
    b = StudentRecord.new('Jane', 'R1', 'Physics', marks=80).persisted(1, created_at=datetime(2026, 1, 1))
    assert a == b


def test_derived_fields():
    record = StudentRecord.new('Jane', 'R1', 'Physics', marks=64)
    assert record.grade == 'C'
    assert record.gpa == 2.5
    assert record.passed
    assert record.status == 'Pass'


def test_user_account_defaults_to_admin_and_hides_password():
    account = UserAccount(username='admin', password='s3cret')
    assert account.role == 'admin'
    assert 's3cret' not in repr(account)
