import pytest

from queries import InvalidFieldError, OutOfDomainError, build_student_record, parse_marks
from queries.validation import is_valid_email, is_valid_phone, preview_grade


def test_builds_trimmed_new_record():
    record = build_student_record('  Jane Doe ', ' R1 ', 'Physics', ' jane@example.com ', '5550001111', ' 88.5 ')
    assert record.id is None
    assert record.name == 'Jane Doe'
    assert record.roll_no == 'R1'
    assert record.email == 'jane@example.com'
    assert record.marks == 88.5


def test_email_and_phone_are_optional():
    record = build_student_record('Jane', 'R1', 'Physics', '', '', 50)
    assert record.email == '' and record.phone == ''


@pytest.mark.parametrize("kwargs, field", [
    (dict(name=''), 'name'),
    (dict(roll_no='  '), 'roll_no'),
    (dict(department=''), 'department'),
    (dict(email='not-an-email'), 'email'),
    (dict(phone='12345'), 'phone'),
    (dict(phone='555-123-4567'), 'phone'),
    (dict(marks='abc'), 'marks'),
    (dict(marks=''), 'marks'),
])
def test_rejects_bad_fields(kwargs, field):
    fields = dict(name='Jane', roll_no='R1', department='Physics', email='', phone='', marks='70')
    fields.update(kwargs)
    with pytest.raises(InvalidFieldError) as excinfo:
        build_student_record(**fields)
    assert excinfo.value.field == field


@pytest.mark.parametrize("marks", ['-0.01', '100.01', '250', 'nan', 'inf', -5])
def test_marks_out_of_domain(marks):
    with pytest.raises(OutOfDomainError):
        parse_marks(marks)


@pytest.mark.parametrize("marks, expected", [('0', 0.0), ('100', 100.0), (49.99, 49.99), (75, 75.0)])
def test_marks_in_domain(marks, expected):
    assert parse_marks(marks) == expected


def test_email_and_phone_patterns():
    assert is_valid_email('first.last+tag@uni.edu')
    assert not is_valid_email('@uni.edu')
    assert is_valid_phone('0123456789')
    assert is_valid_phone('123456789012345')
    assert not is_valid_phone('1234567890123456')


def test_preview_grade():
    assert preview_grade('') == ('-', '-')
    assert preview_grade('91') == ('A+', 'Pass')
    assert preview_grade('49.9') == ('F', 'Fail')
    assert preview_grade('101') == ('Invalid', 'Invalid')
    assert preview_grade('abc') == ('Invalid', 'Invalid')
