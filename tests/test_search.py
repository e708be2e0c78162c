import pytest

from queries import InvalidRangeError, MalformedRangeError, SearchRouter, parse_marks_range
from queries.search import ALL, DEPARTMENT, MARKS_RANGE, NAME, ROLL_NO, normalize_mode


@pytest.fixture
def router(store):
    return SearchRouter(store)


@pytest.mark.parametrize("label, mode", [
    ('All', ALL),
    ('Name', NAME),
    ('Roll No', ROLL_NO),
    ('rollNo', ROLL_NO),
    ('roll_no', ROLL_NO),
    ('Department', DEPARTMENT),
    ('Marks Range', MARKS_RANGE),
    ('marksRange', MARKS_RANGE),
    ('GPA', ALL),
    ('', ALL),
    (None, ALL),
])
def test_normalize_mode(label, mode):
    assert normalize_mode(label) == mode


def test_parse_marks_range():
    assert parse_marks_range('70-90') == (70.0, 90.0)
    assert parse_marks_range(' 55.5 - 60 ') == (55.5, 60.0)
    assert parse_marks_range('90-70') == (90.0, 70.0)


@pytest.mark.parametrize("text", ['abc-90', '70', '70-80-90', '-', '70-', 'nan-90', '10-inf', ''])
def test_parse_marks_range_malformed(text):
    with pytest.raises(MalformedRangeError):
        parse_marks_range(text)


def test_all_and_blank_text_list_everything(router, roster):
    assert len(router.search('all', 'ignored')) == len(roster)
    assert len(router.search('name', '   ')) == len(roster)


def test_unknown_mode_falls_back_to_all(router, roster):
    assert len(router.search('shoe size', '42')) == len(roster)


def test_routes_substring_searches(router, roster):
    assert [r.roll_no for r in router.search('Name', 'smith')] == ['CS001', 'CS003']
    assert [r.roll_no for r in router.search('Roll No', 'MA')] == ['MA004', 'MA005']
    assert [r.roll_no for r in router.search('Department', 'mech')] == ['ME002']


def test_marks_range_is_inclusive(router, roster):
    assert {r.roll_no for r in router.search('Marks Range', '70-90')} == {'MA004', 'MA005'}
    assert {r.roll_no for r in router.search('Marks Range', '95-100')} == {'CS001'}


def test_malformed_range_issues_no_query(store, roster, monkeypatch):
    calls = []
    monkeypatch.setattr(store, 'search_by_marks_range', lambda *a: calls.append(a))

    with pytest.raises(MalformedRangeError):
        SearchRouter(store).search('Marks Range', 'abc-90')
    assert calls == []


def test_inverted_range_is_rejected(router, roster):
    with pytest.raises(InvalidRangeError):
        router.search('Marks Range', '90-70')
