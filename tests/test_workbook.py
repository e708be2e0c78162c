from queries import StudentRecord, compute_statistics
from queries.workbook import STUDENT_HEADERS, build_workbook


def _records():
    return [
        StudentRecord.new('Alice', 'R1', 'Physics', 'alice@example.com', '', 95).persisted(1),
        StudentRecord.new('Bob', 'R2', 'Art', '', '', 55).persisted(2),
        StudentRecord.new('Carol', 'R3', 'Physics', '', '', 40).persisted(3),
    ]


def test_workbook_sheets():
    records = _records()
    wb = build_workbook(records, compute_statistics(records))
    assert wb.sheetnames == ['Students', 'Summary']


def test_students_sheet_rows():
    records = _records()
    ws = build_workbook(records, compute_statistics(records))['Students']

    assert ws['A1'].value == 'Student Records'
    assert [cell.value for cell in ws[3]] == STUDENT_HEADERS
    assert [cell.value for cell in ws[4]] == [1, 'Alice', 'R1', 'Physics', 'alice@example.com', '',
                                            95, 'A+', 4.0, 'Pass']
    assert ws.max_row == 3 + len(records)
    assert ws.freeze_panes == 'A4'


def test_summary_sheet_grade_distribution_in_order():
    records = _records()
    ws = build_workbook(records, compute_statistics(records))['Summary']
    rows = {row[0]: row[1] for row in ws.iter_rows(min_row=3, values_only=True) if row[0]}

    assert rows['Total Students'] == 3
    assert rows['Passed'] == 2
    assert rows['Pass Percentage'] == '66.7%'

    labels = [row[0] for row in ws.iter_rows(min_row=3, values_only=True)
              if row[0] and row[0].split(' ')[0] in ('A+', 'A', 'B', 'C', 'D', 'F')]
    assert labels == ['A+ (>= 90)', 'A (>= 80)', 'B (>= 70)', 'C (>= 60)', 'D (>= 50)', 'F (< 50)']
    assert rows['D (>= 50)'] == 1
    assert rows['B (>= 70)'] == 0
    assert rows['Physics'] == 2


def test_empty_workbook_still_has_summary():
    wb = build_workbook([], compute_statistics([]))
    assert wb['Summary']['B4'].value == 0


def test_workbook_saves(tmp_path):
    records = _records()
    path = tmp_path / 'students.xlsx'
    build_workbook(records, compute_statistics(records)).save(path)
    assert path.exists() and path.stat().st_size > 0
