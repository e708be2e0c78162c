"""
Excel workbook export.

build_workbook() returns an openpyxl Workbook with two sheets:
- Students: one styled row per record
- Summary:  the statistics plus the grade distribution (A+ .. F)
"""

from typing import Sequence

import openpyxl
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

from .grading import GRADE_TABLE
from .records import StudentRecord
from .statistics import StatisticsSnapshot, ordered_grade_counts

STUDENT_HEADERS = ['ID', 'Name', 'Roll No', 'Department', 'Email', 'Phone', 'Marks', 'Grade', 'GPA', 'Status']

HEADER_FILL = PatternFill(start_color="366092", end_color="366092", fill_type="solid")
HEADER_FONT = Font(bold=True, color="FFFFFF", size=11)
THIN_BORDER = Border(
    left=Side(style='thin'),
    right=Side(style='thin'),
    top=Side(style='thin'),
    bottom=Side(style='thin')
)


def _grade_label(grade: str) -> str:
    """e.g. 'A+ (>= 90)', 'F (< 50)'"""
    for idx, band in enumerate(GRADE_TABLE):
        if band.grade == grade:
            if idx == len(GRADE_TABLE) - 1:
                return f"{grade} (< {GRADE_TABLE[idx - 1].min_marks:g})"
            return f"{grade} (>= {band.min_marks:g})"
    return grade


def _autosize(ws, max_width: int = 50):
    for col_idx, column in enumerate(ws.columns, 1):
        max_length = max((len(str(cell.value)) for cell in column if cell.value is not None), default=0)
        ws.column_dimensions[get_column_letter(col_idx)].width = min(max_length + 2, max_width)


def _create_students_sheet(wb, records: Sequence[StudentRecord]):
    ws = wb.create_sheet("Students")

    ws.merge_cells(start_row=1, start_column=1, end_row=1, end_column=len(STUDENT_HEADERS))
    title_cell = ws['A1']
    title_cell.value = "Student Records"
    title_cell.font = Font(bold=True, size=14)
    title_cell.alignment = Alignment(horizontal='center')

    ws.append([])  # Empty row
    ws.append(STUDENT_HEADERS)

    for cell in ws[3]:
        cell.fill = HEADER_FILL
        cell.font = HEADER_FONT
        cell.border = THIN_BORDER
        cell.alignment = Alignment(horizontal='center')

    for record in records:
        ws.append([
            record.id,
            record.name,
            record.roll_no,
            record.department,
            record.email,
            record.phone,
            round(record.marks, 2),
            record.grade,
            record.gpa,
            record.status,
        ])
        ws.cell(row=ws.max_row, column=7).number_format = '0.00'

    _autosize(ws)

    # Freeze header row
    ws.freeze_panes = 'A4'
    return ws


def _create_summary_sheet(wb, stats: StatisticsSnapshot):
    ws = wb.create_sheet("Summary")

    ws.merge_cells('A1:B1')
    title_cell = ws['A1']
    title_cell.value = "Summary"
    title_cell.font = Font(bold=True, size=14)
    title_cell.alignment = Alignment(horizontal='center')

    ws.append([])  # Empty row

    stats_data = [
        ['Metric', 'Value'],
        ['Total Students', stats.total_count],
        ['Passed', stats.passed_count],
        ['Failed', stats.failed_count],
        ['Pass Percentage', f"{stats.pass_percentage:.1f}%"],
        ['Fail Percentage', f"{stats.fail_percentage:.1f}%"],
        [],
        ['Average Marks', f"{stats.average_marks:.2f}"],
        ['Highest Marks', f"{stats.highest_marks:.2f}"],
        ['Lowest Marks', f"{stats.lowest_marks:.2f}"],
    ]
    for row in stats_data:
        ws.append(row)

    for cell in ws[3]:
        cell.fill = HEADER_FILL
        cell.font = HEADER_FONT
        cell.alignment = Alignment(horizontal='center')

    ws.column_dimensions['A'].width = 35
    ws.column_dimensions['B'].width = 20

    def _section_header(label: str):
        ws.append([])
        ws.append([label, 'Count'])
        header_row = ws.max_row
        for col in ('A', 'B'):
            ws[f"{col}{header_row}"].fill = HEADER_FILL
            ws[f"{col}{header_row}"].font = Font(bold=True, color="FFFFFF")

    _section_header('Grade Distribution')
    for grade, count in ordered_grade_counts(stats.grade_counts):
        ws.append([_grade_label(grade), count])

    _section_header('Department Distribution')
    for department, count in stats.department_counts.items():
        ws.append([department, count])

    return ws


def build_workbook(records: Sequence[StudentRecord], stats: StatisticsSnapshot) -> openpyxl.Workbook:
    """
    Build the export workbook for a snapshot of records.

    Example:
        >>> records = store.get_all()
        >>> build_workbook(records, compute_statistics(records)).save('students.xlsx')
    """
    wb = openpyxl.Workbook()
    wb.remove(wb.active)  # Remove default sheet

    _create_students_sheet(wb, records)
    _create_summary_sheet(wb, stats)
    return wb
