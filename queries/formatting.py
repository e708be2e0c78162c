"""
Formatting utilities for displaying and exporting student records.

This module turns record snapshots and StatisticsSnapshot objects into
text: CSV for spreadsheets, fixed-width reports for printing, and the
tables shown in the terminal. Nothing here touches the database or the
filesystem except write_export().
"""

import csv
import io
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Sequence, Union

from .records import StudentRecord
from .statistics import StatisticsSnapshot, ordered_grade_counts, share

CSV_HEADER = ['ID', 'Name', 'Roll No', 'Department', 'Email', 'Phone', 'Marks', 'Grade', 'Status']

REPORT_TITLE = "STUDENT MANAGEMENT SYSTEM - EXPORT REPORT"
STATISTICS_TITLE = "STUDENT STATISTICS REPORT"
TIMESTAMP_FORMAT = '%Y-%m-%d %H:%M:%S'

NAME_WIDTH = 18
DEPARTMENT_WIDTH = 18
EMAIL_WIDTH = 23
ELLIPSIS = '...'


def truncate(value: Optional[str], width: int) -> str:
    """Cut value to width characters, ending in '...' when it was too long."""
    if not value:
        return ''
    if len(value) <= width:
        return value
    return value[:width - len(ELLIPSIS)] + ELLIPSIS


def default_export_filename(prefix: str = 'students', extension: str = 'csv',
                            now: Optional[datetime] = None) -> str:
    """e.g. students_20250301_142530.csv"""
    now = now or datetime.now()
    return f"{prefix}_{now.strftime('%Y%m%d_%H%M%S')}.{extension}"


def write_export(content: str, path: Union[str, Path]) -> Path:
    """Write an export as UTF-8 text and return where it went."""
    path = Path(path)
    with open(path, 'w', encoding='utf-8', newline='') as f:
        f.write(content)
    return path


class GradeFormatter:
    """Utilities for formatting student records into readable text."""

    @staticmethod
    def to_csv(records: Sequence[StudentRecord]) -> str:
        """
        Render records as CSV.

        Columns: ID, Name, Roll No, Department, Email, Phone, Marks, Grade, Status.
        Marks use two decimals. Fields are only quoted when they contain a
        comma, a double quote or a line break.

        Example:
            >>> GradeFormatter.to_csv([record]).splitlines()[0]
            'ID,Name,Roll No,Department,Email,Phone,Marks,Grade,Status'
        """
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator='\n')
        writer.writerow(CSV_HEADER)
        for record in records:
            writer.writerow([
                '' if record.id is None else record.id,
                record.name,
                record.roll_no,
                record.department,
                record.email,
                record.phone,
                f"{record.marks:.2f}",
                record.grade,
                record.status,
            ])
        return buffer.getvalue()

    @staticmethod
    def to_report(records: Sequence[StudentRecord], stats: StatisticsSnapshot,
                  generated_at: Optional[datetime] = None) -> str:
        """
        Render records and their statistics as a fixed-width text report.

        Args:
            records: Records to list, in display order
            stats: Statistics for the same records
            generated_at: Timestamp printed in the header (defaults to now)

        Returns:
            Multi-line report ending with a newline
        """
        generated_at = generated_at or datetime.now()

        lines = []
        lines.append(REPORT_TITLE)
        lines.append(f"Generated on: {generated_at.strftime(TIMESTAMP_FORMAT)}")
        lines.append(f"Total Students: {len(records)}")
        lines.append("=" * 80)
        lines.append("")
        lines.append(
            f"{'ID':<5} {'Name':<20} {'Roll No':<10} {'Department':<20} {'Email':<25} "
            f"{'Phone':<15} {'Marks':<8} {'Grade':<6} {'Status':<6}"
        )
        lines.append("-" * 80)

        for record in records:
            record_id = '' if record.id is None else str(record.id)
            lines.append(
                f"{record_id:<5} "
                f"{truncate(record.name, NAME_WIDTH):<20} "
                f"{record.roll_no:<10} "
                f"{truncate(record.department, DEPARTMENT_WIDTH):<20} "
                f"{truncate(record.email, EMAIL_WIDTH):<25} "
                f"{record.phone:<15} "
                f"{record.marks:<8.2f} "
                f"{record.grade:<6} "
                f"{record.status:<6}"
            )

        lines.append("")
        lines.append("=" * 80)
        lines.append("SUMMARY:")
        lines.append(f"Total Students: {stats.total_count}")
        lines.append(f"Passed: {stats.passed_count} ({stats.pass_percentage:.1f}%)")
        lines.append(f"Failed: {stats.failed_count} ({stats.fail_percentage:.1f}%)")
        lines.append(f"Average Marks: {stats.average_marks:.2f}")
        lines.append(f"Highest Marks: {stats.highest_marks:.2f}")
        lines.append(f"Lowest Marks: {stats.lowest_marks:.2f}")

        return "\n".join(lines) + "\n"

    @staticmethod
    def format_department_distribution(stats: StatisticsSnapshot) -> str:
        """Department, count and share of the roster, in first-seen order."""
        total = sum(stats.department_counts.values())

        lines = []
        lines.append(f"{'Department':<25} {'Count':>6} {'Percentage':>11}")
        lines.append("=" * 44)
        for department, count in stats.department_counts.items():
            lines.append(f"{department:<25} {count:>6} {share(count, total):>10.1f}%")
        return "\n".join(lines)

    @staticmethod
    def format_grade_distribution(stats: StatisticsSnapshot) -> str:
        """Every grade from A+ to F with its count and share, zeros included."""
        total = sum(stats.grade_counts.values())

        lines = []
        lines.append(f"{'Grade':<6} {'Count':>6} {'Percentage':>11}")
        lines.append("=" * 25)
        for grade, count in ordered_grade_counts(stats.grade_counts):
            lines.append(f"{grade:<6} {count:>6} {share(count, total):>10.1f}%")
        return "\n".join(lines)

    @staticmethod
    def format_statistics(stats: StatisticsSnapshot,
                          generated_at: Optional[datetime] = None) -> str:
        """
        Format the full statistics report.

        Args:
            stats: Statistics to show
            generated_at: If given, a 'Generated on' line is included

        Returns:
            Formatted multi-line string suitable for display or export
        """
        lines = []
        lines.append("=" * 80)
        lines.append(STATISTICS_TITLE)
        lines.append("=" * 80)
        if generated_at:
            lines.append(f"Generated on: {generated_at.strftime(TIMESTAMP_FORMAT)}")
        lines.append("")
        lines.append("OVERVIEW")
        lines.append("-" * 80)
        lines.append(f"Total Students:    {stats.total_count}")
        lines.append(f"Passed:            {stats.passed_count} ({stats.pass_percentage:.1f}%)")
        lines.append(f"Failed:            {stats.failed_count} ({stats.fail_percentage:.1f}%)")
        lines.append("")
        lines.append("MARKS ANALYSIS")
        lines.append("-" * 80)
        lines.append(f"Average:           {stats.average_marks:.2f}")
        lines.append(f"Highest:           {stats.highest_marks:.2f}")
        lines.append(f"Lowest:            {stats.lowest_marks:.2f}")
        lines.append("")
        lines.append("DEPARTMENT DISTRIBUTION")
        lines.append("-" * 80)
        if stats.department_counts:
            lines.append(GradeFormatter.format_department_distribution(stats))
        else:
            lines.append("No students found.")
        lines.append("")
        lines.append("GRADE DISTRIBUTION")
        lines.append("-" * 80)
        lines.append(GradeFormatter.format_grade_distribution(stats))
        lines.append("=" * 80)

        return "\n".join(lines)

    @staticmethod
    def format_student_list(records: Sequence[StudentRecord]) -> str:
        """
        Format a list of students in a table format.

        Returns:
            Formatted multi-line string suitable for display
        """
        if not records:
            return "No students found."

        lines = []
        lines.append(f"Found {len(records)} student(s)")
        lines.append("")
        lines.append("=" * 110)
        lines.append(
            f"{'ID':<5} {'Name':<25} {'Roll No':<12} {'Department':<25} "
            f"{'Marks':>7} {'Grade':<6} {'GPA':>4} {'Status':<6}"
        )
        lines.append("=" * 110)

        for record in records:
            lines.append(
                f"{record.id if record.id is not None else '':<5} "
                f"{truncate(record.name, 25):<25} "
                f"{record.roll_no[:12]:<12} "
                f"{truncate(record.department, 25):<25} "
                f"{record.marks:>7.2f} "
                f"{record.grade:<6} "
                f"{record.gpa:>4.1f} "
                f"{record.status:<6}"
            )

        lines.append("=" * 110)
        return "\n".join(lines)

    @staticmethod
    def format_single_student(record: Optional[StudentRecord]) -> str:
        """Format one student's full profile."""
        if not record:
            return "Student not found."

        lines = []
        lines.append("=" * 80)
        lines.append("STUDENT INFORMATION")
        lines.append("=" * 80)
        lines.append(f"Name:              {record.name}")
        lines.append(f"Roll No:           {record.roll_no}")
        lines.append(f"Department:        {record.department}")
        lines.append(f"Email:             {record.email or 'N/A'}")
        lines.append(f"Phone:             {record.phone or 'N/A'}")
        lines.append("")
        lines.append("-" * 80)
        lines.append("RESULT")
        lines.append("-" * 80)
        lines.append(f"Marks:             {record.marks:.2f}")
        lines.append(f"Grade:             {record.grade}")
        lines.append(f"GPA:               {record.gpa:.1f}")
        lines.append(f"Status:            {record.status}")

        if record.updated_at:
            lines.append("")
            lines.append(f"Last Updated: {record.updated_at.strftime(TIMESTAMP_FORMAT)}")

        lines.append("=" * 80)
        return "\n".join(lines)

    @staticmethod
    def format_top_performers(records: List[StudentRecord]) -> str:
        if not records:
            return "No students found."

        lines = []
        lines.append(f"TOP {len(records)} PERFORMERS")
        lines.append("=" * 80)
        for rank, record in enumerate(records, 1):
            lines.append(
                f"{rank}. {record.name} ({record.roll_no}) - "
                f"{record.marks:.2f} marks ({record.grade})"
            )
        lines.append("=" * 80)
        return "\n".join(lines)
