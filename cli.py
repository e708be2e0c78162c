#!/usr/bin/env python3
"""
Student Records Management System - Command Line Interface

A menu-driven front end for adding, editing, searching and exporting
student records, with roster statistics and grade distributions.
"""

import argparse
import getpass
import logging
import sys
import warnings
from datetime import datetime
from typing import Callable, List, Optional

from database import Database, DatabaseConfig
from database.init_db import init_database
from queries import (
    GradeFormatter, RecordsError, SearchRouter, StudentQueries, StudentRecord,
    UserQueries, build_student_record, compute_statistics,
)
from queries.formatting import default_export_filename, write_export
from queries.search import ALL, MARKS_RANGE, MODE_LABELS, SEARCH_MODES
from queries.validation import preview_grade
from queries.workbook import build_workbook

# Suppress openpyxl warnings about missing thumbnails
warnings.filterwarnings('ignore', category=UserWarning, module='openpyxl')

logger = logging.getLogger(__name__)

APP_TITLE = "Student Records Management System"
MAX_LOGIN_ATTEMPTS = 3
CLEAR_FIELD = '-'
DEFAULT_DEPARTMENTS = [
    'Computer Science', 'Electrical Engineering', 'Mechanical Engineering',
    'Civil Engineering', 'Mathematics', 'Physics',
]


class MenuItem:
    """Represents a single menu item."""

    def __init__(self, key: str, label: str, action: Callable, description: str = ""):
        self.key = key
        self.label = label
        self.action = action
        self.description = description

    def display(self) -> str:
        """Return formatted menu item for display."""
        return f"  {self.key}. {self.label}"


class MenuSystem:
    """Handles menu display and navigation."""

    def __init__(self, title: str, user: Optional[str] = None):
        self.title = title
        self.user = user
        self.items: List[MenuItem] = []
        self.running = True

    def add_item(self, key: str, label: str, action: Callable, description: str = ""):
        """Add a menu item."""
        self.items.append(MenuItem(key, label, action, description))

    def add_separator(self):
        """Add a visual separator."""
        self.items.append(MenuItem("", "", lambda: None))

    def display(self):
        """Display the menu."""
        print("\n" + "=" * 80)
        print(self.title)
        if self.user:
            print(f"Logged in as: {self.user}")
        print("=" * 80)
        print()

        for item in self.items:
            if item.key:  # Skip separators in display
                print(item.display())
            else:
                print()  # Empty line for separator

        print("\n  0. Exit")
        print("=" * 80)

    def get_choice(self) -> str:
        """Get user's menu choice."""
        while True:
            choice = input("\nEnter your choice: ").strip()
            if choice == "0":
                return "0"

            if any(item.key == choice for item in self.items if item.key):
                return choice

            print("✗ Invalid choice. Please try again.")

    def run(self):
        """Run the menu loop."""
        while self.running:
            self.display()
            choice = self.get_choice()

            if choice == "0":
                self.running = False
                print("\nGoodbye!")
                break

            for item in self.items:
                if item.key == choice:
                    print("\n" + "=" * 80)
                    try:
                        item.action()
                    except KeyboardInterrupt:
                        print("\n\n⚠️  Action cancelled by user.")
                    except RecordsError as e:
                        print(f"\n✗ {e}")
                    except Exception as e:
                        print(f"\n✗ Error: {e}")
                        logger.exception(f"Menu action '{item.label}' failed")
                    print("=" * 80)
                    input("\n[Press Enter to continue]")
                    break


class CLIActions:
    """All CLI actions organized by category."""

    def __init__(self, store: StudentQueries):
        self.store = store
        self.router = SearchRouter(store)
        # Last search results; kept when a search fails
        self.results: List[StudentRecord] = []

    # =========================================================================
    # VIEW & SEARCH
    # =========================================================================

    def list_students(self):
        """Show every student."""
        print("ALL STUDENTS")
        print("-" * 80)
        self.results = self.store.get_all()
        print(GradeFormatter.format_student_list(self.results))

    def lookup_student(self):
        """Show one student's full profile by roll number."""
        roll_no = input("Enter roll number: ").strip()
        student = self.store.get_by_roll_no(roll_no)
        if student:
            print(GradeFormatter.format_single_student(student))
        else:
            print(f"\n✗ No student found with roll number '{roll_no}'")

    def search_students(self):
        """Search by name, roll number, department or marks range."""
        print("SEARCH STUDENTS")
        print("-" * 80)
        print("\nSearch by:")
        for idx, mode in enumerate(SEARCH_MODES, 1):
            print(f"  {idx}. {MODE_LABELS[mode]}")

        choice = input(f"\nEnter choice (1-{len(SEARCH_MODES)}): ").strip()
        try:
            mode = SEARCH_MODES[int(choice) - 1]
        except (ValueError, IndexError):
            print("✗ Invalid choice")
            return

        prompt = "Enter marks range (e.g. 70-90): " if mode == MARKS_RANGE else "Enter search text: "
        text = input(prompt).strip() if mode != ALL else ''

        try:
            results = self.router.search(mode, text)
        except RecordsError as e:
            print(f"\n✗ {e}")
            if self.results:
                print("\nShowing previous results:")
                print(GradeFormatter.format_student_list(self.results))
            return

        self.results = results
        print(GradeFormatter.format_student_list(results))

    def show_statistics(self):
        """Show roster statistics."""
        stats = self.store.get_statistics()
        print(GradeFormatter.format_statistics(stats))

    def show_top_performers(self):
        """Show the ten highest-scoring students."""
        print(GradeFormatter.format_top_performers(self.store.get_top_performers(10)))

    # =========================================================================
    # ADD / EDIT / DELETE
    # =========================================================================

    def add_student(self):
        """Add a new student."""
        print("ADD STUDENT")
        print("-" * 80)
        roll_no = input("Roll No: ").strip()
        if roll_no and self.store.exists_by_roll_no(roll_no):
            print("\n✗ A student with this Roll No already exists!")
            return

        record = self._prompt_student_fields(roll_no)
        saved = self.store.insert(record)
        print(f"\n✓ Student added successfully! (ID {saved.id})")

    def edit_student(self):
        """Edit an existing student (roll number cannot change)."""
        print("EDIT STUDENT")
        print("-" * 80)
        roll_no = input("Roll No of student to edit: ").strip()
        current = self.store.get_by_roll_no(roll_no)
        if not current:
            print(f"\n✗ No student found with roll number '{roll_no}'")
            return

        print(GradeFormatter.format_single_student(current))
        print(f"\nPress Enter to keep the current value ('{CLEAR_FIELD}' clears Email or Phone).")
        record = self._prompt_student_fields(roll_no, current)
        self.store.update(roll_no, record)
        print("\n✓ Student updated successfully!")

    def delete_student(self):
        """Delete a student after confirmation."""
        print("DELETE STUDENT")
        print("-" * 80)
        roll_no = input("Roll No of student to delete: ").strip()
        current = self.store.get_by_roll_no(roll_no)
        if not current:
            print(f"\n✗ No student found with roll number '{roll_no}'")
            return

        confirm = input(
            f"Are you sure you want to delete student '{current.name}' (Roll No: {roll_no})? (y/n): "
        ).strip().lower()
        if confirm != 'y':
            print("Cancelled.")
            return

        self.store.delete(roll_no)
        print("\n✓ Student deleted successfully")

    # =========================================================================
    # EXPORTS
    # =========================================================================

    def export_csv(self):
        records = self.store.get_all()
        filename = self._ask_filename('students', 'csv')
        write_export(GradeFormatter.to_csv(records), filename)
        print(f"\n✓ Exported {len(records)} student(s) to {filename}")

    def export_report(self):
        records = self.store.get_all()
        filename = self._ask_filename('students', 'txt')
        write_export(GradeFormatter.to_report(records, compute_statistics(records)), filename)
        print(f"\n✓ Exported report for {len(records)} student(s) to {filename}")

    def export_statistics(self):
        stats = self.store.get_statistics()
        filename = self._ask_filename('statistics_report', 'txt')
        write_export(GradeFormatter.format_statistics(stats, generated_at=datetime.now()) + "\n", filename)
        print(f"\n✓ Statistics exported to {filename}")

    def export_workbook(self):
        records = self.store.get_all()
        filename = self._ask_filename('students', 'xlsx')
        build_workbook(records, compute_statistics(records)).save(filename)
        print(f"\n✓ Created {filename} ({len(records)} student(s))")

    # =========================================================================
    # HELPER METHODS
    # =========================================================================

    def _prompt_student_fields(self, roll_no: str,
                               current: Optional[StudentRecord] = None) -> StudentRecord:
        def ask(label: str, existing: str = '', clearable: bool = False) -> str:
            suffix = f" [{existing}]" if existing else ""
            value = input(f"{label}{suffix}: ").strip()
            if clearable and value == CLEAR_FIELD:
                return ''
            return value or existing

        departments = sorted(set(DEFAULT_DEPARTMENTS) | set(self.store.list_distinct_departments()))
        print("\nDepartments: " + ", ".join(departments))

        name = ask("Name", current.name if current else '')
        department = ask("Department", current.department if current else '')
        email = ask("Email", current.email if current else '', clearable=True)
        phone = ask("Phone", current.phone if current else '', clearable=True)
        marks = ask("Marks", f"{current.marks:.2f}" if current else '')

        grade, status = preview_grade(marks)
        print(f"Grade: {grade}   Status: {status}")

        return build_student_record(name, roll_no, department, email, phone, marks)

    def _ask_filename(self, prefix: str, extension: str) -> str:
        default = default_export_filename(prefix, extension)
        filename = input(f"Filename [{default}]: ").strip() or default
        if not filename.endswith(f".{extension}"):
            filename += f".{extension}"
        return filename


def login(users: UserQueries, attempts: int = MAX_LOGIN_ATTEMPTS):
    """Prompt for credentials; returns the account or None after too many failures."""
    for attempt in range(1, attempts + 1):
        username = input("Username: ").strip()
        password = getpass.getpass("Password: ")
        if not username or not password:
            print("✗ Please enter both username and password")
            continue

        account = users.find_by_credentials(username, password)
        if account:
            print(f"\n✓ Welcome, {account.username}!")
            return account

        remaining = attempts - attempt
        print(f"✗ Invalid username or password ({remaining} attempt(s) left)")

    return None


def build_menu(actions: CLIActions, user: Optional[str] = None) -> MenuSystem:
    menu = MenuSystem(APP_TITLE, user)

    menu.add_item("1", "≡ List all students", actions.list_students)
    menu.add_item("2", "⌕ Look up student by roll number", actions.lookup_student)
    menu.add_item("3", "⌕ Search students", actions.search_students)

    menu.add_separator()

    menu.add_item("4", "+ Add student", actions.add_student)
    menu.add_item("5", "✎ Edit student", actions.edit_student)
    menu.add_item("6", "✗ Delete student", actions.delete_student)

    menu.add_separator()

    menu.add_item("7", "∑ Statistics", actions.show_statistics)
    menu.add_item("8", "★ Top performers", actions.show_top_performers)

    menu.add_separator()

    menu.add_item("9", "↥ Export to CSV", actions.export_csv)
    menu.add_item("10", "⎙ Export text report", actions.export_report)
    menu.add_item("11", "⎙ Export statistics report", actions.export_statistics)
    menu.add_item("12", "↥ Export Excel workbook", actions.export_workbook)
    return menu


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(description=APP_TITLE)
    parser.add_argument("--env-file", help="Path to a .env file with database settings")
    parser.add_argument("--database-url", help="SQLAlchemy URL (overrides the environment)")
    parser.add_argument("--no-login", action="store_true", help="Skip the login prompt")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format='%(levelname)s %(name)s: %(message)s')

    if args.database_url:
        config = DatabaseConfig(url=args.database_url)
    else:
        config = DatabaseConfig.from_env(args.env_file)

    with Database(config) as db:
        if not db.ping():
            print("\n✗ Could not connect to the database. Check your settings.")
            return 1
        init_database(db)

        user = None
        if not args.no_login:
            account = login(UserQueries(db))
            if account is None:
                print("\n✗ Too many failed login attempts.")
                return 1
            user = f"{account.username} ({account.role})"

        menu = build_menu(CLIActions(StudentQueries(db)), user)
        menu.run()
    return 0


if __name__ == '__main__':
    sys.exit(main())
