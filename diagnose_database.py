"""
Database diagnostic script - check what's actually stored.

This script helps debug issues with records not showing up as expected.
"""

import argparse

from database import Database, DatabaseConfig, Student, User
from queries import GradeFormatter, StudentQueries


def check_database_contents(db: Database, sample_size: int = 3):
    """Check what's actually in the database."""
    session = db.get_session()

    try:
        print("\n" + "=" * 80)
        print("DATABASE DIAGNOSTIC REPORT")
        print("=" * 80)
        print(f"Database: {db.engine.url}")

        users = session.query(User).all()
        print(f"\n👤 Users: {len(users)} total")
        for u in users:
            print(f"  - {u.username} ({u.role})")

        students = session.query(Student).order_by(Student.id).all()
        print(f"\n📊 Students: {len(students)} total")
        if students:
            print("\nSample students:")
            for s in students[:sample_size]:
                print(f"  - {s.name} ({s.roll_no}) - {s.department} - {s.marks:.2f}")

            missing_email = sum(1 for s in students if not s.email)
            missing_phone = sum(1 for s in students if not s.phone)
            print(f"\n  - Without email: {missing_email}")
            print(f"  - Without phone: {missing_phone}")
    finally:
        session.close()

    store = StudentQueries(db)
    departments = store.list_distinct_departments()
    print(f"\n📚 Departments: {len(departments)} total")
    for d in departments:
        print(f"  - {d}")

    print()
    print(GradeFormatter.format_statistics(store.get_statistics()))


if __name__ == '__main__':
    parser = argparse.ArgumentParser(description="Print what the records database contains.")
    parser.add_argument("--env-file", help="Path to a .env file")
    parser.add_argument("-n", "--sample-size", type=int, default=3, help="Number of sample students to show")
    args = parser.parse_args()

    with Database(DatabaseConfig.from_env(args.env_file)) as db:
        check_database_contents(db, args.sample_size)
