#!/usr/bin/env python3
"""
Database initialization script.
Run this to create all tables (and optionally an admin login).

    python -m database.init_db [--drop] [--admin USERNAME PASSWORD]
"""

from sqlalchemy import inspect
from .connection import Base, Database, DatabaseConfig
import logging

logger = logging.getLogger(__name__)

EXPECTED_TABLES = {'students', 'users'}


def init_database(db: Database, drop_existing=False):
    """
    Initialize the database by creating all tables.

    Args:
        db: Database to initialize
        drop_existing (bool): If True, drop all existing tables first (DANGER!)
    """
    logger.info(f"Initializing database at: {db.engine.url}")

    if drop_existing:
        logger.warning("Dropping all existing tables...")
        db.drop_all()
        logger.info("Tables dropped.")

    logger.info("Creating tables...")
    db.create_all()
    logger.info("Tables created successfully!")

    logger.info("Created tables:")
    for table in Base.metadata.sorted_tables:
        logger.info(f"  - {table.name}")


def verify_database(db: Database) -> bool:
    """Verify database connection and tables exist"""
    inspector = inspect(db.engine)
    tables = inspector.get_table_names()

    logger.info(f"Database contains {len(tables)} tables:")
    for table in tables:
        logger.info(f"  - {table}")

    missing_tables = EXPECTED_TABLES - set(tables)

    if missing_tables:
        logger.error(f"Missing tables: {missing_tables}")
        return False

    logger.info("All expected tables exist!")
    return True


def main(argv=None):
    import argparse
    import sys
    from queries.user_queries import UserQueries
    from queries.errors import DuplicateKeyError

    parser = argparse.ArgumentParser(description="Create the student records tables.")
    parser.add_argument("--drop", action="store_true", help="Drop existing tables first")
    parser.add_argument("--admin", nargs=2, metavar=("USERNAME", "PASSWORD"),
                        help="Create an admin login")
    parser.add_argument("--env-file", help="Path to a .env file")
    args = parser.parse_args(argv)

    if args.drop:
        confirm = input("⚠️  This will DELETE ALL DATA. Are you sure? (yes/no): ")
        if confirm.lower() != 'yes':
            print("Aborted.")
            sys.exit(0)

    with Database(DatabaseConfig.from_env(args.env_file)) as db:
        init_database(db, drop_existing=args.drop)
        ok = verify_database(db)
        if args.admin:
            username, password = args.admin
            try:
                UserQueries(db).create_user(username, password)
            except DuplicateKeyError:
                logger.warning(f"User '{username}' already exists, leaving it unchanged")
    return 0 if ok else 1


if __name__ == '__main__':
    import sys

    logging.basicConfig(level=logging.INFO)
    sys.exit(main())
