"""
Login account queries.

Passwords are stored and compared verbatim.
"""

import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError

from database import Database, User
from .errors import DuplicateKeyError, InvalidFieldError
from .records import UserAccount
from .student_queries import store_errors

logger = logging.getLogger(__name__)

DEFAULT_ROLE = 'admin'


class UserQueries:
    """Lookups against the users table."""

    def __init__(self, database: Database):
        self.database = database

    def find_by_credentials(self, username: str, password: str) -> Optional[UserAccount]:
        """
        Return the account whose username and password both match exactly, or None.
        """
        db = self.database.get_session()
        try:
            with store_errors("authenticate user"):
                row = db.query(User).filter_by(username=username, password=password).first()
                return self._to_account(row) if row else None
        finally:
            db.close()

    def exists_by_username(self, username: str) -> bool:
        db = self.database.get_session()
        try:
            with store_errors("check username"):
                return db.query(User.id).filter_by(username=username).first() is not None
        finally:
            db.close()

    def create_user(self, username: str, password: str, role: Optional[str] = None) -> UserAccount:
        """
        Add a login account (role defaults to 'admin').

        Raises:
            InvalidFieldError: blank username or password
            DuplicateKeyError: username already taken
        """
        if not username or not username.strip():
            raise InvalidFieldError('username', "Please enter a username")
        if not password:
            raise InvalidFieldError('password', "Please enter a password")
        if self.exists_by_username(username):
            raise DuplicateKeyError(username, field='username')

        row = User(username=username, password=password, role=role or DEFAULT_ROLE)
        try:
            with store_errors("add user"), self.database.session_scope() as db:
                db.add(row)
                db.flush()
                account = self._to_account(row)
        except IntegrityError as e:
            raise DuplicateKeyError(username, field='username') from e

        logger.info(f"Created {account.role} account '{account.username}'")
        return account

    @staticmethod
    def _to_account(row: User) -> UserAccount:
        return UserAccount(
            id=row.id,
            username=row.username,
            password=row.password,
            role=row.role or DEFAULT_ROLE,
            created_at=row.created_at,
        )
