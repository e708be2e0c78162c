from sqlalchemy import create_engine, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Optional
import logging
import os
from pathlib import Path
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

PROJECT_DIR = Path(os.path.dirname(os.path.abspath(__file__))).parent

# Create base class for models
Base = declarative_base()

DEFAULT_PORTS = {'postgresql': '5432', 'mysql': '3306'}
DRIVERS = {'postgresql': 'postgresql', 'mysql': 'mysql+pymysql'}


@dataclass(frozen=True)
class DatabaseConfig:
    """Where the records live and how to talk to them."""
    url: str
    echo: bool = False

    @property
    def is_sqlite(self) -> bool:
        return self.url.startswith('sqlite')

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> 'DatabaseConfig':
        """
        Build a config from environment variables (after loading a .env file).

        DATABASE_URL wins if set. Otherwise DB_TYPE picks the backend:
        'sqlite' (default), 'postgresql' or 'mysql'.
        """
        load_dotenv(env_file or (PROJECT_DIR / '.env').as_posix())

        echo = os.getenv('DB_ECHO', 'False') == 'True'
        url = os.getenv('DATABASE_URL')
        if url:
            return cls(url=url, echo=echo)

        db_type = os.getenv('DB_TYPE', 'sqlite').lower()
        if db_type in DRIVERS:
            user = os.getenv('DB_USER', 'root')
            password = os.getenv('DB_PASSWORD', '')
            host = os.getenv('DB_HOST', 'localhost')
            port = os.getenv('DB_PORT', DEFAULT_PORTS[db_type])
            name = os.getenv('DB_NAME', 'smartstudent')
            url = f"{DRIVERS[db_type]}://{user}:{password}@{host}:{port}/{name}"
        else:
            if db_type != 'sqlite':
                logger.warning(f"Unknown DB_TYPE '{db_type}', falling back to sqlite")
            db_path = os.getenv('SQLITE_PATH') or (PROJECT_DIR / 'students.db').as_posix()
            url = f"sqlite:///{db_path}"

        return cls(url=url, echo=echo)

    @classmethod
    def in_memory(cls) -> 'DatabaseConfig':
        return cls(url='sqlite://')


class Database:
    """
    Owns the SQLAlchemy engine and session factory for one application run.

    Acquire once, hand it to the query classes, dispose on shutdown:

    with Database(DatabaseConfig.from_env()) as db:
        store = StudentQueries(db)
    """

    def __init__(self, config: DatabaseConfig):
        self.config = config
        if config.is_sqlite:
            self.engine = create_engine(
                config.url,
                echo=config.echo,
                connect_args={"check_same_thread": False},  # Needed for SQLite with multiple threads
                poolclass=StaticPool
            )
        else:
            self.engine = create_engine(
                config.url,
                echo=config.echo,
                pool_pre_ping=True,
                pool_size=5,
                max_overflow=10
            )
        self._session_factory = sessionmaker(autocommit=False, autoflush=False,
                                             expire_on_commit=False, bind=self.engine)

    def get_session(self):
        """Get a database session (caller closes it)"""
        return self._session_factory()

    @contextmanager
    def session_scope(self):
        """
        Transactional scope: commit on success, roll back on error, always close.

        with db.session_scope() as session:
            session.add(row)
        """
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except BaseException:
            session.rollback()
            raise
        finally:
            session.close()

    def create_all(self):
        # Import here so the tables are registered on Base.metadata
        from . import models  # noqa: F401
        Base.metadata.create_all(bind=self.engine)

    def drop_all(self):
        from . import models  # noqa: F401
        Base.metadata.drop_all(bind=self.engine)

    def ping(self) -> bool:
        """Check that the store answers a trivial query."""
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError as e:
            logger.error(f"Database connection failed: {e}")
            return False

    def dispose(self):
        self.engine.dispose()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.dispose()

    def __repr__(self):
        return f"<Database {self.engine.url!r}>"
