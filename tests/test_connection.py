import pytest
from sqlalchemy.pool import StaticPool

from database import Database, DatabaseConfig, Student

ENV_VARS = ['DATABASE_URL', 'DB_TYPE', 'DB_USER', 'DB_PASSWORD', 'DB_HOST',
            'DB_PORT', 'DB_NAME', 'DB_ECHO', 'SQLITE_PATH']


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    for var in ENV_VARS:
        # set-then-delete so monkeypatch also removes whatever load_dotenv adds
        monkeypatch.setenv(var, '')
        monkeypatch.delenv(var)
    # An empty .env so the project's own file (if any) is not picked up
    env_file = tmp_path / '.env'
    env_file.write_text('')
    return env_file


def test_defaults_to_sqlite_file(clean_env):
    config = DatabaseConfig.from_env(str(clean_env))
    assert config.is_sqlite
    assert config.url.endswith('students.db')
    assert config.echo is False


def test_sqlite_path_override(clean_env, monkeypatch, tmp_path):
    monkeypatch.setenv('SQLITE_PATH', str(tmp_path / 'roster.db'))
    config = DatabaseConfig.from_env(str(clean_env))
    assert config.url == f"sqlite:///{tmp_path / 'roster.db'}"


def test_database_url_wins(clean_env, monkeypatch):
    monkeypatch.setenv('DB_TYPE', 'postgresql')
    monkeypatch.setenv('DATABASE_URL', 'sqlite:///elsewhere.db')
    assert DatabaseConfig.from_env(str(clean_env)).url == 'sqlite:///elsewhere.db'


def test_server_settings_from_env_file(clean_env):
    clean_env.write_text(
        "DB_TYPE=postgresql\n"
        "DB_USER=registrar\n"
        "DB_PASSWORD=pw\n"
        "DB_HOST=db.internal\n"
        "DB_NAME=records\n"
        "DB_ECHO=True\n"
    )
    config = DatabaseConfig.from_env(str(clean_env))
    assert config.url == 'postgresql://registrar:pw@db.internal:5432/records'
    assert config.echo is True
    assert not config.is_sqlite


def test_mysql_uses_pymysql_and_default_port(clean_env, monkeypatch):
    monkeypatch.setenv('DB_TYPE', 'mysql')
    config = DatabaseConfig.from_env(str(clean_env))
    assert config.url == 'mysql+pymysql://root:@localhost:3306/smartstudent'


def test_session_scope_commits_and_rolls_back():
    with Database(DatabaseConfig.in_memory()) as db:
        db.create_all()
        assert isinstance(db.engine.pool, StaticPool)

        with db.session_scope() as session:
            session.add(Student(name='Jane', roll_no='R1', department='Physics', marks=80))

        with pytest.raises(RuntimeError):
            with db.session_scope() as session:
                session.add(Student(name='Joe', roll_no='R2', department='Physics', marks=60))
                session.flush()
                raise RuntimeError("boom")

        session = db.get_session()
        try:
            assert [s.roll_no for s in session.query(Student).all()] == ['R1']
        finally:
            session.close()


def test_ping(tmp_path):
    with Database(DatabaseConfig.in_memory()) as db:
        assert db.ping()

    unreachable = Database(DatabaseConfig(url=f"sqlite:///{tmp_path / 'missing' / 'x.db'}"))
    try:
        assert not unreachable.ping()
    finally:
        unreachable.dispose()
