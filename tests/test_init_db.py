from database import Database, DatabaseConfig
from database.init_db import init_database, main, verify_database
from diagnose_database import check_database_contents
from queries import StudentQueries, UserQueries


def test_init_and_verify():
    with Database(DatabaseConfig.in_memory()) as db:
        assert not verify_database(db)
        init_database(db)
        assert verify_database(db)


def test_drop_existing_clears_data(store, db, roster):
    init_database(db, drop_existing=True)
    assert store.count() == 0


def test_main_creates_tables_and_admin(tmp_path, monkeypatch):
    db_path = tmp_path / 'students.db'
    monkeypatch.setenv('DATABASE_URL', f"sqlite:///{db_path}")

    assert main(['--admin', 'admin', 'admin123']) == 0
    # Running again leaves the existing admin alone
    assert main(['--admin', 'admin', 'other']) == 0

    with Database(DatabaseConfig(url=f"sqlite:///{db_path}")) as db:
        users = UserQueries(db)
        assert users.find_by_credentials('admin', 'admin123') is not None
        assert users.find_by_credentials('admin', 'other') is None


def test_diagnostics_report(db, roster, users, capsys):
    users.create_user('admin', 'admin123')
    check_database_contents(db, sample_size=2)
    out = capsys.readouterr().out

    assert 'Users: 1 total' in out
    assert f"Students: {len(roster)} total" in out
    assert 'Alice Smith (CS001)' in out
    assert 'Eve Adams' not in out.split('Departments')[0]
    assert 'Mathematics' in out
    assert 'STUDENT STATISTICS REPORT' in out


def test_store_on_file_database_persists_between_sessions(tmp_path, new_record):
    url = f"sqlite:///{tmp_path / 'roster.db'}"
    with Database(DatabaseConfig(url=url)) as db:
        init_database(db)
        StudentQueries(db).insert(new_record('R1', 77))

    with Database(DatabaseConfig(url=url)) as db:
        assert StudentQueries(db).get_by_roll_no('R1').grade == 'B'
