import sqlite3

import pytest

from timetrack.schema import create_schema


@pytest.fixture
def connection():
    conn = sqlite3.connect(":memory:")
    create_schema(conn)
    yield conn
    conn.close()


def _tables(conn):
    rows = conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'")
    return {name for (name,) in rows}


def test_creates_all_tables(connection):
    assert {"client", "project", "task", "project_task", "profile", "time"} <= _tables(connection)


def test_is_idempotent(connection):
    before = _tables(connection)
    create_schema(connection)
    assert _tables(connection) == before


def test_time_entries_unique_per_day(connection):
    insert = "INSERT INTO time (account_id, profile_id, project_id, task_id, day, hours) VALUES (1, 2, 3, 4, '2017-11-13', 1.5)"
    connection.execute(insert)
    with pytest.raises(sqlite3.IntegrityError):
        connection.execute(insert)


def test_task_defaults(connection):
    connection.execute("INSERT INTO task (account_id, task_name) VALUES (1, 'Design')")
    active, billable, rate = connection.execute(
        "SELECT task_active, default_billable, default_rate FROM task"
    ).fetchone()
    assert active == 1
    assert billable == 0
    assert rate is None