"""SQLite schema for tasks, time entries and the tables reports join against."""

from __future__ import annotations

import sqlite3

_SCHEMA = """
CREATE TABLE IF NOT EXISTS client (
    client_id   INTEGER PRIMARY KEY AUTOINCREMENT,
    account_id  INTEGER NOT NULL,
    client_name TEXT    NOT NULL
);

CREATE TABLE IF NOT EXISTS project (
    project_id     INTEGER PRIMARY KEY AUTOINCREMENT,
    account_id     INTEGER NOT NULL,
    client_id      INTEGER NOT NULL REFERENCES client (client_id),
    project_name   TEXT    NOT NULL,
    project_active BOOLEAN NOT NULL DEFAULT 1
);

CREATE TABLE IF NOT EXISTS task (
    task_id          INTEGER PRIMARY KEY AUTOINCREMENT,
    account_id       INTEGER NOT NULL,
    task_name        TEXT    NOT NULL,
    common           BOOLEAN NOT NULL DEFAULT 0,
    default_rate     REAL,
    default_billable BOOLEAN NOT NULL DEFAULT 0,
    task_active      BOOLEAN NOT NULL DEFAULT 1
);

CREATE TABLE IF NOT EXISTS project_task (
    account_id INTEGER NOT NULL,
    project_id INTEGER NOT NULL REFERENCES project (project_id),
    task_id    INTEGER NOT NULL REFERENCES task (task_id),
    rate       REAL,
    billable   BOOLEAN NOT NULL DEFAULT 0,
    PRIMARY KEY (project_id, task_id)
);

CREATE TABLE IF NOT EXISTS profile (
    profile_id INTEGER PRIMARY KEY AUTOINCREMENT,
    account_id INTEGER NOT NULL,
    first_name TEXT    NOT NULL,
    last_name  TEXT    NOT NULL
);

CREATE TABLE IF NOT EXISTS time (
    account_id INTEGER NOT NULL,
    profile_id INTEGER NOT NULL,
    project_id INTEGER NOT NULL,
    task_id    INTEGER NOT NULL,
    day        TEXT    NOT NULL,
    hours      REAL    NOT NULL DEFAULT 0.0,
    PRIMARY KEY (account_id, profile_id, project_id, task_id, day)
);
"""


def create_schema(connection: sqlite3.Connection) -> None:
    """Create every table the stores use, leaving existing tables alone."""
    connection.executescript(_SCHEMA)