"""SQLite queries that total booked hours for the reports."""

from __future__ import annotations

import sqlite3
from datetime import date, datetime
from typing import Any, Callable, TypeVar

from .reporting import ClientReport, PersonReport, ProjectReport, TaskReport

REPORT_PAGINATION_LIMIT = 100

_R = TypeVar("_R")

# Hours on non-billable tasks, hours on billable tasks and the billable amount.
_TOTALS = """
    SUM(CASE WHEN NOT pt.billable THEN t.hours END)        AS non_billable_hours,
    SUM(CASE WHEN pt.billable THEN t.hours END)            AS billable_hours,
    SUM(CASE WHEN pt.billable THEN t.hours * pt.rate END)  AS billable_total
"""

_BOOKED_TIME = """
    t.account_id = ?
    AND t.account_id = pt.account_id
    AND t.project_id = pt.project_id
    AND t.task_id = pt.task_id
    AND t.hours > 0.0
    AND t.day >= ?
    AND t.day <= ?
"""

_BY_CLIENT = f"""
    SELECT c.client_id, c.client_name, {_TOTALS}
    FROM time t, project_task pt, project p, client c
    WHERE {_BOOKED_TIME}
      AND pt.project_id = p.project_id
      AND c.client_id = p.client_id
    GROUP BY c.client_id
    ORDER BY c.client_name
    LIMIT ? OFFSET ?
"""

_BY_PROJECT = f"""
    SELECT p.project_id, p.project_name, c.client_name,
           bt.non_billable_hours, bt.billable_hours, bt.billable_total
    FROM (SELECT t.project_id, {_TOTALS}
          FROM time t, project_task pt
          WHERE {_BOOKED_TIME}
          GROUP BY t.project_id
          ORDER BY t.project_id
          LIMIT ? OFFSET ?) bt,
         project p,
         client c
    WHERE bt.project_id = p.project_id
      AND p.client_id = c.client_id
    ORDER BY p.project_name
"""

_BY_TASK = f"""
    SELECT k.task_id, k.task_name,
           bt.non_billable_hours, bt.billable_hours, bt.billable_total
    FROM (SELECT t.task_id, {_TOTALS}
          FROM time t, project_task pt
          WHERE {_BOOKED_TIME}
          GROUP BY t.task_id
          ORDER BY t.task_id
          LIMIT ? OFFSET ?) bt,
         task k
    WHERE bt.task_id = k.task_id
    ORDER BY k.task_name
"""

_BY_PERSON = f"""
    SELECT p.profile_id, p.first_name, p.last_name, {_TOTALS}
    FROM time t, project_task pt, profile p
    WHERE {_BOOKED_TIME}
      AND t.profile_id = p.profile_id
    GROUP BY p.profile_id
    ORDER BY p.last_name
    LIMIT ? OFFSET ?
"""


def _format_date(day: date) -> str:
    if isinstance(day, datetime):
        day = day.date()
    return f"{day.year:04d}-{day.month:02d}-{day.day:02d}"


class SqliteReportingStore:
    """Reporting store backed by an SQLite connection; pages hold 100 rows."""

    def __init__(self, connection: sqlite3.Connection) -> None:
        self._connection = connection

    def _query(
        self,
        statement: str,
        account_id: int,
        from_date: date,
        to_date: date,
        offset: int,
        build: Callable[..., _R],
    ) -> list[_R]:
        params: tuple[Any, ...] = (
            account_id,
            _format_date(from_date),
            _format_date(to_date),
            REPORT_PAGINATION_LIMIT,
            offset * REPORT_PAGINATION_LIMIT,
        )
        return [build(*row) for row in self._connection.execute(statement, params)]

    def get_time_by_client(
        self, account_id: int, from_date: date, to_date: date, offset: int
    ) -> list[ClientReport]:
        """Totals per client, ordered by client name."""
        return self._query(
            _BY_CLIENT,
            account_id,
            from_date,
            to_date,
            offset,
            lambda client_id, name, non_billable, billable, total: ClientReport(
                client_id=client_id,
                client_name=name,
                non_billable_hours=non_billable,
                billable_hours=billable,
                billable_total=total,
            ),
        )

    def get_time_by_project(
        self, account_id: int, from_date: date, to_date: date, offset: int
    ) -> list[ProjectReport]:
        """Totals per project, ordered by project name."""
        return self._query(
            _BY_PROJECT,
            account_id,
            from_date,
            to_date,
            offset,
            lambda project_id, name, client, non_billable, billable, total: ProjectReport(
                project_id=project_id,
                project_name=name,
                client_name=client,
                non_billable_hours=non_billable,
                billable_hours=billable,
                billable_total=total,
            ),
        )

    def get_time_by_task(
        self, account_id: int, from_date: date, to_date: date, offset: int
    ) -> list[TaskReport]:
        """Totals per task, ordered by task name."""
        return self._query(
            _BY_TASK,
            account_id,
            from_date,
            to_date,
            offset,
            lambda task_id, name, non_billable, billable, total: TaskReport(
                task_id=task_id,
                task_name=name,
                non_billable_hours=non_billable,
                billable_hours=billable,
                billable_total=total,
            ),
        )

    def get_time_by_person(
        self, account_id: int, from_date: date, to_date: date, offset: int
    ) -> list[PersonReport]:
        """Totals per person, ordered by last name."""
        return self._query(
            _BY_PERSON,
            account_id,
            from_date,
            to_date,
            offset,
            lambda profile_id, first, last, non_billable, billable, total: PersonReport(
                profile_id=profile_id,
                first_name=first,
                last_name=last,
                non_billable_hours=non_billable,
                billable_hours=billable,
                billable_total=total,
            ),
        )