"""Report rows and the reporting service."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Callable, Protocol, TypeVar

from .api import AppError, ErrorCode

_R = TypeVar("_R")


@dataclass
class ClientReport:
    """Hours and billable totals booked for one client."""

    client_id: int = 0
    client_name: str = ""
    non_billable_hours: float | None = None
    billable_hours: float | None = None
    billable_total: float | None = None


@dataclass
class ProjectReport:
    """Hours and billable totals booked for one project."""

    project_id: int = 0
    project_name: str = ""
    client_name: str = ""
    non_billable_hours: float | None = None
    billable_hours: float | None = None
    billable_total: float | None = None


@dataclass
class TaskReport:
    """Hours and billable totals booked for one task."""

    task_id: int = 0
    client_id: int = 0
    task_name: str = ""
    non_billable_hours: float | None = None
    billable_hours: float | None = None
    billable_total: float | None = None


@dataclass
class PersonReport:
    """Hours and billable totals booked by one person."""

    profile_id: int = 0
    first_name: str = ""
    last_name: str = ""
    non_billable_hours: float | None = None
    billable_hours: float | None = None
    billable_total: float | None = None


class ReportingStore(Protocol):
    """Source of aggregated report rows, one page at a time."""

    def get_time_by_client(
        self, account_id: int, from_date: date, to_date: date, offset: int
    ) -> list[ClientReport] | None: ...

    def get_time_by_project(
        self, account_id: int, from_date: date, to_date: date, offset: int
    ) -> list[ProjectReport] | None: ...

    def get_time_by_task(
        self, account_id: int, from_date: date, to_date: date, offset: int
    ) -> list[TaskReport] | None: ...

    def get_time_by_person(
        self, account_id: int, from_date: date, to_date: date, offset: int
    ) -> list[PersonReport] | None: ...


def _wrap(call: Callable[[], _R], failure: str) -> _R:
    try:
        return call()
    except Exception as err:
        raise AppError(failure, ErrorCode.SYSTEM_ERROR) from err


class ReportingService:
    """Report queries, reporting store failures as :class:`AppError`."""

    def __init__(self, store: ReportingStore) -> None:
        self._store = store

    def get_time_by_client(
        self, account_id: int, from_date: date, to_date: date, offset: int
    ) -> list[ClientReport] | None:
        return _wrap(
            lambda: self._store.get_time_by_client(account_id, from_date, to_date, offset),
            "Failed to get time by client",
        )

    def get_time_by_project(
        self, account_id: int, from_date: date, to_date: date, offset: int
    ) -> list[ProjectReport] | None:
        return _wrap(
            lambda: self._store.get_time_by_project(account_id, from_date, to_date, offset),
            "Failed to get time by project",
        )

    def get_time_by_task(
        self, account_id: int, from_date: date, to_date: date, offset: int
    ) -> list[TaskReport] | None:
        return _wrap(
            lambda: self._store.get_time_by_task(account_id, from_date, to_date, offset),
            "Failed to get time by project",
        )

    def get_time_by_person(
        self, account_id: int, from_date: date, to_date: date, offset: int
    ) -> list[PersonReport] | None:
        return _wrap(
            lambda: self._store.get_time_by_person(account_id, from_date, to_date, offset),
            "Failed to get time by person",
        )