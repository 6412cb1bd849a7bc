"""Request handling for the reporting endpoints."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Callable, Mapping, Union
from urllib.parse import parse_qs

from .api import AppError, ErrorCode, UserContext
from .reporting import ReportingService
from .reporting_export import (
    ClientReportResponse,
    CsvExport,
    PersonReportResponse,
    ProjectReportResponse,
    TaskReportResponse,
    adjust_for_week_start,
    export_client_reports,
    export_person_reports,
    export_project_reports,
    export_task_reports,
    new_client_reports_response,
    new_person_reports_response,
    new_project_reports_response,
    new_task_reports_response,
)
from .valid import is_int, is_null

_DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")

_ISO_FORMAT_MESSAGE = "Invalid format. Use ISO8061: YYYY-MM-DD"

# Method, path and handler method name for each reporting endpoint. Every
# route requires an authenticated user with a valid profile and session.
ROUTES = (
    ("GET", "/time/client", "get_time_by_client"),
    ("GET", "/time/project", "get_time_by_project"),
    ("GET", "/time/task", "get_time_by_task"),
    ("GET", "/time/person", "get_time_by_person"),
    ("GET", "/time/export/client", "export_time_by_client"),
    ("GET", "/time/export/project", "export_time_by_project"),
    ("GET", "/time/export/task", "export_time_by_task"),
    ("GET", "/time/export/person", "export_time_by_person"),
)

Query = Union[str, Mapping[str, Any], None]


@dataclass(frozen=True)
class ReportQuery:
    """The date range and page a report is asked for; no end date means today."""

    from_date: date
    to_date: date | None = None
    page: int = 0


def _parse_day(text: str) -> date:
    if not _DATE_RE.fullmatch(text):
        raise ValueError(f'parsing time "{text}": expected YYYY-MM-DD')
    return date.fromisoformat(text)


def _params(query: Query) -> Mapping[str, Any]:
    if query is None:
        return {}
    if isinstance(query, str):
        return parse_qs(query.lstrip("?"), keep_blank_values=True)
    return query


def _get(params: Mapping[str, Any], key: str) -> str:
    value = params.get(key)
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return str(value[0]) if value else ""
    return str(value)


def parse_report_query(query: Query, paged: bool = True) -> ReportQuery:
    """Read ``from``, ``to`` and, when paged, ``page`` from the query parameters."""
    params = _params(query)
    from_text = _get(params, "from")
    if is_null(from_text):
        raise AppError("No from parameter", ErrorCode.INVALID_FIELD, field="from", status=400)
    try:
        from_date = _parse_day(from_text)
    except ValueError as err:
        raise AppError(
            _ISO_FORMAT_MESSAGE, ErrorCode.INVALID_FIELD, field=from_text, status=400
        ) from err

    to_date: date | None = None
    to_text = _get(params, "to")
    if not is_null(to_text):
        try:
            to_date = _parse_day(to_text)
        except ValueError as err:
            raise AppError(
                _ISO_FORMAT_MESSAGE, ErrorCode.INVALID_FIELD, field=to_text, status=400
            ) from err

    page = 0
    if paged:
        page_text = _get(params, "page")
        if not is_null(page_text):
            parsed = is_int(page_text)
            if parsed is None:
                raise AppError(
                    "Invalid page offset", ErrorCode.INVALID_FIELD, field=page_text, status=500
                )
            page = parsed
    return ReportQuery(from_date=from_date, to_date=to_date, page=page)


def _require_user(user: UserContext | None) -> UserContext:
    if user is None:
        raise AppError("Invalid profile context", ErrorCode.SYSTEM_ERROR, status=500)
    return user


class ReportingHandlers:
    """Validates report requests and turns them into service calls."""

    def __init__(
        self,
        service: ReportingService,
        clock: Callable[[], date] | None = None,
    ) -> None:
        self._service = service
        self._clock = clock or date.today

    def _today(self) -> date:
        now = self._clock()
        return now.date() if isinstance(now, datetime) else now

    def _resolve(
        self, user: UserContext | None, query: Query, paged: bool
    ) -> tuple[UserContext, date, date, int]:
        parsed = parse_report_query(query, paged)
        to_date = parsed.to_date if parsed.to_date is not None else self._today()
        return _require_user(user), parsed.from_date, to_date, parsed.page

    def get_time_by_client(
        self, user: UserContext | None, query: Query
    ) -> list[ClientReportResponse | None]:
        """Totals per client, with the range shifted to the account's week start."""
        user, from_date, to_date, page = self._resolve(user, query, True)
        from_date, to_date = adjust_for_week_start(
            from_date, to_date, user.week_start, self._today()
        )
        rows = self._service.get_time_by_client(user.account_id, from_date, to_date, page)
        return new_client_reports_response(rows)

    def get_time_by_project(
        self, user: UserContext | None, query: Query
    ) -> list[ProjectReportResponse | None]:
        """Totals per project."""
        user, from_date, to_date, page = self._resolve(user, query, True)
        rows = self._service.get_time_by_project(user.account_id, from_date, to_date, page)
        return new_project_reports_response(rows)

    def get_time_by_task(
        self, user: UserContext | None, query: Query
    ) -> list[TaskReportResponse | None]:
        """Totals per task."""
        user, from_date, to_date, page = self._resolve(user, query, True)
        rows = self._service.get_time_by_task(user.account_id, from_date, to_date, page)
        return new_task_reports_response(rows)

    def get_time_by_person(
        self, user: UserContext | None, query: Query
    ) -> list[PersonReportResponse | None]:
        """Totals per person."""
        user, from_date, to_date, page = self._resolve(user, query, True)
        rows = self._service.get_time_by_person(user.account_id, from_date, to_date, page)
        return new_person_reports_response(rows)

    def export_time_by_client(self, user: UserContext | None, query: Query) -> CsvExport:
        """The first page of client totals as a CSV download."""
        user, from_date, to_date, _ = self._resolve(user, query, False)
        rows = self._service.get_time_by_client(user.account_id, from_date, to_date, 0)
        return export_client_reports(user.company, from_date, to_date, rows)

    def export_time_by_project(self, user: UserContext | None, query: Query) -> CsvExport:
        """The first page of project totals as a CSV download."""
        user, from_date, to_date, _ = self._resolve(user, query, False)
        rows = self._service.get_time_by_project(user.account_id, from_date, to_date, 0)
        return export_project_reports(user.company, from_date, to_date, rows)

    def export_time_by_task(self, user: UserContext | None, query: Query) -> CsvExport:
        """The first page of task totals as a CSV download."""
        user, from_date, to_date, _ = self._resolve(user, query, False)
        rows = self._service.get_time_by_task(user.account_id, from_date, to_date, 0)
        return export_task_reports(user.company, from_date, to_date, rows)

    def export_time_by_person(self, user: UserContext | None, query: Query) -> CsvExport:
        """The first page of person totals as a CSV download."""
        user, from_date, to_date, _ = self._resolve(user, query, False)
        rows = self._service.get_time_by_person(user.account_id, from_date, to_date, 0)
        return export_person_reports(user.company, from_date, to_date, rows)