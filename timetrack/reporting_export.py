"""Report responses, week-start adjustment and CSV exports."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Any, Callable, Iterable, Sequence, TypeVar

from .reporting import ClientReport, PersonReport, ProjectReport, TaskReport

_D = TypeVar("_D", date, datetime)
_R = TypeVar("_R")

_NON_ALPHANUMERIC = re.compile(r"[^a-zA-Z0-9]+")

CLIENT_HEADER = ["Client Name", "Non-Billable Hours", "Billable Hours", "Billable Total"]
PROJECT_HEADER = [
    "Client Name",
    "Project Name",
    "Non-Billable Hours",
    "Billable Hours",
    "Billable Total",
]
TASK_HEADER = ["Task Name", "Non-Billable Hours", "Billable Hours", "Billable Total"]
PERSON_HEADER = [
    "Last Name",
    "First Name",
    "Non-Billable Hours",
    "Billable Hours",
    "Billable Total",
]


@dataclass
class ClientReportResponse:
    """A client report row as returned to API callers."""

    client_id: int = 0
    client_name: str = ""
    non_billable_hours: float = 0.0
    billable_hours: float = 0.0
    billable_total: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-ready mapping."""
        return {
            "clientId": self.client_id,
            "clientName": self.client_name,
            "nonBillableHours": self.non_billable_hours,
            "billableHours": self.billable_hours,
            "billableTotal": self.billable_total,
        }


@dataclass
class ProjectReportResponse:
    """A project report row as returned to API callers."""

    project_id: int = 0
    project_name: str = ""
    client_name: str = ""
    non_billable_hours: float = 0.0
    billable_hours: float = 0.0
    billable_total: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-ready mapping."""
        return {
            "projectId": self.project_id,
            "projectName": self.project_name,
            "clientName": self.client_name,
            "nonBillableHours": self.non_billable_hours,
            "billableHours": self.billable_hours,
            "billableTotal": self.billable_total,
        }


@dataclass
class TaskReportResponse:
    """A task report row as returned to API callers."""

    task_id: int = 0
    client_id: int = 0
    task_name: str = ""
    client_name: str = ""
    non_billable_hours: float = 0.0
    billable_hours: float = 0.0
    billable_total: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-ready mapping."""
        return {
            "taskId": self.task_id,
            "clientId": self.client_id,
            "taskName": self.task_name,
            "clientName": self.client_name,
            "nonBillableHours": self.non_billable_hours,
            "billableHours": self.billable_hours,
            "billableTotal": self.billable_total,
        }


@dataclass
class PersonReportResponse:
    """A person report row as returned to API callers."""

    profile_id: int = 0
    first_name: str = ""
    last_name: str = ""
    non_billable_hours: float = 0.0
    billable_hours: float = 0.0
    billable_total: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-ready mapping."""
        return {
            "profileId": self.profile_id,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "nonBillableHours": self.non_billable_hours,
            "billableHours": self.billable_hours,
            "billableTotal": self.billable_total,
        }


@dataclass(frozen=True)
class CsvExport:
    """A CSV download: its file name and content."""

    filename: str
    body: str
    content_type: str = "text/csv"

    @property
    def content_disposition(self) -> str:
        return f"attachment;filename={self.filename}"

    @property
    def headers(self) -> dict[str, str]:
        """The HTTP headers the download is sent with."""
        return {
            "Content-Type": self.content_type,
            "Content-Disposition": self.content_disposition,
        }


def _weekday(day: date) -> int:
    return (day.weekday() + 1) % 7


def adjust_for_week_start(
    from_date: _D, to_date: _D, week_start: int, today: date
) -> tuple[_D, _D]:
    """Shift a Sunday-based range to the account's week start (0 is Sunday)."""
    shift = week_start if week_start <= _weekday(today) else week_start - 7
    delta = timedelta(days=shift)
    return from_date + delta, to_date + delta


def _hours(value: float | None) -> float:
    return value if value is not None else 0.0


def _amount(value: float | None) -> str:
    return f" {_hours(value):.2f}"


def new_client_report_response(report: ClientReport | None) -> ClientReportResponse | None:
    """Convert a client report row to its response form."""
    if report is None:
        return None
    return ClientReportResponse(
        client_id=report.client_id,
        client_name=report.client_name,
        non_billable_hours=_hours(report.non_billable_hours),
        billable_hours=_hours(report.billable_hours),
        billable_total=_hours(report.billable_total),
    )


def new_project_report_response(report: ProjectReport | None) -> ProjectReportResponse | None:
    """Convert a project report row to its response form."""
    if report is None:
        return None
    return ProjectReportResponse(
        project_id=report.project_id,
        project_name=report.project_name,
        client_name=report.client_name,
        non_billable_hours=_hours(report.non_billable_hours),
        billable_hours=_hours(report.billable_hours),
        billable_total=_hours(report.billable_total),
    )


def new_task_report_response(report: TaskReport | None) -> TaskReportResponse | None:
    """Convert a task report row to its response form."""
    if report is None:
        return None
    return TaskReportResponse(
        task_id=report.task_id,
        client_id=report.client_id,
        task_name=report.task_name,
        non_billable_hours=_hours(report.non_billable_hours),
        billable_hours=_hours(report.billable_hours),
        billable_total=_hours(report.billable_total),
    )


def new_person_report_response(report: PersonReport | None) -> PersonReportResponse | None:
    """Convert a person report row to its response form."""
    if report is None:
        return None
    return PersonReportResponse(
        profile_id=report.profile_id,
        first_name=report.first_name,
        last_name=report.last_name,
        non_billable_hours=_hours(report.non_billable_hours),
        billable_hours=_hours(report.billable_hours),
        billable_total=_hours(report.billable_total),
    )


def _convert_all(rows: Iterable[Any] | None, convert: Callable[[Any], _R]) -> list[_R]:
    return [convert(row) for row in rows or ()]


def new_client_reports_response(
    rows: Sequence[ClientReport | None] | None,
) -> list[ClientReportResponse | None]:
    """Convert client report rows; no rows gives an empty list."""
    return _convert_all(rows, new_client_report_response)


def new_project_reports_response(
    rows: Sequence[ProjectReport | None] | None,
) -> list[ProjectReportResponse | None]:
    """Convert project report rows; no rows gives an empty list."""
    return _convert_all(rows, new_project_report_response)


def new_task_reports_response(
    rows: Sequence[TaskReport | None] | None,
) -> list[TaskReportResponse | None]:
    """Convert task report rows; no rows gives an empty list."""
    return _convert_all(rows, new_task_report_response)


def new_person_reports_response(
    rows: Sequence[PersonReport | None] | None,
) -> list[PersonReportResponse | None]:
    """Convert person report rows; no rows gives an empty list."""
    return _convert_all(rows, new_person_report_response)


def export_client_report_row(report: ClientReport | None) -> list[str]:
    """The CSV fields for a client report row."""
    if report is None:
        return []
    return [
        report.client_name,
        _amount(report.non_billable_hours),
        _amount(report.billable_hours),
        _amount(report.billable_total),
    ]


def export_project_report_row(report: ProjectReport | None) -> list[str]:
    """The CSV fields for a project report row."""
    if report is None:
        return []
    return [
        report.client_name,
        report.project_name,
        _amount(report.non_billable_hours),
        _amount(report.billable_hours),
        _amount(report.billable_total),
    ]


def export_task_report_row(report: TaskReport | None) -> list[str]:
    """The CSV fields for a task report row, ending in an empty fifth field."""
    if report is None:
        return []
    return [
        report.task_name,
        _amount(report.non_billable_hours),
        _amount(report.billable_hours),
        _amount(report.billable_total),
        "",
    ]


def export_person_report_row(report: PersonReport | None) -> list[str]:
    """The CSV fields for a person report row."""
    if report is None:
        return []
    return [
        report.last_name,
        report.first_name,
        _amount(report.non_billable_hours),
        _amount(report.billable_hours),
        _amount(report.billable_total),
    ]


def _format_date(day: date) -> str:
    if isinstance(day, datetime):
        day = day.date()
    return f"{day.year:04d}-{day.month:02d}-{day.day:02d}"


def export_filename(company_name: str, from_date: date, to_date: date) -> str:
    """The download name, with runs of non-alphanumerics in the company replaced by '-'."""
    clean = _NON_ALPHANUMERIC.sub("-", company_name)
    return f"export_{clean}_{_format_date(from_date)}_to_{_format_date(to_date)}.csv"


def _quote(field: str) -> str:
    if field == "":
        return field
    needs_quotes = (
        field == "\\."
        or "," in field
        or any(char in field for char in '"\r\n')
        or field[0].isspace()
    )
    if not needs_quotes:
        return field
    return '"' + field.replace('"', '""') + '"'


def _csv_line(fields: Sequence[str]) -> str:
    return ",".join(_quote(field) for field in fields) + "\n"


def _export(
    company_name: str,
    from_date: date,
    to_date: date,
    header: Sequence[str],
    rows: Sequence[_R] | None,
    convert: Callable[[_R], list[str]],
) -> CsvExport:
    body = ""
    if rows:
        lines = [_csv_line(header)]
        lines.extend(_csv_line(convert(row)) for row in rows)
        body = "".join(lines)
    return CsvExport(filename=export_filename(company_name, from_date, to_date), body=body)


def export_client_reports(
    company_name: str,
    from_date: date,
    to_date: date,
    rows: Sequence[ClientReport | None] | None,
) -> CsvExport:
    """CSV of client report rows; nothing is written when there are no rows."""
    return _export(
        company_name, from_date, to_date, CLIENT_HEADER, rows, export_client_report_row
    )


def export_project_reports(
    company_name: str,
    from_date: date,
    to_date: date,
    rows: Sequence[ProjectReport | None] | None,
) -> CsvExport:
    """CSV of project report rows; nothing is written when there are no rows."""
    return _export(
        company_name, from_date, to_date, PROJECT_HEADER, rows, export_project_report_row
    )


def export_task_reports(
    company_name: str,
    from_date: date,
    to_date: date,
    rows: Sequence[TaskReport | None] | None,
) -> CsvExport:
    """CSV of task report rows; nothing is written when there are no rows."""
    return _export(company_name, from_date, to_date, TASK_HEADER, rows, export_task_report_row)


def export_person_reports(
    company_name: str,
    from_date: date,
    to_date: date,
    rows: Sequence[PersonReport | None] | None,
) -> CsvExport:
    """CSV of person report rows; nothing is written when there are no rows."""
    return _export(
        company_name, from_date, to_date, PERSON_HEADER, rows, export_person_report_row
    )