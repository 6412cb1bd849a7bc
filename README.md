# timetrack

A small library with no dependencies. It reports billable time from an SQLite database. Time is booked against clients, projects, tasks and people. The library totals, for a date range:

- non-billable hours,
- billable hours,
- the billable amount (hours × the rate of the project's task).

You can group the totals by client, project, task or person. Results come in pages of 100 rows. You can turn them into JSON-ready responses or into CSV downloads.

## Installation

```
pip install timetrack
```

To run the tests:

```
pip install "timetrack[test]"
pytest
```

## Modules

| Module | What it holds |
| --- | --- |
| `timetrack.schema` | `create_schema(connection)` creates the `client`, `project`, `task`, `project_task`, `profile` and `time` tables. It leaves tables that already exist alone. |
| `timetrack.reporting` | The report rows (`ClientReport`, `ProjectReport`, `TaskReport`, `PersonReport`), the `ReportingStore` protocol and `ReportingService`. |
| `timetrack.reporting_store` | `SqliteReportingStore`, which runs the aggregate queries. Pages hold `REPORT_PAGINATION_LIMIT` (100) rows. |
| `timetrack.reporting_export` | Response objects with `to_dict()`, `adjust_for_week_start`, the CSV row helpers and `export_*_reports`, which return a `CsvExport`. |
| `timetrack.reporting_handlers` | `parse_report_query` and `ReportingHandlers`, which check query parameters and call the service. |
| `timetrack.api` | `AppError`, `ErrorCode`, `NoRowAffectedError` and `UserContext`. |
| `timetrack.valid` | Small validators: `is_email`, `is_int`, `is_int_between`, `is_length`, `is_timezone`, and others. It also has helpers that map empty values to `None`. |
| `timetrack.version` | `RELEASE`, `COMMIT` and `BUILD_TIME` build labels. |

## Reports

```python
import sqlite3
from datetime import date

from timetrack.schema import create_schema
from timetrack.reporting import ReportingService
from timetrack.reporting_store import SqliteReportingStore

connection = sqlite3.connect(":memory:")
create_schema(connection)
connection.executescript("""
INSERT INTO client (client_id, account_id, client_name) VALUES (1, 1, 'Acme');
INSERT INTO project (project_id, account_id, client_id, project_name) VALUES (1, 1, 1, 'Website');
INSERT INTO task (task_id, account_id, task_name) VALUES (1, 1, 'Design');
INSERT INTO project_task (account_id, project_id, task_id, rate, billable) VALUES (1, 1, 1, 100.0, 1);
INSERT INTO profile (profile_id, account_id, first_name, last_name) VALUES (1, 1, 'Ada', 'Smith');
INSERT INTO time (account_id, profile_id, project_id, task_id, day, hours)
    VALUES (1, 1, 1, 1, '2019-01-07', 2.5);
""")

reports = ReportingService(SqliteReportingStore(connection))
rows = reports.get_time_by_client(1, date(2019, 1, 6), date(2019, 1, 12), 0)
# rows[0].billable_hours == 2.5, rows[0].billable_total == 250.0,
# rows[0].non_billable_hours is None (no non-billable time)
```

The query methods take an `offset`, which is a page number. Page `n` starts at row `n * 100`.

Only entries with more than zero hours are counted, and both ends of the date range are included.

If the store fails, the service raises `AppError` with code `ErrorCode.SYSTEM_ERROR`.

## Responses and CSV export

```python
from timetrack.reporting_export import export_client_reports, new_client_reports_response

json_ready = [r.to_dict() for r in new_client_reports_response(rows)]
# [{"clientId": 1, "clientName": "Acme", "nonBillableHours": 0.0,
#   "billableHours": 2.5, "billableTotal": 250.0}]

export = export_client_reports("Acme Inc.", date(2019, 1, 6), date(2019, 1, 12), rows)
export.filename   # "export_Acme-Inc-_2019-01-06_to_2019-01-12.csv"
export.headers    # Content-Type and Content-Disposition for the download
export.body       # header line, then one line per row
```

How the CSV is written:

- Amounts are written with two decimals and a leading space, so they are quoted in the CSV.
- A missing total is written as `0.00`.
- When there are no rows, the body is empty.

`adjust_for_week_start(from_date, to_date, week_start, today)` moves a range that starts on Sunday to the account's week start. Weekdays count from 0 for Sunday to 6 for Saturday.

## Request handlers

`ReportingHandlers(service, clock=None)` takes a query, either as a query string or as a mapping, together with a `UserContext`:

```python
from timetrack.api import UserContext
from timetrack.reporting_handlers import ReportingHandlers

handlers = ReportingHandlers(reports, clock=lambda: date(2019, 1, 9))
user = UserContext(profile_id=1, account_id=1, week_start=1, company="Acme Inc.")

handlers.get_time_by_project(user, "from=2019-01-06&to=2019-01-12&page=0")
handlers.export_time_by_person(user, {"from": "2019-01-06"})
```

The `from` parameter is required and must be `YYYY-MM-DD`. If `to` is left out, the handlers use the clock's date.

Only `get_time_by_client` moves the range to the user's week start.

The export handlers always return the first page.

When the input is bad, the handlers raise `AppError`:

- A missing or malformed date gives status 400.
- A `page` that is not a number gives status 500.
- A missing user gives status 500.

The error's `status` is the HTTP status to send back, and `to_dict()` gives the JSON body.

`ROUTES` lists the method, path and handler name for each endpoint.

## What this package does not do

This package does not:

- serve HTTP or check tokens, profiles or sessions. A web layer must do that and pass in a `UserContext`.
- create, edit, archive or delete tasks, and it does not record time entries. The `task` and `time` tables only exist for the reports to read. You fill them yourself, for example with SQL as shown above.
- work out week ranges for timesheets.