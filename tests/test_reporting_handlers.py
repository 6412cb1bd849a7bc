from datetime import date

import pytest

from timetrack.api import AppError, ErrorCode, UserContext
from timetrack.reporting import (
    ClientReport,
    PersonReport,
    ProjectReport,
    ReportingService,
    TaskReport,
)
from timetrack.reporting_handlers import ReportingHandlers, ReportQuery, parse_report_query

TODAY = date(2019, 1, 7)


class RecordingStore:
    def __init__(self, rows=None, fail=False):
        self.rows = rows
        self.fail = fail
        self.calls = []

    def _answer(self, kind, account_id, from_date, to_date, offset):
        self.calls.append((kind, account_id, from_date, to_date, offset))
        if self.fail:
            raise RuntimeError("database down")
        return self.rows

    def get_time_by_client(self, account_id, from_date, to_date, offset):
        return self._answer("client", account_id, from_date, to_date, offset)

    def get_time_by_project(self, account_id, from_date, to_date, offset):
        return self._answer("project", account_id, from_date, to_date, offset)

    def get_time_by_task(self, account_id, from_date, to_date, offset):
        return self._answer("task", account_id, from_date, to_date, offset)

    def get_time_by_person(self, account_id, from_date, to_date, offset):
        return self._answer("person", account_id, from_date, to_date, offset)


def make(rows=None, fail=False):
    store = RecordingStore(rows, fail)
    handlers = ReportingHandlers(ReportingService(store), clock=lambda: TODAY)
    return store, handlers


def user(week_start=0, company="Acme Co"):
    return UserContext(profile_id=3, account_id=7, week_start=week_start, company=company)


def test_parse_report_query_reads_all_fields():
    parsed = parse_report_query({"from": "2019-01-06", "to": "2019-01-12", "page": "2"}, True)
    assert parsed == ReportQuery(date(2019, 1, 6), date(2019, 1, 12), 2)


def test_parse_report_query_accepts_query_string():
    parsed = parse_report_query("from=2019-01-06&page=3", True)
    assert parsed.from_date == date(2019, 1, 6)
    assert parsed.to_date is None
    assert parsed.page == 3


def test_parse_report_query_ignores_page_when_not_paged():
    parsed = parse_report_query({"from": "2019-01-06", "page": "abc"}, False)
    assert parsed.page == 0


def test_missing_from_is_rejected():
    with pytest.raises(AppError) as info:
        parse_report_query({}, True)
    assert info.value.code is ErrorCode.INVALID_FIELD
    assert info.value.field == "from"
    assert info.value.status == 400
    assert info.value.message == "No from parameter"


@pytest.mark.parametrize("key", ["from", "to"])
def test_bad_dates_are_rejected(key):
    query = {"from": "2019-01-06", key: "2019-13-01"}
    with pytest.raises(AppError) as info:
        parse_report_query(query, True)
    assert info.value.field == "2019-13-01"
    assert info.value.status == 400
    assert info.value.message == "Invalid format. Use ISO8061: YYYY-MM-DD"


def test_bad_page_is_rejected():
    with pytest.raises(AppError) as info:
        parse_report_query({"from": "2019-01-06", "page": "abc"}, True)
    assert info.value.message == "Invalid page offset"
    assert info.value.field == "abc"
    assert info.value.status == 500


def test_missing_user_is_rejected():
    store, handlers = make()
    with pytest.raises(AppError) as info:
        handlers.get_time_by_project(None, {"from": "2019-01-06"})
    assert info.value.code is ErrorCode.SYSTEM_ERROR
    assert info.value.status == 500
    assert store.calls == []


def test_client_report_shifts_to_week_start():
    store, handlers = make()
    handlers.get_time_by_client(user(week_start=1), {"from": "2019-01-06", "to": "2019-01-12"})
    assert store.calls == [("client", 7, date(2019, 1, 7), date(2019, 1, 13), 0)]


def test_client_report_converts_rows():
    rows = [ClientReport(client_id=4, client_name="Globex", billable_hours=2.5)]
    _, handlers = make(rows)
    result = handlers.get_time_by_client(user(), {"from": "2019-01-06", "to": "2019-01-12"})
    assert [r.to_dict() for r in result] == [
        {
            "clientId": 4,
            "clientName": "Globex",
            "nonBillableHours": 0.0,
            "billableHours": 2.5,
            "billableTotal": 0.0,
        }
    ]


def test_project_report_passes_range_and_page_unchanged():
    store, handlers = make([ProjectReport(project_id=9, project_name="Site")])
    result = handlers.get_time_by_project(
        user(week_start=3), {"from": "2019-01-06", "to": "2019-01-12", "page": "2"}
    )
    assert store.calls == [("project", 7, date(2019, 1, 6), date(2019, 1, 12), 2)]
    assert result[0].project_id == 9


def test_missing_to_uses_clock():
    store, handlers = make()
    handlers.get_time_by_task(user(), {"from": "2019-01-01"})
    assert store.calls[0][3] == TODAY


def test_no_rows_gives_empty_list():
    _, handlers = make(None)
    assert handlers.get_time_by_person(user(), {"from": "2019-01-01"}) == []


def test_person_report_converts_rows():
    _, handlers = make([PersonReport(profile_id=5, first_name="Ada", last_name="King")])
    result = handlers.get_time_by_person(user(), {"from": "2019-01-01"})
    assert (result[0].first_name, result[0].last_name) == ("Ada", "King")


def test_store_failure_becomes_app_error():
    _, handlers = make(fail=True)
    with pytest.raises(AppError) as info:
        handlers.get_time_by_client(user(), {"from": "2019-01-06"})
    assert info.value.message == "Failed to get time by client"
    assert info.value.status == 500


def test_export_client_builds_csv_from_first_page():
    rows = [ClientReport(client_id=1, client_name="Globex", billable_hours=1.0)]
    store, handlers = make(rows)
    export = handlers.export_time_by_client(
        user(), {"from": "2019-01-06", "to": "2019-01-12", "page": "abc"}
    )
    assert store.calls == [("client", 7, date(2019, 1, 6), date(2019, 1, 12), 0)]
    assert export.filename == "export_Acme-Co_2019-01-06_to_2019-01-12.csv"
    assert export.content_type == "text/csv"
    assert export.body.startswith(
        "Client Name,Non-Billable Hours,Billable Hours,Billable Total\n"
    )
    assert "Globex" in export.body


def test_export_without_rows_has_empty_body():
    _, handlers = make(None)
    export = handlers.export_time_by_person(user(), {"from": "2019-01-06", "to": "2019-01-12"})
    assert export.body == ""
    assert export.filename.startswith("export_Acme-Co_")


def test_export_requires_user():
    _, handlers = make()
    with pytest.raises(AppError) as info:
        handlers.export_time_by_task(None, {"from": "2019-01-06"})
    assert info.value.message == "Invalid profile context"