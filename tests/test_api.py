import pytest

from timetrack.api import AppError, ErrorCode, NoRowAffectedError


def test_to_dict_without_field():
    error = AppError("Could not get task", ErrorCode.SYSTEM_ERROR)
    assert error.to_dict() == {
        "code": ErrorCode.SYSTEM_ERROR.value,
        "message": "Could not get task",
    }


def test_to_dict_with_field():
    error = AppError("No taskId parameter", ErrorCode.INVALID_FIELD, field="taskId")
    data = error.to_dict()
    assert data["field"] == "taskId"
    assert data["code"] == ErrorCode.INVALID_FIELD.value


def test_raised_error_keeps_code_and_cause():
    cause = NoRowAffectedError()
    with pytest.raises(AppError) as info:
        raise AppError("Task not found", ErrorCode.INVALID_TASK) from cause
    assert info.value.code is ErrorCode.INVALID_TASK
    assert info.value.__cause__ is cause
    assert str(info.value) == "Task not found"


def test_default_code_and_status():
    error = AppError("boom")
    assert error.code is ErrorCode.SYSTEM_ERROR
    assert error.status == 500