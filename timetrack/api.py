"""Application errors and request context shared by the services."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Machine-readable error codes carried by :class:`AppError`."""

    SYSTEM_ERROR = "system_error"
    INVALID_FIELD = "invalid_field"
    MISSING_FIELD = "missing_field"
    FIELD_SIZE = "field_size"
    INVALID_JSON = "invalid_json"
    INVALID_TASK = "invalid_task"
    INVALID_PROJECT = "invalid_project"
    NOT_FOUND = "not_found"


class AppError(Exception):
    """An error reported to API callers, with a code and an optional field."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.SYSTEM_ERROR,
        field: str | None = None,
        status: int = 500,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.field = field
        self.status = status

    def to_dict(self) -> dict[str, Any]:
        """Return the error as a JSON-ready mapping."""
        result: dict[str, Any] = {"code": self.code.value, "message": self.message}
        if self.field is not None:
            result["field"] = self.field
        return result


class NoRowAffectedError(Exception):
    """An update or delete statement matched no rows."""

    def __init__(self, message: str = "no rows affected") -> None:
        super().__init__(message)


@dataclass(frozen=True)
class UserContext:
    """The authenticated user a request is made on behalf of."""

    profile_id: int
    account_id: int
    week_start: int = 1
    timezone: str = ""
    company: str = ""