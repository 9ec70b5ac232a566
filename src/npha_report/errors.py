from __future__ import annotations

from typing import Any, Optional


class SurveyDataError(Exception):
    """Base class for errors raised while preparing the survey table."""


class SchemaError(SurveyDataError):
    """Raised when expected columns are absent or the rename map is incomplete."""


class ParseError(SurveyDataError):
    """A row could not be read: a cell is not an integer code, or the field count is off.

    ``column`` is None when the whole row is malformed.
    """

    def __init__(self, row: int, column: Optional[str], value: Any, reason: Optional[str] = None) -> None:
        self.row = row
        self.column = column
        self.value = value
        self.reason = reason or "not an integer code"
        where = f"row {row}" if column is None else f"row {row}, column '{column}'"
        super().__init__(f"{where}: {value!r} ({self.reason})")


class RecodeTypeError(SurveyDataError, TypeError):
    """Raised when recode() is handed labels instead of integer codes."""


class UnmappedCodeWarning(UserWarning):
    """An integer code had no entry in its column's code table."""


class EmptyInputWarning(UserWarning):
    """The source contained a header but no data rows."""


__all__ = [
    "SurveyDataError",
    "SchemaError",
    "ParseError",
    "RecodeTypeError",
    "UnmappedCodeWarning",
    "EmptyInputWarning",
]
