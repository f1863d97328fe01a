"""
Exceptions raised by the retail analysis pipeline.

Load failures abort the run. Invalid query arguments only fail the query
that received them.
"""

from typing import Any, Optional


class RetailAnalysisError(Exception):
    """Base class for pipeline errors."""


class LoadError(RetailAnalysisError):
    """A source row could not be loaded into the sales table."""

    def __init__(
        self,
        message: str,
        row_index: Optional[int] = None,
        column: Optional[str] = None,
        value: Any = None,
    ) -> None:
        self.row_index = row_index
        self.column = column
        self.value = value
        if row_index is not None:
            message = f"row {row_index}: {message}"
        super().__init__(message)


class InvalidArgumentError(RetailAnalysisError, ValueError):
    """A query was given a malformed literal (date, month, limit, ...)."""
