"""
Parsing of query literals.

A malformed literal fails fast with InvalidArgumentError instead of
silently matching nothing.
"""

from datetime import date, datetime
from numbers import Real

import pandas as pd

from retail_analysis.errors import InvalidArgumentError


def parse_date(value, name: str = "date") -> pd.Timestamp:
    if isinstance(value, (datetime, date)):
        return pd.Timestamp(value).normalize()
    if not isinstance(value, str):
        raise InvalidArgumentError(f"{name} must be a 'YYYY-MM-DD' string, got {value!r}")
    try:
        return pd.Timestamp(datetime.strptime(value.strip(), "%Y-%m-%d"))
    except ValueError:
        raise InvalidArgumentError(f"Invalid {name} literal {value!r}, expected 'YYYY-MM-DD'") from None


def parse_month(value, name: str = "month") -> pd.Period:
    if not isinstance(value, str):
        raise InvalidArgumentError(f"{name} must be a 'YYYY-MM' string, got {value!r}")
    try:
        parsed = datetime.strptime(value.strip(), "%Y-%m")
    except ValueError:
        raise InvalidArgumentError(f"Invalid {name} literal {value!r}, expected 'YYYY-MM'") from None
    return pd.Period(year=parsed.year, month=parsed.month, freq="M")


def parse_positive_int(value, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise InvalidArgumentError(f"{name} must be a positive integer, got {value!r}")
    return value


def parse_number(value, name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidArgumentError(f"{name} must be a number, got {value!r}")
    return float(value)


def parse_label(value, name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise InvalidArgumentError(f"{name} must be a non-empty string, got {value!r}")
    return value
