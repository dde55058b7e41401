#!/usr/bin/env python3
"""
MonthKey Primitive Type

Immutable calendar-month value with the canonical "YYYY-MM" string form used
to bucket deposits, purchases and meal logs.

Month keys are always taken from the calendar components of the stored value.
A timezone-aware datetime keeps its own wall-clock year and month; nothing is
converted to UTC first, so a record never drifts across a month boundary.
"""

import re
from dataclasses import dataclass
from datetime import date, datetime

from .errors import LedgerError

_MONTH_KEY_RE = re.compile(r"^(\d{4})-(\d{2})$")
_ISO_DATE_PREFIX_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})(?:$|[T ])")


class MalformedDateError(LedgerError, ValueError):
    """Raised when a date or month key cannot be read as a calendar month."""

    def __init__(self, value: object, reason: str = "not a calendar date"):
        self.value = value
        self.reason = reason
        super().__init__(f"Malformed date {value!r}: {reason}")


@dataclass(frozen=True, order=True)
class MonthKey:
    """
    Immutable calendar month.

    Examples:
        >>> MonthKey.from_string("2024-03")
        MonthKey(year=2024, month=3)
        >>> str(MonthKey(2024, 3))
        '2024-03'
        >>> MonthKey.from_date(date(2024, 12, 31)).next()
        MonthKey(year=2025, month=1)
    """

    year: int
    month: int

    def __post_init__(self) -> None:
        if not 1 <= self.month <= 12:
            raise MalformedDateError(f"{self.year}-{self.month}", "month must be 1-12")
        if not 1 <= self.year <= 9999:
            raise MalformedDateError(f"{self.year}-{self.month}", "year must be four digits")

    @classmethod
    def from_string(cls, value: str) -> "MonthKey":
        """
        Parse a canonical "YYYY-MM" month key.

        Args:
            value: Month key such as "2024-03"

        Returns:
            MonthKey object

        Raises:
            MalformedDateError: If the value is not a four-digit year, a hyphen
                and a two-digit month
        """
        if not isinstance(value, str):
            raise MalformedDateError(value, "month key must be a string")
        match = _MONTH_KEY_RE.match(value.strip())
        if match is None:
            raise MalformedDateError(value, "expected YYYY-MM")
        return cls(year=int(match.group(1)), month=int(match.group(2)))

    @classmethod
    def from_date(cls, value: date) -> "MonthKey":
        """Create from a date or datetime using its own calendar components."""
        return cls(year=value.year, month=value.month)

    @classmethod
    def current(cls) -> "MonthKey":
        """Get the current calendar month."""
        return cls.from_date(date.today())

    @classmethod
    def coerce(cls, value: "MonthKey | str") -> "MonthKey":
        """Accept either a MonthKey or its string form."""
        if isinstance(value, MonthKey):
            return value
        return cls.from_string(value)

    @property
    def first_day(self) -> date:
        """First calendar day of the month."""
        return date(self.year, self.month, 1)

    def next(self) -> "MonthKey":
        """The following calendar month."""
        if self.month == 12:
            return MonthKey(self.year + 1, 1)
        return MonthKey(self.year, self.month + 1)

    def previous(self) -> "MonthKey":
        """The preceding calendar month."""
        if self.month == 1:
            return MonthKey(self.year - 1, 12)
        return MonthKey(self.year, self.month - 1)

    def contains(self, value: date) -> bool:
        """Check whether a date falls inside this month."""
        return value.year == self.year and value.month == self.month

    def label(self) -> str:
        """Human readable label, e.g. "March 2024"."""
        return self.first_day.strftime("%B %Y")

    def __str__(self) -> str:
        """Format as YYYY-MM."""
        return f"{self.year:04d}-{self.month:02d}"


def parse_record_date(value: object) -> date:
    """
    Read a record's stored date as a calendar date.

    Accepts ``date``/``datetime`` objects and ISO strings. A string may carry a
    time or UTC offset after the date ("2024-01-31T23:30:00-05:00"); only the
    leading YYYY-MM-DD part is used, exactly as written.

    Args:
        value: The stored date value

    Returns:
        Calendar date

    Raises:
        MalformedDateError: If the value is missing or cannot be parsed
    """
    if value is None:
        raise MalformedDateError(value, "missing date")
    if isinstance(value, datetime):
        return date(value.year, value.month, value.day)
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise MalformedDateError(value, f"unsupported type {type(value).__name__}")

    match = _ISO_DATE_PREFIX_RE.match(value.strip())
    if match is None:
        raise MalformedDateError(value, "expected YYYY-MM-DD")
    try:
        return date(int(match.group(1)), int(match.group(2)), int(match.group(3)))
    except ValueError as e:
        raise MalformedDateError(value, str(e)) from e
