#!/usr/bin/env python3
"""
Month Partitioner

Groups dated ledger records into calendar-month buckets keyed by "YYYY-MM".

Records whose date or month cannot be read are never guessed into a month.
They are left out of every bucket and reported as ValidationIssue entries.
"""

import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Generic, TypeVar

from ..core.dates import MalformedDateError, MonthKey
from ..core.models import Deposit, MealLog, Purchase, Record, ValidationIssue, record_kind, record_month

logger = logging.getLogger(__name__)

R = TypeVar("R", Deposit, Purchase, MealLog)


def _issue_for(record: Record, error: MalformedDateError) -> ValidationIssue:
    value = record.month if isinstance(record, Deposit) else record.date
    return ValidationIssue(
        kind=record_kind(record),
        record_id=record.id,
        value=value,
        message=error.reason,
    )


def month_key_for(record: Record) -> MonthKey:
    """
    Canonical month key of a single record.

    Raises:
        MalformedDateError: If the record's month or date is malformed or missing
    """
    return record_month(record)


@dataclass(frozen=True)
class MonthPartition(Mapping[str, tuple[R, ...]], Generic[R]):
    """
    Read-only mapping of month key to records.

    ``groups`` maps "YYYY-MM" to records in their original relative order.
    Keys appear in order of first occurrence; use ``months()`` for a sorted
    view. Lookups also accept a MonthKey.
    """

    groups: Mapping[str, tuple[R, ...]] = field(default_factory=dict)
    issues: tuple[ValidationIssue, ...] = ()

    def __getitem__(self, month: "MonthKey | str") -> tuple[R, ...]:
        return self.groups[str(month) if isinstance(month, MonthKey) else month]

    def __iter__(self):
        return iter(self.groups)

    def __len__(self) -> int:
        return len(self.groups)

    def months(self, descending: bool = True) -> list[str]:
        """Month keys sorted, most recent first by default."""
        return sorted(self.groups, reverse=descending)


def group_by_month(records: Iterable[R]) -> MonthPartition[R]:
    """
    Group records by their canonical month key.

    Args:
        records: Deposits, purchases or meal logs

    Returns:
        MonthPartition with ordered groups and any validation issues
    """
    groups: dict[str, list[R]] = {}
    issues: list[ValidationIssue] = []

    for record in records:
        try:
            key = str(month_key_for(record))
        except MalformedDateError as e:
            issues.append(_issue_for(record, e))
            continue
        groups.setdefault(key, []).append(record)

    for issue in issues:
        logger.warning("Skipping %s %s with unusable date %r: %s", issue.kind, issue.record_id, issue.value, issue.message)

    return MonthPartition(
        groups={key: tuple(items) for key, items in groups.items()},
        issues=tuple(issues),
    )


def filter_month(records: Iterable[R], target_month: "MonthKey | str") -> tuple[list[R], list[ValidationIssue]]:
    """
    Keep only the records that fall in ``target_month``.

    Args:
        records: Deposits, purchases or meal logs
        target_month: Month to keep

    Returns:
        Tuple of (matching records in input order, issues for unreadable records)
    """
    target = MonthKey.coerce(target_month)
    matched: list[R] = []
    issues: list[ValidationIssue] = []

    for record in records:
        try:
            key = month_key_for(record)
        except MalformedDateError as e:
            issues.append(_issue_for(record, e))
            continue
        if key == target:
            matched.append(record)

    return matched, issues


def available_months(
    deposits: Sequence[Deposit] = (),
    purchases: Sequence[Purchase] = (),
    meal_logs: Sequence[MealLog] = (),
) -> list[str]:
    """
    Every month that has at least one record, most recent first.

    Records with unreadable dates are skipped.
    """
    months: set[str] = set()
    for stream in (deposits, purchases, meal_logs):
        months.update(group_by_month(stream).groups)
    return sorted(months, reverse=True)
