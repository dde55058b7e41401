#!/usr/bin/env python3
"""
Shared validation helpers for the settlement core.

Referential integrity is checked before any figure is computed: a deposit,
purchase or meal log whose member does not exist makes the whole settlement
fail with ReferentialIntegrityError. Counting such a record in the group
totals without a member to attribute it to would break the rule that the
totals equal the sum of the per-member figures.

Duplicate detection is offered for the write boundary only; the engine itself
sums duplicates.
"""

from collections import defaultdict
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from ..core.dates import MalformedDateError, MonthKey, parse_record_date
from ..core.errors import LedgerError
from ..core.models import Deposit, MealLog, Member, Record, record_kind


@dataclass(frozen=True)
class OrphanedRecord:
    """A record pointing at a member id that does not exist."""

    kind: str
    record_id: str
    member_id: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {"kind": self.kind, "record_id": self.record_id, "member_id": self.member_id}


class ReferentialIntegrityError(LedgerError):
    """Raised when records reference members that do not exist."""

    def __init__(self, orphans: list[OrphanedRecord]):
        self.orphans = orphans
        preview = ", ".join(f"{o.kind} {o.record_id} -> member {o.member_id}" for o in orphans[:5])
        more = f" (and {len(orphans) - 5} more)" if len(orphans) > 5 else ""
        super().__init__(f"{len(orphans)} record(s) reference unknown members: {preview}{more}")


@dataclass(frozen=True)
class DuplicateGroup:
    """Records sharing a key that the write boundary should keep unique."""

    kind: str
    member_id: str
    period: str
    record_ids: tuple[str, ...]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "kind": self.kind,
            "member_id": self.member_id,
            "period": self.period,
            "record_ids": list(self.record_ids),
        }


class DuplicateMemberError(LedgerError):
    """Raised when two members share an id."""

    def __init__(self, member_ids: list[str]):
        self.member_ids = member_ids
        super().__init__(f"Member id(s) used more than once: {', '.join(member_ids)}")


def find_orphans(members: Iterable[Member], *streams: Iterable[Record]) -> list[OrphanedRecord]:
    """
    Collect every record whose member_id has no matching Member.

    Args:
        members: Known members
        *streams: Any number of deposit, purchase or meal log sequences

    Returns:
        Orphaned records in stream order
    """
    member_ids = {m.id for m in members}
    orphans = []
    for stream in streams:
        for record in stream:
            if record.member_id not in member_ids:
                orphans.append(OrphanedRecord(record_kind(record), record.id, record.member_id))
    return orphans


def check_referential_integrity(members: Iterable[Member], *streams: Iterable[Record]) -> None:
    """
    Raise if any record references a missing member.

    Raises:
        ReferentialIntegrityError: Listing every orphaned record
    """
    orphans = find_orphans(members, *streams)
    if orphans:
        raise ReferentialIntegrityError(orphans)


def check_unique_members(members: Iterable[Member]) -> None:
    """
    Raise if two members share an id.

    Raises:
        DuplicateMemberError: Listing each repeated id once, in first-seen order
    """
    seen: set[str] = set()
    repeated: list[str] = []
    for member in members:
        if member.id in seen and member.id not in repeated:
            repeated.append(member.id)
        seen.add(member.id)
    if repeated:
        raise DuplicateMemberError(repeated)


def find_duplicate_deposits(deposits: Iterable[Deposit]) -> list[DuplicateGroup]:
    """Deposits sharing a (member_id, month) pair. Unreadable months are skipped."""
    groups: dict[tuple[str, str], list[str]] = defaultdict(list)
    for deposit in deposits:
        try:
            month = str(MonthKey.coerce(deposit.month))
        except MalformedDateError:
            continue
        groups[(deposit.member_id, month)].append(deposit.id)
    return [
        DuplicateGroup("deposit", member_id, month, tuple(ids))
        for (member_id, month), ids in groups.items()
        if len(ids) > 1
    ]


def find_duplicate_meal_logs(meal_logs: Iterable[MealLog]) -> list[DuplicateGroup]:
    """Meal logs sharing a (member_id, date) pair. Unreadable dates are skipped."""
    groups: dict[tuple[str, str], list[str]] = defaultdict(list)
    for log in meal_logs:
        try:
            day = parse_record_date(log.date)
        except MalformedDateError:
            continue
        groups[(log.member_id, day.isoformat())].append(log.id)
    return [
        DuplicateGroup("meal_log", member_id, day, tuple(ids))
        for (member_id, day), ids in groups.items()
        if len(ids) > 1
    ]
