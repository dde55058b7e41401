#!/usr/bin/env python3
"""
In-memory Ledger Store

The write boundary in front of the settlement engine. It owns the rules the
engine deliberately does not enforce:

- at most one deposit per member and month
- at most one meal log per member and date
- every record references an existing member
- deleting a member deletes that member's deposits, purchases and meal logs

The store assumes a single writer. Every check and the write that follows it
happen inside one method call on one object, so there is no check-then-insert
window.
"""

import logging
import uuid
from dataclasses import replace
from datetime import date
from typing import TypeVar

from ..core.amounts import AmountLike
from ..core.dates import MonthKey, parse_record_date
from ..core.errors import LedgerError
from ..core.models import Deposit, MealLog, Member, Purchase, SettlementResult
from ..settlement.engine import compute_settlement
from ..settlement.partitioner import available_months
from .loader import LedgerData

logger = logging.getLogger(__name__)

T = TypeVar("T", Member, Deposit, Purchase, MealLog)


class DuplicateRecordError(LedgerError):
    """Raised when a write would create a second record for a unique key."""

    def __init__(self, kind: str, member_id: str, period: str, existing_id: str):
        self.kind = kind
        self.member_id = member_id
        self.period = period
        self.existing_id = existing_id
        super().__init__(f"A {kind} for member {member_id} and {period} already exists ({existing_id})")


class UnknownMemberError(LedgerError, KeyError):
    """Raised when a write references a member that does not exist."""

    def __init__(self, member_id: str):
        self.member_id = member_id
        super().__init__(f"Unknown member: {member_id}")

    def __str__(self) -> str:
        return self.args[0]


class RecordNotFoundError(LedgerError, KeyError):
    """Raised when updating or deleting a record id that does not exist."""

    def __init__(self, kind: str, record_id: str):
        self.kind = kind
        self.record_id = record_id
        super().__init__(f"No {kind} with id {record_id}")

    def __str__(self) -> str:
        return self.args[0]


def _new_id() -> str:
    return str(uuid.uuid4())


class LedgerStore:
    """
    Mutable collection of the group's records.

    Records themselves are immutable; an update replaces the whole record.
    """

    def __init__(self, ledger: LedgerData | None = None):
        self._members: dict[str, Member] = {}
        self._deposits: dict[str, Deposit] = {}
        self._purchases: dict[str, Purchase] = {}
        self._meal_logs: dict[str, MealLog] = {}

        if ledger is not None:
            for member in ledger.members:
                self._members[member.id] = member
            for deposit in ledger.deposits:
                self._insert_deposit(deposit)
            for purchase in ledger.purchases:
                self._insert_purchase(purchase)
            for log in ledger.meal_logs:
                self._insert_meal_log(log)

    # ---- views -------------------------------------------------------------

    @property
    def members(self) -> tuple[Member, ...]:
        return tuple(self._members.values())

    @property
    def deposits(self) -> tuple[Deposit, ...]:
        return tuple(self._deposits.values())

    @property
    def purchases(self) -> tuple[Purchase, ...]:
        return tuple(self._purchases.values())

    @property
    def meal_logs(self) -> tuple[MealLog, ...]:
        return tuple(self._meal_logs.values())

    def snapshot(self) -> LedgerData:
        """Immutable copy of every record stream."""
        return LedgerData(
            members=self.members,
            deposits=self.deposits,
            purchases=self.purchases,
            meal_logs=self.meal_logs,
        )

    def settle(self, month: MonthKey | str) -> SettlementResult:
        """Settlement for one month over the current records."""
        return compute_settlement(self.members, self.deposits, self.purchases, self.meal_logs, month)

    def available_months(self) -> list[str]:
        """Months with any record, most recent first."""
        return available_months(self.deposits, self.purchases, self.meal_logs)

    # ---- members -----------------------------------------------------------

    def add_member(self, name: str, phone: str | None = None, member_id: str | None = None) -> Member:
        """Create a member."""
        member = Member.from_dict({"id": member_id or _new_id(), "name": name, "phone": phone})
        if member.id in self._members:
            raise LedgerError(f"Member id {member.id} already exists")
        self._members[member.id] = member
        logger.info("Added member %s (%s)", member.name, member.id)
        return member

    def update_member(self, member_id: str, name: str, phone: str | None = None) -> Member:
        """Replace a member's name and phone."""
        self._get(self._members, "member", member_id)
        member = Member.from_dict({"id": member_id, "name": name, "phone": phone})
        self._members[member_id] = member
        return member

    def delete_member(self, member_id: str) -> int:
        """
        Delete a member and every record that references them.

        Returns:
            Number of dependent records removed
        """
        self._get(self._members, "member", member_id)
        del self._members[member_id]

        removed = 0
        for table in (self._deposits, self._purchases, self._meal_logs):
            for record_id in [rid for rid, r in table.items() if r.member_id == member_id]:
                del table[record_id]
                removed += 1

        logger.info("Deleted member %s and %d dependent record(s)", member_id, removed)
        return removed

    # ---- deposits ----------------------------------------------------------

    def add_deposit(self, member_id: str, month: MonthKey | str, amount: AmountLike) -> Deposit:
        """
        Record a member's deposit for a month.

        Raises:
            UnknownMemberError: If the member does not exist
            DuplicateRecordError: If the member already has a deposit that month
        """
        deposit = Deposit.from_dict(
            {"id": _new_id(), "member_id": member_id, "month": str(MonthKey.coerce(month)), "amount": amount}
        )
        return self._insert_deposit(deposit)

    def update_deposit(self, deposit_id: str, member_id: str, month: MonthKey | str, amount: AmountLike) -> Deposit:
        """Replace a deposit, keeping its id."""
        self._get(self._deposits, "deposit", deposit_id)
        deposit = Deposit.from_dict(
            {"id": deposit_id, "member_id": member_id, "month": str(MonthKey.coerce(month)), "amount": amount}
        )
        return self._insert_deposit(deposit)

    def delete_deposit(self, deposit_id: str) -> None:
        self._get(self._deposits, "deposit", deposit_id)
        del self._deposits[deposit_id]

    def _insert_deposit(self, deposit: Deposit) -> Deposit:
        self._require_member(deposit.member_id)
        month = str(MonthKey.coerce(deposit.month))
        for existing in self._deposits.values():
            if existing.id != deposit.id and existing.member_id == deposit.member_id and existing.month == month:
                raise DuplicateRecordError("deposit", deposit.member_id, month, existing.id)
        self._deposits[deposit.id] = replace(deposit, month=month)
        return self._deposits[deposit.id]

    # ---- purchases ---------------------------------------------------------

    def add_purchase(
        self, member_id: str, on: date | str, amount: AmountLike, description: str | None = None
    ) -> Purchase:
        """Record a market purchase paid by a member."""
        purchase = Purchase.from_dict(
            {"id": _new_id(), "member_id": member_id, "date": on, "amount": amount, "description": description}
        )
        return self._insert_purchase(purchase)

    def update_purchase(
        self,
        purchase_id: str,
        member_id: str,
        on: date | str,
        amount: AmountLike,
        description: str | None = None,
    ) -> Purchase:
        """Replace a purchase, keeping its id."""
        self._get(self._purchases, "purchase", purchase_id)
        purchase = Purchase.from_dict(
            {"id": purchase_id, "member_id": member_id, "date": on, "amount": amount, "description": description}
        )
        return self._insert_purchase(purchase)

    def delete_purchase(self, purchase_id: str) -> None:
        self._get(self._purchases, "purchase", purchase_id)
        del self._purchases[purchase_id]

    def _insert_purchase(self, purchase: Purchase) -> Purchase:
        self._require_member(purchase.member_id)
        parse_record_date(purchase.date)
        self._purchases[purchase.id] = purchase
        return purchase

    # ---- meal logs ---------------------------------------------------------

    def add_meal_log(self, member_id: str, on: date | str, lunch: int = 0, dinner: int = 0) -> MealLog:
        """
        Record the meals a member ate on a day.

        Raises:
            UnknownMemberError: If the member does not exist
            DuplicateRecordError: If the member already has a log for that date
        """
        log = MealLog(id=_new_id(), member_id=member_id, date=on, lunch_count=lunch, dinner_count=dinner)
        return self._insert_meal_log(log)

    def update_meal_log(self, log_id: str, member_id: str, on: date | str, lunch: int = 0, dinner: int = 0) -> MealLog:
        """Replace a meal log, keeping its id."""
        self._get(self._meal_logs, "meal_log", log_id)
        log = MealLog(id=log_id, member_id=member_id, date=on, lunch_count=lunch, dinner_count=dinner)
        return self._insert_meal_log(log)

    def delete_meal_log(self, log_id: str) -> None:
        self._get(self._meal_logs, "meal_log", log_id)
        del self._meal_logs[log_id]

    def _insert_meal_log(self, log: MealLog) -> MealLog:
        self._require_member(log.member_id)
        day = parse_record_date(log.date)
        for existing in self._meal_logs.values():
            if (
                existing.id != log.id
                and existing.member_id == log.member_id
                and parse_record_date(existing.date) == day
            ):
                raise DuplicateRecordError("meal_log", log.member_id, day.isoformat(), existing.id)
        self._meal_logs[log.id] = log
        return log

    # ---- helpers -----------------------------------------------------------

    def _require_member(self, member_id: str) -> None:
        if member_id not in self._members:
            raise UnknownMemberError(member_id)

    @staticmethod
    def _get(table: dict[str, T], kind: str, record_id: str) -> T:
        try:
            return table[record_id]
        except KeyError:
            raise RecordNotFoundError(kind, record_id) from None

