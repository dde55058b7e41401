#!/usr/bin/env python3
"""
Core Data Models for the Mess Ledger

The four record streams (members, deposits, purchases, meal logs) and the
settlement result types built from them.

All models are frozen dataclasses. Record dates are kept exactly as supplied
so a malformed value can still be constructed and later reported by the month
partitioner instead of failing at load time.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Union

from .amounts import amount_to_str, parse_amount
from .dates import MalformedDateError, MonthKey, parse_record_date
from .errors import RecordValidationError

DateValue = Union[date, datetime, str, None]


def _require_amount(kind: str, value: Any) -> Decimal:
    try:
        amount = parse_amount(value)
    except ValueError as e:
        raise RecordValidationError(kind, "amount", str(e)) from e
    if amount < 0:
        raise RecordValidationError(kind, "amount", f"must be non-negative, got {amount}")
    return amount


def _require_meal_count(field_name: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value not in (0, 1):
        raise RecordValidationError("meal_log", field_name, f"must be 0 or 1, got {value!r}")
    return value


def _date_to_json(value: DateValue) -> Any:
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return value


@dataclass(frozen=True)
class Member:
    """A participant in the shared household expense pool."""

    id: str
    name: str
    phone: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Member":
        """
        Create Member from a host-application dict.

        Raises:
            RecordValidationError: If the name is empty
        """
        name = str(data.get("name") or "").strip()
        if not name:
            raise RecordValidationError("member", "name", "must not be empty")
        return cls(id=str(data["id"]), name=name, phone=data.get("phone") or None)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {"id": self.id, "name": self.name, "phone": self.phone}


@dataclass(frozen=True)
class Deposit:
    """A member's contribution to the shared fund for one month."""

    id: str
    member_id: str
    month: str  # canonical YYYY-MM
    amount: Decimal

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Deposit":
        """Create Deposit from a host-application dict."""
        return cls(
            id=str(data["id"]),
            member_id=str(data["member_id"]),
            month=data.get("month"),
            amount=_require_amount("deposit", data.get("amount")),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "member_id": self.member_id,
            "month": self.month,
            "amount": amount_to_str(self.amount),
        }


@dataclass(frozen=True)
class Purchase:
    """A dated market (bazar) expense paid by one member."""

    id: str
    member_id: str
    date: DateValue
    amount: Decimal
    description: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Purchase":
        """Create Purchase from a host-application dict."""
        return cls(
            id=str(data["id"]),
            member_id=str(data["member_id"]),
            date=data.get("date"),
            amount=_require_amount("purchase", data.get("amount")),
            description=data.get("description") or None,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "member_id": self.member_id,
            "date": _date_to_json(self.date),
            "amount": amount_to_str(self.amount),
            "description": self.description,
        }


@dataclass(frozen=True)
class MealLog:
    """How many of the day's two tracked meals a member ate."""

    id: str
    member_id: str
    date: DateValue
    lunch_count: int = 0
    dinner_count: int = 0

    def __post_init__(self) -> None:
        _require_meal_count("lunch_count", self.lunch_count)
        _require_meal_count("dinner_count", self.dinner_count)

    @property
    def total_meals(self) -> int:
        """Meals eaten that day (0, 1 or 2)."""
        return self.lunch_count + self.dinner_count

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MealLog":
        """
        Create MealLog from a host-application dict.

        Accepts either ``lunch_count``/``dinner_count`` or the short
        ``lunch``/``dinner`` field names.
        """
        lunch = data["lunch_count"] if "lunch_count" in data else data.get("lunch", 0)
        dinner = data["dinner_count"] if "dinner_count" in data else data.get("dinner", 0)
        return cls(
            id=str(data["id"]),
            member_id=str(data["member_id"]),
            date=data.get("date"),
            lunch_count=lunch,
            dinner_count=dinner,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "member_id": self.member_id,
            "date": _date_to_json(self.date),
            "lunch_count": self.lunch_count,
            "dinner_count": self.dinner_count,
        }


Record = Union[Deposit, Purchase, MealLog]


def record_kind(record: Record) -> str:
    """Short name of a record's type, used in issues and errors."""
    if isinstance(record, Deposit):
        return "deposit"
    if isinstance(record, Purchase):
        return "purchase"
    if isinstance(record, MealLog):
        return "meal_log"
    raise TypeError(f"Not a ledger record: {type(record).__name__}")


def record_month(record: Record) -> MonthKey:
    """
    Canonical month key of a record.

    Deposits carry their month directly; purchases and meal logs derive it
    from their stored date.

    Raises:
        MalformedDateError: If the month or date cannot be read
    """
    if isinstance(record, Deposit):
        if record.month is None:
            raise MalformedDateError(None, "missing month")
        return MonthKey.from_string(record.month)
    return MonthKey.from_date(parse_record_date(record.date))


class BalanceStatus(Enum):
    """Direction of a member's monthly balance."""

    REFUND = "refund"  # balance >= 0, the group owes the member
    OWES = "owes"  # balance < 0, the member owes the group

    @classmethod
    def for_balance(cls, balance: Decimal) -> "BalanceStatus":
        """Zero counts as a refund."""
        return cls.REFUND if balance >= 0 else cls.OWES


@dataclass(frozen=True)
class ValidationIssue:
    """A record left out of month grouping because its date is unusable."""

    kind: str
    record_id: str
    value: Any
    message: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "kind": self.kind,
            "record_id": self.record_id,
            "value": _date_to_json(self.value),
            "message": self.message,
        }


@dataclass(frozen=True)
class MemberBalance:
    """One member's settlement figures for a month."""

    member: Member
    deposit: Decimal
    purchases_spent: Decimal
    meals_eaten: int
    meal_cost: Decimal
    total_contributed: Decimal
    balance: Decimal
    status: BalanceStatus

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "member": self.member.to_dict(),
            "deposit": amount_to_str(self.deposit),
            "purchases_spent": amount_to_str(self.purchases_spent),
            "meals_eaten": self.meals_eaten,
            "meal_cost": amount_to_str(self.meal_cost),
            "total_contributed": amount_to_str(self.total_contributed),
            "balance": amount_to_str(self.balance),
            "status": self.status.value,
        }


@dataclass(frozen=True)
class SettlementResult:
    """
    Monthly balance sheet for the whole group.

    ``member_balances`` follows the order of the member list it was computed
    from. ``issues`` lists records that were skipped because their date could
    not be read.
    """

    month: str
    total_deposits: Decimal
    total_purchases: Decimal
    total_meals: int
    meal_rate: Decimal
    member_balances: tuple[MemberBalance, ...] = ()
    issues: tuple[ValidationIssue, ...] = field(default=())

    @property
    def total_expenses(self) -> Decimal:
        """All purchases count as expenses."""
        return self.total_purchases

    @property
    def member_count(self) -> int:
        """Number of members in the settlement."""
        return len(self.member_balances)

    @property
    def total_meal_cost(self) -> Decimal:
        """Sum of every member's meal cost."""
        return sum((mb.meal_cost for mb in self.member_balances), Decimal(0))

    def balance_for(self, member_id: str) -> MemberBalance | None:
        """Look up one member's figures by id."""
        for mb in self.member_balances:
            if mb.member.id == member_id:
                return mb
        return None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization (amounts as strings)."""
        return {
            "month": self.month,
            "total_deposits": amount_to_str(self.total_deposits),
            "total_purchases": amount_to_str(self.total_purchases),
            "total_expenses": amount_to_str(self.total_expenses),
            "total_meals": self.total_meals,
            "meal_rate": amount_to_str(self.meal_rate),
            "member_balances": [mb.to_dict() for mb in self.member_balances],
            "issues": [issue.to_dict() for issue in self.issues],
        }
