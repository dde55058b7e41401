#!/usr/bin/env python3
"""
Reporting Projection Module

Turns settlement results and month partitions into tabular views for the CLI
and for host applications that render their own reports.

Every amount is rounded here for display only; the SettlementResult itself is
never rounded.
"""

from dataclasses import dataclass
from decimal import Decimal

import pandas as pd

from ..core.amounts import format_amount, quantize_display, sum_amounts
from ..core.dates import MonthKey
from ..core.models import Deposit, MealLog, Purchase, SettlementResult
from ..settlement.partitioner import MonthPartition


BALANCE_COLUMNS = [
    "member_id",
    "member",
    "deposit",
    "purchases_spent",
    "meals_eaten",
    "meal_cost",
    "total_contributed",
    "balance",
    "status",
]


@dataclass(frozen=True)
class MonthSummary:
    """One line of a month list: how many entries, meals and how much money."""

    month: str
    entries: int
    total_meals: int
    total_amount: Decimal

    @property
    def label(self) -> str:
        """Month name for display, e.g. "January 2024"."""
        return MonthKey.from_string(self.month).label()


def balances_to_dataframe(result: SettlementResult, places: int | None = None) -> pd.DataFrame:
    """
    One row per member, in settlement order.

    Args:
        result: Settlement to project
        places: Round amounts to this many places; None keeps exact Decimals

    Returns:
        DataFrame with BALANCE_COLUMNS
    """

    def _amount(value: Decimal) -> Decimal:
        return quantize_display(value, places) if places is not None else value

    rows = [
        {
            "member_id": mb.member.id,
            "member": mb.member.name,
            "deposit": _amount(mb.deposit),
            "purchases_spent": _amount(mb.purchases_spent),
            "meals_eaten": mb.meals_eaten,
            "meal_cost": _amount(mb.meal_cost),
            "total_contributed": _amount(mb.total_contributed),
            "balance": _amount(mb.balance),
            "status": mb.status.value,
        }
        for mb in result.member_balances
    ]
    return pd.DataFrame(rows, columns=BALANCE_COLUMNS)


def summary_rows(result: SettlementResult, symbol: str = "৳", places: int = 2) -> list[tuple[str, str]]:
    """Group-level figures as (label, formatted value) pairs."""
    return [
        ("Total Members", str(result.member_count)),
        ("Total Deposits", format_amount(result.total_deposits, symbol, places)),
        ("Total Bazar Expenses", format_amount(result.total_expenses, symbol, places)),
        ("Total Meals", str(result.total_meals)),
        ("Per Meal Rate", format_amount(result.meal_rate, symbol, places)),
    ]


def render_settlement_table(result: SettlementResult, symbol: str = "৳", places: int = 2) -> str:
    """
    Plain-text report: group summary followed by the member table.

    Args:
        result: Settlement to render
        symbol: Currency symbol for amounts
        places: Decimal places for amounts

    Returns:
        Multi-line string
    """
    lines = [f"Settlement for {MonthKey.from_string(result.month).label()} ({result.month})", ""]
    for label, value in summary_rows(result, symbol, places):
        lines.append(f"  {label + ':':<22}{value}")
    lines.append("")

    if not result.member_balances:
        lines.append("No members.")
        return "\n".join(lines)

    df = balances_to_dataframe(result)
    display = pd.DataFrame(
        {
            "Member": df["member"],
            "Deposit": df["deposit"].map(lambda v: format_amount(v, symbol, places)),
            "Bazar": df["purchases_spent"].map(lambda v: format_amount(v, symbol, places)),
            "Meals": df["meals_eaten"],
            "Meal Cost": df["meal_cost"].map(lambda v: format_amount(v, symbol, places)),
            "Total Paid": df["total_contributed"].map(lambda v: format_amount(v, symbol, places)),
            "Balance": df["balance"].map(lambda v: format_amount(v, symbol, places)),
            "Status": df["status"].map({"refund": "Refund", "owes": "Owes"}),
        }
    )
    lines.append(display.to_string(index=False))
    return "\n".join(lines)


def settlement_to_csv(result: SettlementResult, places: int = 2) -> str:
    """Member table as CSV text, amounts rounded for display."""
    df = balances_to_dataframe(result, places=places)
    return df.to_csv(index=False)


def month_summaries(partition: MonthPartition) -> list[MonthSummary]:
    """
    Per-month entry counts and totals, most recent month first.

    Meal logs contribute meal counts; deposits and purchases contribute
    amounts.
    """
    summaries = []
    for month in partition.months():
        records = partition[month]
        total_meals = sum(r.total_meals for r in records if isinstance(r, MealLog))
        total_amount = sum_amounts(r.amount for r in records if isinstance(r, (Deposit, Purchase)))
        summaries.append(
            MonthSummary(month=month, entries=len(records), total_meals=total_meals, total_amount=total_amount)
        )
    return summaries


def month_summary_frame(partition: MonthPartition) -> pd.DataFrame:
    """month_summaries as a DataFrame indexed by month key."""
    summaries = month_summaries(partition)
    df = pd.DataFrame(
        [
            {
                "month": s.month,
                "entries": s.entries,
                "total_meals": s.total_meals,
                "total_amount": s.total_amount,
            }
            for s in summaries
        ],
        columns=["month", "entries", "total_meals", "total_amount"],
    )
    return df.set_index("month")
