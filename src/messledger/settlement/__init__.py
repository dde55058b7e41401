"""
Settlement Package

The pure core of the mess ledger: month partitioning and the settlement
engine that turns deposits, purchases and meal logs into member balances.

Key Components:
- group_by_month / available_months: bucket records by "YYYY-MM"
- compute_settlement: per-member balances for one month
- check_referential_integrity: refuse records that point at unknown members
- check_unique_members: refuse member lists that repeat an id

Example Usage:
    from messledger.settlement import compute_settlement

    result = compute_settlement(members, deposits, purchases, meal_logs, "2024-01")
    for mb in result.member_balances:
        print(mb.member.name, mb.balance, mb.status.value)
"""

from .engine import compute_meal_rate, compute_settlement
from .partitioner import MonthPartition, available_months, filter_month, group_by_month, month_key_for
from .validation import (
    DuplicateGroup,
    DuplicateMemberError,
    OrphanedRecord,
    ReferentialIntegrityError,
    check_referential_integrity,
    check_unique_members,
    find_duplicate_deposits,
    find_duplicate_meal_logs,
    find_orphans,
)

__all__ = [
    # Engine
    "compute_meal_rate",
    "compute_settlement",
    # Partitioner
    "MonthPartition",
    "available_months",
    "filter_month",
    "group_by_month",
    "month_key_for",
    # Validation
    "DuplicateGroup",
    "DuplicateMemberError",
    "OrphanedRecord",
    "ReferentialIntegrityError",
    "check_referential_integrity",
    "check_unique_members",
    "find_duplicate_deposits",
    "find_duplicate_meal_logs",
    "find_orphans",
]
