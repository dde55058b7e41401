"""
Mess Ledger - Shared Meal Expense Settlement

Works out what each member of a shared household mess owes or is owed for a
month, from their deposits, the market (bazar) purchases they paid for and
the meals they ate.

Domain Packages:
- core: Amounts, month keys, record models, configuration
- settlement: Month partitioning and the settlement engine
- ledger: Ledger file loading and the write-boundary store
- reporting: Tabular projections of settlement results
- cli: Command-line interface

Example Usage:
    from messledger import compute_settlement, group_by_month

    result = compute_settlement(members, deposits, purchases, meal_logs, "2024-01")
    result.meal_rate
    result.member_balances[0].status
"""

__version__ = "0.1.0"

from .core.config import Environment, get_config
from .core.dates import MalformedDateError, MonthKey
from .core.errors import LedgerError, RecordValidationError
from .core.models import (
    BalanceStatus,
    Deposit,
    MealLog,
    Member,
    MemberBalance,
    Purchase,
    SettlementResult,
    ValidationIssue,
)
from .settlement import (
    MonthPartition,
    ReferentialIntegrityError,
    available_months,
    compute_settlement,
    group_by_month,
)

__all__ = [
    # Core models
    "BalanceStatus",
    "Deposit",
    "MealLog",
    "Member",
    "MemberBalance",
    "MonthKey",
    "Purchase",
    "SettlementResult",
    "ValidationIssue",
    # Errors
    "LedgerError",
    "MalformedDateError",
    "RecordValidationError",
    "ReferentialIntegrityError",
    # Settlement
    "MonthPartition",
    "available_months",
    "compute_settlement",
    "group_by_month",
    # Configuration
    "Environment",
    "get_config",
]
