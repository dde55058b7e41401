"""
Core Utilities Package

Shared primitives used by the settlement engine and the host-application glue.

This package provides:
- Exact decimal amount handling
- The MonthKey calendar-month primitive
- Record and settlement result models
- Configuration management and logging setup
"""

from .amounts import (
    ZERO,
    amount_to_str,
    amounts_close,
    format_amount,
    parse_amount,
    quantize_display,
    safe_divide,
    sum_amounts,
)
from .config import (
    Config,
    Environment,
    get_config,
    get_data_dir,
    is_development,
    is_production,
    is_test,
    reload_config,
)
from .dates import MalformedDateError, MonthKey, parse_record_date
from .errors import LedgerError, RecordValidationError
from .models import (
    BalanceStatus,
    Deposit,
    MealLog,
    Member,
    MemberBalance,
    Purchase,
    Record,
    SettlementResult,
    ValidationIssue,
    record_kind,
    record_month,
)

__all__ = [
    # Amounts
    "ZERO",
    "amount_to_str",
    "amounts_close",
    "format_amount",
    "parse_amount",
    "quantize_display",
    "safe_divide",
    "sum_amounts",
    # Configuration
    "Config",
    "Environment",
    "get_config",
    "get_data_dir",
    "is_development",
    "is_production",
    "is_test",
    "reload_config",
    # Dates
    "MalformedDateError",
    "MonthKey",
    "parse_record_date",
    # Errors
    "LedgerError",
    "RecordValidationError",
    # Models
    "BalanceStatus",
    "Deposit",
    "MealLog",
    "Member",
    "MemberBalance",
    "Purchase",
    "Record",
    "SettlementResult",
    "ValidationIssue",
    "record_kind",
    "record_month",
]
