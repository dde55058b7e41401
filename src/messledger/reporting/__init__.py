"""
Reporting Package

Tabular projections of settlement results for display and export.
"""

from .projection import (
    BALANCE_COLUMNS,
    MonthSummary,
    balances_to_dataframe,
    month_summaries,
    month_summary_frame,
    render_settlement_table,
    settlement_to_csv,
    summary_rows,
)

__all__ = [
    "BALANCE_COLUMNS",
    "MonthSummary",
    "balances_to_dataframe",
    "month_summaries",
    "month_summary_frame",
    "render_settlement_table",
    "settlement_to_csv",
    "summary_rows",
]
