#!/usr/bin/env python3
"""
Error Types for the Mess Ledger

Every error raised by the ledger derives from LedgerError so callers can
catch the whole family at once while still telling the kinds apart.
"""


class LedgerError(Exception):
    """Base class for all mess ledger errors."""

    pass


class RecordValidationError(LedgerError, ValueError):
    """Raised when a record field holds an invalid value."""

    def __init__(self, kind: str, field_name: str, message: str):
        self.kind = kind
        self.field_name = field_name
        super().__init__(f"Invalid {kind}.{field_name}: {message}")
