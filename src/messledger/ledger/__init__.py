"""
Ledger Package

Host-application glue around the settlement core: loading ledger files and
an in-memory store that enforces the write-boundary rules.
"""

from .loader import LedgerData, LedgerFileError, default_ledger_path, load_ledger, save_ledger
from .store import DuplicateRecordError, LedgerStore, RecordNotFoundError, UnknownMemberError

__all__ = [
    "DuplicateRecordError",
    "LedgerData",
    "LedgerFileError",
    "LedgerStore",
    "RecordNotFoundError",
    "UnknownMemberError",
    "default_ledger_path",
    "load_ledger",
    "save_ledger",
]
