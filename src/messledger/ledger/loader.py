#!/usr/bin/env python3
"""
Ledger Loader Module

Loads the four record streams from a JSON ledger file into domain models.

File format:
    {
      "members":   [{"id": "m1", "name": "Rahim", "phone": "..."}],
      "deposits":  [{"id": "d1", "member_id": "m1", "month": "2024-01", "amount": "1000"}],
      "purchases": [{"id": "p1", "member_id": "m1", "date": "2024-01-03", "amount": 350.5}],
      "meal_logs": [{"id": "l1", "member_id": "m1", "date": "2024-01-03", "lunch_count": 1, "dinner_count": 1}]
    }

"bazar" and "meals" are accepted as names for the purchase and meal log
arrays.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, TypeVar

from ..core.config import get_config
from ..core.errors import LedgerError
from ..core.json_utils import read_json, write_json
from ..core.models import Deposit, MealLog, Member, Purchase

logger = logging.getLogger(__name__)

T = TypeVar("T", Member, Deposit, Purchase, MealLog)


class LedgerFileError(LedgerError):
    """Raised when a ledger file is missing or not shaped like a ledger."""

    pass


@dataclass(frozen=True)
class LedgerData:
    """All four record streams, as loaded."""

    members: tuple[Member, ...] = ()
    deposits: tuple[Deposit, ...] = ()
    purchases: tuple[Purchase, ...] = ()
    meal_logs: tuple[MealLog, ...] = ()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LedgerData":
        """
        Build LedgerData from a parsed ledger document.

        Raises:
            LedgerFileError: If the document, an array or a record has the wrong
                shape, or a record lacks a required key
            RecordValidationError: If a record holds an invalid field
        """
        if not isinstance(data, dict):
            raise LedgerFileError(f"Ledger must be a JSON object, got {type(data).__name__}")

        purchases_key = "purchases" if "purchases" in data else "bazar"
        meal_logs_key = "meal_logs" if "meal_logs" in data else "meals"

        return cls(
            members=_parse_records(data, "members", Member),
            deposits=_parse_records(data, "deposits", Deposit),
            purchases=_parse_records(data, purchases_key, Purchase),
            meal_logs=_parse_records(data, meal_logs_key, MealLog),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to the ledger file format."""
        return {
            "members": [m.to_dict() for m in self.members],
            "deposits": [d.to_dict() for d in self.deposits],
            "purchases": [p.to_dict() for p in self.purchases],
            "meal_logs": [m.to_dict() for m in self.meal_logs],
        }


def _parse_records(data: dict[str, Any], name: str, model: type[T]) -> tuple[T, ...]:
    rows = data.get(name, [])
    if not isinstance(rows, list):
        raise LedgerFileError(f"\"{name}\" must be an array, got {type(rows).__name__}")

    records = []
    for index, row in enumerate(rows):
        if not isinstance(row, dict):
            raise LedgerFileError(f"{name}[{index}] must be an object, got {type(row).__name__}")
        try:
            records.append(model.from_dict(row))
        except KeyError as e:
            raise LedgerFileError(f"{name}[{index}] is a record without {e}") from e
    return tuple(records)


def default_ledger_path() -> Path:
    """Ledger file configured for the current environment."""
    return get_config().ledger.ledger_file


def load_ledger(path: str | Path | None = None) -> LedgerData:
    """
    Load a ledger file.

    Args:
        path: Ledger file path (uses config if None)

    Returns:
        LedgerData with every record stream

    Raises:
        LedgerFileError: If the file is missing or malformed
    """
    ledger_path = Path(path) if path is not None else default_ledger_path()
    if not ledger_path.exists():
        raise LedgerFileError(f"Ledger file not found: {ledger_path}")

    try:
        raw = read_json(ledger_path)
    except ValueError as e:
        raise LedgerFileError(f"Ledger file {ledger_path} is not valid JSON: {e}") from e

    try:
        ledger = LedgerData.from_dict(raw)
    except LedgerFileError as e:
        raise LedgerFileError(f"Ledger file {ledger_path}: {e}") from e

    logger.info(
        "Loaded %d members, %d deposits, %d purchases, %d meal logs from %s",
        len(ledger.members),
        len(ledger.deposits),
        len(ledger.purchases),
        len(ledger.meal_logs),
        ledger_path,
    )
    return ledger


def save_ledger(ledger: LedgerData, path: str | Path | None = None) -> Path:
    """
    Write a ledger file.

    Returns:
        Path the ledger was written to
    """
    ledger_path = Path(path) if path is not None else default_ledger_path()
    write_json(ledger_path, ledger.to_dict())
    logger.info("Saved ledger to %s", ledger_path)
    return ledger_path
