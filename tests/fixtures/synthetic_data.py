#!/usr/bin/env python3
"""
Synthetic Test Data Generators

Builds synthetic mess ledgers for unit and integration tests.
All names, phone numbers and amounts are made up.
"""

import random
from datetime import date, timedelta
from decimal import Decimal
from pathlib import Path
from typing import Any

from messledger.core.json_utils import write_json
from messledger.core.models import MealLog

SYNTHETIC_MEMBERS = [
    ("m1", "Test Member One"),
    ("m2", "Test Member Two"),
    ("m3", "Test Member Three"),
    ("m4", "Test Member Four"),
]

SYNTHETIC_ITEMS = ["Rice", "Lentils", "Fish", "Vegetables", "Cooking Oil", "Eggs"]


def daily_meal_logs(member_id: str, start: str, days: int, lunch: int = 1, dinner: int = 1) -> list[MealLog]:
    """One meal log per day for ``days`` consecutive days from ``start``."""
    first = date.fromisoformat(start)
    return [
        MealLog(
            id=f"{member_id}-{(first + timedelta(days=i)).isoformat()}",
            member_id=member_id,
            date=(first + timedelta(days=i)).isoformat(),
            lunch_count=lunch,
            dinner_count=dinner,
        )
        for i in range(days)
    ]


def build_ledger_dict() -> dict[str, Any]:
    """
    Small fixed ledger spanning January and February 2024.

    January: m1 and m2 deposit 1000 each, 900 of purchases, 30 meals.
    February: m1 deposits 800, one purchase of 300, 6 meals.
    """
    return {
        "members": [
            {"id": "m1", "name": "Test Member One", "phone": "01700000001"},
            {"id": "m2", "name": "Test Member Two"},
        ],
        "deposits": [
            {"id": "d1", "member_id": "m1", "month": "2024-01", "amount": "1000"},
            {"id": "d2", "member_id": "m2", "month": "2024-01", "amount": "1000"},
            {"id": "d3", "member_id": "m1", "month": "2024-02", "amount": "800"},
        ],
        "bazar": [
            {"id": "p1", "member_id": "m1", "date": "2024-01-03", "amount": "500", "description": "Rice"},
            {"id": "p2", "member_id": "m2", "date": "2024-01-17", "amount": "400"},
            {"id": "p3", "member_id": "m2", "date": "2024-02-15", "amount": "300", "description": "Fish"},
        ],
        "meals": [
            *[
                {"id": f"l1-{d}", "member_id": "m1", "date": f"2024-01-{d:02d}", "lunch": 1, "dinner": 1}
                for d in range(1, 11)
            ],
            *[
                {"id": f"l2-{d}", "member_id": "m2", "date": f"2024-01-{d:02d}", "lunch": 1, "dinner": 0}
                for d in range(1, 11)
            ],
            *[
                {"id": f"l3-{d}", "member_id": "m1", "date": f"2024-02-{d:02d}", "lunch": 1, "dinner": 1}
                for d in range(1, 4)
            ],
        ],
    }


def write_ledger_file(path: Path, data: dict[str, Any] | None = None) -> Path:
    """Write a ledger dict (default: build_ledger_dict()) to ``path``."""
    write_json(path, data if data is not None else build_ledger_dict())
    return path


def random_ledger_dict(seed: int, month: str = "2024-03", members: int = 4, days: int = 28) -> dict[str, Any]:
    """
    Random but reproducible ledger for property-style tests.

    Amounts have up to two decimal places.
    """
    rng = random.Random(seed)
    member_rows = [{"id": mid, "name": name} for mid, name in SYNTHETIC_MEMBERS[:members]]
    first = date.fromisoformat(f"{month}-01")

    deposits = [
        {"id": f"d-{m['id']}", "member_id": m["id"], "month": month, "amount": str(Decimal(rng.randint(0, 300000)) / 100)}
        for m in member_rows
    ]
    purchases = [
        {
            "id": f"p{i}",
            "member_id": rng.choice(member_rows)["id"],
            "date": (first + timedelta(days=rng.randrange(days))).isoformat(),
            "amount": str(Decimal(rng.randint(0, 80000)) / 100),
            "description": rng.choice(SYNTHETIC_ITEMS),
        }
        for i in range(rng.randint(0, 20))
    ]
    meal_logs = [
        {
            "id": f"l-{m['id']}-{d}",
            "member_id": m["id"],
            "date": (first + timedelta(days=d)).isoformat(),
            "lunch_count": rng.randint(0, 1),
            "dinner_count": rng.randint(0, 1),
        }
        for m in member_rows
        for d in range(days)
    ]
    return {"members": member_rows, "deposits": deposits, "purchases": purchases, "meal_logs": meal_logs}
