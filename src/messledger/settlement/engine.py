#!/usr/bin/env python3
"""
Settlement Engine

Turns the group's deposits, purchases and meal logs into a monthly balance
sheet for every member.

The meal rate is the month's total purchase spend divided by the number of
meals eaten. Each member is charged meals_eaten x meal_rate and credited with
what they deposited plus what they spent at the market. The difference is
their balance: zero or above means a refund is due, below zero means they owe
the group.

compute_settlement is pure. It reads immutable inputs, performs no I/O and
returns a new SettlementResult, so it can be re-run on every data change.
All arithmetic runs in DIVISION_CONTEXT, whatever decimal context the caller
has active.
"""

import logging
from collections import defaultdict
from collections.abc import Sequence
from decimal import Decimal, localcontext

from ..core.amounts import DIVISION_CONTEXT, ZERO, safe_divide, sum_amounts
from ..core.dates import MonthKey
from ..core.models import (
    BalanceStatus,
    Deposit,
    MealLog,
    Member,
    MemberBalance,
    Purchase,
    SettlementResult,
)
from .partitioner import filter_month
from .validation import check_referential_integrity, check_unique_members

logger = logging.getLogger(__name__)


def compute_meal_rate(total_purchases: Decimal, total_meals: int) -> Decimal:
    """
    Cost of a single meal for the month.

    Returns exactly Decimal(0) when no meals were eaten.
    """
    if total_meals <= 0:
        return ZERO
    return safe_divide(total_purchases, total_meals)


def compute_settlement(
    members: Sequence[Member],
    deposits: Sequence[Deposit],
    purchases: Sequence[Purchase],
    meal_logs: Sequence[MealLog],
    target_month: MonthKey | str,
) -> SettlementResult:
    """
    Compute every member's balance for one month.

    Duplicate deposits or meal logs for the same member and period are summed.
    Records with unreadable dates are left out and listed in
    ``SettlementResult.issues``.

    Args:
        members: Group members; the result keeps this order
        deposits: All deposits (any month)
        purchases: All purchases (any month)
        meal_logs: All meal logs (any month)
        target_month: Month to settle, as MonthKey or "YYYY-MM"

    Returns:
        SettlementResult with group totals and one MemberBalance per member

    Raises:
        DuplicateMemberError: If two members share an id
        ReferentialIntegrityError: If any record references an unknown member
        MalformedDateError: If target_month itself is not a valid month key
    """
    month = MonthKey.coerce(target_month)
    check_unique_members(members)
    check_referential_integrity(members, deposits, purchases, meal_logs)

    with localcontext(DIVISION_CONTEXT):
        return _settle(members, deposits, purchases, meal_logs, month)


def _settle(
    members: Sequence[Member],
    deposits: Sequence[Deposit],
    purchases: Sequence[Purchase],
    meal_logs: Sequence[MealLog],
    month: MonthKey,
) -> SettlementResult:
    month_deposits, deposit_issues = filter_month(deposits, month)
    month_purchases, purchase_issues = filter_month(purchases, month)
    month_meals, meal_issues = filter_month(meal_logs, month)
    issues = deposit_issues + purchase_issues + meal_issues
    if issues:
        logger.warning("Left %d record(s) with unusable dates out of the %s settlement", len(issues), month)

    deposit_by_member: dict[str, Decimal] = defaultdict(lambda: ZERO)
    for deposit in month_deposits:
        deposit_by_member[deposit.member_id] += deposit.amount

    purchases_by_member: dict[str, Decimal] = defaultdict(lambda: ZERO)
    for purchase in month_purchases:
        purchases_by_member[purchase.member_id] += purchase.amount

    meals_by_member: dict[str, int] = defaultdict(int)
    for log in month_meals:
        meals_by_member[log.member_id] += log.total_meals

    total_deposits = sum_amounts(d.amount for d in month_deposits)
    total_purchases = sum_amounts(p.amount for p in month_purchases)
    total_meals = sum(log.total_meals for log in month_meals)
    meal_rate = compute_meal_rate(total_purchases, total_meals)

    balances = []
    for member in members:
        deposit = deposit_by_member.get(member.id, ZERO)
        spent = purchases_by_member.get(member.id, ZERO)
        meals = meals_by_member.get(member.id, 0)

        meal_cost = meal_rate * meals
        total_contributed = deposit + spent
        balance = total_contributed - meal_cost

        balances.append(
            MemberBalance(
                member=member,
                deposit=deposit,
                purchases_spent=spent,
                meals_eaten=meals,
                meal_cost=meal_cost,
                total_contributed=total_contributed,
                balance=balance,
                status=BalanceStatus.for_balance(balance),
            )
        )

    logger.debug(
        "Settled %s: %d members, deposits %s, purchases %s, meals %d, rate %s",
        month,
        len(balances),
        total_deposits,
        total_purchases,
        total_meals,
        meal_rate,
    )

    return SettlementResult(
        month=str(month),
        total_deposits=total_deposits,
        total_purchases=total_purchases,
        total_meals=total_meals,
        meal_rate=meal_rate,
        member_balances=tuple(balances),
        issues=tuple(issues),
    )
