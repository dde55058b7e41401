#!/usr/bin/env python3
"""Tests for the ledger write boundary."""

from datetime import date
from decimal import Decimal

import pytest

from messledger.core.dates import MalformedDateError
from messledger.core.errors import LedgerError, RecordValidationError
from messledger.ledger.loader import LedgerData
from messledger.ledger.store import (
    DuplicateRecordError,
    LedgerStore,
    RecordNotFoundError,
    UnknownMemberError,
)


@pytest.fixture
def store():
    """Store with two members and no records."""
    ledger_store = LedgerStore()
    ledger_store.add_member("Test Member One", member_id="m1")
    ledger_store.add_member("Test Member Two", phone="01700000002", member_id="m2")
    return ledger_store


class TestMembers:
    """Test member writes."""

    @pytest.mark.ledger
    def test_add_member_generates_id(self):
        member = LedgerStore().add_member("  Someone  ")
        assert member.id
        assert member.name == "Someone"

    @pytest.mark.ledger
    def test_duplicate_member_id_rejected(self, store):
        with pytest.raises(LedgerError, match="already exists"):
            store.add_member("Again", member_id="m1")

    @pytest.mark.ledger
    def test_update_member(self, store):
        store.update_member("m1", "Renamed", phone="01800000000")
        assert store.members[0].name == "Renamed"
        assert store.members[0].phone == "01800000000"

    @pytest.mark.ledger
    def test_update_missing_member(self, store):
        with pytest.raises(RecordNotFoundError):
            store.update_member("nobody", "Name")

    @pytest.mark.ledger
    def test_delete_member_cascades(self, store):
        store.add_deposit("m1", "2024-01", 500)
        store.add_deposit("m2", "2024-01", 500)
        store.add_purchase("m1", "2024-01-02", 100)
        store.add_meal_log("m1", "2024-01-02", lunch=1)

        removed = store.delete_member("m1")

        assert removed == 3
        assert [m.id for m in store.members] == ["m2"]
        assert all(r.member_id == "m2" for r in store.deposits + store.purchases + store.meal_logs)
        # remaining data still settles
        assert store.settle("2024-01").total_deposits == Decimal("500")


class TestDeposits:
    """Test deposit writes."""

    @pytest.mark.ledger
    def test_add_deposit(self, store):
        deposit = store.add_deposit("m1", "2024-01", "1,000")
        assert deposit.amount == Decimal("1000")
        assert deposit.month == "2024-01"

    @pytest.mark.ledger
    def test_one_deposit_per_member_and_month(self, store):
        first = store.add_deposit("m1", "2024-01", 500)
        with pytest.raises(DuplicateRecordError) as exc_info:
            store.add_deposit("m1", " 2024-01 ", 200)
        assert exc_info.value.existing_id == first.id
        assert len(store.deposits) == 1

    @pytest.mark.ledger
    def test_same_month_other_member_allowed(self, store):
        store.add_deposit("m1", "2024-01", 500)
        store.add_deposit("m2", "2024-01", 500)
        assert len(store.deposits) == 2

    @pytest.mark.ledger
    def test_unknown_member(self, store):
        with pytest.raises(UnknownMemberError, match="ghost"):
            store.add_deposit("ghost", "2024-01", 500)

    @pytest.mark.ledger
    def test_invalid_month(self, store):
        with pytest.raises(MalformedDateError):
            store.add_deposit("m1", "January", 500)

    @pytest.mark.ledger
    def test_negative_amount(self, store):
        with pytest.raises(RecordValidationError):
            store.add_deposit("m1", "2024-01", -1)

    @pytest.mark.ledger
    def test_update_keeps_id_and_may_keep_its_own_month(self, store):
        deposit = store.add_deposit("m1", "2024-01", 500)
        updated = store.update_deposit(deposit.id, "m1", "2024-01", 650)
        assert updated.id == deposit.id
        assert store.deposits == (updated,)

    @pytest.mark.ledger
    def test_update_into_taken_month_rejected(self, store):
        store.add_deposit("m1", "2024-01", 500)
        other = store.add_deposit("m1", "2024-02", 500)
        with pytest.raises(DuplicateRecordError):
            store.update_deposit(other.id, "m1", "2024-01", 500)

    @pytest.mark.ledger
    def test_delete_deposit(self, store):
        deposit = store.add_deposit("m1", "2024-01", 500)
        store.delete_deposit(deposit.id)
        assert store.deposits == ()
        with pytest.raises(RecordNotFoundError):
            store.delete_deposit(deposit.id)


class TestPurchasesAndMealLogs:
    """Test purchase and meal log writes."""

    @pytest.mark.ledger
    def test_add_purchase(self, store):
        purchase = store.add_purchase("m2", date(2024, 1, 4), "250.75", description="Rice")
        assert purchase.amount == Decimal("250.75")
        assert store.purchases == (purchase,)

    @pytest.mark.ledger
    def test_purchase_with_bad_date_rejected(self, store):
        with pytest.raises(MalformedDateError):
            store.add_purchase("m1", "04/01/2024", 10)
        assert store.purchases == ()

    @pytest.mark.ledger
    def test_multiple_purchases_same_day_allowed(self, store):
        store.add_purchase("m1", "2024-01-04", 10)
        store.add_purchase("m1", "2024-01-04", 20)
        assert len(store.purchases) == 2

    @pytest.mark.ledger
    def test_update_and_delete_purchase(self, store):
        purchase = store.add_purchase("m1", "2024-01-04", 10)
        updated = store.update_purchase(purchase.id, "m2", "2024-01-05", 15, "Eggs")
        assert updated.member_id == "m2"
        store.delete_purchase(purchase.id)
        assert store.purchases == ()

    @pytest.mark.ledger
    def test_one_meal_log_per_member_and_day(self, store):
        store.add_meal_log("m1", "2024-01-04", lunch=1)
        with pytest.raises(DuplicateRecordError, match="2024-01-04"):
            store.add_meal_log("m1", date(2024, 1, 4), dinner=1)
        store.add_meal_log("m2", "2024-01-04", dinner=1)
        assert len(store.meal_logs) == 2

    @pytest.mark.ledger
    def test_meal_counts_validated(self, store):
        with pytest.raises(RecordValidationError):
            store.add_meal_log("m1", "2024-01-04", lunch=2)

    @pytest.mark.ledger
    def test_update_and_delete_meal_log(self, store):
        log = store.add_meal_log("m1", "2024-01-04", lunch=1)
        updated = store.update_meal_log(log.id, "m1", "2024-01-04", lunch=1, dinner=1)
        assert updated.total_meals == 2
        store.delete_meal_log(log.id)
        with pytest.raises(RecordNotFoundError):
            store.update_meal_log(log.id, "m1", "2024-01-04")


class TestSnapshotAndSettle:
    """Test reading back from the store."""

    @pytest.mark.ledger
    def test_loaded_ledger_settles_like_engine(self, ledger_dict):
        store = LedgerStore(LedgerData.from_dict(ledger_dict))

        january = store.settle("2024-01")

        assert january.total_purchases == Decimal("900")
        assert january.total_meals == 30
        assert january.meal_rate == Decimal("30")
        assert store.available_months() == ["2024-02", "2024-01"]

    @pytest.mark.ledger
    def test_loaded_ledger_with_duplicates_rejected(self):
        data = {
            "members": [{"id": "m1", "name": "One"}],
            "deposits": [
                {"id": "d1", "member_id": "m1", "month": "2024-01", "amount": 1},
                {"id": "d2", "member_id": "m1", "month": "2024-01", "amount": 2},
            ],
        }
        with pytest.raises(DuplicateRecordError):
            LedgerStore(LedgerData.from_dict(data))

    @pytest.mark.ledger
    def test_snapshot_is_immutable_copy(self, store):
        store.add_deposit("m1", "2024-01", 500)
        snapshot = store.snapshot()
        store.add_deposit("m2", "2024-01", 500)
        assert len(snapshot.deposits) == 1
        assert len(store.snapshot().deposits) == 2
