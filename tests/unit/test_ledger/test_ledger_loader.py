#!/usr/bin/env python3
"""Tests for reading and writing ledger files."""

import json
from decimal import Decimal

import pytest

from messledger.core.errors import RecordValidationError
from messledger.ledger.loader import LedgerData, LedgerFileError, load_ledger, save_ledger

from tests.fixtures.synthetic_data import write_ledger_file


class TestLedgerData:
    """Test building LedgerData from parsed documents."""

    @pytest.mark.ledger
    def test_from_dict_with_aliases(self, ledger_dict):
        ledger = LedgerData.from_dict(ledger_dict)

        assert [m.id for m in ledger.members] == ["m1", "m2"]
        assert len(ledger.deposits) == 3
        assert [p.id for p in ledger.purchases] == ["p1", "p2", "p3"]
        assert len(ledger.meal_logs) == 23
        assert ledger.meal_logs[0].total_meals == 2

    @pytest.mark.ledger
    def test_empty_document(self):
        assert LedgerData.from_dict({}) == LedgerData()

    @pytest.mark.ledger
    def test_rejects_non_object(self):
        with pytest.raises(LedgerFileError, match="JSON object"):
            LedgerData.from_dict([])

    @pytest.mark.ledger
    def test_invalid_record_raises(self):
        with pytest.raises(RecordValidationError):
            LedgerData.from_dict({"members": [{"id": "m1", "name": ""}]})

    @pytest.mark.ledger
    @pytest.mark.parametrize(
        "data,message",
        [
            ({"members": ["oops"]}, r"members\[0\] must be an object, got str"),
            ({"members": None}, r"\"members\" must be an array, got NoneType"),
            ({"deposits": 5}, r"\"deposits\" must be an array, got int"),
            ({"bazar": [{"id": "p1", "member_id": "m1", "amount": 1}, 7]}, r"bazar\[1\] must be an object"),
            ({"meals": [{"member_id": "m1"}]}, r"meals\[0\] is a record without 'id'"),
        ],
    )
    def test_wrong_shapes_raise_ledger_file_error(self, data, message):
        with pytest.raises(LedgerFileError, match=message):
            LedgerData.from_dict(data)

    @pytest.mark.ledger
    def test_to_dict_uses_canonical_names(self, ledger_dict):
        data = LedgerData.from_dict(ledger_dict).to_dict()
        assert set(data) == {"members", "deposits", "purchases", "meal_logs"}
        assert data["meal_logs"][0]["lunch_count"] == 1


class TestLoadLedger:
    """Test loading ledger files from disk."""

    @pytest.mark.ledger
    def test_load_file(self, temp_dir):
        path = write_ledger_file(temp_dir / "ledger.json")

        ledger = load_ledger(path)

        assert ledger.deposits[0].amount == Decimal("1000")
        assert ledger.purchases[2].description == "Fish"

    @pytest.mark.ledger
    def test_float_amounts_read_as_exact_decimals(self, temp_dir):
        path = temp_dir / "ledger.json"
        path.write_text(
            json.dumps(
                {
                    "members": [{"id": "m1", "name": "One"}],
                    "purchases": [{"id": "p1", "member_id": "m1", "date": "2024-01-01", "amount": 0.1}],
                }
            ),
            encoding="utf-8",
        )

        ledger = load_ledger(path)

        assert ledger.purchases[0].amount == Decimal("0.1")

    @pytest.mark.ledger
    def test_missing_file(self, temp_dir):
        with pytest.raises(LedgerFileError, match="not found"):
            load_ledger(temp_dir / "missing.json")

    @pytest.mark.ledger
    def test_invalid_json(self, temp_dir):
        path = temp_dir / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(LedgerFileError, match="not valid JSON"):
            load_ledger(path)

    @pytest.mark.ledger
    def test_record_missing_id(self, temp_dir):
        path = write_ledger_file(temp_dir / "ledger.json", {"members": [{"name": "No Id"}]})
        with pytest.raises(LedgerFileError, match=r"members\[0\] is a record without 'id'"):
            load_ledger(path)

    @pytest.mark.ledger
    def test_default_path_comes_from_config(self, monkeypatch, temp_dir):
        from messledger.core.config import reload_config

        monkeypatch.setenv("MESSLEDGER_LEDGER_FILE", str(temp_dir / "configured.json"))
        reload_config()
        try:
            write_ledger_file(temp_dir / "configured.json")
            assert len(load_ledger().members) == 2
        finally:
            monkeypatch.delenv("MESSLEDGER_LEDGER_FILE")
            reload_config()

    @pytest.mark.ledger
    def test_save_then_load(self, temp_dir, ledger_dict):
        original = LedgerData.from_dict(ledger_dict)

        path = save_ledger(original, temp_dir / "nested" / "ledger.json")

        assert path.exists()
        assert load_ledger(path) == original
