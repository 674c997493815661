"""Tests for the receipt data model."""

import math
from datetime import date

import pytest
from pydantic import ValidationError

from billscanner.models import Category, ScanResult, Transaction, parse_amount


class TestCategory:
    """Tests for Category."""

    def test_twelve_categories(self) -> None:
        """Test the enumeration is closed at twelve labels."""
        assert len(Category.labels()) == 12
        assert Category.OTHER.value in Category.labels()

    def test_from_label_known(self) -> None:
        """Test resolving an exact label."""
        assert Category.from_label("Software & Licenses (ค่าซอฟต์แวร์)") is Category.SOFTWARE

    @pytest.mark.parametrize("value", ["", None, "Groceries"])
    def test_from_label_unknown_is_other(self, value) -> None:
        """Test unknown labels fall back to Other."""
        assert Category.from_label(value) is Category.OTHER

    def test_short_label(self) -> None:
        """Test the English part of a label."""
        assert Category.TRAVEL.short_label == "Travel & Transportation"


class TestParseAmount:
    """Tests for parse_amount."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("150.50", 150.5),
            (" 42 ", 42.0),
            ("12abc", 12.0),
            (".5", 0.5),
            ("-3", -3.0),
            (99, 99.0),
            ("abc", 0.0),
            ("", 0.0),
            (None, 0.0),
        ],
    )
    def test_parse(self, raw, expected) -> None:
        """Test text input is read like a browser number field."""
        assert parse_amount(raw) == expected

    def test_non_finite_is_zero(self) -> None:
        """Test infinity and NaN become zero."""
        assert parse_amount(float("inf")) == 0.0
        assert parse_amount(math.nan) == 0.0
        assert parse_amount("1e999") == 0.0


class TestScanResult:
    """Tests for ScanResult."""

    def test_blank_defaults_to_other_and_today(self) -> None:
        """Test the initial form state."""
        blank = ScanResult.blank()
        assert blank.category is Category.OTHER
        assert blank.date == date.today().isoformat()
        assert blank.merchant == ""
        assert blank.amount == 0.0

    def test_tax_id_alias(self) -> None:
        """Test taxId is accepted under its wire name."""
        scan = ScanResult(taxId="0107542000011")
        assert scan.tax_id == "0107542000011"


class TestTransaction:
    """Tests for Transaction."""

    def test_from_scan_copies_fields(self) -> None:
        """Test promotion keeps every form field and adds id and timestamp."""
        scan = ScanResult(date="2026-01-02", merchant="Grab", amount=89.0, category=Category.TRAVEL,
                          tax_id="123", address="Bangkok", note="taxi")
        tx = Transaction.from_scan(scan, now=1_700_000_000.25)
        assert tx.merchant == "Grab"
        assert tx.category is Category.TRAVEL
        assert tx.tax_id == "123"
        assert tx.timestamp == 1_700_000_000_250
        assert tx.id

    def test_ids_are_unique(self) -> None:
        """Test each transaction gets its own id."""
        scan = ScanResult(merchant="A", amount=1.0)
        assert Transaction.from_scan(scan).id != Transaction.from_scan(scan).id

    def test_is_immutable(self) -> None:
        """Test a transaction cannot be edited after creation."""
        tx = Transaction.from_scan(ScanResult(merchant="A", amount=1.0))
        with pytest.raises(ValidationError):
            tx.amount = 5.0

    def test_webhook_payload(self) -> None:
        """Test the payload carries every field plus the source tag."""
        tx = Transaction.from_scan(ScanResult(merchant="A", amount=1.0, category=Category.FEES))
        payload = tx.webhook_payload("BillScannerApp")
        assert set(payload) == {
            "id", "date", "merchant", "amount", "category", "timestamp",
            "taxId", "address", "note", "source",
        }
        assert payload["category"] == "Fees & Taxes (ค่าธรรมเนียม)"
        assert payload["source"] == "BillScannerApp"
