"""Tests for the session summary helpers."""

import io

import pandas as pd

from billscanner.models import Category, ScanResult, Transaction
from billscanner.reports import (
    COLUMNS,
    category_totals,
    format_currency,
    sanitize_cell,
    spending_chart,
    to_csv,
    transactions_frame,
)


def _tx(merchant: str, amount: float, category: Category) -> Transaction:
    return Transaction.from_scan(ScanResult(merchant=merchant, amount=amount, category=category))


class TestFormatCurrency:
    """Tests for format_currency."""

    def test_baht(self) -> None:
        """Test thousands separator and two decimals."""
        assert format_currency(1250) == "฿1,250.00"
        assert format_currency(0.5) == "฿0.50"

    def test_negative(self) -> None:
        """Test the sign goes before the symbol."""
        assert format_currency(-3) == "-฿3.00"


class TestFrames:
    """Tests for transactions_frame and category_totals."""

    def test_frame_keeps_list_order(self) -> None:
        """Test rows follow the session list (newest first)."""
        txs = [_tx("B", 2, Category.MEALS), _tx("A", 1, Category.TRAVEL)]
        df = transactions_frame(txs)
        assert list(df.columns) == COLUMNS
        assert list(df["merchant"]) == ["B", "A"]
        assert df.loc[1, "category"] == Category.TRAVEL.value

    def test_empty_frame(self) -> None:
        """Test an empty session still has the columns."""
        assert list(transactions_frame([]).columns) == COLUMNS

    def test_category_totals(self) -> None:
        """Test spend is summed per category, zero categories left out."""
        txs = [
            _tx("A", 100.25, Category.MEALS),
            _tx("B", 50, Category.MEALS),
            _tx("C", 20, Category.SOFTWARE),
        ]
        totals = category_totals(txs)
        assert list(totals["Category"]) == ["Meals & Beverage", "Software & Licenses"]
        assert totals.loc[0, "Spend"] == 150.25
        assert totals.loc[1, "Spend"] == 20.0

    def test_category_totals_empty(self) -> None:
        """Test no transactions gives an empty frame."""
        assert category_totals([]).empty


class TestExports:
    """Tests for the chart and CSV export."""

    def test_chart_has_one_bar_per_category(self) -> None:
        """Test the plotly figure is built from the totals."""
        totals = category_totals([_tx("A", 10, Category.FEES), _tx("B", 5, Category.OTHER)])
        fig = spending_chart(totals)
        assert len(fig.data) == 2
        assert fig.layout.title.text == "💰 Spending by Category"

    def test_csv(self) -> None:
        """Test the CSV parses back with every transaction."""
        txs = [_tx("A", 10, Category.FEES), _tx("B", 5, Category.OTHER)]
        df = pd.read_csv(io.StringIO(to_csv(txs)))
        assert list(df["merchant"]) == ["A", "B"]
        assert list(df["amount"]) == [10.0, 5.0]

    def test_csv_neutralises_formulas(self) -> None:
        """Test text that a spreadsheet would run as a formula is quoted."""
        txs = [_tx("=HYPERLINK(\"http://x\")", 10, Category.FEES)]
        df = pd.read_csv(io.StringIO(to_csv(txs)))
        assert df.loc[0, "merchant"].startswith("'=")

    def test_sanitize_cell(self) -> None:
        """Test ordinary text passes through."""
        assert sanitize_cell("7-Eleven") == "7-Eleven"
        assert sanitize_cell("") == ""
        assert sanitize_cell("@SUM(A1)") == "'@SUM(A1)"
