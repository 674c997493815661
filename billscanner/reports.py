from typing import Sequence

import pandas as pd
import plotly.express as px

from billscanner.models import Category, Transaction

COLUMNS = ["date", "merchant", "amount", "category", "taxId", "address", "note", "id", "timestamp"]

# Bar colours, one per category in declaration order
PALETTE = [
    "#6366f1", "#f59e0b", "#10b981", "#8b5cf6", "#ef4444", "#0ea5e9",
    "#14b8a6", "#ec4899", "#84cc16", "#f97316", "#a855f7", "#6b7280",
]


def format_currency(amount: float, symbol: str = "฿") -> str:
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{abs(amount):,.2f}"


def transactions_frame(transactions: Sequence[Transaction]) -> pd.DataFrame:
    rows = [
        {
            "date": t.date,
            "merchant": t.merchant,
            "amount": t.amount,
            "category": t.category.value,
            "taxId": t.tax_id,
            "address": t.address,
            "note": t.note,
            "id": t.id,
            "timestamp": t.timestamp,
        }
        for t in transactions
    ]
    return pd.DataFrame(rows, columns=COLUMNS)


def category_totals(transactions: Sequence[Transaction]) -> pd.DataFrame:
    """Spend per category for the session, in category order, zero totals left out."""
    spend = {c: 0.0 for c in Category}
    for t in transactions:
        spend[t.category] += t.amount

    chart_data = [
        {"Category": c.short_label, "Spend": round(total, 2)}
        for c, total in spend.items()
        if total
    ]
    return pd.DataFrame(chart_data, columns=["Category", "Spend"])


def spending_chart(totals: pd.DataFrame):
    colours = dict(zip([c.short_label for c in Category], PALETTE))
    fig = px.bar(
        totals,
        x="Category",
        y="Spend",
        text="Spend",
        color="Category",
        color_discrete_map=colours,
        title="💰 Spending by Category",
    )
    fig.update_traces(texttemplate="฿%{text:,.2f}", textposition="outside")
    fig.update_layout(showlegend=False, yaxis_title=None, xaxis_title=None)
    return fig


# leading characters a spreadsheet would treat as a formula
_FORMULA_CHARS = ("=", "+", "-", "@", "\t", "\r", "\n", "|")
TEXT_COLUMNS = ["date", "merchant", "category", "taxId", "address", "note"]


def sanitize_cell(value: str) -> str:
    if value and value.startswith(_FORMULA_CHARS):
        return "'" + value
    return value


def to_csv(transactions: Sequence[Transaction]) -> str:
    df = transactions_frame(transactions)
    for column in TEXT_COLUMNS:
        df[column] = df[column].map(sanitize_cell)
    return df.to_csv(index=False)
