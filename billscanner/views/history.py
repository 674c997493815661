import streamlit as st

from billscanner.controller import ReceiptController
from billscanner.reports import category_totals, format_currency, spending_chart, to_csv


def main(controller: ReceiptController):
    transactions = controller.state.transactions

    st.caption("RECENT RECORDS")
    if not transactions:
        with st.container(border=True):
            st.write("No records yet")
        return

    # newest first, as stored
    for tx in transactions:
        with st.container(border=True):
            left, right = st.columns([3, 1])
            with left:
                st.markdown(f"**{tx.merchant}**")
                meta = f"{tx.date} • {tx.category.short_label}"
                if tx.tax_id:
                    meta += " • :green[TAX]"
                st.caption(meta)
                if tx.note:
                    st.write(tx.note)
            right.markdown(f"**{format_currency(tx.amount)}**")

    # === SESSION SUMMARY ===
    with st.expander("📊 Spending by category"):
        totals = category_totals(transactions)
        if totals.empty:
            st.write("Nothing to chart yet")
        else:
            st.plotly_chart(spending_chart(totals), use_container_width=True)
        st.download_button(
            "Export records (CSV)",
            to_csv(transactions),
            "billscanner_records.csv",
            "text/csv",
        )
