import streamlit as st

from billscanner.controller import ReceiptController, SaveStatus
from billscanner.exceptions import ConfirmRejected
from billscanner.models import Category


def _field_key(controller: ReceiptController, name: str) -> str:
    # a new key per receipt so widgets start from the freshly scanned values
    return f"form_{name}_{controller.state.capture_digest}"


def _on_edit(controller: ReceiptController, name: str):
    controller.edit_field(name, st.session_state[_field_key(controller, name)])


def _text(controller, name, label, value, area=False, **kwargs):
    widget = st.text_area if area else st.text_input
    widget(
        label,
        value=value,
        key=_field_key(controller, name),
        on_change=_on_edit,
        args=(controller, name),
        **kwargs,
    )


def main(controller: ReceiptController):
    state = controller.state
    form = state.form

    with st.container(border=True):
        head, badge = st.columns([4, 1])
        head.subheader("Review receipt")
        badge.caption("AI Analyzed")

        _text(controller, "date", "Date", form.date, placeholder="YYYY-MM-DD")
        _text(controller, "merchant", "Merchant", form.merchant, placeholder="e.g. 7-Eleven")

        col1, col2 = st.columns(2)
        with col1:
            _text(controller, "amount", "Total (฿)", f"{form.amount:.2f}")
        with col2:
            _text(controller, "tax_id", "Tax ID", form.tax_id, placeholder="If any")

        labels = Category.labels()
        st.selectbox(
            "Category",
            labels,
            index=labels.index(form.category.value),
            key=_field_key(controller, "category"),
            on_change=_on_edit,
            args=(controller, "category"),
        )
        _text(controller, "note", "Memo / Note", form.note, area=True, height=80,
              placeholder="What was paid for (AI fills this in)")
        _text(controller, "address", "Merchant address", form.address, area=True, height=80,
              placeholder="Address as printed on the tax invoice")

        clicked = st.button(
            "Confirm and save",
            disabled=state.save_status is not SaveStatus.IDLE,
            type="primary",
            use_container_width=True,
        )

        if controller.is_connected:
            st.caption("🟢 Connected to Google Sheet")
        else:
            st.caption("⚪ Saving on this device only (open settings to connect a sheet)")

    if clicked:
        try:
            with st.spinner("Saving..."):
                outcome = controller.confirm()
        except ConfirmRejected as e:
            st.error(e.message)
            return
        st.success(f"Saved {outcome.transaction.merchant}")
        controller.finish_save()
        st.rerun()
