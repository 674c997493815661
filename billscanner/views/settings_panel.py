import streamlit as st

from billscanner.controller import ReceiptController
from billscanner.exceptions import ConfigStoreError
from billscanner.sheet_sync import APPS_SCRIPT_TEMPLATE, SETUP_STEPS


def main(controller: ReceiptController):
    st.header("⚙️ Google Sheet")
    url = st.text_input(
        "Google Apps Script Web App URL",
        value=controller.state.webhook_url or "",
        placeholder="https://script.google.com/macros/s/...",
    )
    if st.button("Save settings", type="primary", use_container_width=True):
        try:
            controller.settings_save(url)
        except ConfigStoreError as e:
            st.error(str(e))
        else:
            st.rerun()

    with st.expander("How to set up"):
        st.markdown("\n".join(f"{i}. {step}" for i, step in enumerate(SETUP_STEPS, 1)))
        st.code(APPS_SCRIPT_TEMPLATE, language="javascript")
