# app.py
import streamlit as st

from billscanner.config import Settings
from billscanner.controller import ReceiptController
from billscanner.exceptions import ConfigError
from billscanner.logging_setup import setup_logging
from billscanner.views import capture, history, review_form, settings_panel
from billscanner.views.notices import show_notices

st.set_page_config(page_title="Bill Scanner AI", page_icon="🧾", layout="centered")

# === SETTINGS (.env loaded here) ===
try:
    settings = Settings.from_env()
except ConfigError as e:
    st.error(f"Invalid configuration: {e}")
    st.stop()


@st.cache_resource
def _configure_logging(level: str, log_file):
    setup_logging(level, log_file)
    return True


_configure_logging(settings.log_level, settings.log_file)

# === ONE CONTROLLER PER BROWSER SESSION ===
if "controller" not in st.session_state:
    st.session_state.controller = ReceiptController.from_settings(settings)
controller: ReceiptController = st.session_state.controller

# === STREAMLIT UI ===
col1, col2 = st.columns([4, 1])
with col1:
    st.title("🧾 Bill Scanner AI")
with col2:
    st.caption("🟢 Sheet" if controller.is_connected else "⚪ Local")
if not settings.has_credentials:
    st.caption("Demo mode: no AZURE_OPENAI_KEY set, scans return sample data")

with st.sidebar:
    settings_panel.main(controller)

show_notices(controller.drain_notices())

# 1. Capture
capture.main(controller)

# 2. Review form (after a scan)
if controller.state.show_form:
    review_form.main(controller)

# 3. Session history
history.main(controller)
