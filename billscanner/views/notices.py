from typing import Iterable

import streamlit as st

from billscanner.controller import Notice


def show_notices(notices: Iterable[Notice]):
    for notice in notices:
        if notice.level == "warning":
            st.warning(notice.message)
        else:
            st.toast(notice.message, icon="✅")
