import logging

import streamlit as st

from components.browser_storage import sync_client_state
from components.session import get_client_state
from utils.config import LOG_LEVEL

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


def setup_page(title, page_icon="🏠"):
    client_state = get_client_state()
    st.set_page_config(
        f"AI Valuation | {title}",
        page_icon=page_icon,
        layout="wide",
        initial_sidebar_state="collapsed" if client_state.sidebar_collapsed else "expanded",
    )
    sync_client_state(client_state)
    render_sidebar(client_state)
    return client_state


def _toggle_sidebar(client_state):
    client_state.sidebar_collapsed = st.session_state["collapse-sidebar"]


def render_sidebar(client_state):
    with st.sidebar:
        st.subheader("AI Valuation")
        if client_state.auth_token:
            st.caption("Signed in")
            if st.button("Logout", key="logout"):
                client_state.clear_auth()
                st.rerun()
        else:
            st.caption("Not signed in, requests are sent without a token")

        st.checkbox(
            "Keep sidebar collapsed",
            value=client_state.sidebar_collapsed,
            key="collapse-sidebar",
            on_change=_toggle_sidebar,
            args=(client_state,),
        )
