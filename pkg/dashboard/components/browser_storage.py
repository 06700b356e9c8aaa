import json
import logging

import streamlit as st
from streamlit_js_eval import streamlit_js_eval

from components.constants import BROWSER_STORAGE_KEY
from utils.client_state import ClientState

RESTORED_KEY = "client-state-restored"
SAVED_KEY = "client-state-saved"
SAVE_COUNT_KEY = "client-state-save-count"


def decode_snapshot(raw):
    if not raw:
        return {}
    try:
        snapshot = json.loads(raw)
    except (TypeError, ValueError):
        logging.warning("Ignoring unreadable client state in browser storage")
        return {}
    return snapshot if isinstance(snapshot, dict) else {}


def restore_client_state(client_state: ClientState) -> bool:
    """
    Read the values kept in the browser's localStorage, once per session.

    The browser answers on a later rerun, until then this returns False.
    """
    if st.session_state.get(RESTORED_KEY):
        return True

    raw = streamlit_js_eval(
        js_expressions=f"localStorage.getItem({json.dumps(BROWSER_STORAGE_KEY)}) || '{{}}'",
        key="client-state-restore",
    )
    if raw is None:
        return False

    client_state.restore(decode_snapshot(raw))
    st.session_state[RESTORED_KEY] = True
    # what the browser holds now, a save only follows a change
    st.session_state[SAVED_KEY] = raw
    return True


def save_client_state(client_state: ClientState):
    # writing before the restore would overwrite the saved values with defaults
    if not st.session_state.get(RESTORED_KEY):
        return

    raw = json.dumps(client_state.snapshot(), sort_keys=True)
    if decode_snapshot(st.session_state.get(SAVED_KEY)) == json.loads(raw):
        return

    count = st.session_state.get(SAVE_COUNT_KEY, 0) + 1
    st.session_state[SAVE_COUNT_KEY] = count
    streamlit_js_eval(
        js_expressions=f"localStorage.setItem({json.dumps(BROWSER_STORAGE_KEY)}, {json.dumps(raw)})",
        key=f"client-state-save-{count}",
    )
    st.session_state[SAVED_KEY] = raw


def sync_client_state(client_state: ClientState):
    if restore_client_state(client_state):
        save_client_state(client_state)
