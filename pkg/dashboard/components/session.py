import streamlit as st

from components.domains import DomainConfig
from components.orchestrator import ValuationOrchestrator
from utils.client_state import ClientState

ORCHESTRATORS_KEY = "orchestrators"
MOUNTED_DOMAIN_KEY = "mounted_domain"


def get_client_state() -> ClientState:
    return ClientState(st.session_state).initialize()


def unmount_current():
    orchestrators = st.session_state.get(ORCHESTRATORS_KEY, {})
    mounted = st.session_state.get(MOUNTED_DOMAIN_KEY)
    if mounted in orchestrators:
        orchestrators[mounted].dispose()
    st.session_state[MOUNTED_DOMAIN_KEY] = None


def mount_orchestrator(config: DomainConfig) -> ValuationOrchestrator:
    """Only one form owns a live map per browser session."""
    if ORCHESTRATORS_KEY not in st.session_state:
        st.session_state[ORCHESTRATORS_KEY] = {}
    orchestrators = st.session_state[ORCHESTRATORS_KEY]

    if config.key not in orchestrators:
        orchestrators[config.key] = ValuationOrchestrator(
            config, client_state=get_client_state())

    if st.session_state.get(MOUNTED_DOMAIN_KEY) != config.key:
        unmount_current()
        st.session_state[MOUNTED_DOMAIN_KEY] = config.key

    orchestrator = orchestrators[config.key]
    orchestrator.mount()
    return orchestrator
