import logging
from collections.abc import MutableMapping
from typing import Optional

from components.constants import AUTH_TOKEN_KEY, SIDEBAR_COLLAPSED_KEY, USER_PROFILE_KEY


class ClientState:
    """
    Typed access to the per-client values shared by every page: the auth token
    deposited by the login flow, the cached user profile and the sidebar
    preference.

    The backing store is injected; the app passes ``st.session_state``.
    """

    _DEFAULTS = {
        AUTH_TOKEN_KEY: None,
        USER_PROFILE_KEY: None,
        SIDEBAR_COLLAPSED_KEY: False,
    }

    def __init__(self, store: MutableMapping):
        self.logger = logging.getLogger(ClientState.__name__)
        self.store = store
        self.initialized = False

    def initialize(self):
        if self.initialized:
            return self
        for key, value in self._DEFAULTS.items():
            if key not in self.store:
                self.store[key] = value
        self.initialized = True
        return self

    def teardown(self):
        for key in self._DEFAULTS:
            if key in self.store:
                del self.store[key]
        self.initialized = False

    @property
    def auth_token(self) -> Optional[str]:
        token = self.store.get(AUTH_TOKEN_KEY)
        return token or None

    @auth_token.setter
    def auth_token(self, token: Optional[str]):
        self.store[AUTH_TOKEN_KEY] = token or None

    @property
    def user_profile(self) -> Optional[dict]:
        return self.store.get(USER_PROFILE_KEY)

    @user_profile.setter
    def user_profile(self, profile: Optional[dict]):
        self.store[USER_PROFILE_KEY] = profile

    @property
    def sidebar_collapsed(self) -> bool:
        return bool(self.store.get(SIDEBAR_COLLAPSED_KEY, False))

    @sidebar_collapsed.setter
    def sidebar_collapsed(self, collapsed: bool):
        self.store[SIDEBAR_COLLAPSED_KEY] = bool(collapsed)

    def store_token(self, token: str):
        """Keep a freshly issued token and drop the profile cached for the old one."""
        self.auth_token = token
        self.user_profile = None
        self.logger.info("Auth token stored")

    def clear_auth(self):
        self.auth_token = None
        self.user_profile = None
        self.logger.info("Auth token cleared")

    def snapshot(self) -> dict:
        """Values worth keeping across browser reloads."""
        return {
            AUTH_TOKEN_KEY: self.auth_token,
            SIDEBAR_COLLAPSED_KEY: self.sidebar_collapsed,
        }

    def restore(self, snapshot) -> bool:
        """
        Load a snapshot saved by an earlier visit.

        A token already captured in this session is newer than the saved one
        and is kept. Returns False when the snapshot is unusable.
        """
        if not isinstance(snapshot, dict):
            return False
        if self.auth_token is None and snapshot.get(AUTH_TOKEN_KEY):
            self.auth_token = str(snapshot[AUTH_TOKEN_KEY])
            self.logger.info("Auth token restored")
        if SIDEBAR_COLLAPSED_KEY in snapshot:
            self.sidebar_collapsed = snapshot[SIDEBAR_COLLAPSED_KEY]
        return True
