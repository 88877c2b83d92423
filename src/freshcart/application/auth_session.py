"""Who is logged in on this device.

The auth provider itself is external; this only reads and writes the
session keys it leaves in local storage.
"""

from __future__ import annotations

from freshcart.domain.repository.storage import KeyValueStorage

USER_ID_KEY = "userId"
USER_ROLE_KEY = "userRole"
ACCESS_TOKEN_KEY = "accessToken"

_SESSION_KEYS = (USER_ID_KEY, USER_ROLE_KEY, ACCESS_TOKEN_KEY)


class AuthSession:

    def __init__(self, storage: KeyValueStorage) -> None:
        self._storage = storage

    @property
    def user_id(self) -> str | None:
        return self._storage.get_item(USER_ID_KEY) or None

    @property
    def role(self) -> str | None:
        return self._storage.get_item(USER_ROLE_KEY) or None

    @property
    def access_token(self) -> str | None:
        return self._storage.get_item(ACCESS_TOKEN_KEY) or None

    @property
    def is_logged_in(self) -> bool:
        return self.user_id is not None

    def login(self, user_id: str, access_token: str, role: str = "customer") -> None:
        self._storage.set_item(USER_ID_KEY, user_id)
        self._storage.set_item(USER_ROLE_KEY, role)
        self._storage.set_item(ACCESS_TOKEN_KEY, access_token)

    def logout(self) -> None:
        for key in _SESSION_KEYS:
            self._storage.remove_item(key)
