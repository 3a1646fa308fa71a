from __future__ import annotations

from typing import Protocol


class AuthRepository(Protocol):
    """Interface to the backend's authentication endpoints.

    Note (DIP): the service layer depends on this interface, not on HTTP directly.
    """

    def login(self, username: str, password: str) -> dict:
        """Return the raw login payload (``success``, tokens, ``user``)."""

        raise NotImplementedError

    def logout(self, refresh_token: str) -> None:
        raise NotImplementedError

    def get_profile(self) -> dict:
        raise NotImplementedError
