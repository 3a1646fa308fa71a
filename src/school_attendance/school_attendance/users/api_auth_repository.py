from __future__ import annotations

from ..api.client import ApiClient, require_success
from .repository import AuthRepository


class ApiAuthRepository(AuthRepository):
    def __init__(self, api: ApiClient):
        self._api = api

    def login(self, username: str, password: str) -> dict:
        return self._api.post("/auth/login/", {"username": username, "password": password})

    def logout(self, refresh_token: str) -> None:
        require_success(self._api.post("/auth/logout/", {"refresh_token": refresh_token}), "Logout failed")

    def get_profile(self) -> dict:
        return self._api.get("/auth/profile/")
