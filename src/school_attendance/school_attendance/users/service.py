from __future__ import annotations

import logging
from typing import Callable, Optional

from ..api.credentials import CredentialStore
from ..common.validators import require_non_empty
from ..core.enums import AuthState
from ..core.exceptions import ApiError, AuthenticationError, AuthError, DomainError
from .model import AuthSession, CurrentUser
from .repository import AuthRepository

logger = logging.getLogger(__name__)


class AuthService:
    """Use case: the login state machine (LoggedOut -> Authenticating -> LoggedIn).

    One instance serves every browser, so the state is read from the credential
    store of the current request rather than kept on the service. The store is
    the only place tokens live; this service fills it on login and clears it on
    logout or when the backend rejects the stored token.
    """

    def __init__(
        self,
        auth: AuthRepository,
        credentials: CredentialStore,
        *,
        on_logout: Optional[Callable[[], None]] = None,
    ):
        self._auth = auth
        self._credentials = credentials
        self._on_logout = on_logout

    @property
    def state(self) -> AuthState:
        return AuthState.LOGGED_IN if self._credentials.load() else AuthState.LOGGED_OUT

    def current_user(self) -> Optional[CurrentUser]:
        stored = self._credentials.load()
        return stored.user if stored else None

    def restore(self) -> Optional[CurrentUser]:
        """Re-validate persisted credentials, as done when the app is opened.

        Returns the cached user when the backend still accepts the token and
        ``None`` when nothing is stored. Raises ``AuthError`` after clearing the
        store if the token was rejected.
        """

        stored = self._credentials.load()
        if not stored:
            return None

        logger.debug("auth state -> %s (profile check)", AuthState.AUTHENTICATING.value)
        try:
            self._auth.get_profile()
        except DomainError as e:
            logger.info("Stored token rejected, clearing credentials: %s", e)
            self._credentials.clear()
            raise AuthError("Your session has expired. Please log in again.") from e

        return stored.user

    def login(self, username: str, password: str) -> CurrentUser:
        username = require_non_empty(username, "Username")
        password = require_non_empty(password, "Password")

        logger.debug("auth state -> %s (login %s)", AuthState.AUTHENTICATING.value, username)
        try:
            payload = self._auth.login(username, password)
        except ApiError as e:
            raise AuthenticationError(str(e) or "Login failed. Please try again.") from e

        if not payload.get("success"):
            raise AuthenticationError(str(payload.get("message") or "Login failed"))

        try:
            user = CurrentUser.from_dict(payload.get("user") or {})
        except (KeyError, TypeError, ValueError) as e:
            raise AuthenticationError("Login failed: the server returned no user profile") from e

        access_token = payload.get("access_token")
        if not access_token:
            raise AuthenticationError("Login failed: the server returned no access token")

        self._credentials.save(
            AuthSession(
                access_token=str(access_token),
                refresh_token=payload.get("refresh_token"),
                user=user,
            )
        )
        logger.info("User %s logged in", user.username)
        return user

    def logout(self) -> None:
        """Revoke the refresh token (best effort) and always forget credentials."""

        stored = self._credentials.load()
        try:
            if stored and stored.refresh_token:
                self._auth.logout(stored.refresh_token)
        except DomainError as e:
            logger.warning("Logout request failed, clearing local credentials anyway: %s", e)
        finally:
            if self._on_logout:
                self._on_logout()
            self._credentials.clear()
