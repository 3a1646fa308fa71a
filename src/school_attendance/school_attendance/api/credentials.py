from __future__ import annotations

import json
import logging
from typing import Optional, Protocol

from flask import has_request_context, session

from ..core.constants import ACCESS_TOKEN_KEY, REFRESH_TOKEN_KEY, USER_DATA_KEY
from ..users.model import AuthSession, CurrentUser

logger = logging.getLogger(__name__)


class CredentialStore(Protocol):
    """Where the access/refresh tokens and cached user live between requests."""

    def load(self) -> Optional[AuthSession]:
        raise NotImplementedError

    def save(self, auth: AuthSession) -> None:
        raise NotImplementedError

    def clear(self) -> None:
        raise NotImplementedError

    def access_token(self) -> Optional[str]:
        raise NotImplementedError


class FlaskSessionCredentialStore(CredentialStore):
    """Credential store backed by the signed Flask session cookie."""

    def load(self) -> Optional[AuthSession]:
        token = session.get(ACCESS_TOKEN_KEY)
        raw_user = session.get(USER_DATA_KEY)
        if not token or not raw_user:
            return None
        try:
            user = CurrentUser.from_dict(json.loads(raw_user))
        except (KeyError, TypeError, ValueError):
            logger.warning("Discarding unreadable cached user data")
            return None
        return AuthSession(access_token=token, refresh_token=session.get(REFRESH_TOKEN_KEY), user=user)

    def save(self, auth: AuthSession) -> None:
        session[ACCESS_TOKEN_KEY] = auth.access_token
        session[REFRESH_TOKEN_KEY] = auth.refresh_token
        session[USER_DATA_KEY] = json.dumps(auth.user.to_dict())

    def clear(self) -> None:
        for key in (ACCESS_TOKEN_KEY, REFRESH_TOKEN_KEY, USER_DATA_KEY):
            session.pop(key, None)

    def access_token(self) -> Optional[str]:
        if not has_request_context():
            return None
        return session.get(ACCESS_TOKEN_KEY)


class InMemoryCredentialStore(CredentialStore):
    """Process-local store for scripts and tests."""

    def __init__(self, auth: Optional[AuthSession] = None):
        self._auth = auth

    def load(self) -> Optional[AuthSession]:
        return self._auth

    def save(self, auth: AuthSession) -> None:
        self._auth = auth

    def clear(self) -> None:
        self._auth = None

    def access_token(self) -> Optional[str]:
        return self._auth.access_token if self._auth else None
