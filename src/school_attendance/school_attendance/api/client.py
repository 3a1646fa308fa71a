from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

import requests

from ..core.constants import API_PREFIX
from ..core.exceptions import ApiError, NetworkError
from .credentials import CredentialStore

logger = logging.getLogger(__name__)


@dataclass
class ApiConfig:
    base_url: str
    timeout: float


class ApiClient:
    """Thin JSON-over-HTTPS client for the school backend.

    Attaches ``Authorization: Bearer <token>`` when the credential store holds
    a token and normalizes every failure into ``NetworkError`` or ``ApiError``.
    """

    def __init__(self, config: ApiConfig, credentials: CredentialStore, *, http: Optional[requests.Session] = None):
        self._config = config
        self._credentials = credentials
        self._http = http or requests.Session()

    def url_for(self, path: str) -> str:
        return f"{self._config.base_url.rstrip('/')}{API_PREFIX}{path}"

    def request(
        self,
        method: str,
        path: str,
        *,
        json: Optional[dict] = None,
        params: Optional[dict] = None,
    ) -> dict:
        headers = {"Content-Type": "application/json"}
        token = self._credentials.access_token()
        if token:
            headers["Authorization"] = f"Bearer {token}"

        logger.debug("API %s %s (auth header: %s)", method, path, "yes" if token else "no")
        try:
            response = self._http.request(
                method,
                self.url_for(path),
                json=json,
                params=params,
                headers=headers,
                timeout=self._config.timeout,
            )
        except requests.RequestException as e:
            logger.warning("API %s %s failed: %s", method, path, e)
            raise NetworkError("Could not reach the attendance server. Please check your connection.") from e

        data = _decode_body(response)
        if not response.ok:
            body = data or {}
            message = body.get("message") or body.get("detail") or f"HTTP {response.status_code}"
            logger.warning("API %s %s -> %s: %s", method, path, response.status_code, message)
            raise ApiError(str(message), status_code=response.status_code)

        logger.debug("API %s %s -> %s", method, path, response.status_code)
        if data is None:
            if response.status_code == 204:
                return {"success": True}
            raise ApiError("Invalid response from server", status_code=response.status_code)
        return data

    def get(self, path: str, *, params: Optional[dict] = None) -> dict:
        return self.request("GET", path, params=params)

    def post(self, path: str, payload: dict) -> dict:
        return self.request("POST", path, json=payload)

    def delete(self, path: str) -> dict:
        return self.request("DELETE", path)


def _decode_body(response) -> Optional[dict]:
    try:
        payload: Any = response.json()
    except ValueError:
        return None
    if isinstance(payload, dict):
        return payload
    return {"data": payload}


def require_success(payload: dict, fallback_message: str) -> dict:
    """Raise ``ApiError`` unless the backend flagged the call as successful."""

    if not payload.get("success"):
        raise ApiError(str(payload.get("message") or fallback_message))
    return payload
