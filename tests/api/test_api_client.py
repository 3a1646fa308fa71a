from __future__ import annotations

import pytest
import requests

from src.school_attendance.school_attendance.api.client import ApiClient, ApiConfig, require_success
from src.school_attendance.school_attendance.api.credentials import InMemoryCredentialStore
from src.school_attendance.school_attendance.core.exceptions import ApiError, NetworkError
from src.school_attendance.school_attendance.users.model import AuthSession, CurrentUser


class FakeResponse:
    def __init__(self, status_code: int, body=None, *, raw_text: bool = False):
        self.status_code = status_code
        self._body = body
        self._raw_text = raw_text

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 400

    def json(self):
        if self._raw_text or self._body is None:
            raise ValueError("not json")
        return self._body


class FakeHttp:
    def __init__(self, response=None, error: Exception | None = None):
        self.response = response
        self.error = error
        self.calls = []

    def request(self, method, url, **kwargs):
        self.calls.append({"method": method, "url": url, **kwargs})
        if self.error:
            raise self.error
        return self.response


def _client(http, token: str | None = None) -> ApiClient:
    auth = None
    if token:
        user = CurrentUser(id=1, username="t", full_name="T", role="teacher")
        auth = AuthSession(access_token=token, refresh_token="r", user=user)
    return ApiClient(ApiConfig(base_url="https://backend.test/", timeout=15), InMemoryCredentialStore(auth), http=http)


def test_request_adds_bearer_header_and_api_prefix():
    http = FakeHttp(FakeResponse(200, {"success": True}))
    client = _client(http, token="abc")

    assert client.get("/auth/profile/") == {"success": True}

    call = http.calls[0]
    assert call["url"] == "https://backend.test/api/auth/profile/"
    assert call["headers"]["Authorization"] == "Bearer abc"
    assert call["headers"]["Content-Type"] == "application/json"
    assert call["timeout"] == 15


def test_request_without_token_has_no_authorization_header():
    http = FakeHttp(FakeResponse(200, {"success": True}))
    _client(http).post("/auth/login/", {"username": "u"})

    assert "Authorization" not in http.calls[0]["headers"]
    assert http.calls[0]["json"] == {"username": "u"}


def test_transport_failure_becomes_network_error():
    http = FakeHttp(error=requests.ConnectionError("down"))

    with pytest.raises(NetworkError):
        _client(http).get("/teachers/dashboard/")


@pytest.mark.parametrize(
    "body, expected",
    [
        ({"message": "Bad roll number"}, "Bad roll number"),
        ({"detail": "Token expired"}, "Token expired"),
        ({}, "HTTP 500"),
        (None, "HTTP 500"),
    ],
)
def test_error_status_message_prefers_message_then_detail(body, expected):
    http = FakeHttp(FakeResponse(500, body))

    with pytest.raises(ApiError) as exc:
        _client(http).get("/x/")

    assert str(exc.value) == expected
    assert exc.value.status_code == 500


def test_no_content_is_success():
    http = FakeHttp(FakeResponse(204, raw_text=True))
    assert _client(http).delete("/students/4/delete/") == {"success": True}


def test_ok_status_with_non_json_body_is_invalid():
    http = FakeHttp(FakeResponse(200, raw_text=True))

    with pytest.raises(ApiError, match="Invalid response"):
        _client(http).get("/x/")


def test_require_success_uses_backend_message():
    with pytest.raises(ApiError, match="Class not found"):
        require_success({"success": False, "message": "Class not found"}, "Failed")
    with pytest.raises(ApiError, match="Failed"):
        require_success({"success": False}, "Failed")
    assert require_success({"success": True, "x": 1}, "Failed")["x"] == 1
