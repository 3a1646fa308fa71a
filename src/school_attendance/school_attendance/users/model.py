from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Optional


@dataclass(frozen=True)
class CurrentUser:
    """The logged-in teacher as returned by the login endpoint.

    Note: Pure data object, cached in the credential store as JSON.
    """

    id: int
    username: str
    full_name: str
    role: str
    first_name: str = ""
    last_name: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "CurrentUser":
        first_name = str(data.get("first_name") or "")
        last_name = str(data.get("last_name") or "")
        full_name = data.get("full_name") or f"{first_name} {last_name}".strip() or data.get("username", "")
        return cls(
            id=int(data["id"]),
            username=str(data.get("username") or ""),
            full_name=str(full_name),
            role=str(data.get("role") or ""),
            first_name=first_name,
            last_name=last_name,
        )

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class AuthSession:
    """Credentials of one login, created on success and dropped on logout."""

    access_token: str
    refresh_token: Optional[str]
    user: CurrentUser
