from __future__ import annotations

from typing import Optional

from ..api.client import ApiClient, require_success
from .model import AttendanceKey, AttendanceRecord
from .repository import AttendanceRepository


class ApiAttendanceRepository(AttendanceRepository):
    def __init__(self, api: ApiClient):
        self._api = api

    def get_record(self, key: AttendanceKey) -> Optional[AttendanceRecord]:
        payload = self._api.get(
            f"/attendance/class/{key.class_id}/",
            params={"date": key.date, "session": key.session.value},
        )
        attendance = payload.get("attendance") if payload.get("success") else None
        if not attendance:
            return None
        # JSON object keys arrive as strings.
        presence = {int(student_id): bool(is_present) for student_id, is_present in attendance.items()}
        return AttendanceRecord(key=key, presence=presence)

    def mark(self, payload: dict) -> None:
        require_success(self._api.post("/attendance/mark/", payload), "Failed to submit attendance")
