from __future__ import annotations

from ..api.client import ApiClient, require_success
from ..core.enums import AttendanceSessionName
from ..core.exceptions import ApiError
from .model import ClassRef, TeacherDashboard
from .repository import DashboardRepository


class ApiDashboardRepository(DashboardRepository):
    def __init__(self, api: ApiClient):
        self._api = api

    def get_dashboard(self) -> TeacherDashboard:
        payload = require_success(self._api.get("/teachers/dashboard/"), "Failed to load dashboard")
        teacher = payload.get("teacher") or {}
        return TeacherDashboard(
            full_name=str(teacher.get("full_name") or ""),
            classes=tuple(ClassRef.from_api(c) for c in teacher.get("all_classes") or []),
        )

    def get_attendance_report(self, *, date: str, session: AttendanceSessionName) -> dict:
        payload = self._api.get("/attendance/report/", params={"date": date, "session": session.value})
        data = payload.get("data")
        if not payload.get("success") or data is None:
            raise ApiError(str(payload.get("message") or "Unknown error"))
        return data
