from __future__ import annotations

from typing import Protocol

from ..core.enums import AttendanceSessionName
from .model import TeacherDashboard


class DashboardRepository(Protocol):
    def get_dashboard(self) -> TeacherDashboard:
        raise NotImplementedError

    def get_attendance_report(self, *, date: str, session: AttendanceSessionName) -> dict:
        """Return the ``data`` object of the school-wide report for one session."""

        raise NotImplementedError
