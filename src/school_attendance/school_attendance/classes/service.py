from __future__ import annotations

import contextvars
import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
from typing import Optional

from ..attendance.model import ReportFile
from ..common.datetime_utils import now_local, today_iso
from ..core.enums import AttendanceSessionName
from ..core.exceptions import DomainError
from .model import SessionReportOutcome, TeacherDashboard
from .report import combined_report_file
from .repository import DashboardRepository

logger = logging.getLogger(__name__)


class DashboardService:
    def __init__(self, dashboard: DashboardRepository):
        self._dashboard = dashboard

    def load(self) -> TeacherDashboard:
        return self._dashboard.get_dashboard()

    def class_name(self, class_id: int) -> str:
        """Best-effort lookup used when a page is opened without the class name."""

        try:
            found = self.load().find_class(class_id)
        except DomainError as e:
            logger.warning("Could not resolve name of class %s: %s", class_id, e)
            found = None
        return found.name if found else f"Class {class_id}"

    def fetch_session_report(self, *, date: str, session: AttendanceSessionName) -> SessionReportOutcome:
        try:
            data = self._dashboard.get_attendance_report(date=date, session=session)
        except DomainError as e:
            logger.warning("%s report for %s failed: %s", session.label, date, e)
            return SessionReportOutcome(session=session, error=str(e))
        return SessionReportOutcome(session=session, data=data)

    def export_combined_report(
        self,
        *,
        date: Optional[str] = None,
        now: Optional[datetime] = None,
        dashboard: Optional[TeacherDashboard] = None,
    ) -> ReportFile:
        """Fetch morning and afternoon reports concurrently and merge them.

        Each session may fail on its own; a failure only changes that
        session's section of the document.
        """

        now = now or now_local()
        date = date or today_iso(now)

        with ThreadPoolExecutor(max_workers=2, thread_name_prefix="report") as pool:
            # Flask's request context lives in context variables; each worker gets its own copy.
            futures = {
                session: pool.submit(
                    contextvars.copy_context().run,
                    self.fetch_session_report,
                    date=date,
                    session=session,
                )
                for session in AttendanceSessionName
            }
            morning = futures[AttendanceSessionName.MORNING].result()
            afternoon = futures[AttendanceSessionName.AFTERNOON].result()

        return combined_report_file(
            date=date,
            generated_at=now,
            morning=morning,
            afternoon=afternoon,
            classes=dashboard.classes if dashboard else None,
        )
