from __future__ import annotations

from datetime import datetime

from src.school_attendance.school_attendance.classes.model import ClassRef, TeacherDashboard
from src.school_attendance.school_attendance.classes.service import DashboardService
from src.school_attendance.school_attendance.core.enums import AttendanceSessionName
from src.school_attendance.school_attendance.core.exceptions import ApiError, NetworkError


class FakeDashboardRepo:
    def __init__(self, *, reports=None, errors=None, dashboard_error=None):
        self.reports = reports or {}
        self.errors = errors or {}
        self.dashboard_error = dashboard_error
        self.report_calls = []

    def get_dashboard(self):
        if self.dashboard_error:
            raise self.dashboard_error
        return TeacherDashboard(full_name="Asha Rao", classes=(ClassRef(id=5, name="Class 5A", student_count=3),))

    def get_attendance_report(self, *, date, session):
        self.report_calls.append((date, session))
        if session in self.errors:
            raise self.errors[session]
        return self.reports[session]


DATA = {"total_classes": 1, "total_students": 3, "total_present": 2, "total_absent": 1, "classes": []}


def test_combined_report_fetches_both_sessions():
    repo = FakeDashboardRepo(reports={AttendanceSessionName.MORNING: DATA, AttendanceSessionName.AFTERNOON: DATA})

    report = DashboardService(repo).export_combined_report(date="2024-06-03", now=datetime(2024, 6, 3, 9, 0, 0))

    assert sorted(s.value for _, s in repo.report_calls) == ["afternoon", "morning"]
    assert all(d == "2024-06-03" for d, _ in repo.report_calls)
    assert "Morning Session - Students: 3, Present: 2, Absent: 1" in report.content
    assert "Afternoon Session - Students: 3, Present: 2, Absent: 1" in report.content


def test_one_failed_session_still_produces_report():
    repo = FakeDashboardRepo(
        reports={AttendanceSessionName.MORNING: DATA},
        errors={AttendanceSessionName.AFTERNOON: ApiError("Server error", status_code=500)},
    )
    svc = DashboardService(repo)

    report = svc.export_combined_report(date="2024-06-03", now=datetime(2024, 6, 3, 9, 0, 0), dashboard=svc.load())

    assert "No afternoon attendance data available.\nError: Server error" in report.content
    assert "Total Students: 3" in report.content
    assert "- Class 5A (3 students)" in report.content


def test_date_defaults_to_today_of_now():
    repo = FakeDashboardRepo(errors={s: NetworkError("down") for s in AttendanceSessionName})

    report = DashboardService(repo).export_combined_report(now=datetime(2024, 1, 9, 8, 0, 0))

    assert report.filename == "School_Comprehensive_Attendance_Report_2024-01-09.csv"
    assert "Available Classes" not in report.content


def test_class_name_lookup_falls_back():
    assert DashboardService(FakeDashboardRepo()).class_name(5) == "Class 5A"
    assert DashboardService(FakeDashboardRepo()).class_name(9) == "Class 9"
    assert DashboardService(FakeDashboardRepo(dashboard_error=NetworkError("down"))).class_name(5) == "Class 5"
