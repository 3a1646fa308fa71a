from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..attendance.model import ReportFile
from ..common.datetime_utils import locale_timestamp
from ..core.constants import REPORT_CLASS_HEADER
from .model import ClassRef, SessionReportOutcome


def js_text(value) -> str:
    """Format a JSON value the way a JavaScript template string prints it."""

    if value is None:
        return "undefined"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _or_zero(data, key: str):
    return data.get(key) or 0


def _session_section(outcome: SessionReportOutcome) -> list[str]:
    name = outcome.session.value
    lines = [f"=== {name.upper()} SESSION REPORT ==="]
    if not outcome.ok:
        lines.append(f"No {name} attendance data available.")
        lines.append(f"Error: {outcome.error or 'Unknown error'}")
        return lines

    data = outcome.data
    lines += [
        f"Total Classes: {js_text(_or_zero(data, 'total_classes'))}",
        f"Total Students: {js_text(_or_zero(data, 'total_students'))}",
        f"Total Present: {js_text(_or_zero(data, 'total_present'))}",
        f"Total Absent: {js_text(_or_zero(data, 'total_absent'))}",
        f"Overall Attendance Rate: {js_text(data.get('overall_attendance_rate') or '0')}%",
        "",
    ]
    classes = data.get("classes") or []
    if classes:
        lines.append(REPORT_CLASS_HEADER)
        for c in classes:
            lines.append(
                ",".join(
                    [
                        js_text(c.get("name")),
                        js_text(c.get("total_students")),
                        js_text(c.get("present_count")),
                        js_text(c.get("absent_count")),
                        f"{js_text(c.get('attendance_rate'))}%",
                    ]
                )
            )
    else:
        lines.append(f"No {name} attendance data recorded yet.")
    return lines


def _daily_line(outcome: SessionReportOutcome) -> str:
    data = outcome.data if outcome.ok else {}
    return (
        f"{outcome.session.label} Session - "
        f"Students: {js_text(_or_zero(data, 'total_students'))}, "
        f"Present: {js_text(_or_zero(data, 'total_present'))}, "
        f"Absent: {js_text(_or_zero(data, 'total_absent'))}"
    )


def build_combined_report(
    *,
    date: str,
    generated_at: datetime,
    morning: SessionReportOutcome,
    afternoon: SessionReportOutcome,
    classes: Optional[Sequence[ClassRef]] = None,
) -> str:
    """Serialize the school-wide morning + afternoon report.

    A failed session renders its own "No data available" block; the other
    session and the daily summary are still produced.
    """

    lines = [
        "COMPREHENSIVE SCHOOL ATTENDANCE REPORT",
        "==========================================",
        f"Date: {date}",
        f"Generated: {locale_timestamp(generated_at)}",
        "",
        "",
        *_session_section(morning),
        "",
        "",
        *_session_section(afternoon),
        "",
        "",
        "=== DAILY SUMMARY ===",
        _daily_line(morning),
        _daily_line(afternoon),
    ]
    if classes is not None:
        lines.append("")
        lines.append("Available Classes:")
        lines.extend(f"- {c.name} ({c.student_count} students)" for c in classes)
    return "\n".join(lines)


def combined_report_file(
    *,
    date: str,
    generated_at: datetime,
    morning: SessionReportOutcome,
    afternoon: SessionReportOutcome,
    classes: Optional[Sequence[ClassRef]] = None,
) -> ReportFile:
    content = build_combined_report(
        date=date,
        generated_at=generated_at,
        morning=morning,
        afternoon=afternoon,
        classes=classes,
    )
    return ReportFile(filename=f"School_Comprehensive_Attendance_Report_{date}.csv", content=content)
