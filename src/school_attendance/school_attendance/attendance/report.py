from __future__ import annotations

from typing import Iterable, Mapping, Sequence

from ..core.constants import REPORT_STUDENT_HEADER
from ..core.enums import AttendanceSessionName
from ..students.model import Student
from .model import AttendanceSummary, ReportFile


def quote_field(value) -> str:
    return '"' + str(value).replace('"', '""') + '"'


def student_row(student: Student) -> str:
    fields = [
        student.roll_number,
        student.name,
        student.father_name or "N/A",
        student.mother_name or "N/A",
        student.parent_phone or "N/A",
        student.parent_email or "N/A",
        student.address or "N/A",
        student.gender or "N/A",
    ]
    return ",".join(quote_field(f) for f in fields)


def _student_rows(students: Iterable[Student]) -> list[str]:
    return [student_row(s) for s in students]


def build_class_report(
    *,
    class_name: str,
    date: str,
    session: AttendanceSessionName,
    roster: Sequence[Student],
    presence: Mapping[int, bool],
) -> str:
    """Serialize the per-class attendance report.

    The layout (section titles, header row, quoting, blank lines) is consumed
    by existing spreadsheets and must stay byte-identical.
    """

    present = [s for s in roster if presence.get(s.id, True)]
    absent = [s for s in roster if not presence.get(s.id, True)]
    summary = AttendanceSummary.from_counts(present=len(present), total=len(roster))

    lines = [
        "SCHOOL ATTENDANCE REPORT",
        "===========================",
        f"Class: {class_name}",
        f"Date: {date}",
        f"Session: {session.label}",
        f"Total Students: {summary.total}",
        f"Present: {summary.present}",
        f"Absent: {summary.absent}",
        f"Attendance Rate: {summary.rate_text}%",
        "",
        "",
        "=== PRESENT STUDENTS ===",
        REPORT_STUDENT_HEADER,
        *_student_rows(present),
        "",
        "",
        "=== ABSENT STUDENTS ===",
    ]
    if absent:
        lines.append(REPORT_STUDENT_HEADER)
        lines.extend(_student_rows(absent))
    else:
        lines.append("No absent students - Perfect attendance!")

    lines += [
        "",
        "",
        "=== SUMMARY BY SESSION ===",
        f"{session.label} Session Summary:",
        f"- Total Students: {summary.total}",
        f"- Present: {summary.present}",
        f"- Absent: {summary.absent}",
        f"- Attendance Percentage: {summary.rate_text}%",
    ]
    return "\n".join(lines)


def class_report_file(
    *,
    class_name: str,
    date: str,
    session: AttendanceSessionName,
    roster: Sequence[Student],
    presence: Mapping[int, bool],
) -> ReportFile:
    content = build_class_report(class_name=class_name, date=date, session=session, roster=roster, presence=presence)
    filename = f"{class_name}_{session.value}_comprehensive_attendance_report_{date}.csv"
    return ReportFile(filename=filename, content=content)
