from __future__ import annotations

import csv

from src.school_attendance.school_attendance.attendance.report import build_class_report, class_report_file, quote_field, student_row
from src.school_attendance.school_attendance.core.enums import AttendanceSessionName
from src.school_attendance.school_attendance.students.model import Student


ROSTER = [
    Student(
        id=1,
        name="Asha Rao",
        roll_number="1",
        father_name="Ravi",
        mother_name="Lata",
        parent_phone="999",
        parent_email="a@x.com",
        address='Flat 2, "Sunrise"',
        gender="Female",
    ),
    Student(id=2, name="Kiran Das", roll_number="2", parent_phone="888"),
]


def test_report_with_one_absent_student():
    content = build_class_report(
        class_name="Class 5A",
        date="2024-06-03",
        session=AttendanceSessionName.AFTERNOON,
        roster=ROSTER,
        presence={1: True, 2: False},
    )

    assert content == "\n".join(
        [
            "SCHOOL ATTENDANCE REPORT",
            "===========================",
            "Class: Class 5A",
            "Date: 2024-06-03",
            "Session: Afternoon",
            "Total Students: 2",
            "Present: 1",
            "Absent: 1",
            "Attendance Rate: 50.0%",
            "",
            "",
            "=== PRESENT STUDENTS ===",
            "Roll Number,Student Name,Father Name,Mother Name,Phone Number,Email,Address,Gender",
            '"1","Asha Rao","Ravi","Lata","999","a@x.com","Flat 2, ""Sunrise""","Female"',
            "",
            "",
            "=== ABSENT STUDENTS ===",
            "Roll Number,Student Name,Father Name,Mother Name,Phone Number,Email,Address,Gender",
            '"2","Kiran Das","N/A","N/A","888","N/A","N/A","N/A"',
            "",
            "",
            "=== SUMMARY BY SESSION ===",
            "Afternoon Session Summary:",
            "- Total Students: 2",
            "- Present: 1",
            "- Absent: 1",
            "- Attendance Percentage: 50.0%",
        ]
    )
    assert not content.endswith("\n")


def test_perfect_attendance_line():
    content = build_class_report(
        class_name="Class 5A",
        date="2024-06-03",
        session=AttendanceSessionName.MORNING,
        roster=ROSTER,
        presence={1: True, 2: True},
    )

    assert "=== ABSENT STUDENTS ===\nNo absent students - Perfect attendance!\n" in content
    assert "Attendance Rate: 100.0%" in content


def test_report_filename():
    report = class_report_file(
        class_name="Class 5A",
        date="2024-06-03",
        session=AttendanceSessionName.MORNING,
        roster=ROSTER,
        presence={},
    )

    assert report.filename == "Class 5A_morning_comprehensive_attendance_report_2024-06-03.csv"
    assert report.mimetype == "text/csv"


def test_quote_field_doubles_quotes():
    assert quote_field('say "hi"') == '"say ""hi"""'


def test_quoted_row_parses_back_to_original_values():
    row = next(csv.reader([student_row(ROSTER[0])]))

    assert row == ["1", "Asha Rao", "Ravi", "Lata", "999", "a@x.com", 'Flat 2, "Sunrise"', "Female"]
