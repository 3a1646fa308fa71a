from __future__ import annotations

import pytest

from src.school_attendance.school_attendance.attendance.model import AttendanceKey, AttendanceRecord, AttendanceSummary
from src.school_attendance.school_attendance.attendance.session import AttendanceSessionManager
from src.school_attendance.school_attendance.core.enums import AttendanceSessionName, AttendanceState
from src.school_attendance.school_attendance.core.exceptions import (
    AttendanceLockedError,
    AttendanceStateError,
    NoReportDataError,
    StaleStateError,
    ValidationError,
)
from src.school_attendance.school_attendance.students.model import Student


KEY = AttendanceKey(class_id=5, date="2024-06-03", session=AttendanceSessionName.MORNING)
ROSTER = [
    Student(id=1, name="Asha Rao", roll_number="1"),
    Student(id=2, name="Kiran Das", roll_number="2"),
    Student(id=3, name="Meena Iyer", roll_number="3"),
]


def _loaded(record=None) -> AttendanceSessionManager:
    m = AttendanceSessionManager()
    ticket = m.begin_load()
    m.complete_load(ticket, key=KEY, class_name="Class 5A", roster=ROSTER, record=record)
    return m


def test_new_sheet_defaults_everyone_present_and_unsubmitted():
    m = _loaded()

    assert m.state == AttendanceState.UNSUBMITTED
    assert all(m.is_present(s.id) for s in ROSTER)
    assert m.absent_count == 0


def test_existing_record_opens_submitted_and_locked():
    m = _loaded(AttendanceRecord(key=KEY, presence={2: False}))

    assert m.state == AttendanceState.SUBMITTED
    assert m.is_locked
    assert not m.is_present(2)
    assert m.is_present(1)

    with pytest.raises(AttendanceLockedError):
        m.toggle_presence(1)
    assert m.is_present(1)


def test_toggle_flips_presence_while_editable():
    m = _loaded()

    assert m.toggle_presence(2) is False
    assert m.toggle_presence(2) is True

    with pytest.raises(ValidationError):
        m.toggle_presence(99)


def test_summary_rate_for_two_of_three_present():
    m = _loaded()
    m.toggle_presence(3)

    summary = m.summary()
    assert (summary.total, summary.present, summary.absent) == (3, 2, 1)
    assert summary.rate_text == "66.7"


def test_payload_lists_every_student_in_roster_order():
    m = _loaded()
    m.toggle_presence(2)

    assert m.build_payload() == {
        "class_id": 5,
        "session": "morning",
        "date": "2024-06-03",
        "attendance": [
            {"student_id": 1, "is_present": True},
            {"student_id": 2, "is_present": False},
            {"student_id": 3, "is_present": True},
        ],
    }


def test_edit_cycle_and_cancel_restores_previous_presence():
    m = _loaded()
    m.mark_submitted()
    m.enter_edit()
    assert m.state == AttendanceState.EDITING

    m.toggle_presence(1)
    m.cancel_edit()

    assert m.state == AttendanceState.SUBMITTED
    assert m.is_present(1)


def test_edit_saved_keeps_changes():
    m = _loaded()
    m.mark_submitted()
    m.enter_edit()
    m.toggle_presence(1)
    m.mark_edit_saved()

    assert m.state == AttendanceState.SUBMITTED
    assert not m.is_present(1)


def test_transitions_from_wrong_state_are_refused():
    m = _loaded()

    with pytest.raises(AttendanceStateError):
        m.enter_edit()
    with pytest.raises(AttendanceStateError):
        m.cancel_edit()

    m.mark_submitted()
    with pytest.raises(AttendanceStateError):
        m.mark_submitted()


def test_stale_load_is_discarded():
    m = AttendanceSessionManager()
    first = m.begin_load()
    second = m.begin_load()

    with pytest.raises(StaleStateError):
        m.complete_load(first, key=KEY, class_name="Class 5A", roster=ROSTER, record=None)

    m.complete_load(second, key=KEY, class_name="Class 5A", roster=ROSTER[:1], record=None)
    assert len(m.roster) == 1
    with pytest.raises(StaleStateError):
        m.check_generation(first)


def test_export_of_empty_roster_is_refused():
    m = AttendanceSessionManager()
    ticket = m.begin_load()
    m.complete_load(ticket, key=KEY, class_name="Class 5A", roster=[], record=None)

    with pytest.raises(NoReportDataError):
        m.export_report()


def test_rate_text_rounds_exact_ties_up():
    assert AttendanceSummary.from_counts(present=1, total=16).rate_text == "6.3"
    assert AttendanceSummary.from_counts(present=13, total=16).rate_text == "81.3"
    assert AttendanceSummary.from_counts(present=2, total=3).rate_text == "66.7"
    assert AttendanceSummary.from_counts(present=0, total=0).rate_text == "0.0"
    assert AttendanceSummary.from_counts(present=4, total=4).rate_text == "100.0"
