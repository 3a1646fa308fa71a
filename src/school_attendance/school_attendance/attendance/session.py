from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import AttendanceState
from ..core.exceptions import (
    AttendanceLockedError,
    AttendanceStateError,
    NoReportDataError,
    StaleStateError,
    ValidationError,
)
from ..students.model import Student
from .model import AttendanceEntry, AttendanceKey, AttendanceRecord, AttendanceSummary, ReportFile
from .report import class_report_file


class AttendanceSessionManager:
    """In-memory attendance sheet for one (class, date, session) key.

    State machine::

        unsubmitted --submit--> submitted
        submitted --enter_edit--> editing
        editing --cancel_edit / save_edit--> submitted

    The initial state comes from the backend at load time: an existing record
    starts ``submitted`` (locked), otherwise ``unsubmitted``. Presence can only
    change while ``unsubmitted`` or ``editing``; anything else raises.

    Every load bumps ``generation``. Loads, forms and responses carry the
    generation they started from and are refused once it is outdated.
    """

    def __init__(self):
        self.generation = 0
        self.key: Optional[AttendanceKey] = None
        self.class_name = ""
        self.roster: tuple[Student, ...] = ()
        self.state: Optional[AttendanceState] = None
        self._presence: dict[int, bool] = {}
        self._before_edit: Optional[dict[int, bool]] = None

    # ----- loading -----

    def begin_load(self) -> int:
        self.generation += 1
        self.state = None
        return self.generation

    def complete_load(
        self,
        ticket: int,
        *,
        key: AttendanceKey,
        class_name: str,
        roster: Sequence[Student],
        record: Optional[AttendanceRecord],
    ) -> None:
        if ticket != self.generation:
            raise StaleStateError("A newer attendance sheet was opened; this result was discarded.")

        presence = {s.id: True for s in roster}
        if record:
            for student in roster:
                if student.id in record.presence:
                    presence[student.id] = bool(record.presence[student.id])

        self.key = key
        self.class_name = class_name
        self.roster = tuple(roster)
        self._presence = presence
        self._before_edit = None
        self.state = AttendanceState.SUBMITTED if record else AttendanceState.UNSUBMITTED

    def check_generation(self, generation: int) -> None:
        if generation != self.generation:
            raise StaleStateError("This attendance page is out of date. It has been reloaded.")

    @property
    def is_loaded(self) -> bool:
        return self.state is not None

    def is_for(self, key: AttendanceKey) -> bool:
        return self.is_loaded and self.key == key

    # ----- presence -----

    @property
    def is_editable(self) -> bool:
        return self.state in (AttendanceState.UNSUBMITTED, AttendanceState.EDITING)

    @property
    def is_locked(self) -> bool:
        return self.state == AttendanceState.SUBMITTED

    def is_present(self, student_id: int) -> bool:
        return self._presence.get(student_id, True)

    def entries(self) -> list[AttendanceEntry]:
        return [AttendanceEntry(student_id=s.id, is_present=self._presence[s.id]) for s in self.roster]

    def toggle_presence(self, student_id: int) -> bool:
        if not self.is_editable:
            raise AttendanceLockedError("Attendance is already submitted. Click Edit Attendance to change it.")
        if student_id not in self._presence:
            raise ValidationError("Student is not on this class roster")
        self._presence[student_id] = not self._presence[student_id]
        return self._presence[student_id]

    @property
    def absent_count(self) -> int:
        return sum(1 for is_present in self._presence.values() if not is_present)

    def summary(self) -> AttendanceSummary:
        present = sum(1 for s in self.roster if self._presence[s.id])
        return AttendanceSummary.from_counts(present=present, total=len(self.roster))

    def build_payload(self) -> dict:
        key = self._require_key()
        return {
            "class_id": key.class_id,
            "session": key.session.value,
            "date": key.date,
            "attendance": [{"student_id": e.student_id, "is_present": e.is_present} for e in self.entries()],
        }

    # ----- transitions -----

    def require_state(self, *allowed: AttendanceState) -> None:
        if self.state not in allowed:
            current = self.state.value if self.state else "not loaded"
            raise AttendanceStateError(f"Not allowed while attendance is {current}")

    def mark_submitted(self) -> None:
        self.require_state(AttendanceState.UNSUBMITTED)
        self.state = AttendanceState.SUBMITTED

    def enter_edit(self) -> None:
        self.require_state(AttendanceState.SUBMITTED)
        self._before_edit = dict(self._presence)
        self.state = AttendanceState.EDITING

    def cancel_edit(self) -> None:
        self.require_state(AttendanceState.EDITING)
        if self._before_edit is not None:
            self._presence = self._before_edit
        self._before_edit = None
        self.state = AttendanceState.SUBMITTED

    def mark_edit_saved(self) -> None:
        self.require_state(AttendanceState.EDITING)
        self._before_edit = None
        self.state = AttendanceState.SUBMITTED

    # ----- export -----

    def export_report(self) -> ReportFile:
        key = self._require_key()
        if not self.roster:
            raise NoReportDataError("No student data available for this session.")
        return class_report_file(
            class_name=self.class_name,
            date=key.date,
            session=key.session,
            roster=self.roster,
            presence=self._presence,
        )

    def _require_key(self) -> AttendanceKey:
        if not self.is_loaded or self.key is None:
            raise AttendanceStateError("No attendance sheet is loaded")
        return self.key
