from __future__ import annotations

import logging
from typing import Optional

from ..common.datetime_utils import today_iso
from ..core.enums import AttendanceSessionName, AttendanceState
from ..core.exceptions import DomainError, ValidationError
from ..students.repository import StudentRepository
from .model import AttendanceKey, AttendanceRecord, ReportFile
from .repository import AttendanceRepository
from .session import AttendanceSessionManager
from .state_store import AttendanceStateStore

logger = logging.getLogger(__name__)


class AttendanceService:
    """Use cases of the attendance screen.

    The sheet itself (``AttendanceSessionManager``) enforces the state machine;
    this service loads it, persists it in the state store and talks to the
    backend. Results that arrive after the sheet was reloaded are refused.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        students: StudentRepository,
        states: AttendanceStateStore,
    ):
        self._attendance = attendance
        self._students = students
        self._states = states

    def open_sheet(
        self,
        owner: str,
        *,
        class_id: int,
        class_name: str,
        session: AttendanceSessionName,
        date: Optional[str] = None,
        refresh: bool = False,
    ) -> AttendanceSessionManager:
        """Return the owner's sheet for the key, loading it unless already open."""

        key = AttendanceKey(class_id=class_id, date=date or today_iso(), session=session)
        manager = self._states.get(owner)
        if manager and manager.is_for(key) and not refresh:
            return manager
        return self.load_session(owner, key=key, class_name=class_name)

    def load_session(self, owner: str, *, key: AttendanceKey, class_name: str) -> AttendanceSessionManager:
        manager = self._states.get_or_create(owner)
        ticket = manager.begin_load()

        roster = self._students.list_for_class(key.class_id)
        record = self._find_record(key)

        manager.complete_load(ticket, key=key, class_name=class_name, roster=roster, record=record)
        logger.info(
            "Loaded %s attendance for class %s on %s: %s students, %s",
            key.session.value,
            key.class_id,
            key.date,
            len(roster),
            manager.state.value if manager.state else "-",
        )
        return manager

    def _find_record(self, key: AttendanceKey) -> Optional[AttendanceRecord]:
        try:
            return self._attendance.get_record(key)
        except DomainError as e:
            # Treated like an empty record: the sheet opens editable with defaults.
            logger.info("No existing attendance for %s: %s", key, e)
            return None

    def current(self, owner: str, *, class_id: int, generation: Optional[int] = None) -> AttendanceSessionManager:
        manager = self._states.get(owner)
        if not manager or not manager.is_loaded or manager.key is None or manager.key.class_id != class_id:
            raise ValidationError("Attendance for this class is not open. Please reload the page.")
        if generation is not None:
            manager.check_generation(generation)
        return manager

    def toggle_presence(self, owner: str, *, class_id: int, generation: int, student_id: int) -> bool:
        manager = self.current(owner, class_id=class_id, generation=generation)
        return manager.toggle_presence(student_id)

    def submit(self, owner: str, *, class_id: int, generation: int) -> int:
        """Send the full roster for the first time. Returns the absent count."""

        manager = self.current(owner, class_id=class_id, generation=generation)
        manager.require_state(AttendanceState.UNSUBMITTED)
        self._send(manager)
        manager.mark_submitted()
        return manager.absent_count

    def enter_edit(self, owner: str, *, class_id: int, generation: int) -> None:
        self.current(owner, class_id=class_id, generation=generation).enter_edit()

    def cancel_edit(self, owner: str, *, class_id: int, generation: int) -> None:
        self.current(owner, class_id=class_id, generation=generation).cancel_edit()

    def save_edit(self, owner: str, *, class_id: int, generation: int) -> int:
        """Re-send the same payload shape as ``submit``. Returns the absent count."""

        manager = self.current(owner, class_id=class_id, generation=generation)
        manager.require_state(AttendanceState.EDITING)
        self._send(manager)
        manager.mark_edit_saved()
        return manager.absent_count

    def export_report(self, owner: str, *, class_id: int) -> ReportFile:
        return self.current(owner, class_id=class_id).export_report()

    def _send(self, manager: AttendanceSessionManager) -> None:
        ticket = manager.generation
        payload = manager.build_payload()
        logger.info(
            "Submitting %s attendance for class %s on %s (%s absent)",
            payload["session"],
            payload["class_id"],
            payload["date"],
            manager.absent_count,
        )
        self._attendance.mark(payload)
        # The sheet may have been reloaded while the request was in flight.
        manager.check_generation(ticket)
