from __future__ import annotations

from typing import Optional, Protocol

from .model import AttendanceKey, AttendanceRecord


class AttendanceRepository(Protocol):
    def get_record(self, key: AttendanceKey) -> Optional[AttendanceRecord]:
        """Return the stored record for the key, or ``None`` if nothing was submitted."""

        raise NotImplementedError

    def mark(self, payload: dict) -> None:
        """Create or overwrite the record described by ``payload``."""

        raise NotImplementedError
