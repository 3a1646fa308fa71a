from __future__ import annotations

from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import Mapping

from ..core.enums import AttendanceSessionName


@dataclass(frozen=True)
class AttendanceKey:
    """Identifies one attendance sheet: a class, a day and a session."""

    class_id: int
    date: str
    session: AttendanceSessionName


@dataclass(frozen=True)
class AttendanceEntry:
    """Client-side projection of one student's presence on the loaded sheet."""

    student_id: int
    is_present: bool


@dataclass(frozen=True)
class AttendanceRecord:
    """Backend-owned record: at most one per key; absent means not yet submitted."""

    key: AttendanceKey
    presence: Mapping[int, bool] = field(default_factory=dict)


def attendance_rate(present: int, total: int) -> float:
    if total == 0:
        return 0.0
    return present / total * 100


@dataclass(frozen=True)
class AttendanceSummary:
    total: int
    present: int
    absent: int
    rate: float

    @classmethod
    def from_counts(cls, *, present: int, total: int) -> "AttendanceSummary":
        return cls(total=total, present=present, absent=total - present, rate=attendance_rate(present, total))

    @property
    def rate_text(self) -> str:
        # Exact ties round up: 6.25 -> "6.3".
        return str(Decimal(self.rate).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


@dataclass(frozen=True)
class ReportFile:
    """A generated CSV download."""

    filename: str
    content: str
    mimetype: str = "text/csv"
