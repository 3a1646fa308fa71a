from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Optional

from ..core.enums import AttendanceSessionName


@dataclass(frozen=True)
class ClassRef:
    id: int
    name: str
    student_count: int = 0

    @classmethod
    def from_api(cls, data: Mapping) -> "ClassRef":
        return cls(id=int(data["id"]), name=str(data.get("name") or ""), student_count=int(data.get("student_count") or 0))


@dataclass(frozen=True)
class TeacherDashboard:
    full_name: str
    classes: tuple[ClassRef, ...] = field(default_factory=tuple)

    def find_class(self, class_id: int) -> Optional[ClassRef]:
        return next((c for c in self.classes if c.id == class_id), None)


@dataclass(frozen=True)
class SessionReportOutcome:
    """Result of one session's school-wide report request.

    ``data`` is the backend's ``data`` object on success; on failure it is
    ``None`` and ``error`` explains why.
    """

    session: AttendanceSessionName
    data: Optional[Mapping] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.data is not None
