from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping


def _text(value) -> str:
    return "" if value is None else str(value)


@dataclass(frozen=True)
class Student:
    """Domain entity: one student of a class roster (owned by the backend)."""

    id: int
    name: str
    roll_number: str
    father_name: str = ""
    mother_name: str = ""
    parent_phone: str = ""
    parent_email: str = ""
    address: str = ""
    gender: str = ""

    @classmethod
    def from_api(cls, data: Mapping) -> "Student":
        return cls(
            id=int(data["id"]),
            name=_text(data.get("name")),
            roll_number=_text(data.get("roll_number")),
            father_name=_text(data.get("father_name")),
            mother_name=_text(data.get("mother_name")),
            parent_phone=_text(data.get("parent_phone") or data.get("mother_phone") or data.get("father_phone")),
            parent_email=_text(data.get("parent_email")),
            address=_text(data.get("address")),
            gender=_text(data.get("gender")),
        )


@dataclass(frozen=True)
class StudentForm:
    """The single-student add form, as typed by the teacher."""

    first_name: str = ""
    last_name: str = ""
    roll_number: str = ""
    father_name: str = ""
    mother_name: str = ""
    parent_phone: str = ""
    parent_email: str = ""
    address: str = ""
    gender: str = ""

    @classmethod
    def from_mapping(cls, form: Mapping) -> "StudentForm":
        """Build from camelCase form fields (same names as the CSV headers)."""

        return cls(
            first_name=_text(form.get("firstName")).strip(),
            last_name=_text(form.get("lastName")).strip(),
            roll_number=_text(form.get("rollNumber")).strip(),
            father_name=_text(form.get("fatherName")).strip(),
            mother_name=_text(form.get("motherName")).strip(),
            parent_phone=_text(form.get("parentPhone")).strip(),
            parent_email=_text(form.get("parentEmail")).strip(),
            address=_text(form.get("address")).strip(),
            gender=_text(form.get("gender")).strip(),
        )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def to_payload(self, class_id: int) -> dict:
        return {
            "class_id": class_id,
            "name": self.full_name,
            "roll_number": self.roll_number,
            "father_name": self.father_name,
            "mother_name": self.mother_name,
            "parent_phone": self.parent_phone,
            "parent_email": self.parent_email,
            "address": self.address,
            "gender": self.gender,
        }


@dataclass(frozen=True)
class ImportResult:
    """Valid student payloads parsed from a roster CSV plus how many rows were dropped."""

    students: list[dict] = field(default_factory=list)
    skipped_rows: int = 0
