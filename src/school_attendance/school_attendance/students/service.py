from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from ..common.validators import require_non_empty
from ..core.constants import GENDER_CHOICES
from ..core.exceptions import ValidationError
from .csv_import import decode_csv_bytes, ensure_csv_upload, parse_roster_csv
from .model import Student, StudentForm
from .repository import StudentRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BulkImportOutcome:
    added: int
    skipped: int
    students: Sequence[Student]


class RosterService:
    """Use cases of the roster screen: list, add, bulk-import, delete.

    Every successful mutation is followed by a full roster refetch; nothing is
    inserted into the local list optimistically.
    """

    def __init__(self, students: StudentRepository):
        self._students = students

    def list_students(self, class_id: int) -> Sequence[Student]:
        return self._students.list_for_class(class_id)

    def add_student(self, class_id: int, form: StudentForm) -> Sequence[Student]:
        require_non_empty(form.first_name, "First name")
        require_non_empty(form.last_name, "Last name")
        require_non_empty(form.roll_number, "Roll number")
        require_non_empty(form.parent_phone, "Parent phone")
        if form.gender and form.gender not in GENDER_CHOICES:
            raise ValidationError("Gender must be Male, Female or Other")

        self._students.add(form.to_payload(class_id))
        logger.info("Added student %s (roll %s) to class %s", form.full_name, form.roll_number, class_id)
        return self._students.list_for_class(class_id)

    def bulk_import(
        self,
        class_id: int,
        *,
        filename: str | None,
        content_type: str | None,
        data: bytes,
    ) -> BulkImportOutcome:
        ensure_csv_upload(filename, content_type)
        result = parse_roster_csv(decode_csv_bytes(data), class_id=class_id)

        if not result.students:
            raise ValidationError("No students added: no valid student records found in the CSV file.")

        self._students.add_bulk(class_id=class_id, students=result.students)
        logger.info(
            "Imported %s students into class %s (%s rows skipped)",
            len(result.students),
            class_id,
            result.skipped_rows,
        )
        return BulkImportOutcome(
            added=len(result.students),
            skipped=result.skipped_rows,
            students=self._students.list_for_class(class_id),
        )

    def delete_student(self, class_id: int, student_id: int, *, confirmed: bool) -> Sequence[Student]:
        if not confirmed:
            raise ValidationError("Please confirm before removing a student.")

        self._students.delete(student_id)
        logger.info("Removed student %s from class %s", student_id, class_id)
        return self._students.list_for_class(class_id)
