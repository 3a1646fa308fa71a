from __future__ import annotations

from typing import Sequence

from ..api.client import ApiClient, require_success
from ..core.exceptions import ApiError
from .model import Student
from .repository import StudentRepository


class ApiStudentRepository(StudentRepository):
    def __init__(self, api: ApiClient):
        self._api = api

    def list_for_class(self, class_id: int) -> Sequence[Student]:
        payload = require_success(self._api.get(f"/attendance/class/{class_id}/students/"), "Failed to fetch students")
        rows = payload.get("students")
        if rows is None:
            raise ApiError("Failed to fetch students")
        return [Student.from_api(row) for row in rows]

    def add(self, payload: dict) -> None:
        require_success(self._api.post("/students/add/", payload), "Failed to add student")

    def add_bulk(self, *, class_id: int, students: Sequence[dict]) -> None:
        body = {"class_id": class_id, "students": list(students)}
        require_success(self._api.post("/students/add-bulk/", body), "Failed to add students")

    def delete(self, student_id: int) -> None:
        require_success(self._api.delete(f"/students/{student_id}/delete/"), "Failed to remove student")
