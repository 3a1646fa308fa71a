from __future__ import annotations

from typing import Protocol, Sequence

from .model import Student


class StudentRepository(Protocol):
    def list_for_class(self, class_id: int) -> Sequence[Student]:
        raise NotImplementedError

    def add(self, payload: dict) -> None:
        raise NotImplementedError

    def add_bulk(self, *, class_id: int, students: Sequence[dict]) -> None:
        raise NotImplementedError

    def delete(self, student_id: int) -> None:
        raise NotImplementedError
