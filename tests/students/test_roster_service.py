from __future__ import annotations

import pytest

from src.school_attendance.school_attendance.core.exceptions import ApiError, ValidationError
from src.school_attendance.school_attendance.students.model import Student, StudentForm
from src.school_attendance.school_attendance.students.service import RosterService


class FakeStudentsRepo:
    def __init__(self, students=None):
        self.students = list(students or [])
        self.added = []
        self.bulk = []
        self.deleted = []
        self.list_calls = 0
        self.fail_with = None

    def list_for_class(self, class_id):
        self.list_calls += 1
        return list(self.students)

    def add(self, payload):
        if self.fail_with:
            raise self.fail_with
        self.added.append(payload)
        self.students.append(Student(id=len(self.students) + 1, name=payload["name"], roll_number=payload["roll_number"]))

    def add_bulk(self, *, class_id, students):
        self.bulk.append((class_id, students))

    def delete(self, student_id):
        self.deleted.append(student_id)
        self.students = [s for s in self.students if s.id != student_id]


def _form(**overrides) -> StudentForm:
    data = {"firstName": "Asha", "lastName": "Rao", "rollNumber": "12", "parentPhone": "999", "gender": "Female"}
    data.update(overrides)
    return StudentForm.from_mapping(data)


def test_add_student_sends_payload_and_refetches():
    repo = FakeStudentsRepo()
    svc = RosterService(repo)

    roster = svc.add_student(4, _form())

    assert repo.added[0]["class_id"] == 4
    assert repo.added[0]["name"] == "Asha Rao"
    assert repo.added[0]["parent_phone"] == "999"
    assert [s.name for s in roster] == ["Asha Rao"]
    assert repo.list_calls == 1


@pytest.mark.parametrize("field", ["firstName", "lastName", "rollNumber", "parentPhone"])
def test_add_student_requires_fields(field):
    repo = FakeStudentsRepo()

    with pytest.raises(ValidationError):
        RosterService(repo).add_student(4, _form(**{field: " "}))
    assert repo.added == []


def test_add_student_rejects_unknown_gender():
    with pytest.raises(ValidationError):
        RosterService(FakeStudentsRepo()).add_student(4, _form(gender="X"))


def test_add_student_backend_failure_does_not_touch_roster():
    repo = FakeStudentsRepo()
    repo.fail_with = ApiError("Roll number already exists")

    with pytest.raises(ApiError, match="already exists"):
        RosterService(repo).add_student(4, _form())
    assert repo.list_calls == 0


def test_bulk_import_sends_valid_rows_and_reports_skipped():
    repo = FakeStudentsRepo()
    data = b"rollNumber,firstName,lastName,parentPhone\n1,Asha,Rao,999\n2,,Das,888\n"

    outcome = RosterService(repo).bulk_import(3, filename="r.csv", content_type="text/csv", data=data)

    assert outcome.added == 1
    assert outcome.skipped == 1
    class_id, students = repo.bulk[0]
    assert class_id == 3
    assert students[0]["name"] == "Asha Rao"


def test_bulk_import_without_valid_rows_makes_no_backend_call():
    repo = FakeStudentsRepo()
    data = b"rollNumber,firstName,lastName,parentPhone\n1,,Rao,999\n"

    with pytest.raises(ValidationError, match="No students added"):
        RosterService(repo).bulk_import(3, filename="r.csv", content_type="text/csv", data=data)
    assert repo.bulk == []


def test_delete_requires_confirmation():
    repo = FakeStudentsRepo([Student(id=1, name="Asha Rao", roll_number="1")])
    svc = RosterService(repo)

    with pytest.raises(ValidationError):
        svc.delete_student(3, 1, confirmed=False)
    assert repo.deleted == []

    assert svc.delete_student(3, 1, confirmed=True) == []
    assert repo.deleted == [1]


def test_student_from_api_falls_back_to_mother_then_father_phone():
    assert Student.from_api({"id": 1, "name": "A", "roll_number": 1, "mother_phone": "m"}).parent_phone == "m"
    assert Student.from_api({"id": 1, "name": "A", "roll_number": 1, "father_phone": "f"}).parent_phone == "f"
    assert Student.from_api({"id": 1, "name": "A", "roll_number": 1}).roll_number == "1"
