"""Test setup."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from schemas.students_schema import PageParams, PaginatedResponse, Student  # noqa: E402
from screens.students.api import StudentApiError, TransportError  # noqa: E402


class FakeStudentApi:
    """In-memory stand-in for StudentApiClient with the same call surface."""

    def __init__(self, students: Optional[List[Student]] = None):
        self.students: Dict[int, Student] = {}
        self.calls: List[tuple] = []
        self.fail_with: Optional[StudentApiError] = None
        self.fail_delete: Optional[StudentApiError] = None
        self._next_id = 1
        for s in students or []:
            self._store(s)

    def _store(self, student: Student) -> Student:
        if student.id is None:
            student.id = self._next_id
        self._next_id = max(self._next_id, student.id + 1)
        self.students[student.id] = student
        return student

    def _check(self) -> None:
        if self.fail_with is not None:
            raise self.fail_with

    def _paginate(self, rows: List[Student], params: PageParams) -> PaginatedResponse:
        rows = sorted(rows, key=lambda s: getattr(s, params.sort) or "")
        total = len(rows)
        pages = PaginatedResponse.expected_total_pages(total, params.size)
        chunk = rows[params.page * params.size:(params.page + 1) * params.size]
        return PaginatedResponse(
            content=chunk,
            current_page=params.page,
            total_items=total,
            total_pages=pages,
            size=params.size,
            first=params.page == 0,
            last=params.page >= pages - 1,
            empty=not chunk,
        )

    def list_students_paged(self, params: PageParams) -> PaginatedResponse:
        self.calls.append(("list_paged", params))
        self._check()
        return self._paginate(list(self.students.values()), params)

    def search_students_paged(self, term: str, params: PageParams) -> PaginatedResponse:
        self.calls.append(("search_paged", term, params))
        self._check()
        term = term.strip().lower()
        rows = [
            s for s in self.students.values()
            if not term or any(term in (v or "").lower() for v in (s.name, s.phone, s.email))
        ]
        return self._paginate(rows, params)

    def find_by_name_paged(self, name: str, params: PageParams) -> PaginatedResponse:
        self.calls.append(("name_paged", name, params))
        self._check()
        rows = [s for s in self.students.values() if name.lower() in s.name.lower()]
        return self._paginate(rows, params)

    def find_by_phone_paged(self, phone: str, params: PageParams) -> PaginatedResponse:
        self.calls.append(("phone_paged", phone, params))
        self._check()
        rows = [s for s in self.students.values() if phone in (s.phone or "")]
        return self._paginate(rows, params)

    def get_student(self, student_id: int) -> Student:
        self.calls.append(("get", student_id))
        self._check()
        if student_id not in self.students:
            raise TransportError("Student not found with ID: %s" % student_id, status_code=404)
        return self.students[student_id]

    def create_student(self, student: Student) -> Student:
        self.calls.append(("create", student))
        self._check()
        student.id = None
        return self._store(student)

    def update_student(self, student_id: int, student: Student) -> Student:
        self.calls.append(("update", student_id, student))
        self._check()
        student.id = student_id
        self.students[student_id] = student
        return student

    def delete_student(self, student_id: int) -> bool:
        self.calls.append(("delete", student_id))
        if self.fail_delete is not None:
            raise self.fail_delete
        return self.students.pop(student_id, None) is not None


def make_students(count: int) -> List[Student]:
    return [
        Student(
            name=f"Student {i:03d}",
            gender="男" if i % 2 else "女",
            phone=f"1380000{i:04d}",
            age=18 + i % 5,
            major=str(1 + i % 6),
            email=f"s{i}@example.com",
        )
        for i in range(count)
    ]


@pytest.fixture
def fake_api() -> FakeStudentApi:
    return FakeStudentApi(make_students(23))


def valid_form_values(**overrides: Any) -> Dict[str, Any]:
    values = {
        "name": "Li Wei",
        "gender": "男",
        "phone": "13800138000",
        "age": 20,
        "native_place": "Hangzhou",
        "major": "1",
        "email": "li.wei@example.com",
        "tag": "math, chess",
        "remark": "",
    }
    values.update(overrides)
    return values
