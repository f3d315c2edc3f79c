# screens/students/state.py
"""
View state for the student screens.

Controllers live in st.session_state between reruns and hold everything a
view needs to render. They talk to the backend only through a
StudentApiClient and never touch Streamlit themselves.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

from core.pagination import PageWindow, page_window, range_summary
from schemas.students_schema import PageParams, PaginatedResponse, SortDirection, Student
from screens.students.api import StudentApiClient, StudentApiError
from screens.students.utils import (
    form_values_from_student,
    student_from_form,
    validate_student,
)

log = logging.getLogger(__name__)

LOAD_ERROR = "Failed to load students. Please try again later."
DELETE_ERROR = "Failed to delete student. Please try again later."
SAVE_ERROR = "Failed to save student. Please try again."
DETAIL_ERROR = "Failed to load student details. Please try again later."

SEARCH_MODES = {
    "all": "Name, phone or email",
    "name": "Name",
    "phone": "Phone",
}


# ────────────────────────────────────────────────────────────────────────────────
# Routing
# ────────────────────────────────────────────────────────────────────────────────

VIEWS = ("list", "create", "edit", "detail")


@dataclass(frozen=True)
class Route:
    view: str = "list"
    student_id: Optional[int] = None

    def to_query(self) -> Dict[str, str]:
        if self.view == "list":
            return {}
        query = {"view": self.view}
        if self.student_id is not None:
            query["id"] = str(self.student_id)
        return query


def parse_route(query: Mapping[str, Any]) -> Route:
    """Unknown views, and edit/detail without a usable id, land on the list."""
    view = str(query.get("view") or "list").lower()
    if view not in VIEWS:
        return Route()
    if view in ("list", "create"):
        return Route(view=view)
    try:
        student_id = int(str(query.get("id")))
    except (TypeError, ValueError):
        return Route()
    if student_id <= 0:
        return Route()
    return Route(view=view, student_id=student_id)


# ────────────────────────────────────────────────────────────────────────────────
# List
# ────────────────────────────────────────────────────────────────────────────────

@dataclass
class ListViewController:
    api: StudentApiClient
    size: int = 10
    sort: str = "name"
    direction: SortDirection = SortDirection.ASC
    search_term: str = ""
    search_mode: str = "all"
    current_page: int = 0
    total_pages: int = 0
    total_items: int = 0
    items: List[Student] = field(default_factory=list)
    loading: bool = False
    error: str = ""
    pending_delete: Optional[int] = None
    loaded: bool = False

    def mount(self) -> None:
        if not self.loaded:
            self.fetch()

    def _page_params(self) -> PageParams:
        return PageParams(
            page=self.current_page,
            size=self.size,
            sort=self.sort,
            direction=self.direction,
        )

    def _query(self) -> PaginatedResponse:
        params = self._page_params()
        term = self.search_term.strip()
        if self.search_mode == "name" and term:
            return self.api.find_by_name_paged(term, params)
        if self.search_mode == "phone" and term:
            return self.api.find_by_phone_paged(term, params)
        if self.search_mode in ("name", "phone"):
            return self.api.list_students_paged(params)
        return self.api.search_students_paged(term, params)

    def fetch(self, _clamped: bool = False) -> bool:
        """Replace the page state from the backend. Skipped while a fetch is running."""
        if self.loading:
            return False
        self.loading = True
        self.error = ""
        try:
            page = self._query()
        except StudentApiError as e:
            log.warning(f"Error fetching students: {e.message}", exc_info=True)
            self.error = LOAD_ERROR
            return False
        finally:
            self.loading = False
            self.loaded = True

        if not _clamped and 0 < page.total_pages <= page.current_page:
            # page no longer exists, e.g. its only row was deleted
            log.info(f"Page {page.current_page} is past the end, moving to {page.total_pages - 1}")
            self.current_page = page.total_pages - 1
            return self.fetch(_clamped=True)

        self.items = list(page.content)
        self.current_page = page.current_page
        self.total_pages = page.total_pages
        self.total_items = page.total_items
        if page.size > 0:
            self.size = page.size
        return True

    def change_page(self, page: int) -> bool:
        if page < 0 or page >= self.total_pages or page == self.current_page:
            return False
        self.current_page = page
        return self.fetch()

    def submit_search(self, term: str, mode: Optional[str] = None) -> bool:
        self.search_term = term or ""
        if mode is not None:
            self.search_mode = mode if mode in SEARCH_MODES else "all"
        self.current_page = 0
        return self.fetch()

    def request_delete(self, student_id: int) -> None:
        self.pending_delete = student_id

    def cancel_delete(self) -> None:
        self.pending_delete = None

    def confirm_delete(self) -> bool:
        student_id = self.pending_delete
        self.pending_delete = None
        if student_id is None:
            return False
        try:
            deleted = self.api.delete_student(student_id)
        except StudentApiError as e:
            log.warning(f"Error deleting student {student_id}: {e.message}", exc_info=True)
            self.error = DELETE_ERROR
            return False
        if not deleted:
            self.error = DELETE_ERROR
            return False
        # Refetch rather than splice so the totals stay correct.
        self.fetch()
        return True

    @property
    def window(self) -> Optional[PageWindow]:
        return page_window(self.current_page, self.total_pages)

    @property
    def summary(self) -> Tuple[int, int, int]:
        return range_summary(self.current_page, self.size, self.total_items)


# ────────────────────────────────────────────────────────────────────────────────
# Form
# ────────────────────────────────────────────────────────────────────────────────

@dataclass
class FormController:
    api: StudentApiClient
    student: Optional[Student] = None
    is_edit: bool = False
    values: Dict[str, Any] = field(default_factory=dict)
    field_errors: Dict[str, str] = field(default_factory=dict)
    submitting: bool = False
    error: str = ""
    saved: Optional[Student] = None

    def __post_init__(self) -> None:
        if not self.values:
            self.values = form_values_from_student(self.student)

    @property
    def student_id(self) -> Optional[int]:
        return self.student.id if self.student else None

    def submit(self, values: Mapping[str, Any]) -> bool:
        if self.submitting:
            return False
        self.values = dict(values)
        self.error = ""
        self.field_errors = validate_student(self.values)
        if self.field_errors:
            return False

        record = student_from_form(self.values, base=self.student)
        self.submitting = True
        try:
            if self.is_edit and self.student_id:
                self.saved = self.api.update_student(self.student_id, record)
            else:
                self.saved = self.api.create_student(record)
        except StudentApiError as e:
            log.warning(f"Error saving student: {e.message}", exc_info=True)
            self.error = SAVE_ERROR
            return False
        finally:
            self.submitting = False
        return True


# ────────────────────────────────────────────────────────────────────────────────
# Detail
# ────────────────────────────────────────────────────────────────────────────────

@dataclass
class DetailController:
    api: StudentApiClient
    student: Optional[Student] = None
    student_id: Optional[int] = None
    loading: bool = False
    error: str = ""
    not_found: bool = False

    def load(self, student_id: int) -> Optional[Student]:
        self.student_id = student_id
        self.student = None
        self.error = ""
        self.not_found = False
        self.loading = True
        try:
            self.student = self.api.get_student(student_id)
        except StudentApiError as e:
            if e.status_code == 404:
                self.not_found = True
            else:
                log.warning(f"Error fetching student {student_id}: {e.message}", exc_info=True)
                self.error = DETAIL_ERROR
        finally:
            self.loading = False
        return self.student
