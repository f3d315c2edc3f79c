# screens/students/api.py
"""
HTTP client for the student REST backend (base path /api/students).

Every response is wrapped as {success, message, data}; operations return the
unwrapped data. Failures are raised, never retried or cached.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import requests

from schemas.students_schema import ApiEnvelope, PageParams, PaginatedResponse, Student

log = logging.getLogger(__name__)


class StudentApiError(Exception):
    """Base class for every failure talking to the backend."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class TransportError(StudentApiError):
    """Network failure, non-2xx status, or a body that is not an envelope."""


class EnvelopeError(StudentApiError):
    """The backend answered with success=false."""


class StudentApiClient:
    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._owns_session = session is None
        self.session = session if session is not None else requests.Session()

    def __enter__(self) -> "StudentApiClient":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_session:
            self.session.close()

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    def _url(self, path: str = "") -> str:
        return f"{self.base_url}{path}"

    def _request(
        self,
        method: str,
        path: str = "",
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> ApiEnvelope:
        url = self._url(path)
        log.debug(f"{method} {url} params={params}")
        try:
            response = self.session.request(
                method, url, params=params, json=json, timeout=self.timeout
            )
        except requests.RequestException as e:
            log.warning(f"{method} {url} failed: {e}")
            raise TransportError(f"Could not reach the student service: {e}") from e

        try:
            body = response.json()
        except ValueError:
            body = None

        if not 200 <= response.status_code < 300:
            message = f"HTTP {response.status_code}"
            if isinstance(body, dict) and body.get("message"):
                message = str(body["message"])
            log.warning(f"{method} {url} returned {response.status_code}: {message}")
            raise TransportError(message, status_code=response.status_code)

        try:
            return ApiEnvelope.from_dict(body)
        except ValueError as e:
            log.warning(f"{method} {url} returned a malformed body")
            raise TransportError(str(e), status_code=response.status_code) from e

    def _data(self, method: str, path: str = "", **kwargs) -> Any:
        envelope = self._request(method, path, **kwargs)
        if not envelope.success:
            raise EnvelopeError(envelope.message or "Request was not successful")
        return envelope.data

    def _list(self, path: str, params: Optional[Dict[str, Any]] = None) -> List[Student]:
        return [Student.from_dict(row) for row in (self._data("GET", path, params=params) or [])]

    def _page(self, path: str, page: PageParams, extra: Optional[Dict[str, Any]] = None) -> PaginatedResponse:
        params = dict(extra or {})
        params.update(page.to_query())
        return PaginatedResponse.from_dict(self._data("GET", path, params=params) or {})

    # ------------------------------------------------------------------
    # CRUD
    # ------------------------------------------------------------------

    def list_students(self) -> List[Student]:
        return self._list("")

    def list_students_paged(self, page: PageParams) -> PaginatedResponse:
        return self._page("/page", page)

    def get_student(self, student_id: int) -> Student:
        return Student.from_dict(self._data("GET", f"/{student_id}") or {})

    def create_student(self, student: Student) -> Student:
        data = self._data("POST", json=student.to_payload())
        log.info(f"Created student {data.get('id') if isinstance(data, dict) else '?'}")
        return Student.from_dict(data or {})

    def update_student(self, student_id: int, student: Student) -> Student:
        data = self._data("PUT", f"/{student_id}", json=student.to_payload())
        log.info(f"Updated student {student_id}")
        return Student.from_dict(data or {})

    def delete_student(self, student_id: int) -> bool:
        """Returns the envelope's success flag; HTTP failures still raise."""
        envelope = self._request("DELETE", f"/{student_id}")
        log.info(f"Deleted student {student_id}: success={envelope.success}")
        return envelope.success

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    def search_students(self, term: str) -> List[Student]:
        return self._list("/search", {"term": term})

    def search_students_paged(self, term: str, page: PageParams) -> PaginatedResponse:
        return self._page("/search/page", page, {"term": term})

    def find_by_name(self, name: str) -> List[Student]:
        return self._list("/by-name", {"name": name})

    def find_by_name_paged(self, name: str, page: PageParams) -> PaginatedResponse:
        return self._page("/by-name/page", page, {"name": name})

    def find_by_phone(self, phone: str) -> List[Student]:
        return self._list("/by-phone", {"phone": phone})

    def find_by_phone_paged(self, phone: str, page: PageParams) -> PaginatedResponse:
        return self._page("/by-phone/page", page, {"phone": phone})
