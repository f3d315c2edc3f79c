# schemas/students_schema.py
from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


# ============================================================================
# OPTIONS
# ============================================================================

# value -> label; values are the codes the backend stores
MAJOR_OPTIONS: Dict[str, str] = {
    "1": "Computer Science",
    "2": "Civil Engineering",
    "3": "Science",
    "4": "Business Administration",
    "5": "Electronic Information",
    "6": "Automation",
}

GENDER_OPTIONS: Dict[str, str] = {
    "男": "Male",
    "女": "Female",
    "其他": "Other",
}


def major_label(value: Optional[str]) -> str:
    """Label for a major code; unknown codes are returned unchanged."""
    if not value:
        return ""
    return MAJOR_OPTIONS.get(value, value)


def gender_label(value: Optional[str]) -> str:
    if not value:
        return ""
    return GENDER_OPTIONS.get(value, value)


class SortDirection(str, Enum):
    ASC = "ASC"
    DESC = "DESC"


# ============================================================================
# DATA MODELS
# ============================================================================

# python attribute -> backend JSON key
_JSON_KEYS = {
    "id": "id",
    "user_id": "userId",
    "name": "name",
    "gender": "gender",
    "phone": "phone",
    "age": "age",
    "native_place": "nativePlace",
    "major": "major",
    "email": "email",
    "tag": "tag",
    "remark": "remark",
    "creator": "creator",
}


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


@dataclass
class Student:
    """A student record as exchanged with the backend."""
    name: str
    id: Optional[int] = None
    user_id: Optional[int] = None
    gender: Optional[str] = None
    phone: Optional[str] = None
    age: Optional[int] = None
    native_place: Optional[str] = None
    major: Optional[str] = None
    email: Optional[str] = None
    tag: Optional[str] = None
    remark: Optional[str] = None
    creator: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Student":
        kwargs = {attr: data.get(key) for attr, key in _JSON_KEYS.items()}
        kwargs["name"] = kwargs.get("name") or ""
        return cls(**kwargs)

    def to_payload(self) -> Dict[str, Any]:
        """
        JSON body for create/update. The id travels in the URL, never in
        the body; blank optional strings are sent as null.
        """
        payload: Dict[str, Any] = {}
        for attr, key in _JSON_KEYS.items():
            if attr == "id":
                continue
            value = getattr(self, attr)
            payload[key] = value if attr == "name" else _blank_to_none(value)
        return payload

    @property
    def tags(self) -> List[str]:
        if not self.tag:
            return []
        return [t.strip() for t in self.tag.split(",") if t.strip()]


@dataclass
class PageParams:
    page: int = 0
    size: int = 10
    sort: str = "name"
    direction: SortDirection = SortDirection.ASC

    def to_query(self) -> Dict[str, Any]:
        return {
            "page": self.page,
            "size": self.size,
            "sort": self.sort,
            "direction": SortDirection(self.direction).value,
        }


@dataclass
class PaginatedResponse:
    """One page of students plus the totals needed to render pagination."""
    content: List[Student] = field(default_factory=list)
    current_page: int = 0
    total_items: int = 0
    total_pages: int = 0
    size: int = 0
    first: bool = True
    last: bool = True
    empty: bool = True

    @staticmethod
    def expected_total_pages(total_items: int, size: int) -> int:
        if size <= 0:
            return 0
        return math.ceil(total_items / size)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PaginatedResponse":
        content = [Student.from_dict(row) for row in (data.get("content") or [])]
        return cls(
            content=content,
            current_page=int(data.get("currentPage") or 0),
            total_items=int(data.get("totalItems") or 0),
            total_pages=int(data.get("totalPages") or 0),
            size=int(data.get("size") or 0),
            first=bool(data.get("first", True)),
            last=bool(data.get("last", True)),
            empty=bool(data.get("empty", not content)),
        )


@dataclass
class ApiEnvelope:
    """The {success, message, data} wrapper around every backend response."""
    success: bool
    message: str = ""
    data: Any = None

    @classmethod
    def from_dict(cls, body: Any) -> "ApiEnvelope":
        if not isinstance(body, dict) or "success" not in body:
            raise ValueError("Response body is not an API envelope")
        return cls(
            success=bool(body.get("success")),
            message=str(body.get("message") or ""),
            data=body.get("data"),
        )
