# screens/students/utils.py
from __future__ import annotations

import csv
import io
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence

import pandas as pd

from schemas.students_schema import (
    GENDER_OPTIONS,
    MAJOR_OPTIONS,
    Student,
    gender_label,
    major_label,
)

PHONE_PATTERN = re.compile(r"^[0-9]*$")
EMAIL_PATTERN = re.compile(r"^\S+@\S+\.\S+$")

# Form field order; keys match the Student attributes.
FORM_FIELDS = (
    "name", "gender", "phone", "age", "native_place",
    "major", "email", "tag", "remark",
)


@dataclass(frozen=True)
class FieldRule:
    """Declarative constraints for one form field. Checked in the order below."""
    field: str
    label: str
    required: bool = False
    integer: bool = False
    min_value: Optional[int] = None
    max_value: Optional[int] = None
    max_length: Optional[int] = None
    pattern: Optional[re.Pattern] = None
    pattern_message: str = ""
    choices: Optional[Sequence[str]] = None
    choices_message: str = ""
    max_length_message: str = ""
    min_value_message: str = ""
    max_value_message: str = ""

    def check(self, value: Any) -> Optional[str]:
        if _is_empty(value):
            return f"{self.label} is required" if self.required else None

        if self.integer:
            number = _to_int(value)
            if number is None:
                return f"{self.label} must be a whole number"
            if self.min_value is not None and number < self.min_value:
                return self.min_value_message
            if self.max_value is not None and number > self.max_value:
                return self.max_value_message
            return None

        text = str(value)
        if self.choices is not None and text not in self.choices:
            return self.choices_message or f"{self.label} must be one of the listed options"
        if self.pattern is not None and not self.pattern.match(text):
            return self.pattern_message
        if self.max_length is not None and len(text) > self.max_length:
            return self.max_length_message
        return None


FIELD_RULES: List[FieldRule] = [
    FieldRule("name", "Name", required=True, max_length=64,
              max_length_message="Name must be less than 64 characters"),
    FieldRule("gender", "Gender", required=True, choices=tuple(GENDER_OPTIONS)),
    FieldRule("phone", "Phone", required=True, pattern=PHONE_PATTERN,
              pattern_message="Phone must contain only digits", max_length=16,
              max_length_message="Phone must be less than 16 characters"),
    FieldRule("age", "Age", required=True, integer=True,
              min_value=0, min_value_message="Age must be positive",
              max_value=150, max_value_message="Age cannot exceed 150"),
    FieldRule("native_place", "Native place", max_length=64,
              max_length_message="Native place must be less than 64 characters"),
    FieldRule("major", "Major", required=True, choices=tuple(MAJOR_OPTIONS)),
    FieldRule("email", "Email", pattern=EMAIL_PATTERN, pattern_message="Invalid email format",
              max_length=32, max_length_message="Email must be less than 32 characters"),
    FieldRule("tag", "Tags", max_length=512,
              max_length_message="Tags must be less than 512 characters"),
    FieldRule("remark", "Remarks", max_length=512,
              max_length_message="Remarks must be less than 512 characters"),
]


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def _to_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    try:
        return int(str(value).strip())
    except ValueError:
        return None


def validate_student(values: Mapping[str, Any]) -> Dict[str, str]:
    """Returns {field: message} with the first failing rule per field."""
    errors: Dict[str, str] = {}
    for rule in FIELD_RULES:
        message = rule.check(values.get(rule.field))
        if message:
            errors[rule.field] = message
    return errors


def empty_form_values() -> Dict[str, Any]:
    return {f: (None if f == "age" else "") for f in FORM_FIELDS}


def form_values_from_student(student: Optional[Student]) -> Dict[str, Any]:
    if student is None:
        return empty_form_values()
    values = {f: getattr(student, f) for f in FORM_FIELDS}
    for f in FORM_FIELDS:
        if f != "age" and values[f] is None:
            values[f] = ""
    return values


def student_from_form(values: Mapping[str, Any], base: Optional[Student] = None) -> Student:
    """Build the record to submit; ids and ownership come from the edited record."""
    def text(name: str) -> Optional[str]:
        value = values.get(name)
        if value is None:
            return None
        value = str(value).strip()
        return value or None

    return Student(
        name=(text("name") or ""),
        id=base.id if base else None,
        user_id=base.user_id if base else None,
        creator=base.creator if base else None,
        gender=text("gender"),
        phone=text("phone"),
        age=_to_int(values.get("age")) if not _is_empty(values.get("age")) else None,
        native_place=text("native_place"),
        major=text("major"),
        email=text("email"),
        tag=text("tag"),
        remark=text("remark"),
    )


# --- Export ---

EXPORT_COLUMNS = ["ID", "Name", "Gender", "Phone", "Age", "Native Place", "Major", "Email", "Tags", "Remark"]


def students_to_frame(students: Sequence[Student]) -> pd.DataFrame:
    rows = [
        {
            "ID": s.id,
            "Name": s.name,
            "Gender": gender_label(s.gender),
            "Phone": s.phone,
            "Age": s.age,
            "Native Place": s.native_place,
            "Major": major_label(s.major),
            "Email": s.email,
            "Tags": s.tag,
            "Remark": s.remark,
        }
        for s in students
    ]
    return pd.DataFrame(rows, columns=EXPORT_COLUMNS)


def _df_to_csv(df_to_conv: pd.DataFrame) -> bytes:
    with io.StringIO() as buffer:
        df_to_conv.to_csv(buffer, index=False, quoting=csv.QUOTE_ALL)
        return buffer.getvalue().encode("utf-8")
