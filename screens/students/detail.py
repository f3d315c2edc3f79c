# screens/students/detail.py
from __future__ import annotations

from typing import Optional

import streamlit as st

from core.settings import Settings
from core.ui import _handle_error, client_from_settings, get_settings, navigate
from schemas.students_schema import Student, gender_label, major_label
from screens.students.state import DetailController


def _k(s: str) -> str:
    return f"students__view__detail__{s}"


def _item(label: str, value) -> None:
    st.caption(label)
    st.write(value if value not in (None, "") else "-")


def _render_student(student: Student) -> None:
    col_basic, col_contact = st.columns(2)
    with col_basic:
        st.subheader("Basic Information")
        _item("Name", student.name)
        _item("Gender", gender_label(student.gender))
        _item("Age", student.age)
        _item("Native Place", student.native_place)
    with col_contact:
        st.subheader("Contact Information")
        _item("Phone", student.phone)
        _item("Email", student.email)
        _item("Major", major_label(student.major))
        st.caption("Tags")
        if student.tags:
            st.markdown(" ".join(f"`{t}`" for t in student.tags))
        else:
            st.write("-")

    if student.remark:
        st.divider()
        st.subheader("Remark")
        st.text(student.remark)


def render(student_id: int, settings: Optional[Settings] = None) -> None:
    settings = settings or get_settings()
    try:
        key = _k(f"controller_{student_id}")
        if key not in st.session_state:
            ctl = DetailController(api=client_from_settings(settings))
            with st.spinner("Loading student details..."):
                ctl.load(student_id)
            st.session_state[key] = ctl
        ctl: DetailController = st.session_state[key]

        col_title, col_back, col_edit = st.columns([4, 1, 1])
        col_title.title("🧾 Student Details")
        if col_back.button("← Back to List", key=_k("back")):
            navigate("list")
        if ctl.student is not None and col_edit.button("✏️ Edit", type="primary", key=_k("edit")):
            navigate("edit", student_id)

        if ctl.error:
            st.error(ctl.error)
            return
        if ctl.student is None:
            st.info("Student not found.")
            return

        _render_student(ctl.student)

    except Exception as e:
        _handle_error(e, "An unexpected error occurred while rendering the student details.")
        st.exception(e)
