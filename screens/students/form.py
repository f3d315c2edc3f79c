# screens/students/form.py
from __future__ import annotations

from typing import Any, Dict, Optional

import streamlit as st

from core.settings import Settings
from core.ui import _handle_error, client_from_settings, get_settings, navigate
from schemas.students_schema import GENDER_OPTIONS, MAJOR_OPTIONS
from screens.students.state import DetailController, FormController


def _k(s: str) -> str:
    return f"students__view__form__{s}"


def _field_error(ctl: FormController, name: str) -> None:
    message = ctl.field_errors.get(name)
    if message:
        st.caption(f":red[{message}]")


def _select(label: str, options: Dict[str, str], value: Optional[str], key: str, placeholder: str) -> str:
    choices = [""] + list(options)
    index = choices.index(value) if value in choices else 0
    return st.selectbox(
        label,
        choices,
        index=index,
        format_func=lambda v: options.get(v, placeholder) if v else placeholder,
        key=key,
    )


def _render_fields(ctl: FormController) -> Dict[str, Any]:
    v = ctl.values
    col1, col2 = st.columns(2)
    with col1:
        name = st.text_input("Name *", value=v.get("name") or "", key=_k("name"))
        _field_error(ctl, "name")
        phone = st.text_input("Phone *", value=v.get("phone") or "", key=_k("phone"))
        _field_error(ctl, "phone")
        native_place = st.text_input("Native Place", value=v.get("native_place") or "", key=_k("native_place"))
        _field_error(ctl, "native_place")
        email = st.text_input("Email", value=v.get("email") or "", key=_k("email"))
        _field_error(ctl, "email")
    with col2:
        gender = _select("Gender *", GENDER_OPTIONS, v.get("gender"), _k("gender"), "Select Gender")
        _field_error(ctl, "gender")
        # No widget bounds: out-of-range ages must reach validation.
        age = st.number_input("Age *", value=v.get("age"), step=1, key=_k("age"))
        _field_error(ctl, "age")
        major = _select("Major *", MAJOR_OPTIONS, v.get("major"), _k("major"), "Select Major")
        _field_error(ctl, "major")
        tag = st.text_input("Tags", value=v.get("tag") or "", placeholder="Comma separated tags", key=_k("tag"))
        _field_error(ctl, "tag")

    remark = st.text_area("Remarks", value=v.get("remark") or "", height=120, key=_k("remark"))
    _field_error(ctl, "remark")

    return {
        "name": name,
        "gender": gender,
        "phone": phone,
        "age": age,
        "native_place": native_place,
        "major": major,
        "email": email,
        "tag": tag,
        "remark": remark,
    }


def _render_form(ctl: FormController) -> None:
    st.title("✏️ Edit Student" if ctl.is_edit else "➕ Add New Student")

    if ctl.error:
        st.error(ctl.error)

    with st.form(_k("student_form")):
        values = _render_fields(ctl)
        col_cancel, col_submit, _ = st.columns([1, 1, 3])
        cancelled = col_cancel.form_submit_button("Cancel", disabled=ctl.submitting)
        if ctl.submitting:
            label = "Saving..."
        else:
            label = "Update Student" if ctl.is_edit else "Create Student"
        submitted = col_submit.form_submit_button(label, type="primary", disabled=ctl.submitting)

    if cancelled:
        navigate("list")
    if submitted:
        with st.spinner("Saving..."):
            ok = ctl.submit(values)
        if ok:
            st.toast(f"✅ Saved {ctl.saved.name if ctl.saved else 'student'}")
            navigate("list")
        st.rerun()


def _get_controller(settings: Settings, student_id: Optional[int]) -> Optional[FormController]:
    """Builds the form once per visit; edit mode loads the record first."""
    key = _k(f"controller_{student_id or 'new'}")
    if key in st.session_state:
        return st.session_state[key]

    api = client_from_settings(settings)
    if student_id is None:
        ctl = FormController(api=api)
    else:
        detail = DetailController(api=api)
        with st.spinner("Loading student details..."):
            detail.load(student_id)
        if detail.error:
            st.error(detail.error)
            return None
        if detail.student is None:
            st.info("Student not found.")
            return None
        ctl = FormController(api=api, student=detail.student, is_edit=True)

    st.session_state[key] = ctl
    return ctl


def render(student_id: Optional[int] = None, settings: Optional[Settings] = None) -> None:
    settings = settings or get_settings()
    try:
        ctl = _get_controller(settings, student_id)
        if ctl is None:
            if st.button("← Back to List", key=_k("back")):
                navigate("list")
            return
        _render_form(ctl)
    except Exception as e:
        _handle_error(e, "An unexpected error occurred while rendering the student form.")
        st.exception(e)
