# screens/students/page.py
from __future__ import annotations

from typing import Optional

import streamlit as st

from core.pagination import PageWindow
from core.settings import Settings
from core.ui import _handle_error, client_from_settings, get_settings, navigate
from schemas.students_schema import gender_label, major_label
from screens.students.state import SEARCH_MODES, ListViewController
from screens.students.utils import _df_to_csv, students_to_frame


# ────────────────────────────────────────────────────────────────────────────────
# Small helpers
# ────────────────────────────────────────────────────────────────────────────────

def _k(s: str) -> str:
    """Per-view key namespace; cleared when navigating away."""
    return f"students__view__list__{s}"


def _get_controller(settings: Settings) -> ListViewController:
    key = _k("controller")
    if key not in st.session_state:
        st.session_state[key] = ListViewController(
            api=client_from_settings(settings),
            size=settings.ui.page_size,
            sort=settings.ui.sort,
            direction=settings.ui.direction,
        )
    return st.session_state[key]


# ────────────────────────────────────────────────────────────────────────────────
# Sections
# ────────────────────────────────────────────────────────────────────────────────

def _render_search(ctl: ListViewController) -> None:
    modes = list(SEARCH_MODES)
    with st.form(_k("search_form"), clear_on_submit=False):
        col_term, col_mode, col_btn = st.columns([4, 2, 1])
        term = col_term.text_input(
            "Search",
            value=ctl.search_term,
            placeholder="Search by name, phone, or email...",
            label_visibility="collapsed",
        )
        mode = col_mode.selectbox(
            "Search in",
            modes,
            index=modes.index(ctl.search_mode) if ctl.search_mode in modes else 0,
            format_func=lambda m: SEARCH_MODES[m],
            label_visibility="collapsed",
        )
        submitted = col_btn.form_submit_button("🔍 Search", disabled=ctl.loading, use_container_width=True)
    if submitted:
        with st.spinner("Loading students..."):
            ctl.submit_search(term, mode)
        st.rerun()


def _render_delete_confirmation(ctl: ListViewController) -> None:
    if ctl.pending_delete is None:
        return
    target = next((s for s in ctl.items if s.id == ctl.pending_delete), None)
    who = target.name if target else f"#{ctl.pending_delete}"
    st.warning(f"Are you sure you want to delete **{who}**?")
    col_yes, col_no, _ = st.columns([1, 1, 4])
    if col_yes.button("🗑️ Yes, delete", type="primary", key=_k("confirm_delete")):
        with st.spinner("Deleting..."):
            ctl.confirm_delete()
        st.rerun()
    if col_no.button("Cancel", key=_k("cancel_delete")):
        ctl.cancel_delete()
        st.rerun()


def _render_rows(ctl: ListViewController) -> None:
    widths = [3, 1, 2, 2, 3, 2]
    header = st.columns(widths)
    for col, title in zip(header, ["Name", "Gender", "Phone", "Major", "Email", "Actions"]):
        col.markdown(f"**{title}**")

    for student in ctl.items:
        cols = st.columns(widths)
        cols[0].write(student.name)
        cols[1].write(gender_label(student.gender))
        cols[2].write(student.phone or "")
        cols[3].write(major_label(student.major))
        cols[4].write(student.email or "")
        view_col, edit_col, del_col = cols[5].columns(3)
        if view_col.button("👁️", key=_k(f"view_{student.id}"), help="View"):
            navigate("detail", student.id)
        if edit_col.button("✏️", key=_k(f"edit_{student.id}"), help="Edit"):
            navigate("edit", student.id)
        if del_col.button("🗑️", key=_k(f"delete_{student.id}"), help="Delete",
                          disabled=student.id is None):
            ctl.request_delete(student.id)
            st.rerun()


def _page_button(col, label: str, page: int, ctl: ListViewController, *,
                 disabled: bool = False, current: bool = False) -> None:
    if col.button(label, key=_k(f"page_{label}_{page}"), disabled=disabled,
                  type="primary" if current else "secondary", use_container_width=True):
        with st.spinner("Loading students..."):
            ctl.change_page(page)
        st.rerun()


def _render_pagination(ctl: ListViewController, window: Optional[PageWindow]) -> None:
    if window is None:
        return

    start, end, total = ctl.summary
    st.caption(f"Showing **{start}** to **{end}** of **{total}** results")

    slots = ["prev"]
    if window.show_first:
        slots.append("first")
        if window.leading_ellipsis:
            slots.append("...")
    slots.extend(window.pages)
    if window.show_last:
        if window.trailing_ellipsis:
            slots.append("...")
        slots.append("last")
    slots.append("next")

    cols = st.columns(len(slots))
    for col, slot in zip(cols, slots):
        if slot == "prev":
            _page_button(col, "‹ Prev", ctl.current_page - 1, ctl, disabled=not window.has_previous)
        elif slot == "next":
            _page_button(col, "Next ›", ctl.current_page + 1, ctl, disabled=not window.has_next)
        elif slot == "first":
            _page_button(col, "1", 0, ctl)
        elif slot == "last":
            _page_button(col, str(window.total_pages), window.total_pages - 1, ctl)
        elif slot == "...":
            col.markdown("…")
        else:
            _page_button(col, str(slot + 1), slot, ctl, current=slot == ctl.current_page)


def _render_export(ctl: ListViewController) -> None:
    if not ctl.items:
        return
    st.download_button(
        label=f"⬇️ Export this page ({len(ctl.items)} students, CSV)",
        data=_df_to_csv(students_to_frame(ctl.items)),
        file_name=f"students_page_{ctl.current_page + 1}.csv",
        mime="text/csv",
        key=_k("export_csv"),
    )


# ────────────────────────────────────────────────────────────────────────────────
# Main
# ────────────────────────────────────────────────────────────────────────────────

def render(settings: Optional[Settings] = None) -> None:
    settings = settings or get_settings()
    try:
        ctl = _get_controller(settings)

        col_title, col_add = st.columns([4, 1])
        col_title.title("👨‍🎓 Student List")
        if col_add.button("➕ Add New Student", type="primary", key=_k("add")):
            navigate("create")

        if not ctl.loaded:
            with st.spinner("Loading students..."):
                ctl.mount()

        _render_search(ctl)

        if ctl.error:
            st.error(ctl.error)

        _render_delete_confirmation(ctl)

        if not ctl.items:
            st.info("No students found. Try adjusting your search or add a new student.")
            return

        _render_rows(ctl)
        _render_pagination(ctl, ctl.window)
        _render_export(ctl)

    except Exception as e:
        _handle_error(e, "An unexpected error occurred while rendering the student list.")
        st.exception(e)
