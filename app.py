# app.py
"""Streamlit entry point: `streamlit run app.py`."""

from __future__ import annotations

import logging

import streamlit as st

from core.ui import current_route, get_settings, render_footer_global, render_navbar
from screens.students import detail as student_detail
from screens.students import form as student_form
from screens.students import page as student_list


def main() -> None:
    st.set_page_config(page_title="Student Management", page_icon="🎓", layout="wide")

    settings = get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    render_navbar()

    route = current_route()
    if route.view == "create":
        student_form.render(settings=settings)
    elif route.view == "edit":
        student_form.render(route.student_id, settings=settings)
    elif route.view == "detail":
        student_detail.render(route.student_id, settings=settings)
    else:
        student_list.render(settings=settings)

    render_footer_global(settings)


main()
