"""Route parsing and settings loading."""

from __future__ import annotations

import pytest

import core.settings as settings_module
import core.ui as ui
from core.settings import DEFAULT_API_URL, load_settings
from schemas.students_schema import SortDirection
from screens.students.state import Route, parse_route


@pytest.mark.parametrize("query,expected", [
    ({}, Route()),
    ({"view": "create"}, Route("create")),
    ({"view": "EDIT", "id": "3"}, Route("edit", 3)),
    ({"view": "detail", "id": "12"}, Route("detail", 12)),
    ({"view": "detail"}, Route()),
    ({"view": "edit", "id": "abc"}, Route()),
    ({"view": "edit", "id": "0"}, Route()),
    ({"view": "admin"}, Route()),
])
def test_parse_route(query, expected) -> None:
    assert parse_route(query) == expected


def test_route_query_round_trip() -> None:
    for route in (Route(), Route("create"), Route("edit", 5), Route("detail", 9)):
        assert parse_route(route.to_query()) == route


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for name in (
        "STUDENTS_API_URL", "STUDENTS_API_TIMEOUT", "STUDENTS_PAGE_SIZE",
        "STUDENTS_SORT", "STUDENTS_SORT_DIRECTION", "STUDENTS_LOG_LEVEL",
        "STUDENTS_FOOTER_TEXT",
    ):
        monkeypatch.delenv(name, raising=False)
    # a developer .env must not refill what was just removed
    monkeypatch.setattr(settings_module, "load_dotenv", lambda *a, **kw: False)
    return monkeypatch


def test_defaults(clean_env: pytest.MonkeyPatch) -> None:
    settings = load_settings()
    assert settings.api.base_url == DEFAULT_API_URL
    assert settings.api.timeout == 10.0
    assert settings.ui.page_size == 10
    assert settings.ui.direction is SortDirection.ASC
    assert settings.log_level == "INFO"


def test_environment_overrides(clean_env: pytest.MonkeyPatch) -> None:
    clean_env.setenv("STUDENTS_API_URL", "https://school.example/api/students/")
    clean_env.setenv("STUDENTS_API_TIMEOUT", "2.5")
    clean_env.setenv("STUDENTS_PAGE_SIZE", "25")
    clean_env.setenv("STUDENTS_SORT_DIRECTION", "desc")
    clean_env.setenv("STUDENTS_LOG_LEVEL", "debug")
    settings = load_settings()
    assert settings.api.base_url == "https://school.example/api/students"
    assert settings.api.timeout == 2.5
    assert settings.ui.page_size == 25
    assert settings.ui.direction is SortDirection.DESC
    assert settings.log_level == "DEBUG"


def test_invalid_values_fall_back(clean_env: pytest.MonkeyPatch) -> None:
    clean_env.setenv("STUDENTS_PAGE_SIZE", "lots")
    clean_env.setenv("STUDENTS_API_TIMEOUT", "-1")
    clean_env.setenv("STUDENTS_SORT_DIRECTION", "sideways")
    settings = load_settings()
    assert settings.ui.page_size == 10
    assert settings.api.timeout == 10.0
    assert settings.ui.direction is SortDirection.ASC


class FakeQueryParams(dict):
    def to_dict(self) -> dict:
        return dict(self)


class FakeStreamlit:
    def __init__(self, query: dict):
        self.session_state: dict = {}
        self.query_params = FakeQueryParams(query)


def test_current_route_follows_url_changes(monkeypatch: pytest.MonkeyPatch) -> None:
    fake = FakeStreamlit({})
    monkeypatch.setattr(ui, "st", fake)
    assert ui.current_route() == Route()

    fake.session_state["students__view__list__controller"] = object()
    fake.session_state["nav_students"] = True
    fake.query_params.update({"view": "detail", "id": "7"})
    assert ui.current_route() == Route("detail", 7)
    assert fake.session_state[ui.ROUTE_KEY] == Route("detail", 7)
    assert "students__view__list__controller" not in fake.session_state
    assert fake.session_state["nav_students"] is True

    fake.session_state["students__view__detail__controller_7"] = object()
    assert ui.current_route() == Route("detail", 7)
    assert "students__view__detail__controller_7" in fake.session_state

    fake.query_params.clear()
    assert ui.current_route() == Route()
    assert "students__view__detail__controller_7" not in fake.session_state
