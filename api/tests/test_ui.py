from pathlib import Path

import pytest
from streamlit.testing.v1 import AppTest

from app.core.config import settings
from app.local.forum import LocalForum, uid

UI_SCRIPT = Path(__file__).resolve().parents[1] / "app" / "local" / "ui.py"


@pytest.fixture
def store_path(tmp_path, monkeypatch):
    path = tmp_path / "forum.json"
    monkeypatch.setattr(settings, "local_store_path", str(path))
    return path


@pytest.fixture
def app_test(store_path):
    return AppTest.from_file(str(UI_SCRIPT), default_timeout=30)


def button(at, label):
    matches = [b for b in at.button if b.label == label]
    assert matches, f"no button labelled {label!r}"
    return matches[0]


def has_button(at, label):
    return any(b.label == label for b in at.button)


def test_guest_sees_disabled_mutations(app_test):
    at = app_test.run()
    assert not at.exception
    assert button(at, "Ask a question").disabled
    assert button(at, "New topic").disabled
    assert any("guest" in c.value for c in at.sidebar.caption)


def test_register_signs_in(app_test, store_path):
    at = app_test
    at.session_state["view"] = "auth"
    at.run()

    at.text_input(key="reg_username").input("carol")
    at.text_input(key="reg_password").input("password1")
    at.text_input(key="reg_password2").input("password1")
    button(at, "Create account").click()
    at.run()

    assert not at.exception
    assert LocalForum.open(str(store_path)).current_identity().username == "carol"
    assert any("carol" in m.value for m in at.sidebar.markdown)
    assert not button(at, "Ask a question").disabled


def test_login_with_wrong_password_shows_error(app_test):
    at = app_test
    at.session_state["view"] = "auth"
    at.run()

    at.text_input(key="login_username").input("demo")
    at.text_input(key="login_password").input("wrong-password")
    button(at, "Sign in").click()
    at.run()

    assert not at.exception
    assert any("Invalid credentials" in t.value for t in at.toast)
    assert at.session_state["view"] == "auth"


def test_login_with_demo_account(app_test, store_path):
    at = app_test
    at.session_state["view"] = "auth"
    at.run()

    at.text_input(key="login_username").input("DEMO")
    at.text_input(key="login_password").input("demo1234")
    button(at, "Sign in").click()
    at.run()

    assert not at.exception
    assert at.session_state["view"] == "home"
    assert LocalForum.open(str(store_path)).current_identity().username == "demo"


def test_onboarding_close_lasts_for_the_session_only(app_test, store_path):
    at = app_test.run()
    button(at, "Close").click()
    at.run()

    assert not has_button(at, "Close")
    assert LocalForum.open(str(store_path)).onboarding_hidden() is False


def test_onboarding_dont_show_again_persists(app_test, store_path):
    at = app_test.run()
    at.checkbox(key="onboarding_dont_show").check()
    button(at, "Close").click()
    at.run()

    assert not has_button(at, "Close")
    assert LocalForum.open(str(store_path)).onboarding_hidden() is True


@pytest.mark.parametrize("view, params", [
    ("topic_editor", {"topic_id": "t_missing"}),
    ("question", {"question_id": "q_missing"}),
])
def test_missing_records_return_home(app_test, view, params):
    at = app_test
    at.session_state["view"] = view
    at.session_state["params"] = params
    at.run()

    assert not at.exception
    assert at.session_state["view"] == "home"
    assert has_button(at, "New topic")


def test_topic_markup_is_escaped(app_test, store_path):
    forum = LocalForum.open(str(store_path))
    forum.topics.append({
        "id": uid("t"),
        "title": "<img src=x onerror=alert(1)>",
        "color": "red'><script>alert(1)</script>",
        "created_at": "2024-01-01T00:00:00+00:00",
    })
    forum.save()

    at = app_test.run()
    assert not at.exception
    topic_rows = [m.value for m in at.markdown if "●" in m.value]
    hostile = [row for row in topic_rows if "onerror" in row]
    assert len(hostile) == 1
    assert "<img" not in hostile[0]
    assert "&lt;img" in hostile[0]
    assert "<script>" not in hostile[0]
    assert f"color:{settings.default_topic_color}" in hostile[0]
