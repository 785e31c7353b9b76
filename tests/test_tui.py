"""Tests for TUI state and key dispatch."""

from unittest.mock import MagicMock, patch

import pytest

from you.config import Config
from you.errors import ConfigError, NotFoundError
from you.tui.app import build_app
from you.tui.screens import (
    BACKSPACE,
    ENTER,
    ESCAPE,
    MAX_OUTPUT_ENTRIES,
    App,
    LlmScreen,
    ScreenId,
    TrackerScreen,
)


def type_text(app: App, text: str) -> None:
    for ch in text:
        app.handle_key(ch)


@pytest.fixture
def tracker_runner():
    return MagicMock(return_value="Issue: TEST-1")


@pytest.fixture
def llm_runner():
    return MagicMock(return_value="Hi!")


@pytest.fixture
def app(tracker_runner, llm_runner):
    return App({ScreenId.TRACKER: TrackerScreen(tracker_runner), ScreenId.LLM: LlmScreen(llm_runner)})


class TestMenu:
    def test_starts_on_menu(self, app):
        assert app.active is None
        assert app.current.title == "Menu"
        assert "Press 1 for Tracker" in app.current.output_text()

    def test_select_screens(self, app):
        app.handle_key("1")
        assert app.active == ScreenId.TRACKER
        app.handle_key(ESCAPE)
        app.handle_key("2")
        assert app.active == ScreenId.LLM

    def test_q_quits_from_menu(self, app):
        assert app.handle_key("q") is True

    def test_other_keys_ignored(self, app):
        assert app.handle_key("x") is False
        assert app.active is None


class TestScreen:
    def test_activation_message(self, app):
        app.handle_key("1")
        assert app.current.output == ["Tracker mode activated"]

    def test_typing_and_backspace(self, app):
        app.handle_key("1")
        type_text(app, "TEST-12")
        app.handle_key(BACKSPACE)
        assert app.input_text() == "TEST-1"

    def test_q_is_typed_on_screen(self, app):
        app.handle_key("2")
        assert app.handle_key("q") is False
        assert app.input_text() == "q"

    def test_submit_tracker(self, app, tracker_runner):
        app.handle_key("1")
        type_text(app, " TEST-1 ")
        app.handle_key(ENTER)

        tracker_runner.assert_called_once_with("TEST-1")
        assert app.current.output[-2:] == ["> tracker issue TEST-1", "Issue: TEST-1"]
        assert app.input_text() == ""

    def test_submit_llm(self, app, llm_runner):
        app.handle_key("2")
        type_text(app, "Hello")
        app.handle_key(ENTER)

        llm_runner.assert_called_once_with("Hello")
        assert app.current.output[-2:] == ["> llm ask Hello", "Hi!"]

    def test_blank_submit_ignored(self, app, llm_runner):
        app.handle_key("2")
        type_text(app, "   ")
        app.handle_key(ENTER)
        llm_runner.assert_not_called()
        assert app.current.output == ["LLM mode activated"]

    def test_error_shown_and_app_keeps_running(self, app, tracker_runner):
        tracker_runner.side_effect = NotFoundError("Issue not found", "Tracker")
        app.handle_key("1")
        type_text(app, "NOPE-1")

        assert app.handle_key(ENTER) is False
        assert app.current.output[-1] == "Tracker error: Tracker: resource not found: Issue not found"

    def test_unexpected_error_shown(self, app, tracker_runner):
        tracker_runner.side_effect = UnicodeEncodeError("latin-1", "tokenя", 5, 6, "ordinal not in range(256)")
        app.handle_key("1")
        type_text(app, "A-1")

        assert app.handle_key(ENTER) is False
        assert app.current.output[-1].startswith("Tracker error: 'latin-1' codec can't encode")

    def test_escape_keeps_screen_state(self, app):
        app.handle_key("2")
        type_text(app, "draft")
        app.handle_key(ESCAPE)
        assert app.active is None
        app.handle_key("2")
        assert app.input_text() == "draft"

    def test_output_capped(self, llm_runner):
        screen = LlmScreen(llm_runner)
        for i in range(MAX_OUTPUT_ENTRIES + 50):
            screen.push_output(str(i))
        assert len(screen.output) == MAX_OUTPUT_ENTRIES
        assert screen.output[-1] == str(MAX_OUTPUT_ENTRIES + 49)

    def test_header_shows_mode(self, app):
        app.handle_key("2")
        assert "Mode: LLM" in app.header_text()


class TestBuildApp:
    @patch("you.tui.app.TrackerClient")
    def test_tracker_client_built_once(self, mock_cls):
        mock_cls.from_env.return_value.get_issue.return_value = MagicMock(
            key="A-1", summary="s", status_display=None, description=None
        )
        app = build_app(Config())
        screen = app.screens[ScreenId.TRACKER]

        screen.submit("A-1")
        screen.submit("A-1")

        mock_cls.from_env.assert_called_once_with()
        assert screen.output[-1].startswith("Issue: A-1")

    def test_non_latin1_token_shown_as_error(self, clean_env):
        clean_env.setenv("TRACKER_OAUTH_TOKEN", "tokenя")
        screen = build_app(Config()).screens[ScreenId.TRACKER]

        screen.submit("A-1")

        assert screen.output[-1].startswith("Tracker error: TRACKER_OAUTH_TOKEN contains characters")

    @patch("you.tui.app.LlmClient")
    def test_missing_token_shown_as_error(self, mock_cls):
        mock_cls.from_env.side_effect = ConfigError("OPEN_ROUTER_TOKEN environment variable not set")
        app = build_app(Config(llm_model="openai/gpt-4o"))
        screen = app.screens[ScreenId.LLM]

        screen.submit("Hello")

        mock_cls.from_env.assert_called_once_with("openai/gpt-4o")
        assert screen.output[-1] == "LLM error: OPEN_ROUTER_TOKEN environment variable not set"
