"""prompt_toolkit front end for the TUI state in screens.py."""

import logging

from prompt_toolkit import Application
from prompt_toolkit.data_structures import Point
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.keys import Keys
from prompt_toolkit.layout import HSplit, Layout, Window
from prompt_toolkit.layout.controls import FormattedTextControl
from prompt_toolkit.widgets import Frame

from ..adapters.openrouter import LlmClient
from ..adapters.tracker_api import TrackerClient
from ..config import Config
from ..workflows import ask, show_issue
from .screens import BACKSPACE, ENTER, ESCAPE, App, LlmScreen, ScreenId, TrackerScreen

logger = logging.getLogger(__name__)


class LazyClients:
    """Build each client on first use so a missing token only fails that screen."""

    def __init__(self, config: Config):
        self.config = config
        self._tracker: TrackerClient | None = None
        self._llm: LlmClient | None = None

    def tracker(self) -> TrackerClient:
        if self._tracker is None:
            self._tracker = TrackerClient.from_env()
        return self._tracker

    def llm(self) -> LlmClient:
        if self._llm is None:
            self._llm = LlmClient.from_env(self.config.llm_model)
        return self._llm


def build_app(config: Config) -> App:
    """Wire the screens to the tracker/LLM workflows."""
    clients = LazyClients(config)
    return App(
        {
            ScreenId.TRACKER: TrackerScreen(lambda key: show_issue(clients.tracker(), key, config)),
            ScreenId.LLM: LlmScreen(lambda prompt: ask(clients.llm(), prompt)),
        }
    )


def build_application(app: App) -> Application:
    """Header / output / input layout with keys routed into `app`."""
    kb = KeyBindings()

    @kb.add("c-c")
    def _quit(event):
        event.app.exit()

    @kb.add("escape", eager=True)
    def _escape(event):
        app.handle_key(ESCAPE)

    @kb.add("enter")
    def _enter(event):
        app.handle_key(ENTER)

    @kb.add("backspace")
    def _backspace(event):
        app.handle_key(BACKSPACE)

    @kb.add(Keys.Any)
    def _char(event):
        if app.handle_key(event.data):
            event.app.exit()

    def output_cursor() -> Point:
        # Keep the newest output in view
        return Point(0, app.current.output_text().count("\n"))

    header = Window(FormattedTextControl(app.header_text), height=1)
    output = Window(
        FormattedTextControl(lambda: app.current.output_text(), get_cursor_position=output_cursor),
        wrap_lines=True,
    )
    prompt = Window(FormattedTextControl(app.input_text), height=1)

    root = HSplit(
        [
            Frame(header, title="Status"),
            Frame(output, title="Output"),
            Frame(prompt, title=lambda: app.current.input_title),
        ]
    )
    return Application(layout=Layout(root), key_bindings=kb, full_screen=True)


def run_tui(config: Config) -> None:
    """Run the TUI until the user quits."""
    logger.info("Starting TUI")
    application = build_application(build_app(config))
    application.run()
    logger.info("TUI stopped")
