"""TUI view state: menu, input screens and the key dispatch between them.

Nothing here touches the terminal, so the whole keypress -> state flow is
testable with plain strings as keys ("enter", "escape", "backspace" or a
single character).
"""

import logging
from collections.abc import Callable
from enum import Enum

from ..errors import YouError

logger = logging.getLogger(__name__)

MAX_OUTPUT_ENTRIES = 200

ENTER = "enter"
ESCAPE = "escape"
BACKSPACE = "backspace"


class ScreenId(Enum):
    TRACKER = "tracker"
    LLM = "llm"


class Menu:
    """Two-entry start menu."""

    title = "Menu"
    input_title = "Menu: 1 - Tracker, 2 - LLM, q - quit"

    KEYS = {"1": ScreenId.TRACKER, "2": ScreenId.LLM}

    def handle_key(self, key: str) -> ScreenId | None:
        return self.KEYS.get(key)

    def output_text(self) -> str:
        return "\n\n".join(
            [
                "Welcome to you TUI",
                "Press 1 for Tracker, 2 for LLM, q to quit",
            ]
        )


class Screen:
    """
    Single-line input plus an output history.

    Enter submits the trimmed input to `runner`; the command preview and the
    result (or the error text) are appended to the history.
    """

    title = ""
    input_title = ""
    command = ""
    error_label = ""

    def __init__(self, runner: Callable[[str], str]):
        self.runner = runner
        self.input = ""
        self.output: list[str] = [f"{self.title} mode activated"]

    def handle_key(self, key: str) -> str | None:
        """Edit the input. Returns the submitted text on Enter, else None."""
        if key == BACKSPACE:
            self.input = self.input[:-1]
        elif key == ENTER:
            submitted = self.input.strip()
            if not submitted:
                return None
            self.input = ""
            return submitted
        elif len(key) == 1 and key.isprintable():
            self.input += key
        return None

    def push_output(self, text: str) -> None:
        self.output.append(text)
        if len(self.output) > MAX_OUTPUT_ENTRIES:
            del self.output[: len(self.output) - MAX_OUTPUT_ENTRIES]

    def output_text(self) -> str:
        return "\n\n".join(self.output)

    def command_preview(self, text: str) -> str:
        return f"> {self.command} {text}"

    def execute(self, text: str) -> str:
        """Run one call to completion. Failures come back as text."""
        try:
            return self.runner(text)
        except YouError as e:
            logger.warning(f"{self.title} call failed: {e}")
            return f"{self.error_label}: {e}"
        except Exception as e:
            logger.exception(f"Unexpected {self.title} failure")
            return f"{self.error_label}: {e}"

    def submit(self, text: str) -> None:
        self.push_output(self.command_preview(text))
        self.push_output(self.execute(text))


class TrackerScreen(Screen):
    title = "Tracker"
    input_title = "Tracker: enter an issue key and press Enter"
    command = "tracker issue"
    error_label = "Tracker error"


class LlmScreen(Screen):
    title = "LLM"
    input_title = "LLM: enter a prompt and press Enter"
    command = "llm ask"
    error_label = "LLM error"


class App:
    """Active-view state machine: the menu or one of the screens."""

    def __init__(self, screens: dict[ScreenId, Screen]):
        self.menu = Menu()
        self.screens = screens
        self.active: ScreenId | None = None

    @property
    def current(self) -> Menu | Screen:
        return self.menu if self.active is None else self.screens[self.active]

    def handle_key(self, key: str) -> bool:
        """Dispatch a keypress. Returns True when the app should exit."""
        if key == ESCAPE:
            self.active = None
            return False

        if self.active is None:
            if key == "q":
                return True
            self.active = self.menu.handle_key(key)
            return False

        screen = self.screens[self.active]
        submitted = screen.handle_key(key)
        if submitted is not None:
            screen.submit(submitted)
        return False

    def header_text(self) -> str:
        return f"you tui | Mode: {self.current.title} | q: quit (menu) | Ctrl+C: quit | Esc: menu"

    def input_text(self) -> str:
        return "" if self.active is None else self.screens[self.active].input
