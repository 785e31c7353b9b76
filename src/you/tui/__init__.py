"""Terminal UI."""

from .app import run_tui

__all__ = ["run_tui"]
