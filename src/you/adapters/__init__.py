"""Adapters - I/O implementations of ports."""

from .tracker_api import TrackerClient
from .openrouter import LlmClient

__all__ = [
    "TrackerClient",
    "LlmClient",
]
