"""you - personal work CLI over an issue tracker and an LLM."""

__version__ = "0.1.0"
