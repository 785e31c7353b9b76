"""Ports - interfaces/protocols for external dependencies."""

from .issue_repo import IssueRepository
from .llm_service import LLMService

__all__ = [
    "IssueRepository",
    "LLMService",
]
