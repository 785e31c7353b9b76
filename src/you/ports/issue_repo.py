"""Issue repository interface."""

from typing import Protocol

from you.core.issues import ExpandField, Issue
from you.core.search import SearchParams, SearchRequest


class IssueRepository(Protocol):
    """Interface for fetching issues from any tracker backend."""

    def get_issue(self, issue_id: str, expand: list[ExpandField] | None = None) -> Issue:
        """Fetch one issue by key or id."""
        ...

    def search_issues(self, request: SearchRequest, params: SearchParams | None = None) -> list[Issue]:
        """Search issues."""
        ...

    def count_issues(self, request: SearchRequest) -> int:
        """Count issues matching a search."""
        ...
