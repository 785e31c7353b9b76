"""Functional core - request/response records and pure logic with no I/O."""

from .issues import Issue, ExpandField, format_issue_output
from .completions import (
    ChatCompletionResponse,
    Choice,
    CompletionOptions,
    Message,
    Role,
    Usage,
)
from .pagination import PaginationMeta, PaginationParams
from .search import SearchParams, SearchRequest
from .planning import PlanData, assemble_plan, compile_plan_prompt

__all__ = [
    # Issues
    "Issue",
    "ExpandField",
    "format_issue_output",
    # Completions
    "ChatCompletionResponse",
    "Choice",
    "CompletionOptions",
    "Message",
    "Role",
    "Usage",
    # Pagination / search
    "PaginationMeta",
    "PaginationParams",
    "SearchParams",
    "SearchRequest",
    # Planning
    "PlanData",
    "assemble_plan",
    "compile_plan_prompt",
]
