"""Shared workflow layer between CLI and TUI.

Each function takes already-built clients (or builds them from the
environment), performs one user action and returns the text to show.
"""

import logging
from datetime import date

from .adapters.openrouter import LlmClient
from .adapters.tracker_api import TrackerClient
from .config import Config
from .core.completions import CompletionOptions, Message
from .core.issues import ExpandField, Issue, format_issue_output
from .core.pagination import PaginationParams
from .core.planning import PLAN_SYSTEM_PROMPT, assemble_plan, compile_plan_prompt
from .core.search import SearchParams, SearchRequest
from .errors import InvalidRequestError
from .ports import IssueRepository, LLMService

logger = logging.getLogger(__name__)


def ask(
    llm: LLMService,
    prompt: str,
    temperature: float | None = None,
    max_tokens: int | None = None,
    system: str | None = None,
) -> str:
    """Send a prompt to the LLM and return the answer text."""
    logger.info("Sending request to LLM")

    if temperature is None and max_tokens is None:
        if system:
            return llm.complete_with_system(system, prompt)
        return llm.complete(prompt)

    options = CompletionOptions(temperature=temperature, max_tokens=max_tokens)
    messages = [Message.system(system)] if system else []
    messages.append(Message.user(prompt))

    content = llm.chat_completion(messages, options).content()
    if content is None:
        raise InvalidRequestError("No content in response")
    return content


def show_issue(
    tracker: IssueRepository,
    issue_id: str,
    config: Config,
    expand: list[ExpandField] | None = None,
) -> str:
    """Fetch an issue and format it for display."""
    issue = tracker.get_issue(issue_id, expand)
    logger.info(f"Issue {issue.key} status: {issue.status_display or 'unknown'}")
    return format_issue_output(issue, config.tracker_link_base)


def search(
    tracker: IssueRepository,
    request: SearchRequest,
    pagination: PaginationParams | None = None,
) -> list[Issue]:
    """Run an issue search with optional page-based pagination."""
    params = None
    if pagination:
        params = SearchParams(per_page=pagination.per_page, page=pagination.page)
    return tracker.search_issues(request, params)


# ============== Day Plan ==============


def compile_plan(tracker: IssueRepository, config: Config, as_of: date | None = None) -> str:
    """Fetch open issues and render the day-plan prompt."""
    request = SearchRequest(query=config.plan_query)
    issues = tracker.search_issues(request, SearchParams(per_page=config.plan_limit))
    issues = issues[: config.plan_limit]

    total_count = None
    if len(issues) >= config.plan_limit:
        total_count = tracker.count_issues(request)

    data = assemble_plan(issues, as_of=as_of, total_count=total_count)
    return compile_plan_prompt(data)


def generate_day_plan(
    config: Config,
    tracker: IssueRepository | None = None,
    llm: LLMService | None = None,
) -> str:
    """Compile the day-plan prompt, run the LLM, return the plan."""
    tracker = tracker or TrackerClient.from_env()
    prompt = compile_plan(tracker, config)

    llm = llm or LlmClient.from_env(config.llm_model)
    return llm.complete_with_system(PLAN_SYSTEM_PROMPT, prompt).strip()
