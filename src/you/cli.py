"""you CLI - issue tracker and LLM from the terminal."""

import json
import logging
import sys
from dataclasses import asdict, replace

import click

from . import workflows
from .adapters import LlmClient, TrackerClient
from .config import LOG_DIR, Config, load_config
from .core.issues import ExpandField, Issue
from .core.pagination import PaginationParams
from .core.search import SearchRequest
from .errors import YouError

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _fail(e: YouError):
    click.echo(f"Error: {e}", err=True)
    sys.exit(1)


def _issue_json(issue: Issue) -> dict:
    return asdict(issue)


@click.group()
@click.version_option()
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx, debug: bool):
    """you - issue tracker and LLM assistant."""
    config = load_config()
    ctx.obj = config

    # The TUI owns the terminal, so it logs to a file instead (see `tui`)
    if ctx.invoked_subcommand != "tui":
        logging.basicConfig(
            format=LOG_FORMAT,
            level=logging.DEBUG if debug else config.log_level,
        )
    elif debug:
        config.log_level = "DEBUG"


# ============== LLM ==============


@main.group()
def llm():
    """Talk to the LLM."""
    pass


@llm.command()
@click.argument("prompt")
@click.option("--model", "-m", default=None, help="Model id (default from you.conf)")
@click.option("--temperature", "-t", type=float, default=None, help="Sampling temperature")
@click.option("--max-tokens", type=int, default=None, help="Maximum tokens to generate")
@click.option("--system", "-s", "system_prompt", default=None, help="System prompt")
@click.pass_obj
def ask(
    config: Config,
    prompt: str,
    model: str | None,
    temperature: float | None,
    max_tokens: int | None,
    system_prompt: str | None,
):
    """Send PROMPT to the LLM and print the answer."""
    try:
        client = LlmClient.from_env(model or config.llm_model)
        answer = workflows.ask(
            client,
            prompt,
            temperature=temperature,
            max_tokens=max_tokens,
            system=system_prompt,
        )
    except YouError as e:
        _fail(e)

    click.echo(answer)


# ============== Tracker ==============


@main.group()
def tracker():
    """Read issues from the tracker."""
    pass


@tracker.command()
@click.argument("key")
@click.option(
    "--expand",
    "-e",
    multiple=True,
    type=click.Choice([f.value for f in ExpandField]),
    help="Extra fields to include (repeatable)",
)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_obj
def issue(config: Config, key: str, expand: tuple[str, ...], as_json: bool):
    """Show a single issue by KEY."""
    fields = [ExpandField(e) for e in expand] or None
    try:
        client = TrackerClient.from_env()
        if as_json:
            click.echo(json.dumps(_issue_json(client.get_issue(key, fields)), indent=2, ensure_ascii=False))
            return
        output = workflows.show_issue(client, key, config, fields)
    except YouError as e:
        _fail(e)

    click.echo(output)


@tracker.command()
@click.option("--query", "-q", default=None, help="Query language string")
@click.option("--queue", default=None, help="Queue key")
@click.option("--key", "keys", multiple=True, help="Issue key (repeatable)")
@click.option("--order", default=None, help="Sort order, e.g. -updatedAt")
@click.option("--per-page", type=int, default=50, show_default=True)
@click.option("--page", type=int, default=1, show_default=True)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_obj
def search(
    config: Config,
    query: str | None,
    queue: str | None,
    keys: tuple[str, ...],
    order: str | None,
    per_page: int,
    page: int,
    as_json: bool,
):
    """Search issues by query, queue or key list."""
    if not (query or queue or keys):
        click.echo("Error: one of --query, --queue or --key is required", err=True)
        sys.exit(1)

    request = SearchRequest(query=query, queue=queue, keys=list(keys) or None, order=order)
    try:
        client = TrackerClient.from_env()
        issues = workflows.search(client, request, PaginationParams(per_page=per_page, page=page))
    except YouError as e:
        _fail(e)

    if as_json:
        click.echo(json.dumps([_issue_json(i) for i in issues], indent=2, ensure_ascii=False))
        return

    if not issues:
        click.echo("No issues found.")
        return

    link_base = config.tracker_link_base.rstrip("/")
    for i in issues:
        status = i.status_display or "Unknown"
        click.echo(f"{i.key:14} [{status}] {i.summary}")
        click.echo(f"{'':14} {link_base}/{i.key}")


# ============== Plan ==============


@main.command()
@click.option("--query", "-q", default=None, help="Override PLAN_QUERY from you.conf")
@click.option("--model", "-m", default=None, help="Override LLM_MODEL from you.conf")
@click.pass_obj
def plan(config: Config, query: str | None, model: str | None):
    """Generate a plan for today from open issues."""
    if query:
        config = replace(config, plan_query=query)
    if model:
        config = replace(config, llm_model=model)

    try:
        output = workflows.generate_day_plan(config)
    except YouError as e:
        _fail(e)

    click.echo(output)


# ============== TUI ==============


@main.command()
@click.pass_obj
def tui(config: Config):
    """Interactive terminal UI."""
    from .tui import run_tui

    LOG_DIR.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        filename=LOG_DIR / "you.log",
        format=LOG_FORMAT,
        level=config.log_level,
    )

    run_tui(config)


if __name__ == "__main__":
    main()
