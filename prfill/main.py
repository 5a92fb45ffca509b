"""prfill CLI: fill a pull request description from its diff."""

import logging
from importlib.metadata import PackageNotFoundError, version
from typing import Annotated

import typer
from rich import print as rprint
from rich.logging import RichHandler
from rich.markup import escape

from prfill.confirm import auto_confirm, console_confirm
from prfill.errors import MalformedReference, MissingCredential, PrfillError
from prfill.pipeline import run_pipeline
from prfill.refs import parse_pull_request_url
from prfill.settings import get_settings

app = typer.Typer(help="Fill a GitHub pull request description from its diff using OpenAI.", add_completion=False)


def _version() -> str:
    try:
        return version("prfill")
    except PackageNotFoundError:
        return "dev"


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(show_path=False)],
        force=True,
    )
    # httpx logs every request at INFO; ours already does at DEBUG.
    logging.getLogger("httpx").setLevel(logging.WARNING)


def _positional_url(extra_args: list[str]) -> str | None:
    """First token that is not a flag. Kept for `prfill <url>` invocations."""
    return next((arg for arg in extra_args if not arg.startswith("-")), None)


@app.command(context_settings={"allow_extra_args": True, "ignore_unknown_options": True})
def fill(
    ctx: typer.Context,
    url: Annotated[
        str | None,
        typer.Option("--url", "-u", help="Pull request URL (also accepted positionally)"),
    ] = None,
    model: Annotated[
        str | None,
        typer.Option("--model", "-m", help="Completion model (default: PRFILL_MODEL or gpt-4.1)"),
    ] = None,
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Confirm every Jira update without asking")] = False,
    no_ticket: Annotated[bool, typer.Option("--no-ticket", help="Skip the Jira ticket sync")] = False,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log HTTP calls")] = False,
) -> None:
    """Generate a PR description from the diff and write it back to GitHub.

    Usage: prfill https://github.com/<owner>/<repo>/pull/<number>
    """
    _configure_logging(verbose)
    rprint(f"🙏 Welcome to prfill! (v{_version()})")

    pr_url = url or _positional_url(ctx.args)
    if not pr_url:
        pr_url = typer.prompt("🔗 Please enter the URL of the pull request", default="", show_default=False).strip()
        if not pr_url:
            rprint("[red]✗[/red] No URL provided.")
            raise typer.Exit(1)

    try:
        parse_pull_request_url(pr_url)
    except MalformedReference:
        rprint("[yellow]Warning:[/yellow] Invalid URL format. Please provide a valid GitHub pull request URL.")
        raise typer.Exit(1)

    settings = get_settings()
    try:
        result = run_pipeline(
            pr_url,
            settings=settings,
            model=model or settings.default_model,
            confirm=auto_confirm if yes else console_confirm,
            sync_tickets=not no_ticket,
        )
    except MissingCredential as exc:
        rprint(f"[red]✗[/red] 🔑 {exc.name} environment variable not set. Exiting.")
        raise typer.Exit(1)
    except PrfillError as exc:
        rprint(f"[red]✗[/red] {escape(str(exc))}")
        raise typer.Exit(1)

    if result.ticket is not None:
        rprint(f"[dim]Jira {result.ticket.key}: {result.ticket.outcome}[/dim]")
    rprint(f"🔗 PR URL: {result.pr_url}")
