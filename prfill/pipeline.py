"""The fill pipeline: diff + template -> completion -> PR body -> optional ticket sync."""

import logging

from pydantic import SecretStr
from rich import print as rprint
from rich.markup import escape

from prfill.confirm import Confirm
from prfill.errors import MissingCredential
from prfill.models import PipelineResult, PullRequestContent, TicketSyncResult
from prfill.providers.github import GitHubClient
from prfill.providers.jira import JiraClient
from prfill.providers.openai import CompletionClient
from prfill.refs import extract_ticket_id, parse_pull_request_url
from prfill.settings import PrfillSettings, missing_tracker_settings, tracker_config
from prfill.ticketing import sync_ticket

logger = logging.getLogger(__name__)


def _require(secret: SecretStr | None, name: str) -> str:
    if not secret:
        raise MissingCredential(name)
    return secret.get_secret_value()


def run_pipeline(
    pr_url: str,
    *,
    settings: PrfillSettings,
    model: str,
    confirm: Confirm,
    sync_tickets: bool = True,
) -> PipelineResult:
    """Fill the PR description, then sync the linked ticket on a best-effort basis.

    Every step up to and including the description write is fatal: errors
    propagate and nothing after them runs. The ticket step never raises; its
    failures come back in ``PipelineResult.warnings``.
    """
    ref = parse_pull_request_url(pr_url)
    github_token = _require(settings.github_access_token, "GITHUB_ACCESS_TOKEN")
    openai_key = _require(settings.open_ai_api_key, "OPEN_AI_API_KEY")

    github = GitHubClient(github_token)
    diff = github.fetch_diff(ref)
    rprint("[green]✓[/green] Fetched diff content")

    # A failure here aborts the run even though an empty template is valid input.
    template = github.fetch_description(ref)
    rprint("[green]✓[/green] Fetched PR body")
    content = PullRequestContent(template_body=template, diff_text=diff)

    rprint(f"🤖 Generating new PR body using {model}. This may take a moment...")
    completion = CompletionClient(openai_key, base_url=settings.openai_base_url)
    description = completion.generate_description(content.template_body, content.diff_text, model)

    github.update_description(ref, description)
    rprint("[green]✓[/green] Updated PR body on GitHub")

    if not sync_tickets:
        return PipelineResult(pr_url=pr_url, description=description)

    warnings: list[str] = []
    ticket_key: str | None = None
    ticket: TicketSyncResult | None = None
    try:
        config = tracker_config(settings)
        if config is None:
            missing = ", ".join(missing_tracker_settings(settings))
            warnings.append(f"Jira sync skipped: {missing} not set")
        else:
            ticket_key = extract_ticket_id(github.fetch_head_branch(ref))
            if ticket_key is None:
                rprint("[dim]No Jira ticket id in the head branch name; nothing to sync.[/dim]")
            else:
                rprint(f"🎫 Found Jira ticket {ticket_key}")
                ticket = sync_ticket(JiraClient(config), ticket_key, pr_url, confirm)
    except Exception as exc:
        # The PR body is already written; ticket problems must not undo or block it.
        logger.debug("Ticket sync failed", exc_info=True)
        warnings.append(f"Jira sync failed: {exc}")

    for warning in warnings:
        rprint(f"[yellow]Warning:[/yellow] {escape(warning)}")

    return PipelineResult(
        pr_url=pr_url,
        description=description,
        ticket_key=ticket_key,
        ticket=ticket,
        warnings=tuple(warnings),
    )
