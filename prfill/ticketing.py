"""Ticket status sync after a PR description has been written.

Regular tickets (no parent, or Stories) move to Verify themselves and get the
solution note. Subtasks move to Verify, then the parent follows once every one
of its subtasks has reached a completion status.
"""

from rich import print as rprint

from prfill.confirm import Confirm
from prfill.models import SubtaskSummary, TicketPath, TicketSyncResult
from prfill.providers.jira import JiraClient

TARGET_STATUS = "Verify"

COMPLETION_STATUSES = frozenset({"done", "verify", "closed", "resolved", "completed"})


def is_completion_status(status: str) -> bool:
    return status.lower() in COMPLETION_STATUSES


def all_subtasks_complete(subtasks: list[SubtaskSummary] | tuple[SubtaskSummary, ...]) -> bool:
    return all(is_completion_status(s.status) for s in subtasks)


def _transition(tracker: JiraClient, key: str, confirm: Confirm) -> bool:
    if not confirm(f"Set Jira ticket {key} status to '{TARGET_STATUS}'"):
        rprint(f"[dim]⏭  Skipped setting {key} to {TARGET_STATUS}[/dim]")
        return False
    if tracker.transition_to(key, TARGET_STATUS):
        rprint(f"[green]✓[/green] Transitioned {key} to {TARGET_STATUS}")
        return True
    return False


def _offer_solution(tracker: JiraClient, key: str, pr_url: str, confirm: Confirm) -> bool:
    if not confirm(f"Update Solution/Implementation field for {key}"):
        rprint(f"[dim]⏭  Skipped updating solution field for {key}[/dim]")
        return False
    tracker.append_solution_note(key, pr_url)
    rprint(f"[green]✓[/green] Updated 'Solution / Implementation' field for {key}")
    return True


def sync_ticket(tracker: JiraClient, key: str, pr_url: str, confirm: Confirm) -> TicketSyncResult:
    """Run the status/solution sync for one ticket.

    Raises whatever the tracker raises; the caller decides how fatal that is.
    """
    record = tracker.get_issue(key)
    transitioned: list[str] = []

    if not record.is_subtask:
        if _transition(tracker, key, confirm):
            transitioned.append(key)
        updated = _offer_solution(tracker, key, pr_url, confirm)
        return TicketSyncResult(
            key=key,
            path=TicketPath.REGULAR,
            solution_target=key,
            transitioned=tuple(transitioned),
            solution_updated=updated,
        )

    parent_key = record.parent_key
    rprint(f"🔍 Ticket {key} is a subtask of {parent_key}")
    if _transition(tracker, key, confirm):
        transitioned.append(key)

    # Re-fetched so the subtask statuses include the transition above.
    parent = tracker.get_issue(parent_key)  # type: ignore[arg-type]
    for subtask in parent.subtasks:
        rprint(f"   Subtask {subtask.key} status: {subtask.status}")

    incomplete = tuple(s.key for s in parent.subtasks if not is_completion_status(s.status))
    if incomplete:
        rprint("⏳ Not all subtasks are complete yet. Parent status will not be updated.")
        return TicketSyncResult(
            key=key,
            path=TicketPath.SUBTASK,
            transitioned=tuple(transitioned),
            incomplete_subtasks=incomplete,
        )

    rprint("[green]✓[/green] All subtasks are complete.")
    if _transition(tracker, parent.key, confirm):
        transitioned.append(parent.key)
    updated = _offer_solution(tracker, parent.key, pr_url, confirm)
    return TicketSyncResult(
        key=key,
        path=TicketPath.SUBTASK,
        solution_target=parent.key,
        transitioned=tuple(transitioned),
        solution_updated=updated,
    )
