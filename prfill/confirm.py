"""Confirmation prompts gating every tracker write."""

from collections.abc import Callable

import typer
from rich import print as rprint

# confirm("Set ENG-1 status to 'Verify'") -> True to go ahead, False to skip
Confirm = Callable[[str], bool]

_RULE = "━" * 40


def console_confirm(action: str) -> bool:
    """Ask on the terminal. ENTER continues; 's' or 'skip' skips."""
    rprint("")
    rprint(_RULE)
    rprint(f"⚡ About to: {action}")
    rprint(_RULE)
    answer = typer.prompt("Press ENTER to continue, or type 's' to skip", default="", show_default=False)
    return answer.strip().lower() not in ("s", "skip")


def auto_confirm(action: str) -> bool:
    rprint(f"[dim]⚡ {action} (--yes)[/dim]")
    return True
