"""Shared pydantic models: the contract between providers, pipeline and main.py."""

from enum import Enum

from pydantic import BaseModel, ConfigDict


class PullRequestRef(BaseModel):
    model_config = ConfigDict(frozen=True)

    owner: str
    repository: str
    number: str  # kept as text, exactly as it appeared in the URL

    @property
    def api_path(self) -> str:
        return f"/repos/{self.owner}/{self.repository}/pulls/{self.number}"

    @property
    def html_url(self) -> str:
        return f"https://github.com/{self.owner}/{self.repository}/pull/{self.number}"


class PullRequestContent(BaseModel):
    """What the completion prompt is built from. Fetched fresh on every run."""

    model_config = ConfigDict(frozen=True)

    template_body: str = ""
    diff_text: str


class SubtaskSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: str
    status: str


class TicketRecord(BaseModel):
    """Read-only snapshot of a tracker issue."""

    model_config = ConfigDict(frozen=True)

    key: str
    status: str
    issue_type: str
    parent_key: str | None = None
    subtasks: tuple[SubtaskSummary, ...] = ()

    @property
    def is_subtask(self) -> bool:
        # Stories can have a parent (an epic) but are still worked on directly.
        return self.parent_key is not None and self.issue_type.lower() != "story"


class Transition(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    target_status: str


class TicketPath(str, Enum):
    REGULAR = "regular"
    SUBTASK = "subtask"


class TicketSyncResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: str
    path: TicketPath
    solution_target: str | None = None  # ticket the solution note was offered on
    transitioned: tuple[str, ...] = ()  # keys moved to the target status
    solution_updated: bool = False
    incomplete_subtasks: tuple[str, ...] = ()

    @property
    def outcome(self) -> str:
        return "updated" if self.transitioned or self.solution_updated else "skipped"


class PipelineResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    pr_url: str
    description: str
    ticket_key: str | None = None
    ticket: TicketSyncResult | None = None
    warnings: tuple[str, ...] = ()
