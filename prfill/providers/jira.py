"""Jira Cloud REST API v3 client: issues, transitions and the solution field."""

import logging

from rich import print as rprint
from rich.markup import escape

from prfill.adf import Document, solution_note
from prfill.models import SubtaskSummary, TicketRecord, Transition
from prfill.providers.base import ApiClient
from prfill.settings import TrackerConfig

logger = logging.getLogger(__name__)


class JiraClient(ApiClient):
    def __init__(self, config: TrackerConfig) -> None:
        super().__init__(
            {"Accept": "application/json"},
            auth=(config.email, config.api_token.get_secret_value()),
        )
        self.base_url = config.base_url
        self._solution_field = config.solution_field

    def _record_from_node(self, node: dict) -> TicketRecord:
        fields = node.get("fields") or {}
        parent = fields.get("parent") or {}
        subtasks = [
            SubtaskSummary(key=s["key"], status=((s.get("fields") or {}).get("status") or {}).get("name", ""))
            for s in fields.get("subtasks") or []
        ]
        return TicketRecord(
            key=node["key"],
            status=(fields.get("status") or {}).get("name", ""),
            issue_type=(fields.get("issuetype") or {}).get("name", ""),
            parent_key=parent.get("key"),
            subtasks=tuple(subtasks),
        )

    def get_issue(self, key: str) -> TicketRecord:
        node = self._get_json(f"/rest/api/3/issue/{key}", f"fetch Jira issue {key}")
        return self._record_from_node(node)

    def list_transitions(self, key: str) -> list[Transition]:
        data = self._get_json(f"/rest/api/3/issue/{key}/transitions", f"fetch transitions for {key}")
        return [Transition(id=str(t["id"]), target_status=t["to"]["name"]) for t in data.get("transitions", [])]

    def transition_to(self, key: str, target_status: str) -> bool:
        """Move key to target_status.

        Returns False, after printing the reachable statuses, when no transition
        leads to target_status. That is a no-op rather than an error.
        """
        transitions = self.list_transitions(key)
        match = next((t for t in transitions if t.target_status.lower() == target_status.lower()), None)
        if match is None:
            rprint(f"[yellow]Warning:[/yellow] No transition to '{escape(target_status)}' found for {key}. Available:")
            for t in transitions:
                rprint(f"   - {escape(t.target_status)}")
            logger.info("No '%s' transition for %s", target_status, key)
            return False

        self._request(
            "POST",
            f"/rest/api/3/issue/{key}/transitions",
            f"transition {key} to {target_status}",
            json={"transition": {"id": match.id}},
        )
        return True

    def get_solution_document(self, key: str) -> Document:
        data = self._get_json(
            f"/rest/api/3/issue/{key}",
            f"fetch solution field for {key}",
            params={"fields": self._solution_field},
        )
        return Document.from_adf((data.get("fields") or {}).get(self._solution_field))

    def put_solution_document(self, key: str, document: Document) -> None:
        self._request(
            "PUT",
            f"/rest/api/3/issue/{key}",
            f"update solution field for {key}",
            json={"fields": {self._solution_field: document.to_adf()}},
        )

    def append_solution_note(self, key: str, pr_url: str) -> Document:
        """Append a "See <PR>'s description" paragraph to the solution field and return the written document."""
        document = self.get_solution_document(key).append(solution_note(pr_url))
        self.put_solution_document(key, document)
        return document
