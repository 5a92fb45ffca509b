"""GitHub REST API v3 client for pull requests."""

from prfill.errors import UpstreamError
from prfill.models import PullRequestRef
from prfill.providers.base import ApiClient

BASE_URL = "https://api.github.com"

DIFF_MEDIA_TYPE = "application/vnd.github.diff"
JSON_MEDIA_TYPE = "application/vnd.github+json"


class GitHubClient(ApiClient):
    base_url = BASE_URL

    def __init__(self, token: str) -> None:
        super().__init__(
            {
                "Authorization": f"Bearer {token}",
                "Accept": JSON_MEDIA_TYPE,
                "X-GitHub-Api-Version": "2022-11-28",
            }
        )

    def _pull_request(self, ref: PullRequestRef, what: str) -> dict:
        return self._get_json(ref.api_path, what)

    def fetch_diff(self, ref: PullRequestRef) -> str:
        response = self._request("GET", ref.api_path, "fetch PR diff", headers={"Accept": DIFF_MEDIA_TYPE})
        if not response.text:
            raise UpstreamError(response.status_code, "Failed to fetch PR diff: empty response body")
        return response.text

    def fetch_description(self, ref: PullRequestRef) -> str:
        """Return the PR body, or "" when the PR has none."""
        node = self._pull_request(ref, "fetch PR body")
        return node.get("body") or ""

    def update_description(self, ref: PullRequestRef, body: str) -> None:
        self._request("PATCH", ref.api_path, "update PR body", json={"body": body})

    def fetch_head_branch(self, ref: PullRequestRef) -> str:
        node = self._pull_request(ref, "fetch PR head branch")
        head = node.get("head") or {}
        branch = head.get("ref")
        if not branch:
            raise UpstreamError(None, "Failed to fetch PR head branch: response has no head.ref")
        return branch
