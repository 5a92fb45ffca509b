"""Parse pull request URLs and ticket ids out of branch names."""

import re
from urllib.parse import urlsplit

from prfill.errors import MalformedReference
from prfill.models import PullRequestRef

HOST = "github.com"

_TICKET_RE = re.compile(r"[A-Z]+-[0-9]+")


def parse_pull_request_url(url: str) -> PullRequestRef:
    """Split https://github.com/<owner>/<repo>/pull/<number> into its parts.

    Trailing path segments (``/files``, ``/commits``) and query strings are
    tolerated; anything else raises MalformedReference.
    """
    cleaned = url.strip()
    split = urlsplit(cleaned)
    if split.scheme not in ("https", "http") or split.netloc.lower() != HOST:
        raise MalformedReference(f"Not a {HOST} pull request URL: {url!r}")

    # "https://github.com/o/r/pull/1".split("/") -> ["https:", "", "github.com", "o", "r", "pull", "1"]
    parts = f"{split.scheme}://{split.netloc}{split.path}".rstrip("/").split("/")
    if len(parts) < 7:
        raise MalformedReference(f"Pull request URL is missing segments: {url!r}")

    owner, repo, kind, number = parts[3], parts[4], parts[5], parts[6]
    if not owner or not repo or kind != "pull" or not number.isdigit():
        raise MalformedReference(f"Invalid pull request URL: {url!r}")
    return PullRequestRef(owner=owner, repository=repo, number=number)


def extract_ticket_id(branch_name: str) -> str | None:
    """Return the first ENG-123 style key in branch_name, or None."""
    match = _TICKET_RE.search(branch_name)
    return match.group(0) if match else None
