"""Shared test fixtures."""

from collections.abc import Iterator

import pytest

import prfill.settings as settings_module
from prfill.models import PullRequestRef
from prfill.settings import PrfillSettings, TrackerConfig

ENV_VARS = (
    "GITHUB_ACCESS_TOKEN",
    "OPEN_AI_API_KEY",
    "OPENAI_BASE_URL",
    "PRFILL_MODEL",
    "JIRA_USERNAME",
    "JIRA_API_TOKEN",
    "JIRA_BASE_URL",
    "JIRA_SOLUTION_FIELD",
)

PR_URL = "https://github.com/acme/widget/pull/42"
JIRA_URL = "https://acme.atlassian.net"


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Keep the developer's environment, .env and config file out of every test."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(settings_module, "CONFIG_PATH", tmp_path / "missing.toml")
    settings_module._load_toml.cache_clear()
    yield
    settings_module._load_toml.cache_clear()


@pytest.fixture
def pr_ref() -> PullRequestRef:
    return PullRequestRef(owner="acme", repository="widget", number="42")


@pytest.fixture
def tracker() -> TrackerConfig:
    return TrackerConfig(email="dev@acme.test", api_token="jira_test", base_url=JIRA_URL)  # type: ignore[arg-type]


@pytest.fixture
def settings() -> PrfillSettings:
    return PrfillSettings(  # type: ignore[call-arg]
        github_access_token="ghp_test",
        open_ai_api_key="sk-test",
        jira_username="dev@acme.test",
        jira_api_token="jira_test",
        jira_base_url=JIRA_URL,
    )


class ScriptedConfirm:
    """Answers confirmations from a list and records what was asked."""

    def __init__(self, *answers: bool, default: bool = True) -> None:
        self.answers = list(answers)
        self.default = default
        self.asked: list[str] = []

    def __call__(self, action: str) -> bool:
        self.asked.append(action)
        return self.answers.pop(0) if self.answers else self.default
