"""Settings resolution: init args > environment > .env > ~/.config/prfill/config.toml > defaults."""

from functools import lru_cache
from pathlib import Path
from typing import Any

import tomlkit
from pydantic import BaseModel, ConfigDict, Field, SecretStr
from pydantic.fields import FieldInfo
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

CONFIG_PATH = Path.home() / ".config" / "prfill" / "config.toml"

DEFAULT_MODEL = "gpt-4.1"


@lru_cache(maxsize=1)
def _load_toml() -> dict[str, Any]:
    """Load ~/.config/prfill/config.toml, returning an empty mapping if missing."""
    if not CONFIG_PATH.exists():
        return {}
    with CONFIG_PATH.open() as fh:
        return tomlkit.load(fh).unwrap()


class _TomlConfigSource(PydanticBaseSettingsSource):
    def get_field_value(self, field: FieldInfo, field_name: str) -> tuple[Any, str, bool]:
        return None, field_name, False

    def __call__(self) -> dict[str, Any]:
        fields = self.settings_cls.model_fields
        # Keyed by alias so an environment value for the same field wins.
        return {fields[k].alias or k: v for k, v in _load_toml().items() if k in fields}


class PrfillSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Pull request host
    github_access_token: SecretStr | None = Field(default=None, alias="GITHUB_ACCESS_TOKEN")

    # Completion API
    open_ai_api_key: SecretStr | None = Field(default=None, alias="OPEN_AI_API_KEY")
    openai_base_url: str = Field(default="https://api.openai.com/v1", alias="OPENAI_BASE_URL")
    default_model: str = Field(default=DEFAULT_MODEL, alias="PRFILL_MODEL")

    # Issue tracker (optional)
    jira_username: str | None = Field(default=None, alias="JIRA_USERNAME")
    jira_api_token: SecretStr | None = Field(default=None, alias="JIRA_API_TOKEN")
    jira_base_url: str | None = Field(default=None, alias="JIRA_BASE_URL")
    jira_solution_field: str = Field(default="customfield_13015", alias="JIRA_SOLUTION_FIELD")

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return init_settings, env_settings, dotenv_settings, _TomlConfigSource(settings_cls)


class TrackerConfig(BaseModel):
    """Everything the ticket client needs, resolved up front."""

    model_config = ConfigDict(frozen=True)

    email: str
    api_token: SecretStr
    base_url: str
    solution_field: str = "customfield_13015"


def get_settings() -> PrfillSettings:
    return PrfillSettings()


def missing_tracker_settings(settings: PrfillSettings) -> list[str]:
    missing = []
    if not settings.jira_username:
        missing.append("JIRA_USERNAME")
    if not settings.jira_api_token:
        missing.append("JIRA_API_TOKEN")
    if not settings.jira_base_url:
        missing.append("JIRA_BASE_URL")
    return missing


def tracker_config(settings: PrfillSettings) -> TrackerConfig | None:
    """Return the tracker credentials, or None when any of them is absent."""
    if missing_tracker_settings(settings):
        return None
    return TrackerConfig(
        email=settings.jira_username,  # type: ignore[arg-type]
        api_token=settings.jira_api_token,  # type: ignore[arg-type]
        base_url=settings.jira_base_url.rstrip("/"),  # type: ignore[union-attr]
        solution_field=settings.jira_solution_field,
    )
