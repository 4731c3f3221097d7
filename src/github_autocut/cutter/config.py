"""Configuration for autocut.

Configuration is loaded from:
- environment variables
- and a local `.env` file (if present)

The token is read from `AUTOCUT_GITHUB_TOKEN`, falling back to the conventional
`GITHUB_TOKEN` that CI runners already export.
"""

from __future__ import annotations

from pydantic import AliasChoices, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AutocutSettings(BaseSettings):
    """Settings for the autocut CLI.

    Environment variables:
    - AUTOCUT_GITHUB_TOKEN (or GITHUB_TOKEN)
    - GITHUB_BASE_URL                   (optional)
    - LOG_LEVEL                         (optional)
    - AUTOCUT_REQUEST_TIMEOUT_SECONDS   (optional)
    - AUTOCUT_LABEL                     (optional)
    - AUTOCUT_PROJECT / AUTOCUT_PROJECT_COLUMN (optional, both or neither)

    Notes:
        Pydantic-settings supports overriding the env file in tests via:
        `AutocutSettings(_env_file=path_to_env)`.
    """

    github_token: str = Field(
        default="",
        validation_alias=AliasChoices("AUTOCUT_GITHUB_TOKEN", "GITHUB_TOKEN"),
        description="GitHub token used for API authentication",
    )
    github_base_url: str = Field(
        default="https://api.github.com",
        validation_alias="GITHUB_BASE_URL",
        description="GitHub API base URL (useful for GitHub Enterprise)",
    )

    log_level: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Root logging level",
    )

    request_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        validation_alias="AUTOCUT_REQUEST_TIMEOUT_SECONDS",
        description="Timeout applied to every GitHub API request",
    )

    sentinel_label: str = Field(
        default="autocut",
        min_length=1,
        validation_alias="AUTOCUT_LABEL",
        description="Label marking the issues autocut manages",
    )

    project_name: str = Field(
        default="",
        validation_alias="AUTOCUT_PROJECT",
        description="Organization project new issues are added to",
    )
    project_column: str = Field(
        default="",
        validation_alias="AUTOCUT_PROJECT_COLUMN",
        description="Column of AUTOCUT_PROJECT new issues are added to",
    )

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        extra="ignore",
    )

    @model_validator(mode="after")
    def _require_github_auth(self) -> AutocutSettings:
        if not self.github_token.strip():
            raise ValueError("AUTOCUT_GITHUB_TOKEN (or GITHUB_TOKEN) is required")
        return self
