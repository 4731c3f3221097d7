"""Configuration for the REST server.

The server can start without a GitHub token so health checks work in any
environment. `/api/v1/cut` validates credentials at request time.
"""

from __future__ import annotations

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ServerSettings(BaseSettings):
    """Settings for the REST API.

    Notes:
        - Unlike :class:`github_autocut.cutter.config.AutocutSettings`, this does NOT
          require a GitHub token at startup.
    """

    github_token: str = Field(
        default="", validation_alias=AliasChoices("AUTOCUT_GITHUB_TOKEN", "GITHUB_TOKEN")
    )
    github_base_url: str = Field(
        default="https://api.github.com", validation_alias="GITHUB_BASE_URL"
    )
    request_timeout_seconds: float = Field(
        default=30.0, gt=0, validation_alias="AUTOCUT_REQUEST_TIMEOUT_SECONDS"
    )
    sentinel_label: str = Field(default="autocut", min_length=1, validation_alias="AUTOCUT_LABEL")

    # Defaults for requests that don't name a project/column themselves.
    project_name: str = Field(default="", validation_alias="AUTOCUT_PROJECT")
    project_column: str = Field(default="", validation_alias="AUTOCUT_PROJECT_COLUMN")

    model_config = SettingsConfigDict(env_prefix="", env_file=".env", extra="ignore")
