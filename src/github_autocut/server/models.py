"""Pydantic models for the REST server."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from github_autocut.cutter.dispatcher import CutResult


class CutRequest(BaseModel):
    owner: str = Field(min_length=1)
    repo: str = Field(min_length=1)
    title: str = Field(min_length=1)
    details: str = Field(min_length=1)
    age_threshold: str = Field(description="Duration such as '24h' or '1h30m'")
    labels: list[str] = Field(default_factory=list)
    project: str | None = None
    column: str | None = None

    @field_validator("owner", "repo")
    @classmethod
    def _strip_repository_part(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise ValueError("must not be blank")
        return stripped

    @field_validator("title", "details")
    @classmethod
    def _reject_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value


class CutResponse(BaseModel):
    disposition: str
    message: str
    issue_url: str

    @classmethod
    def from_result(cls, result: CutResult) -> CutResponse:
        return cls(
            disposition=result.disposition.name,
            message=result.disposition.value,
            issue_url=result.issue_url,
        )
