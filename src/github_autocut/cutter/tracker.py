"""The issue-tracker seam: what the dispatcher reads and which writes it may issue."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import datetime
from typing import Protocol

ISSUE_STATE_OPEN = "open"
ISSUE_STATE_CLOSED = "closed"


@dataclass(frozen=True, slots=True)
class TrackedIssue:
    """Read-only view of an issue as the tracker reported it."""

    id: int
    number: int
    url: str
    title: str
    state: str
    updated_at: datetime
    labels: tuple[str, ...] = field(default=())


class IssueTracker(Protocol):
    """Issue source and action executor for a single repository.

    Every method either succeeds or raises. Implementations translate transport
    failures into :class:`github_autocut.cutter.errors.TransportError`.
    """

    @property
    def repository(self) -> str: ...

    def list_issues(self, *, label: str, state: str = "all") -> Iterator[TrackedIssue]: ...

    def create_comment(self, *, issue_number: int, body: str) -> None: ...

    def set_issue_state(self, *, issue_number: int, state: str) -> None: ...

    def create_issue(self, *, title: str, body: str, labels: list[str]) -> TrackedIssue: ...

    def find_project_id(self, *, name: str) -> int | None: ...

    def find_column_id(self, *, project_id: int, name: str) -> int | None: ...

    def attach_issue_to_column(self, *, column_id: int, issue_id: int) -> None: ...
