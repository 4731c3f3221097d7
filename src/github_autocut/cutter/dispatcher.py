"""Dispatch one deduplicated issue action per event.

A single ``cut`` lists the sentinel-labelled issues once, classifies the first
title match and performs at most one of: nothing, comment, reopen + comment,
create (+ project card). Any tracker failure propagates immediately; no partial
result is ever returned.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from enum import Enum
from typing import assert_never

from github_autocut.cutter.durations import format_duration
from github_autocut.cutter.errors import InvalidInputError, NotFoundError
from github_autocut.cutter.matcher import Classification, classify
from github_autocut.cutter.tracker import ISSUE_STATE_OPEN, IssueTracker, TrackedIssue

logger = logging.getLogger(__name__)

DEFAULT_LABEL = "autocut"

STALE_COMMENT_TEMPLATE = (
    "It's been {age} since the last update (which is more than the threshold of "
    "{threshold}), and the problem is still happening.\n\nUpdate:\n\n{details}"
)
REOPEN_COMMENT_TEMPLATE = (
    "Only {age} has passed (less than the threshold of {threshold}), and the problem "
    "is happening again.\n\nUpdate:\n\n{details}"
)


class Disposition(str, Enum):
    IGNORED_RECENTLY_UPDATED = "found a recently updated issue, so did nothing"
    UPDATED_STALE = "updated a stale issue"
    REOPENED_RECENT = "re-opened a recently closed issue"
    OPENED_NEW = "opened a new issue"


@dataclass(frozen=True, slots=True)
class CutResult:
    disposition: Disposition
    issue_url: str

    def __str__(self) -> str:
        return f"{self.disposition.value}: {self.issue_url}"


@dataclass(frozen=True, slots=True)
class ProjectTarget:
    """Project board column new issues are attached to."""

    project_name: str
    column_name: str

    @classmethod
    def from_names(cls, project_name: str | None, column_name: str | None) -> ProjectTarget | None:
        project = (project_name or "").strip()
        column = (column_name or "").strip()
        if not project or not column:
            return None
        return cls(project_name=project, column_name=column)


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


def _merge_labels(label: str, custom_labels: Sequence[str] | None) -> list[str]:
    merged: list[str] = []
    for name in (label, *(custom_labels or ())):
        normalized = name.strip()
        if normalized and normalized not in merged:
            merged.append(normalized)
    return merged


class Autocut:
    """Cuts a new issue for an event, or updates the one already tracking it."""

    def __init__(
        self,
        *,
        tracker: IssueTracker,
        age_threshold: timedelta,
        label: str = DEFAULT_LABEL,
        project: ProjectTarget | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        if age_threshold < timedelta(0):
            raise InvalidInputError("age threshold must not be negative")
        if not label.strip():
            raise InvalidInputError("sentinel label is required")

        self._tracker = tracker
        self._age_threshold = age_threshold
        self._label = label.strip()
        self._project = project
        self._clock = clock

    @property
    def age_threshold(self) -> timedelta:
        return self._age_threshold

    @property
    def label(self) -> str:
        return self._label

    def cut(
        self,
        *,
        title: str,
        details: str,
        custom_labels: Sequence[str] | None = None,
    ) -> CutResult:
        if not title.strip():
            raise InvalidInputError("Need an issue title")
        if not details.strip():
            raise InvalidInputError("Need issue details")

        issues = self._tracker.list_issues(label=self._label, state="all")
        match = classify(issues, title=title, age_threshold=self._age_threshold, now=self._clock())
        classification = match.classification

        if classification is Classification.NO_MATCH:
            created = self._create(title=title, body=details, custom_labels=custom_labels)
            return self._done(Disposition.OPENED_NEW, created)

        assert match.issue is not None and match.age is not None
        matched = match.issue

        if classification is Classification.RECENT_OPEN:
            return self._done(Disposition.IGNORED_RECENTLY_UPDATED, matched)

        if classification is Classification.STALE_OPEN:
            body = self._message(STALE_COMMENT_TEMPLATE, age=match.age, details=details)
            self._tracker.create_comment(issue_number=matched.number, body=body)
            return self._done(Disposition.UPDATED_STALE, matched)

        if classification is Classification.RECENT_CLOSED:
            self._tracker.set_issue_state(issue_number=matched.number, state=ISSUE_STATE_OPEN)
            body = self._message(REOPEN_COMMENT_TEMPLATE, age=match.age, details=details)
            self._tracker.create_comment(issue_number=matched.number, body=body)
            return self._done(Disposition.REOPENED_RECENT, matched)

        assert_never(classification)

    def _message(self, template: str, *, age: timedelta, details: str) -> str:
        whole_seconds = timedelta(seconds=int(age.total_seconds()))
        return template.format(
            age=format_duration(whole_seconds),
            threshold=format_duration(self._age_threshold),
            details=details,
        )

    def _create(
        self, *, title: str, body: str, custom_labels: Sequence[str] | None
    ) -> TrackedIssue:
        labels = _merge_labels(self._label, custom_labels)
        issue = self._tracker.create_issue(title=title, body=body, labels=labels)
        if self._project is not None:
            self._attach_to_project(issue, self._project)
        return issue

    def _attach_to_project(self, issue: TrackedIssue, project: ProjectTarget) -> None:
        project_id = self._tracker.find_project_id(name=project.project_name)
        if project_id is None:
            raise NotFoundError("project", project.project_name)

        column_id = self._tracker.find_column_id(project_id=project_id, name=project.column_name)
        if column_id is None:
            raise NotFoundError(
                "column", project.column_name, scope=f"project {project.project_name!r}"
            )

        self._tracker.attach_issue_to_column(column_id=column_id, issue_id=issue.id)
        logger.info(
            "Issue attached to project column",
            extra={
                "repo": self._tracker.repository,
                "issue_number": issue.number,
                "project": project.project_name,
                "column": project.column_name,
            },
        )

    def _done(self, disposition: Disposition, issue: TrackedIssue) -> CutResult:
        logger.info(
            "Autocut finished",
            extra={
                "repo": self._tracker.repository,
                "issue_number": issue.number,
                "disposition": disposition.name,
            },
        )
        return CutResult(disposition=disposition, issue_url=issue.url)
