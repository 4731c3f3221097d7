"""Test configuration and fixtures."""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from unittest.mock import Mock

import pytest

from github_autocut.cutter.github.client import GitHubClient
from github_autocut.cutter.tracker import TrackedIssue

NOW = datetime(2025, 1, 1, 12, 0, tzinfo=UTC)
REPOSITORY = "octo-org/octo-repo"


@pytest.fixture
def now() -> datetime:
    """Fixed evaluation instant shared by matcher and dispatcher tests."""
    return NOW


@pytest.fixture
def make_issue() -> Callable[..., TrackedIssue]:
    """Build a TrackedIssue last updated ``age`` before NOW."""

    def _make(
        *,
        number: int = 1,
        title: str = "X",
        state: str = "open",
        age: timedelta = timedelta(minutes=30),
        labels: tuple[str, ...] = ("autocut",),
    ) -> TrackedIssue:
        return TrackedIssue(
            id=1000 + number,
            number=number,
            url=f"https://github.com/{REPOSITORY}/issues/{number}",
            title=title,
            state=state,
            updated_at=NOW - age,
            labels=labels,
        )

    return _make


@pytest.fixture
def mock_github() -> Mock:
    """A GitHubClient double with no issues and no side effects."""
    github = Mock(spec=GitHubClient)
    github.repository = REPOSITORY
    github.list_issues.return_value = iter([])
    return github
