"""Classify the prior autocut issue (if any) that matches an event title.

Assuming a threshold of one day:

- an open issue updated within the day is left alone
- an open issue untouched for longer gets an informative comment
- a closed issue updated within the day is re-opened
- a closed issue untouched for longer is abandoned and a fresh one is filed
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from enum import Enum

from github_autocut.cutter.tracker import ISSUE_STATE_CLOSED, ISSUE_STATE_OPEN, TrackedIssue


class Classification(str, Enum):
    RECENT_OPEN = "recent_open"
    STALE_OPEN = "stale_open"
    RECENT_CLOSED = "recent_closed"
    NO_MATCH = "no_match"


@dataclass(frozen=True, slots=True)
class MatchResult:
    classification: Classification
    issue: TrackedIssue | None = None
    age: timedelta | None = None

    def __post_init__(self) -> None:
        attached = self.issue is not None and self.age is not None
        detached = self.issue is None and self.age is None
        if self.classification is Classification.NO_MATCH:
            if not detached:
                raise ValueError("NO_MATCH must not carry an issue")
        elif not attached:
            raise ValueError(f"{self.classification.value} requires an issue and its age")


NO_MATCH = MatchResult(Classification.NO_MATCH)


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def classify(
    issues: Iterable[TrackedIssue],
    *,
    title: str,
    age_threshold: timedelta,
    now: datetime,
) -> MatchResult:
    """Return the classification decided by the first issue titled exactly ``title``.

    Issues are scanned in the order given and iteration stops at the first
    decision, so a lazy source is only consumed as far as needed.
    """

    now = _as_utc(now)
    for issue in issues:
        if issue.title != title:
            continue

        age = now - _as_utc(issue.updated_at)
        recent = age < age_threshold

        if issue.state == ISSUE_STATE_OPEN:
            if recent:
                return MatchResult(Classification.RECENT_OPEN, issue, age)
            return MatchResult(Classification.STALE_OPEN, issue, age)

        if issue.state == ISSUE_STATE_CLOSED:
            if recent:
                return MatchResult(Classification.RECENT_CLOSED, issue, age)
            # Closed long ago: file a new issue and leave this one untouched.
            return NO_MATCH

    return NO_MATCH
