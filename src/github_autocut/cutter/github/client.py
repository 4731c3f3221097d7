"""GitHub-backed issue tracker.

Wraps PyGithub for repository issue listing/creation and a plain ``requests``
session for the REST endpoints PyGithub would need extra round-trips for
(comments and state edits by number, classic project boards).
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import UTC, datetime
from typing import Any

import requests
from github import Auth, Github, GithubException
from github.Issue import Issue
from github.Repository import Repository

from github_autocut.cutter.errors import TransportError
from github_autocut.cutter.tracker import TrackedIssue

logger = logging.getLogger(__name__)

_PER_PAGE = 100


@contextmanager
def _translate_errors(operation: str, **target: object) -> Iterator[None]:
    try:
        yield
    except (GithubException, requests.RequestException) as e:
        raise TransportError(operation, target=target) from e


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def _to_tracked_issue(issue: Issue) -> TrackedIssue:
    return TrackedIssue(
        id=issue.id,
        number=issue.number,
        url=issue.html_url,
        title=issue.title,
        state=issue.state,
        updated_at=_as_utc(issue.updated_at),
        labels=tuple(label.name for label in issue.labels),
    )


class GitHubClient:
    """Issue tracker for a single "owner/name" repository."""

    def __init__(
        self,
        *,
        token: str,
        repository: str,
        base_url: str = "https://api.github.com",
        timeout: float = 30.0,
        repo: Repository | None = None,
        github_api: Github | None = None,
    ) -> None:
        if not token:
            raise ValueError("GitHub token is required")
        if not repository.strip("/ "):
            raise ValueError("GitHub repository is required")
        if timeout <= 0:
            raise ValueError("timeout must be positive")

        self._repository_name = repository.strip("/ ")
        self._rest_base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._session = requests.Session()
        self._session.headers.update(
            {
                "Authorization": f"Bearer {token}",
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": "2022-11-28",
                "User-Agent": "github-autocut",
            }
        )

        if repo is not None:
            self._repo = repo
            self._github = None
            logger.debug("Using injected Repository instance")
            return

        auth = Auth.Token(token)
        # PyGithub retries up to 10 times unless retry=None; nothing here is retried.
        self._github = github_api or Github(
            auth=auth,
            base_url=self._rest_base_url,
            timeout=max(1, round(timeout)),
            retry=None,
        )
        with _translate_errors("connect to repository", repo=self._repository_name):
            self._repo = self._github.get_repo(self._repository_name)
        logger.info(
            "Authenticated with GitHub and connected to repository",
            extra={"repo": self._repository_name},
        )

    @property
    def repository(self) -> str:
        """Return the configured repository name ("owner/repo")."""

        return self._repository_name

    @property
    def owner(self) -> str:
        return self._repository_name.split("/", 1)[0]

    def _url(self, path: str) -> str:
        return f"{self._rest_base_url}/{path.lstrip('/')}"

    def _issues_url(self, *, issue_number: int, suffix: str = "") -> str:
        if issue_number <= 0:
            raise ValueError("issue_number must be a positive integer")
        if suffix and not suffix.startswith("/"):
            suffix = "/" + suffix
        return self._url(f"repos/{self._repository_name}/issues/{issue_number}{suffix}")

    def _iter_paginated_json_list(
        self, url: str, *, params: dict[str, Any] | None = None
    ) -> Iterator[dict[str, Any]]:
        """Yield items of a REST endpoint returning a JSON list, page by page.

        Stops after the first short page.
        """

        page = 1
        while True:
            resp = self._session.get(
                url,
                params={**(params or {}), "per_page": _PER_PAGE, "page": page},
                timeout=self._timeout,
            )
            resp.raise_for_status()
            payload = resp.json()
            if not isinstance(payload, list):
                return

            for item in payload:
                if isinstance(item, dict):
                    yield item

            if len(payload) < _PER_PAGE:
                return
            page += 1

    def list_issues(self, *, label: str, state: str = "all") -> Iterator[TrackedIssue]:
        """Yield every issue carrying ``label`` in the API's default order.

        Pages are fetched lazily as the iterator is consumed.
        """

        with _translate_errors("list issues", repo=self._repository_name, label=label):
            for issue in self._repo.get_issues(state=state, labels=[label]):
                yield _to_tracked_issue(issue)

    def create_comment(self, *, issue_number: int, body: str) -> None:
        url = self._issues_url(issue_number=issue_number, suffix="comments")
        with _translate_errors(
            "create comment", repo=self._repository_name, issue_number=issue_number
        ):
            resp = self._session.post(url, json={"body": body}, timeout=self._timeout)
            resp.raise_for_status()
        logger.info(
            "Issue commented",
            extra={"repo": self._repository_name, "issue_number": issue_number},
        )

    def set_issue_state(self, *, issue_number: int, state: str) -> None:
        url = self._issues_url(issue_number=issue_number)
        with _translate_errors(
            "set issue state",
            repo=self._repository_name,
            issue_number=issue_number,
            state=state,
        ):
            resp = self._session.patch(url, json={"state": state}, timeout=self._timeout)
            resp.raise_for_status()
        logger.info(
            "Issue state changed",
            extra={"repo": self._repository_name, "issue_number": issue_number, "state": state},
        )

    def create_issue(self, *, title: str, body: str, labels: list[str]) -> TrackedIssue:
        if not title.strip():
            raise ValueError("Issue title is required")

        with _translate_errors("create issue", repo=self._repository_name, title=title):
            issue = self._repo.create_issue(title=title, body=body, labels=labels)
            created = _to_tracked_issue(issue)
        logger.info(
            "Issue created",
            extra={
                "repo": self._repository_name,
                "issue_number": created.number,
                "labels": labels,
            },
        )
        return created

    def find_project_id(self, *, name: str) -> int | None:
        """Return the id of the owner's project called ``name``, if any."""

        url = self._url(f"orgs/{self.owner}/projects")
        with _translate_errors("list projects", owner=self.owner, project=name):
            for project in self._iter_paginated_json_list(url, params={"state": "all"}):
                if project.get("name") == name and isinstance(project.get("id"), int):
                    return int(project["id"])
        return None

    def find_column_id(self, *, project_id: int, name: str) -> int | None:
        """Return the id of the column called ``name`` in a project, if any."""

        url = self._url(f"projects/{project_id}/columns")
        with _translate_errors("list project columns", project_id=project_id, column=name):
            for column in self._iter_paginated_json_list(url):
                if column.get("name") == name and isinstance(column.get("id"), int):
                    return int(column["id"])
        return None

    def attach_issue_to_column(self, *, column_id: int, issue_id: int) -> None:
        url = self._url(f"projects/columns/{column_id}/cards")
        payload = {"content_id": issue_id, "content_type": "Issue"}
        with _translate_errors("create project card", column_id=column_id, issue_id=issue_id):
            resp = self._session.post(url, json=payload, timeout=self._timeout)
            resp.raise_for_status()

    def close(self) -> None:
        self._session.close()
        if self._github is not None:
            self._github.close()
