"""Unit tests for the autocut CLI (tracker mocked out)."""

from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path
from unittest.mock import Mock

import pytest

import github_autocut.cutter.main as main_module
from github_autocut.cutter.errors import TransportError
from github_autocut.cutter.github.client import GitHubClient
from github_autocut.cutter.main import main
from github_autocut.cutter.tracker import TrackedIssue

NEW_ISSUE = TrackedIssue(
    id=555,
    number=99,
    url="https://github.com/octo-org/octo-repo/issues/99",
    title="Nightly build failed",
    state="open",
    updated_at=datetime(2025, 1, 1, tzinfo=UTC),
)

BASE_ARGS = [
    "--owner",
    "octo-org",
    "--repo",
    "octo-repo",
    "--title",
    "Nightly build failed",
    "--details",
    "exit code 2",
    "--dur",
    "24h",
]


@pytest.fixture
def github(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Mock:
    for name in (
        "AUTOCUT_GITHUB_TOKEN",
        "GITHUB_TOKEN",
        "AUTOCUT_PROJECT",
        "AUTOCUT_PROJECT_COLUMN",
        "AUTOCUT_LABEL",
        "AUTOCUT_REQUEST_TIMEOUT_SECONDS",
        "GITHUB_BASE_URL",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("AUTOCUT_GITHUB_TOKEN", "test-token")
    monkeypatch.setattr(main_module, "configure_logging", lambda _level: None)

    mock_github = Mock(spec=GitHubClient)
    mock_github.repository = "octo-org/octo-repo"
    mock_github.list_issues.return_value = iter([])
    mock_github.create_issue.return_value = NEW_ISSUE

    monkeypatch.setattr(main_module, "GitHubClient", Mock(return_value=mock_github))
    return mock_github


def test_opens_new_issue_and_prints_result(
    github: Mock, capsys: pytest.CaptureFixture[str]
) -> None:
    exit_code = main([*BASE_ARGS, "--labels", "ci, nightly"])

    assert exit_code == 0
    out = capsys.readouterr().out
    assert "opened a new issue: https://github.com/octo-org/octo-repo/issues/99" in out

    main_module.GitHubClient.assert_called_once_with(
        token="test-token",
        repository="octo-org/octo-repo",
        base_url="https://api.github.com",
        timeout=30.0,
    )
    github.create_issue.assert_called_once_with(
        title="Nightly build failed", body="exit code 2", labels=["autocut", "ci", "nightly"]
    )
    github.close.assert_called_once()


def test_project_flags_attach_new_issue(github: Mock) -> None:
    github.find_project_id.return_value = 1
    github.find_column_id.return_value = 2

    exit_code = main([*BASE_ARGS, "--project", "Ops", "--column", "Triage"])

    assert exit_code == 0
    github.attach_issue_to_column.assert_called_once_with(column_id=2, issue_id=555)


def test_project_from_settings(github: Mock, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("AUTOCUT_PROJECT", "Ops")
    monkeypatch.setenv("AUTOCUT_PROJECT_COLUMN", "Triage")
    github.find_project_id.return_value = 1
    github.find_column_id.return_value = 2

    assert main(BASE_ARGS) == 0
    github.find_project_id.assert_called_once_with(name="Ops")


def test_invalid_duration_exits_2_without_calling_github(
    github: Mock, capsys: pytest.CaptureFixture[str]
) -> None:
    args = [*BASE_ARGS[:-1], "soon"]

    assert main(args) == 2
    assert "invalid duration" in capsys.readouterr().err
    main_module.GitHubClient.assert_not_called()


def test_blank_title_exits_2(github: Mock) -> None:
    args = list(BASE_ARGS)
    args[args.index("--title") + 1] = "   "

    assert main(args) == 2
    main_module.GitHubClient.assert_not_called()


def test_missing_token_exits_2(
    github: Mock, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.delenv("AUTOCUT_GITHUB_TOKEN")

    assert main(BASE_ARGS) == 2
    assert "Configuration error" in capsys.readouterr().err


def test_missing_project_exits_3(github: Mock) -> None:
    github.find_project_id.return_value = None

    assert main([*BASE_ARGS, "--project", "Ops", "--column", "Triage"]) == 3
    github.close.assert_called_once()


def test_transport_failure_exits_1(github: Mock) -> None:
    github.list_issues.side_effect = TransportError("list issues")

    assert main(BASE_ARGS) == 1
    github.close.assert_called_once()


def test_required_flags(github: Mock) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["--owner", "octo-org"])

    assert excinfo.value.code == 2
