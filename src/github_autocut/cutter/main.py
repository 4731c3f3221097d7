"""CLI entrypoint: cut a new GitHub issue automatically, or update an existing one."""

from __future__ import annotations

import argparse
import logging
import sys

from pydantic import ValidationError

from github_autocut import __version__
from github_autocut.cutter.config import AutocutSettings
from github_autocut.cutter.dispatcher import Autocut, ProjectTarget
from github_autocut.cutter.durations import parse_duration
from github_autocut.cutter.errors import InvalidInputError, NotFoundError
from github_autocut.cutter.github.client import GitHubClient
from github_autocut.cutter.logging import configure_logging

logger = logging.getLogger(__name__)


def _parse_labels(value: str | None) -> list[str]:
    if value is None:
        return []
    return [p.strip() for p in value.split(",") if p.strip()]


def _require(value: str, what: str) -> str:
    if not value.strip():
        raise InvalidInputError(f"Need {what}")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="autocut",
        description="Cuts a new GitHub issue automatically, or updates an existing one.",
    )
    parser.add_argument("--version", action="version", version=f"github-autocut {__version__}")
    parser.add_argument("--owner", required=True, help="Owner of the repo")
    parser.add_argument("--repo", required=True, help="Name of the repo")
    parser.add_argument("--title", required=True, help="Title of the issue")
    parser.add_argument("--details", required=True, help="Details of the event")
    parser.add_argument(
        "--dur",
        "--age-threshold",
        dest="age_threshold",
        required=True,
        help="Age threshold separating recent from stale issues, e.g. '24h' or '1h30m'",
    )
    parser.add_argument(
        "--labels",
        default=None,
        help="Custom labels for new issues, separated by commas",
    )
    parser.add_argument(
        "--project",
        default=None,
        help="Organization project to add new issues to (overrides AUTOCUT_PROJECT)",
    )
    parser.add_argument(
        "--column",
        default=None,
        help="Project column to add new issues to (overrides AUTOCUT_PROJECT_COLUMN)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        owner = _require(args.owner, "an issue repo owner").strip()
        repo = _require(args.repo, "an issue repo name").strip()
        title = _require(args.title, "an issue title")
        details = _require(args.details, "issue details")
        age_threshold = parse_duration(args.age_threshold)
    except InvalidInputError as e:
        print(f"Error: {e}", file=sys.stderr)
        print(file=sys.stderr)
        parser.print_usage(sys.stderr)
        return 2

    try:
        settings = AutocutSettings()
    except ValidationError as e:
        # Logging isn't configured yet; keep it simple and actionable.
        print("Configuration error (check your environment or .env):", file=sys.stderr)
        print(e, file=sys.stderr)
        return 2

    configure_logging(settings.log_level)

    project = ProjectTarget.from_names(
        args.project if args.project is not None else settings.project_name,
        args.column if args.column is not None else settings.project_column,
    )

    try:
        github = GitHubClient(
            token=settings.github_token,
            repository=f"{owner}/{repo}",
            base_url=settings.github_base_url,
            timeout=settings.request_timeout_seconds,
        )
        try:
            autocut = Autocut(
                tracker=github,
                age_threshold=age_threshold,
                label=settings.sentinel_label,
                project=project,
            )
            result = autocut.cut(
                title=title, details=details, custom_labels=_parse_labels(args.labels)
            )
        finally:
            github.close()

    except InvalidInputError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    except NotFoundError as e:
        logger.error(str(e), extra={"kind": e.kind, "missing": e.name})
        print(f"Error: {e}", file=sys.stderr)
        return 3

    except Exception:
        logger.exception("Autocut failed")
        return 1

    print(result)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
