#!/usr/bin/env python3
"""Programmatic autocut example.

This demonstrates using the autocut components directly:

* load settings from `.env`
* report a recurring event against a repository
* print what autocut did about it

Run it twice in a row: the second run finds the issue the first one opened and
does nothing.
"""

from __future__ import annotations

import argparse
from typing import Sequence

from github_autocut.cutter.config import AutocutSettings
from github_autocut.cutter.dispatcher import Autocut
from github_autocut.cutter.durations import parse_duration
from github_autocut.cutter.github.client import GitHubClient
from github_autocut.cutter.logging import configure_logging


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Report an event (programmatic example).")
    parser.add_argument("--repo", required=True, help='Target repository in the form "owner/repo"')
    parser.add_argument("--title", default="Example: scheduled job failed", help="Event title")
    parser.add_argument("--details", default="Exit status 1 at step 'deploy'.", help="Details")
    parser.add_argument("--dur", default="24h", help="Age threshold, e.g. 24h")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)

    settings = AutocutSettings()
    configure_logging(settings.log_level)

    github = GitHubClient(
        token=settings.github_token,
        repository=args.repo,
        base_url=settings.github_base_url,
        timeout=settings.request_timeout_seconds,
    )
    try:
        autocut = Autocut(
            tracker=github,
            age_threshold=parse_duration(args.dur),
            label=settings.sentinel_label,
        )
        result = autocut.cut(title=args.title, details=args.details)
    finally:
        github.close()

    print(f"Disposition: {result.disposition.name}")
    print(f"URL: {result.issue_url}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
