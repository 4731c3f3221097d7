"""FastAPI server adapter for github-autocut.

Design intent:
- Keep business logic in `github_autocut.cutter.*`
- Keep server-specific concerns (routing, HTTP status mapping) here
"""

from __future__ import annotations

__all__ = ["create_app"]

from github_autocut.server.app import create_app
