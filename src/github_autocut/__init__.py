"""github-autocut.

Files deduplicated GitHub issues for recurring events:
- ignore an event when its issue was updated recently
- comment on a stale open issue
- re-open a recently closed issue
- otherwise open a new one
"""

__version__ = "0.1.0"

from github_autocut.cutter.dispatcher import Autocut, CutResult, Disposition, ProjectTarget

__all__ = ["__version__", "Autocut", "CutResult", "Disposition", "ProjectTarget"]
