"""JSON-lines logging for the CLI and the server.

One object per line on stdout: ``timestamp``, ``level``, ``logger``, ``message``,
any ``extra=`` fields nested under ``extra``, plus ``exception``/``stack`` when set.
"""

from __future__ import annotations

import json
import logging
import sys
from collections.abc import Mapping
from datetime import UTC, datetime
from typing import IO, Any

# Anything a bare LogRecord carries is not an `extra` field.
_RECORD_FIELDS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}

_NOISY_LOGGERS = ("github", "urllib3")


def _extra_fields(record: logging.LogRecord) -> dict[str, Any]:
    return {
        key: value
        for key, value in vars(record).items()
        if key not in _RECORD_FIELDS and not key.startswith("_")
    }


class JsonFormatter(logging.Formatter):
    """Render a record as a single JSON line.

    ``static_fields`` are merged into every line (e.g. ``{"app": "github-autocut"}``).
    Values json can't encode are rendered with ``str()``.
    """

    def __init__(self, static_fields: Mapping[str, Any] | None = None) -> None:
        super().__init__()
        self._static_fields = dict(static_fields or {})

    def format(self, record: logging.LogRecord) -> str:  # noqa: A003 (record)
        created = datetime.fromtimestamp(record.created, tz=UTC)
        payload: dict[str, Any] = {
            **self._static_fields,
            "timestamp": created.isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if extra := _extra_fields(record):
            payload["extra"] = extra
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        if record.stack_info:
            payload["stack"] = self.formatStack(record.stack_info)

        return json.dumps(payload, ensure_ascii=False, default=str)


def configure_logging(level: str, *, stream: IO[str] | None = None) -> None:
    """Send all logging through one JSON handler at ``level``.

    Replaces whatever handlers the root logger had. PyGithub and urllib3 never log
    below INFO.
    """

    handler = logging.StreamHandler(stream=stream or sys.stdout)
    handler.setFormatter(JsonFormatter({"app": "github-autocut"}))
    logging.basicConfig(level=level.upper(), handlers=[handler], force=True)

    floor = max(logging.getLogger().level, logging.INFO)
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(floor)
