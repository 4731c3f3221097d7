"""Unit tests for the JSON log formatter."""

from __future__ import annotations

import io
import json
import logging
import sys
from datetime import timedelta

from github_autocut.cutter.logging import JsonFormatter, configure_logging


def _record(**extra: object) -> logging.LogRecord:
    record = logging.LogRecord(
        name="github_autocut.cutter.dispatcher",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="Autocut finished",
        args=None,
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formatter_nests_extra_fields() -> None:
    line = JsonFormatter().format(_record(repo="o/r", issue_number=3, _private="hidden"))
    payload = json.loads(line)

    assert payload["level"] == "INFO"
    assert payload["logger"] == "github_autocut.cutter.dispatcher"
    assert payload["message"] == "Autocut finished"
    assert payload["extra"] == {"repo": "o/r", "issue_number": 3}


def test_formatter_omits_empty_extra() -> None:
    payload = json.loads(JsonFormatter().format(_record()))

    assert "extra" not in payload


def test_formatter_merges_static_fields_and_stringifies_values() -> None:
    formatter = JsonFormatter({"app": "github-autocut"})
    payload = json.loads(formatter.format(_record(threshold=timedelta(hours=1))))

    assert payload["app"] == "github-autocut"
    assert payload["extra"] == {"threshold": "1:00:00"}


def test_formatter_includes_exception() -> None:
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        record = _record()
        record.exc_info = sys.exc_info()

    payload = json.loads(JsonFormatter().format(record))

    assert "RuntimeError: boom" in payload["exception"]


def test_configure_logging_writes_json_lines() -> None:
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    github_logger = logging.getLogger("github")
    saved_github_level = github_logger.level
    stream = io.StringIO()
    try:
        configure_logging("debug", stream=stream)
        logging.getLogger("github_autocut.test").info("hello", extra={"repo": "o/r"})

        assert root.level == logging.DEBUG
        assert github_logger.level == logging.INFO
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)
        github_logger.setLevel(saved_github_level)

    payload = json.loads(stream.getvalue().splitlines()[-1])
    assert payload["message"] == "hello"
    assert payload["extra"] == {"repo": "o/r"}
    assert payload["app"] == "github-autocut"
