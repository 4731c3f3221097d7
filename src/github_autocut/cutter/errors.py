"""Error taxonomy for autocut.

Every tracker failure surfaces as a :class:`TransportError` carrying the operation
name and the identifiers it targeted. Nothing here is retried.
"""

from __future__ import annotations


class AutocutError(Exception):
    """Base class for errors raised by autocut."""


class TransportError(AutocutError):
    """The issue tracker was unreachable or rejected a request."""

    def __init__(self, operation: str, *, target: dict[str, object] | None = None) -> None:
        self.operation = operation
        self.target = dict(target or {})
        super().__init__(operation)

    def __str__(self) -> str:
        where = ", ".join(f"{key}={value!r}" for key, value in self.target.items())
        message = f"{self.operation} failed"
        if where:
            message = f"{message} ({where})"
        if self.__cause__ is not None:
            message = f"{message}: {self.__cause__}"
        return message


class NotFoundError(AutocutError):
    """A named project or project column does not exist."""

    def __init__(self, kind: str, name: str, *, scope: str = "") -> None:
        self.kind = kind
        self.name = name
        self.scope = scope
        super().__init__(kind, name)

    def __str__(self) -> str:
        if self.scope:
            return f"{self.kind} {self.name!r} in {self.scope} not found"
        return f"{self.kind} {self.name!r} not found"


class InvalidInputError(AutocutError, ValueError):
    """Caller supplied a malformed threshold or an empty required field."""
