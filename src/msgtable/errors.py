"""Errors raised while reading MSG files."""

from __future__ import annotations

from .records import Entry, render_entry


class MsgError(Exception):
    """Base error for this package."""


class MsgIoError(MsgError):
    """Raised when an MSG file cannot be read."""


class ConverterError(MsgError):
    """Raised when a line converter cannot be built."""


class ParseError(MsgError):
    """Raised when the input does not follow the MSG grammar.

    ``line`` and ``column`` are 1-based; ``trailing`` holds up to 20
    characters of the input at the failure point.
    """

    def __init__(self, message: str, line: int = 0, column: int = 0, trailing: str = ""):
        if line:
            message = f"line {line}, column {column}: {message}"
        if trailing:
            message = f"{message}: {trailing!r}"
        super().__init__(message)
        self.line = line
        self.column = column
        self.trailing = trailing


class MalformedEntryError(MsgError):
    """Raised when an entry carries a non-empty secondary field."""

    def __init__(self, entry: Entry):
        super().__init__(f"non-empty secondary field in entry: {render_entry(entry)}")
        self.entry = entry
