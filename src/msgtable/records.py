"""Token model for MSG documents.

A document is a sequence of physical lines, each one of:
    {<index>}{<secondary>}{<value>}   an entry, optionally followed by a comment
    # text  or  // text               a comment
    (spaces only)                     a break

Example:
    # Map 0, Global, base 10
    {10}{}{Global map}

Field texts keep the type of the input (str or bytes) so that the lexer
never has to decide on an encoding.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Generic, Iterator, List, Optional, TypeVar, Union

Text = TypeVar("Text", str, bytes)


@dataclass(frozen=True)
class Entry(Generic[Text]):
    index: int
    secondary: Text
    value: Text
    comment: Optional[Text] = None


@dataclass(frozen=True)
class Comment(Generic[Text]):
    text: Text


@dataclass(frozen=True)
class Break:
    pass


BREAK = Break()

Line = Union[Entry, Comment, Break]


@dataclass
class Document:
    """Lines of one parsed input, in source order."""
    lines: List[Line] = field(default_factory=list)

    def entries(self) -> Iterator[Entry]:
        for line in self.lines:
            if isinstance(line, Entry):
                yield line


def _display(text: Union[str, bytes]) -> str:
    if isinstance(text, bytes):
        return text.decode("utf-8", errors="backslashreplace")
    return text


def render_entry(e: Entry) -> str:
    """Render an Entry back to its line form (comment as ``#``)."""
    out = f"{{{e.index}}}{{{_display(e.secondary)}}}{{{_display(e.value)}}}"
    if e.comment is not None:
        out += f" # {_display(e.comment)}"
    return out
