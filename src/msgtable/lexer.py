"""Tokenizer for MSG documents.

Line kinds are tried in order: comment, entry, break. Trying an alternative
is free until an entry's opening ``{`` has been consumed; from that point on
the line can only be an entry, so any mismatch raises ParseError at the spot
where it happened instead of falling back to a break line.
"""

from __future__ import annotations
from typing import Optional, Union

from .grammar import (
    U32_MAX,
    Scanner,
    delimited_field,
    line_break,
    rest_of_line,
    space0,
    tag,
    unsigned_int,
)
from .records import BREAK, Comment, Document, Entry, Line


def parse_comment(sc: Scanner):
    """Parse ``*SP ("#" / "//") text`` and return the text, or None."""
    start = sc.pos
    space0(sc)
    if not (tag(sc, "#") or tag(sc, "//")):
        sc.pos = start
        return None
    space0(sc)
    return rest_of_line(sc)


def _field(sc: Scanner, name: str):
    if not sc.startswith("{"):
        raise sc.error(f"expected '{{' opening the {name} field")
    text = delimited_field(sc)
    if text is None:
        raise sc.error(f"unterminated {name} field")
    return text


def parse_entry(sc: Scanner) -> Optional[Entry]:
    """Parse ``{index}{secondary}{value}`` plus an optional trailing comment.

    Returns None if the input does not start with ``{``.

    Raises:
        ParseError: if the entry is malformed past its opening ``{``.
    """
    if not tag(sc, "{"):
        return None

    try:
        index = unsigned_int(sc, U32_MAX)
    except OverflowError:
        raise sc.error("index does not fit in 32 bits") from None
    if index is None:
        raise sc.error("expected unsigned integer index")
    if not tag(sc, "}"):
        raise sc.error("expected '}' closing the index")

    secondary = _field(sc, "secondary")
    value = _field(sc, "value")
    comment = parse_comment(sc)
    return Entry(index=index, secondary=secondary, value=value, comment=comment)


def parse_line(sc: Scanner) -> Line:
    comment = parse_comment(sc)
    if comment is not None:
        return Comment(comment)

    space0(sc)
    entry = parse_entry(sc)
    if entry is not None:
        return entry
    return BREAK


def tokenize(data: Union[str, bytes], exhaustive: bool = True) -> Document:
    """Split an MSG document into classified lines.

    Parsing stops at the first line that is not followed by a line break.
    With ``exhaustive`` set, anything left over at that point is an error.

    Raises:
        ParseError
    """
    sc = Scanner(data)
    doc = Document([parse_line(sc)])
    while line_break(sc):
        doc.lines.append(parse_line(sc))

    if exhaustive and not sc.at_end():
        raise sc.error("failed to exhaust input to the end")
    return doc
