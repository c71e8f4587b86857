"""Grammar primitives.

Every primitive takes a Scanner and either consumes what it recognizes or
reports "no match" (None / False) with the scanner left where it was, so
callers can try the next alternative. Deciding that a mismatch is fatal is
up to the caller (see lexer.py).

The Scanner hides whether the input is ``str`` or ``bytes``: literals are
converted to the input's type with ``lit()`` and single elements to
characters with ``char()``, so the grammar is written only once.
"""

from __future__ import annotations
from typing import Generic, Optional, Tuple, TypeVar

from .errors import ParseError

Text = TypeVar("Text", str, bytes)

SPACES = " \t"
DIGITS = "0123456789"
U32_MAX = 0xFFFF_FFFF


class Scanner(Generic[Text]):
    """Read position over a str or bytes input."""

    def __init__(self, data: Text):
        self.data = data
        self.pos = 0

    def __len__(self) -> int:
        return len(self.data)

    def lit(self, s: str) -> Text:
        if isinstance(self.data, bytes):
            return s.encode("ascii")
        return s

    def char(self, i: int) -> str:
        el = self.data[i]
        return el if isinstance(el, str) else chr(el)

    def at_end(self) -> bool:
        return self.pos >= len(self)

    def startswith(self, s: str) -> bool:
        return self.data.startswith(self.lit(s), self.pos)

    def snippet(self, n: int = 20) -> str:
        end = min(self.pos + n, len(self))
        return "".join(self.char(i) for i in range(self.pos, end))

    def location(self) -> Tuple[int, int]:
        """1-based (line, column) of the current position."""
        nl = self.lit("\n")
        line = self.data.count(nl, 0, self.pos) + 1
        line_start = self.data.rfind(nl, 0, self.pos) + 1
        return line, self.pos - line_start + 1

    def error(self, message: str) -> ParseError:
        line, column = self.location()
        return ParseError(message, line=line, column=column, trailing=self.snippet())


def space0(sc: Scanner) -> Text:
    """Consume spaces and tabs (possibly none)."""
    start = sc.pos
    while not sc.at_end() and sc.char(sc.pos) in SPACES:
        sc.pos += 1
    return sc.data[start:sc.pos]


def tag(sc: Scanner, literal: str) -> bool:
    if sc.startswith(literal):
        sc.pos += len(literal)
        return True
    return False


def line_break(sc: Scanner) -> bool:
    """Consume LF or CR LF."""
    return tag(sc, "\n") or tag(sc, "\r\n")


def rest_of_line(sc: Scanner) -> Text:
    """Consume everything up to (not including) the next line break."""
    data = sc.data
    end = data.find(sc.lit("\n"), sc.pos)
    if end == -1:
        end = len(data)
    elif end > sc.pos and data[end - 1:end] == sc.lit("\r"):
        end -= 1
    text = data[sc.pos:end]
    sc.pos = end
    return text


def delimited_field(sc: Scanner, opening: str = "{", closing: str = "}") -> Optional[Text]:
    """Consume ``opening ... closing`` and return the text in between.

    There is no escaping: the field ends at the first ``closing``. Line
    breaks inside the field are kept as they are.
    """
    start = sc.pos
    if not tag(sc, opening):
        return None
    end = sc.data.find(sc.lit(closing), sc.pos)
    if end == -1:
        sc.pos = start
        return None
    text = sc.data[sc.pos:end]
    sc.pos = end + len(closing)
    return text


def unsigned_int(sc: Scanner, limit: int = U32_MAX) -> Optional[int]:
    """Consume a run of ASCII digits and return its value.

    Raises:
        OverflowError: if the value is above ``limit``; nothing is consumed.
    """
    start = sc.pos
    while not sc.at_end() and sc.char(sc.pos) in DIGITS:
        sc.pos += 1
    if sc.pos == start:
        return None
    digits = sc.data[start:sc.pos].lstrip(sc.lit("0")) or sc.lit("0")
    if len(digits) > len(str(limit)) or int(digits) > limit:
        sc.pos = start
        raise OverflowError(f"integer does not fit in {limit.bit_length()} bits")
    return int(digits)
