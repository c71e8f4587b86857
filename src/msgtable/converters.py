"""Line converters.

A converter turns the raw bytes of a value field into a MsgLine. The
builder never decodes anything itself, so legacy code pages are handled
by passing a different converter:

- utf8_or_bytes: text if the bytes are valid UTF-8 (the default)
- codepage_or_bytes(name): text if the bytes decode with the named codec
- cp1251_or_bytes: codepage_or_bytes("cp1251")

Failed decodes never raise; the bytes are kept as they are.
"""

from __future__ import annotations
import codecs
from typing import Callable

from .dictionary import MsgLine
from .errors import ConverterError


LineConverter = Callable[[bytes], MsgLine]


def utf8_or_bytes(raw: bytes) -> MsgLine:
    try:
        return MsgLine.as_text(raw.decode("utf-8"))
    except UnicodeDecodeError:
        return MsgLine.as_bytes(raw)


def codepage_or_bytes(encoding: str) -> LineConverter:
    """Build a converter decoding with ``encoding``.

    Raises:
        ConverterError: if Python has no codec by that name.
    """
    try:
        name = codecs.lookup(encoding.strip()).name
    except LookupError:
        raise ConverterError(f"unknown encoding: {encoding!r}") from None

    def convert(raw: bytes) -> MsgLine:
        try:
            return MsgLine.as_text(raw.decode(name))
        except UnicodeDecodeError:
            return MsgLine.as_bytes(raw)

    return convert


cp1251_or_bytes = codepage_or_bytes("cp1251")
