"""Entry points: parse MSG data held in memory or stored in a file.

    >>> d = parse(b"# header\\n{1}{}{Test}")
    >>> d.get_first_string(1)
    'Test'

Files are read whole before parsing; read failures surface as MsgIoError.
"""

from __future__ import annotations
import logging
from pathlib import Path
from typing import Union

from .builder import build_dictionary
from .converters import LineConverter, cp1251_or_bytes, utf8_or_bytes
from .dictionary import MsgDictionary
from .errors import MsgIoError
from .lexer import tokenize

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def parse_with(
    data: Union[bytes, str],
    converter: LineConverter,
    exhaustive: bool = True,
    skip_malformed: bool = False,
) -> MsgDictionary:
    """Parse MSG data, turning value bytes into MsgLines with ``converter``.

    Raises:
        ParseError, MalformedEntryError
    """
    doc = tokenize(data, exhaustive=exhaustive)
    return build_dictionary(doc, converter, skip_malformed=skip_malformed)


def parse(data: Union[bytes, str], exhaustive: bool = True, skip_malformed: bool = False) -> MsgDictionary:
    """Parse MSG data; values that are valid UTF-8 become text."""
    return parse_with(data, utf8_or_bytes, exhaustive=exhaustive, skip_malformed=skip_malformed)


def _read_bytes(path: PathLike) -> bytes:
    logger.debug("reading %s", path)
    try:
        return Path(path).read_bytes()
    except OSError as ex:
        raise MsgIoError(f"cannot read {path}: {ex.strerror or ex}") from ex


def parse_file_with(path: PathLike, converter: LineConverter, **kwargs) -> MsgDictionary:
    return parse_with(_read_bytes(path), converter, **kwargs)


def parse_file(path: PathLike, **kwargs) -> MsgDictionary:
    return parse_file_with(path, utf8_or_bytes, **kwargs)


def parse_cp1251_file(path: PathLike, **kwargs) -> MsgDictionary:
    """Parse a file written in the Windows-1251 code page."""
    return parse_file_with(path, cp1251_or_bytes, **kwargs)
