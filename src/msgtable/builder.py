"""Dictionary builder.

Pipeline shape:
- tokenize input -> Document (lexer.py)
- drop comments and breaks
- convert each entry value -> MsgLine
- insert into a MsgDictionary under the entry's index
"""

from __future__ import annotations
import logging

from .converters import LineConverter, utf8_or_bytes
from .dictionary import MsgDictionary, MsgLine
from .errors import MalformedEntryError
from .records import Document, Entry

logger = logging.getLogger(__name__)


def convert_value(entry: Entry, converter: LineConverter) -> MsgLine:
    # str input has been decoded by the caller already
    if isinstance(entry.value, str):
        return MsgLine.as_text(entry.value)
    return converter(entry.value)


def build_dictionary(
    doc: Document,
    converter: LineConverter = utf8_or_bytes,
    skip_malformed: bool = False,
) -> MsgDictionary:
    """Fill a MsgDictionary from the entries of ``doc``.

    Raises:
        MalformedEntryError: if an entry has a non-empty secondary field
            and ``skip_malformed`` is not set.
    """
    dictionary = MsgDictionary()
    skipped = 0
    for entry in doc.entries():
        if entry.secondary:
            if not skip_malformed:
                raise MalformedEntryError(entry)
            logger.warning("skipping entry %d with non-empty secondary field %r", entry.index, entry.secondary)
            skipped += 1
            continue
        dictionary.insert(entry.index, convert_value(entry, converter))

    logger.debug("built dictionary: %d lines read, %d stored, %d skipped", len(doc.lines), len(dictionary), skipped)
    return dictionary
