"""In-memory message table.

Values are keyed by ``(index, sub_index)``. Every entry read for an index
gets the next free sub-index, so repeated indices stack up as 0, 1, 2, ...
in the order they were inserted.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Tuple, Union

from .grammar import U32_MAX

Key = Tuple[int, int]


@dataclass(frozen=True)
class MsgLine:
    """A stored value: decoded text, or raw bytes that could not be decoded."""
    value: Union[str, bytes]

    def __post_init__(self):
        if not isinstance(self.value, (str, bytes)):
            raise TypeError(f"MsgLine value must be str or bytes, not {type(self.value).__name__}")

    @classmethod
    def as_text(cls, text: str) -> "MsgLine":
        if not isinstance(text, str):
            raise TypeError(f"as_text() expects str, not {type(text).__name__}")
        return cls(text)

    @classmethod
    def as_bytes(cls, raw: bytes) -> "MsgLine":
        if not isinstance(raw, (bytes, bytearray, memoryview)):
            raise TypeError(f"as_bytes() expects a bytes-like object, not {type(raw).__name__}")
        return cls(bytes(raw))

    @property
    def text(self) -> Optional[str]:
        return self.value if isinstance(self.value, str) else None

    @property
    def raw(self) -> bytes:
        """Byte form of the value; text is encoded as UTF-8."""
        if isinstance(self.value, str):
            return self.value.encode("utf-8")
        return self.value


class MsgDictionary:
    """Ordered ``(index, sub_index) -> MsgLine`` table.

    Lines are kept per index in insertion order, so the sub-index of a line
    is its position in that list. The sorted index list is rebuilt lazily
    after new indices were added.

    Only the builder calls ``insert``; everything else is read-only.
    """

    def __init__(self):
        self._lines: Dict[int, List[MsgLine]] = {}
        self._sorted: Optional[List[int]] = []
        self._count = 0

    def _indices(self) -> List[int]:
        if self._sorted is None:
            self._sorted = sorted(self._lines)
        return self._sorted

    def __len__(self) -> int:
        return self._count

    def __contains__(self, key: object) -> bool:
        try:
            index, sub_index = key
        except (TypeError, ValueError):
            return False
        lines = self._lines.get(index)
        return lines is not None and 0 <= sub_index < len(lines)

    def __getitem__(self, key: Key) -> MsgLine:
        if key not in self:
            raise KeyError(key)
        index, sub_index = key
        return self._lines[index][sub_index]

    def __iter__(self) -> Iterator[Key]:
        for key, _ in self.items():
            yield key

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MsgDictionary):
            return NotImplemented
        return self._lines == other._lines

    def __repr__(self) -> str:
        return f"MsgDictionary({len(self)} lines)"

    def items(self) -> Iterator[Tuple[Key, MsgLine]]:
        for index in self._indices():
            for sub_index, line in enumerate(self._lines[index]):
                yield (index, sub_index), line

    def insert(self, index: int, line: MsgLine) -> int:
        """Store ``line`` under the next free sub-index of ``index``.

        Returns the sub-index used.
        """
        assert 0 <= index <= U32_MAX, index
        lines = self._lines.get(index)
        if lines is None:
            lines = self._lines[index] = []
            self._sorted = None
        sub_index = len(lines)
        assert (index, sub_index) not in self, (index, sub_index)
        lines.append(line)
        self._count += 1
        return sub_index

    def get_first_string(self, index: int) -> Optional[str]:
        lines = self._lines.get(index)
        return lines[0].text if lines else None

    def get_first_bytes(self, index: int) -> Optional[bytes]:
        lines = self._lines.get(index)
        return lines[0].raw if lines else None

    def get_all_strings(self, index: int) -> Iterator[Tuple[int, str]]:
        """Yield ``(sub_index, text)`` for ``index``, skipping byte-only values."""
        for sub_index, line in enumerate(self._lines.get(index, ())):
            if line.text is not None:
                yield sub_index, line.text

    def iter_first_strings(self) -> Iterator[Tuple[int, str]]:
        """Yield ``(index, text)`` for every sub-index 0 text value, by index."""
        for index in self._indices():
            text = self._lines[index][0].text
            if text is not None:
                yield index, text
