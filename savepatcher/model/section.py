"""Fixed byte ranges within a save buffer.

A Section is plain data: a name, an (offset, size) range and a view kind.
The view kind selects how the bytes are decoded and encoded; all layout
knowledge lives in a static table of Section values (see layout.py).
"""

from __future__ import annotations

import dataclasses
import struct
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Union

from savepatcher.const import SAVE_FILE_SIZE
from savepatcher.errors import OutOfRangeError

Buffer = Union[bytes, bytearray, memoryview]

# struct format characters for unsigned little-endian integers, by width
INTEGER_FORMATS = {1: 'B', 2: 'H', 4: 'I', 8: 'Q'}


class SectionKind(Enum):
    BYTES = 'bytes'
    TEXT = 'text'
    INTEGER = 'integer'


@dataclass(frozen=True)
class Section:
    """Named (offset, size) range with typed read/replace operations.

    Sections are validated against SAVE_FILE_SIZE when declared, so a bad
    layout entry fails at import time rather than while patching.
    """

    name: str
    offset: int
    size: int
    kind: SectionKind = SectionKind.BYTES
    encoding: str = 'ascii'

    def __post_init__(self) -> None:
        if self.offset < 0 or self.size <= 0:
            raise ValueError(f'Section {self.name}: invalid range offset={self.offset:#x} size={self.size:#x}')
        if self.end > SAVE_FILE_SIZE:
            raise ValueError(f'Section {self.name}: end {self.end:#x} exceeds save file size {SAVE_FILE_SIZE:#x}')
        if self.kind is SectionKind.INTEGER and self.size not in INTEGER_FORMATS:
            raise ValueError(f'Section {self.name}: no integer type is {self.size} bytes wide')

    @property
    def end(self) -> int:
        """First offset past the section."""
        return self.offset + self.size

    def shifted(self, delta: int) -> Section:
        """Same section moved by delta bytes."""
        return dataclasses.replace(self, offset=self.offset + delta)

    def bytes_from(self, data: Buffer) -> memoryview:
        """Borrow the section's bytes from data without copying."""
        if self.end > len(data):
            raise OutOfRangeError(
                f'Section {self.name} ({self.offset:#x}..{self.end:#x}) is out of range for {len(data):#x} bytes'
            )
        return memoryview(data)[self.offset : self.end]

    def chars_from(self, data: Buffer) -> str:
        """Decode the section as text, cut at the first NUL character."""
        text = bytes(self.bytes_from(data)).decode(self.encoding, errors='replace')
        return text.split('\x00', 1)[0]

    def cast_integer(self, data: Buffer) -> int:
        """Decode the section as a little-endian unsigned integer of its own width."""
        return struct.unpack(self._integer_format(), self.bytes_from(data))[0]

    def value(self, data: Buffer) -> Any:
        """Decode the section according to its kind."""
        return _DECODERS[self.kind](self, data)

    def encode(self, value: Any) -> bytes:
        """Encode a typed value into exactly `size` bytes."""
        if isinstance(value, (bytes, bytearray, memoryview)):
            raw = bytes(value)
        elif isinstance(value, str):
            raw = value.encode(self.encoding)
            if len(raw) > self.size:
                raise ValueError(f'Section {self.name}: text needs {len(raw)} bytes, only {self.size} available')
            raw = raw.ljust(self.size, b'\x00')
        elif isinstance(value, int):
            try:
                raw = struct.pack(self._integer_format(), value)
            except struct.error as e:
                raise ValueError(f'Section {self.name}: {value} does not fit in {self.size} bytes') from e
        else:
            raise TypeError(f'Section {self.name}: cannot encode {type(value).__name__}')

        if len(raw) != self.size:
            raise ValueError(f'Section {self.name}: expected {self.size} bytes, got {len(raw)}')
        return raw

    def replace(self, data: bytearray, value: Any) -> None:
        """Overwrite the section in data with value.

        Exactly `size` bytes are written; the buffer length never changes.
        """
        raw = self.encode(value)
        if self.end > len(data):
            raise OutOfRangeError(
                f'Section {self.name} ({self.offset:#x}..{self.end:#x}) is out of range for {len(data):#x} bytes'
            )
        data[self.offset : self.end] = raw

    def _integer_format(self) -> str:
        if self.size not in INTEGER_FORMATS:
            raise ValueError(f'Section {self.name}: no integer type is {self.size} bytes wide')
        return '<' + INTEGER_FORMATS[self.size]


_DECODERS: dict[SectionKind, Callable[[Section, Buffer], Any]] = {
    SectionKind.BYTES: lambda section, data: bytes(section.bytes_from(data)),
    SectionKind.TEXT: Section.chars_from,
    SectionKind.INTEGER: Section.cast_integer,
}
