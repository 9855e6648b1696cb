"""SaveFile - top-level entry point for save file operations."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path

from savepatcher.checksum import format_hex, section_digest, verify_section
from savepatcher.errors import FormatError, NoOpError, SaveIOError, SlotNotFoundError
from savepatcher.log import log
from savepatcher.model.layout import (
    ACTIVE_FLAG,
    ACTIVE_SLOTS,
    HEADER_BND,
    LEVEL,
    NAME,
    SAVE_FILE_SIZE,
    SAVE_HEADER,
    SAVE_HEADER_CHECKSUM,
    SECONDS_PLAYED,
    STEAM_ID,
    slot_section,
)
from savepatcher.model.section import Buffer

MAGIC = 'BND'
STEAM_ID_MAX = 2**64 - 1


def format_time_played(value: timedelta) -> str:
    """Format play time as HH:MM:SS, hours unbounded."""
    total = int(value.total_seconds())
    hours, rest = divmod(total, 3600)
    minutes, seconds = divmod(rest, 60)
    return f'{hours:02}:{minutes:02}:{seconds:02}'


def read_save_bytes(path: Path) -> bytes:
    """Read a whole save file.

    Raises:
        SaveIOError: If the file is missing or cannot be opened.
    """
    path = Path(path)
    try:
        data = path.read_bytes()
    except OSError as e:
        raise SaveIOError(f"Could not open file '{path}': {e.strerror or e}") from e

    log.debug(f'Read {len(data)} bytes from {path}')
    return data


@dataclass
class ProfileSummary:
    """Snapshot of the fields shown before and after patching."""

    slot: int
    name: str
    level: int
    time_played: timedelta
    steam_id: int
    checksum: str

    def describe(self) -> list[str]:
        return [
            f'Active slot: {self.slot}',
            f'Name: {self.name}',
            f'Level: {self.level}',
            f'Time played: {format_time_played(self.time_played)}',
            f'Steam ID: {self.steam_id}',
            f'Checksum: {self.checksum}',
        ]


class SaveFile:
    """Elden Ring save file held as an original and a patched buffer.

    The original bytes are never modified; all mutations go to the patched
    copy, which is what save() writes. Accessors read the patched buffer by
    default and accept an explicit buffer (e.g. `save.original`) to show the
    values from before patching.
    """

    def __init__(self, data: Buffer, label: str = 'Save data') -> None:
        self.validate_data(data, label)
        self.original = bytes(data)
        self.patched = bytearray(self.original)
        self.active_slot_index = self.get_active_slot_index(self.original)

    @classmethod
    def load(cls, path: Path) -> SaveFile:
        """Read and validate a save file.

        Raises:
            SaveIOError: If the file cannot be read.
            FormatError: If the file is not a valid save file.
            SlotNotFoundError: If no slot is flagged as active.
        """
        data = read_save_bytes(path)
        return cls.from_bytes(data, label=str(path))

    @classmethod
    def from_bytes(cls, data: Buffer, label: str = 'Save data') -> SaveFile:
        return cls(data, label)

    @staticmethod
    def validate_data(data: Buffer, label: str) -> None:
        """Check the fixed file size and the BND magic tag.

        Args:
            data: Buffer to check
            label: Name of the buffer, used in the error message

        Raises:
            FormatError: If the size or the magic tag is wrong
        """
        if len(data) != SAVE_FILE_SIZE:
            raise FormatError(label, f'expected {SAVE_FILE_SIZE} bytes, got {len(data)}')
        magic = HEADER_BND.chars_from(data)
        if magic != MAGIC:
            raise FormatError(label, f'bad magic {magic!r}')

    def save(self, path: Path) -> None:
        """Validate the patched buffer and write it to path.

        Validation happens before the file is opened, so a failure leaves
        no partial output behind.
        """
        path = Path(path)
        self.validate_data(self.patched, 'Generated data')
        try:
            path.write_bytes(self.patched)
        except OSError as e:
            raise SaveIOError(f"Could not write file '{path}': {e.strerror or e}") from e
        log.debug(f'Wrote {len(self.patched)} bytes to {path}')

    @staticmethod
    def get_active_slot_index(data: Buffer) -> int:
        """Index of the first slot whose active flag is set."""
        flags = ACTIVE_SLOTS.bytes_from(data)
        for index, flag in enumerate(flags):
            if flag == ACTIVE_FLAG:
                return index
        raise SlotNotFoundError('Could not find active slot index')

    @property
    def is_modified(self) -> bool:
        """True if the patched buffer differs from the original."""
        return self.patched != self.original

    def _data(self, data: Buffer | None) -> Buffer:
        return self.patched if data is None else data

    def checksum(self, data: Buffer | None = None) -> str:
        """Stored save header checksum as a hex string."""
        return format_hex(SAVE_HEADER_CHECKSUM.bytes_from(self._data(data)))

    def checksum_valid(self, data: Buffer | None = None) -> bool:
        """True if the stored checksum matches the save header contents."""
        return verify_section(SAVE_HEADER_CHECKSUM, SAVE_HEADER, self._data(data))

    def name(self, data: Buffer | None = None) -> str:
        return slot_section(NAME, self.active_slot_index).chars_from(self._data(data))

    def level(self, data: Buffer | None = None) -> int:
        return slot_section(LEVEL, self.active_slot_index).cast_integer(self._data(data))

    def time_played(self, data: Buffer | None = None) -> timedelta:
        seconds = slot_section(SECONDS_PLAYED, self.active_slot_index).cast_integer(self._data(data))
        return timedelta(seconds=seconds)

    def steam_id(self, data: Buffer | None = None) -> int:
        return STEAM_ID.cast_integer(self._data(data))

    def active_slot(self, data: Buffer | None = None) -> int:
        """Active slot index.

        Computed once on load; the flags are never patched, so the buffer
        argument only exists for symmetry with the other accessors.
        """
        return self.active_slot_index

    def summary(self, data: Buffer | None = None) -> ProfileSummary:
        return ProfileSummary(
            slot=self.active_slot(data),
            name=self.name(data),
            level=self.level(data),
            time_played=self.time_played(data),
            steam_id=self.steam_id(data),
            checksum=self.checksum(data),
        )

    def replace_steam_id(self, steam_id: int) -> None:
        """Write a new owner SteamID64 into the patched buffer.

        Raises:
            NoOpError: If steam_id is already the stored ID
            ValueError: If steam_id does not fit in 64 unsigned bits
        """
        if not 0 <= steam_id <= STEAM_ID_MAX:
            raise ValueError(f'Steam ID {steam_id} does not fit in 64 unsigned bits')
        if self.steam_id() == steam_id:
            raise NoOpError('Steam ID is already correct')

        STEAM_ID.replace(self.patched, steam_id)

    def recalculate_checksum(self) -> str:
        """Store the MD5 of the save header in the patched buffer.

        Returns:
            The new checksum as a hex string

        Raises:
            NoOpError: If the stored checksum is already correct
        """
        new_checksum = section_digest(SAVE_HEADER, self.patched)
        new_checksum_hex = format_hex(new_checksum)
        if self.checksum() == new_checksum_hex:
            raise NoOpError('Save header checksum is already correct')

        SAVE_HEADER_CHECKSUM.replace(self.patched, new_checksum)
        return new_checksum_hex
