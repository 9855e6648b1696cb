"""
Pytest configuration and shared fixtures.

Save files are built synthetically: a zeroed buffer of the real file size
with the BND magic, an owner Steam ID, one active slot with a profile
summary, and a valid save header checksum.
"""

import hashlib
import struct
from pathlib import Path

import pytest

from savepatcher.model import layout

STEAM_ID = 76561197960287930
NAME = 'Tarnished'
LEVEL = 42
SECONDS_PLAYED = 3 * 3600 + 25 * 60 + 7


def make_save_bytes(
    steam_id: int = STEAM_ID,
    active_slot: int | None = 0,
    name: str = NAME,
    level: int = LEVEL,
    seconds_played: int = SECONDS_PLAYED,
    valid_checksum: bool = True,
) -> bytearray:
    """Build a synthetic save file buffer."""
    data = bytearray(layout.SAVE_FILE_SIZE)
    data[0:4] = b'BND4'
    struct.pack_into('<Q', data, layout.STEAM_ID.offset, steam_id)

    if active_slot is not None:
        data[layout.ACTIVE_SLOTS.offset + active_slot] = 1
        delta = active_slot * layout.PROFILE_SUMMARY_STRIDE
        encoded_name = name.encode('utf-16-le')
        name_offset = layout.NAME.offset + delta
        data[name_offset : name_offset + len(encoded_name)] = encoded_name
        data[layout.LEVEL.offset + delta] = level
        struct.pack_into('<I', data, layout.SECONDS_PLAYED.offset + delta, seconds_played)

    if valid_checksum:
        header = data[layout.SAVE_HEADER.offset : layout.SAVE_HEADER.end]
        data[layout.SAVE_HEADER_CHECKSUM.offset : layout.SAVE_HEADER_CHECKSUM.end] = hashlib.md5(header).digest()

    return data


@pytest.fixture()
def save_bytes() -> bytearray:
    """A valid save file buffer with slot 0 active."""
    return make_save_bytes()


@pytest.fixture()
def save_path(tmp_path: Path, save_bytes: bytearray) -> Path:
    """A valid save file written to a temporary directory."""
    path = tmp_path / 'ER0000.sl2'
    path.write_bytes(save_bytes)
    return path


@pytest.fixture()
def save_factory():
    """Factory building save file buffers with custom fields."""
    return make_save_bytes
