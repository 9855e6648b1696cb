"""Section table for the Elden Ring PC save file (ER0000.sl2).

The file is a BND4 container: ten character slots followed by the general
"save header" region. The save header is guarded by an MD5 checksum stored
in the 16 bytes right before it, and holds the owner's SteamID64 and one
profile summary (name, level, play time) per character slot.
"""

from savepatcher.const import SAVE_FILE_SIZE
from savepatcher.model.section import Section, SectionKind

SLOT_COUNT = 10
PROFILE_SUMMARY_STRIDE = 0x24C

# Flag value marking a slot as active
ACTIVE_FLAG = 1

HEADER_BND = Section('HeaderBND', 0x0, 0x3, SectionKind.TEXT)

SAVE_HEADER_CHECKSUM = Section('SaveHeaderChecksum', 0x19003A0, 0x10)
SAVE_HEADER = Section('SaveHeader', 0x19003B0, 0x60000)
STEAM_ID = Section('SteamId', 0x19003B4, 0x8, SectionKind.INTEGER)

ACTIVE_SLOTS = Section('ActiveSlots', 0x1901D04, SLOT_COUNT)

# Profile summary fields of slot 0; use slot_section() for the others
NAME = Section('Name', 0x1901D0E, 0x22, SectionKind.TEXT, encoding='utf-16-le')
LEVEL = Section('Level', 0x1901D30, 0x1, SectionKind.INTEGER)
SECONDS_PLAYED = Section('SecondsPlayed', 0x1901D34, 0x4, SectionKind.INTEGER)

SECTIONS = (
    HEADER_BND,
    SAVE_HEADER_CHECKSUM,
    SAVE_HEADER,
    STEAM_ID,
    ACTIVE_SLOTS,
    NAME,
    LEVEL,
    SECONDS_PLAYED,
)


def slot_section(section: Section, slot: int) -> Section:
    """Profile summary section for the given character slot."""
    if not 0 <= slot < SLOT_COUNT:
        raise ValueError(f'Slot {slot} out of range [0, {SLOT_COUNT})')
    return section.shifted(slot * PROFILE_SUMMARY_STRIDE)


__all__ = [
    'ACTIVE_FLAG',
    'ACTIVE_SLOTS',
    'HEADER_BND',
    'LEVEL',
    'NAME',
    'PROFILE_SUMMARY_STRIDE',
    'SAVE_FILE_SIZE',
    'SAVE_HEADER',
    'SAVE_HEADER_CHECKSUM',
    'SECONDS_PLAYED',
    'SECTIONS',
    'SLOT_COUNT',
    'STEAM_ID',
    'slot_section',
]
