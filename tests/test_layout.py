"""
Tests for the save file section table.
"""

from savepatcher.model import layout
from savepatcher.model.section import SectionKind


def test_sections_fit_in_save_file() -> None:
    for section in layout.SECTIONS:
        assert section.end <= layout.SAVE_FILE_SIZE, section.name


def test_section_names_unique() -> None:
    names = [section.name for section in layout.SECTIONS]

    assert len(names) == len(set(names))


def test_integer_sections_have_integer_widths() -> None:
    widths = {section.name: section.size for section in layout.SECTIONS if section.kind is SectionKind.INTEGER}

    assert widths == {'SteamId': 8, 'Level': 1, 'SecondsPlayed': 4}


def test_checksum_precedes_save_header() -> None:
    assert layout.SAVE_HEADER_CHECKSUM.size == 16
    assert layout.SAVE_HEADER_CHECKSUM.end == layout.SAVE_HEADER.offset


def test_steam_id_inside_save_header() -> None:
    assert layout.SAVE_HEADER.offset <= layout.STEAM_ID.offset
    assert layout.STEAM_ID.end <= layout.SAVE_HEADER.end


def test_profile_summary_fields_fit_in_last_slot() -> None:
    last = layout.SLOT_COUNT - 1
    for section in (layout.NAME, layout.LEVEL, layout.SECONDS_PLAYED):
        shifted = layout.slot_section(section, last)
        assert shifted.end <= layout.SAVE_HEADER.end, section.name
