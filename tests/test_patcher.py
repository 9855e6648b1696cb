"""
Tests for the staged patch pipeline.
"""

import hashlib
from pathlib import Path

import pytest

from savepatcher.errors import FormatError, NoOpError, PatchStageError, SaveIOError
from savepatcher.model import layout
from savepatcher.model.save_file import SaveFile
from savepatcher.patcher import (
    STAGE_LOAD,
    STAGE_REPLACE_STEAM_ID,
    STAGE_VALIDATE_SOURCE,
    load_save,
    patch_save,
    stage,
)

from conftest import STEAM_ID

NEW_STEAM_ID = 76561198012345678


def test_patch_save(save_path: Path, tmp_path: Path) -> None:
    output = tmp_path / 'patched.sl2'

    save = patch_save(save_path, NEW_STEAM_ID, output)

    patched = SaveFile.load(output)
    assert patched.steam_id() == NEW_STEAM_ID
    assert patched.checksum_valid() is True
    assert patched.original == bytes(save.patched)
    header = patched.original[layout.SAVE_HEADER.offset : layout.SAVE_HEADER.end]
    assert patched.checksum() == hashlib.md5(header).hexdigest()
    # source file is untouched
    assert SaveFile.load(save_path).steam_id() == STEAM_ID


def test_patch_save_missing_input(tmp_path: Path) -> None:
    output = tmp_path / 'patched.sl2'

    with pytest.raises(PatchStageError) as exc_info:
        patch_save(tmp_path / 'missing.sl2', NEW_STEAM_ID, output)

    assert exc_info.value.stage == STAGE_LOAD
    assert isinstance(exc_info.value.cause, SaveIOError)
    assert not output.exists()


def test_patch_save_invalid_input(tmp_path: Path) -> None:
    source = tmp_path / 'broken.sl2'
    source.write_bytes(b'BND4' + b'\x00' * 100)
    output = tmp_path / 'patched.sl2'

    with pytest.raises(PatchStageError) as exc_info:
        patch_save(source, NEW_STEAM_ID, output)

    assert exc_info.value.stage == STAGE_VALIDATE_SOURCE
    assert isinstance(exc_info.value.cause, FormatError)
    assert str(exc_info.value).startswith('Validate source failed:')
    assert not output.exists()


def test_patch_save_same_steam_id(save_path: Path, tmp_path: Path) -> None:
    output = tmp_path / 'patched.sl2'

    with pytest.raises(PatchStageError) as exc_info:
        patch_save(save_path, STEAM_ID, output)

    assert exc_info.value.stage == STAGE_REPLACE_STEAM_ID
    assert isinstance(exc_info.value.cause, NoOpError)
    assert not output.exists()


def test_load_save(save_path: Path) -> None:
    save = load_save(save_path)

    assert save.steam_id() == STEAM_ID


def test_stage_wraps_errors() -> None:
    with pytest.raises(PatchStageError) as exc_info:
        with stage('Example'):
            raise NoOpError('nothing to do')

    assert exc_info.value.stage == 'Example'
    assert str(exc_info.value) == 'Example failed: nothing to do'
    assert isinstance(exc_info.value.__cause__, NoOpError)


def test_stage_passes_unrelated_errors() -> None:
    with pytest.raises(KeyError):
        with stage('Example'):
            raise KeyError('other')
