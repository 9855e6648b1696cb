"""Steam ID patching for Elden Ring save files.

Runs the patch as a fixed sequence of stages. The first failing stage
aborts the run with a PatchStageError naming it; nothing is written unless
every earlier stage succeeded.
"""

from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from savepatcher.errors import PatchStageError, SavePatcherError
from savepatcher.log import log
from savepatcher.model.save_file import ProfileSummary, SaveFile, read_save_bytes

STAGE_LOAD = 'Load'
STAGE_VALIDATE_SOURCE = 'Validate source'
STAGE_REPLACE_STEAM_ID = 'Replace Steam ID'
STAGE_RECALCULATE_CHECKSUM = 'Recalculate checksum'
STAGE_VALIDATE_RESULT = 'Validate result'
STAGE_WRITE = 'Write'


@contextmanager
def stage(name: str) -> Iterator[None]:
    """Re-raise patcher errors from the block as PatchStageError(name)."""
    log.debug(f'Stage: {name}')
    try:
        yield
    except PatchStageError:
        raise
    except (SavePatcherError, ValueError) as e:
        raise PatchStageError(name, e) from e


def log_summary(title: str, summary: ProfileSummary) -> None:
    log.info(f'{title}:')
    for line in summary.describe():
        log.info(f'  {line}')


def load_save(input_path: Path) -> SaveFile:
    """Load a save file, separating read errors from format errors."""
    with stage(STAGE_LOAD):
        data = read_save_bytes(input_path)
    with stage(STAGE_VALIDATE_SOURCE):
        return SaveFile.from_bytes(data, label=str(input_path))


def patch_save(input_path: Path, steam_id: int, output_path: Path) -> SaveFile:
    """Copy a save file to output_path with its owner changed to steam_id.

    Args:
        input_path: Save file to read
        steam_id: SteamID64 of the new owner
        output_path: Path to write the patched save file

    Returns:
        The patched SaveFile

    Raises:
        PatchStageError: If any stage fails
    """
    log.info(f'Loading save file: {input_path}')
    save = load_save(input_path)
    log_summary('Original save', save.summary(save.original))

    with stage(STAGE_REPLACE_STEAM_ID):
        save.replace_steam_id(steam_id)
    log.info(f'Steam ID: {save.steam_id(save.original)} -> {save.steam_id()}')

    with stage(STAGE_RECALCULATE_CHECKSUM):
        checksum = save.recalculate_checksum()
    log.info(f'Checksum: {save.checksum(save.original)} -> {checksum}')

    with stage(STAGE_VALIDATE_RESULT):
        save.validate_data(save.patched, 'Generated data')

    with stage(STAGE_WRITE):
        save.save(output_path)
    log.info(f'Wrote patched save to: {output_path}')

    log_summary('Patched save', save.summary())
    return save
