"""Exceptions raised while loading, patching and writing save files."""

from __future__ import annotations


class SavePatcherError(Exception):
    """Base class for all save patcher errors."""


class SaveIOError(SavePatcherError, OSError):
    """A save file could not be read or written."""


class FormatError(SavePatcherError, ValueError):
    """Data is not a valid Elden Ring save file."""

    def __init__(self, label: str, reason: str) -> None:
        super().__init__(f'{label} is not a valid Elden Ring save file: {reason}')
        self.label = label
        self.reason = reason


class NoOpError(SavePatcherError, ValueError):
    """The requested change would leave the save file unchanged."""


class SlotNotFoundError(SavePatcherError, LookupError):
    """No save slot is flagged as active."""


class OutOfRangeError(SavePatcherError, IndexError):
    """A section does not fit inside the buffer it is applied to."""


class PatchStageError(SavePatcherError):
    """A patch pipeline stage failed."""

    def __init__(self, stage: str, cause: Exception) -> None:
        super().__init__(f'{stage} failed: {cause}')
        self.stage = stage
        self.cause = cause
