"""
Command line interface for the Elden Ring save patcher.

Usage:
    uv run python scripts/patch_save.py --input ER0000.sl2 --steam-id 76561198012345678
    uv run python scripts/patch_save.py --info
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from savepatcher.const import STEAM_ID_MAX, STEAM_ID_MIN
from savepatcher.errors import PatchStageError
from savepatcher.log import log
from savepatcher.patcher import load_save, log_summary, patch_save
from savepatcher.steam_storage import get_save_path, get_steam_user_id


def parse_steam_id(value: str) -> int:
    """argparse type for a SteamID64 of an individual account."""
    try:
        steam_id = int(value.strip())
    except ValueError:
        raise argparse.ArgumentTypeError(f'Steam ID must be a number, got: {value!r}')

    if not STEAM_ID_MIN <= steam_id <= STEAM_ID_MAX:
        raise argparse.ArgumentTypeError(f'Invalid Steam ID: {steam_id}')
    return steam_id


def existing_path(value: str) -> Path:
    """argparse type for a path that must already exist."""
    path = Path(value)
    if not path.exists():
        raise argparse.ArgumentTypeError(f"path '{path}' does not exist")
    return path


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='savepatcher',
        description='Move an Elden Ring save file to another Steam account',
    )
    parser.add_argument(
        '--input',
        '-i',
        type=existing_path,
        help='Input save file (default: save file of the most recent Steam user)',
    )
    parser.add_argument(
        '--steam-id',
        '-s',
        type=parse_steam_id,
        help='SteamID64 of the new owner (default: most recent Steam user)',
    )
    parser.add_argument(
        '--output',
        '-o',
        type=Path,
        help='Output save file (default: <input>_patched.sl2)',
    )
    parser.add_argument(
        '--info',
        action='store_true',
        help='Show the save file summary and checksum status without patching',
    )
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable debug logging')
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        log.setLevel(logging.DEBUG)

    steam_id = args.steam_id
    input_path = args.input
    try:
        if steam_id is None and not args.info:
            steam_id = get_steam_user_id()
            log.info(f'Using Steam ID of the most recent user: {steam_id}')
        if input_path is None:
            input_path = get_save_path(steam_id if steam_id is not None else get_steam_user_id())
            log.info(f'Using save file: {input_path}')
    except LookupError as e:
        log.error(f'Steam discovery failed: {e}')
        log.error('Pass --input and --steam-id explicitly.')
        return 1

    try:
        if args.info:
            save = load_save(input_path)
            log_summary('Save file', save.summary())
            log.info(f'Checksum valid: {save.checksum_valid()}')
            return 0

        output_path = args.output
        if output_path is None:
            output_path = input_path.parent / f'{input_path.stem}_patched{input_path.suffix}'

        patch_save(input_path, steam_id, output_path)
    except PatchStageError as e:
        log.error(str(e))
        return 1

    log.info('Patch complete!')
    return 0
