#!/usr/bin/env python3
"""
Move an Elden Ring save file to another Steam account.

Usage:
    uv run python scripts/patch_save.py --input ER0000.sl2 --steam-id <steam_id> [--output OUTPUT]
    uv run python scripts/patch_save.py --info

Examples:
    # Show name, level, play time and checksum status of the local save
    uv run python scripts/patch_save.py --info

    # Patch a save copied from a friend for the most recent local Steam user
    uv run python scripts/patch_save.py --input ~/Downloads/ER0000.sl2

    # Explicit owner and output path
    uv run python scripts/patch_save.py -i ER0000.sl2 -s 76561198012345678 -o ER0000_mine.sl2
"""

import sys

from savepatcher.cli import main

if __name__ == '__main__':
    sys.exit(main())
