#!/usr/bin/env python3
"""
Print the profile summary of an Elden Ring save file.

Usage: uv run python scripts/print_save.py [--input PATH]
"""

import sys

from savepatcher.cli import main

if __name__ == '__main__':
    sys.exit(main(['--info', *sys.argv[1:]]))
