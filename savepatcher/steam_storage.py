"""
Steam storage discovery for Linux.

Locates the local Steam installation, the logged-in accounts and the
Elden Ring save file inside the game's Proton prefix. Used only to provide
defaults for the command line; every path can be passed explicitly.
"""

from __future__ import annotations

import re
from pathlib import Path

from savepatcher.const import ELDEN_RING_APP_ID, SAVE_DIR_IN_PREFIX, SAVE_FILE_NAME
from savepatcher.log import log

# "key"   "value"
KV_PATTERN = re.compile(r'^"([^"]+)"\s+"([^"]*)"')
# "key" on its own line opens a nested block
KEY_PATTERN = re.compile(r'^"([^"]+)"$')


def parse_vdf(content: str) -> dict:
    """Parse Valve Data Format (VDF) content into a dictionary.

    VDF is the key-value format of Steam's config files:
        "key"   "value"
        "key"
        {
            "nested"    "value"
        }
    """
    result: dict = {}
    stack = [result]

    for raw_line in content.splitlines():
        line = raw_line.strip()
        if not line or line == '{':
            continue

        if line == '}':
            if len(stack) > 1:
                stack.pop()
            continue

        kv_match = KV_PATTERN.match(line)
        if kv_match:
            key, value = kv_match.groups()
            stack[-1][key] = value
            continue

        key_match = KEY_PATTERN.match(line)
        if key_match:
            block: dict = {}
            stack[-1][key_match.group(1)] = block
            stack.append(block)

    return result


def get_steam_root() -> Path | None:
    """Find Steam installation root directory.

    Checks ~/.steam/steam (usually a symlink) and then ~/.local/share/Steam.
    """
    steam_symlink = Path.home() / '.steam' / 'steam'
    if steam_symlink.exists():
        return steam_symlink.resolve()

    local_steam = Path.home() / '.local' / 'share' / 'Steam'
    if local_steam.exists():
        return local_steam

    return None


def _require_steam_root(steam_root: Path | None) -> Path:
    root = steam_root or get_steam_root()
    if root is None:
        raise LookupError('Steam installation not found')
    return root


def list_library_paths(steam_root: Path | None = None) -> list[Path]:
    """List Steam library folders from libraryfolders.vdf.

    The Steam root itself is always the first library.
    """
    root = _require_steam_root(steam_root)
    paths = [root]

    vdf_path = root / 'steamapps' / 'libraryfolders.vdf'
    if not vdf_path.exists():
        return paths

    data = parse_vdf(vdf_path.read_text(encoding='utf-8'))
    for key, info in data.get('libraryfolders', {}).items():
        if not key.isdigit() or not isinstance(info, dict):
            continue
        path = info.get('path')
        if path and Path(path) not in paths:
            paths.append(Path(path))

    return paths


def find_game_library(app_id: int = ELDEN_RING_APP_ID, steam_root: Path | None = None) -> Path:
    """Library folder containing the app's manifest.

    Raises:
        LookupError: If the app is not installed in any library.
    """
    for library in list_library_paths(steam_root):
        if (library / 'steamapps' / f'appmanifest_{app_id}.acf').exists():
            return library
    raise LookupError(f'Game with app_id={app_id} not found in any Steam library')


def get_steam_user_id(steam_root: Path | None = None) -> int:
    """SteamID64 of the most recently logged-in account.

    Reads config/loginusers.vdf, whose "users" block is keyed by SteamID64.
    Falls back to the first listed account when none is marked MostRecent.

    Raises:
        LookupError: If no Steam account is found.
    """
    root = _require_steam_root(steam_root)
    vdf_path = root / 'config' / 'loginusers.vdf'
    if not vdf_path.exists():
        raise LookupError(f'Steam login users file not found: {vdf_path}')

    users = parse_vdf(vdf_path.read_text(encoding='utf-8')).get('users', {})
    steam_ids = [key for key in users if key.isdigit()]
    if not steam_ids:
        raise LookupError(f'No Steam user ID found in {vdf_path}')

    for steam_id in steam_ids:
        info = users[steam_id]
        if isinstance(info, dict) and info.get('MostRecent') == '1':
            return int(steam_id)

    log.debug(f'No account marked MostRecent, using {steam_ids[0]}')
    return int(steam_ids[0])


def get_save_path(steam_id: int, steam_root: Path | None = None) -> Path:
    """Path of ER0000.sl2 for the given account inside the Proton prefix."""
    library = find_game_library(ELDEN_RING_APP_ID, steam_root)
    compatdata = library / 'steamapps' / 'compatdata' / str(ELDEN_RING_APP_ID)
    return compatdata / SAVE_DIR_IN_PREFIX / str(steam_id) / SAVE_FILE_NAME
