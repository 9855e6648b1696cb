"""
Constants for the Elden Ring save patcher.
"""

from pathlib import PurePosixPath

# Elden Ring Steam app ID
ELDEN_RING_APP_ID = 1245620

# Save file name inside the per-account save directory
SAVE_FILE_NAME = 'ER0000.sl2'

# Save directory relative to the Proton prefix; the account's SteamID64 is appended
SAVE_DIR_IN_PREFIX = PurePosixPath('pfx/drive_c/users/steamuser/AppData/Roaming/EldenRing')

# Individual account SteamID64 range
STEAM_ID_MIN = 76561197960265728
STEAM_ID_MAX = 76561199999999999

# Every ER0000.sl2 has exactly this size
SAVE_FILE_SIZE = 0x1BA03D0
