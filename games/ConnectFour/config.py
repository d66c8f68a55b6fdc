"""
ConnectFour - Configuration loader.

Display constants loaded from a .env file beside this module. Board size
lives in models.settings.ConnectFourSettings.
"""
import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from game directory
_env_path = Path(__file__).parent / '.env'
load_dotenv(_env_path)


def _get_int(key: str, default: int) -> int:
    """Get integer from environment."""
    return int(os.getenv(key, str(default)))


# Display
SCREEN_WIDTH = _get_int('SCREEN_WIDTH', 1280)
SCREEN_HEIGHT = _get_int('SCREEN_HEIGHT', 720)

# Board layout
HEADER_HEIGHT = _get_int('HEADER_HEIGHT', 90)
BOARD_MARGIN = _get_int('BOARD_MARGIN', 20)
PIECE_PADDING = 6

# Visual
BACKGROUND_COLOR = (15, 23, 42)
BOARD_COLOR = (37, 99, 235)
EMPTY_COLOR = (15, 23, 42)
RED_COLOR = (239, 68, 68)
GREEN_COLOR = (34, 197, 94)
HIGHLIGHT_COLOR = (255, 255, 255)
TEXT_COLOR = (255, 255, 255)
OVERLAY_COLOR = (0, 0, 0, 160)
