"""
StarCatcher - Configuration loader.

Display constants and fixed item geometry, loaded from a .env file beside
this module. Gameplay tunables live in models.settings.StarCatcherSettings.
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


def _get_float(key: str, default: float) -> float:
    """Get float from environment."""
    return float(os.getenv(key, str(default)))


# Display
SCREEN_WIDTH = _get_int('SCREEN_WIDTH', 1280)
SCREEN_HEIGHT = _get_int('SCREEN_HEIGHT', 720)

# Items: drawn ITEM_SIZE square, but only the top ITEM_HIT_HEIGHT catches
ITEM_SIZE = _get_float('ITEM_SIZE', 45.0)
ITEM_HIT_HEIGHT = _get_float('ITEM_HIT_HEIGHT', 30.0)
SPAWN_Y = -50.0
SPAWN_X_MARGIN = 50.0
FALL_SPEED_SPREAD = 2.0

# Basket catch band: from BASKET_OFFSET above the bottom edge, CATCH_BAND tall
BASKET_OFFSET = _get_float('BASKET_OFFSET', 50.0)
CATCH_BAND = _get_float('CATCH_BAND', 40.0)

# Visual
BACKGROUND_COLOR = (12, 10, 40)
BASKET_COLOR = (56, 189, 248)
STAR_COLOR = (250, 204, 21)
BOMB_COLOR = (239, 68, 68)
BOMB_FUSE_COLOR = (255, 255, 255)
TEXT_COLOR = (255, 255, 255)
BEST_COLOR = (100, 200, 255)
WARNING_COLOR = (255, 100, 100)
OVERLAY_COLOR = (0, 0, 0, 180)
