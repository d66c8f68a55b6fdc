"""
MemoryMatch - Configuration loader.

Display constants and reveal delays, loaded from a .env file beside this
module. The deck size follows models.settings.MemoryMatchSettings.
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

# Seconds a face-up pair stays before it is resolved
MATCH_DELAY = _get_float('MATCH_DELAY', 0.5)
MISMATCH_DELAY = _get_float('MISMATCH_DELAY', 1.0)

# Layout
HEADER_HEIGHT = 80
CARD_GAP = 12
WIDE_DECK = 16  # decks larger than this use WIDE_COLUMNS
COLUMNS = 4
WIDE_COLUMNS = 6
BUTTON_WIDTH = 240
BUTTON_HEIGHT = 80
BUTTON_GAP = 24

# Visual
BACKGROUND_COLOR = (15, 23, 42)
CARD_BACK_COLOR = (79, 70, 229)
CARD_FACE_COLOR = (241, 245, 249)
CARD_MATCHED_COLOR = (134, 239, 172)
CARD_TEXT_COLOR = (15, 23, 42)
BUTTON_COLOR = (37, 99, 235)
TEXT_COLOR = (255, 255, 255)
OVERLAY_COLOR = (0, 0, 0, 160)
VICTORY_COLOR = (250, 204, 21)
