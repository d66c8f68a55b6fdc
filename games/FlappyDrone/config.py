"""
FlappyDrone - Configuration loader.

Display constants and fixed geometry, loaded from a .env file beside this
module. Gameplay tunables (gravity, gap, speed...) live in
models.settings.FlappyDroneSettings.
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

# The drone flies in a fixed column
DRONE_X = _get_float('DRONE_X', 50.0)

# Responsive scaling reference field
REF_WIDTH = 1200
REF_WIDTH_MOBILE = 450
REF_HEIGHT = 800
MOBILE_BREAKPOINT = 600
MAX_SCALE = 1.2
MIN_WIDTH_SCALE = 0.5
MIN_WIDTH_SCALE_MOBILE = 0.6
MIN_HEIGHT_SCALE = 0.5

# Visual
BACKGROUND_TOP = (15, 23, 42)
BACKGROUND_BOTTOM = (30, 41, 59)
PIPE_COLOR = (34, 197, 94)
PIPE_EDGE_COLOR = (74, 222, 128)
PIPE_EDGE_WIDTH = 5
DRONE_COLOR = (251, 191, 36)
EYE_COLOR = (255, 255, 255)
PUPIL_COLOR = (0, 0, 0)
TEXT_COLOR = (255, 255, 255)
BEST_COLOR = (100, 200, 255)
OVERLAY_COLOR = (0, 0, 0, 180)
CRASH_COLOR = (255, 100, 100)
