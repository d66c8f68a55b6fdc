"""
Unified models library for ExpoHub.

This package provides the Pydantic data models shared across games:
- Primitives: Basic geometric types (Point2D, Rectangle)
- Settings: Per-game tunables (GameSettings and its sections)

Usage:
    >>> from models import Point2D, Rectangle, GameSettings
    >>> from models.settings import FlappyDroneSettings
"""

from .primitives import (
    Point2D,
    Rectangle,
)

from .settings import (
    Difficulty,
    ConnectFourSettings,
    FlappyDroneSettings,
    StarCatcherSettings,
    MemoryMatchSettings,
    GameSettings,
)

__all__ = [
    'Point2D',
    'Rectangle',
    'Difficulty',
    'ConnectFourSettings',
    'FlappyDroneSettings',
    'StarCatcherSettings',
    'MemoryMatchSettings',
    'GameSettings',
]
