"""
Per-game tunables.

These are the numbers the settings form edits and the games read once at
session start. Field bounds are the documented ranges; the games clamp
only degenerate combinations (a gap taller than the field, for example).

Examples:
    >>> settings = GameSettings()
    >>> settings.flappy_drone.gravity
    0.3
    >>> settings.connect_four.rows
    6
"""
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Difficulty(str, Enum):
    """Memory Match deck sizes."""
    EASY = "easy"
    HARD = "hard"
    INSANE = "insane"


class ConnectFourSettings(BaseModel):
    """Connect Four board dimensions."""
    rows: int = Field(6, ge=4, le=10)
    cols: int = Field(7, ge=4, le=10)

    model_config = ConfigDict(frozen=True)


class FlappyDroneSettings(BaseModel):
    """Flappy Drone physics and obstacle tunables.

    Attributes:
        bird_size: Drone edge length in pixels
        gravity: Velocity added per tick
        jump_strength: Velocity set by a flap (negative = up)
        obstacle_width: Pipe width in pixels
        obstacle_gap: Base opening height before the difficulty ramp
        obstacle_speed: Pixels per tick the pipes scroll left
        spawn_interval: Ticks between obstacles
        responsive: Scale the values above to the play field
    """
    bird_size: float = Field(20, ge=10, le=50)
    gravity: float = Field(0.3, ge=0.1, le=1.0)
    jump_strength: float = Field(-7.5, ge=-20, le=-1)
    obstacle_width: float = Field(60, ge=20, le=100)
    obstacle_gap: float = Field(220, ge=100, le=400)
    obstacle_speed: float = Field(2.5, ge=1, le=10)
    spawn_interval: int = Field(180, ge=1, le=600)
    responsive: bool = True

    model_config = ConfigDict(frozen=True)


class StarCatcherSettings(BaseModel):
    """Star Catcher tunables.

    Attributes:
        fall_speed: Slowest item speed in pixels per tick
        max_time: Session length in seconds
        lives: Bombs the player may catch before the session ends
        basket_width: Basket width in pixels
        basket_height: Basket height in pixels (drawing only)
        spawn_interval: Ticks between items
        hazard_chance: Probability a new item is a bomb
        catch_points: Score for catching a star
        hazard_penalty: Score lost for catching a bomb
    """
    fall_speed: float = Field(3, ge=1, le=10)
    max_time: int = Field(60, ge=10, le=300)
    lives: int = Field(3, ge=1, le=9)
    basket_width: float = Field(80, ge=20, le=300)
    basket_height: float = Field(20, ge=5, le=60)
    spawn_interval: int = Field(40, ge=1, le=600)
    hazard_chance: float = Field(0.2, ge=0.0, le=1.0)
    catch_points: int = Field(10, ge=1, le=1000)
    hazard_penalty: int = Field(50, ge=0, le=1000)

    model_config = ConfigDict(frozen=True)


class MemoryMatchSettings(BaseModel):
    """Memory Match options."""
    difficulty: Difficulty = Difficulty.EASY

    model_config = ConfigDict(frozen=True)


class GameSettings(BaseModel):
    """All per-game tunables, one section per game."""
    connect_four: ConnectFourSettings = Field(default_factory=ConnectFourSettings)
    flappy_drone: FlappyDroneSettings = Field(default_factory=FlappyDroneSettings)
    star_catcher: StarCatcherSettings = Field(default_factory=StarCatcherSettings)
    memory_match: MemoryMatchSettings = Field(default_factory=MemoryMatchSettings)

    model_config = ConfigDict(frozen=True)
