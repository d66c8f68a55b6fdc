"""Common GameState enum for all ExpoHub games.

All games report one of these states via their `state` property so the
launcher, the registry and the session machinery can treat them uniformly.
"""
from enum import Enum


class GameState(Enum):
    """Standard session states.

    States:
        IDLE: Waiting for the first interaction (no tasks scheduled)
        PLAYING: Active gameplay, scheduler running
        GAME_OVER: Session ended in loss, time-out or draw
        VICTORY: Session ended with an explicit win

    Transitions:
        IDLE -> PLAYING -> GAME_OVER | VICTORY
        any state -> PLAYING or IDLE on retry (game-dependent)
    """
    IDLE = "idle"
    PLAYING = "playing"
    GAME_OVER = "game_over"
    VICTORY = "victory"

    @property
    def is_terminal(self) -> bool:
        """True for GAME_OVER and VICTORY."""
        return self in (GameState.GAME_OVER, GameState.VICTORY)
