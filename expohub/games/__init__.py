"""
ExpoHub Game Framework.

Provides:
- base_game: BaseGame class that all games inherit from
- game_state: Standard GameState enum (IDLE, PLAYING, GAME_OVER, VICTORY)
- session: Session state and SessionStateMachine
- scheduler: Per-frame, interval and one-shot tasks
- scoring: ScoreEngine (score clamping, best scores)
- physics: Body and Euler integration
- spawner: Entities, spawn countdown, difficulty ramp
- collision: Ordered AABB contact detection
- input: Common input event handling
"""

from expohub.games.game_state import GameState
from expohub.games.scheduler import Scheduler, ScheduledTask
from expohub.games.scoring import ScoreEngine
from expohub.games.session import Session, SessionStateMachine
from expohub.games.base_game import BaseGame

__all__ = [
    'GameState',
    'Scheduler',
    'ScheduledTask',
    'ScoreEngine',
    'Session',
    'SessionStateMachine',
    'BaseGame',
]
