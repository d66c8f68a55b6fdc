"""Base class for all ExpoHub games.

All games inherit from BaseGame so the launcher and the game registry can
drive them the same way.

Game metadata (NAME, DESCRIPTION, etc.) and CLI arguments (ARGUMENTS)
are declared as class attributes, making them part of the plugin
architecture.

Each game owns a SessionStateMachine. update(dt) ticks the machine's
scheduler, so nothing moves unless the session scheduled it, and a game
whose session is over does no work at all.
"""
from abc import ABC, abstractmethod
from random import Random
from typing import Any, Dict, List, Optional

import pygame

from models import GameSettings, Point2D
from expohub.games.game_state import GameState
from expohub.games.input import InputAction, InputEvent
from expohub.games.scoring import ScoreEngine
from expohub.games.session import Session, SessionStateMachine
from expohub.logging import get_logger
from expohub.storage import merge_settings

log = get_logger('base_game')


class BaseGame(ABC):
    """Abstract base class for all ExpoHub games.

    Class Attributes (metadata):
        NAME: Display name for the game
        DESCRIPTION: Short description of gameplay
        VERSION: Semantic version string
        AUTHOR: Author/team name
        GAME_ID: Key for best scores and session records
        TRACKS_BEST: Whether the game keeps a high score
        RETRY_STARTS: Whether retry() goes straight to PLAYING (else IDLE)
        ARGUMENTS: List of CLI argument definitions for argparse

    Subclasses must implement:
        - primary_action(position): Click/tap handling
        - render(screen): Draw the game

    Optional overrides:
        - pointer_move(x): Continuous pointer handling
        - _install_tasks(machine): Register per-session scheduler tasks
        - _reset_simulation(): Rebuild game state for a new session
        - _on_resize(): React to a new play-field size

    Usage:
        class MyGame(BaseGame):
            NAME = "My Game"
            GAME_ID = "mygame"

            def primary_action(self, position):
                ...

            def render(self, screen):
                ...
    """

    # =========================================================================
    # Game Metadata (override in subclasses)
    # =========================================================================

    NAME: str = "Unnamed Game"
    DESCRIPTION: str = "No description"
    VERSION: str = "1.0.0"
    AUTHOR: str = "ExpoHub Team"
    GAME_ID: str = "unnamed"
    TRACKS_BEST: bool = True
    RETRY_STARTS: bool = True

    # CLI argument definitions for argparse
    # Each entry is a dict with keys: name, type, default, help, choices (optional), action (optional)
    ARGUMENTS: List[Dict[str, Any]] = []

    # Standard arguments available to every game
    _BASE_ARGUMENTS: List[Dict[str, Any]] = [
        {
            'name': '--seed',
            'type': int,
            'default': None,
            'help': 'Random seed for reproducible spawns and shuffles'
        },
    ]

    @classmethod
    def get_arguments(cls) -> List[Dict[str, Any]]:
        """Get all CLI arguments for this game (game-specific + base).

        Duplicates by name are removed; game-specific definitions win.
        """
        seen_names = set()
        result = []
        for arg in list(cls.ARGUMENTS) + cls._BASE_ARGUMENTS:
            name = arg.get('name', '')
            if name and name not in seen_names:
                seen_names.add(name)
                result.append(arg)
        return result

    @classmethod
    def get_info(cls) -> Dict[str, Any]:
        """Get game metadata as a dictionary.

        Returns:
            Dict with keys: name, description, version, author, arguments
        """
        return {
            'name': cls.NAME,
            'description': cls.DESCRIPTION,
            'version': cls.VERSION,
            'author': cls.AUTHOR,
            'arguments': cls.get_arguments(),
        }

    # =========================================================================
    # Instance Initialization
    # =========================================================================

    def __init__(
        self,
        width: int = 1280,
        height: int = 720,
        settings: Optional[GameSettings] = None,
        scores: Optional[ScoreEngine] = None,
        rng: Optional[Random] = None,
        seed: Optional[int] = None,
        **kwargs,
    ):
        """Initialize base game.

        Args:
            width: Play-field width in pixels
            height: Play-field height in pixels
            settings: Tunables, read once per session
            scores: Score engine with the best-score store
            rng: Random source for spawns and shuffles
            seed: Seed for a new random source when rng is None
        """
        self._width = width
        self._height = height
        self._settings = settings or GameSettings()
        self._scores = scores or ScoreEngine()
        self._rng = rng or Random(seed)
        self._surface_ready = False

        self._machine = SessionStateMachine(
            self.GAME_ID,
            self._scores,
            on_start=self._install_tasks,
            track_best=self.TRACKS_BEST,
        )

    # =========================================================================
    # Standard Interface
    # =========================================================================

    @property
    def state(self) -> GameState:
        """Current session state."""
        return self._machine.status

    @property
    def session(self) -> Session:
        return self._machine.session

    @property
    def machine(self) -> SessionStateMachine:
        return self._machine

    @property
    def best_score(self) -> int:
        return self._machine.best

    @property
    def size(self) -> tuple:
        return self._width, self._height

    def get_score(self) -> int:
        """Get current score."""
        return self._machine.session.score

    def attach(self, surface: Optional[pygame.Surface]) -> bool:
        """Bind the game to a drawable surface.

        Without a surface the game stays idle; sessions cannot start until
        a later attach() succeeds.

        Returns:
            True if the surface is usable
        """
        if surface is None:
            log.debug("%s: no drawable surface yet", self.GAME_ID)
            self._surface_ready = False
            return False
        self._width, self._height = surface.get_size()
        self._surface_ready = True
        self._on_resize()
        return True

    @property
    def ready(self) -> bool:
        return self._surface_ready

    def start(self, surface: Optional[pygame.Surface]) -> bool:
        """Attach surface and begin a session.

        Returns:
            False (with nothing scheduled) if surface is None or the
            session was not idle
        """
        if not self.attach(surface):
            return False
        return self._start_session()

    def handle_input(self, events: List[InputEvent]) -> None:
        """Dispatch input events to pointer_move() and primary_action()."""
        for event in events:
            if event.action is InputAction.POINTER_MOVE:
                self.pointer_move(event.position.x)
            else:
                self.primary_action(event.position)

    def pointer_move(self, x: float) -> None:
        """Continuous pointer position. Ignored by default."""
        pass

    @abstractmethod
    def primary_action(self, position: Point2D) -> None:
        """Discrete click/tap at position."""
        pass

    def update(self, dt: float) -> None:
        """Advance the session's scheduler by dt seconds."""
        self._machine.scheduler.tick(dt)

    @abstractmethod
    def render(self, screen: pygame.Surface) -> None:
        """Render the game.

        Args:
            screen: Pygame surface to draw on
        """
        pass

    # =========================================================================
    # Session Hooks
    # =========================================================================

    def _start_session(self) -> bool:
        """IDLE -> PLAYING, only once a surface is attached."""
        if not self._surface_ready:
            log.debug("%s: not ready, session not started", self.GAME_ID)
            return False
        return self._machine.start()

    def _install_tasks(self, machine: SessionStateMachine) -> None:
        """Register the session's scheduler tasks. Default: none."""
        pass

    def _reset_simulation(self) -> None:
        """Rebuild per-session state before a retry. Default: nothing."""
        pass

    def _on_resize(self) -> None:
        """Called after attach() picked up a new play-field size."""
        pass

    def retry(self) -> None:
        """Start over with a fresh session.

        The simulation is rebuilt around the new Session before the
        session starts, so the tasks installed on start see fresh state.
        """
        self._machine.retry(start=False)
        self._reset_simulation()
        if self.RETRY_STARTS:
            self._start_session()

    def _override_settings(self, section: str, **values) -> None:
        """Overlay CLI/keyword overrides onto one settings section.

        None values are skipped; invalid values are logged and ignored.
        """
        values = {key: value for key, value in values.items() if value is not None}
        if values:
            self._settings = merge_settings(self._settings, {section: values})

    def teardown(self) -> None:
        """Stop all scheduled work (game closed)."""
        self._machine.teardown()

    # =========================================================================
    # Game Actions
    # =========================================================================

    def get_available_actions(self) -> List[Dict[str, Any]]:
        """Actions the host UI may offer right now."""
        if self.state.is_terminal:
            return [{'id': 'retry', 'label': 'Play Again', 'style': 'primary'}]
        return []

    def execute_action(self, action_id: str) -> bool:
        """Execute a host UI action by ID. Returns True if handled."""
        if action_id == 'retry':
            self.retry()
            return True
        return False
