"""
Game Registry - Auto-discovery and management of ExpoHub games.

Games are discovered by scanning the games/ directory for subdirectories
containing a game_mode.py with a class inheriting from BaseGame.

Game metadata and CLI arguments are retrieved from the game class itself
(via BaseGame class attributes).

Usage:
    from games.registry import GameRegistry

    registry = GameRegistry()
    available = registry.list_games()  # ['connectfour', 'flappydrone', ...]

    # Get game info including CLI arguments
    info = registry.get_game_info('starcatcher')
    args = registry.get_game_arguments('starcatcher')

    # Create game instance
    game = registry.create_game('flappydrone', width=1920, height=1080)
"""

import importlib
import inspect
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Type

from expohub.games.base_game import BaseGame
from expohub.games.input import InputManager
from expohub.games.input.sources.mouse import MouseInputSource
from expohub.logging import get_logger

log = get_logger('registry')

GAMES_DIR = Path(__file__).parent


@dataclass
class GameInfo:
    """Information about a registered game."""
    name: str
    slug: str  # lowercase identifier (directory name)
    description: str
    version: str
    author: str
    module_path: str  # e.g., 'games.FlappyDrone'
    game_id: str
    tracks_best: bool = True

    # CLI arguments (from game class)
    arguments: List[Dict[str, Any]] = field(default_factory=list)

    # Optional features
    has_config: bool = False
    config_file: Optional[str] = None


class GameRegistry:
    """
    Registry for auto-discovering and managing ExpoHub games.

    Discovery works by:
    1. Looking for game_mode.py in each game directory
    2. Importing it as games.<Dir>.game_mode
    3. Finding the class defined there that inherits from BaseGame
    4. Reading metadata from class attributes (NAME, DESCRIPTION, etc.)
    """

    def __init__(self, games_dir: Optional[Path] = None):
        """
        Initialize the game registry.

        Args:
            games_dir: Directory to scan (defaults to this package's directory)
        """
        self._games_dir = games_dir or GAMES_DIR
        self._games: Dict[str, GameInfo] = {}
        self._game_classes: Dict[str, Type[BaseGame]] = {}
        self._discover_games()

    def _discover_games(self) -> None:
        """Register every directory holding a game_mode.py."""
        if not self._games_dir.exists():
            log.warning("Games directory %s does not exist", self._games_dir)
            return

        for game_dir in sorted(self._games_dir.iterdir()):
            if not game_dir.is_dir():
                continue
            if game_dir.name.startswith('_') or game_dir.name.startswith('.'):
                continue
            if (game_dir / 'game_mode.py').exists():
                self._register_game(game_dir)

    def _register_game(self, game_dir: Path) -> None:
        """
        Register a game from its directory.

        A game whose module fails to import is skipped with a warning so
        one broken game does not take down the hub.

        Args:
            game_dir: Path to game directory
        """
        slug = game_dir.name.lower()
        module_path = f"games.{game_dir.name}"

        try:
            game_class = self._find_game_class(module_path)
        except Exception as e:
            log.warning("Failed to load game from %s: %s", game_dir, e)
            return

        if game_class is None:
            log.warning("No BaseGame subclass in %s/game_mode.py", game_dir)
            return

        self._game_classes[slug] = game_class

        # Check for config files
        has_config = (game_dir / '.env').exists() or (game_dir / 'config.py').exists()
        config_file = '.env' if (game_dir / '.env').exists() else None

        self._games[slug] = GameInfo(
            name=game_class.NAME,
            slug=slug,
            description=game_class.DESCRIPTION,
            version=game_class.VERSION,
            author=game_class.AUTHOR,
            module_path=module_path,
            game_id=game_class.GAME_ID,
            tracks_best=game_class.TRACKS_BEST,
            arguments=game_class.get_arguments(),
            has_config=has_config,
            config_file=config_file,
        )
        log.debug("Registered %s (%s)", slug, game_class.__name__)

    def _find_game_class(self, module_path: str) -> Optional[Type[BaseGame]]:
        """
        Find the BaseGame subclass defined in a game's game_mode module.

        Args:
            module_path: Module path (e.g., 'games.FlappyDrone')

        Returns:
            The game class, or None if not found
        """
        module = importlib.import_module(f"{module_path}.game_mode")

        for name, obj in inspect.getmembers(module, inspect.isclass):
            # Skip imported classes (only want classes defined in this module)
            if obj.__module__ != module.__name__:
                continue
            if issubclass(obj, BaseGame) and obj is not BaseGame:
                return obj
        return None

    def list_games(self) -> List[str]:
        """
        Get list of available game slugs.

        Returns:
            List of game slug identifiers
        """
        return sorted(self._games.keys())

    def get_game_info(self, slug: str) -> Optional[GameInfo]:
        """
        Get information about a specific game.

        Args:
            slug: Game identifier

        Returns:
            GameInfo or None if not found
        """
        return self._games.get(slug.lower())

    def get_game_arguments(self, slug: str) -> List[Dict[str, Any]]:
        """
        Get CLI arguments for a specific game.

        Args:
            slug: Game identifier

        Returns:
            List of argument definitions for argparse
        """
        info = self._games.get(slug.lower())
        if info is None:
            return []
        return info.arguments

    def get_game_class(self, slug: str) -> Optional[Type[BaseGame]]:
        """Get the game class for a specific game, or None."""
        return self._game_classes.get(slug.lower())

    def get_all_games(self) -> Dict[str, GameInfo]:
        """
        Get all registered games.

        Returns:
            Dict mapping slug to GameInfo
        """
        return self._games.copy()

    def create_game(
        self,
        slug: str,
        width: int,
        height: int,
        **kwargs
    ) -> BaseGame:
        """
        Create a game mode instance.

        Args:
            slug: Game identifier
            width: Display width
            height: Display height
            **kwargs: Game-specific arguments and base game args
                (settings, scores, rng, seed)

        Returns:
            Game mode instance

        Raises:
            ValueError: If game not found
        """
        game_class = self._game_classes.get(slug.lower())
        if game_class is None:
            available = ', '.join(self.list_games())
            raise ValueError(f"Unknown game: {slug}. Available: {available}")

        return game_class(width=width, height=height, **kwargs)

    def create_input_manager(self, slug: str) -> InputManager:
        """
        Create an InputManager for a game, reading the mouse.

        Args:
            slug: Game identifier

        Returns:
            InputManager instance
        """
        if slug.lower() not in self._games:
            raise ValueError(f"Unknown game: {slug}")
        return InputManager(MouseInputSource())


# Singleton instance for convenience
_registry: Optional[GameRegistry] = None


def get_registry() -> GameRegistry:
    """Get the global game registry instance, scanning on first call."""
    global _registry
    if _registry is None:
        _registry = GameRegistry()
    return _registry
