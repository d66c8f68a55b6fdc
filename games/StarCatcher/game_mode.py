"""
Star Catcher game mode.

Slide the basket to catch falling stars and dodge the bombs. Stars are
worth points, bombs cost points and a life. The run ends when the clock
or the lives run out.
"""
from typing import Optional

import pygame

from models import Point2D
from expohub.games import GameState
from expohub.games.base_game import BaseGame
from expohub.games.session import SessionStateMachine
from expohub.games.spawner import EntityKind
from expohub.logging import get_logger
from games.StarCatcher import config
from games.StarCatcher.simulation import (
    CatcherState,
    countdown,
    new_state,
    pointer_move,
    step,
)

log = get_logger('star_catcher')


class StarCatcherMode(BaseGame):
    """
    Star Catcher game mode.

    A tap starts the run; after that the basket follows the pointer. Once
    the run is over a tap starts over.
    """

    # Game metadata
    NAME = "Star Catcher"
    DESCRIPTION = "Catch the stars, dodge the bombs, beat the clock."
    VERSION = "1.0.0"
    GAME_ID = "starcatcher"

    # CLI argument definitions
    ARGUMENTS = [
        {
            'name': '--max-time',
            'type': int,
            'default': None,
            'help': 'Session length in seconds (10-300)'
        },
        {
            'name': '--lives',
            'type': int,
            'default': None,
            'help': 'Bombs allowed before game over (1-9)'
        },
        {
            'name': '--fall-speed',
            'type': float,
            'default': None,
            'help': 'Slowest item speed in pixels per frame (1-10)'
        },
    ]

    def __init__(
        self,
        max_time: Optional[int] = None,
        lives: Optional[int] = None,
        fall_speed: Optional[float] = None,
        **kwargs,
    ):
        """
        Initialize game mode.

        Args:
            max_time: Overrides settings.star_catcher.max_time
            lives: Overrides settings.star_catcher.lives
            fall_speed: Overrides settings.star_catcher.fall_speed
            **kwargs: Base game args (width, height, settings, scores, rng)
        """
        super().__init__(**kwargs)
        self._override_settings(
            'star_catcher',
            max_time=max_time,
            lives=lives,
            fall_speed=fall_speed,
        )
        self._machine.configure(self._settings.star_catcher.max_time)

        self._state = self._new_state()

        # Fonts (initialized lazily)
        self._font: Optional[pygame.font.Font] = None
        self._font_large: Optional[pygame.font.Font] = None

    def _new_state(self) -> CatcherState:
        return new_state(
            self.session, self._settings.star_catcher, self._width, self._height
        )

    @property
    def catcher(self) -> CatcherState:
        return self._state

    @property
    def time_left(self) -> int:
        return self.session.lives_or_time

    # =========================================================================
    # Session hooks
    # =========================================================================

    def _install_tasks(self, machine: SessionStateMachine) -> None:
        machine.every_frame('catcher', lambda dt: step(self._state, self._rng))
        machine.every('countdown', 1.0, lambda dt: countdown(self._state))

    def _reset_simulation(self) -> None:
        self._state = self._new_state()

    def _on_resize(self) -> None:
        if self.state is GameState.IDLE:
            self._state = self._new_state()

    # =========================================================================
    # Input
    # =========================================================================

    def pointer_move(self, x: float) -> None:
        if self.state is GameState.PLAYING:
            pointer_move(self._state, x)

    def primary_action(self, position: Point2D) -> None:
        """Start on the first tap, start over once the run is done."""
        if self.state is GameState.IDLE:
            if self._start_session():
                pointer_move(self._state, position.x)
        elif self.state.is_terminal:
            self.retry()

    # =========================================================================
    # Rendering
    # =========================================================================

    def _get_font(self) -> pygame.font.Font:
        """Get or create font."""
        if self._font is None:
            self._font = pygame.font.Font(None, 36)
        return self._font

    def _get_font_large(self) -> pygame.font.Font:
        """Get or create large font."""
        if self._font_large is None:
            self._font_large = pygame.font.Font(None, 72)
        return self._font_large

    def render(self, screen: pygame.Surface) -> None:
        """
        Render the game.

        Args:
            screen: Pygame surface to draw on
        """
        screen.fill(config.BACKGROUND_COLOR)

        for item in self._state.spawner.entities:
            self._render_item(screen, item)

        basket = self._state.basket
        basket_rect = pygame.Rect(
            int(basket.position),
            int(self._height - config.BASKET_OFFSET),
            int(basket.size),
            int(self._state.settings.basket_height),
        )
        pygame.draw.rect(screen, config.BASKET_COLOR, basket_rect, border_radius=6)

        self._render_ui(screen)

        if self.state is GameState.IDLE:
            self._render_message(screen, "Tap to Start", [])
        elif self.state is GameState.GAME_OVER:
            title = "Time's Up!" if self._state.survived else "Game Over"
            lines = [f"Score: {self.get_score()}"]
            if self._machine.new_best:
                lines.append("New best!")
            lines.append("Tap to play again")
            self._render_message(screen, title, lines, overlay=True)

    def _render_item(self, screen: pygame.Surface, item) -> None:
        half = int(config.ITEM_SIZE / 2)
        center = (int(item.x) + half, int(item.y) + half)
        if item.kind is EntityKind.HAZARD:
            pygame.draw.circle(screen, config.BOMB_COLOR, center, half - 4)
            pygame.draw.line(
                screen, config.BOMB_FUSE_COLOR,
                (center[0], center[1] - half + 4), (center[0] + 6, center[1] - half - 4), 3,
            )
        else:
            points = []
            for i in range(10):
                radius = half if i % 2 == 0 else half // 2
                angle = i * 36 - 90
                vector = pygame.math.Vector2(radius, 0).rotate(angle)
                points.append((center[0] + vector.x, center[1] + vector.y))
            pygame.draw.polygon(screen, config.STAR_COLOR, points)

    def _render_ui(self, screen: pygame.Surface) -> None:
        """Score, best, lives and the clock."""
        font = self._get_font()

        score_text = font.render(f"Score: {self.get_score()}", True, config.TEXT_COLOR)
        screen.blit(score_text, (10, 10))

        best_text = font.render(f"Best: {self.best_score}", True, config.BEST_COLOR)
        screen.blit(best_text, (10, 50))

        lives_text = font.render(
            f"Lives: {self._state.lives}",
            True,
            config.WARNING_COLOR if self._state.lives <= 1 else config.TEXT_COLOR,
        )
        screen.blit(lives_text, (self._width - 160, 10))

        time_text = font.render(
            f"Time: {self.time_left}",
            True,
            config.WARNING_COLOR if self.time_left <= 10 else config.TEXT_COLOR,
        )
        screen.blit(time_text, (self._width - 160, 50))

    def _render_message(self, screen: pygame.Surface, title: str, lines, overlay: bool = False) -> None:
        if overlay:
            shade = pygame.Surface((self._width, self._height), pygame.SRCALPHA)
            shade.fill(config.OVERLAY_COLOR)
            screen.blit(shade, (0, 0))

        font = self._get_font_large()
        text = font.render(title, True, config.TEXT_COLOR)
        screen.blit(text, text.get_rect(center=(self._width // 2, self._height // 2 - 50)))

        font_small = self._get_font()
        for i, line in enumerate(lines):
            rendered = font_small.render(line, True, config.TEXT_COLOR)
            screen.blit(rendered, rendered.get_rect(
                center=(self._width // 2, self._height // 2 + 20 + i * 40)
            ))
