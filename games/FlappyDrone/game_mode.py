"""
Flappy Drone game mode.

Tap to keep the drone airborne and fly it through the gaps between pipes.
Every pipe cleared scores a point, and every ten points the gaps get a
little narrower. Touching a pipe or leaving the field ends the run.
"""
from typing import Optional

import pygame

from models import Point2D
from expohub.games import GameState
from expohub.games.base_game import BaseGame
from expohub.games.session import SessionStateMachine
from expohub.logging import get_logger
from games.FlappyDrone import config
from games.FlappyDrone.simulation import (
    FlyerParams,
    FlyerState,
    flap,
    new_state,
    step,
)

log = get_logger('flappy_drone')


class FlappyDroneMode(BaseGame):
    """
    Flappy Drone game mode.

    IDLE shows the drone at rest; the first tap starts the session and
    flaps. After a crash a tap starts over.
    """

    # Game metadata
    NAME = "Flappy Drone"
    DESCRIPTION = "Tap to fly through the gaps. How far can you get?"
    VERSION = "1.0.0"
    GAME_ID = "flappydrone"

    # CLI argument definitions
    ARGUMENTS = [
        {
            'name': '--gravity',
            'type': float,
            'default': None,
            'help': 'Velocity added per frame (0.1-1.0)'
        },
        {
            'name': '--obstacle-gap',
            'type': float,
            'default': None,
            'help': 'Base gap height in pixels (100-400)'
        },
        {
            'name': '--obstacle-speed',
            'type': float,
            'default': None,
            'help': 'Pipe speed in pixels per frame (1-10)'
        },
    ]

    def __init__(
        self,
        gravity: Optional[float] = None,
        obstacle_gap: Optional[float] = None,
        obstacle_speed: Optional[float] = None,
        **kwargs,
    ):
        """
        Initialize game mode.

        Args:
            gravity: Overrides settings.flappy_drone.gravity
            obstacle_gap: Overrides settings.flappy_drone.obstacle_gap
            obstacle_speed: Overrides settings.flappy_drone.obstacle_speed
            **kwargs: Base game args (width, height, settings, scores, rng)
        """
        super().__init__(**kwargs)
        self._override_settings(
            'flappy_drone',
            gravity=gravity,
            obstacle_gap=obstacle_gap,
            obstacle_speed=obstacle_speed,
        )

        self._state = self._new_state()

        # Rendering caches (initialized lazily)
        self._font: Optional[pygame.font.Font] = None
        self._font_large: Optional[pygame.font.Font] = None
        self._background: Optional[pygame.Surface] = None

    def _new_state(self) -> FlyerState:
        params = FlyerParams.from_settings(
            self._settings.flappy_drone, self._width, self._height
        )
        log.debug("Flyer params for %dx%d: %s", self._width, self._height, params)
        return new_state(self.session, params, self._width, self._height)

    @property
    def flyer(self) -> FlyerState:
        return self._state

    # =========================================================================
    # Session hooks
    # =========================================================================

    def _install_tasks(self, machine: SessionStateMachine) -> None:
        machine.every_frame('flyer', lambda dt: step(self._state, self._rng))

    def _reset_simulation(self) -> None:
        self._state = self._new_state()

    def _on_resize(self) -> None:
        self._background = None
        if self.state is GameState.IDLE:
            self._state = self._new_state()

    # =========================================================================
    # Input
    # =========================================================================

    def primary_action(self, position: Point2D) -> None:
        """Start, flap, or start over depending on the session state."""
        if self.state is GameState.IDLE:
            if self._start_session():
                flap(self._state)
        elif self.state is GameState.PLAYING:
            flap(self._state)
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

    def _get_background(self) -> pygame.Surface:
        """Vertical gradient, rebuilt when the field size changes."""
        if self._background is None:
            surface = pygame.Surface((self._width, self._height))
            top, bottom = config.BACKGROUND_TOP, config.BACKGROUND_BOTTOM
            for y in range(self._height):
                t = y / max(1, self._height - 1)
                color = tuple(int(a + (b - a) * t) for a, b in zip(top, bottom))
                pygame.draw.line(surface, color, (0, y), (self._width, y))
            self._background = surface
        return self._background

    def render(self, screen: pygame.Surface) -> None:
        """
        Render the game.

        Args:
            screen: Pygame surface to draw on
        """
        screen.blit(self._get_background(), (0, 0))

        for obstacle in self._state.spawner.entities:
            self._render_obstacle(screen, obstacle)

        self._render_drone(screen)
        self._render_ui(screen)

        if self.state is GameState.IDLE:
            self._render_prompt(screen, "Tap to Start")
        elif self.state is GameState.GAME_OVER:
            self._render_game_over(screen)

    def _render_obstacle(self, screen: pygame.Surface, obstacle) -> None:
        """Top and bottom pipe around the opening."""
        x, width = int(obstacle.x), int(obstacle.width)
        gap_y = int(obstacle.gap_y or 0)
        bottom_top = int(gap_y + self._state.gap)

        top_rect = pygame.Rect(x, 0, width, gap_y)
        bottom_rect = pygame.Rect(x, bottom_top, width, self._height - bottom_top)
        for rect in (top_rect, bottom_rect):
            if rect.height > 0:
                pygame.draw.rect(screen, config.PIPE_COLOR, rect)
                pygame.draw.rect(screen, config.PIPE_EDGE_COLOR, rect, config.PIPE_EDGE_WIDTH)

    def _render_drone(self, screen: pygame.Surface) -> None:
        body = self._state.body
        radius = int(body.size / 2)
        center = (int(self._state.drone_x + radius), int(body.position + radius))
        pygame.draw.circle(screen, config.DRONE_COLOR, center, radius)

        eye = (center[0] + radius // 3, center[1] - radius // 3)
        pygame.draw.circle(screen, config.EYE_COLOR, eye, max(2, radius // 3))
        pygame.draw.circle(screen, config.PUPIL_COLOR, eye, max(1, radius // 6))

    def _render_ui(self, screen: pygame.Surface) -> None:
        """Score and best score."""
        font = self._get_font()

        score_text = font.render(f"Score: {self.get_score()}", True, config.TEXT_COLOR)
        screen.blit(score_text, (10, 10))

        best_text = font.render(f"Best: {self.best_score}", True, config.BEST_COLOR)
        screen.blit(best_text, (10, 50))

    def _render_prompt(self, screen: pygame.Surface, message: str) -> None:
        font = self._get_font_large()
        text = font.render(message, True, config.TEXT_COLOR)
        text_rect = text.get_rect(center=(self._width // 2, self._height // 2 - 80))
        screen.blit(text, text_rect)

    def _render_game_over(self, screen: pygame.Surface) -> None:
        """Crash overlay with the final score."""
        overlay = pygame.Surface((self._width, self._height), pygame.SRCALPHA)
        overlay.fill(config.OVERLAY_COLOR)
        screen.blit(overlay, (0, 0))

        font = self._get_font_large()
        text = font.render("Crashed!", True, config.CRASH_COLOR)
        text_rect = text.get_rect(center=(self._width // 2, self._height // 2 - 50))
        screen.blit(text, text_rect)

        font_small = self._get_font()
        lines = [f"Score: {self.get_score()}", "Tap to try again"]
        if self._machine.new_best:
            lines.insert(1, "New best!")
        for i, line in enumerate(lines):
            rendered = font_small.render(line, True, config.TEXT_COLOR)
            rect = rendered.get_rect(center=(self._width // 2, self._height // 2 + 20 + i * 40))
            screen.blit(rendered, rect)
