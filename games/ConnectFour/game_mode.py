"""
Connect Four game mode.

Two players share the screen and take turns dropping pieces. Four in a
row (across, up or diagonally) wins; a full board is a draw. There is no
high score.
"""
from typing import Optional

import pygame

from models import Point2D
from expohub.games import GameState
from expohub.games.base_game import BaseGame
from games.ConnectFour import config
from games.ConnectFour.grid import GridResolver, Player

PLAYER_COLORS = {
    Player.RED: config.RED_COLOR,
    Player.GREEN: config.GREEN_COLOR,
}

PLAYER_NAMES = {
    Player.RED: "Red",
    Player.GREEN: "Green",
}


class ConnectFourMode(BaseGame):
    """
    Connect Four game mode.

    The session starts as soon as a surface is attached. A click anywhere
    in a column drops a piece there; after the game a click starts over.
    """

    # Game metadata
    NAME = "Connect Four"
    DESCRIPTION = "Two players, one board. Line up four to win."
    VERSION = "1.0.0"
    GAME_ID = "connectfour"
    TRACKS_BEST = False

    # CLI argument definitions
    ARGUMENTS = [
        {
            'name': '--rows',
            'type': int,
            'default': None,
            'help': 'Board rows (4-10)'
        },
        {
            'name': '--cols',
            'type': int,
            'default': None,
            'help': 'Board columns (4-10)'
        },
    ]

    def __init__(self, rows: Optional[int] = None, cols: Optional[int] = None, **kwargs):
        """
        Initialize game mode.

        Args:
            rows: Overrides settings.connect_four.rows
            cols: Overrides settings.connect_four.cols
            **kwargs: Base game args (width, height, settings, scores, rng)
        """
        super().__init__(**kwargs)
        self._override_settings('connect_four', rows=rows, cols=cols)

        board = self._settings.connect_four
        self._resolver = GridResolver(board.rows, board.cols, session=self.session)

        # Fonts (initialized lazily)
        self._font: Optional[pygame.font.Font] = None
        self._font_large: Optional[pygame.font.Font] = None

    @property
    def resolver(self) -> GridResolver:
        return self._resolver

    # =========================================================================
    # Session hooks
    # =========================================================================

    def _reset_simulation(self) -> None:
        self._resolver.reset(session=self.session)

    def _on_resize(self) -> None:
        if self.state is GameState.IDLE:
            self._start_session()

    # =========================================================================
    # Layout
    # =========================================================================

    def _cell_size(self) -> int:
        usable_w = self._width - 2 * config.BOARD_MARGIN
        usable_h = self._height - config.HEADER_HEIGHT - config.BOARD_MARGIN
        return max(1, min(usable_w // self._resolver.cols, usable_h // self._resolver.rows))

    def _board_origin(self) -> tuple:
        """Top-left corner of the board, centered horizontally."""
        cell = self._cell_size()
        left = (self._width - cell * self._resolver.cols) // 2
        return left, config.HEADER_HEIGHT

    def column_at(self, x: float) -> Optional[int]:
        """Board column under screen x, or None outside the board."""
        left, _ = self._board_origin()
        column = int((x - left) // self._cell_size())
        if 0 <= column < self._resolver.cols:
            return column
        return None

    # =========================================================================
    # Input
    # =========================================================================

    def primary_action(self, position: Point2D) -> None:
        """Drop a piece in the clicked column, or start over after the game."""
        if self.state.is_terminal:
            self.retry()
            return
        if self.state is not GameState.PLAYING:
            return

        column = self.column_at(position.x)
        if column is None:
            return
        if self._resolver.place(column) is not None:
            self._machine.settle()

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
        self._render_board(screen)
        self._render_status(screen)

        if self.state.is_terminal:
            self._render_result(screen)

    def _render_board(self, screen: pygame.Surface) -> None:
        grid = self._resolver.grid
        cell = self._cell_size()
        left, top = self._board_origin()

        board_rect = pygame.Rect(left, top, cell * grid.cols, cell * grid.rows)
        pygame.draw.rect(screen, config.BOARD_COLOR, board_rect, border_radius=12)

        radius = max(1, cell // 2 - config.PIECE_PADDING)
        last = self._resolver.last_move
        for row in range(grid.rows):
            # Row 0 is drawn at the bottom
            y = top + (grid.rows - 1 - row) * cell + cell // 2
            for col in range(grid.cols):
                x = left + col * cell + cell // 2
                player = grid.get(row, col)
                color = PLAYER_COLORS[player] if player else config.EMPTY_COLOR
                pygame.draw.circle(screen, color, (x, y), radius)
                if last is not None and (last.row, last.col) == (row, col):
                    pygame.draw.circle(screen, config.HIGHLIGHT_COLOR, (x, y), radius, 3)

    def _render_status(self, screen: pygame.Surface) -> None:
        font = self._get_font()
        if self.state is GameState.PLAYING:
            player = self._resolver.current_player
            text = font.render(f"{PLAYER_NAMES[player]} to move", True, PLAYER_COLORS[player])
        else:
            text = font.render("Connect Four", True, config.TEXT_COLOR)
        screen.blit(text, text.get_rect(center=(self._width // 2, config.HEADER_HEIGHT // 2)))

    def _render_result(self, screen: pygame.Surface) -> None:
        overlay = pygame.Surface((self._width, self._height), pygame.SRCALPHA)
        overlay.fill(config.OVERLAY_COLOR)
        screen.blit(overlay, (0, 0))

        winner = self._resolver.winner
        if winner is not None:
            title, color = f"{PLAYER_NAMES[winner]} wins!", PLAYER_COLORS[winner]
        else:
            title, color = "Draw", config.TEXT_COLOR

        font = self._get_font_large()
        text = font.render(title, True, color)
        screen.blit(text, text.get_rect(center=(self._width // 2, self._height // 2 - 30)))

        hint = self._get_font().render("Click to play again", True, config.TEXT_COLOR)
        screen.blit(hint, hint.get_rect(center=(self._width // 2, self._height // 2 + 30)))
