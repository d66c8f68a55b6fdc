"""
Memory Match game mode.

Pick a difficulty, then turn over two cards at a time looking for pairs.
Matching pairs stay face up; the game is won when every pair is found.
"""
from typing import List, Optional

import pygame

from models import Difficulty, Point2D
from expohub.games import GameState
from expohub.games.base_game import BaseGame
from expohub.games.session import end
from expohub.logging import get_logger
from games.MemoryMatch import config
from games.MemoryMatch.deck import MemoryBoard, Pair

log = get_logger('memory_match')


class MemoryMatchMode(BaseGame):
    """
    Memory Match game mode.

    IDLE is the difficulty picker. Choosing a difficulty deals a new deck
    and starts the session; after a win a click returns to the picker.
    """

    # Game metadata
    NAME = "Memory Match"
    DESCRIPTION = "Find every pair of logos in as few moves as you can."
    VERSION = "1.0.0"
    GAME_ID = "memorymatch"
    TRACKS_BEST = False
    RETRY_STARTS = False

    # CLI argument definitions
    ARGUMENTS = [
        {
            'name': '--difficulty',
            'type': str,
            'default': None,
            'choices': [d.value for d in Difficulty],
            'help': 'Preselect a deck instead of showing the picker'
        },
    ]

    def __init__(self, difficulty: Optional[str] = None, **kwargs):
        """
        Initialize game mode.

        Args:
            difficulty: Deal this deck as soon as a surface is attached
            **kwargs: Base game args (width, height, settings, scores, rng)
        """
        super().__init__(**kwargs)
        self._override_settings('memory_match', difficulty=difficulty)
        self._autostart = difficulty is not None

        self._difficulty = self._settings.memory_match.difficulty
        self._board = MemoryBoard([])

        # Fonts (initialized lazily)
        self._font: Optional[pygame.font.Font] = None
        self._font_large: Optional[pygame.font.Font] = None

    @property
    def board(self) -> MemoryBoard:
        return self._board

    @property
    def difficulty(self) -> Difficulty:
        return self._difficulty

    # =========================================================================
    # Session hooks
    # =========================================================================

    def _reset_simulation(self) -> None:
        self._board = MemoryBoard([])

    def _on_resize(self) -> None:
        if self._autostart and self.state is GameState.IDLE:
            self._autostart = False
            self.choose_difficulty(self._difficulty)

    def choose_difficulty(self, difficulty: Difficulty) -> bool:
        """Deal a fresh deck and start playing.

        Returns:
            False if no surface is attached or a game is in progress
        """
        if self.state is not GameState.IDLE:
            return False
        self._difficulty = Difficulty(difficulty)
        self._board = MemoryBoard.deal(self._difficulty, self._rng)
        log.info("Dealt %d pairs (%s)", self._board.pairs, self._difficulty.value)
        return self._start_session()

    # =========================================================================
    # Card resolution
    # =========================================================================

    def flip(self, index: int) -> None:
        """Turn over a card; schedule the pair's resolution on the second one."""
        if self.state is not GameState.PLAYING:
            return
        pair = self._board.flip(index)
        if pair is None:
            return

        if self._board.is_match(pair):
            self._machine.after('match', config.MATCH_DELAY, lambda dt: self._on_match(pair))
        else:
            self._machine.after('flip_back', config.MISMATCH_DELAY, lambda dt: self._board.hide_pair(pair))

    def _on_match(self, pair: Pair) -> None:
        self._board.resolve_match(pair)
        if self._board.all_matched:
            log.info("All pairs found in %d moves", self._board.moves)
            end(self.session, GameState.VICTORY)

    # =========================================================================
    # Layout
    # =========================================================================

    def _columns(self) -> int:
        return config.WIDE_COLUMNS if len(self._board.cards) > config.WIDE_DECK else config.COLUMNS

    def card_rects(self) -> List[pygame.Rect]:
        """Screen rectangle of every card, in deck order."""
        count = len(self._board.cards)
        if count == 0:
            return []
        cols = self._columns()
        rows = (count + cols - 1) // cols
        gap = config.CARD_GAP

        usable_h = self._height - config.HEADER_HEIGHT - gap
        size = max(1, min(
            (self._width - gap * (cols + 1)) // cols,
            (usable_h - gap * rows) // rows,
        ))
        left = (self._width - (cols * size + (cols - 1) * gap)) // 2
        top = config.HEADER_HEIGHT

        return [
            pygame.Rect(left + (i % cols) * (size + gap), top + (i // cols) * (size + gap), size, size)
            for i in range(count)
        ]

    def difficulty_buttons(self) -> List[tuple]:
        """(difficulty, rect) for each picker button."""
        total = len(Difficulty) * config.BUTTON_WIDTH + (len(Difficulty) - 1) * config.BUTTON_GAP
        left = (self._width - total) // 2
        top = self._height // 2 - config.BUTTON_HEIGHT // 2
        return [
            (difficulty, pygame.Rect(
                left + i * (config.BUTTON_WIDTH + config.BUTTON_GAP), top,
                config.BUTTON_WIDTH, config.BUTTON_HEIGHT,
            ))
            for i, difficulty in enumerate(Difficulty)
        ]

    # =========================================================================
    # Input
    # =========================================================================

    def primary_action(self, position: Point2D) -> None:
        point = (int(position.x), int(position.y))
        if self.state is GameState.IDLE:
            for difficulty, rect in self.difficulty_buttons():
                if rect.collidepoint(point):
                    self.choose_difficulty(difficulty)
                    return
        elif self.state is GameState.PLAYING:
            for index, rect in enumerate(self.card_rects()):
                if rect.collidepoint(point):
                    self.flip(index)
                    return
        else:
            self.retry()

    # =========================================================================
    # Rendering
    # =========================================================================

    def _get_font(self) -> pygame.font.Font:
        """Get or create font."""
        if self._font is None:
            self._font = pygame.font.Font(None, 32)
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

        if self.state is GameState.IDLE:
            self._render_picker(screen)
            return

        self._render_cards(screen)
        self._render_ui(screen)
        if self.state is GameState.VICTORY:
            self._render_victory(screen)

    def _render_picker(self, screen: pygame.Surface) -> None:
        title = self._get_font_large().render("Select Difficulty", True, config.TEXT_COLOR)
        screen.blit(title, title.get_rect(center=(self._width // 2, self._height // 2 - 120)))

        font = self._get_font()
        for difficulty, rect in self.difficulty_buttons():
            pygame.draw.rect(screen, config.BUTTON_COLOR, rect, border_radius=12)
            label = font.render(difficulty.value.upper(), True, config.TEXT_COLOR)
            screen.blit(label, label.get_rect(center=rect.center))

    def _render_cards(self, screen: pygame.Surface) -> None:
        font = self._get_font()
        for card, rect in zip(self._board.cards, self.card_rects()):
            if card.matched:
                color = config.CARD_MATCHED_COLOR
            elif card.flipped:
                color = config.CARD_FACE_COLOR
            else:
                color = config.CARD_BACK_COLOR
            pygame.draw.rect(screen, color, rect, border_radius=8)

            if card.face_up:
                label = font.render(card.symbol, True, config.CARD_TEXT_COLOR)
                screen.blit(label, label.get_rect(center=rect.center))

    def _render_ui(self, screen: pygame.Surface) -> None:
        font = self._get_font()
        moves = font.render(f"Moves: {self._board.moves}", True, config.TEXT_COLOR)
        screen.blit(moves, (10, 10))

        pairs = font.render(
            f"Pairs: {self._board.matched_pairs}/{self._board.pairs}", True, config.TEXT_COLOR
        )
        screen.blit(pairs, (10, 44))

    def _render_victory(self, screen: pygame.Surface) -> None:
        overlay = pygame.Surface((self._width, self._height), pygame.SRCALPHA)
        overlay.fill(config.OVERLAY_COLOR)
        screen.blit(overlay, (0, 0))

        text = self._get_font_large().render("You found them all!", True, config.VICTORY_COLOR)
        screen.blit(text, text.get_rect(center=(self._width // 2, self._height // 2 - 40)))

        font = self._get_font()
        moves = font.render(f"{self._board.moves} moves", True, config.TEXT_COLOR)
        screen.blit(moves, moves.get_rect(center=(self._width // 2, self._height // 2 + 20)))
        hint = font.render("Click to play again", True, config.TEXT_COLOR)
        screen.blit(hint, hint.get_rect(center=(self._width // 2, self._height // 2 + 60)))
