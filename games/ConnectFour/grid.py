"""
ConnectFour - Grid resolution.

The board is stored bottom-up: row 0 is the bottom row, so a piece dropped
into a column lands in row heights[column]. Wins are found locally by
counting out from the cell just played, never by rescanning the board.

Examples:
    >>> resolver = GridResolver(rows=6, cols=7)
    >>> for column in (0, 0, 1, 1, 2, 2, 3):
    ...     _ = resolver.place(column)
    >>> resolver.winner
    <Player.RED: 1>
"""
from dataclasses import dataclass
from enum import IntEnum
from typing import List, Optional

from expohub.games.game_state import GameState
from expohub.games.session import Session, begin, end
from expohub.logging import get_logger

log = get_logger('grid')

WIN_LENGTH = 4

# Horizontal, vertical and both diagonals; each is walked both ways
DIRECTIONS = ((0, 1), (1, 0), (1, 1), (1, -1))


class Player(IntEnum):
    RED = 1
    GREEN = 2

    @property
    def other(self) -> 'Player':
        return Player.GREEN if self is Player.RED else Player.RED


@dataclass(frozen=True)
class Move:
    """A piece that landed."""
    player: Player
    row: int
    col: int


class Grid:
    """rows x cols cells, each None or a Player."""

    def __init__(self, rows: int, cols: int):
        if rows < 1 or cols < 1:
            raise ValueError(f"Grid needs positive dimensions, got {rows}x{cols}")
        self.rows = rows
        self.cols = cols
        self.cells: List[List[Optional[Player]]] = [[None] * cols for _ in range(rows)]
        self.heights = [0] * cols
        self.filled = 0

    @property
    def full(self) -> bool:
        return self.filled == self.rows * self.cols

    def accepts(self, column: int) -> bool:
        return 0 <= column < self.cols and self.heights[column] < self.rows

    def get(self, row: int, col: int) -> Optional[Player]:
        if 0 <= row < self.rows and 0 <= col < self.cols:
            return self.cells[row][col]
        return None

    def drop(self, column: int, player: Player) -> int:
        """Put player's piece in the lowest empty row of column. Returns the row."""
        if not self.accepts(column):
            raise ValueError(f"Column {column} cannot take a piece")
        row = self.heights[column]
        self.cells[row][column] = player
        self.heights[column] += 1
        self.filled += 1
        return row

    def count_line(self, row: int, col: int, d_row: int, d_col: int) -> int:
        """Contiguous run through (row, col) along one direction, both ways."""
        player = self.get(row, col)
        if player is None:
            return 0
        count = 1
        for sign in (1, -1):
            for steps in range(1, WIN_LENGTH):
                if self.get(row + sign * steps * d_row, col + sign * steps * d_col) is not player:
                    break
                count += 1
        return count


class GridResolver:
    """Turn-based drop game over a Grid, bound to a Session.

    place() is the only operation that changes the board. It is a no-op
    (returning None) when the session is not PLAYING or the column cannot
    take a piece.
    """

    def __init__(self, rows: int = 6, cols: int = 7, session: Optional[Session] = None):
        """
        Args:
            rows: Board height
            cols: Board width
            session: Session to drive; a new PLAYING session if None
        """
        self.grid = Grid(rows, cols)
        if session is None:
            session = Session()
            begin(session)
        self.session = session
        self.current_player = Player.RED
        self.winner: Optional[Player] = None
        self.last_move: Optional[Move] = None

    @property
    def rows(self) -> int:
        return self.grid.rows

    @property
    def cols(self) -> int:
        return self.grid.cols

    @property
    def is_draw(self) -> bool:
        return self.session.status is GameState.GAME_OVER and self.winner is None

    def place(self, column: int) -> Optional[Move]:
        """Drop the current player's piece into column and resolve the move.

        Returns:
            The move made, or None if it was not legal
        """
        if not self.session.is_playing or not self.grid.accepts(column):
            return None

        player = self.current_player
        row = self.grid.drop(column, player)
        move = Move(player=player, row=row, col=column)
        self.last_move = move

        if self._wins(row, column):
            self.winner = player
            end(self.session, GameState.VICTORY)
            log.info("Player %d wins at row %d, column %d", player.value, row, column)
        elif self.grid.full:
            end(self.session, GameState.GAME_OVER)
            log.info("Board full, draw")
        else:
            self.current_player = player.other
        return move

    def _wins(self, row: int, col: int) -> bool:
        return any(
            self.grid.count_line(row, col, d_row, d_col) >= WIN_LENGTH
            for d_row, d_col in DIRECTIONS
        )

    def reset(self, session: Optional[Session] = None) -> None:
        """Empty board, RED to move. A new session replaces the old one if given."""
        self.grid = Grid(self.grid.rows, self.grid.cols)
        if session is not None:
            self.session = session
        self.current_player = Player.RED
        self.winner = None
        self.last_move = None
