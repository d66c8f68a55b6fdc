"""
Score bookkeeping.

ScoreEngine is the only code that changes Session.score. Increases come
from collectibles and passed obstacles; decreases come from hazards and
are clamped so the score never goes below zero.

Best scores are committed once per finished session through the
persistence port. A store failure leaves the best in memory only.

Examples:
    >>> from expohub.games.session import Session
    >>> from expohub.games.game_state import GameState
    >>> session = Session(status=GameState.PLAYING)
    >>> ScoreEngine.award(session, 10)
    10
    >>> ScoreEngine.penalize(session, 50)
    0
"""
from typing import Dict, Optional, TYPE_CHECKING

from expohub.logging import get_logger
from expohub.storage import BestScoreStore

if TYPE_CHECKING:
    from expohub.games.session import Session

log = get_logger('scoring')


class ScoreEngine:
    """Mutates session scores and tracks best scores per game."""

    def __init__(self, store: Optional[BestScoreStore] = None):
        """
        Args:
            store: Persistence port. None keeps best scores in memory only.
        """
        self._store = store
        self._memory: Dict[str, int] = {}

    @staticmethod
    def award(session: 'Session', points: int) -> int:
        """Add points (must be non-negative). Returns the new score."""
        if points < 0:
            raise ValueError(f"award() takes non-negative points, got {points}")
        session.score += points
        return session.score

    @staticmethod
    def penalize(session: 'Session', points: int) -> int:
        """Subtract points, clamping at zero. Returns the new score."""
        session.score = max(0, session.score - abs(points))
        return session.score

    def best(self, game_id: str) -> int:
        """Best score for game_id, from the store or memory."""
        remembered = self._memory.get(game_id, 0)
        if self._store is None:
            return remembered
        try:
            stored = self._store.get_best(game_id)
        except Exception as e:
            log.warning("Best score lookup failed for %s: %s", game_id, e)
            return remembered
        return max(stored, remembered)

    def commit(self, game_id: str, score: int) -> bool:
        """Record a finished session's score.

        Returns:
            True if score strictly beat the previous best and was recorded
        """
        previous = self.best(game_id)
        if score <= previous:
            return False

        self._memory[game_id] = score
        if self._store is not None:
            try:
                self._store.set_best(game_id, score)
            except Exception as e:
                log.warning("Best score for %s kept in memory: %s", game_id, e)
        log.info("New best for %s: %d (was %d)", game_id, score, previous)
        return True
