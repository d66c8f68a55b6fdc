"""
Session lifecycle: IDLE -> PLAYING -> GAME_OVER | VICTORY.

A Session is the plain state of one play-through. The pure helpers begin()
and end() move it between states and are safe to call repeatedly: ending
a session that already ended does nothing, so a countdown expiring in the
same frame as a crash cannot end it twice.

SessionStateMachine owns the Session together with its scheduler tasks.
Everything it schedules runs behind a status guard, and the first time the
session turns terminal it cancels every task, commits the best score and
emits a 'sessions' record.

Usage:
    machine = SessionStateMachine('flappydrone', ScoreEngine(store),
                                  on_start=self._install_tasks)
    machine.start()                    # IDLE -> PLAYING, installs tasks
    machine.scheduler.tick(dt)         # host loop
    machine.finish(GameState.GAME_OVER)
    machine.retry()                    # fresh session, PLAYING again
"""
import time
from dataclasses import dataclass
from typing import Callable, Optional

from expohub.games.game_state import GameState
from expohub.games.scheduler import ScheduledTask, Scheduler, TaskCallback
from expohub.games.scoring import ScoreEngine
from expohub.logging import emit_record, get_logger

log = get_logger('session')


@dataclass
class Session:
    """State of one play-through.

    Attributes:
        status: Current lifecycle state
        score: Non-negative score, changed only through ScoreEngine
        lives_or_time: Lives left or seconds left, depending on the game
    """
    status: GameState = GameState.IDLE
    score: int = 0
    lives_or_time: int = 0

    @property
    def is_playing(self) -> bool:
        return self.status is GameState.PLAYING


def begin(session: Session) -> bool:
    """IDLE -> PLAYING. Returns False if the session was not idle."""
    if session.status is not GameState.IDLE:
        return False
    session.status = GameState.PLAYING
    return True


def end(session: Session, outcome: GameState) -> bool:
    """PLAYING -> outcome. Returns False if the session was not playing."""
    if not outcome.is_terminal:
        raise ValueError(f"{outcome} is not a terminal state")
    if session.status is not GameState.PLAYING:
        return False
    session.status = outcome
    return True


class SessionStateMachine:
    """Drives one game's sessions and the tasks that belong to them."""

    def __init__(
        self,
        game_id: str,
        scores: ScoreEngine,
        scheduler: Optional[Scheduler] = None,
        lives_or_time: int = 0,
        on_start: Optional[Callable[['SessionStateMachine'], None]] = None,
        track_best: bool = True,
    ):
        """
        Args:
            game_id: Key for best scores and session records
            scores: Score engine holding the persistence port
            scheduler: Task scheduler (a new one if None)
            lives_or_time: Initial Session.lives_or_time for each session
            on_start: Called after IDLE -> PLAYING to register tasks
            track_best: False for games without a high score
        """
        self.game_id = game_id
        self.scores = scores
        self.scheduler = scheduler or Scheduler()
        self._initial_lives_or_time = lives_or_time
        self._on_start = on_start
        self._track_best = track_best

        self._session = Session(lives_or_time=lives_or_time)
        self._settled = False
        self._started_at: Optional[float] = None
        self.new_best = False

    @property
    def session(self) -> Session:
        return self._session

    @property
    def status(self) -> GameState:
        return self._session.status

    @property
    def is_playing(self) -> bool:
        return self._session.is_playing

    @property
    def best(self) -> int:
        return self.scores.best(self.game_id)

    def configure(self, lives_or_time: int) -> None:
        """Change the initial lives/time used by the next reset."""
        self._initial_lives_or_time = lives_or_time
        if self._session.status is GameState.IDLE:
            self._session.lives_or_time = lives_or_time

    # -------------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------------

    def start(self) -> bool:
        """IDLE -> PLAYING and install the session's tasks."""
        if not begin(self._session):
            return False
        self._settled = False
        self.new_best = False
        self._started_at = time.monotonic()
        log.info("%s: session started", self.game_id)
        if self._on_start is not None:
            self._on_start(self)
        return True

    def finish(self, outcome: GameState) -> bool:
        """End the session with outcome. No-op unless PLAYING."""
        ended = end(self._session, outcome)
        self.settle()
        return ended

    def settle(self) -> bool:
        """Run terminal bookkeeping once, if the session just ended.

        Called after every guarded task, so a terminal status set by a pure
        step function is picked up in the same tick.
        """
        if not self._session.status.is_terminal or self._settled:
            return False
        self._settled = True
        self.scheduler.cancel_all()

        if self._track_best:
            self.new_best = self.scores.commit(self.game_id, self._session.score)

        duration = time.monotonic() - self._started_at if self._started_at else 0.0
        log.info("%s: session ended %s with score %d",
                 self.game_id, self._session.status.value, self._session.score)
        emit_record('sessions', {
            'game': self.game_id,
            'outcome': self._session.status.value,
            'score': self._session.score,
            'new_best': self.new_best,
            'duration': round(duration, 3),
        })
        return True

    def retry(self, start: bool = True) -> None:
        """Discard the current session and begin a fresh one.

        Args:
            start: Go straight to PLAYING; False leaves the new session IDLE
        """
        self.scheduler.cancel_all()
        self._session = Session(lives_or_time=self._initial_lives_or_time)
        self._settled = False
        self.new_best = False
        log.debug("%s: session reset", self.game_id)
        if start:
            self.start()

    def teardown(self) -> None:
        """Stop every task without ending the session (game unmounted)."""
        self.scheduler.cancel_all()

    # -------------------------------------------------------------------------
    # Guarded scheduling
    # -------------------------------------------------------------------------

    def _guard(self, callback: TaskCallback) -> TaskCallback:
        def guarded(dt: float) -> None:
            if not self._session.is_playing:
                return
            callback(dt)
            self.settle()
        return guarded

    def every_frame(self, name: str, callback: TaskCallback) -> ScheduledTask:
        """Per-frame task that only runs while PLAYING."""
        return self.scheduler.every_frame(name, self._guard(callback))

    def every(self, name: str, interval: float, callback: TaskCallback) -> ScheduledTask:
        """Interval task that only runs while PLAYING."""
        return self.scheduler.every(name, interval, self._guard(callback))

    def after(self, name: str, delay: float, callback: TaskCallback) -> ScheduledTask:
        """One-shot task that only runs while PLAYING."""
        return self.scheduler.after(name, delay, self._guard(callback))
