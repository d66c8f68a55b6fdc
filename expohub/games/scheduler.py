"""
Frame scheduler for ExpoHub games.

The host loop calls Scheduler.tick(dt) once per display refresh. Games
register periodic work against it instead of owning timers:

    scheduler = Scheduler()
    frame = scheduler.every_frame('physics', self._on_frame)
    countdown = scheduler.every('countdown', 1.0, self._on_second)
    scheduler.after('flip_back', 1.0, self._hide_cards)

    # Each tick
    scheduler.tick(dt)

    # Teardown
    scheduler.cancel_all()

Every registration returns a ScheduledTask handle whose cancel() is
idempotent. A task cancelled during a tick never fires again, even if it
was already queued for that tick.
"""
from typing import Callable, List, Optional

from expohub.logging import get_logger

log = get_logger('scheduler')

TaskCallback = Callable[[float], None]


class ScheduledTask:
    """Handle for one scheduled callback.

    Attributes:
        name: Identifier used in logs
        interval: Seconds between calls, or None to run every tick
        repeat: False for one-shot tasks
    """

    def __init__(
        self,
        name: str,
        callback: TaskCallback,
        interval: Optional[float] = None,
        repeat: bool = True,
    ):
        self.name = name
        self.interval = interval
        self.repeat = repeat
        self._callback = callback
        self._elapsed = 0.0
        self._active = True

    @property
    def active(self) -> bool:
        """Whether the task will still fire."""
        return self._active

    def cancel(self) -> None:
        """Stop the task. Safe to call more than once."""
        if self._active:
            self._active = False
            log.trace("Task %s cancelled", self.name)

    def advance(self, dt: float) -> None:
        """Advance the task clock and fire the callback if due.

        Frame tasks fire once per call. Interval tasks fire once for every
        full interval accumulated, and stop early if cancelled from within
        their own callback.
        """
        if not self._active:
            return

        if self.interval is None:
            self._callback(dt)
            if not self.repeat:
                self._active = False
            return

        self._elapsed += dt
        while self._active and self._elapsed >= self.interval:
            self._elapsed -= self.interval
            self._callback(self.interval)
            if not self.repeat:
                self._active = False

    def __repr__(self) -> str:
        kind = 'frame' if self.interval is None else f'{self.interval:.2f}s'
        return f"ScheduledTask({self.name!r}, {kind}, active={self._active})"


class Scheduler:
    """Owns the periodic and delayed tasks of one game session.

    Single-threaded: tick() runs every active task in registration order.
    Tasks added during a tick start on the next tick.
    """

    def __init__(self):
        self._tasks: List[ScheduledTask] = []

    @property
    def running(self) -> bool:
        """True while at least one task is active."""
        return any(task.active for task in self._tasks)

    @property
    def tasks(self) -> List[ScheduledTask]:
        """Active tasks, in registration order."""
        return [task for task in self._tasks if task.active]

    def every_frame(self, name: str, callback: TaskCallback) -> ScheduledTask:
        """Run callback(dt) once per tick."""
        return self._add(ScheduledTask(name, callback))

    def every(self, name: str, interval: float, callback: TaskCallback) -> ScheduledTask:
        """Run callback(interval) once per elapsed interval.

        Args:
            name: Task identifier
            interval: Seconds between calls (must be positive)
            callback: Called with the interval length
        """
        if interval <= 0:
            raise ValueError(f"Interval must be positive, got {interval}")
        return self._add(ScheduledTask(name, callback, interval=interval))

    def after(self, name: str, delay: float, callback: TaskCallback) -> ScheduledTask:
        """Run callback once, after delay seconds of ticks."""
        if delay <= 0:
            raise ValueError(f"Delay must be positive, got {delay}")
        return self._add(ScheduledTask(name, callback, interval=delay, repeat=False))

    def _add(self, task: ScheduledTask) -> ScheduledTask:
        self._tasks.append(task)
        log.trace("Task %s registered", task.name)
        return task

    def tick(self, dt: float) -> None:
        """Advance every active task by dt seconds."""
        for task in list(self._tasks):
            task.advance(dt)
        self._tasks = [task for task in self._tasks if task.active]

    def cancel_all(self) -> None:
        """Cancel every task. Idempotent."""
        for task in self._tasks:
            task.cancel()
        self._tasks.clear()
