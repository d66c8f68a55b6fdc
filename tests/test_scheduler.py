"""
Scheduler Tests

Per-frame, interval and one-shot tasks, and cancellation semantics.

Run with: pytest tests/test_scheduler.py -v
"""

import pytest

from expohub.games.scheduler import ScheduledTask, Scheduler


class TestFrameTasks:
    """Tests for every_frame()."""

    def test_runs_once_per_tick(self):
        """A frame task sees every tick's dt."""
        scheduler = Scheduler()
        seen = []
        scheduler.every_frame('frame', seen.append)

        scheduler.tick(0.016)
        scheduler.tick(0.020)

        assert seen == [0.016, 0.020]

    def test_registration_order(self):
        """Tasks run in the order they were registered."""
        scheduler = Scheduler()
        order = []
        scheduler.every_frame('a', lambda dt: order.append('a'))
        scheduler.every_frame('b', lambda dt: order.append('b'))

        scheduler.tick(0.016)

        assert order == ['a', 'b']

    def test_task_added_during_tick_starts_next_tick(self):
        """New registrations do not run in the tick that created them."""
        scheduler = Scheduler()
        calls = []

        def register(dt):
            if not calls:
                scheduler.every_frame('late', lambda dt: calls.append('late'))
            calls.append('first')

        scheduler.every_frame('first', register)
        scheduler.tick(0.016)
        assert calls == ['first']

        scheduler.tick(0.016)
        assert calls == ['first', 'first', 'late']


class TestIntervalTasks:
    """Tests for every() and after()."""

    def test_countdown_fires_once_per_second(self):
        """dt accumulates until a full interval has passed."""
        scheduler = Scheduler()
        fired = []
        scheduler.every('countdown', 1.0, fired.append)

        for _ in range(59):
            scheduler.tick(1 / 60)
        assert fired == []

        scheduler.tick(1 / 60 + 1e-9)
        assert fired == [1.0]

    def test_long_frame_fires_multiple_times(self):
        """A 2.5 s hitch fires a 1 s task twice and keeps the remainder."""
        scheduler = Scheduler()
        fired = []
        scheduler.every('countdown', 1.0, fired.append)

        scheduler.tick(2.5)
        assert len(fired) == 2

        scheduler.tick(0.5)
        assert len(fired) == 3

    def test_after_fires_once(self):
        scheduler = Scheduler()
        fired = []
        task = scheduler.after('flip_back', 1.0, fired.append)

        scheduler.tick(0.5)
        assert fired == []
        scheduler.tick(0.5)
        assert fired == [1.0]
        scheduler.tick(5.0)
        assert fired == [1.0]
        assert not task.active
        assert scheduler.tasks == []

    @pytest.mark.parametrize('interval', [0, -1.0])
    def test_rejects_non_positive_interval(self, interval):
        scheduler = Scheduler()
        with pytest.raises(ValueError):
            scheduler.every('bad', interval, lambda dt: None)
        with pytest.raises(ValueError):
            scheduler.after('bad', interval, lambda dt: None)


class TestCancellation:
    """Tests for cancel() and cancel_all()."""

    def test_cancel_is_idempotent(self):
        task = ScheduledTask('t', lambda dt: None)
        task.cancel()
        task.cancel()
        assert not task.active

    def test_cancelled_task_never_fires(self):
        scheduler = Scheduler()
        fired = []
        task = scheduler.every_frame('frame', fired.append)
        task.cancel()

        scheduler.tick(0.016)

        assert fired == []
        assert not scheduler.running

    def test_cancel_during_tick_skips_later_tasks(self):
        """A task cancelled by an earlier task in the same tick does not run."""
        scheduler = Scheduler()
        fired = []
        scheduler.every_frame('stopper', lambda dt: scheduler.cancel_all())
        scheduler.every_frame('victim', fired.append)

        scheduler.tick(0.016)

        assert fired == []
        assert scheduler.tasks == []

    def test_interval_task_cancelling_itself_stops_catch_up(self):
        """Self-cancel inside a multi-interval tick fires only once."""
        scheduler = Scheduler()
        fired = []

        def on_second(dt):
            fired.append(dt)
            task.cancel()

        task = scheduler.every('countdown', 1.0, on_second)
        scheduler.tick(3.0)

        assert fired == [1.0]

    def test_cancel_all_stops_everything(self):
        scheduler = Scheduler()
        scheduler.every_frame('a', lambda dt: None)
        scheduler.every('b', 1.0, lambda dt: None)
        assert scheduler.running

        scheduler.cancel_all()
        scheduler.cancel_all()

        assert not scheduler.running
