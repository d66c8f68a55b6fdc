"""
Star Catcher Simulation Tests

Catching, bombs, lives, the countdown and basket control.

Run with: pytest tests/test_star_catcher.py -v
"""

import pytest

from models import StarCatcherSettings
from expohub.games.game_state import GameState
from expohub.games.session import Session
from expohub.games.spawner import Entity, EntityKind
from games.StarCatcher.simulation import (
    countdown,
    new_state,
    pointer_move,
    step,
)

WIDTH, HEIGHT = 800, 600


def make_state(status=GameState.PLAYING, **overrides):
    state = new_state(Session(status=status), StarCatcherSettings(**overrides), WIDTH, HEIGHT)
    state.basket.position = 100.0
    return state


def item(x, kind=EntityKind.COLLECTIBLE, y=537.0, speed=3.0):
    """An item that reaches the catch band (y 550 to 590) on the next tick."""
    return Entity(x=x, y=y, kind=kind, speed=speed, width=45.0, height=30.0)


class TestSetup:

    def test_new_state(self):
        state = new_state(Session(), StarCatcherSettings(), WIDTH, HEIGHT)
        assert state.session.lives_or_time == 60
        assert state.lives == 3
        assert state.basket.position == (WIDTH - 80) / 2

    def test_catch_band(self):
        band = make_state().catch_rect()
        assert (band.left, band.right) == (100.0, 180.0)
        assert (band.top, band.bottom) == (550.0, 590.0)


class TestCatching:
    """Tests for stars and bombs reaching the basket."""

    def test_star_scores_and_disappears(self, rng):
        state = make_state()
        star = state.spawner.add(item(120.0))

        step(state, rng)

        assert state.session.score == 10
        assert star not in state.spawner.entities

    def test_star_missed(self, rng):
        state = make_state()
        state.spawner.add(item(400.0))
        step(state, rng)
        assert state.session.score == 0
        assert len(state.spawner.entities) == 1

    def test_bomb_costs_points_and_a_life(self, rng):
        state = make_state()
        state.session.score = 70
        bomb = state.spawner.add(item(120.0, EntityKind.HAZARD))

        step(state, rng)

        assert state.session.score == 20
        assert state.lives == 2
        assert bomb not in state.spawner.entities
        assert state.session.is_playing

    def test_last_life_bomb_ends_session(self, rng):
        """Basket x=100 w=80, bomb at x=90, one life: game over, score clamped."""
        state = make_state(lives=1)
        state.spawner.add(item(90.0, EntityKind.HAZARD))

        step(state, rng)

        assert state.session.status is GameState.GAME_OVER
        assert state.session.score == 0
        assert state.lives == 0
        assert not state.survived

    @pytest.mark.parametrize('x', [90.0, 110.0, 135.0])
    def test_bomb_edges_inside_band(self, rng, x):
        state = make_state(lives=1)
        state.spawner.add(item(x, EntityKind.HAZARD))
        step(state, rng)
        assert state.session.status is GameState.GAME_OVER

    def test_item_past_bottom_dropped(self, rng):
        state = make_state()
        state.spawner.add(item(500.0, y=599.0))
        step(state, rng)
        assert len(state.spawner.entities) == 0
        assert state.session.score == 0


class TestTieContract:
    """Items resolve in spawn order; the final bomb stops the tick."""

    def test_star_before_final_bomb_counts(self, rng):
        state = make_state(lives=1, hazard_penalty=5)
        state.spawner.add(item(100.0))
        state.spawner.add(item(130.0, EntityKind.HAZARD))

        step(state, rng)

        assert state.session.status is GameState.GAME_OVER
        assert state.session.score == 5

    def test_star_after_final_bomb_ignored(self, rng):
        state = make_state(lives=1)
        state.spawner.add(item(130.0, EntityKind.HAZARD))
        star = state.spawner.add(item(100.0))

        step(state, rng)

        assert state.session.status is GameState.GAME_OVER
        assert state.session.score == 0
        assert star in state.spawner.entities


class TestSpawning:

    def test_spawn_above_field(self, rng):
        state = make_state()
        state.spawner.timer = state.spawner.interval
        step(state, rng)

        assert len(state.spawner.entities) == 1
        spawned = state.spawner.entities[0]
        assert spawned.y < 0
        assert 0 <= spawned.x <= WIDTH - 50
        assert 3.0 <= spawned.speed <= 5.0

    def test_hazard_chance_one_spawns_bombs(self, rng):
        state = make_state(hazard_chance=1.0)
        state.spawner.timer = state.spawner.interval
        step(state, rng)
        assert state.spawner.entities[0].kind is EntityKind.HAZARD


class TestCountdown:

    def test_second_ticks_off(self):
        state = make_state()
        countdown(state)
        assert state.session.lives_or_time == 59

    def test_time_up_ends_session(self):
        state = make_state()
        state.session.lives_or_time = 1
        countdown(state)
        assert state.session.status is GameState.GAME_OVER
        assert state.survived

    def test_ignored_after_end(self):
        state = make_state(status=GameState.GAME_OVER)
        countdown(state)
        assert state.session.lives_or_time == 60


class TestPointer:

    def test_centers_basket(self):
        state = make_state()
        pointer_move(state, 400.0)
        assert state.basket.position == 360.0

    @pytest.mark.parametrize('x,expected', [(0.0, 0.0), (800.0, 720.0)])
    def test_stays_inside_field(self, x, expected):
        state = make_state()
        pointer_move(state, x)
        assert state.basket.position == expected
