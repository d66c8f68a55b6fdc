"""
Model Tests

Geometry primitives and settings validation.

Run with: pytest tests/test_models.py -v
"""

import pytest
from pydantic import ValidationError

from models import (
    ConnectFourSettings,
    Difficulty,
    FlappyDroneSettings,
    GameSettings,
    Point2D,
    Rectangle,
    StarCatcherSettings,
)


class TestRectangle:
    """Tests for Rectangle."""

    def test_edges(self):
        rect = Rectangle(x=10.0, y=20.0, width=30.0, height=40.0)
        assert (rect.left, rect.right, rect.top, rect.bottom) == (10.0, 40.0, 20.0, 60.0)

    def test_rejects_empty(self):
        with pytest.raises(ValidationError):
            Rectangle(x=0.0, y=0.0, width=0.0, height=10.0)

    def test_overlap(self):
        a = Rectangle(x=0.0, y=0.0, width=10.0, height=10.0)
        assert a.intersects(Rectangle(x=5.0, y=5.0, width=10.0, height=10.0))

    def test_touching_edges_do_not_overlap(self):
        a = Rectangle(x=0.0, y=0.0, width=10.0, height=10.0)
        assert not a.intersects(Rectangle(x=10.0, y=0.0, width=10.0, height=10.0))
        assert not a.intersects(Rectangle(x=0.0, y=10.0, width=10.0, height=10.0))

    def test_contains_point_includes_boundary(self):
        rect = Rectangle(x=0.0, y=0.0, width=10.0, height=10.0)
        assert rect.contains_point(Point2D(x=10.0, y=10.0))
        assert not rect.contains_point(Point2D(x=10.1, y=5.0))

    def test_frozen(self):
        point = Point2D(x=1.0, y=2.0)
        with pytest.raises(ValidationError):
            point.x = 5.0


class TestSettings:
    """Tests for the settings sections."""

    def test_defaults(self):
        settings = GameSettings()
        assert settings.flappy_drone.gravity == 0.3
        assert settings.flappy_drone.jump_strength == -7.5
        assert settings.flappy_drone.spawn_interval == 180
        assert settings.star_catcher.max_time == 60
        assert settings.star_catcher.spawn_interval == 40
        assert settings.memory_match.difficulty is Difficulty.EASY
        assert (settings.connect_four.rows, settings.connect_four.cols) == (6, 7)

    @pytest.mark.parametrize('rows,cols', [(3, 7), (11, 7), (6, 3), (6, 11)])
    def test_grid_bounds(self, rows, cols):
        with pytest.raises(ValidationError):
            ConnectFourSettings(rows=rows, cols=cols)

    @pytest.mark.parametrize('field,value', [
        ('bird_size', 9),
        ('gravity', 1.5),
        ('jump_strength', 0),
        ('obstacle_width', 101),
        ('obstacle_gap', 99),
        ('obstacle_speed', 11),
    ])
    def test_flappy_bounds(self, field, value):
        with pytest.raises(ValidationError):
            FlappyDroneSettings(**{field: value})

    @pytest.mark.parametrize('field,value', [('fall_speed', 0.5), ('max_time', 5), ('max_time', 301)])
    def test_catcher_bounds(self, field, value):
        with pytest.raises(ValidationError):
            StarCatcherSettings(**{field: value})

    def test_difficulty_from_string(self):
        assert GameSettings.model_validate(
            {'memory_match': {'difficulty': 'hard'}}
        ).memory_match.difficulty is Difficulty.HARD
