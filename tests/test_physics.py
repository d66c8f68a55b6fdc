"""
Physics Tests

Euler integration, impulse and field bounds.

Run with: pytest tests/test_physics.py -v
"""

import pytest

from expohub.games.physics import Body, impulse, integrate, out_of_bounds


class TestIntegrate:
    """Tests for one Euler step per tick."""

    def test_velocity_then_position(self):
        body = Body(position=100.0, velocity=0.0)
        integrate(body, 0.3)
        assert body.velocity == pytest.approx(0.3)
        assert body.position == pytest.approx(100.3)

    def test_flap_then_five_ticks_matches_closed_form(self):
        """After an impulse of -7.5 and n ticks of gravity 0.3:
        v = -7.5 + 0.3n and p = p0 - 7.5n + 0.3 n(n+1)/2."""
        body = Body(position=300.0, velocity=4.0)
        impulse(body, -7.5)
        for _ in range(5):
            integrate(body, 0.3)

        assert body.velocity == pytest.approx(-6.0)
        assert body.position == pytest.approx(300.0 - 37.5 + 0.3 * 15)

    def test_five_ticks_from_origin(self):
        body = Body(position=0.0, velocity=0.0)
        impulse(body, -7.5)
        for _ in range(5):
            integrate(body, 0.3)

        assert body.velocity == pytest.approx(-6.0)
        assert body.position == pytest.approx(-33.0)

    def test_impulse_discards_accumulated_velocity(self):
        body = Body(position=0.0, velocity=12.0)
        impulse(body, -7.5)
        assert body.velocity == -7.5


class TestOutOfBounds:
    """Tests for the field boundary check."""

    @pytest.mark.parametrize('position,expected', [
        (-0.1, True),
        (0.0, False),
        (280.0, False),   # far edge exactly on the boundary
        (280.1, True),
    ])
    def test_bounds(self, position, expected):
        body = Body(position=position, size=20.0)
        assert out_of_bounds(body, 300.0) is expected

    def test_far_edge(self):
        assert Body(position=10.0, size=20.0).far_edge == 30.0
