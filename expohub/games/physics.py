"""
Per-tick physics for the controlled body.

One explicit Euler step per tick, no dt scaling: the original games are
tuned in pixels per frame.
"""
from dataclasses import dataclass


@dataclass
class Body:
    """The single player-controlled object of a physics game.

    Position and velocity run along the game's controlled axis: vertical
    for the drone (y grows downward), horizontal for the basket.

    Attributes:
        position: Leading coordinate (top or left edge) in pixels
        velocity: Pixels per tick along the axis
        size: Extent along the axis in pixels
    """
    position: float
    velocity: float = 0.0
    size: float = 20.0

    @property
    def far_edge(self) -> float:
        """Bottom (or right) edge."""
        return self.position + self.size


def integrate(body: Body, gravity: float) -> Body:
    """Advance one tick: velocity += gravity, then position += velocity."""
    body.velocity += gravity
    body.position += body.velocity
    return body


def impulse(body: Body, strength: float) -> Body:
    """Set velocity to strength, discarding accumulated velocity."""
    body.velocity = strength
    return body


def out_of_bounds(body: Body, extent: float) -> bool:
    """True when the body left the play field [0, extent]."""
    return body.position < 0 or body.far_edge > extent
