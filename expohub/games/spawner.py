"""
Entity spawning, movement and eviction.

Entities live in a deque in spawn order (oldest first). For games where
every entity moves at the same speed the oldest one is always the first to
leave the screen, so eviction only ever looks at the left end.

All randomness goes through an injected random.Random-compatible source.
"""
import math
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from random import Random
from typing import Callable, Deque, Optional

from models import Rectangle

# Spawn windows keep the gap at least this far from the field edges
GAP_MARGIN_MIN = 100
GAP_MARGIN_RATIO = 0.2

# Difficulty ramp: gap shrinks by GAP_STEP every GAP_STEP_SCORE points
GAP_STEP = 10
GAP_STEP_SCORE = 10
MIN_GAP_FLOOR = 100
MIN_GAP_RATIO = 0.625


class EntityKind(str, Enum):
    """How an entity interacts with the controlled body.

    Attributes:
        PASS_THROUGH: Scores when safely traversed (drone obstacle)
        HAZARD: Ends the session or costs a life on overlap
        COLLECTIBLE: Scores on overlap and disappears
    """
    PASS_THROUGH = "pass_through"
    HAZARD = "hazard"
    COLLECTIBLE = "collectible"


@dataclass
class Entity:
    """A spawned obstacle or item.

    Attributes:
        x: Left edge
        y: Top edge
        kind: Interaction kind
        speed: Pixels per tick along the game's scroll axis
        width: Horizontal extent
        height: Vertical extent
        passed: Set once a pass-through entity has been cleared
        gap_y: Top of the opening, for pass-through obstacles
    """
    x: float
    y: float
    kind: EntityKind
    speed: float
    width: float
    height: float
    passed: bool = False
    gap_y: Optional[float] = None

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def bounds(self) -> Rectangle:
        """Bounding box for collision tests."""
        return Rectangle(x=self.x, y=self.y, width=self.width, height=self.height)


@dataclass
class Spawner:
    """Spawn countdown plus the ordered entity sequence.

    Attributes:
        interval: Ticks between spawns; a spawn happens on the tick the
            counter exceeds it
        timer: Ticks since the last spawn
        entities: Live entities, oldest first
    """
    interval: int
    timer: int = 0
    entities: Deque[Entity] = field(default_factory=deque)

    def __post_init__(self):
        if self.interval < 1:
            self.interval = 1

    def due(self) -> bool:
        """Count one tick; True (and reset) when a spawn is due."""
        self.timer += 1
        if self.timer > self.interval:
            self.timer = 0
            return True
        return False

    def add(self, entity: Entity) -> Entity:
        self.entities.append(entity)
        return entity

    def evict_while(self, gone: Callable[[Entity], bool]) -> int:
        """Drop entities from the oldest end while gone(oldest) holds."""
        evicted = 0
        while self.entities and gone(self.entities[0]):
            self.entities.popleft()
            evicted += 1
        return evicted

    def discard(self, gone: Callable[[Entity], bool]) -> int:
        """Drop every entity for which gone() holds, keeping spawn order."""
        before = len(self.entities)
        self.entities = deque(e for e in self.entities if not gone(e))
        return before - len(self.entities)

    def clear(self) -> None:
        self.timer = 0
        self.entities.clear()


def random_gap_y(rng: Random, field_height: float, gap: float) -> int:
    """Pick the top of an obstacle opening.

    The window is [margin, field_height - margin - gap] with
    margin = max(100, 20% of the field). When the field is too small the
    upper bound collapses onto the lower one instead of inverting.
    """
    margin = max(GAP_MARGIN_MIN, field_height * GAP_MARGIN_RATIO)
    low = margin
    high = max(low, field_height - margin - gap)
    return math.floor(rng.random() * (high - low + 1) + low)


def choose_kind(
    rng: Random,
    hazard_chance: float,
    common: EntityKind = EntityKind.COLLECTIBLE,
    rare: EntityKind = EntityKind.HAZARD,
) -> EntityKind:
    """Uniform draw: the rare kind with probability hazard_chance."""
    return common if rng.random() > hazard_chance else rare


def min_gap_for(base_gap: float) -> float:
    """Hard floor of the difficulty ramp, never above the base gap."""
    return min(base_gap, max(MIN_GAP_FLOOR, base_gap * MIN_GAP_RATIO))


def gap_for_score(score: int, base_gap: float) -> float:
    """Obstacle gap after `score` passes.

    Non-increasing in score, recomputed from scratch each time:
    max(min_gap, base_gap - 10 * floor(score / 10)).
    """
    reduction = (score // GAP_STEP_SCORE) * GAP_STEP
    return max(min_gap_for(base_gap), base_gap - reduction)


def clamp_gap(gap: float, body_size: float, field_height: float) -> float:
    """Clamp a configured gap so the body fits and the field holds it."""
    upper = max(body_size, field_height)
    return min(max(gap, body_size), upper)
