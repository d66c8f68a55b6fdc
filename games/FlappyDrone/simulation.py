"""
FlappyDrone - Simulation

Pure per-tick rules for the obstacle-course flyer. Nothing here touches
pygame or the clock: step() takes the whole mutable state, advances it by
exactly one frame and hands it back, so tests can drive it tick by tick
with a seeded random source.

Tick order:
    1. flap impulse (if requested), gravity integration
    2. field boundary check (terminal)
    3. spawn countdown, obstacle movement, off-screen eviction
    4. collisions in spawn order (pipes terminal, cleared gaps score)
"""
from dataclasses import dataclass
from random import Random

from models import FlappyDroneSettings, Rectangle
from expohub.games.collision import ContactKind, detect, pipe_zones
from expohub.games.game_state import GameState
from expohub.games.physics import Body, impulse, integrate, out_of_bounds
from expohub.games.scoring import ScoreEngine
from expohub.games.session import Session, end
from expohub.games.spawner import (
    Entity, EntityKind, Spawner, clamp_gap, gap_for_score, random_gap_y,
)
from games.FlappyDrone import config


@dataclass(frozen=True)
class FlyerParams:
    """Tunables for one session, already scaled and clamped to the field."""
    bird_size: float
    gravity: float
    jump_strength: float
    obstacle_width: float
    obstacle_gap: float
    obstacle_speed: float
    spawn_interval: int

    @classmethod
    def from_settings(
        cls,
        settings: FlappyDroneSettings,
        field_width: float,
        field_height: float,
    ) -> 'FlyerParams':
        """Build params for a field, applying responsive scaling if enabled."""
        w_scale, h_scale = (1.0, 1.0)
        if settings.responsive:
            w_scale, h_scale = responsive_scales(field_width, field_height)

        bird_size = round(settings.bird_size * w_scale)
        gap = round(settings.obstacle_gap * h_scale)
        return cls(
            bird_size=bird_size,
            gravity=settings.gravity * h_scale,
            jump_strength=settings.jump_strength * h_scale,
            obstacle_width=round(settings.obstacle_width * w_scale),
            obstacle_gap=clamp_gap(gap, bird_size, field_height),
            obstacle_speed=settings.obstacle_speed * w_scale,
            spawn_interval=max(1, settings.spawn_interval),
        )


def responsive_scales(field_width: float, field_height: float) -> tuple:
    """Width and height scale factors relative to the reference field.

    Narrow (mobile) fields use a narrower reference and a higher floor so
    the drone stays playable.
    """
    mobile = field_width < config.MOBILE_BREAKPOINT
    ref_width = config.REF_WIDTH_MOBILE if mobile else config.REF_WIDTH
    min_w = config.MIN_WIDTH_SCALE_MOBILE if mobile else config.MIN_WIDTH_SCALE

    w_scale = max(min(field_width / ref_width, config.MAX_SCALE), min_w)
    h_scale = max(min(field_height / config.REF_HEIGHT, config.MAX_SCALE),
                  config.MIN_HEIGHT_SCALE)
    return w_scale, h_scale


@dataclass
class FlyerState:
    """Everything that changes during a Flappy Drone session.

    Attributes:
        session: Status and score
        body: The drone (vertical axis)
        spawner: Spawn countdown and obstacles, oldest first
        params: Session tunables
        field_width: Play-field width
        field_height: Play-field height
        gap: Current opening height after the difficulty ramp
        drone_x: Fixed left edge of the drone
    """
    session: Session
    body: Body
    spawner: Spawner
    params: FlyerParams
    field_width: float
    field_height: float
    gap: float
    drone_x: float = config.DRONE_X

    def body_rect(self) -> Rectangle:
        return Rectangle(
            x=self.drone_x, y=self.body.position,
            width=self.body.size, height=self.body.size,
        )


def new_state(
    session: Session,
    params: FlyerParams,
    field_width: float,
    field_height: float,
) -> FlyerState:
    """Fresh state: drone at mid-height, no obstacles, base gap."""
    return FlyerState(
        session=session,
        body=Body(position=field_height / 2, velocity=0.0, size=params.bird_size),
        spawner=Spawner(interval=params.spawn_interval),
        params=params,
        field_width=field_width,
        field_height=field_height,
        gap=params.obstacle_gap,
    )


def flap(state: FlyerState) -> FlyerState:
    """Primary action while playing: jump."""
    if state.session.is_playing:
        impulse(state.body, state.params.jump_strength)
    return state


def spawn_obstacle(state: FlyerState, rng: Random) -> Entity:
    """Append an obstacle at the right edge with a random opening."""
    return state.spawner.add(Entity(
        x=state.field_width,
        y=0.0,
        kind=EntityKind.PASS_THROUGH,
        speed=state.params.obstacle_speed,
        width=state.params.obstacle_width,
        height=state.field_height,
        gap_y=random_gap_y(rng, state.field_height, state.gap),
    ))


def step(state: FlyerState, rng: Random, flap_now: bool = False) -> FlyerState:
    """Advance the session by one tick.

    Args:
        state: Session state, mutated in place and returned
        rng: Random source for obstacle openings
        flap_now: Apply a jump before integrating

    Returns:
        The same state object
    """
    session = state.session
    if not session.is_playing:
        return state

    if flap_now:
        flap(state)
    integrate(state.body, state.params.gravity)

    if out_of_bounds(state.body, state.field_height):
        end(session, GameState.GAME_OVER)
        return state

    if state.spawner.due():
        spawn_obstacle(state, rng)

    for obstacle in state.spawner.entities:
        obstacle.x -= obstacle.speed
    state.spawner.evict_while(lambda e: e.right < 0)

    def zones(entity: Entity):
        return pipe_zones(entity, state.gap, state.field_height)

    for contact in detect(state.body_rect(), state.spawner.entities, zones):
        if contact.kind is ContactKind.HAZARD:
            end(session, GameState.GAME_OVER)
            break
        if contact.kind is ContactKind.PASSED:
            contact.entity.passed = True
            ScoreEngine.award(session, 1)
            state.gap = gap_for_score(session.score, state.params.obstacle_gap)

    return state
