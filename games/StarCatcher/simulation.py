"""
StarCatcher - Simulation

Stars and bombs fall from the top of the field; the player slides a basket
along the bottom edge. Stars score, bombs cost points and a life. The
session also runs against a countdown.

Session.lives_or_time holds the seconds left; lives are kept on the
catcher state. step() advances one frame and countdown() one second, and
either may end the session.
"""
from dataclasses import dataclass
from random import Random

from models import Rectangle, StarCatcherSettings
from expohub.games.collision import ContactKind, detect
from expohub.games.game_state import GameState
from expohub.games.physics import Body
from expohub.games.scoring import ScoreEngine
from expohub.games.session import Session, end
from expohub.games.spawner import Entity, Spawner, choose_kind
from games.StarCatcher import config


@dataclass
class CatcherState:
    """Everything that changes during a Star Catcher session.

    Attributes:
        session: Status, score and seconds left
        basket: Horizontal body; position is the basket's left edge
        spawner: Spawn countdown and falling items, oldest first
        settings: Session tunables
        field_width: Play-field width
        field_height: Play-field height
        lives: Bombs left before the session ends
    """
    session: Session
    basket: Body
    spawner: Spawner
    settings: StarCatcherSettings
    field_width: float
    field_height: float
    lives: int

    @property
    def survived(self) -> bool:
        """True when the session ended on time rather than on lives."""
        return self.session.status is GameState.GAME_OVER and self.lives > 0

    def catch_rect(self) -> Rectangle:
        """The band just above the bottom edge where items get caught."""
        return Rectangle(
            x=self.basket.position,
            y=self.field_height - config.BASKET_OFFSET,
            width=self.basket.size,
            height=config.CATCH_BAND,
        )


def new_state(
    session: Session,
    settings: StarCatcherSettings,
    field_width: float,
    field_height: float,
) -> CatcherState:
    """Fresh state: basket centered, full lives, full clock."""
    session.lives_or_time = settings.max_time
    return CatcherState(
        session=session,
        basket=Body(
            position=(field_width - settings.basket_width) / 2,
            size=settings.basket_width,
        ),
        spawner=Spawner(interval=settings.spawn_interval),
        settings=settings,
        field_width=field_width,
        field_height=field_height,
        lives=settings.lives,
    )


def pointer_move(state: CatcherState, x: float) -> CatcherState:
    """Center the basket under the pointer, kept inside the field."""
    left = x - state.basket.size / 2
    state.basket.position = min(max(left, 0.0), max(0.0, state.field_width - state.basket.size))
    return state


def spawn_item(state: CatcherState, rng: Random) -> Entity:
    """Drop a star or a bomb from just above the field."""
    kind = choose_kind(rng, state.settings.hazard_chance)
    x = rng.random() * max(0.0, state.field_width - config.SPAWN_X_MARGIN)
    speed = state.settings.fall_speed + rng.random() * config.FALL_SPEED_SPREAD
    return state.spawner.add(Entity(
        x=x,
        y=config.SPAWN_Y,
        kind=kind,
        speed=speed,
        width=config.ITEM_SIZE,
        height=config.ITEM_HIT_HEIGHT,
    ))


def step(state: CatcherState, rng: Random) -> CatcherState:
    """Advance the session by one frame.

    Items are resolved in spawn order. A bomb that takes the last life ends
    the session at once; items after it are left untouched.
    """
    session = state.session
    if not session.is_playing:
        return state

    if state.spawner.due():
        spawn_item(state, rng)

    for item in state.spawner.entities:
        item.y += item.speed

    resolved = set()
    for contact in detect(state.catch_rect(), state.spawner.entities):
        resolved.add(id(contact.entity))
        if contact.kind is ContactKind.COLLECTED:
            ScoreEngine.award(session, state.settings.catch_points)
        elif contact.kind is ContactKind.HAZARD:
            ScoreEngine.penalize(session, state.settings.hazard_penalty)
            state.lives -= 1
            if state.lives <= 0:
                state.lives = 0
                end(session, GameState.GAME_OVER)
                break

    bottom = state.field_height
    state.spawner.discard(lambda e: id(e) in resolved or e.y > bottom)
    return state


def countdown(state: CatcherState) -> CatcherState:
    """One second off the clock; time running out ends the session."""
    session = state.session
    if not session.is_playing:
        return state
    session.lives_or_time = max(0, session.lives_or_time - 1)
    if session.lives_or_time <= 0:
        end(session, GameState.GAME_OVER)
    return state
