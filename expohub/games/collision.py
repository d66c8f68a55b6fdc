"""
Axis-aligned collision detection between the controlled body and entities.

detect() walks a snapshot of the entity sequence in spawn order and yields
one Contact per entity that touches the body this tick. Callers apply the
effect of each contact and stop iterating at the first terminal one:

    for contact in detect(body_rect, spawner.entities):
        if contact.kind is ContactKind.HAZARD:
            end_session(...)
            break
        ...

Because detection is lazy, entities after a terminal contact are never
examined, so their effects do not happen in that tick.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable, Iterator, List

from models import Rectangle
from expohub.games.spawner import Entity, EntityKind

ZoneFn = Callable[[Entity], List[Rectangle]]


class ContactKind(str, Enum):
    """What happened between the body and an entity."""
    HAZARD = "hazard"
    PASSED = "passed"
    COLLECTED = "collected"


@dataclass(frozen=True)
class Contact:
    entity: Entity
    kind: ContactKind


def entity_zones(entity: Entity) -> List[Rectangle]:
    """Default hazard zone: the entity's own bounding box."""
    return [entity.bounds()]


def pipe_zones(entity: Entity, gap: float, field_height: float) -> List[Rectangle]:
    """Hazard zones of a gap obstacle: the pipes above and below the opening."""
    gap_y = entity.gap_y if entity.gap_y is not None else 0.0
    zones = []
    if gap_y > 0:
        zones.append(Rectangle(x=entity.x, y=0.0, width=entity.width, height=gap_y))
    bottom_top = gap_y + gap
    if field_height - bottom_top > 0:
        zones.append(Rectangle(
            x=entity.x, y=bottom_top,
            width=entity.width, height=field_height - bottom_top,
        ))
    return zones


def cleared(body: Rectangle, entity: Entity) -> bool:
    """True once the body's left edge is past the entity's right edge."""
    return body.left > entity.right


def detect(
    body: Rectangle,
    entities: Iterable[Entity],
    zones: ZoneFn = entity_zones,
) -> Iterator[Contact]:
    """Yield contacts in spawn order.

    Rules per entity kind:
        PASS_THROUGH: HAZARD if the body overlaps one of zones(entity),
            else PASSED once it is cleared and not already flagged
        HAZARD: HAZARD on overlap with zones(entity)
        COLLECTIBLE: COLLECTED on overlap with its bounding box

    The zone function is called lazily, so a gap change made while
    handling one contact applies to later entities in the same tick.
    """
    for entity in list(entities):
        if entity.kind is EntityKind.PASS_THROUGH:
            if any(body.intersects(zone) for zone in zones(entity)):
                yield Contact(entity, ContactKind.HAZARD)
            elif not entity.passed and cleared(body, entity):
                yield Contact(entity, ContactKind.PASSED)
        elif entity.kind is EntityKind.HAZARD:
            if any(body.intersects(zone) for zone in zones(entity)):
                yield Contact(entity, ContactKind.HAZARD)
        elif body.intersects(entity.bounds()):
            yield Contact(entity, ContactKind.COLLECTED)
