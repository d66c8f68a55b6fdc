"""
Collision Tests

Strict AABB overlap, pass detection and ordered contact resolution.

Run with: pytest tests/test_collision.py -v
"""

import pytest

from models import Rectangle
from expohub.games.collision import (
    ContactKind,
    cleared,
    detect,
    entity_zones,
    pipe_zones,
)
from expohub.games.spawner import Entity, EntityKind

FIELD_HEIGHT = 600.0
GAP = 200.0


def pipe(x, gap_y=200.0, passed=False):
    return Entity(
        x=x, y=0.0, kind=EntityKind.PASS_THROUGH, speed=2.5,
        width=60.0, height=FIELD_HEIGHT, gap_y=gap_y, passed=passed,
    )


def zones(entity):
    return pipe_zones(entity, GAP, FIELD_HEIGHT)


def drone(x=50.0, y=290.0, size=20.0):
    return Rectangle(x=x, y=y, width=size, height=size)


class TestPipeZones:
    """Tests for the hazard zones of a gap obstacle."""

    def test_two_pipes_around_gap(self):
        top, bottom = pipe_zones(pipe(100.0, gap_y=150.0), GAP, FIELD_HEIGHT)
        assert (top.top, top.bottom) == (0.0, 150.0)
        assert (bottom.top, bottom.bottom) == (350.0, 600.0)

    def test_gap_at_top_has_no_top_pipe(self):
        assert len(pipe_zones(pipe(100.0, gap_y=0.0), GAP, FIELD_HEIGHT)) == 1

    def test_gap_reaching_bottom_has_no_bottom_pipe(self):
        assert len(pipe_zones(pipe(100.0, gap_y=400.0), GAP, FIELD_HEIGHT)) == 1


class TestPassThrough:
    """Tests for PASS_THROUGH entities."""

    def test_inside_gap_is_no_contact(self):
        contacts = list(detect(drone(x=60.0), [pipe(50.0)], zones))
        assert contacts == []

    def test_hitting_pipe_is_hazard(self):
        contacts = list(detect(drone(x=60.0, y=190.0), [pipe(50.0)], zones))
        assert [c.kind for c in contacts] == [ContactKind.HAZARD]

    def test_touching_pipe_edge_is_not_a_hit(self):
        """Strict overlap: the drone's top edge on the pipe's bottom edge is safe."""
        contacts = list(detect(drone(x=60.0, y=200.0), [pipe(50.0)], zones))
        assert contacts == []

    def test_no_premature_pass(self):
        """Left edge equal to the pipe's right edge is not yet a pass."""
        obstacle = pipe(-10.0)  # right edge at 50
        assert not cleared(drone(x=50.0), obstacle)
        assert list(detect(drone(x=50.0), [obstacle], zones)) == []

    def test_pass_once_left_edge_beyond_right_edge(self):
        obstacle = pipe(-10.5)
        contacts = list(detect(drone(x=50.0), [obstacle], zones))
        assert [c.kind for c in contacts] == [ContactKind.PASSED]

    def test_already_passed_not_reported(self):
        obstacle = pipe(-20.0, passed=True)
        assert list(detect(drone(x=50.0), [obstacle], zones)) == []


class TestItems:
    """Tests for HAZARD and COLLECTIBLE entities."""

    def test_collectible_overlap(self):
        star = Entity(x=90.0, y=560.0, kind=EntityKind.COLLECTIBLE, speed=3.0, width=45.0, height=30.0)
        basket = Rectangle(x=100.0, y=550.0, width=80.0, height=40.0)
        contacts = list(detect(basket, [star]))
        assert [c.kind for c in contacts] == [ContactKind.COLLECTED]

    def test_hazard_overlap(self):
        bomb = Entity(x=150.0, y=560.0, kind=EntityKind.HAZARD, speed=3.0, width=45.0, height=30.0)
        basket = Rectangle(x=100.0, y=550.0, width=80.0, height=40.0)
        contacts = list(detect(basket, [bomb], entity_zones))
        assert [c.kind for c in contacts] == [ContactKind.HAZARD]

    def test_miss(self):
        star = Entity(x=300.0, y=560.0, kind=EntityKind.COLLECTIBLE, speed=3.0, width=45.0, height=30.0)
        basket = Rectangle(x=100.0, y=550.0, width=80.0, height=40.0)
        assert list(detect(basket, [star])) == []


class TestOrdering:
    """Contacts come in spawn order and stop at the caller's break."""

    def test_spawn_order(self):
        basket = Rectangle(x=0.0, y=0.0, width=200.0, height=50.0)
        items = [
            Entity(x=10.0 * i, y=0.0, kind=kind, speed=1.0, width=10.0, height=10.0)
            for i, kind in enumerate([EntityKind.COLLECTIBLE, EntityKind.HAZARD, EntityKind.COLLECTIBLE])
        ]
        kinds = [c.kind for c in detect(basket, items)]
        assert kinds == [ContactKind.COLLECTED, ContactKind.HAZARD, ContactKind.COLLECTED]

    def test_break_leaves_later_entities_unexamined(self):
        """Stopping at the first terminal contact never examines the rest."""
        examined = []

        def tracking_zones(entity):
            examined.append(entity.x)
            return entity_zones(entity)

        basket = Rectangle(x=0.0, y=0.0, width=200.0, height=50.0)
        items = [
            Entity(x=x, y=0.0, kind=EntityKind.HAZARD, speed=1.0, width=10.0, height=10.0)
            for x in (10.0, 20.0, 30.0)
        ]
        for contact in detect(basket, items, tracking_zones):
            if contact.kind is ContactKind.HAZARD:
                break

        assert examined == [10.0]

    def test_mutating_sequence_during_iteration_is_safe(self):
        """detect() walks a snapshot, so removing contacts as they arrive is fine."""
        basket = Rectangle(x=0.0, y=0.0, width=200.0, height=50.0)
        items = [
            Entity(x=x, y=0.0, kind=EntityKind.COLLECTIBLE, speed=1.0, width=10.0, height=10.0)
            for x in (10.0, 20.0)
        ]
        for contact in detect(basket, items):
            items.remove(contact.entity)
        assert items == []
