"""
Mouse Input Source - pygame mouse input.
"""
import time
from typing import List

import pygame

from models import Point2D
from expohub.games.input.input_event import InputAction, InputEvent
from expohub.games.input.sources.base import InputSource


class MouseInputSource(InputSource):
    """Converts pygame pointer events into InputEvents.

    Left button presses become PRIMARY_ACTION and motion becomes
    POINTER_MOVE. Anything else is re-posted to the pygame event queue
    for the host loop.
    """

    def __init__(self):
        self._event_queue: List[InputEvent] = []

    def poll_events(self) -> List[InputEvent]:
        events = self._event_queue.copy()
        self._event_queue.clear()
        return events

    def _push(self, x: float, y: float, action: InputAction) -> None:
        self._event_queue.append(InputEvent(
            position=Point2D(x=float(x), y=float(y)),
            timestamp=time.monotonic(),
            action=action,
        ))

    def update(self, dt: float) -> None:
        """Process pygame events and collect pointer input."""
        deferred = []
        for event in pygame.event.get():
            if event.type == pygame.MOUSEBUTTONDOWN:
                if event.button == 1:  # Left mouse button only
                    self._push(*event.pos, InputAction.PRIMARY_ACTION)
            elif event.type == pygame.MOUSEMOTION:
                self._push(*event.pos, InputAction.POINTER_MOVE)
            elif event.type == pygame.MOUSEBUTTONUP:
                continue
            else:
                deferred.append(event)
        # Re-post after the loop so they are not read back in this pass
        for event in deferred:
            pygame.event.post(event)

    def clear(self) -> None:
        self._event_queue.clear()
