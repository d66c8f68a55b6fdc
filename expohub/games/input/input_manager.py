"""
Input Manager - Collects input from the active source.
"""
from typing import List, Optional

from expohub.games.input.input_event import InputEvent
from expohub.games.input.sources.base import InputSource


class InputManager:
    """Holds the active input source and hands its events to the game.

    Swapping the source (mouse, scripted replay) does not change game logic.
    """

    def __init__(self, source: Optional[InputSource] = None):
        self._source = source

    def set_source(self, source: InputSource) -> None:
        self._source = source

    def has_source(self) -> bool:
        return self._source is not None

    def update(self, dt: float) -> None:
        """Let the active source collect events.

        Args:
            dt: Delta time in seconds since last update.
        """
        if self._source is not None:
            self._source.update(dt)

    def get_events(self) -> List[InputEvent]:
        """Get collected events since last update."""
        if self._source is None:
            return []
        return self._source.poll_events()
