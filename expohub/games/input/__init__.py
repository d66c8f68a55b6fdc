"""
Input abstraction layer for ExpoHub games.

Games only ever see two actions: a continuous pointer position and a
discrete primary action. Sources translate device events into InputEvents.
"""

from expohub.games.input.input_event import InputAction, InputEvent
from expohub.games.input.input_manager import InputManager

__all__ = ['InputAction', 'InputEvent', 'InputManager']
