"""
Input Event - Represents a single input action.

Uses Pydantic for validation and immutability.
"""
from enum import Enum

from pydantic import BaseModel, field_validator, ConfigDict

from models import Point2D


class InputAction(str, Enum):
    """The whole input vocabulary of the games.

    Attributes:
        POINTER_MOVE: Pointer moved to a position (basket control)
        PRIMARY_ACTION: Click or tap (flap, drop a piece, flip a card, start)
    """
    POINTER_MOVE = "pointer_move"
    PRIMARY_ACTION = "primary_action"


class InputEvent(BaseModel):
    """Immutable input event from any source.

    Attributes:
        position: Screen position of the pointer when the event occurred
        timestamp: Seconds, from a monotonic clock
        action: What the player did
    """
    position: Point2D
    timestamp: float
    action: InputAction = InputAction.PRIMARY_ACTION

    @field_validator('timestamp')
    @classmethod
    def validate_timestamp(cls, v: float) -> float:
        """Validate timestamp is non-negative."""
        if v < 0:
            raise ValueError(f'Timestamp must be non-negative, got {v}')
        return v

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        """String representation for debugging."""
        return (f"InputEvent(pos=({self.position.x:.2f}, {self.position.y:.2f}), "
                f"t={self.timestamp:.3f}, action={self.action.value})")
