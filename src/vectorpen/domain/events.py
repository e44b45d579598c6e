"""Input events consumed by the interaction state machine.

Hosts translate their native pointer and keyboard events into these records.
Coordinates are already in document space.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Union

from vectorpen.domain.commands import Point


class Tool(str, Enum):
    """Active editing tool."""

    SELECT = "select"
    RECT = "rect"
    CIRCLE = "circle"
    ELLIPSE = "ellipse"
    POLYGON = "polygon"
    STAR = "star"
    PEN = "pen"


class PointerAction(str, Enum):
    """Kind of pointer event.

    A host delivers DOWN, UP and then CLICK for one physical click, with
    MOVE events in between while the pointer travels.
    """

    DOWN = "down"
    MOVE = "move"
    UP = "up"
    CLICK = "click"


@dataclass(frozen=True)
class PointerEvent:
    """A pointer event.

    Attributes:
        action: What happened
        x: X coordinate
        y: Y coordinate
        shift: Whether Shift was held
        clicks: Consecutive click count for CLICK events (2 = double click)
    """

    action: PointerAction
    x: float
    y: float
    shift: bool = False
    clicks: int = 1

    @property
    def point(self) -> Point:
        return Point(self.x, self.y)


@dataclass(frozen=True)
class KeyEvent:
    """A key press, named like DOM key values ("Enter", "Delete")."""

    key: str


@dataclass(frozen=True)
class ToolChange:
    """The user picked another tool."""

    tool: Tool


Event = Union[PointerEvent, KeyEvent, ToolChange]
